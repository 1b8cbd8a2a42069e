"""Activation strategies for mlpnet.

Every strategy exposes ``f`` (the forward map) and ``df``.  ``df`` receives the
*activated* value ``y = f(x)`` rather than the pre-activation ``x``; layers only
keep their outputs around, so the backward pass never sees ``x``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Protocol

import numpy as np

from .types import Array, MLPError


class Activation(Protocol):
    """Protocol implemented by activation strategies."""

    name: str

    def f(self, x: Array) -> Array:
        """Return the activated value of ``x``."""

    def df(self, y: Array) -> Array:
        """Return the derivative at ``y``, where ``y`` is already activated."""


@dataclass(frozen=True)
class Sigmoid:
    """Logistic sigmoid, ``df(y) = y * (1 - y)``."""

    name: str = "sigmoid"

    def f(self, x: Array) -> Array:
        return 1.0 / (1.0 + np.exp(-x))

    def df(self, y: Array) -> Array:
        return (1.0 - y) * y


@dataclass(frozen=True)
class Tanh:
    """Hyperbolic tangent, ``df(y) = 1 - y**2``."""

    name: str = "tanh"

    def f(self, x: Array) -> Array:
        return np.tanh(x)

    def df(self, y: Array) -> Array:
        return 1.0 - y * y


@dataclass(frozen=True)
class ReLU:
    """Rectified linear unit, ``df(y) = 1`` where ``y > 0``."""

    name: str = "relu"

    def f(self, x: Array) -> Array:
        return np.maximum(x, 0.0)

    def df(self, y: Array) -> Array:
        return (np.asarray(y) > 0.0).astype(np.float64)


_ACTIVATIONS: Dict[str, Activation] = {
    "sigmoid": Sigmoid(),
    "tanh": Tanh(),
    "relu": ReLU(),
}


def get_activation(activation: str | Activation) -> Activation:
    """Resolve ``activation`` by name, or pass a strategy object through."""

    if not isinstance(activation, str):
        return activation
    try:
        return _ACTIVATIONS[activation.lower()]
    except KeyError:
        available = ", ".join(sorted(_ACTIVATIONS))
        raise MLPError(
            f"Unknown activation {activation!r}. Available activations: {available}"
        ) from None


def names() -> Iterable[str]:
    return sorted(_ACTIVATIONS)


__all__ = ["Activation", "Sigmoid", "Tanh", "ReLU", "get_activation", "names"]
