"""Loss strategies and their registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Protocol

import numpy as np

from .types import Array, MLPError, Vector


class Loss(Protocol):
    """Protocol implemented by loss strategies."""

    name: str

    def f(self, predicted: Vector, observed: Vector) -> float:
        """Return the scalar cost of ``predicted`` against ``observed``."""

    def df(self, predicted: Vector, observed: Vector, result: Array | None = None) -> Array:
        """Write dCost/dPredicted into ``result`` and return it."""


def _pair(predicted: Vector, observed: Vector) -> tuple[Array, Array]:
    p = np.asarray(predicted, dtype=np.float64).reshape(-1)
    o = np.asarray(observed, dtype=np.float64).reshape(-1)
    if p.shape != o.shape:
        raise MLPError(
            f"predicted and observed size mismatch ({p.shape[0]} != {o.shape[0]})"
        )
    return p, o


def _result(result: Array | None, size: int) -> Array:
    if result is None:
        return np.zeros(size, dtype=np.float64)
    if result.shape != (size,):
        raise MLPError(f"result vector has size {result.size}, expected {size}")
    return result


@dataclass(frozen=True)
class ErrorLoss:
    """Summed absolute error with the plain difference as its gradient."""

    name: str = "error"

    def f(self, predicted: Vector, observed: Vector) -> float:
        p, o = _pair(predicted, observed)
        return float(np.sum(np.abs(p - o)))

    def df(self, predicted: Vector, observed: Vector, result: Array | None = None) -> Array:
        p, o = _pair(predicted, observed)
        out = _result(result, p.size)
        np.subtract(p, o, out=out)
        return out


@dataclass(frozen=True)
class AbsoluteLoss:
    """Summed absolute error with a sign gradient scaled by ``1/N``."""

    name: str = "absolute"

    def f(self, predicted: Vector, observed: Vector) -> float:
        p, o = _pair(predicted, observed)
        return float(np.sum(np.abs(p - o)))

    def df(self, predicted: Vector, observed: Vector, result: Array | None = None) -> Array:
        p, o = _pair(predicted, observed)
        out = _result(result, p.size)
        out[:] = np.sign(p - o) / p.size
        return out


@dataclass(frozen=True)
class MSELoss:
    """Mean squared error."""

    name: str = "mse"

    def f(self, predicted: Vector, observed: Vector) -> float:
        p, o = _pair(predicted, observed)
        return float(np.mean(np.square(p - o)))

    def df(self, predicted: Vector, observed: Vector, result: Array | None = None) -> Array:
        p, o = _pair(predicted, observed)
        out = _result(result, p.size)
        out[:] = (2.0 / p.size) * (p - o)
        return out


class LossRegistry:
    """Central registry for loss strategies."""

    def __init__(self) -> None:
        self._registry: Dict[str, Loss] = {}

    def register(self, loss: Loss) -> None:
        self._registry[loss.name] = loss

    def get(self, name: str | Loss) -> Loss:
        if not isinstance(name, str):
            return name
        try:
            return self._registry[name.lower()]
        except KeyError:
            available = ", ".join(self.names())
            raise MLPError(f"Unknown loss {name!r}. Available losses: {available}") from None

    def names(self) -> Iterable[str]:
        return sorted(self._registry)


REGISTRY = LossRegistry()
REGISTRY.register(ErrorLoss())
REGISTRY.register(AbsoluteLoss())
REGISTRY.register(MSELoss())

__all__ = ["Loss", "ErrorLoss", "AbsoluteLoss", "MSELoss", "LossRegistry", "REGISTRY"]
