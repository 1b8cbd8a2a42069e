"""Core typing contracts for mlpnet."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

Array = np.ndarray
Vector = Sequence[float]
Samples = Sequence[Vector]
Labels = Sequence[int]


class MLPError(ValueError):
    """Raised when a network precondition is violated."""


@dataclass(frozen=True)
class TestResults:
    """Outcome of :meth:`mlpnet.core.network.Network.test`."""

    __test__ = False

    correct: int
    total: int
    accuracy: float


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :func:`mlpnet.training.pipelines.run_pipeline`."""

    epochs: int
    accuracy: float
    loss: float
    metrics_path: str
    manifest_path: str


def as_vector(values: Vector) -> Array:
    """Return ``values`` as a fresh 1-D ``float64`` array."""

    return np.array(values, dtype=np.float64).reshape(-1)


__all__ = [
    "Array",
    "Vector",
    "Samples",
    "Labels",
    "MLPError",
    "TestResults",
    "RunResult",
    "as_vector",
]
