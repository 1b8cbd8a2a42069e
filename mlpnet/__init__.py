"""mlpnet public API."""

from .core import activations  # noqa: F401
from .core import losses  # noqa: F401
from .core.layer import InnerProductLayer, Layer
from .core.network import Network
from .core.types import MLPError, RunResult, TestResults
from .data.utils import load_csv, minmax_normalize
from .training.callbacks import EpochMonitor
from .training.pipelines import load_preset, presets, run_pipeline

__all__ = [
    "InnerProductLayer",
    "Layer",
    "Network",
    "MLPError",
    "RunResult",
    "TestResults",
    "EpochMonitor",
    "activations",
    "losses",
    "load_csv",
    "minmax_normalize",
    "load_preset",
    "presets",
    "run_pipeline",
]
