"""Training loop helpers: epoch callbacks and config-driven pipelines."""

from .callbacks import EpochMonitor
from .pipelines import load_preset, presets, run_pipeline

__all__ = ["EpochMonitor", "load_preset", "presets", "run_pipeline"]
