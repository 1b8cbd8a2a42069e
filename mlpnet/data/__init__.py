"""Dataset registry and loader helpers."""

# Ensure built-in datasets register themselves when the package is imported.
from . import blobs as _blobs  # noqa: F401
from . import csv_generic as _csv_generic  # noqa: F401
from . import iris as _iris  # noqa: F401
from .registry import DatasetSpec, available_datasets, get, get_dataset, register_dataset
from .utils import load_csv, minmax_normalize

__all__ = [
    "DatasetSpec",
    "available_datasets",
    "get",
    "get_dataset",
    "load_csv",
    "minmax_normalize",
    "register_dataset",
]
