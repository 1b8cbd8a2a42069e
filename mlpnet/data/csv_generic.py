"""Loader for header-less ``features..., label`` CSV files."""

from __future__ import annotations

from pathlib import Path

from ..core.types import MLPError
from .registry import DatasetSpec, register_dataset
from .utils import load_csv


@register_dataset("csv")
def load_csv_dataset(
    *,
    csv_path: str | Path | None = None,
    features: int = 4,
    num_classes: int | None = None,
) -> DatasetSpec:
    """Load a classification dataset from ``csv_path``."""

    if csv_path is None:
        raise MLPError("the csv dataset requires a csv_path")
    path = Path(csv_path)
    samples, labels, classes = load_csv(path, features)
    observed = int(labels.max()) + 1 if labels.size else 0
    num_classes = max(int(num_classes or 0), observed, len(classes))
    return DatasetSpec(
        name="csv",
        samples=samples,
        labels=labels,
        num_classes=num_classes,
        provenance={
            "path": str(path),
            "features": int(features),
            "classes": classes,
        },
    )
