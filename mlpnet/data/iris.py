"""Fisher's Iris data as bundled with scikit-learn (no download needed)."""

from __future__ import annotations

import numpy as np
from sklearn.datasets import load_iris

from .registry import DatasetSpec, register_dataset


@register_dataset("iris")
def load_iris_dataset() -> DatasetSpec:
    bunch = load_iris()
    return DatasetSpec(
        name="iris",
        samples=np.asarray(bunch.data, dtype=np.float64),
        labels=np.asarray(bunch.target, dtype=np.int64),
        num_classes=len(bunch.target_names),
        provenance={
            "source": "sklearn.datasets.load_iris",
            "classes": [str(name) for name in bunch.target_names],
        },
    )
