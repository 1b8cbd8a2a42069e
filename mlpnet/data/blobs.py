"""Seeded Gaussian blobs for quick, file-free experiments."""

from __future__ import annotations

import numpy as np
from sklearn.datasets import make_blobs

from .registry import DatasetSpec, register_dataset


@register_dataset("blobs")
def load_blobs(
    *,
    n_samples: int = 90,
    n_features: int = 2,
    n_classes: int = 3,
    cluster_std: float = 0.6,
    seed: int = 0,
) -> DatasetSpec:
    samples, labels = make_blobs(
        n_samples=n_samples,
        n_features=n_features,
        centers=n_classes,
        cluster_std=cluster_std,
        random_state=seed,
    )
    return DatasetSpec(
        name="blobs",
        samples=np.asarray(samples, dtype=np.float64),
        labels=np.asarray(labels, dtype=np.int64),
        num_classes=int(n_classes),
        provenance={
            "source": "sklearn.datasets.make_blobs",
            "n_samples": n_samples,
            "n_features": n_features,
            "cluster_std": cluster_std,
            "seed": seed,
        },
    )
