"""Utility helpers for dataset loaders."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pandas as pd
from sklearn.preprocessing import LabelEncoder

from ..core.types import Array, MLPError


def load_csv(path: str | Path, data_points: int) -> tuple[Array, Array, list[str]]:
    """Read a header-less CSV of ``data_points`` features followed by a label.

    Returns the feature matrix, the integer labels and the class names.  Labels
    that are not numeric are encoded in sorted order.  Fields after the label
    are ignored and blank lines are skipped.  A line with missing fields or a
    non-numeric feature fails the whole load.
    """

    if data_points <= 0:
        raise MLPError(f"data_points must be positive, got {data_points}")
    width = data_points + 1
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise MLPError(f"cannot read {path}: {exc}") from exc

    # indexed by physical line, starting at 0
    lines = pd.Series(text.splitlines(), dtype=object)
    lines = lines[lines.str.strip() != ""]
    if lines.empty:
        return np.zeros((0, data_points)), np.zeros(0, dtype=np.int64), []

    fields = lines.str.strip().str.split(r"\s*,\s*", expand=True, regex=True)
    fields = fields.reindex(columns=range(width))
    fields = fields.mask(fields == "")
    missing = fields.isna().any(axis=1)
    if missing.any():
        line = int(fields.index[missing.to_numpy()][0]) + 1
        raise MLPError(f"invalid data in {path}: line {line} has fewer than {width} fields")

    try:
        features = fields.iloc[:, :data_points].apply(pd.to_numeric).to_numpy(dtype=np.float64)
    except ValueError as exc:
        raise MLPError(f"invalid data in {path}: {exc}") from exc

    labels, classes = _encode_labels(fields.iloc[:, data_points])
    return features, labels, classes


def _encode_labels(column: pd.Series) -> tuple[Array, list[str]]:
    numeric = pd.to_numeric(column, errors="coerce")
    if not numeric.isna().any():
        values = numeric.to_numpy(dtype=np.float64)
        if (values < 0).any():
            raise MLPError("labels must be non-negative class indices")
        labels = values.astype(np.int64)
        classes = [str(idx) for idx in range(int(labels.max()) + 1)] if labels.size else []
        return labels, classes
    encoder = LabelEncoder()
    labels = encoder.fit_transform(column.str.strip()).astype(np.int64)
    return labels, [str(name) for name in encoder.classes_]


def minmax_normalize(values: Array, a: float = 0.0, b: float = 1.0) -> Array:
    """Rescale every column of ``values`` into ``[a, b]`` by its own min/max.

    Columns whose min equals their max are mapped to ``a``.
    """

    data = np.array(values, dtype=np.float64)
    if data.size == 0:
        return data
    if data.ndim != 2:
        raise MLPError(f"expected a 2-D sample matrix, got {data.ndim} dimension(s)")
    col_min = data.min(axis=0)
    span = data.max(axis=0) - col_min
    safe = np.where(span == 0.0, 1.0, span)
    scaled = (data - col_min) / safe
    scaled[:, span == 0.0] = 0.0
    return a + (b - a) * scaled


__all__ = ["load_csv", "minmax_normalize"]
