"""Per-epoch metric sinks.

Every sink writes the same columns, in this order: ``epoch``, ``split``,
``loss``, ``accuracy``, ``correct`` and ``total``.  A metric the monitor did
not report is written as ``null`` (JSONL) or left blank (CSV); metrics outside
the schema are dropped.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Dict, Mapping

from .artifacts import git_sha

FIELDS = ("epoch", "split", "loss", "accuracy", "correct", "total")
_COUNTS = {"correct", "total"}


def epoch_record(epoch: int, split: str, metrics: Mapping[str, float]) -> Dict[str, object]:
    """Project ``metrics`` onto :data:`FIELDS`."""

    record: Dict[str, object] = {"epoch": int(epoch), "split": split}
    for name in FIELDS[2:]:
        value = metrics.get(name)
        if value is None:
            record[name] = None
        elif name in _COUNTS:
            record[name] = int(value)
        else:
            record[name] = float(value)
    return record


class JsonlSink:
    """One JSON object per epoch, tagged with the run seed and commit."""

    def __init__(
        self,
        path: str | Path,
        *,
        split: str = "train",
        seed: int | None = None,
        sha: str | None = None,
    ) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self.split = split
        self.seed = seed
        self.sha = sha or git_sha()

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        record = epoch_record(epoch, self.split, metrics)
        record["seed"] = self.seed
        record["sha"] = self.sha
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")

    __call__ = on_epoch


class CsvSink:
    """Spreadsheet-friendly copy of the epoch records; the header is written up front."""

    def __init__(self, path: str | Path, *, split: str = "train") -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.split = split
        with self.path.open("w", encoding="utf-8", newline="") as handle:
            csv.DictWriter(handle, fieldnames=FIELDS).writeheader()

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        with self.path.open("a", encoding="utf-8", newline="") as handle:
            writer = csv.DictWriter(handle, fieldnames=FIELDS)
            writer.writerow(epoch_record(epoch, self.split, metrics))

    __call__ = on_epoch


__all__ = ["FIELDS", "CsvSink", "JsonlSink", "epoch_record"]
