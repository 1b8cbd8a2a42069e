"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, MutableMapping

import numpy as np

from ..core.types import Array


@dataclass(frozen=True)
class DatasetSpec:
    """A labelled classification dataset ready to be fed to a network.

    Attributes
    ----------
    name:
        Registry identifier of the loader that produced the dataset.
    samples:
        ``(n_samples, n_features)`` feature matrix, rows in dataset order.
    labels:
        ``(n_samples,)`` integer class indices, parallel to ``samples``.
    num_classes:
        Number of output classes the labels index into.
    provenance:
        Free-form metadata describing where the data came from and which
        options were used, recorded in run manifests.
    """

    name: str
    samples: Array
    labels: Array
    num_classes: int
    provenance: Dict[str, Any] = field(default_factory=dict)

    @property
    def n_features(self) -> int:
        return int(self.samples.shape[1])

    def __len__(self) -> int:
        return int(self.samples.shape[0])


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory, either as a decorator or directly::

        @register_dataset("iris")
        def load_iris(**kwargs):
            ...

        register_dataset("iris", load_iris)
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get_dataset(dataset: str | None = None, /, **options: Any) -> DatasetSpec:
    """Return the :class:`DatasetSpec` built by the factory named ``dataset``."""

    if dataset is None:
        if "name" in options:
            dataset = str(options.pop("name"))
        else:
            raise TypeError("Dataset name must be provided")

    if dataset not in _REGISTRY:
        raise KeyError(f"Unknown dataset: {dataset}")

    spec = _REGISTRY[dataset](**options)
    _validate_spec(spec)
    return spec


get = get_dataset


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


def _validate_spec(spec: DatasetSpec) -> None:
    if spec.samples.ndim != 2:
        raise ValueError(f"Dataset {spec.name!r} samples must be 2-D")
    if spec.samples.shape[0] != spec.labels.shape[0]:
        raise ValueError(
            f"Dataset {spec.name!r} has {spec.samples.shape[0]} samples "
            f"but {spec.labels.shape[0]} labels"
        )
    if spec.labels.size and int(np.max(spec.labels)) >= spec.num_classes:
        raise ValueError(f"Dataset {spec.name!r} has labels outside its {spec.num_classes} classes")


__all__ = [
    "DatasetSpec",
    "available_datasets",
    "get",
    "get_dataset",
    "register_dataset",
]
