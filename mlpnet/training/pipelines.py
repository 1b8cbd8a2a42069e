"""Pipeline assembly for mlpnet: dataset → network → training → artifacts."""

from __future__ import annotations

import json
from copy import deepcopy
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

import yaml

from ..core.network import DEFAULT_ALPHA, Network
from ..core.types import MLPError, RunResult
from ..data import registry
from ..data.utils import minmax_normalize
from ..reporting.artifacts import write_manifest
from ..reporting.metrics import CsvSink, JsonlSink
from ..reporting.plots import PlotAdapter
from .callbacks import EpochMonitor

_PRESETS: Dict[str, Mapping[str, object]] = {
    "iris": {
        "data": {"name": "iris", "options": {}, "normalize": [0.0, 1.0]},
        "model": {"dims": [4, 6, 6, 6, 3], "activation": "sigmoid", "loss": "error"},
        "train": {
            "alpha": 0.02,
            "epochs": 25000,
            "seed": 0,
            "target_accuracy": 1.0,
            "log_every": 100,
            "run_dir": "runs/iris",
            "enable_plots": False,
        },
    },
    "iris-tanh-mse": {
        "data": {"name": "iris", "options": {}, "normalize": [-1.0, 1.0]},
        "model": {"hidden": [8], "activation": "tanh", "loss": "mse"},
        "train": {
            "alpha": 0.05,
            "epochs": 2000,
            "seed": 1,
            "target_accuracy": 1.0,
            "patience": 200,
            "log_every": 50,
            "run_dir": "runs/iris-tanh-mse",
            "enable_plots": False,
        },
    },
    "blobs-min": {
        "data": {
            "name": "blobs",
            "options": {"n_samples": 60, "n_features": 2, "n_classes": 3, "seed": 0},
            "normalize": [0.0, 1.0],
        },
        "model": {"hidden": [4], "activation": "sigmoid", "loss": "error"},
        "train": {
            "alpha": 0.1,
            "epochs": 30,
            "seed": 7,
            "target_accuracy": None,
            "log_every": 10,
            "run_dir": "runs/blobs-min",
            "enable_plots": False,
        },
    },
}

_PRESET_DIR = Path(__file__).resolve().parents[2] / "configs" / "presets"
_FILE_PRESETS_CACHE: Dict[str, Mapping[str, object]] | None = None


def read_config_file(path: str | Path) -> Mapping[str, object]:
    """Decode a YAML or JSON config file into a mapping."""

    path = Path(path)
    text = path.read_text()
    suffix = path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    elif suffix == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config file type: {path.suffix}")

    if not isinstance(data, Mapping):
        raise TypeError(f"Config {path.name} must decode to a mapping")
    return data


def _file_presets() -> Dict[str, Mapping[str, object]]:
    global _FILE_PRESETS_CACHE
    if _FILE_PRESETS_CACHE is None:
        found: Dict[str, Mapping[str, object]] = {}
        if _PRESET_DIR.exists():
            for file in sorted(_PRESET_DIR.iterdir()):
                if file.suffix.lower() not in {".yaml", ".yml", ".json"}:
                    continue
                data = read_config_file(file)
                missing = {"data", "model", "train"} - set(data)
                if missing:
                    missing_str = ", ".join(sorted(missing))
                    raise KeyError(f"Preset {file.name} is missing required sections: {missing_str}")
                found[file.stem] = json.loads(json.dumps(data))
        _FILE_PRESETS_CACHE = found
    return {name: deepcopy(cfg) for name, cfg in _FILE_PRESETS_CACHE.items()}


def presets() -> Mapping[str, Mapping[str, object]]:
    combined: Dict[str, Mapping[str, object]] = {}
    combined.update({name: deepcopy(cfg) for name, cfg in _PRESETS.items()})
    combined.update(_file_presets())
    return combined


def load_preset(name: str) -> Dict[str, object]:
    file_overrides = _file_presets()
    if name in file_overrides:
        return dict(file_overrides[name])
    try:
        return deepcopy(dict(_PRESETS[name]))
    except KeyError as exc:
        raise KeyError(f"Unknown preset: {name}") from exc


def merge_config(base: Dict[str, object], override: Mapping[str, object]) -> Dict[str, object]:
    """Recursively merge ``override`` into ``base`` and return ``base``."""

    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            base[key] = merge_config(dict(base[key]), value)  # type: ignore[arg-type]
        else:
            base[key] = deepcopy(value)
    return base


def build_dims(model_cfg: Mapping[str, object], n_features: int, num_classes: int) -> List[int]:
    """Return layer widths from ``model.dims`` or ``[features, *hidden, classes]``."""

    if model_cfg.get("dims"):
        dims = [int(d) for d in model_cfg["dims"]]  # type: ignore[union-attr]
        if dims[0] != n_features:
            raise MLPError(f"Configured input width {dims[0]} but dataset has {n_features} features")
        if dims[-1] < num_classes:
            raise MLPError(f"Configured output width {dims[-1]} but dataset has {num_classes} classes")
        return dims
    hidden = [int(h) for h in model_cfg.get("hidden", [])]  # type: ignore[union-attr]
    return [n_features, *hidden, num_classes]


def run_pipeline(config: Mapping[str, object]) -> RunResult:
    """Train a network as described by ``config`` and write the run artifacts."""

    data_cfg = dict(config["data"])  # type: ignore[arg-type]
    model_cfg = dict(config.get("model", {}))  # type: ignore[arg-type]
    train_cfg = dict(config.get("train", {}))  # type: ignore[arg-type]

    dataset = registry.get(data_cfg["name"], **dict(data_cfg.get("options", {})))
    samples = dataset.samples
    normalize = data_cfg.get("normalize")
    if normalize:
        low, high = (float(v) for v in normalize)  # type: ignore[union-attr]
        samples = minmax_normalize(samples, low, high)
    labels = dataset.labels

    dims = build_dims(model_cfg, dataset.n_features, dataset.num_classes)
    seed = int(train_cfg.get("seed", 0))
    network = Network(
        dims,
        activation=str(model_cfg.get("activation", "sigmoid")),
        loss=str(model_cfg.get("loss", "error")),
        alpha=float(train_cfg.get("alpha", DEFAULT_ALPHA)),
        seed=seed,
    )

    run_dir = Path(str(train_cfg.get("run_dir", f"runs/{dataset.name}")))
    run_dir.mkdir(parents=True, exist_ok=True)

    _print_startup_summary(
        dataset_name=dataset.name,
        n_samples=len(dataset),
        network=network,
    )

    jsonl = JsonlSink(run_dir / "metrics.jsonl", split="train", seed=seed)
    csv_sink = CsvSink(run_dir / "metrics.csv", split="train")
    plots = PlotAdapter(run_dir, enable_plots=bool(train_cfg.get("enable_plots", False)))
    target = train_cfg.get("target_accuracy", 1.0)
    patience = train_cfg.get("patience")
    monitor = EpochMonitor(
        network,
        samples,
        labels,
        sinks=[jsonl, csv_sink, plots],
        target_accuracy=float(target) if target is not None else None,
        patience=int(patience) if patience is not None else None,
        log_every=int(train_cfg.get("log_every", 0)),
    )
    network.on_epoch = monitor

    print(f"Untrained loss: {network.loss_mean(samples, labels):.6f}")
    epochs = network.train(
        samples,
        labels,
        int(train_cfg.get("epochs", 1)),
        shuffle=bool(train_cfg.get("shuffle", False)),
    )
    trained_loss = network.loss_mean(samples, labels)
    results = network.test(samples, labels)
    print(f"Trained loss: {trained_loss:.6f}")
    print(f"Final Accuracy: {results.accuracy * 100.0:.4f}% after {epochs} epoch(s)")
    plots.close()

    resolved = json.loads(json.dumps(config))
    resolved.setdefault("model", {})["dims"] = dims
    (run_dir / "config.json").write_text(json.dumps(resolved, indent=2))
    manifest = write_manifest(
        run_dir / "manifest.json",
        config=resolved,
        dataset_provenance=dataset.provenance,
        results={
            "epochs": epochs,
            "accuracy": results.accuracy,
            "correct": results.correct,
            "total": results.total,
            "loss_mean": trained_loss,
        },
    )

    return RunResult(
        epochs=epochs,
        accuracy=float(results.accuracy),
        loss=float(trained_loss),
        metrics_path=str(jsonl.path),
        manifest_path=manifest,
    )


def _print_startup_summary(*, dataset_name: str, n_samples: int, network: Network) -> None:
    print("=== mlpnet run ===")
    print(f"Dataset       : {dataset_name} ({n_samples} samples)")
    print(f"Dimensions    : {network.dimensions}")
    print(f"Activation    : {network.activation.name}")
    print(f"Loss          : {network.loss_function.name}")
    print(f"Learning rate : {network.alpha}")
    print(f"Parameters    : {network.parameter_count()}")
    print("==================")


def available_presets() -> Sequence[str]:
    return sorted(presets())


__all__ = [
    "available_presets",
    "build_dims",
    "load_preset",
    "merge_config",
    "presets",
    "read_config_file",
    "run_pipeline",
]
