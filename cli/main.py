"""Command line entry point for training mlpnet classifiers."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable

import yaml

from mlpnet.core import activations
from mlpnet.core.losses import REGISTRY as LOSS_REGISTRY
from mlpnet.training import pipelines


def _format_result(result) -> str:
    payload = {
        "epochs": result.epochs,
        "accuracy": result.accuracy,
        "loss": result.loss,
        "metrics": result.metrics_path,
        "manifest": result.manifest_path,
    }
    return json.dumps(payload, sort_keys=True)


def _error_message(exc: Exception) -> str:
    # KeyError quotes its message when formatted with str()
    if isinstance(exc, KeyError) and exc.args:
        return f"Error: {exc.args[0]}"
    return f"Error: {exc}"


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        default="iris",
        help="Preset configuration to execute (see --list-presets)",
    )
    parser.add_argument("--config", type=Path, help="Optional JSON/YAML config override")
    parser.add_argument(
        "--csv-path",
        type=Path,
        help="Train on a header-less CSV file: features first, label last",
    )
    parser.add_argument(
        "--features",
        type=int,
        default=4,
        help="Number of leading feature fields per CSV line",
    )
    parser.add_argument(
        "--dims",
        type=int,
        nargs="+",
        help="Layer widths from input to output, e.g. --dims 4 6 6 6 3",
    )
    parser.add_argument("--alpha", type=float, help="Learning rate")
    parser.add_argument("--epochs", type=int, help="Maximum number of training epochs")
    parser.add_argument("--activation", choices=list(activations.names()))
    parser.add_argument("--loss", choices=list(LOSS_REGISTRY.names()))
    parser.add_argument("--seed", type=int, help="Seed for weight initialisation")
    parser.add_argument("--run-dir", type=Path, help="Directory for run artifacts")
    parser.add_argument(
        "--enable-plots", action="store_true", help="Write a training curve image"
    )
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--dump-config", type=Path, help="Dump the resolved config to a JSON file"
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> dict:
    config = pipelines.load_preset(args.preset)

    if args.config:
        override = dict(pipelines.read_config_file(args.config))
        if {"data", "model", "train"} <= set(override.keys()):
            config = override
        else:
            config = pipelines.merge_config(config, override)
    config = json.loads(json.dumps(config))

    if args.csv_path:
        config["data"] = {
            "name": "csv",
            "options": {"csv_path": str(args.csv_path), "features": args.features},
            "normalize": config.get("data", {}).get("normalize", [0.0, 1.0]),
        }
        if not args.dims:
            config.setdefault("model", {}).pop("dims", None)

    model_cfg = config.setdefault("model", {})
    train_cfg = config.setdefault("train", {})
    if args.dims:
        model_cfg["dims"] = list(args.dims)
    if args.activation:
        model_cfg["activation"] = args.activation
    if args.loss:
        model_cfg["loss"] = args.loss
    if args.alpha is not None:
        train_cfg["alpha"] = float(args.alpha)
    if args.epochs is not None:
        train_cfg["epochs"] = int(args.epochs)
    if args.seed is not None:
        train_cfg["seed"] = int(args.seed)
    if args.run_dir is not None:
        train_cfg["run_dir"] = str(args.run_dir)
    if args.enable_plots:
        train_cfg["enable_plots"] = True
    return config


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for name in pipelines.available_presets():
            print(name)
        raise SystemExit(0)

    try:
        config = build_config(args)
    except (KeyError, ValueError, TypeError, OSError, yaml.YAMLError) as exc:
        raise SystemExit(_error_message(exc)) from None

    if args.dump_config:
        args.dump_config.parent.mkdir(parents=True, exist_ok=True)
        args.dump_config.write_text(json.dumps(config, indent=2))

    try:
        result = pipelines.run_pipeline(config)
    except (KeyError, ValueError, TypeError) as exc:
        raise SystemExit(_error_message(exc)) from None

    print(_format_result(result))


if __name__ == "__main__":
    main()
