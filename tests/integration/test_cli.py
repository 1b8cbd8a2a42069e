import json
from pathlib import Path

import pytest

from cli.main import main


def test_cli_preset_with_overrides(tmp_path, capsys):
    run_dir = tmp_path / "run"
    main(["--preset", "blobs-min", "--epochs", "3", "--run-dir", str(run_dir)])
    payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert payload["epochs"] == 3
    assert (run_dir / "metrics.jsonl").exists()
    assert (run_dir / "manifest.json").exists()


def test_cli_trains_on_csv(tmp_path, capsys):
    csv_path = tmp_path / "tiny.csv"
    csv_path.write_text("0,0,0\n1,1,1\n0,0.1,0\n1,0.9,1\n")
    dumped = tmp_path / "config.json"
    main(
        [
            "--csv-path",
            str(csv_path),
            "--features",
            "2",
            "--dims",
            "2",
            "3",
            "2",
            "--alpha",
            "0.1",
            "--epochs",
            "20",
            "--loss",
            "mse",
            "--run-dir",
            str(tmp_path / "run"),
            "--dump-config",
            str(dumped),
        ]
    )
    config = json.loads(dumped.read_text())
    assert config["data"]["name"] == "csv"
    assert config["model"]["dims"] == [2, 3, 2]
    assert config["model"]["loss"] == "mse"
    assert "Final Accuracy:" in capsys.readouterr().out


def test_cli_reports_malformed_csv(tmp_path):
    csv_path = tmp_path / "bad.csv"
    csv_path.write_text("1,2,0\n1\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["--csv-path", str(csv_path), "--features", "2", "--run-dir", str(tmp_path / "run")])
    assert str(excinfo.value).startswith("Error: invalid data")


def test_cli_yaml_override(tmp_path, capsys):
    override = tmp_path / "override.yaml"
    override.write_text("train:\n  epochs: 2\n  run_dir: %s\n" % (tmp_path / "yaml-run"))
    main(["--preset", "blobs-min", "--config", str(override)])
    payload = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert payload["epochs"] == 2
    assert Path(payload["manifest"]).parent == tmp_path / "yaml-run"


def test_cli_lists_presets(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--list-presets"])
    assert excinfo.value.code == 0
    assert "iris" in capsys.readouterr().out.split()


def test_cli_reports_missing_csv(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--csv-path", str(tmp_path / "absent.csv"), "--features", "2"])
    assert str(excinfo.value).startswith("Error: cannot read")


def test_cli_reports_unknown_dataset(tmp_path):
    override = tmp_path / "override.yaml"
    override.write_text("data:\n  name: nope\ntrain:\n  run_dir: %s\n" % (tmp_path / "run"))
    with pytest.raises(SystemExit) as excinfo:
        main(["--preset", "blobs-min", "--config", str(override)])
    assert str(excinfo.value) == "Error: Unknown dataset: nope"


def test_cli_reports_unreadable_config(tmp_path):
    override = tmp_path / "override.toml"
    override.write_text("epochs = 2\n")
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(override)])
    assert str(excinfo.value) == "Error: Unsupported config file type: .toml"
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path / "absent.yaml")])
    assert str(excinfo.value).startswith("Error:")


def test_cli_reports_bad_dataset_options(tmp_path):
    override = tmp_path / "override.json"
    override.write_text(json.dumps({"data": {"options": {"colour": "red"}}, "train": {"run_dir": str(tmp_path / "run")}}))
    with pytest.raises(SystemExit) as excinfo:
        main(["--preset", "blobs-min", "--config", str(override)])
    assert "colour" in str(excinfo.value)
