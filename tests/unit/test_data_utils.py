import numpy as np
import pytest

from mlpnet.core.types import MLPError
from mlpnet.data import available_datasets, get
from mlpnet.data.utils import load_csv, minmax_normalize


def test_load_numeric_csv(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("5.1,3.5,1.4,0.2,0\n6.2,2.9,4.3,1.3,1\n7.7,3.0,6.1,2.3,2\n")
    samples, labels, classes = load_csv(path, 4)
    assert samples.shape == (3, 4)
    np.testing.assert_allclose(samples[1], [6.2, 2.9, 4.3, 1.3])
    np.testing.assert_array_equal(labels, [0, 1, 2])
    assert classes == ["0", "1", "2"]


def test_load_csv_encodes_text_labels(tmp_path):
    path = tmp_path / "iris.csv"
    path.write_text(
        "5.1,3.5,1.4,0.2,Iris-setosa\n"
        "6.2,2.9,4.3,1.3,Iris-versicolor\n"
        "5.0,3.4,1.5,0.2,Iris-setosa\n"
    )
    _, labels, classes = load_csv(path, 4)
    np.testing.assert_array_equal(labels, [0, 1, 0])
    assert classes == ["Iris-setosa", "Iris-versicolor"]


def test_load_csv_rejects_short_line(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("1,2,3,4,0\n1,2,3\n")
    with pytest.raises(MLPError, match="invalid data"):
        load_csv(path, 4)


def test_load_csv_rejects_non_numeric_feature(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("1,2,x,4,0\n")
    with pytest.raises(MLPError, match="invalid data"):
        load_csv(path, 4)


def test_load_csv_rejects_too_few_columns(tmp_path):
    path = tmp_path / "narrow.csv"
    path.write_text("1,2,0\n")
    with pytest.raises(MLPError, match="line 1 has fewer than 5 fields"):
        load_csv(path, 4)


def test_load_csv_ignores_fields_after_label(tmp_path):
    path = tmp_path / "wide.csv"
    path.write_text("1,2,0\n3,4,1,extra\n")
    samples, labels, _ = load_csv(path, 2)
    np.testing.assert_allclose(samples, [[1.0, 2.0], [3.0, 4.0]])
    np.testing.assert_array_equal(labels, [0, 1])


def test_load_csv_skips_blank_lines(tmp_path):
    path = tmp_path / "gaps.csv"
    path.write_text("\n1,2,0\n\n  \n3,4,1\n\n")
    samples, labels, _ = load_csv(path, 2)
    assert samples.shape == (2, 2)
    np.testing.assert_array_equal(labels, [0, 1])


def test_load_csv_error_names_physical_line(tmp_path):
    path = tmp_path / "gaps.csv"
    path.write_text("1,2,0\n\n\n3\n")
    with pytest.raises(MLPError, match="line 4 has fewer"):
        load_csv(path, 2)


def test_load_csv_missing_file(tmp_path):
    with pytest.raises(MLPError, match="cannot read"):
        load_csv(tmp_path / "absent.csv", 2)


def test_minmax_normalize_ranges():
    values = np.array([[1.0, 10.0, 3.0], [3.0, 20.0, 3.0], [2.0, 15.0, 3.0]])
    scaled = minmax_normalize(values)
    np.testing.assert_allclose(scaled[:, 0], [0.0, 1.0, 0.5])
    np.testing.assert_allclose(scaled[:, 1], [0.0, 1.0, 0.5])
    np.testing.assert_allclose(scaled[:, 2], [0.0, 0.0, 0.0])
    shifted = minmax_normalize(values, -1.0, 1.0)
    np.testing.assert_allclose(shifted[:, 0], [-1.0, 1.0, 0.0])
    np.testing.assert_allclose(shifted[:, 2], [-1.0, -1.0, -1.0])
    assert values[0, 0] == 1.0


def test_minmax_normalize_empty():
    assert minmax_normalize(np.zeros((0, 3))).shape == (0, 3)


def test_registry_datasets():
    assert {"blobs", "csv", "iris"} <= set(available_datasets())
    iris = get("iris")
    assert iris.samples.shape == (150, 4)
    assert iris.num_classes == 3
    blobs = get("blobs", n_samples=30, n_features=3, n_classes=2, seed=1)
    assert len(blobs) == 30 and blobs.n_features == 3
    with pytest.raises(KeyError):
        get("mnist")


def test_csv_dataset_from_registry(tmp_path):
    path = tmp_path / "two.csv"
    path.write_text("0.0,0.0,0\n1.0,1.0,1\n")
    spec = get("csv", csv_path=path, features=2)
    assert spec.num_classes == 2
    assert spec.provenance["path"] == str(path)
