import pandas as pd
import pytest

from kddpca.data.ingest import (KDD_COLUMNS, add_label_columns, load_kdd,
                                split_train_test)
from kddpca.data.mock import make_mock_kdd


def test_load_kdd_without_header(tmp_path):
    row = ["0", "tcp", "http", "SF"] + ["1"] * 37 + ["normal."]
    assert len(row) == len(KDD_COLUMNS)
    (tmp_path / "kdd.csv").write_text(",".join(row) + "\n" + ",".join(row[:-1] + ["smurf."]) + "\n")

    df = load_kdd(str(tmp_path), "kdd.csv")
    assert df.shape == (2, len(KDD_COLUMNS) + 1)
    assert df["id"].tolist() == [0, 1]
    assert df["label"].tolist() == ["normal.", "smurf."]


def test_load_kdd_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_kdd(str(tmp_path), "absent.csv")


def test_add_label_columns():
    df = pd.DataFrame({"duration": [0, 1, 2], "label": ["normal.", "smurf.", "neptune."]})
    out = add_label_columns(df)
    assert out["original_label"].tolist() == ["normal.", "smurf.", "neptune."]
    assert out["label_name"].tolist() == ["normal", "anomaly", "anomaly"]
    assert out["label"].tolist() == [0, 1, 1]
    # input untouched
    assert "original_label" not in df.columns


def test_split_is_reproducible():
    df = add_label_columns(make_mock_kdd(n_normal=90, n_anomaly=10, seed=1))
    train_a, test_a = split_train_test(df, test_size=0.2, seed=123)
    train_b, test_b = split_train_test(df, test_size=0.2, seed=123)
    assert len(test_a) == 20 and len(train_a) == 80
    assert test_a.index.equals(test_b.index)
    assert set(train_a.index).isdisjoint(test_a.index)


def test_mock_frame_shape():
    df = make_mock_kdd(n_normal=50, n_anomaly=5, seed=3)
    assert len(df) == 55
    assert (df["label"] != "normal.").sum() == 5
    assert df[["protocol_type", "service", "flag"]].notna().all().all()
