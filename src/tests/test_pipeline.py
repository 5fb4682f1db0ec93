import json
import os

import numpy as np
import pytest

from kddpca.config import PipelineConfig
from kddpca.data.ingest import add_label_columns, split_train_test
from kddpca.errors import DimensionMismatch
from kddpca.novelty.pcaindex import PCAAnomaly
from kddpca.pipeline import (Stage, StagedScores, build_pipeline,
                             evaluate_stages, run_pipeline, score_stages)
from kddpca.run_pipeline import main


def test_run_pipeline_separates_mock_anomalies(mock_kdd):
    result = run_pipeline(mock_kdd, PipelineConfig(k=3), verbose=False)

    assert result.metrics["test_areaUnderROC"] > 0.9
    assert result.test.stages == list(Stage)
    assert result.test.scores.shape == (len(result.test.normalized),)
    # normalizer range comes from the training scores
    assert result.train.normalized.min() == pytest.approx(0.0)
    assert result.train.normalized.max() == pytest.approx(1.0)


def test_pipeline_predict_matches_staged_scores(mock_kdd):
    df = add_label_columns(mock_kdd)
    train, test = split_train_test(df)
    pipe = build_pipeline(PipelineConfig(k=2)).fit(train)

    staged = score_stages(pipe, test)
    np.testing.assert_allclose(pipe.transform(test).ravel(), staged.normalized)
    assert staged.stage is Stage.NORMALIZED
    assert staged.to_frame().columns.tolist() == ["pc_1", "pc_2", "anomaly_score", "norm_anomaly_score"]


def test_unseen_service_at_inference(mock_kdd):
    df = add_label_columns(mock_kdd)
    pipe = build_pipeline(PipelineConfig(k=2)).fit(df)
    rows = df[df["label"] == 0].head(5)
    base = score_stages(pipe, rows)
    odd = score_stages(pipe, rows.assign(service="gopher"))

    # the residual moves by at most the shift of the standardized vector
    shift = np.linalg.norm(odd.standardized - base.standardized, axis=1)
    assert np.all(shift < 10)
    assert np.all(np.sqrt(odd.scores) <= np.sqrt(base.scores) + shift + 1e-9)
    assert odd.scores.max() < score_stages(pipe, df).scores.max()


def test_stages_must_run_in_order():
    staged = StagedScores()
    with pytest.raises(RuntimeError):
        staged.advance(Stage.PROJECTED)
    with pytest.raises(RuntimeError):
        evaluate_stages(staged, [0, 1])


def test_saved_basis_rejects_other_feature_width(tmp_path, mock_kdd):
    result = run_pipeline(mock_kdd, PipelineConfig(k=2), output_dir=str(tmp_path), verbose=False)

    for key in ("pipeline", "basis", "metrics", "roc_curve", "score_distribution"):
        assert os.path.exists(result.artifacts[key])
    with open(result.artifacts["metrics"]) as f:
        assert json.load(f).keys() == result.metrics.keys()

    width = result.pipeline.named_steps["pca_anomaly"].n_features_in_
    assert PCAAnomaly.load(result.artifacts["basis"], n_features=width).k == 2
    with pytest.raises(DimensionMismatch):
        PCAAnomaly.load(result.artifacts["basis"], n_features=width + 1)


def test_cli_on_mock_data():
    metrics = main(["--k", "2", "--metric", "areaUnderPR"])
    assert set(metrics) == {"train_areaUnderPR", "test_areaUnderPR"}
    assert all(0.0 <= v <= 1.0 for v in metrics.values())
