from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

import numpy as np
import pandas as pd
from sklearn.pipeline import Pipeline

from kddpca.config import PipelineConfig
from kddpca.data.ingest import add_label_columns, split_train_test
from kddpca.data.preprocess import KDDPreprocessor
from kddpca.metrics.roc import evaluate
from kddpca.novelty.normalize import MinMaxNormalizer
from kddpca.novelty.pcaindex import PCAAnomaly
from kddpca.novelty.persistence import save_pipeline
from kddpca.novelty.scoring import reconstruction_error
from kddpca.novelty.standardize import Standardizer


class Stage(Enum):
    RAW = 0
    STANDARDIZED = 1
    PROJECTED = 2
    RECONSTRUCTED = 3
    SCORED = 4
    NORMALIZED = 5
    EVALUATED = 6


@dataclass
class StagedScores:
    """Output of every scoring stage for one split, and the stages reached."""
    standardized: Optional[np.ndarray] = None
    projections: Optional[np.ndarray] = None
    reconstructed: Optional[np.ndarray] = None
    scores: Optional[np.ndarray] = None
    normalized: Optional[np.ndarray] = None
    metric_value: Optional[float] = None
    stages: List[Stage] = field(default_factory=lambda: [Stage.RAW])

    @property
    def stage(self) -> Stage:
        return self.stages[-1]

    def advance(self, stage: Stage) -> None:
        if stage.value != self.stage.value + 1:
            raise RuntimeError(f"Cannot move from {self.stage.name} to {stage.name}")
        self.stages.append(stage)

    def to_frame(self, index=None) -> pd.DataFrame:
        out = pd.DataFrame(index=index)
        if self.projections is not None:
            for i in range(self.projections.shape[1]):
                out[f"pc_{i + 1}"] = self.projections[:, i]
        if self.scores is not None:
            out["anomaly_score"] = self.scores
        if self.normalized is not None:
            out["norm_anomaly_score"] = self.normalized
        return out


@dataclass
class PipelineResult:
    pipeline: Pipeline
    train: StagedScores
    test: StagedScores
    metrics: Dict[str, float]
    config: PipelineConfig
    artifacts: Dict[str, str] = field(default_factory=dict)


def build_pipeline(config: PipelineConfig = PipelineConfig(), verbose: bool = False) -> Pipeline:
    """
    preprocess -> standardize -> pca_anomaly -> normalize.
    Fitting the pipeline fits each stage on the training rows only.
    """
    return Pipeline([
        ("preprocess", KDDPreprocessor(
            categorical_features=config.categorical_features,
            drop_columns=config.drop_columns,
        )),
        ("standardize", Standardizer(eps=config.eps)),
        ("pca_anomaly", PCAAnomaly(
            k=config.k, n_jobs=config.n_jobs, batch_size=config.batch_size, verbose=verbose,
        )),
        ("normalize", MinMaxNormalizer()),
    ])


def score_stages(pipeline: Pipeline, frame: pd.DataFrame) -> StagedScores:
    """
    Run a fitted pipeline on `frame` one stage at a time, keeping every
    intermediate output. Each stage only sees the previous stage's output.
    """
    pca: PCAAnomaly = pipeline.named_steps["pca_anomaly"]
    if pca.basis_ is None:
        raise RuntimeError("Pipeline must be fitted before scoring.")
    staged = StagedScores()

    features = pipeline.named_steps["preprocess"].transform(frame)
    staged.standardized = pipeline.named_steps["standardize"].transform(features)
    staged.advance(Stage.STANDARDIZED)

    staged.projections = pca.project(staged.standardized)
    staged.advance(Stage.PROJECTED)

    staged.reconstructed = pca.basis_.reconstruct(staged.projections)
    staged.advance(Stage.RECONSTRUCTED)

    staged.scores = reconstruction_error(staged.standardized, staged.reconstructed)
    staged.advance(Stage.SCORED)

    staged.normalized = pipeline.named_steps["normalize"].transform(staged.scores)
    staged.advance(Stage.NORMALIZED)
    return staged


def evaluate_stages(staged: StagedScores, labels, metric: str = "areaUnderROC") -> float:
    if staged.stage is not Stage.NORMALIZED:
        raise RuntimeError(f"Scores must be normalized before evaluation (at {staged.stage.name})")
    staged.metric_value = evaluate(labels, staged.normalized, metric=metric)
    staged.advance(Stage.EVALUATED)
    return staged.metric_value


def run_pipeline(
    df: pd.DataFrame,
    config: PipelineConfig = PipelineConfig(),
    output_dir: Optional[str] = None,
    verbose: bool = True,
) -> PipelineResult:
    """
    Executes the full scoring pipeline on a raw KDD frame.

    Args:
        df (pd.DataFrame): Raw frame with a `label` column (or already
            labelled with original_label / label_name / label).
        config (PipelineConfig): Pipeline parameters.
        output_dir (str): If given, save the fitted pipeline, the PCA basis,
            metrics JSON and plots there.
        verbose (bool): Print stage headers and results.
    """
    if "original_label" not in df.columns:
        df = add_label_columns(df, normal_label=config.normal_label)

    # 1. Split
    if verbose:
        print("--- 1) Train / test split ---")
    train, test = split_train_test(df, test_size=config.test_size, seed=config.seed)

    # 2. Fit
    if verbose:
        print("\n--- 2) Fit preprocess -> standardize -> PCA -> normalize ---")
    pipeline = build_pipeline(config, verbose=verbose)
    pipeline.fit(train)

    # 3. Score
    if verbose:
        print("\n--- 3) Reconstruct features and compute anomaly scores ---")
    train_staged = score_stages(pipeline, train)
    test_staged = score_stages(pipeline, test)

    # 4. Evaluate
    if verbose:
        print(f"\n--- 4) Evaluate ({config.metric}) ---")
    metrics = {
        f"train_{config.metric}": evaluate_stages(train_staged, train["label"], config.metric),
        f"test_{config.metric}": evaluate_stages(test_staged, test["label"], config.metric),
    }
    if verbose:
        for name, value in metrics.items():
            print(f"{name} = {value:.4f}")

    result = PipelineResult(pipeline, train_staged, test_staged, metrics, config)
    if output_dir is not None:
        result.artifacts = save_artifacts(result, test["label"], output_dir)
    return result


def save_artifacts(result: PipelineResult, test_labels, output_dir: str) -> Dict[str, str]:
    """Model, basis, metrics JSON and evaluation plots of one run."""
    import matplotlib.pyplot as plt

    from kddpca.visualization.performance_viz import (plot_roc_curve,
                                                      plot_score_distribution)

    os.makedirs(output_dir, exist_ok=True)
    artifacts = {
        "pipeline": save_pipeline(result.pipeline, output_dir),
        "basis": result.pipeline.named_steps["pca_anomaly"].save(
            os.path.join(output_dir, "pca_basis"), metadata={"k": result.config.k}
        ),
    }

    metrics_path = os.path.join(output_dir, "metrics.json")
    with open(metrics_path, "w") as f:
        json.dump({k: float(v) for k, v in result.metrics.items()}, f, indent=4)
    artifacts["metrics"] = metrics_path

    ax = plot_roc_curve(test_labels, result.test.normalized, label="test")
    roc_path = os.path.join(output_dir, "roc_curve.png")
    ax.figure.savefig(roc_path, dpi=120, bbox_inches="tight")
    plt.close(ax.figure)
    artifacts["roc_curve"] = roc_path

    ax = plot_score_distribution(result.test.normalized, test_labels)
    dist_path = os.path.join(output_dir, "score_distribution.png")
    ax.figure.savefig(dist_path, dpi=120, bbox_inches="tight")
    plt.close(ax.figure)
    artifacts["score_distribution"] = dist_path

    print(f"Artifacts saved to {output_dir}")
    return artifacts
