import numpy as np
from scipy.stats import rankdata
from sklearn.metrics import auc, precision_recall_curve

from kddpca.errors import (DimensionMismatch, InsufficientClassDiversity,
                           InvalidParameter)


def _check_binary(labels, scores):
    y = np.asarray(labels).ravel()
    s = np.asarray(scores, dtype=float).ravel()
    if y.shape[0] != s.shape[0]:
        raise DimensionMismatch(y.shape[0], s.shape[0], "scores (one per label)")
    bad = np.flatnonzero(~np.isfinite(s))
    if bad.size:
        raise ValueError(f"Scores contain {bad.size} non-finite values (first at row {bad[0]})")
    if y.dtype == bool:
        y = y.astype(int)
    values = set(np.unique(y).tolist())
    if not values <= {0, 1}:
        raise InvalidParameter("labels", sorted(values), "must be binary 0/1")
    y = y.astype(int)
    n_pos = int(y.sum())
    n_neg = int(y.shape[0] - n_pos)
    if n_pos == 0 or n_neg == 0:
        raise InsufficientClassDiversity(n_pos, n_neg)
    return y, s, n_pos, n_neg


def roc_auc(labels, scores) -> float:
    """
    Rank-based area under the ROC curve (Mann-Whitney U / (n_pos * n_neg)).

    Probability that a random anomaly (label 1) scores higher than a random
    normal sample; tied scores count 0.5 through average ranks.
    """
    y, s, n_pos, n_neg = _check_binary(labels, scores)
    ranks = rankdata(s, method="average")
    u = ranks[y == 1].sum() - n_pos * (n_pos + 1) / 2.0
    return float(u / (n_pos * n_neg))


def pr_auc(labels, scores) -> float:
    """Area under the precision-recall curve (trapezoidal)."""
    y, s, _, _ = _check_binary(labels, scores)
    precision, recall, _ = precision_recall_curve(y, s)
    return float(auc(recall, precision))


METRICS = {
    "areaUnderROC": roc_auc,
    "areaUnderPR": pr_auc,
}


def evaluate(labels, scores, metric: str = "areaUnderROC") -> float:
    """Score a continuous anomaly score against binary labels."""
    if metric not in METRICS:
        raise InvalidParameter("metric", metric, f"use one of {sorted(METRICS)}")
    return METRICS[metric](labels, scores)
