from typing import Tuple

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin

from kddpca.errors import DegenerateRange
from kddpca.utils.arrays import as_vector


def fit_min_max(reference_scores) -> Tuple[float, float]:
    """
    Min and max of a reference score set.
    Raises DegenerateRange for an empty or constant set: there is no range
    to scale into, and returning 0 would hide the problem.
    """
    s = as_vector(reference_scores)
    if s.size == 0:
        raise DegenerateRange("Cannot fit min-max range on an empty score set")
    low, high = float(s.min()), float(s.max())
    if high == low:
        raise DegenerateRange("Reference scores have zero range", low=low, high=high)
    return low, high


def min_max_scale(scores, low: float, high: float):
    """(score - low) / (high - low). Values outside the range are not clamped."""
    if high == low:
        raise DegenerateRange("Cannot scale with zero range", low=low, high=high)
    return (np.asarray(scores, dtype=float) - low) / (high - low)


class MinMaxNormalizer(TransformerMixin, BaseEstimator):
    """
    Maps anomaly scores onto [0, 1] using the min / max of the training
    scores. Accepts 1-D scores or an (n, 1) column and keeps that shape.
    """
    def __init__(self):
        self.min_ = None
        self.max_ = None

    def fit(self, X, y=None):
        self.min_, self.max_ = fit_min_max(X)
        return self

    def transform(self, X, y=None):
        if self.min_ is None:
            raise RuntimeError("MinMaxNormalizer must be fitted before transforming.")
        return min_max_scale(X, self.min_, self.max_)

    def inverse_transform(self, X):
        if self.min_ is None:
            raise RuntimeError("MinMaxNormalizer must be fitted before transforming.")
        return np.asarray(X, dtype=float) * (self.max_ - self.min_) + self.min_
