from typing import Tuple

import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin

from kddpca.errors import DegenerateRange
from kddpca.utils.arrays import as_matrix, check_width, feature_names

DEFAULT_EPS = 1e-8


def fit_standardizer(X, eps: float = DEFAULT_EPS) -> Tuple[np.ndarray, np.ndarray]:
    """
    Per-column mean and (population) stddev of the training matrix.

    Columns with zero training variance get their stddev floored at `eps`
    so later transforms never divide by zero. If no column varies at all
    there is nothing to standardize and DegenerateRange is raised.
    """
    M = as_matrix(X)
    if M.shape[0] == 0:
        raise DegenerateRange("Cannot standardize an empty training matrix")
    mean = M.mean(axis=0)
    std = M.std(axis=0)
    if M.shape[1] > 0 and np.all(std < eps):
        raise DegenerateRange(
            "Every column has zero variance", low=float(std.min()), high=float(std.max())
        )
    return mean, np.where(std < eps, eps, std)


def standardize(X, mean: np.ndarray, std: np.ndarray) -> np.ndarray:
    """(X - mean) / std with statistics learned on the training split."""
    M = as_matrix(X)
    check_width(M, len(mean))
    return (M - mean) / std


class Standardizer(TransformerMixin, BaseEstimator):
    """
    Zero-mean / unit-variance scaling, fitted on the training split only.

    Attributes after fit:
    - mean_, scale_     : per-column statistics (scale_ floored at eps)
    - zero_variance_    : indices of columns whose stddev was floored
    - feature_names_in_ : column names when fitted on a DataFrame
    """
    def __init__(self, eps: float = DEFAULT_EPS):
        self.eps = eps
        self.mean_ = None
        self.scale_ = None
        self.zero_variance_ = None
        self.feature_names_in_ = None

    def fit(self, X, y=None):
        mean, scale = fit_standardizer(X, eps=self.eps)
        self.mean_ = mean
        self.scale_ = scale
        self.zero_variance_ = np.flatnonzero(scale == self.eps)
        self.n_features_in_ = len(mean)
        self.feature_names_in_ = feature_names(X)
        return self

    def transform(self, X, y=None):
        if self.mean_ is None:
            raise RuntimeError("Standardizer must be fitted before transforming.")
        return standardize(X, self.mean_, self.scale_)

    def inverse_transform(self, X):
        if self.mean_ is None:
            raise RuntimeError("Standardizer must be fitted before transforming.")
        M = as_matrix(X)
        check_width(M, self.n_features_in_)
        return M * self.scale_ + self.mean_
