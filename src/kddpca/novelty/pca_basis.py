from __future__ import annotations

import numbers
from typing import Optional

import numpy as np

from kddpca.errors import DegenerateRange, DimensionMismatch, InvalidParameter
from kddpca.utils.arrays import as_matrix, check_width

ORTHONORMAL_TOL = 1e-6


def _check_k(k, n_features: int) -> int:
    if isinstance(k, bool) or not isinstance(k, numbers.Integral):
        raise InvalidParameter("k", k, "must be an integer")
    if k <= 0 or k > n_features:
        raise InvalidParameter("k", k, f"must satisfy 0 < k <= {n_features}")
    return int(k)


def _flip_signs(components: np.ndarray) -> np.ndarray:
    """Make the largest-magnitude loading of every component positive."""
    idx = np.argmax(np.abs(components), axis=1)
    signs = np.sign(components[np.arange(components.shape[0]), idx])
    signs[signs == 0] = 1.0
    return components * signs[:, np.newaxis]


class PCABasis:
    """
    Row-orthonormal basis of the top-k principal components plus the
    per-feature mean it was centred on.

    components : (k, d) array, rows sorted by descending explained variance
    mean       : (d,) array
    The arrays are frozen (read-only) so one basis can be shared between
    scoring threads.
    """
    def __init__(self, components, mean, explained_variance=None,
                 explained_variance_ratio=None, feature_names=None):
        components = np.array(components, dtype=float, ndmin=2)
        mean = np.array(mean, dtype=float).ravel()
        k, d = components.shape
        if mean.shape[0] != d:
            raise DimensionMismatch(d, mean.shape[0], "mean entries")
        _check_k(k, d)
        # reconstruction uses the transpose as the inverse
        gram = components @ components.T
        if not np.allclose(gram, np.eye(k), atol=ORTHONORMAL_TOL):
            raise InvalidParameter(
                "components", f"max |C C^T - I| = {np.abs(gram - np.eye(k)).max():.3g}",
                "rows must be orthonormal",
            )
        if feature_names is not None and len(feature_names) != d:
            raise DimensionMismatch(d, len(feature_names), "feature names")

        if explained_variance is None:
            explained_variance = np.full(k, np.nan)
        if explained_variance_ratio is None:
            explained_variance_ratio = np.full(k, np.nan)
        self.components = components
        self.mean = mean
        self.explained_variance = np.array(explained_variance, dtype=float).ravel()
        self.explained_variance_ratio = np.array(explained_variance_ratio, dtype=float).ravel()
        self.feature_names = list(feature_names) if feature_names is not None else None
        for arr in (self.components, self.mean, self.explained_variance,
                    self.explained_variance_ratio):
            arr.setflags(write=False)

    @property
    def k(self) -> int:
        return self.components.shape[0]

    @property
    def n_features(self) -> int:
        return self.components.shape[1]

    @classmethod
    def fit(cls, X, k: int, feature_names: Optional[list] = None) -> "PCABasis":
        """
        Eigen-decompose the sample covariance of X and keep the top-k
        eigenvectors.

        Ties between equal eigenvalues keep the solver's order (stable sort),
        so repeated fits on the same matrix return the same basis.
        """
        M = as_matrix(X)
        n, d = M.shape
        k = _check_k(k, d)
        if n < 2:
            raise DegenerateRange(f"PCA needs at least 2 samples, got {n}")

        mean = M.mean(axis=0)
        centered = M - mean
        cov = centered.T @ centered / (n - 1)

        eigvals, eigvecs = np.linalg.eigh(cov)
        # eigh is ascending; tiny negative values are round-off
        eigvals = np.clip(eigvals, 0.0, None)
        order = np.argsort(-eigvals, kind="stable")
        eigvals = eigvals[order]
        eigvecs = eigvecs[:, order]

        components = _flip_signs(eigvecs[:, :k].T)
        total = eigvals.sum()
        ratio = eigvals[:k] / total if total > 0 else np.zeros(k)
        return cls(components, mean, eigvals[:k], ratio, feature_names=feature_names)

    def transform(self, X) -> np.ndarray:
        """Project rows into basis coordinates: (v - mean) @ components.T."""
        M = as_matrix(X)
        check_width(M, self.n_features)
        return (M - self.mean) @ self.components.T

    def reconstruct(self, projections) -> np.ndarray:
        """Map k-dimensional coordinates back: p @ components + mean."""
        P = as_matrix(projections)
        check_width(P, self.k, "components")
        return P @ self.components + self.mean

    def __repr__(self) -> str:
        return f"PCABasis(k={self.k}, n_features={self.n_features})"
