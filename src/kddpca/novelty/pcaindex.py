import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin

from kddpca.novelty.pca_basis import PCABasis
from kddpca.novelty.persistence import load_basis, load_metadata, save_basis
from kddpca.novelty.scoring import reconstruction_error, score_samples
from kddpca.utils.arrays import as_matrix, feature_names


class PCAAnomaly(TransformerMixin, BaseEstimator):
    """
    PCA reconstruction-error novelty index.

    - fit(X): learn the top-k PCA basis of the (standardized) reference matrix
    - score_samples(X): squared reconstruction error per row
    - transform(X): the same scores as an (n, 1) column, so the estimator can
      sit between the standardizer and the normalizer in a Pipeline
    """
    def __init__(self, k: int = 3, n_jobs: int = 1, batch_size: int = 10_000,
                 verbose: bool = False):
        self.k = k
        self.n_jobs = n_jobs
        self.batch_size = batch_size
        self.verbose = verbose
        self.basis_ = None

    def fit(self, X, y=None) -> "PCAAnomaly":
        """Fit PCA on reference data. Labels, if given, are ignored."""
        self.basis_ = PCABasis.fit(X, self.k, feature_names=feature_names(X))
        self.n_features_in_ = self.basis_.n_features
        if self.verbose:
            print(
                f"PCA fitted: k={self.k}, d={self.n_features_in_}, "
                f"explained variance ratio={self.basis_.explained_variance_ratio.sum():.3f}"
            )
        return self

    def _check_fitted(self):
        if self.basis_ is None:
            raise RuntimeError("PCAAnomaly must be fitted before scoring.")

    def project(self, X) -> np.ndarray:
        self._check_fitted()
        return self.basis_.transform(X)

    def reconstruct(self, X) -> np.ndarray:
        """Project X into the basis and map it back to feature space."""
        self._check_fitted()
        return self.basis_.reconstruct(self.basis_.transform(X))

    def score_samples(self, X) -> np.ndarray:
        """Return a 1D anomaly score for each row of X."""
        self._check_fitted()
        return score_samples(self.basis_, X, n_jobs=self.n_jobs,
                             batch_size=self.batch_size, verbose=self.verbose)

    def transform(self, X, y=None) -> np.ndarray:
        return self.score_samples(X)[:, np.newaxis]

    def transform_frame(self, X) -> pd.DataFrame:
        """PCA coordinates (pc_1..pc_k) and the anomaly score of every row."""
        self._check_fitted()
        M = as_matrix(X)
        proj = self.basis_.transform(M)
        out = pd.DataFrame(proj, columns=[f"pc_{i + 1}" for i in range(self.basis_.k)])
        out["anomaly_score"] = reconstruction_error(M, self.basis_.reconstruct(proj))
        if isinstance(X, pd.DataFrame):
            out.index = X.index
        return out

    def save(self, path, metadata=None) -> str:
        self._check_fitted()
        meta = {"n_jobs": self.n_jobs, "batch_size": self.batch_size}
        if metadata:
            meta.update(metadata)
        return save_basis(self.basis_, path, metadata=meta)

    @classmethod
    def load(cls, path, n_features=None) -> "PCAAnomaly":
        basis = load_basis(path, n_features=n_features)
        extra = load_metadata(path).get("extra") or {}
        model = cls(k=basis.k, n_jobs=extra.get("n_jobs", 1),
                    batch_size=extra.get("batch_size", 10_000))
        model.basis_ = basis
        model.n_features_in_ = basis.n_features
        return model
