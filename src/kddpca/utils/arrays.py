import numpy as np
import pandas as pd

from kddpca.errors import DimensionMismatch


def as_matrix(X) -> np.ndarray:
    """
    Coerce a DataFrame / ndarray / nested list into a 2-D float matrix.
    Ragged rows are rejected by numpy with a ValueError.
    """
    if isinstance(X, pd.DataFrame):
        X = X.to_numpy(dtype=float)
    M = np.asarray(X, dtype=float)
    if M.ndim == 1:
        M = M.reshape(1, -1)
    if M.ndim != 2:
        raise ValueError(f"Expected a 2-D feature matrix, got {M.ndim} dimensions")
    return M


def as_vector(x) -> np.ndarray:
    """Flatten a Series / column / list into a 1-D float array."""
    return np.asarray(x, dtype=float).ravel()


def check_width(M: np.ndarray, expected: int, what: str = "features") -> None:
    if M.shape[1] != expected:
        raise DimensionMismatch(expected, M.shape[1], what)


def feature_names(X):
    """Column names of a DataFrame, None otherwise."""
    if isinstance(X, pd.DataFrame):
        return [str(c) for c in X.columns]
    return None
