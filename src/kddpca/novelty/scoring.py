import numpy as np
from joblib import Parallel, delayed
from tqdm.auto import tqdm

from kddpca.errors import DimensionMismatch, InvalidParameter
from kddpca.novelty.pca_basis import PCABasis
from kddpca.utils.arrays import as_matrix, check_width


def reconstruction_error(original, reconstructed) -> np.ndarray:
    """
    Sum of squared residuals per row: sum_i (original_i - reconstructed_i)^2.
    `original` must be the standardized vector the basis was fitted on.
    """
    O = as_matrix(original)
    R = as_matrix(reconstructed)
    if O.shape != R.shape:
        raise DimensionMismatch(O.shape, R.shape, "matrix shape")
    diff = O - R
    return np.einsum("ij,ij->i", diff, diff)


def _score_batch(basis: PCABasis, X: np.ndarray) -> np.ndarray:
    return reconstruction_error(X, basis.reconstruct(basis.transform(X)))


def _batches(n_rows: int, batch_size: int):
    for start in range(0, n_rows, batch_size):
        yield slice(start, min(start + batch_size, n_rows))


def score_samples(basis: PCABasis, X, n_jobs: int = 1, batch_size: int = 10_000,
                  verbose: bool = False) -> np.ndarray:
    """
    Project, reconstruct and score every row of a standardized matrix.

    Rows are independent, so batches run on a joblib thread pool when
    n_jobs != 1. The basis is read-only and shared between threads; batch
    results are concatenated in input order.
    """
    if batch_size <= 0:
        raise InvalidParameter("batch_size", batch_size, "must be positive")
    M = as_matrix(X)
    check_width(M, basis.n_features)
    n_rows = M.shape[0]
    if n_rows == 0:
        return np.empty(0, dtype=float)

    slices = list(_batches(n_rows, batch_size))
    if verbose:
        slices = tqdm(slices, desc="Scoring batches", leave=False)

    if n_jobs == 1 or len(slices) == 1:
        parts = [_score_batch(basis, M[s]) for s in slices]
    else:
        parts = Parallel(n_jobs=n_jobs, prefer="threads")(
            delayed(_score_batch)(basis, M[s]) for s in slices
        )
    return np.concatenate(parts)
