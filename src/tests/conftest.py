import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from kddpca.data.mock import make_mock_kdd


@pytest.fixture
def rng():
    return np.random.default_rng(0)


@pytest.fixture
def mock_kdd():
    return make_mock_kdd(n_normal=600, n_anomaly=60, seed=7)


@pytest.fixture
def correlated_matrix(rng):
    # 200 samples, 5 features living mostly in a 2-D subspace
    latent = rng.normal(size=(200, 2))
    mixing = rng.normal(size=(2, 5))
    return latent @ mixing + 0.05 * rng.normal(size=(200, 5))
