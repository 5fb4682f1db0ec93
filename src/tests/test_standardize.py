import numpy as np
import pandas as pd
import pytest

from kddpca.errors import DegenerateRange, DimensionMismatch
from kddpca.novelty.standardize import Standardizer, fit_standardizer, standardize


def test_training_set_has_zero_mean_unit_std(rng):
    X = rng.normal(loc=[5.0, -3.0, 100.0], scale=[2.0, 0.1, 30.0], size=(500, 3))
    Z = Standardizer().fit_transform(X)
    np.testing.assert_allclose(Z.mean(axis=0), 0.0, atol=1e-10)
    np.testing.assert_allclose(Z.std(axis=0), 1.0, atol=1e-10)


def test_statistics_come_from_training_only(rng):
    train = rng.normal(size=(100, 2))
    test = rng.normal(loc=10.0, size=(50, 2))
    scaler = Standardizer().fit(train)
    mean_before = scaler.mean_.copy()

    scaler.transform(test)
    np.testing.assert_array_equal(scaler.mean_, mean_before)
    np.testing.assert_allclose(scaler.transform(test), (test - train.mean(axis=0)) / train.std(axis=0))


def test_zero_variance_column_is_floored():
    X = pd.DataFrame({"a": [1.0, 2.0, 3.0], "const": [7.0, 7.0, 7.0]})
    scaler = Standardizer(eps=1e-6).fit(X)
    assert scaler.zero_variance_.tolist() == [1]
    assert scaler.feature_names_in_ == ["a", "const"]

    Z = scaler.transform(pd.DataFrame({"a": [2.0], "const": [7.5]}))
    assert np.all(np.isfinite(Z))
    assert Z[0, 1] == pytest.approx(0.5 / 1e-6)


def test_all_constant_matrix_is_degenerate():
    with pytest.raises(DegenerateRange):
        fit_standardizer(np.ones((4, 3)))


def test_width_mismatch():
    mean, std = fit_standardizer([[1.0, 2.0], [3.0, 5.0]])
    with pytest.raises(DimensionMismatch):
        standardize([[1.0, 2.0, 3.0]], mean, std)


def test_unfitted_raises():
    with pytest.raises(RuntimeError):
        Standardizer().transform([[1.0]])


def test_inverse_transform_recovers_input(rng):
    with pytest.raises(RuntimeError):
        Standardizer().inverse_transform(np.zeros((2, 2)))
    X = rng.normal(loc=3.0, scale=[1.0, 5.0], size=(50, 2))
    scaler = Standardizer().fit(X)
    np.testing.assert_allclose(scaler.inverse_transform(scaler.transform(X)), X)
    with pytest.raises(DimensionMismatch):
        scaler.inverse_transform(np.zeros((2, 3)))
