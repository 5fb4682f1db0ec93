import numpy as np
import pytest

from kddpca.errors import DegenerateRange
from kddpca.novelty.normalize import MinMaxNormalizer, fit_min_max, min_max_scale


def test_reference_extremes_map_to_zero_and_one():
    ref = np.array([2.0, 5.0, 3.5, 10.0])
    low, high = fit_min_max(ref)
    assert (low, high) == (2.0, 10.0)
    assert min_max_scale(low, low, high) == 0.0
    assert min_max_scale(high, low, high) == 1.0


def test_values_outside_range_are_not_clamped():
    norm = MinMaxNormalizer().fit([0.0, 4.0])
    np.testing.assert_allclose(norm.transform([-2.0, 2.0, 8.0]), [-0.5, 0.5, 2.0])


def test_constant_scores_raise():
    with pytest.raises(DegenerateRange) as exc:
        fit_min_max([3.0, 3.0, 3.0])
    assert exc.value.low == 3.0 and exc.value.high == 3.0

    with pytest.raises(DegenerateRange):
        MinMaxNormalizer().fit([3, 3, 3])


def test_empty_reference_raises():
    with pytest.raises(DegenerateRange):
        fit_min_max([])


def test_column_input_keeps_shape():
    col = np.array([[1.0], [3.0], [5.0]])
    norm = MinMaxNormalizer().fit(col)
    out = norm.transform(col)
    assert out.shape == (3, 1)
    np.testing.assert_allclose(out.ravel(), [0.0, 0.5, 1.0])
    np.testing.assert_allclose(norm.inverse_transform(out), col)


def test_unfitted_raises():
    with pytest.raises(RuntimeError):
        MinMaxNormalizer().transform([1.0])
