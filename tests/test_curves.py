import numpy as np
import pytest

from meshscan.curves import (
    bspline_basis_matrix,
    find_local_extrema,
    find_most_similar_value,
    interpolate_bspline,
    is_point_in_volume,
)


def test_basis_matrix_at_zero():
    expected = np.array(
        [
            [1.0 / 6, 0.5, 0.5, 0.0],
            [2.0 / 3, 1.0, 2.0 / 3, 0.0],
            [0.5, 0.5, 1.0 / 6, 0.0],
            [0.0, 0.0, 0.0, 0.0],
        ]
    )
    np.testing.assert_allclose(bspline_basis_matrix(0.0), expected)


def test_basis_matrix_shape_and_last_row():
    m = bspline_basis_matrix(0.5)
    assert m.shape == (4, 4)
    assert m[3, 1:].tolist() == [0.0, 0.0, 0.0]


def test_interpolation_length_per_segment():
    controls = [(i, 0, 0) for i in range(6)]
    path = interpolate_bspline(controls, 5)
    assert len(path) == 3 * 5


def test_interpolation_too_few_controls_is_empty():
    assert interpolate_bspline([(0, 0, 0), (1, 1, 1), (2, 2, 2)], 4) == []


def test_interpolation_is_linear_in_control_points():
    controls = [(1, 2, 3), (4, -1, 0), (2, 2, 2), (0, 5, 1), (3, 3, -2)]
    base = np.array(interpolate_bspline(controls, 4))
    scaled = np.array(interpolate_bspline([tuple(2 * c for c in p) for p in controls], 4))
    np.testing.assert_allclose(scaled, 2 * base)


def test_interpolation_first_point_uses_first_row_weights():
    controls = [(1, 0, 0), (0, 1, 0), (0, 0, 1), (1, 1, 1)]
    first = interpolate_bspline(controls, 3)[0]
    weights = bspline_basis_matrix(0.0)[0]
    np.testing.assert_allclose(first, weights @ np.array(controls, dtype=float))


def test_interpolation_rejects_single_point():
    with pytest.raises(ValueError):
        interpolate_bspline([(0, 0, 0)] * 4, 1)


def test_most_similar_value_and_tie():
    assert find_most_similar_value([1.0, 5.0, 9.0], 6.0) == (5.0, 1)
    assert find_most_similar_value([2.0, 4.0], 3.0) == (2.0, 0)


def test_most_similar_value_empty():
    with pytest.raises(ValueError):
        find_most_similar_value([], 1.0)


def test_local_extrema():
    maxima, minima, both = find_local_extrema([0, 3, 1, 4, 2, 2, 5])
    assert maxima == [1, 3]
    assert minima == [2]
    assert both == [1, 2, 3]


def test_local_extrema_skips_no_data():
    maxima, minima, both = find_local_extrema([0, -1, 0])
    assert (maxima, minima, both) == ([], [], [])


def test_point_in_volume_strict():
    assert is_point_in_volume((1, 1, 1), (0, 0, 0), (2, 2, 2))
    assert not is_point_in_volume((0, 1, 1), (0, 0, 0), (2, 2, 2))
    assert not is_point_in_volume((1, 1, 3), (0, 0, 0), (2, 2, 2))


def test_point_in_volume_bad_dimensions():
    with pytest.raises(ValueError):
        is_point_in_volume((1, 1), (0, 0, 0), (2, 2, 2))