import math

import numpy as np
import pytest

from pysos.core.distance import (
    check_neighbor_matrix,
    compute_distance_matrix,
    neighbor_ids,
    to_dense,
)


def test_distance_matrix_is_symmetric_for_two_points() -> None:
    D = compute_distance_matrix([[1.0, 3.0], [5.0, 1.0]])

    assert D.shape == (2, 1)
    assert D[0, 0] == D[1, 0]
    assert D[0, 0] == pytest.approx(math.sqrt(20.0))


def test_distance_matrix_right_triangle_pairs_distances_correctly() -> None:
    D = compute_distance_matrix([[1.0, 1.0], [2.0, 2.0], [5.0, 1.0]])

    assert D.shape == (3, 2)
    # Row i lists the other points in ascending id order.
    assert D[0].tolist() == pytest.approx([math.sqrt(2.0), 4.0])
    assert D[1].tolist() == pytest.approx([math.sqrt(2.0), math.sqrt(10.0)])
    assert D[2].tolist() == pytest.approx([4.0, math.sqrt(10.0)])


def test_distance_matrix_symmetry_is_exact_on_random_data() -> None:
    rng = np.random.RandomState(0)
    X = rng.normal(size=(12, 5))

    dense = to_dense(compute_distance_matrix(X))

    assert np.array_equal(dense, dense.T)
    assert np.all(np.diag(dense) == 0.0)


def test_distance_matrix_single_point_has_empty_neighbor_vector() -> None:
    D = compute_distance_matrix([[3.0, 4.0]])
    assert D.shape == (1, 0)


def test_distance_matrix_rejects_ragged_rows() -> None:
    with pytest.raises(ValueError, match="same length"):
        compute_distance_matrix([[1.0, 2.0], [3.0]])


def test_distance_matrix_rejects_non_finite_values() -> None:
    with pytest.raises(ValueError):
        compute_distance_matrix([[1.0, np.nan], [3.0, 4.0]])


def test_distance_matrix_reports_overflowing_coordinates() -> None:
    huge = [[0.0, 0.0], [1e160, 0.0], [0.0, 1e160], [1e160, 1e160]]

    with pytest.raises(ValueError, match="overflow.*rescale the input"):
        compute_distance_matrix(huge)


def test_distance_matrix_accepts_other_pdist_metrics() -> None:
    D = compute_distance_matrix([[0.0, 0.0], [3.0, 4.0]], metric="cityblock")
    assert D[0, 0] == pytest.approx(7.0)


def test_neighbor_ids_skip_the_point_itself() -> None:
    assert neighbor_ids(0, 4).tolist() == [1, 2, 3]
    assert neighbor_ids(2, 4).tolist() == [0, 1, 3]

    with pytest.raises(IndexError):
        neighbor_ids(4, 4)


def test_to_dense_places_entries_off_the_diagonal() -> None:
    dense = to_dense([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]], fill=-1.0)

    assert dense.tolist() == [
        [-1.0, 1.0, 2.0],
        [3.0, -1.0, 4.0],
        [5.0, 6.0, -1.0],
    ]


def test_check_neighbor_matrix_rejects_square_input() -> None:
    with pytest.raises(ValueError, match=r"\(n, n - 1\)"):
        check_neighbor_matrix(np.zeros((3, 3)))
