# -*- coding: utf-8 -*-
"""Distance stage and the neighbour-matrix layout shared by all stages.

Every stage of the pipeline works on a *neighbour matrix*: an array of shape
``(n, n - 1)`` whose row ``i`` holds one value per other point, in ascending
id order with ``i`` itself skipped. There is no diagonal to mask, and the
column position of point ``j`` in row ``i`` is ``j`` if ``j < i`` else
``j - 1``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray
from scipy.spatial import distance as _distance
from sklearn.utils import check_array

from pysos.config.defaults import DEFAULT_METRIC

logger = logging.getLogger(__name__)


def check_points(points, *, min_samples: int = 1) -> NDArray[np.float64]:  # noqa: ANN001
    """Validate a point set and return it as a 2-D float64 array.

    Raises
    ------
    ValueError
        If the rows do not share one dimensionality, contain non-finite
        values, or there are fewer than `min_samples` rows.
    """

    if not isinstance(points, np.ndarray) and isinstance(points, Sequence):
        lengths = set()
        for row in points:
            try:
                lengths.add(len(row))
            except TypeError as exc:
                raise ValueError(
                    "points must be a 2D array-like of feature vectors, "
                    f"got a row of type {type(row).__name__}"
                ) from exc
        if len(lengths) > 1:
            raise ValueError(
                "All feature vectors must have the same length, "
                f"got lengths {sorted(lengths)}"
            )

    return check_array(
        points,
        ensure_2d=True,
        dtype=np.float64,
        ensure_min_samples=min_samples,
    )


def check_neighbor_matrix(matrix, *, name: str = "matrix") -> NDArray[np.float64]:  # noqa: ANN001
    """Validate the ``(n, n - 1)`` neighbour layout and return a float64 copy."""

    arr = np.array(matrix, dtype=np.float64)
    if arr.ndim != 2:
        raise ValueError(f"{name} must be 2D with shape (n, n - 1), got ndim={arr.ndim}")
    n, m = arr.shape
    if n == 0:
        raise ValueError(f"{name} must contain at least one row")
    if m != n - 1:
        raise ValueError(
            f"{name} must have shape (n, n - 1) (one entry per other point), got {arr.shape}"
        )
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} contains NaN or infinite values")
    return arr


def neighbor_ids(i: int, n: int) -> NDArray[np.int64]:
    """Point ids addressed by the entries of row `i` in an `n`-point run."""

    if not 0 <= int(i) < int(n):
        raise IndexError(f"point id {i} out of range for {n} points")
    ids = np.arange(int(n), dtype=np.int64)
    return np.delete(ids, int(i))


def to_dense(neighbor_matrix, *, fill: float = 0.0) -> NDArray[np.float64]:  # noqa: ANN001
    """Expand a ``(n, n - 1)`` neighbour matrix into a square ``(n, n)`` one.

    Entry ``[r, k]`` of the result is what point ``r`` assigned to point
    ``k``; the diagonal is set to `fill`.
    """

    arr = check_neighbor_matrix(neighbor_matrix, name="neighbor_matrix")
    n = arr.shape[0]
    dense = np.full((n, n), float(fill), dtype=np.float64)
    dense[~np.eye(n, dtype=bool)] = arr.ravel()
    return dense


def compute_distance_matrix(points, metric: str = DEFAULT_METRIC) -> NDArray[np.float64]:  # noqa: ANN001
    """Compute the neighbour matrix of pairwise distances.

    Each unordered pair is evaluated once and mirrored, so
    ``distance(i, j) == distance(j, i)`` holds exactly.

    Parameters
    ----------
    points : array-like of shape (n_samples, n_features)
        Feature vectors; row position is the point id.
    metric : str, default="euclidean"
        Any metric name understood by :func:`scipy.spatial.distance.pdist`.

    Returns
    -------
    distances : ndarray of shape (n_samples, n_samples - 1)
    """

    X = check_points(points)
    n = X.shape[0]
    if n < 2:
        return np.zeros((n, 0), dtype=np.float64)

    with np.errstate(over="ignore", invalid="ignore"):
        condensed = _distance.pdist(X, metric=str(metric))
    if not np.all(np.isfinite(condensed)):
        raise ValueError(
            f"Pairwise {metric} distances overflow to infinity for these points "
            f"(largest absolute coordinate {float(np.max(np.abs(X))):g}); rescale the input."
        )
    square = _distance.squareform(condensed, checks=False)
    logger.debug("Computed %d pairwise %s distances for %d points", condensed.size, metric, n)
    return square[~np.eye(n, dtype=bool)].reshape(n, n - 1)
