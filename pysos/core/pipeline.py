# -*- coding: utf-8 -*-
"""End-to-end SOS: distance -> affinity -> binding -> outlier probability."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from pysos.config.defaults import DEFAULT_MAX_ITERATIONS, DEFAULT_METRIC, DEFAULT_TOLERANCE
from pysos.core.affinity import compute_affinity_matrix, validate_perplexity
from pysos.core.binding import compute_binding_probabilities
from pysos.core.distance import check_points, compute_distance_matrix
from pysos.core.outlier import compute_outlier_probability

logger = logging.getLogger(__name__)


def perform_outlier_detection(
    points,  # noqa: ANN001 - array-like (n_samples, n_features)
    perplexity: float,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    metric: str = DEFAULT_METRIC,
    squared: bool = False,
    n_jobs: int | None = None,
) -> NDArray[np.float64]:
    """Score every point with its SOS outlier probability.

    Parameters
    ----------
    points : array-like of shape (n_samples, n_features)
        At least two feature vectors of equal length. Row position is the id.
    perplexity : float
        Effective neighbourhood size, in ``[1, n_samples - 1]``.
    max_iterations, tolerance :
        Budget of the per-point precision search.
    metric : str, default="euclidean"
        Dissimilarity used by the distance stage.
    squared : bool, default=False
        Square distances inside the kernel exponent.
    n_jobs : int, optional
        Parallelism of the affinity stage.

    Returns
    -------
    scores : ndarray of shape (n_samples,)
        ``scores[i]`` is the outlier probability of point ``i``.

    Raises
    ------
    ValueError
        On fewer than two points, ragged or non-finite input, coordinates so
        large that their distances overflow, or a perplexity outside
        ``[1, n_samples - 1]`` (NaN included).

    Examples
    --------
    >>> X = [[1, 1], [2, 1], [1, 2], [2, 2], [5, 8]]
    >>> scores = perform_outlier_detection(X, perplexity=3)
    >>> int(scores.argmax())
    4
    """

    X = check_points(points, min_samples=2)
    n = X.shape[0]
    validate_perplexity(perplexity, n)

    logger.debug("Running SOS on %d points (%d features), perplexity=%g", n, X.shape[1], perplexity)
    D = compute_distance_matrix(X, metric=metric)
    A = compute_affinity_matrix(
        D,
        perplexity,
        max_iterations,
        tolerance=tolerance,
        squared=squared,
        n_jobs=n_jobs,
    )
    B = compute_binding_probabilities(A)
    return compute_outlier_probability(B)


def score_pairs(scores) -> list[tuple[int, float]]:  # noqa: ANN001
    """Pair every score with its point id, in id order."""

    arr = np.asarray(scores, dtype=np.float64).reshape(-1)
    return [(int(i), float(s)) for i, s in enumerate(arr)]
