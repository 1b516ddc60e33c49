# -*- coding: utf-8 -*-
"""Binding stage: affinities to binding probabilities."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from pysos.core.distance import check_neighbor_matrix

logger = logging.getLogger(__name__)


def compute_binding_probabilities(affinity_matrix) -> NDArray[np.float64]:  # noqa: ANN001
    """Row-normalise affinities into binding probabilities.

    Row ``i`` of the result is point ``i``'s probability distribution over
    which other point it binds to. A row whose affinities sum to zero binds
    uniformly to every other point.

    Parameters
    ----------
    affinity_matrix : array-like of shape (n_samples, n_samples - 1)

    Returns
    -------
    binding : ndarray of shape (n_samples, n_samples - 1)
    """

    A = check_neighbor_matrix(affinity_matrix, name="affinity_matrix")
    if np.any(A < 0.0):
        raise ValueError("affinity_matrix must be non-negative")
    if A.shape[1] == 0:
        return A

    row_sums = A.sum(axis=1, keepdims=True)
    zero_rows = row_sums[:, 0] <= 0.0
    if np.any(zero_rows):
        logger.warning(
            "%d affinity row(s) sum to zero; binding them uniformly (points %s)",
            int(zero_rows.sum()),
            np.flatnonzero(zero_rows).tolist(),
        )
        A[zero_rows] = 1.0
        row_sums[zero_rows] = float(A.shape[1])

    return A / row_sums
