# -*- coding: utf-8 -*-
"""Outlier aggregation stage.

A point is an outlier when no other point binds to it. Its score is the
probability that it is selected by nobody::

    score(k) = prod_{r != k} (1 - binding(r, k))
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pysos.core.distance import to_dense


def compute_outlier_probability(binding_matrix) -> NDArray[np.float64]:  # noqa: ANN001
    """Aggregate binding probabilities column-wise into outlier scores.

    Parameters
    ----------
    binding_matrix : array-like of shape (n_samples, n_samples - 1)

    Returns
    -------
    scores : ndarray of shape (n_samples,)
        ``scores[k]`` is the outlier probability of point ``k``, in [0, 1].
    """

    # Zero diagonal: a point's own column entry contributes a factor of 1.
    B = np.clip(to_dense(binding_matrix, fill=0.0), 0.0, 1.0)
    return np.clip(np.prod(1.0 - B, axis=0), 0.0, 1.0)
