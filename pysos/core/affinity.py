# -*- coding: utf-8 -*-
"""Affinity stage: perplexity-calibrated Gaussian kernels.

For every point ``i`` the affinity toward another point ``j`` is
``exp(-d_ij * beta_i)``, where ``d_ij`` is the dissimilarity taken from the
distance stage (optionally squared) and ``beta_i`` is a per-point precision.
``beta_i`` is found by a binary search so that the perplexity of the
normalised row, ``exp(H)`` with ``H`` the Shannon entropy in nats (the same
number as ``2 ** H`` with ``H`` in bits), matches the requested perplexity.

The search only ever normalises a row to evaluate its perplexity; the stage
emits raw, unnormalised affinities and leaves normalisation to the binding
stage.

Reference:
    Janssens, J.H.M., Huszár, F., Postma, E. and van den Herik, H.J., 2012.
    Stochastic Outlier Selection. Tilburg centre for Creative Computing,
    technical report 2012-001.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from joblib import Parallel, delayed
from numpy.typing import NDArray

from pysos.config.defaults import DEFAULT_MAX_ITERATIONS, DEFAULT_TOLERANCE
from pysos.core.distance import check_neighbor_matrix
from pysos.utils.param_check import check_parameter

logger = logging.getLogger(__name__)

# Largest precision the doubling step may reach; keeps `d * beta` finite.
_MAX_BETA = 1e300


@dataclass(frozen=True)
class BetaSearchResult:
    """Outcome of the per-point precision search.

    Attributes
    ----------
    beta : float
        Converged precision, or the best one seen when the iteration cap was hit.
    perplexity : float
        Perplexity of the row at `beta`.
    n_iterations : int
        Number of search steps taken after the initial evaluation.
    converged : bool
        Whether ``|perplexity - target| <= tolerance`` was reached.
    """

    beta: float
    perplexity: float
    n_iterations: int
    converged: bool


def validate_perplexity(perplexity: float, n_samples: int) -> None:
    """Check that `perplexity` lies in ``[1, n_samples - 1]``."""

    check_parameter(n_samples, low=2, param_name="number of points")
    check_parameter(
        perplexity,
        low=1.0,
        high=float(n_samples - 1),
        param_name="perplexity",
    )


def row_perplexity(dissimilarities: NDArray, beta: float) -> float:
    """Perplexity of the normalised kernel row ``exp(-d * beta)``.

    The row is shifted by its smallest dissimilarity first, which leaves the
    normalised distribution unchanged and keeps the largest weight at 1.
    """

    d = np.asarray(dissimilarities, dtype=np.float64)
    if d.size == 0:
        return 1.0
    shifted = d - d.min()
    with np.errstate(over="ignore", under="ignore"):
        weights = np.exp(-shifted * float(beta))
        total = float(weights.sum())
        entropy = np.log(total) + float(beta) * float(np.dot(shifted, weights)) / total
    return float(np.exp(entropy))


def binary_search_beta(
    dissimilarities: NDArray,
    perplexity: float,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    initial_beta: float = 1.0,
) -> BetaSearchResult:
    """Search the precision whose row perplexity matches `perplexity`.

    The lower bound starts at 0 and the upper bound is unknown. While the
    row is too flat (perplexity above target) the precision doubles until an
    upper bound exists, then bisects; while it is too peaked the precision
    bisects toward the lower bound. The loop never raises: after
    `max_iterations` steps the best precision seen is returned with
    ``converged=False``.
    """

    d = np.asarray(dissimilarities, dtype=np.float64)
    target = float(perplexity)

    beta = float(initial_beta)
    beta_min = 0.0
    beta_max = np.inf

    current = row_perplexity(d, beta)
    diff = current - target
    best = (abs(diff), beta, current)

    n_iter = 0
    while abs(diff) > tolerance and n_iter < max_iterations:
        if diff > 0:
            beta_min = beta
            if np.isinf(beta_max):
                beta = min(beta * 2.0, _MAX_BETA)
            else:
                beta = (beta + beta_max) / 2.0
        else:
            beta_max = beta
            beta = (beta + beta_min) / 2.0

        current = row_perplexity(d, beta)
        diff = current - target
        n_iter += 1
        if abs(diff) < best[0]:
            best = (abs(diff), beta, current)

    if abs(diff) <= tolerance:
        return BetaSearchResult(beta=beta, perplexity=current, n_iterations=n_iter, converged=True)

    _, best_beta, best_perplexity = best
    return BetaSearchResult(
        beta=best_beta,
        perplexity=best_perplexity,
        n_iterations=n_iter,
        converged=False,
    )


def _emit_affinities(d: NDArray, beta: float) -> NDArray[np.float64]:
    with np.errstate(over="ignore", under="ignore"):
        affinities = np.exp(-d * beta)
    total = float(affinities.sum())
    if total > 0.0 and np.isfinite(total):
        return affinities

    # Underflow: every raw weight is 0. Scaling by exp(min(d) * beta) keeps the
    # ratios (and hence the binding probabilities) intact.
    with np.errstate(over="ignore", under="ignore"):
        rescaled = np.exp(-(d - d.min()) * beta)
    total = float(rescaled.sum())
    if total > 0.0 and np.isfinite(total):
        logger.debug("Affinity row underflowed at beta=%g; rescaled by its largest entry", beta)
        return rescaled

    logger.warning("Affinity row is degenerate at beta=%g; using uniform affinities", beta)
    return np.ones_like(d)


def calibrate_affinity_row(
    distances: NDArray,
    perplexity: float,
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    tolerance: float = DEFAULT_TOLERANCE,
    squared: bool = False,
) -> tuple[NDArray[np.float64], BetaSearchResult]:
    """Calibrate one point's kernel and return its raw affinity row.

    Parameters
    ----------
    distances : ndarray of shape (n_neighbors,)
        One point's distance neighbour vector.
    perplexity : float
        Target perplexity.
    squared : bool, default=False
        Use squared distances in the kernel exponent.

    Returns
    -------
    affinities : ndarray of shape (n_neighbors,)
    search : BetaSearchResult
    """

    d = np.asarray(distances, dtype=np.float64).ravel()
    if squared:
        d = d * d
    if d.size == 0:
        return d.copy(), BetaSearchResult(beta=1.0, perplexity=1.0, n_iterations=0, converged=True)

    search = binary_search_beta(
        d,
        perplexity,
        max_iterations=max_iterations,
        tolerance=tolerance,
    )
    return _emit_affinities(d, search.beta), search


def compute_affinity_matrix(
    distance_matrix,  # noqa: ANN001 - array-like neighbour matrix
    perplexity: float,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    *,
    tolerance: float = DEFAULT_TOLERANCE,
    squared: bool = False,
    n_jobs: int | None = None,
    return_search_results: bool = False,
):
    """Convert a distance neighbour matrix into raw affinities.

    Parameters
    ----------
    distance_matrix : array-like of shape (n_samples, n_samples - 1)
        Output of :func:`pysos.core.distance.compute_distance_matrix`.
    perplexity : float
        Target perplexity, in ``[1, n_samples - 1]``.
    max_iterations : int, default=DEFAULT_MAX_ITERATIONS
        Binary search budget per point.
    tolerance : float, default=DEFAULT_TOLERANCE
        Allowed absolute perplexity mismatch.
    squared : bool, default=False
        Use squared distances in the kernel exponent.
    n_jobs : int, optional
        Rows are calibrated independently; values other than ``None``/``1``
        spread them over a joblib thread pool.
    return_search_results : bool, default=False
        Also return the list of per-point :class:`BetaSearchResult`.

    Returns
    -------
    affinities : ndarray of shape (n_samples, n_samples - 1)
    search_results : list of BetaSearchResult
        Only when `return_search_results` is True.
    """

    D = check_neighbor_matrix(distance_matrix, name="distance_matrix")
    n = D.shape[0]
    validate_perplexity(perplexity, n)
    check_parameter(max_iterations, low=0, param_name="max_iterations")
    check_parameter(tolerance, low=0.0, param_name="tolerance")

    kwargs = {
        "max_iterations": int(max_iterations),
        "tolerance": float(tolerance),
        "squared": bool(squared),
    }
    if n_jobs is None or n_jobs == 1:
        rows = [calibrate_affinity_row(D[i], perplexity, **kwargs) for i in range(n)]
    else:
        rows = Parallel(n_jobs=n_jobs, backend="threading", verbose=0)(
            delayed(calibrate_affinity_row)(D[i], perplexity, **kwargs) for i in range(n)
        )

    A = np.vstack([row for row, _ in rows]).reshape(n, n - 1)
    results = [search for _, search in rows]

    not_converged = [i for i, search in enumerate(results) if not search.converged]
    for i in not_converged:
        logger.debug(
            "Point %d: beta search stopped after %d iterations (perplexity %.6g, target %.6g)",
            i,
            results[i].n_iterations,
            results[i].perplexity,
            perplexity,
        )
    if not_converged:
        logger.warning(
            "Perplexity calibration did not converge for %d/%d points within %d iterations",
            len(not_converged),
            n,
            max_iterations,
        )

    if return_search_results:
        return A, results
    return A
