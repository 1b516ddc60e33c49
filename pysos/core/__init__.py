"""The four SOS stages and their composition."""

from __future__ import annotations

from .affinity import (
    BetaSearchResult,
    binary_search_beta,
    calibrate_affinity_row,
    compute_affinity_matrix,
    row_perplexity,
    validate_perplexity,
)
from .binding import compute_binding_probabilities
from .distance import (
    check_neighbor_matrix,
    check_points,
    compute_distance_matrix,
    neighbor_ids,
    to_dense,
)
from .outlier import compute_outlier_probability
from .pipeline import perform_outlier_detection, score_pairs

__all__ = [
    "BetaSearchResult",
    "binary_search_beta",
    "calibrate_affinity_row",
    "check_neighbor_matrix",
    "check_points",
    "compute_affinity_matrix",
    "compute_binding_probabilities",
    "compute_distance_matrix",
    "compute_outlier_probability",
    "neighbor_ids",
    "perform_outlier_detection",
    "row_perplexity",
    "score_pairs",
    "to_dense",
    "validate_perplexity",
]
