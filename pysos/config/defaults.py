"""Default knobs shared by the pipeline, the detector and the CLI."""

from __future__ import annotations

DEFAULT_PERPLEXITY = 30.0
DEFAULT_MAX_ITERATIONS = 500
DEFAULT_TOLERANCE = 1e-12
DEFAULT_METRIC = "euclidean"
DEFAULT_CONTAMINATION = 0.1
