from __future__ import annotations

from .defaults import (
    DEFAULT_CONTAMINATION,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_METRIC,
    DEFAULT_PERPLEXITY,
    DEFAULT_TOLERANCE,
)
from .io import load_config
from .sos import SOSConfig

__all__ = [
    "DEFAULT_CONTAMINATION",
    "DEFAULT_MAX_ITERATIONS",
    "DEFAULT_METRIC",
    "DEFAULT_PERPLEXITY",
    "DEFAULT_TOLERANCE",
    "SOSConfig",
    "load_config",
]
