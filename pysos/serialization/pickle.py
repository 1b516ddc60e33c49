"""Persist fitted SOS detectors.

A fitted detector carries its tuning parameters and the contamination
`threshold_` learned on the reference batch. Reloading it lets a later batch
be scored with the same settings and labelled against that threshold, which
is what `pysos --detector` does.

Pickle is not a secure format: only load files you wrote yourself.
"""

from __future__ import annotations

import logging
import pickle
from pathlib import Path
from typing import Any

from pysos.models.sos import StochasticOutlierSelection

logger = logging.getLogger(__name__)


def is_pickle_safe_detector(detector: Any) -> bool:
    return isinstance(detector, StochasticOutlierSelection)


def save_detector(path: str | Path, detector: Any) -> None:
    """Pickle a fitted `StochasticOutlierSelection` to `path`."""

    if not is_pickle_safe_detector(detector):
        raise TypeError(
            f"Unsupported detector type {type(detector).__name__}; "
            "only StochasticOutlierSelection can be saved."
        )
    if not hasattr(detector, "threshold_"):
        raise ValueError("Detector must be fitted before it is saved (threshold_ is missing).")

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(pickle.dumps(detector, protocol=pickle.HIGHEST_PROTOCOL))  # nosec B301
    logger.info("Saved SOS detector (threshold=%.6g) to %s", detector.threshold_, target)


def load_detector(path: str | Path) -> StochasticOutlierSelection:
    """Load a detector written by `save_detector`."""

    source = Path(path)
    if not source.is_file():
        raise FileNotFoundError(f"Detector file not found: {source}")

    detector = pickle.loads(source.read_bytes())  # nosec B301 - type checked below
    if not is_pickle_safe_detector(detector):
        raise TypeError(
            f"{source} holds a {type(detector).__name__}, not a StochasticOutlierSelection; "
            "refusing to return it."
        )
    return detector
