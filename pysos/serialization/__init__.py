from __future__ import annotations

from .pickle import is_pickle_safe_detector, load_detector, save_detector

__all__ = ["is_pickle_safe_detector", "load_detector", "save_detector"]
