from __future__ import annotations

from .points import load_points

__all__ = ["load_points"]
