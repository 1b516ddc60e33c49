"""Utility helpers for pysos."""

from __future__ import annotations

from .jsonable import to_jsonable
from .optional_deps import optional_import, require
from .param_check import check_parameter

__all__ = [
    "check_parameter",
    "optional_import",
    "require",
    "to_jsonable",
]
