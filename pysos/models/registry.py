"""
Detector registry.

The CLI resolves `--model` through this table, so a detector becomes
reachable from the command line by decorating its class with
`register_model`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional


@dataclass(frozen=True)
class ModelEntry:
    name: str
    constructor: Callable[..., Any]
    tags: frozenset


class ModelRegistry:
    """Name -> detector constructor table, filterable by tag."""

    def __init__(self) -> None:
        self._entries: Dict[str, ModelEntry] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def register(
        self,
        name: str,
        constructor: Callable[..., Any],
        *,
        tags: Optional[Iterable[str]] = None,
        overwrite: bool = False,
    ) -> None:
        if name in self._entries and not overwrite:
            raise KeyError(f"Detector {name!r} is already registered (pass overwrite=True).")
        self._entries[name] = ModelEntry(name, constructor, frozenset(tags or ()))

    def get(self, name: str) -> Callable[..., Any]:
        entry = self._entries.get(name)
        if entry is None:
            known = ", ".join(self.available()) or "<none>"
            raise KeyError(f"Unknown detector {name!r}. Registered detectors: {known}")
        return entry.constructor

    def available(self, *, tags: Optional[Iterable[str]] = None) -> List[str]:
        wanted = frozenset(tags or ())
        return sorted(name for name, entry in self._entries.items() if wanted <= entry.tags)


MODEL_REGISTRY = ModelRegistry()


def register_model(
    name: str,
    *,
    tags: Optional[Iterable[str]] = None,
    overwrite: bool = False,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Class decorator adding a detector to `MODEL_REGISTRY` under `name`."""

    def decorator(constructor: Callable[..., Any]) -> Callable[..., Any]:
        MODEL_REGISTRY.register(name, constructor, tags=tags, overwrite=overwrite)
        return constructor

    return decorator


def create_model(name: str, **params: Any):
    """
    Build a registered detector from keyword parameters.

    Examples
    --------
    >>> detector = create_model("sos", perplexity=10.0, contamination=0.05)
    """
    return MODEL_REGISTRY.get(name)(**params)


def list_models(*, tags: Optional[Iterable[str]] = None) -> List[str]:
    """Registered detector names, optionally only those carrying every tag in `tags`."""
    return MODEL_REGISTRY.available(tags=tags)
