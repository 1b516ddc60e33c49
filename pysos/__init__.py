"""pysos - Stochastic Outlier Selection.

Keep top-level imports lightweight: `import pysos` should not pull in
SciPy/scikit-learn until a stage is actually used. Exports are lazy-loaded
on demand.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

__version__ = "0.1.0"

__all__ = [
    # Modules
    "config",
    "core",
    "evaluation",
    "io",
    "models",
    # Pipeline stages
    "compute_distance_matrix",
    "compute_affinity_matrix",
    "compute_binding_probabilities",
    "compute_outlier_probability",
    "perform_outlier_detection",
    # Detector
    "StochasticOutlierSelection",
    "SOSConfig",
]


_LAZY_SUBMODULES = {
    "config",
    "core",
    "evaluation",
    "io",
    "models",
}

_LAZY_EXPORTS = {
    "compute_distance_matrix": ("core.distance", "compute_distance_matrix"),
    "compute_affinity_matrix": ("core.affinity", "compute_affinity_matrix"),
    "compute_binding_probabilities": ("core.binding", "compute_binding_probabilities"),
    "compute_outlier_probability": ("core.outlier", "compute_outlier_probability"),
    "perform_outlier_detection": ("core.pipeline", "perform_outlier_detection"),
    "StochasticOutlierSelection": ("models.sos", "StochasticOutlierSelection"),
    "SOSConfig": ("config.sos", "SOSConfig"),
}


def __getattr__(name: str) -> Any:  # pragma: no cover - thin delegation
    if name in _LAZY_SUBMODULES:
        module = import_module(f"{__name__}.{name}")
        globals()[name] = module
        return module

    target = _LAZY_EXPORTS.get(name)
    if target is not None:
        module_name, attr = target
        module = import_module(f"{__name__}.{module_name}")
        value = getattr(module, attr)
        globals()[name] = value
        return value

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:  # pragma: no cover - tooling convenience
    return sorted(set(globals()) | set(__all__))
