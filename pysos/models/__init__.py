"""Detectors with a PyOD-like fit/decision_function/predict contract."""

from .base_detector import BaseDetector
from .registry import MODEL_REGISTRY, create_model, list_models, register_model
from .sos import StochasticOutlierSelection

__all__ = [
    "BaseDetector",
    "MODEL_REGISTRY",
    "StochasticOutlierSelection",
    "create_model",
    "list_models",
    "register_model",
]
