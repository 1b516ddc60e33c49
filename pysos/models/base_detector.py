# -*- coding: utf-8 -*-
"""Detector base contract for pysos.

Implements the subset of the PyOD detector contract that the SOS estimator
exposes:

- contamination-based thresholding (`threshold_`, `labels_`)
- binary predictions (`predict` returns {0,1})
- probability conversion (`predict_proba`)

Notes
-----
The design is inspired by PyOD's `BaseDetector` contract.
PyOD is BSD 2-Clause licensed.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any

import numpy as np
from scipy.special import erf

logger = logging.getLogger(__name__)


class BaseDetector:
    """Base class for outlier detectors.

    Parameters
    ----------
    contamination:
        Expected proportion of outliers in (0, 0.5]. Used to derive `threshold_`
        from the scores seen by `fit`.
    """

    def __init__(self, contamination: float = 0.1) -> None:
        if isinstance(contamination, bool) or not isinstance(contamination, (float, int)):
            raise TypeError(
                f"contamination must be a number, got {type(contamination).__name__}"
            )
        if not (0.0 < float(contamination) <= 0.5):
            raise ValueError(f"contamination must be in (0, 0.5], got: {contamination}")
        self.contamination = float(contamination)

    # ---------------------------------------------------------------------
    # Subclass API
    def fit(self, X, y=None):  # noqa: ANN001, ANN201 - sklearn/pyod-like signature
        raise NotImplementedError

    def decision_function(self, X):  # noqa: ANN001, ANN201 - sklearn/pyod-like signature
        raise NotImplementedError

    # ---------------------------------------------------------------------
    # Shared helpers
    def _set_n_classes(self, y: Any) -> "BaseDetector":
        """Record the number of classes; always binary when `y` is None."""

        self._classes = 2
        if y is not None:
            self._classes = int(len(np.unique(np.asarray(y))))
            warnings.warn("y should not be presented in unsupervised learning.")
        return self

    def _process_decision_scores(self) -> "BaseDetector":
        """Compute threshold and training labels from `decision_scores_`."""

        if not hasattr(self, "decision_scores_"):
            raise AttributeError(
                "decision_scores_ missing; set it before calling _process_decision_scores()."
            )

        scores = np.asarray(self.decision_scores_, dtype=np.float64).reshape(-1)
        self.decision_scores_ = scores

        threshold = np.percentile(scores, 100.0 * (1.0 - float(self.contamination)))
        self.threshold_ = float(threshold)
        self.labels_ = (scores > self.threshold_).astype(int).ravel()
        logger.debug(
            "Threshold %.6g flags %d/%d training points",
            self.threshold_,
            int(self.labels_.sum()),
            scores.size,
        )
        return self

    # ---------------------------------------------------------------------
    def predict(self, X):  # noqa: ANN001, ANN201
        """Predict binary labels: 0 for inliers and 1 for outliers."""

        if not hasattr(self, "threshold_"):
            raise RuntimeError("Model must be fitted before calling predict().")

        scores = np.asarray(self.decision_function(X), dtype=np.float64).reshape(-1)
        return (scores > float(self.threshold_)).astype(int).ravel()

    def fit_predict(self, X, y=None):  # noqa: ANN001, ANN201
        """Fit on `X` and return the training labels."""

        self.fit(X, y)
        return self.labels_

    def predict_proba(self, X, method: str = "linear"):  # noqa: ANN001, ANN201
        """Outlier probability as a 2-class array ``[p(inlier), p(outlier)]``.

        ``method`` is one of:

        - ``"linear"``: min-max scale against the training scores
        - ``"unify"``: Gaussian scaling through the error function
        - ``"raw"``: use the scores as-is (they must already lie in [0, 1])
        """

        if not hasattr(self, "decision_scores_"):
            raise RuntimeError("Model must be fitted before calling predict_proba().")

        train_scores = np.asarray(self.decision_scores_, dtype=np.float64).reshape(-1)
        test_scores = np.asarray(self.decision_function(X), dtype=np.float64).reshape(-1)

        if method == "linear":
            lo = float(np.min(train_scores))
            hi = float(np.max(train_scores))
            denom = hi - lo
            if denom <= 0.0:
                outlier = np.zeros_like(test_scores, dtype=np.float64)
            else:
                outlier = np.clip((test_scores - lo) / denom, 0.0, 1.0)
        elif method == "unify":
            mu = float(np.mean(train_scores))
            sigma = float(np.std(train_scores))
            denom = max(sigma * float(np.sqrt(2.0)), 1e-12)
            outlier = np.clip(erf((test_scores - mu) / denom), 0.0, 1.0)
        elif method == "raw":
            outlier = np.clip(test_scores, 0.0, 1.0)
        else:
            raise ValueError(f"method {method!r} is not a valid probability conversion method")

        probs = np.zeros((len(test_scores), 2), dtype=np.float64)
        probs[:, 1] = outlier
        probs[:, 0] = 1.0 - outlier
        return probs
