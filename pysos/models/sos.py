# -*- coding: utf-8 -*-
"""
SOS (Stochastic Outlier Selection) detector.

SOS quantifies "outlierness" as the probability that a point is *not* selected
as a neighbour by any other point, based on affinities tuned to a target
perplexity.

Reference:
    Janssens, J.H.M., Huszár, F., Postma, E. and van den Herik, H.J., 2012.
    Stochastic Outlier Selection.

Notes
-----
SOS is transductive: there is no model to apply to unseen points.
`decision_function(X)` therefore scores the batch `X` on its own, exactly as
`fit` scores the training set. Scores are probabilities (higher = more
anomalous).
"""

from __future__ import annotations

import logging

import numpy as np

from pysos.config.defaults import (
    DEFAULT_CONTAMINATION,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_METRIC,
    DEFAULT_PERPLEXITY,
    DEFAULT_TOLERANCE,
)
from pysos.config.sos import SOSConfig
from pysos.core.distance import check_points
from pysos.core.pipeline import perform_outlier_detection
from pysos.utils.param_check import check_parameter

from .base_detector import BaseDetector
from .registry import register_model

logger = logging.getLogger(__name__)


@register_model("sos", tags=("classical", "sos", "probabilistic", "baseline"))
class StochasticOutlierSelection(BaseDetector):
    """PyOD-style SOS detector.

    Parameters
    ----------
    contamination : float, default=0.1
        Expected proportion of outliers, used for `threshold_`.
    perplexity : float, default=30.0
        Effective neighbourhood size. Must not exceed ``n_samples - 1`` of the
        data passed to `fit`/`decision_function`.
    max_iterations : int, default=500
        Precision search budget per point.
    tolerance : float, default=1e-12
        Allowed absolute perplexity mismatch.
    metric : str, default="euclidean"
        Distance used by the distance stage (any `scipy.spatial.distance.pdist`
        metric).
    squared : bool, default=False
        Square distances inside the kernel exponent.
    n_jobs : int, optional
        Parallelism of the affinity stage.

    Attributes
    ----------
    decision_scores_ : ndarray of shape (n_samples,)
        Outlier probabilities of the training data.
    threshold_ : float
        Score above which a point is labelled an outlier.
    labels_ : ndarray of shape (n_samples,)
        Binary labels (0: inlier, 1: outlier).

    Examples
    --------
    >>> detector = StochasticOutlierSelection(perplexity=3, contamination=0.2)
    >>> detector.fit([[1, 1], [2, 1], [1, 2], [2, 2], [5, 8]]).labels_.tolist()
    [0, 0, 0, 0, 1]
    """

    def __init__(
        self,
        *,
        contamination: float = DEFAULT_CONTAMINATION,
        perplexity: float = DEFAULT_PERPLEXITY,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        tolerance: float = DEFAULT_TOLERANCE,
        metric: str = DEFAULT_METRIC,
        squared: bool = False,
        n_jobs: int | None = None,
    ) -> None:
        super().__init__(contamination=contamination)
        check_parameter(perplexity, low=1.0, param_name="perplexity")
        check_parameter(max_iterations, low=0, param_name="max_iterations")
        check_parameter(tolerance, low=0.0, param_name="tolerance")

        self.perplexity = float(perplexity)
        self.max_iterations = int(max_iterations)
        self.tolerance = float(tolerance)
        self.metric = str(metric)
        self.squared = bool(squared)
        self.n_jobs = n_jobs

    @classmethod
    def from_config(cls, config: SOSConfig) -> "StochasticOutlierSelection":
        return cls(
            contamination=config.contamination,
            perplexity=config.perplexity,
            **config.pipeline_kwargs(),
        )

    def get_params(self) -> dict:
        return {
            "contamination": self.contamination,
            "perplexity": self.perplexity,
            "max_iterations": self.max_iterations,
            "tolerance": self.tolerance,
            "metric": self.metric,
            "squared": self.squared,
            "n_jobs": self.n_jobs,
        }

    def _score(self, X) -> np.ndarray:  # noqa: ANN001
        return perform_outlier_detection(
            X,
            self.perplexity,
            max_iterations=self.max_iterations,
            tolerance=self.tolerance,
            metric=self.metric,
            squared=self.squared,
            n_jobs=self.n_jobs,
        )

    def fit(self, X, y=None):  # noqa: ANN001, ANN201 - sklearn/pyod-like API
        X = check_points(X, min_samples=2)
        logger.info(
            "Fitting SOS on %d samples (perplexity=%g, metric=%s)",
            X.shape[0],
            self.perplexity,
            self.metric,
        )
        self.decision_scores_ = self._score(X)
        self._process_decision_scores()
        self._set_n_classes(y)
        logger.info("SOS fit complete. Threshold: %.4f", self.threshold_)
        return self

    def decision_function(self, X):  # noqa: ANN001, ANN201 - sklearn/pyod-like API
        if not hasattr(self, "decision_scores_"):
            raise RuntimeError("Detector must be fitted before calling decision_function")
        return self._score(X)
