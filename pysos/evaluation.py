"""
Evaluation metrics for outlier scores against known labels.

Useful when a labelled benchmark is available to pick a perplexity:
- ROC-AUC and average precision of the raw scores
- threshold selection (F1 or Youden's J)
- confusion-matrix based classification metrics
"""

import logging
from typing import Dict, Optional, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from sklearn.metrics import (
    average_precision_score,
    confusion_matrix,
    f1_score,
    precision_recall_curve,
    precision_score,
    recall_score,
    roc_auc_score,
    roc_curve,
)

logger = logging.getLogger(__name__)


def _check_labels_and_scores(y_true, y_scores) -> Tuple[NDArray, NDArray]:  # noqa: ANN001
    y_true = np.asarray(y_true).ravel()
    y_scores = np.asarray(y_scores, dtype=np.float64).ravel()

    if y_true.size == 0 or y_scores.size == 0:
        raise ValueError("y_true and y_scores must be non-empty.")
    if y_true.shape[0] != y_scores.shape[0]:
        raise ValueError(
            "y_true and y_scores must have the same length. "
            f"Got {y_true.shape[0]} != {y_scores.shape[0]}."
        )
    return y_true, y_scores


def compute_auroc(y_true: NDArray, y_scores: NDArray) -> float:
    """
    Area under the ROC curve of outlier scores.

    Parameters
    ----------
    y_true : ndarray of shape (n_samples,)
        True binary labels (0 = inlier, 1 = outlier)
    y_scores : ndarray of shape (n_samples,)
        Outlier scores (higher = more anomalous)

    Returns
    -------
    auroc : float
        ROC-AUC in [0, 1], or NaN when only one class is present.

    Examples
    --------
    >>> compute_auroc([0, 0, 1], [0.1, 0.2, 0.99])
    1.0
    """
    y_true, y_scores = _check_labels_and_scores(y_true, y_scores)

    if len(np.unique(y_true)) < 2:
        logger.warning("Only one class present in y_true. AUROC is not defined.")
        return float("nan")

    return float(roc_auc_score(y_true, y_scores))


def compute_average_precision(y_true: NDArray, y_scores: NDArray) -> float:
    """Average precision of outlier scores (NaN when only one class is present)."""
    y_true, y_scores = _check_labels_and_scores(y_true, y_scores)

    if len(np.unique(y_true)) < 2:
        logger.warning("Only one class present in y_true. AP is not defined.")
        return float("nan")

    return float(average_precision_score(y_true, y_scores))


def find_optimal_threshold(
    y_true: NDArray,
    y_scores: NDArray,
    metric: str = "f1",
) -> Tuple[float, float]:
    """
    Find the score threshold maximising `metric`.

    Parameters
    ----------
    metric : str, default='f1'
        'f1' or 'youden' (sensitivity + specificity - 1)

    Returns
    -------
    threshold : float
    metric_value : float
    """
    y_true, y_scores = _check_labels_and_scores(y_true, y_scores)

    if metric == "f1":
        precisions, recalls, thresholds = precision_recall_curve(y_true, y_scores)

        f1_scores = np.zeros_like(precisions)
        mask = (precisions + recalls) > 0
        f1_scores[mask] = 2 * (precisions[mask] * recalls[mask]) / (
            precisions[mask] + recalls[mask]
        )

        # The last precision/recall pair has no threshold.
        optimal_idx = int(np.argmax(f1_scores[:-1]))
        return float(thresholds[optimal_idx]), float(f1_scores[optimal_idx])

    if metric == "youden":
        fpr, tpr, thresholds = roc_curve(y_true, y_scores)
        youden_j = tpr - fpr
        optimal_idx = int(np.argmax(youden_j))
        return float(thresholds[optimal_idx]), float(youden_j[optimal_idx])

    raise ValueError(f"Unsupported metric: {metric}. Choose from 'f1', 'youden'")


def compute_classification_metrics(y_true: NDArray, y_pred: NDArray) -> Dict[str, float]:
    """Precision, recall, F1, specificity, accuracy and confusion counts."""
    y_true = np.asarray(y_true).ravel()
    y_pred = np.asarray(y_pred).ravel()

    precision = precision_score(y_true, y_pred, zero_division=0)
    recall = recall_score(y_true, y_pred, zero_division=0)
    f1 = f1_score(y_true, y_pred, zero_division=0)

    tn, fp, fn, tp = confusion_matrix(y_true, y_pred, labels=[0, 1]).ravel()
    specificity = tn / (tn + fp) if (tn + fp) > 0 else 0.0
    accuracy = (tp + tn) / (tp + tn + fp + fn)

    return {
        "precision": float(precision),
        "recall": float(recall),
        "f1": float(f1),
        "specificity": float(specificity),
        "accuracy": float(accuracy),
        "tp": int(tp),
        "tn": int(tn),
        "fp": int(fp),
        "fn": int(fn),
    }


def evaluate_scores(
    y_true: NDArray,
    y_scores: NDArray,
    threshold: Optional[float] = None,
) -> Dict[str, Union[float, Dict]]:
    """
    Evaluate outlier scores against labels.

    When `threshold` is None the F1-optimal threshold is used.

    Returns
    -------
    results : dict
        'auroc', 'average_precision', 'threshold' and 'metrics'.
    """
    y_true, y_scores = _check_labels_and_scores(y_true, y_scores)
    logger.info("Evaluating outlier scores on %d samples", len(y_true))

    auroc = compute_auroc(y_true, y_scores)
    ap = compute_average_precision(y_true, y_scores)
    logger.info("AUROC: %.4f, AP: %.4f", auroc, ap)

    if threshold is None:
        if len(np.unique(y_true)) < 2:
            threshold = float(np.median(y_scores))
        else:
            threshold, f1_at_threshold = find_optimal_threshold(y_true, y_scores, metric="f1")
            logger.info("Optimal threshold: %.4f (F1=%.4f)", threshold, f1_at_threshold)

    y_pred = (y_scores >= float(threshold)).astype(int)
    return {
        "auroc": auroc,
        "average_precision": ap,
        "threshold": float(threshold),
        "metrics": compute_classification_metrics(y_true, y_pred),
    }
