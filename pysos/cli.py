from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import numpy as np

from pysos.config.defaults import DEFAULT_PERPLEXITY
from pysos.config.sos import SOSConfig
from pysos.config.io import load_config
from pysos.io.points import load_points
from pysos.models.registry import create_model, list_models
from pysos.reporting.report import save_run_report, stamp_report_payload
from pysos.serialization.pickle import load_detector, save_detector
from pysos.utils.jsonable import to_jsonable

logger = logging.getLogger(__name__)

_TUNING_OPTIONS = (
    "config",
    "perplexity",
    "max_iterations",
    "tolerance",
    "metric",
    "squared",
    "n_jobs",
    "contamination",
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pysos",
        description="Score every row of a feature matrix with its SOS outlier probability.",
    )
    parser.add_argument("--list-models", action="store_true", help="List detectors and exit")
    parser.add_argument("--input", default=None, help="Points file (.csv, .tsv, .txt or .npy)")
    parser.add_argument("--delimiter", default=None, help="Override the text delimiter")
    parser.add_argument("--skip-header", type=int, default=0, help="Leading lines to skip")
    parser.add_argument(
        "--config",
        default=None,
        help="Optional JSON/YAML config; explicit flags below take precedence",
    )
    parser.add_argument(
        "--perplexity",
        type=float,
        default=None,
        help=f"Effective neighbourhood size. Default: {DEFAULT_PERPLEXITY:g}",
    )
    parser.add_argument("--max-iterations", type=int, default=None, help="Search budget per point")
    parser.add_argument("--tolerance", type=float, default=None, help="Perplexity tolerance")
    parser.add_argument("--metric", default=None, help="scipy pdist metric. Default: euclidean")
    parser.add_argument(
        "--squared",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Square distances inside the kernel exponent",
    )
    parser.add_argument("--n-jobs", type=int, default=None, help="Affinity stage parallelism")
    parser.add_argument("--contamination", type=float, default=None, help="Expected outlier share")
    parser.add_argument(
        "--model",
        default="sos",
        help="Registered detector name (see --list-models). Default: sos",
    )
    parser.add_argument(
        "--save-detector",
        default=None,
        help="Pickle the fitted detector here for later --detector runs",
    )
    parser.add_argument(
        "--detector",
        default=None,
        help=(
            "Score --input with a detector saved by --save-detector and label points "
            "against its stored threshold. Tuning options are not allowed with it."
        ),
    )
    parser.add_argument(
        "--labels",
        default=None,
        help="Optional ground-truth labels file (one 0/1 per row) to evaluate the scores",
    )
    parser.add_argument("--top", type=int, default=None, help="Only report the K highest scores")
    parser.add_argument("--output", default=None, help="Optional JSON output path")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity. Default: WARNING",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> SOSConfig:
    raw: dict[str, Any] = {}
    if args.config is not None:
        raw.update(load_config(args.config))

    overrides = {
        "perplexity": args.perplexity,
        "max_iterations": args.max_iterations,
        "tolerance": args.tolerance,
        "metric": args.metric,
        "squared": args.squared,
        "n_jobs": args.n_jobs,
        "contamination": args.contamination,
    }
    raw.update({key: value for key, value in overrides.items() if value is not None})
    return SOSConfig.from_dict(raw)


def _fit_detector(args: argparse.Namespace, points: np.ndarray) -> tuple[Any, SOSConfig, np.ndarray, np.ndarray]:
    """Return (detector, config, scores, labels) for `points`.

    With `--detector` the saved detector scores `points` as a new batch and
    labels them against the threshold it learned when it was fitted.
    """

    if args.detector is not None:
        given = ["--" + name.replace("_", "-") for name in _TUNING_OPTIONS if getattr(args, name) is not None]
        if given:
            raise ValueError(f"--detector cannot be combined with {', '.join(given)}")
        detector = load_detector(args.detector)
        config = SOSConfig.from_dict(detector.get_params())
        scores = np.asarray(detector.decision_function(points), dtype=np.float64)
        labels = (scores > float(detector.threshold_)).astype(int)
        return detector, config, scores, labels

    config = _resolve_config(args)
    detector = create_model(
        args.model,
        contamination=config.contamination,
        perplexity=config.perplexity,
        **config.pipeline_kwargs(),
    )
    detector.fit(points)
    scores = np.asarray(detector.decision_scores_, dtype=np.float64)
    return detector, config, scores, np.asarray(detector.labels_)


def _score_records(scores: np.ndarray, labels: np.ndarray, top: int | None) -> list[dict[str, Any]]:
    order = np.argsort(-scores, kind="stable")
    if top is not None:
        if top < 1:
            raise ValueError(f"--top must be >= 1, got {top}")
        order = order[:top]
    return [
        {"id": int(i), "score": float(scores[i]), "is_outlier": bool(labels[i])}
        for i in order
    ]


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_models:
        for name in list_models():
            print(name)
        return 0
    if args.input is None:
        parser.error("--input is required unless --list-models is given")

    try:
        points = load_points(args.input, delimiter=args.delimiter, skip_header=args.skip_header)
        detector, config, scores, labels = _fit_detector(args, points)

        payload: dict[str, Any] = {
            "input": str(args.input),
            "model": "sos" if args.detector is not None else args.model,
            "n_points": int(points.shape[0]),
            "n_features": int(points.shape[1]),
            "config": config.to_dict(),
            "threshold": float(detector.threshold_),
            "scores": _score_records(scores, labels, args.top),
        }
        if args.detector is not None:
            payload["detector"] = str(args.detector)

        if args.labels is not None:
            from pysos.evaluation import evaluate_scores

            y_true = load_points(args.labels).reshape(-1).astype(int)
            payload["evaluation"] = evaluate_scores(y_true, scores)

        if args.save_detector:
            save_detector(args.save_detector, detector)

        payload = stamp_report_payload(payload)
        if args.output:
            save_run_report(Path(args.output), payload)
            logger.info("Wrote %d scores to %s", len(payload["scores"]), args.output)
        else:
            print(json.dumps(to_jsonable(payload), indent=2, sort_keys=True))

        return 0
    except Exception as exc:  # noqa: BLE001 - CLI surface error
        print(f"error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
