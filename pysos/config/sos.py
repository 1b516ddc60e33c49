from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Mapping

from pysos.config.defaults import (
    DEFAULT_CONTAMINATION,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_METRIC,
    DEFAULT_PERPLEXITY,
    DEFAULT_TOLERANCE,
)
from pysos.config.io import load_config
from pysos.utils.param_check import check_parameter


def _require_mapping(value: Any, *, name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{name} must be a dict/object, got {type(value).__name__}")
    return value


def _float(value: Any, *, name: str) -> float:
    try:
        return float(value)
    except Exception as exc:  # noqa: BLE001 - validation boundary
        raise ValueError(f"{name} must be a float, got {value!r}") from exc


def _int(value: Any, *, name: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an int, got {value!r}")
    try:
        out = int(value)
    except Exception as exc:  # noqa: BLE001 - validation boundary
        raise ValueError(f"{name} must be an int, got {value!r}") from exc
    if out != value and not isinstance(value, str):
        raise ValueError(f"{name} must be an int, got {value!r}")
    return out


def _optional_int(value: Any, *, name: str) -> int | None:
    if value is None:
        return None
    return _int(value, name=name)


def _bool(value: Any, *, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"{name} must be a bool, got {value!r}")


@dataclass(frozen=True)
class SOSConfig:
    """Tuning knobs for one SOS run.

    Only `perplexity` is meant to be tuned per dataset; the search budget
    (`max_iterations`, `tolerance`) rarely needs to move off its defaults.
    `perplexity` is checked against the number of points later, once the
    data is known.
    """

    perplexity: float = DEFAULT_PERPLEXITY
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    tolerance: float = DEFAULT_TOLERANCE
    metric: str = DEFAULT_METRIC
    squared: bool = False
    n_jobs: int | None = None
    contamination: float = DEFAULT_CONTAMINATION

    def __post_init__(self) -> None:
        check_parameter(self.perplexity, low=1.0, param_name="perplexity")
        check_parameter(self.max_iterations, low=0, param_name="max_iterations")
        check_parameter(self.tolerance, low=0.0, param_name="tolerance")
        check_parameter(
            self.contamination,
            low=0.0,
            high=0.5,
            include_left=False,
            param_name="contamination",
        )
        if not str(self.metric).strip():
            raise ValueError("metric must be a non-empty string")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SOSConfig":
        data = _require_mapping(raw, name="config")
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(k) for k in data if k not in known)
        if unknown:
            raise ValueError(
                f"Unknown config keys: {unknown}. Allowed keys: {', '.join(sorted(known))}"
            )

        kwargs: dict[str, Any] = {}
        if "perplexity" in data:
            kwargs["perplexity"] = _float(data["perplexity"], name="perplexity")
        if "max_iterations" in data:
            kwargs["max_iterations"] = _int(data["max_iterations"], name="max_iterations")
        if "tolerance" in data:
            kwargs["tolerance"] = _float(data["tolerance"], name="tolerance")
        if "metric" in data:
            kwargs["metric"] = str(data["metric"])
        if "squared" in data:
            kwargs["squared"] = _bool(data["squared"], name="squared")
        if "n_jobs" in data:
            kwargs["n_jobs"] = _optional_int(data["n_jobs"], name="n_jobs")
        if "contamination" in data:
            kwargs["contamination"] = _float(data["contamination"], name="contamination")
        return cls(**kwargs)

    @classmethod
    def from_file(cls, path: str | Path) -> "SOSConfig":
        return cls.from_dict(load_config(path))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def pipeline_kwargs(self) -> dict[str, Any]:
        """Keyword arguments accepted by `perform_outlier_detection`."""

        return {
            "max_iterations": int(self.max_iterations),
            "tolerance": float(self.tolerance),
            "metric": str(self.metric),
            "squared": bool(self.squared),
            "n_jobs": self.n_jobs,
        }
