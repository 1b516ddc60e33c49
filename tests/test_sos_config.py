import json

import pytest

from pysos.config import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_PERPLEXITY,
    DEFAULT_TOLERANCE,
    SOSConfig,
)


def test_sos_config_defaults() -> None:
    cfg = SOSConfig()

    assert cfg.perplexity == DEFAULT_PERPLEXITY
    assert cfg.max_iterations == DEFAULT_MAX_ITERATIONS
    assert cfg.tolerance == DEFAULT_TOLERANCE
    assert cfg.metric == "euclidean"
    assert cfg.squared is False
    assert cfg.n_jobs is None


def test_sos_config_from_dict_normalizes_types() -> None:
    cfg = SOSConfig.from_dict(
        {
            "perplexity": "12.5",
            "max_iterations": "250",
            "tolerance": 1e-9,
            "metric": "cityblock",
            "squared": "true",
            "n_jobs": 2,
            "contamination": 0.05,
        }
    )

    assert cfg.perplexity == pytest.approx(12.5)
    assert cfg.max_iterations == 250
    assert cfg.tolerance == pytest.approx(1e-9)
    assert cfg.metric == "cityblock"
    assert cfg.squared is True
    assert cfg.n_jobs == 2
    assert cfg.contamination == pytest.approx(0.05)
    assert cfg.pipeline_kwargs() == {
        "max_iterations": 250,
        "tolerance": pytest.approx(1e-9),
        "metric": "cityblock",
        "squared": True,
        "n_jobs": 2,
    }


def test_sos_config_rejects_unknown_keys() -> None:
    with pytest.raises(ValueError, match="Unknown config keys"):
        SOSConfig.from_dict({"perplexity": 5, "k": 3})


@pytest.mark.parametrize(
    "raw, match",
    [
        ({"perplexity": 0.5}, "perplexity"),
        ({"perplexity": "nan"}, "perplexity"),
        ({"tolerance": float("nan")}, "tolerance"),
        ({"max_iterations": -1}, "max_iterations"),
        ({"max_iterations": 2.5}, "max_iterations"),
        ({"tolerance": -1e-3}, "tolerance"),
        ({"contamination": 0.7}, "contamination"),
        ({"squared": "maybe"}, "squared"),
        ({"metric": " "}, "metric"),
    ],
)
def test_sos_config_rejects_invalid_values(raw, match) -> None:
    with pytest.raises(ValueError, match=match):
        SOSConfig.from_dict(raw)


def test_sos_config_from_dict_requires_mapping() -> None:
    with pytest.raises(ValueError, match="dict"):
        SOSConfig.from_dict([("perplexity", 3)])


def test_sos_config_round_trips_through_json_file(tmp_path) -> None:
    path = tmp_path / "sos.json"
    path.write_text(json.dumps({"perplexity": 7, "tolerance": 1e-10}), encoding="utf-8")

    cfg = SOSConfig.from_file(path)

    assert cfg.perplexity == pytest.approx(7.0)
    assert cfg.tolerance == pytest.approx(1e-10)
    assert SOSConfig.from_dict(cfg.to_dict()) == cfg
