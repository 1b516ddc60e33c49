import json

import pytest

from pysos.config.io import load_config


def test_load_config_json(tmp_path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"perplexity": 5}), encoding="utf-8")

    assert load_config(path) == {"perplexity": 5}


def test_load_config_yaml(tmp_path) -> None:
    pytest.importorskip("yaml")

    path = tmp_path / "cfg.yaml"
    path.write_text("perplexity: 5\nsquared: true\n", encoding="utf-8")

    assert load_config(path) == {"perplexity": 5, "squared": True}


def test_load_config_empty_yaml_is_empty_dict(tmp_path) -> None:
    pytest.importorskip("yaml")

    path = tmp_path / "cfg.yml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == {}


def test_load_config_rejects_unknown_extension(tmp_path) -> None:
    path = tmp_path / "cfg.toml"
    path.write_text("perplexity = 5\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Unsupported config extension"):
        load_config(path)


def test_load_config_rejects_non_mapping_top_level(tmp_path) -> None:
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="top level"):
        load_config(path)
