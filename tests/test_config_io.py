import json

import pytest

from pydepthmap.config.io import load_config


def test_load_config_json(tmp_path):
    config_path = tmp_path / "cfg.json"
    payload = {"compression": "lzw", "output_suffix": "_z", "overwrite": False, "output_dir": None}
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    assert load_config(config_path) == payload


def test_load_config_empty_json_null(tmp_path):
    config_path = tmp_path / "cfg.json"
    config_path.write_text("null", encoding="utf-8")
    assert load_config(config_path) == {}


def test_load_config_rejects_non_object(tmp_path):
    config_path = tmp_path / "cfg.json"
    config_path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError, match="object/dict"):
        load_config(config_path)


def test_load_config_unknown_extension_raises(tmp_path):
    config_path = tmp_path / "cfg.txt"
    config_path.write_text("x", encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        load_config(config_path)

    assert ".txt" in str(exc.value)


def test_load_config_yaml_optional(tmp_path):
    config_path = tmp_path / "cfg.yaml"
    config_path.write_text("compression: lzw\noutput_suffix: _depth\n", encoding="utf-8")

    try:
        import yaml  # noqa: F401
    except Exception:
        with pytest.raises(ImportError) as exc:
            load_config(config_path)
        msg = str(exc.value)
        assert "PyYAML" in msg or "yaml" in msg
        assert "pip install" in msg
    else:
        assert load_config(config_path) == {"compression": "lzw", "output_suffix": "_depth"}
