import json
import logging

import pytest

from config import ENV_VAR, Config


def write_config(tmp_path, data):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data))
    return path


def test_defaults():
    assert (Config.min_length, Config.max_length, Config.default_length) == (5, 30, 10)
    assert Config.value_range == (1, 100)
    assert Config.default_algorithm == "bubble"


def test_load_from_file_applies_known_keys(tmp_path):
    path = write_config(tmp_path, {"max_length": 50, "value_range": [10, 20], "delay_scale": 0})

    applied = Config.load_from_file(str(path))

    assert applied == {"max_length": 50, "value_range": (10, 20), "delay_scale": 0}
    assert Config.max_length == 50
    assert Config.value_range == (10, 20)
    assert Config.delay_scale == 0


def test_unknown_keys_are_ignored(tmp_path, caplog):
    path = write_config(tmp_path, {"colour": "red", "log_level": "DEBUG"})

    with caplog.at_level(logging.WARNING):
        applied = Config.load_from_file(str(path))

    assert applied == {"log_level": "DEBUG"}
    assert not hasattr(Config, "colour")
    assert "colour" in caplog.text


def test_non_object_is_rejected(tmp_path):
    path = write_config(tmp_path, [1, 2, 3])

    with pytest.raises(ValueError):
        Config.load_from_file(str(path))


def test_inverted_length_bounds_are_rejected(tmp_path):
    path = write_config(tmp_path, {"min_length": 40})

    with pytest.raises(ValueError, match="min_length"):
        Config.load_from_file(str(path))


def test_load_from_env(tmp_path, monkeypatch):
    path = write_config(tmp_path, {"default_view": "bar"})
    monkeypatch.setenv(ENV_VAR, str(path))

    Config.load_from_env()

    assert Config.default_view == "bar"


def test_load_from_env_unset(monkeypatch):
    monkeypatch.delenv(ENV_VAR, raising=False)

    assert Config.load_from_env() is None


def test_clamp_length():
    assert Config.clamp_length(0) == 5
    assert Config.clamp_length(12) == 12
    assert Config.clamp_length(99) == 30
