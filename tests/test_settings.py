from __future__ import annotations

import pytest

from simonsays.config.settings import load_settings
from simonsays.core.ranges import ConfigurationError


def test_missing_file_means_defaults(tmp_path):
    settings = load_settings(tmp_path / "absent.json", environ={})
    assert (settings.number_range.min, settings.number_range.max) == (0, 9)
    assert settings.pacing_interval == 1000


def test_reads_json_file(tmp_path):
    path = tmp_path / "simonsays.json"
    path.write_text('{"number_range": {"min": 1, "max": 6}, "pacing_interval": 400, "seed": 5}')
    settings = load_settings(path, environ={})
    assert (settings.number_range.min, settings.number_range.max) == (1, 6)
    assert settings.pacing_interval == 400
    assert settings.seed == 5


def test_environment_overrides_file(tmp_path):
    path = tmp_path / "simonsays.json"
    path.write_text('{"number_range": {"min": 1, "max": 6}, "pacing_interval": 400}')
    env = {"SIMONSAYS_MAX": "12", "SIMONSAYS_PACING_MS": "250", "SIMONSAYS_SEED": "3"}
    settings = load_settings(path, environ=env)
    assert (settings.number_range.min, settings.number_range.max) == (1, 12)
    assert settings.pacing_interval == 250
    assert settings.seed == 3


def test_partial_range_fills_in_default_bound(tmp_path):
    settings = load_settings(tmp_path / "absent.json", environ={"SIMONSAYS_MAX": "4"})
    assert (settings.number_range.min, settings.number_range.max) == (0, 4)


def test_explicit_overrides_win_and_none_is_ignored(tmp_path):
    settings = load_settings(
        tmp_path / "absent.json",
        environ={"SIMONSAYS_MIN": "2"},
        min=5,
        max=None,
        pacing_interval=100,
        seed=None,
    )
    assert (settings.number_range.min, settings.number_range.max) == (5, 9)
    assert settings.pacing_interval == 100
    assert settings.seed is None


def test_non_integer_environment_value_fails(tmp_path):
    with pytest.raises(ConfigurationError, match="SIMONSAYS_PACING_MS"):
        load_settings(tmp_path / "absent.json", environ={"SIMONSAYS_PACING_MS": "fast"})


def test_inverted_range_in_file_fails(tmp_path):
    path = tmp_path / "simonsays.json"
    path.write_text('{"number_range": {"min": 9, "max": 1}}')
    with pytest.raises(ConfigurationError):
        load_settings(path, environ={})


def test_malformed_json_fails(tmp_path):
    path = tmp_path / "simonsays.json"
    path.write_text("{not json")
    with pytest.raises(ConfigurationError, match="not valid JSON"):
        load_settings(path, environ={})


def test_non_object_json_fails(tmp_path):
    path = tmp_path / "simonsays.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigurationError, match="JSON object"):
        load_settings(path, environ={})
