"""Tests for environment-driven settings."""

import pytest

from rail_dashboard import config


def test_defaults_apply_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ["READINGS_SOURCE", "DISPLAY_TIMEZONE", "LOG_LEVEL", "LOAD_CACHE_TTL"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "get_setting", lambda name, default=None: default)

    assert config.readings_source() == config.DEFAULT_READINGS_SOURCE
    assert config.display_timezone() == "Europe/London"
    assert config.log_level() == "INFO"
    assert config.cache_ttl() == 600


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("READINGS_SOURCE", "https://example.org/readings.csv")
    monkeypatch.setenv("DISPLAY_TIMEZONE", "UTC")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOAD_CACHE_TTL", "30")

    assert config.readings_source() == "https://example.org/readings.csv"
    assert config.display_timezone() == "UTC"
    assert config.log_level() == "DEBUG"
    assert config.cache_ttl() == 30


def test_invalid_ttl_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOAD_CACHE_TTL", "ten minutes")
    assert config.cache_ttl() == config.DEFAULT_CACHE_TTL


def test_sortable_columns_cover_table_headers() -> None:
    assert list(config.SORTABLE_COLUMNS) == [
        "display_timestamp",
        "RECORDING_ID",
        "POSITION_YARDS",
        "LATITUDE",
        "LONGITUDE",
        "SCORE",
        "severity",
    ]
    assert set(config.SEVERITY_COLORS) == set(config.SEVERITY_LEVELS)
