"""Tests for environment-driven configuration."""

from __future__ import annotations

import logging

import pytest

from apparent_ephemeris import config
from apparent_ephemeris.constants import DEFAULT_PRESSURE_MB, DEFAULT_SEARCH_DAYS


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ('EPHEMERIS_PRESSURE_MB', 'EPHEMERIS_TEMPERATURE_C', 'EPHEMERIS_SEARCH_DAYS'):
        monkeypatch.delenv(name, raising=False)
    assert config.load_settings() == config.Settings()


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('EPHEMERIS_PRESSURE_MB', '850.5')
    monkeypatch.setenv('EPHEMERIS_TEMPERATURE_C', '-5')
    monkeypatch.setenv('EPHEMERIS_SEARCH_DAYS', '400')
    settings = config.load_settings()
    assert settings.pressure_mb == 850.5
    assert settings.temperature_c == -5.0
    assert settings.search_days == 400


@pytest.mark.parametrize('value', ['abc', '0', '-3', '2.5'])
def test_bad_search_days_falls_back(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture, value: str
) -> None:
    monkeypatch.setenv('EPHEMERIS_SEARCH_DAYS', value)
    with caplog.at_level(logging.WARNING, logger='apparent_ephemeris.config'):
        assert config.load_settings().search_days == DEFAULT_SEARCH_DAYS
    assert 'EPHEMERIS_SEARCH_DAYS' in caplog.text


def test_bad_pressure_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv('EPHEMERIS_PRESSURE_MB', 'heavy')
    assert config.load_settings().pressure_mb == DEFAULT_PRESSURE_MB


def test_paths(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv('JULIAN_LEAPSECS', raising=False)
    monkeypatch.setenv('STARLIST_PATH', '  ')
    assert config.get_leapsecs_path() is None
    assert config.get_starlist_path() is None
    monkeypatch.setenv('JULIAN_LEAPSECS', '/data/naif0012.tls')
    monkeypatch.setenv('STARLIST_PATH', '/data/stars.txt')
    assert config.get_leapsecs_path() == '/data/naif0012.tls'
    assert config.get_starlist_path() == '/data/stars.txt'


def test_settings_are_frozen() -> None:
    settings = config.Settings()
    with pytest.raises(AttributeError):
        settings.pressure_mb = 1.0  # type: ignore[misc]
