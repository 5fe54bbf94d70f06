"""Configuration: leap seconds, star list path and reduction settings from environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from apparent_ephemeris.constants import (
    DEFAULT_PRESSURE_MB,
    DEFAULT_SEARCH_DAYS,
    DEFAULT_TEMPERATURE_C,
    MIN_DAILY_MOTION,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Read-only settings passed into each reduction and motion search.

    Attributes:
        pressure_mb: Atmospheric pressure for refraction (millibars).
        temperature_c: Air temperature for refraction (Celsius).
        search_days: Coarse-scan horizon for station searches (days).
        min_daily_motion: Rates slower than this (deg/day) are indeterminate.
    """

    pressure_mb: float = DEFAULT_PRESSURE_MB
    temperature_c: float = DEFAULT_TEMPERATURE_C
    search_days: int = DEFAULT_SEARCH_DAYS
    min_daily_motion: float = MIN_DAILY_MOTION


def get_leapsecs_path() -> str | None:
    """Return path to a NAIF LSK leap seconds file for rms-julian, if configured.

    Returns:
        Path string from JULIAN_LEAPSECS, or None to use the bundled LSK.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    return path or None


def get_starlist_path() -> str | None:
    """Return optional star list file merged into the default catalog (STARLIST_PATH).

    Returns:
        Path string, or None when not set.
    """
    path = os.environ.get('STARLIST_PATH', '').strip()
    return path or None


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning('Ignoring %s=%r; not a number, using %s', name, raw, default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, '').strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning('Ignoring %s=%r; not an integer, using %s', name, raw, default)
        return default
    if value <= 0:
        logger.warning('Ignoring %s=%r; must be positive, using %s', name, raw, default)
        return default
    return value


def load_settings() -> Settings:
    """Build Settings from EPHEMERIS_* environment variables with defaults.

    Returns:
        Settings instance.
    """
    return Settings(
        pressure_mb=_env_float('EPHEMERIS_PRESSURE_MB', DEFAULT_PRESSURE_MB),
        temperature_c=_env_float('EPHEMERIS_TEMPERATURE_C', DEFAULT_TEMPERATURE_C),
        search_days=_env_int('EPHEMERIS_SEARCH_DAYS', DEFAULT_SEARCH_DAYS),
    )
