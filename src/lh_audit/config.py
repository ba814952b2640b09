"""Configuration loading from the environment."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError


@dataclass(frozen=True)
class Settings:
    """Application settings."""

    # Report locations
    reports_dir: Path
    analysis_dir: Path
    fixes_dir: Path

    # Analysis
    min_score: float

    log_level: str


def _get_optional_env(key: str, default: str) -> str:
    """Get optional environment variable with default."""
    value = os.getenv(key)
    return value.strip() if value and value.strip() else default


def _get_dir(key: str, default: str) -> Path:
    path = Path(_get_optional_env(key, default))
    return path if path.is_absolute() else Path.cwd() / path


def _get_min_score() -> float:
    raw = _get_optional_env("LH_AUDIT_MIN_SCORE", "0.5")
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"LH_AUDIT_MIN_SCORE must be a number, got {raw!r}")
    if not 0 <= value <= 1:
        raise ConfigError(f"LH_AUDIT_MIN_SCORE must be between 0 and 1, got {value}")
    return value


def _get_log_level() -> str:
    level = _get_optional_env("LH_AUDIT_LOG_LEVEL", "WARNING").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"LH_AUDIT_LOG_LEVEL is not a logging level: {level!r}")
    return level


def load_settings() -> Settings:
    """Load and validate settings from environment (and a local .env file)."""
    load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        reports_dir=_get_dir("LH_AUDIT_REPORTS_DIR", ".lighthouse/reports"),
        analysis_dir=_get_dir("LH_AUDIT_ANALYSIS_DIR", ".lighthouse/analysis"),
        fixes_dir=_get_dir("LH_AUDIT_FIXES_DIR", ".lighthouse/fixes"),
        min_score=_get_min_score(),
        log_level=_get_log_level(),
    )
