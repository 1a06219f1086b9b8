"""
Centralized configuration with environment variable overrides.

Privacy window sizes, the zone "now" is read in, placeholder strings and
the booking refresh interval are configurable here. Nothing is hardcoded
in the evaluators.
"""

import logging
import os
from dataclasses import dataclass, field
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_float(env_var: str, default: str) -> float:
    """Parse a float from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return float(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid float for {env_var}: {raw!r}"
        ) from None


@dataclass(frozen=True)
class PrivacyConfig:
    """Contact-privacy window settings for provider viewers."""

    days_before: int = _safe_int("PRIVACY_DAYS_BEFORE", "1")
    days_after: int = _safe_int("PRIVACY_DAYS_AFTER", "1")
    # Empty means machine-local time, which is what the dashboards used.
    timezone: str = os.getenv("PRIVACY_TIMEZONE", "")
    protected_placeholder: str = os.getenv("PROTECTED_PLACEHOLDER", "protected")
    unavailable_placeholder: str = os.getenv("UNAVAILABLE_PLACEHOLDER", "not available")


@dataclass(frozen=True)
class PollingConfig:
    """Refresh cadence for provider booking snapshots."""

    interval_seconds: float = _safe_float("BOOKING_POLL_INTERVAL", "30")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    privacy: PrivacyConfig = field(default_factory=PrivacyConfig)
    polling: PollingConfig = field(default_factory=PollingConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    if config.privacy.days_before < 0:
        raise ValueError(
            f"PRIVACY_DAYS_BEFORE must be >= 0, got {config.privacy.days_before}"
        )
    if config.privacy.days_after < 0:
        raise ValueError(
            f"PRIVACY_DAYS_AFTER must be >= 0, got {config.privacy.days_after}"
        )
    if config.privacy.timezone:
        try:
            ZoneInfo(config.privacy.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(
                f"PRIVACY_TIMEZONE is not a known IANA zone: {config.privacy.timezone!r}"
            ) from None
    if not config.privacy.protected_placeholder:
        raise ValueError("PROTECTED_PLACEHOLDER must not be empty")
    if config.polling.interval_seconds < 1:
        raise ValueError(
            f"BOOKING_POLL_INTERVAL must be >= 1, got {config.polling.interval_seconds}"
        )


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger.info(
        "Configuration loaded: privacy window -%d/+%d days, zone %s",
        config.privacy.days_before,
        config.privacy.days_after,
        config.privacy.timezone or "local",
    )
    return config


# Singleton instance
settings = load_config()
