"""Configuration objects for the activity rings feature."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fitness_rings.config.activity import DEFAULT_DATA_DIRNAME, DEFAULT_GOALS_FILENAME
from fitness_rings.core.exceptions import ConfigurationError


@dataclass(frozen=True)
class ActivitySettings:
    """Runtime configuration for the activity rings engine.

    ``timezone`` is ``None`` when the system's local time should be used.
    """

    goals_path: Path
    timezone: tzinfo | None
    compact_steps: bool


def get_activity_settings() -> ActivitySettings:
    """Return environment configuration for the activity rings engine."""

    goals_path = Path(
        os.getenv(
            "FITNESS_GOALS_PATH",
            str(Path.home() / DEFAULT_DATA_DIRNAME / DEFAULT_GOALS_FILENAME),
        )
    ).expanduser()
    timezone = _timezone_env("FITNESS_TIMEZONE")
    compact_steps = _bool_env("FITNESS_COMPACT_STEPS", default=True)

    return ActivitySettings(
        goals_path=goals_path,
        timezone=timezone,
        compact_steps=compact_steps,
    )


__all__ = ["ActivitySettings", "get_activity_settings"]


def _bool_env(key: str, *, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _timezone_env(key: str) -> tzinfo | None:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return None
    try:
        return ZoneInfo(raw.strip())
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigurationError(f"{key} must be an IANA timezone name", key=key) from exc
