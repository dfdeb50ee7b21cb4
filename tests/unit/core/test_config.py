"""Tests for configuration helpers."""

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from fitness_rings import config
from fitness_rings.core.exceptions import ConfigurationError
from fitness_rings.core.utils.env import get_env, get_node_env, is_production
from fitness_rings.features.activity.settings import get_activity_settings


def test_get_env_returns_default(monkeypatch):
    """get_env should return provided default when variable missing."""

    monkeypatch.delenv("NON_EXISTENT", raising=False)
    assert get_env("NON_EXISTENT", default="value") == "value"


def test_environment_helpers(monkeypatch):
    """Environment helpers should respect FITNESS_ENV."""

    monkeypatch.setenv("FITNESS_ENV", "production")
    assert get_node_env() == "production"
    assert is_production() is True

    monkeypatch.setenv("FITNESS_ENV", "local")
    assert is_production() is False


def test_config_package_loads_activity_lazily():
    """The config package should expose the activity tables on attribute access."""

    assert config.activity.DEFAULT_GOALS["steps"] == 5000

    with pytest.raises(AttributeError):
        config.missing_module  # noqa: B018


def test_activity_settings_defaults(monkeypatch):
    """Without overrides goals live under the home directory and local time is used."""

    monkeypatch.delenv("FITNESS_GOALS_PATH", raising=False)
    monkeypatch.delenv("FITNESS_TIMEZONE", raising=False)
    monkeypatch.delenv("FITNESS_COMPACT_STEPS", raising=False)

    settings = get_activity_settings()

    assert settings.goals_path == Path.home() / ".fitness_rings" / "goals.json"
    assert settings.timezone is None
    assert settings.compact_steps is True


def test_activity_settings_reads_env(monkeypatch, tmp_path):
    """Environment variables should override every activity setting."""

    monkeypatch.setenv("FITNESS_GOALS_PATH", str(tmp_path / "goals.json"))
    monkeypatch.setenv("FITNESS_TIMEZONE", "Europe/Warsaw")
    monkeypatch.setenv("FITNESS_COMPACT_STEPS", "off")

    settings = get_activity_settings()

    assert settings.goals_path == tmp_path / "goals.json"
    assert settings.timezone == ZoneInfo("Europe/Warsaw")
    assert settings.compact_steps is False


def test_activity_settings_rejects_unknown_timezone(monkeypatch):
    """An unknown timezone name should surface as a ConfigurationError."""

    monkeypatch.setenv("FITNESS_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ConfigurationError) as excinfo:
        get_activity_settings()

    assert excinfo.value.key == "FITNESS_TIMEZONE"
