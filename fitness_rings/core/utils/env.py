"""Common environment helpers used across the engine."""

from __future__ import annotations

import os

__all__ = ["get_env", "get_node_env", "is_production"]


def get_env(key: str, default: str | None = None) -> str | None:
    """Return an environment variable or ``default`` when unset."""

    return os.getenv(key, default)


def get_node_env() -> str:
    """Return the current runtime environment label."""

    return (get_env("FITNESS_ENV", default="local") or "local").strip()


def is_production() -> bool:
    """True when running in production."""

    return get_node_env() == "production"
