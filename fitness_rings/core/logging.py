"""Centralised logging configuration for the activity rings engine."""
from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Dict

from fitness_rings.core.utils.env import get_env, is_production

_PACKAGE_PREFIX = "fitness_rings/"
_ORIGINAL_LOG_RECORD_FACTORY = logging.getLogRecordFactory()
_LOG_RECORD_FACTORY_CONFIGURED = False

_LOGGING_CONFIGURED = False


def _resolve_level(value: str | None, default: str) -> str:
    value = (value or "").strip().upper()
    if value and isinstance(getattr(logging, value, None), int):
        return value
    return default


def _install_log_record_factory() -> None:
    """Install a log record factory that exposes package-relative paths."""

    global _LOG_RECORD_FACTORY_CONFIGURED
    if _LOG_RECORD_FACTORY_CONFIGURED:
        return

    def factory(*args, **kwargs):
        record = _ORIGINAL_LOG_RECORD_FACTORY(*args, **kwargs)
        pathname = getattr(record, "pathname", "") or ""
        index = pathname.rfind(_PACKAGE_PREFIX)
        record.shortpathname = pathname[index:] if index >= 0 else pathname
        return record

    logging.setLogRecordFactory(factory)
    _LOG_RECORD_FACTORY_CONFIGURED = True


def setup_logging(force: bool = False) -> None:
    """Configure root/package loggers for console and optional file output."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED and not force:
        return

    log_level = _resolve_level(get_env("FITNESS_LOG_LEVEL", default="INFO"), "INFO")
    console_level = _resolve_level(
        get_env("FITNESS_LOG_CONSOLE_LEVEL", default=log_level), log_level
    )
    file_level = _resolve_level(get_env("FITNESS_LOG_FILE_LEVEL", default=log_level), log_level)

    handlers: Dict[str, object] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": console_level,
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
    }
    root_handlers = ["console"]

    raw_log_dir = get_env("FITNESS_LOG_DIR")
    if raw_log_dir or is_production():
        log_dir = Path(raw_log_dir or Path.home() / ".fitness_rings" / "logs")
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / (get_env("FITNESS_LOG_FILE", default="fitness_rings.log") or "fitness_rings.log")
        handlers["file"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "level": file_level,
            "formatter": "standard",
            "filename": str(log_file),
            "when": "midnight",
            "backupCount": int(get_env("FITNESS_LOG_RETENTION", default="7") or "7"),
            "encoding": "utf-8",
        }
        root_handlers.append("file")

    use_milliseconds = (
        (get_env("FITNESS_LOG_TIME_MS", default="false") or "false").lower()
        in {"1", "true", "yes", "on"}
    )
    location_fmt = "%(shortpathname)s:%(lineno)d"
    if use_milliseconds:
        fmt = "%(asctime)s.%(msecs)03d %(levelname)s [{location}] - %(message)s".format(location=location_fmt)
    else:
        fmt = "%(asctime)s %(levelname)s [{location}] - %(message)s".format(location=location_fmt)
    datefmt = "%Y-%m-%d %H:%M:%S"

    config: Dict[str, object] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": fmt,
                "datefmt": datefmt,
            },
        },
        "handlers": handlers,
        "root": {
            "level": log_level,
            "handlers": root_handlers,
        },
        "loggers": {
            "fitness_rings": {
                "level": log_level,
                "propagate": True,
            },
            "asyncio": {
                "level": "WARNING",
                "propagate": True,
            },
        },
    }

    _install_log_record_factory()

    logging.config.dictConfig(config)
    logging.captureWarnings(True)

    _LOGGING_CONFIGURED = True


__all__ = ["setup_logging"]
