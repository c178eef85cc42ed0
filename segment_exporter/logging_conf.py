"""Logging configuration built around structlog JSON logging."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Iterable

import structlog

from .config.loader import default_home

_LOGGING_INITIALISED = False


def _default_log_dir() -> Path:
    return default_home() / "logs"


def exporter_log_path() -> Path:
    return _default_log_dir() / "exporter.log"


def build_logging_config(verbose: bool, exporter_log: Path, error_log: Path) -> dict:
    """Return the ``dictConfig`` payload; the console only shows warnings unless verbose."""

    level = "DEBUG" if verbose else "INFO"
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {
                "()": "pythonjsonlogger.jsonlogger.JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG" if verbose else "WARNING",
                "formatter": "plain",
            },
            "exporter_file": {
                "class": "logging.FileHandler",
                "level": "INFO",
                "filename": str(exporter_log),
                "formatter": "plain",
                "encoding": "utf-8",
            },
            "error_file": {
                "class": "logging.FileHandler",
                "level": "ERROR",
                "filename": str(error_log),
                "formatter": "plain",
                "encoding": "utf-8",
            },
        },
        "loggers": {
            "segment_exporter": {
                "handlers": ["console", "exporter_file", "error_file"],
                "level": level,
                "propagate": False,
            },
        },
    }


def configure_logging(verbose: bool = False) -> structlog.BoundLogger:
    """Configure structlog + stdlib handlers and return application logger."""

    global _LOGGING_INITIALISED
    log_dir = _default_log_dir()
    error_log = log_dir / "error.log"
    exporter_log = exporter_log_path()
    log_dir.mkdir(parents=True, exist_ok=True)
    error_log.touch(exist_ok=True)
    exporter_log.touch(exist_ok=True)

    if not _LOGGING_INITIALISED:
        logging.config.dictConfig(build_logging_config(verbose, exporter_log, error_log))

        # Forward structlog events to stdlib; JSON rendering happens at handler level
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.stdlib.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
        _LOGGING_INITIALISED = True
    return structlog.get_logger("segment_exporter")


def tail_log(path: Path, line_count: int = 100) -> list[str]:
    """Return the last N lines from a log file."""

    if not path.exists():
        return []
    with path.open("r", encoding="utf-8", errors="ignore") as stream:
        lines = stream.readlines()
    return lines[-line_count:]


def available_logs() -> Iterable[Path]:
    """Yield available log file paths."""

    log_dir = _default_log_dir()
    if not log_dir.exists():
        return []
    return sorted(p for p in log_dir.glob("*.log"))


__all__ = ["available_logs", "build_logging_config", "configure_logging", "exporter_log_path", "tail_log"]
