"""Logging setup and JSON event helper for ExtOrganizer."""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

LOGGER_NAME = "ext_organizer"
_LOG_FORMAT = "%(message)s"
_MAX_BYTES = 1024 * 1024
_BACKUP_COUNT = 3


def _sanitize(value: str) -> str:
    """Show paths under the home directory as ``~/...``."""

    home = str(Path.home())
    if value == home:
        return "~"
    for sep in ("/", "\\"):
        if value.startswith(home + sep):
            return "~/" + value[len(home) + 1:]
    return value


def configure_logging(
    log_path: Path | None = None,
    *,
    level: int = logging.WARNING,
) -> logging.Logger:
    """Configure and return the package logger.

    Calling it again without *log_path* only adjusts the level of the existing
    handler; passing a path replaces the handler with a rotating file.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    if logger.handlers:
        if log_path is None:
            for handler in logger.handlers:
                handler.setLevel(level)
            return logger
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = RotatingFileHandler(
            log_path,
            maxBytes=_MAX_BYTES,
            backupCount=_BACKUP_COUNT,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler()

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    return logger


def _prepare(data: dict[str, Any]) -> dict[str, Any]:
    prepared: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, Path):
            value = str(value)
        if isinstance(value, str):
            prepared[key] = _sanitize(value)
        elif isinstance(value, (list, tuple)):
            prepared[key] = [_sanitize(str(item)) if isinstance(item, (str, Path)) else item for item in value]
        else:
            prepared[key] = value
    return prepared


def log_event(
    logger: logging.Logger,
    *,
    level: int,
    action: str,
    message: str,
    extra: dict[str, Any] | None = None,
) -> None:
    """Emit one JSON log line describing *action*."""

    if not logger.isEnabledFor(level):
        return
    payload: dict[str, Any] = {
        "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
        "level": logging.getLevelName(level),
        "action": action,
        "message": _sanitize(message),
    }
    if extra:
        payload.update(_prepare(extra))
    logger.log(level, json.dumps(payload, ensure_ascii=False))


__all__ = ["LOGGER_NAME", "configure_logging", "log_event"]
