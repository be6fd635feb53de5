"""Logging configuration for the agent orchestrator.

Records are written as newline-delimited JSON to a log file, one object per
line with the keys ``level``, ``timestamp``, ``component``, ``message`` and
``data``. Nothing is written to the terminal since the TUI owns it.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, MutableMapping

from .config import DEFAULT_LOG_FILE

PACKAGE_LOGGER = "agent_orchestrator"

_LEVEL_MAP = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_LEVEL_NAMES = {
    logging.DEBUG: "debug",
    logging.INFO: "info",
    logging.WARNING: "warn",
    logging.ERROR: "error",
    logging.CRITICAL: "error",
}


class JsonLinesFormatter(logging.Formatter):
    """Format a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "level": _LEVEL_NAMES.get(record.levelno, record.levelname.lower()),
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "component": getattr(record, "component", record.name),
            "message": record.getMessage(),
            "data": getattr(record, "data", {}),
        }
        return json.dumps(entry, default=str)


class SafeFileHandler(logging.FileHandler):
    """File handler that never lets a write failure reach the caller."""

    def __init__(self, filename: str):
        super().__init__(filename, mode="a", encoding="utf-8", delay=True)

    def emit(self, record: logging.LogRecord) -> None:
        # FileHandler opens the stream outside of its own error handling
        try:
            super().emit(record)
        except Exception:
            self.handleError(record)

    def handleError(self, record: logging.LogRecord) -> None:
        pass


class ComponentLogger(logging.LoggerAdapter):
    """Logger adapter that tags records with a component name.

    Keyword arguments that are not understood by ``logging`` end up in the
    record's ``data`` object:

        log = get_logger("store")
        log.info("adding agent", id="fix-auth-bug", task="Fix auth bug")
    """

    _RESERVED = {"exc_info", "stack_info", "stacklevel", "extra"}

    def __init__(self, logger: logging.Logger, component: str):
        super().__init__(logger, {"component": component})
        self.component = component

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        data = {k: kwargs.pop(k) for k in list(kwargs) if k not in self._RESERVED}
        extra = dict(kwargs.get("extra") or {})
        extra["component"] = self.component
        extra["data"] = data
        kwargs["extra"] = extra
        return msg, kwargs


def resolve_level(level: str | None) -> int:
    """Map a level name to a ``logging`` level, defaulting to DEBUG."""
    if not level:
        return logging.DEBUG
    numeric_level = _LEVEL_MAP.get(level.strip().lower())
    if numeric_level is None:
        print(f"Warning: Invalid log level '{level}', using debug", file=sys.stderr)
        return logging.DEBUG
    return numeric_level


def setup_logging(level: str | None = None, file_path: str | None = None) -> logging.Logger:
    """Configure logging for the orchestrator.

    Args:
        level: Log level name (debug, info, warn, error). Defaults to debug.
        file_path: Log file path. Defaults to ``orchestrator-debug.log``.

    Returns:
        The configured root logger for the agent_orchestrator package.
    """
    numeric_level = resolve_level(level)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)
    logger.propagate = False

    # replace handlers so repeated calls can point at a new file
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handler = SafeFileHandler(file_path or DEFAULT_LOG_FILE)
    handler.setLevel(numeric_level)
    handler.setFormatter(JsonLinesFormatter())
    logger.addHandler(handler)

    return logger


def get_logger(component: str) -> ComponentLogger:
    """Get a logger for a specific component.

    Args:
        component: Stable component tag written into every record.

    Returns:
        Logger adapter for the component.
    """
    return ComponentLogger(logging.getLogger(f"{PACKAGE_LOGGER}.{component}"), component)
