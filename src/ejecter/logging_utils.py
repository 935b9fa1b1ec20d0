"""Daemon logging: journald when systemd-python is installed, stderr otherwise."""

from __future__ import annotations

import logging
from typing import Any, Dict

try:
    from systemd.journal import JournalHandler
except ImportError:  # pragma: no cover
    JournalHandler = None

LOGGER_NAME = "ejecter"
STREAM_FORMAT = "%(asctime)s %(levelname)s ej: %(message)s"


def _make_handler() -> logging.Handler:
    if JournalHandler is not None:
        return JournalHandler(SYSLOG_IDENTIFIER=LOGGER_NAME)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(STREAM_FORMAT))
    return handler


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    if not logger.handlers:
        logger.addHandler(_make_handler())
    return logger


def _writes_to_journal(logger: logging.Logger) -> bool:
    if JournalHandler is None:
        return False
    handlers = getattr(logger, "handlers", None)
    if not isinstance(handlers, (list, tuple)):
        return False
    return any(isinstance(h, JournalHandler) for h in handlers)


def format_fields(fields: Dict[str, Any]) -> str:
    return " ".join(f"{key}={value}" for key, value in fields.items())


def log_structured(logger: logging.Logger, message: str, fields: Dict[str, Any],
                   level: int = logging.INFO) -> None:
    """
    Log ``message`` together with upper-case ``fields`` such as ``EJ_EVENT``.

    Under journald the fields are stored as journal fields, so
    ``journalctl EJ_EVENT=drive-disconnected`` finds every unsafe removal.
    Other handlers get them appended to the message as ``KEY=value`` pairs.
    """
    if _writes_to_journal(logger):
        logger.log(level, message, extra=fields)
    elif fields:
        logger.log(level, "%s %s", message, format_fields(fields))
    else:
        logger.log(level, message)
