"""Structured logging configuration with JSON output and rotation."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import BaseConfig

ROOT_LOGGER_NAME = "ledgerlite"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


# Attributes every LogRecord carries; anything else arrived through ``extra=``.
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with caller extras under ``extra``."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            payload["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }

        extra = {k: v for k, v in record.__dict__.items() if k not in _RECORD_ATTRS}
        if extra:
            payload["extra"] = extra

        return json.dumps(payload, default=str)


def _console_handler(dev_mode: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    if dev_mode:
        handler.setLevel(logging.INFO)
        handler.setFormatter(
            logging.Formatter(
                "[%(asctime)s] %(levelname)-8s %(name)s:%(lineno)d %(message)s", datefmt="%H:%M:%S"
            )
        )
    else:
        handler.setLevel(logging.WARNING)
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    return handler


def _file_handler(log_file: Path) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(logging.INFO)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Attach console and rotating JSON file handlers to the package logger.

    Calling it again replaces the handlers, so each process logs to one file.
    The file lives at ``<DATA_DIR>/logs/<LOG_FILENAME>``.
    """
    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / config.LOG_FILENAME

    package_logger = logging.getLogger(ROOT_LOGGER_NAME)
    package_logger.setLevel(logging.INFO)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    package_logger.addHandler(_console_handler(config.DEV_MODE))
    package_logger.addHandler(_file_handler(log_file))

    package_logger.info(
        "Logging initialized",
        extra={"dev_mode": config.DEV_MODE, "log_file": str(log_file)},
    )
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return ``name`` as a child of the package logger unless it already is one."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
