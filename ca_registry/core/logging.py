"""Logging setup for the registry store.

Store modules log through :func:`get_logger` and pass structured fields as
``data=``; both formatters mask credential-bearing keys before a record is
written anywhere.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

SENSITIVE_KEYS: Set[str] = {
    "secret",
    "token",
    "pass",
    "password",
    "authorization",
    "bootstrap_secret",
}


def _redact_value(value: Any) -> str:
    if not isinstance(value, str):
        return "[REDACTED]"
    # Enrollment secrets are short; only long tokens keep an edge for correlation
    if len(value) < 12:
        return "<REDACTED>"
    return f"{value[:3]}***{value[-3:]}"


def redact_sensitive_data(data: Any) -> Any:
    """Return a copy of ``data`` with sensitive keys masked at any depth."""
    if isinstance(data, dict):
        return {
            key: _redact_value(value)
            if isinstance(key, str) and key.lower() in SENSITIVE_KEYS
            else redact_sensitive_data(value)
            for key, value in data.items()
        }
    if isinstance(data, list):
        return [redact_sensitive_data(item) for item in data]
    return data


def _record_data(record: logging.LogRecord) -> Optional[Any]:
    data = getattr(record, "data", None)
    return redact_sensitive_data(data) if data else None


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data = _record_data(record)
        if data is not None:
            entry["data"] = data
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Plain single-line output for operators running the scripts."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", "%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        data = _record_data(record)
        if data is not None:
            head, sep, tail = line.partition("\n")
            line = f"{head} | {data}{sep}{tail}"
        return line


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter accepting a ``data=`` keyword for structured fields."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        if "data" in kwargs:
            extra["data"] = kwargs.pop("data")
        kwargs["extra"] = extra
        return msg, kwargs


_loggers: Dict[str, ContextLogger] = {}


def get_logger(name: str) -> ContextLogger:
    if name not in _loggers:
        _loggers[name] = ContextLogger(logging.getLogger(name), {})
    return _loggers[name]


def setup_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Optional[str] = None,
) -> None:
    """Install registry handlers on the root logger, replacing existing ones."""
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter() if json_output else ConsoleFormatter())
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)

    # Statement echo is controlled by settings.database_echo, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("alembic").setLevel(logging.INFO)
