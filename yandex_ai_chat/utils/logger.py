"""Structured logging utility with JSON output."""

import logging
import json
import re
import sys
import os
from datetime import datetime, timezone
from typing import Any, Dict


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    # Fields that Python's logging adds automatically (exclude these)
    BUILTIN_ATTRS = {
        'name', 'msg', 'args', 'created', 'filename', 'funcName',
        'levelname', 'levelno', 'lineno', 'module', 'msecs',
        'pathname', 'process', 'processName', 'relativeCreated',
        'stack_info', 'exc_info', 'exc_text', 'thread', 'threadName',
        'taskName', 'message',
    }

    MAX_VALUE_LENGTH = 500

    # Extra keys whose values are credentials
    SECRET_KEYS = {"api_key", "authorization", "yandex_api_key"}
    API_KEY_PATTERN = re.compile(r"(Api-Key|Bearer)\s+\S+", re.IGNORECASE)

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": self._redact(record.getMessage()),
        }

        for key, value in record.__dict__.items():
            if key in self.BUILTIN_ATTRS or key.startswith('_'):
                continue
            if key.lower() in self.SECRET_KEYS:
                log_data[key] = "***"
            else:
                log_data[key] = self._sanitize(value)

        if record.exc_info:
            log_data["exception"] = self._redact(self.formatException(record.exc_info))

        return json.dumps(log_data, ensure_ascii=False)

    def _sanitize(self, value: Any) -> Any:
        # Never log raw image or audio bytes
        if isinstance(value, bytes):
            return f"<bytes: {len(value)} bytes>"
        if isinstance(value, str):
            value = self._redact(value)
        if isinstance(value, (list, tuple)):
            value = [
                f"<bytes: {len(item)} bytes>" if isinstance(item, bytes) else item
                for item in value
            ]
        try:
            json.dumps(value)
            return value
        except (TypeError, ValueError):
            str_value = self._redact(str(value))
            if len(str_value) > self.MAX_VALUE_LENGTH:
                return str_value[:self.MAX_VALUE_LENGTH] + "...[truncated]"
            return str_value

    def _redact(self, text: str) -> str:
        return self.API_KEY_PATTERN.sub(lambda m: f"{m.group(1)} ***", text)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        logger.setLevel(getattr(logging, log_level, logging.INFO))

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)

        logger.propagate = False

    return logger
