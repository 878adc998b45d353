"""
Name: Structured Logger Configuration

Responsibilities:
  - Configure JSON-structured logging for production readiness
  - Automatically include request context (request_id, path, method, user_id)
  - Include stack traces for exceptions

Collaborators:
  - context.py: Request-scoped context vars
  - config.py: LOG_LEVEL
  - Python logging module (stdlib)

Constraints:
  - JSON format for log aggregation compatibility
  - Never log secrets (passwords, tokens, hashes)

Notes:
  - Import as: from smartpass.logger import logger
"""

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any


class JSONFormatter(logging.Formatter):
    """
    R: Format logs as JSON with automatic context enrichment.

    Includes:
      - timestamp (ISO 8601)
      - level, message, logger
      - module, function, line
      - request_id, method, path, user_id (from context)
      - exception stack trace (if present)
      - extra fields from log call
    """

    # R: Fields that should never be logged (security)
    SENSITIVE_KEYS = {
        "password",
        "temp_password",
        "password_hash",
        "secret",
        "jwt_secret",
        "token",
        "authorization",
    }

    _INTERNAL_KEYS = {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "taskName", "message",
    }

    def format(self, record: logging.LogRecord) -> str:
        log_obj: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # R: Add request context (imported lazily to avoid circular imports)
        from .context import get_context_dict

        ctx = get_context_dict()
        if ctx:
            log_obj.update(ctx)

        for key, value in record.__dict__.items():
            if key in self._INTERNAL_KEYS:
                continue
            if key.lower() in self.SENSITIVE_KEYS:
                continue
            log_obj[key] = value

        if record.exc_info:
            log_obj["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(log_obj, default=str)


def setup_logger(name: str = "smartpass") -> logging.Logger:
    """
    R: Configure and return structured logger.

    Args:
        name: Logger name (default: "smartpass")

    Returns:
        Configured logger with JSON formatting
    """
    log = logging.getLogger(name)
    log.setLevel(logging.INFO)

    # R: Avoid duplicate handlers on reimport
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        log.addHandler(handler)

    return log


def apply_log_level(level: str) -> None:
    """R: Apply LOG_LEVEL once settings are loaded (called from lifespan)."""
    logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))


# R: Global logger instance
logger = setup_logger()
