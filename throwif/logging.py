from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

from throwif.config import Settings


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logs with stable keys."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        # Optional contextual fields
        if hasattr(record, "param_name"):
            data["param_name"] = record.param_name
        if hasattr(record, "error_code"):
            data["error_code"] = record.error_code

        return json.dumps(data, ensure_ascii=False)


def setup_logging(level: str | None = None) -> None:
    """Configure the package logger with structured output; safe to call twice.

    ``level`` defaults to ``THROWIF_LOG_LEVEL``.
    """
    if level is None:
        level = Settings.from_env().log_level
    logger = logging.getLogger("throwif")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return module logger."""
    return logging.getLogger(name)
