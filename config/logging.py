"""
Classroom Service - Logging Configuration
"""
import sys
import logging
import json
from datetime import datetime, timezone
from typing import Any, Dict

from config.settings import get_settings


class JSONFormatter(logging.Formatter):
    """
    JSON Formatter for structured logging.
    One object per line so log shippers can parse records without a grammar.
    """

    def format(self, record: logging.LogRecord) -> str:
        settings = get_settings()

        log_obj: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "env": "dev" if settings.debug else "prod",
            "service": settings.service_name
        }

        if record.exc_info:
            log_obj["exception"] = self.formatException(record.exc_info)

        # Fields passed via extra={"extra_data": {...}}
        extra_data = getattr(record, "extra_data", None)
        if isinstance(extra_data, dict):
            log_obj.update(extra_data)

        if hasattr(record, "request_id"):
            log_obj["request_id"] = record.request_id

        return json.dumps(log_obj, ensure_ascii=False, default=str)


def configure_logging() -> None:
    """Configure root logger: readable lines in debug, JSON otherwise"""
    settings = get_settings()

    root_logger = logging.getLogger()

    if settings.debug:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    handler = logging.StreamHandler(sys.stdout)

    if settings.debug:
        formatter = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s'
        )
    else:
        formatter = JSONFormatter()

    handler.setFormatter(formatter)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers = []
    root_logger.addHandler(handler)

    # Silence noisy libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
