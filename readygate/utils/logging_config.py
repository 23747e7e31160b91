"""
Centralized logging configuration with structured JSON logging.

Supports:
- Human-readable or JSON console output
- File-based JSON logging with rotation
- Extra fields collected into a "context" object
"""

import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

# Attributes every LogRecord carries; anything else came in through extra=
STANDARD_RECORD_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__
) | {"message", "asctime"}


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and context."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(
            record.created, tz=timezone.utc
        ).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        # Everything passed via extra= ends up in context
        context = {}
        for key in list(log_record):
            if key in record.__dict__ and key not in STANDARD_RECORD_ATTRS:
                context[key] = log_record.pop(key)

        if context:
            log_record["context"] = context


def build_json_formatter() -> CustomJsonFormatter:
    return CustomJsonFormatter("%(timestamp)s %(level)s %(logger)s %(message)s")


def setup_logging(
    log_level: str = "INFO",
    log_dir: Path | None = None,
    json_console: bool = False,
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5,
) -> None:
    """
    Configure root logging for applications embedding the gate.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for rotating JSON log files; no file handler if None
        json_console: Emit JSON instead of plain text on the console
        max_bytes: Maximum size per log file before rotation (default: 10MB)
        backup_count: Number of backup files to keep (default: 5)
    """
    level = getattr(logging, log_level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    json_formatter = build_json_formatter()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    if json_console:
        console_handler.setFormatter(json_formatter)
    else:
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    root_logger.addHandler(console_handler)

    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / "readygate.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    logging.info(f"Logging configured: level={log_level}, log_dir={log_dir}")


def setup_logging_from_settings(settings: Any | None = None) -> None:
    """Configure logging from Settings (defaults to the cached instance)."""
    if settings is None:
        from readygate.config import get_settings

        settings = get_settings()

    setup_logging(
        log_level=settings.log_level,
        log_dir=settings.log_dir,
        json_console=settings.log_json,
    )
