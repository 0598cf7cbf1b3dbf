"""Logging setup with standard and JSON output."""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from typing import Optional


class JSONFormatter(logging.Formatter):
    """Formats logs as JSON for easier parsing."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_dict = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        request_id = getattr(record, "request_id", None)
        if request_id:
            log_dict["request_id"] = request_id

        if record.exc_info:
            log_dict["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_dict)


class StandardFormatter(logging.Formatter):
    """Standard text formatter with color support."""

    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[41m",   # Red background
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with optional colors."""
        if sys.stdout.isatty():
            color = self.COLORS.get(record.levelname, "")
            reset = self.RESET
        else:
            color = reset = ""

        timestamp = self.formatTime(record)
        level = f"{color}{record.levelname:8s}{reset}"
        result = f"{timestamp} {level} [{record.name}] {record.getMessage()}"

        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)

        return result


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "standard",
    log_file: Optional[str] = None,
    component_levels: Optional[dict] = None,
) -> logging.Logger:
    """Set up logging for the SmartCombo service.

    Args:
        log_level: Root logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Format style ("standard" or "json")
        log_file: Optional path to a rotating log file
        component_levels: Dict mapping logger names to levels, e.g.
                         {"SMARTCOMBO.Embedding": "DEBUG"}
    """
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(level)

    if log_format.lower() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = StandardFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=10_000_000,  # 10MB
                backupCount=5,
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Failed to set up file logging: {e}")

    if component_levels:
        for component, component_level in component_levels.items():
            logging.getLogger(component).setLevel(
                getattr(logging, component_level.upper(), logging.INFO)
            )

    # Noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("sentence_transformers").setLevel(logging.WARNING)

    logging.getLogger("SMARTCOMBO").info(f"Logging initialized: level={log_level}, format={log_format}")
    return root_logger


__all__ = ["setup_logging", "JSONFormatter", "StandardFormatter"]
