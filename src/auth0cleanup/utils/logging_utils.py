"""Structured logging utilities for the Auth0 SSOID cleanup function."""

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any

ROOT_LOGGER_NAME = "auth0cleanup"

# Context fields copied from ``extra=`` into formatted output
CONTEXT_FIELDS = (
    "ssoid",
    "user_id",
    "operation",
    "status",
    "status_code",
    "bucket",
    "key",
    "query",
    "error",
)


class ColoredFormatter(logging.Formatter):
    """Custom formatter with color support for terminal output."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def __init__(self, *args: Any, disable_colors: bool = False, **kwargs: Any) -> None:
        """Initialize formatter with color configuration.

        Args:
            disable_colors: Whether to disable colored output
        """
        super().__init__(*args, **kwargs)
        self.disable_colors = disable_colors

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors for terminal output."""
        if (
            not self.disable_colors
            and hasattr(sys.stderr, "isatty")
            and sys.stderr.isatty()
        ):
            color = self.COLORS.get(record.levelname, "")
            reset = self.COLORS["RESET"]
            record.levelname = f"{color}{record.levelname}{reset}"

        return super().format(record)


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging (one object per line)."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as structured JSON."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        return json.dumps(log_entry, default=str)


class DetailedFormatter(logging.Formatter):
    """Detailed formatter with context information."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with detailed context."""
        base_msg = super().format(record)

        context_parts = []
        if hasattr(record, "operation"):
            context_parts.append(f"op={record.operation}")
        if hasattr(record, "ssoid"):
            context_parts.append(f"ssoid={record.ssoid}")
        if hasattr(record, "user_id"):
            context_parts.append(f"user={record.user_id}")
        if hasattr(record, "status_code"):
            context_parts.append(f"status={record.status_code}")

        if context_parts:
            return base_msg + " [" + ", ".join(context_parts) + "]"

        return base_msg


def _running_in_lambda() -> bool:
    return bool(os.getenv("AWS_LAMBDA_FUNCTION_NAME"))


def setup_logging(
    level: str = "INFO",
    log_format: str | None = None,
    disable_colors: bool = False,
) -> logging.Logger:
    """Configure logging for the package.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (console, json, detailed). Defaults to json
            inside Lambda and console elsewhere.
        disable_colors: Whether to disable colored output

    Returns:
        logging.Logger: Configured package logger
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.handlers.clear()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    if log_format is None:
        log_format = "json" if _running_in_lambda() else "console"

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)

    if log_format == "json":
        formatter: logging.Formatter = StructuredFormatter()
    elif log_format == "detailed":
        formatter = DetailedFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            disable_colors=disable_colors,
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the specified module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        logging.Logger: Logger instance
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_from_env() -> logging.Logger:
    """Configure logging from environment variables.

    Environment variables:
        AUTH0_CLEANUP_LOG_LEVEL: Log level (default: INFO)
        AUTH0_CLEANUP_LOG_FORMAT: Log format (console, json, detailed)
        AUTH0_CLEANUP_LOG_DISABLE_COLORS: Disable colored output (default: false)

    Returns:
        logging.Logger: Configured logger instance
    """
    level = os.getenv("AUTH0_CLEANUP_LOG_LEVEL", "INFO")
    log_format = os.getenv("AUTH0_CLEANUP_LOG_FORMAT")
    disable_colors = (
        os.getenv("AUTH0_CLEANUP_LOG_DISABLE_COLORS", "false").lower() == "true"
    )

    return setup_logging(
        level=level,
        log_format=log_format,
        disable_colors=disable_colors,
    )


def init_default_logging() -> None:
    """Initialize default logging configuration if not already configured."""
    if not logging.getLogger(ROOT_LOGGER_NAME).handlers:
        configure_from_env()
