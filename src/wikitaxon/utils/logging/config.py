# ABOUTME: Simplified logging configuration using loguru, with structlog events routed into it
# ABOUTME: Dual-mode operation: interactive CLI vs production JSON logging

import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

_LEVELS = {"DEBUG": logging.DEBUG, "INFO": logging.INFO, "WARNING": logging.WARNING, "ERROR": logging.ERROR}


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv("WIKITAXON_LOG_MODE")
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Route warnings into logging and keep them quiet."""
    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


def _to_loguru(_, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor handing the event to loguru, which owns the sinks."""
    event = event_dict.pop("event", "")
    name = event_dict.pop("logger", None) or "wikitaxon"
    level = method_name.upper()
    if level in ("EXCEPTION", "CRITICAL"):
        level = "ERROR"
    elif level not in _LEVELS:
        level = "INFO"
    logger.bind(**{**event_dict, "name": name}).log(level, "{} {}", event, _format_context(event_dict))
    raise structlog.DropEvent


def _format_context(context: dict[str, Any]) -> str:
    return " ".join(f"{key}={value!r}" for key, value in context.items())


def _add_logger_name(bound_logger, _, event_dict: dict[str, Any]) -> dict[str, Any]:
    name = getattr(bound_logger, "name", None)
    if name and "logger" not in event_dict:
        event_dict["logger"] = name
    return event_dict


def configure_structlog(log_level: str = "INFO") -> None:
    """Filter structlog events by level and forward them to loguru."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _add_logger_name,
            _to_loguru,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS.get(log_level.upper(), logging.INFO)),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom log file path, uses default if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger().setLevel(numeric_level)

    configure_structlog(log_level)

    # Remove default loguru handler
    logger.remove()
    logger.configure(extra={"name": "wikitaxon"})

    if mode == LoggingMode.INTERACTIVE:
        # Interactive mode: logs to files, keeps the console free for progress output
        log_dir = Path("logs")
        try:
            log_dir.mkdir(exist_ok=True)
        except OSError:
            mode = LoggingMode.PRODUCTION

        if mode == LoggingMode.PRODUCTION:
            logger.add(
                sys.stderr, level=log_level, format="{time} | {level} | {extra[name]} | {message}", serialize=True
            )
            return

        log_file_path = log_file or str(log_dir / "wikitaxon.log")

        # Human-readable logs
        logger.add(
            log_file_path,
            level=log_level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]} - {message}",
            rotation="100 MB",
            retention="7 days",
        )

        # JSON logs for machine processing
        logger.add(
            log_dir / "wikitaxon.json",
            level=log_level,
            format="{time} | {level} | {extra[name]} | {message}",
            serialize=True,
            rotation="100 MB",
            retention="7 days",
        )

        # Errors only
        logger.add(
            log_dir / "errors.log",
            level="ERROR",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[name]} - {message}",
            backtrace=True,
            diagnose=True,
        )
    else:
        # Production mode: JSON to stderr, stdout stays free for command output
        logger.add(sys.stderr, level=log_level, format="{time} | {level} | {extra[name]} | {message}", serialize=True)


def get_logging_status() -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = detect_logging_mode()
    log_dir = Path("logs")

    return {
        "mode": mode,
        "log_directory": str(log_dir.absolute()) if log_dir.exists() else None,
        "log_files": {
            "main": str(log_dir / "wikitaxon.log") if mode == LoggingMode.INTERACTIVE else None,
            "json": str(log_dir / "wikitaxon.json") if mode == LoggingMode.INTERACTIVE else None,
            "errors": str(log_dir / "errors.log") if mode == LoggingMode.INTERACTIVE else None,
        },
        "structlog_configured": structlog.is_configured(),
    }
