# ABOUTME: Logging configuration, progress tracking and logger utilities
# ABOUTME: structlog loggers for the code, loguru sinks for the output

from .config import LoggingMode, configure_logging, configure_structlog, get_logging_status
from .progress import PageProgressTracker, create_page_progress
from .utils import (
    LogContext,
    get_logger,
    with_entity_context,
    with_operation_context,
    with_pipeline_context,
)

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "configure_structlog",
    "get_logging_status",
    # Progress
    "PageProgressTracker",
    "create_page_progress",
    # Utilities
    "LogContext",
    "get_logger",
    "with_entity_context",
    "with_operation_context",
    "with_pipeline_context",
]
