# ABOUTME: Tests for logging configuration module
# ABOUTME: Validates dual-mode loguru setup and the structlog to loguru bridge

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog
from loguru import logger

from wikitaxon.utils.logging import get_logger
from wikitaxon.utils.logging.config import (
    LoggingMode,
    configure_logging,
    configure_structlog,
    detect_logging_mode,
    get_logging_status,
)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger.remove()
    structlog.reset_defaults()
    logging.getLogger().setLevel(logging.WARNING)
    logging.captureWarnings(False)


class TestLoggingMode:
    """Test the LoggingMode constants."""

    def test_logging_mode_constants(self):
        """Test that logging mode constants are defined correctly."""
        assert LoggingMode.INTERACTIVE == "interactive"
        assert LoggingMode.PRODUCTION == "production"


class TestDetectLoggingMode:
    """Test logging mode detection logic."""

    def test_detect_mode_from_env_interactive(self):
        """Test detection of interactive mode from environment variable."""
        with patch.dict(os.environ, {"WIKITAXON_LOG_MODE": "interactive"}):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_env_production(self):
        """Test detection of production mode from environment variable."""
        with patch.dict(os.environ, {"WIKITAXON_LOG_MODE": "PRODUCTION"}):
            assert detect_logging_mode() == LoggingMode.PRODUCTION

    def test_detect_mode_from_env_invalid(self):
        """Test fallback when environment variable has invalid value."""
        with (
            patch.dict(os.environ, {"WIKITAXON_LOG_MODE": "invalid"}),
            patch("sys.stdout.isatty", return_value=True),
        ):
            assert detect_logging_mode() == LoggingMode.INTERACTIVE

    def test_detect_mode_from_tty_production(self):
        """Test detection of production mode from non-TTY."""
        with patch.dict(os.environ, {}, clear=True), patch("sys.stdout.isatty", return_value=False):
            assert detect_logging_mode() == LoggingMode.PRODUCTION


class TestConfigureLogging:
    """Test logging configuration functionality."""

    def test_configure_interactive_mode(self, tmp_path, monkeypatch):
        """Test that interactive mode writes to the logs directory."""
        monkeypatch.chdir(tmp_path)

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO")
        get_logger("wikitaxon.test").info("Interactive message", answer=42)
        logger.complete()

        text = (tmp_path / "logs" / "wikitaxon.log").read_text(encoding="utf-8")
        assert "Interactive message" in text
        assert "answer=42" in text
        assert (tmp_path / "logs" / "wikitaxon.json").exists()

    def test_configure_custom_log_file(self, tmp_path, monkeypatch):
        """Test configuration with custom log file."""
        monkeypatch.chdir(tmp_path)
        custom_log_file = tmp_path / "custom.log"

        configure_logging(mode=LoggingMode.INTERACTIVE, log_level="INFO", log_file=str(custom_log_file))
        get_logger("wikitaxon.test").warning("Custom file message")

        assert "Custom file message" in custom_log_file.read_text(encoding="utf-8")

    def test_configure_custom_log_level(self):
        """Test configuration with custom log level."""
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG
        assert structlog.is_configured()

    def test_warnings_are_captured(self):
        """Test that Python warnings are routed into logging and kept quiet."""
        configure_logging(mode=LoggingMode.PRODUCTION, log_level="INFO")

        assert logging.getLogger("py.warnings").level == logging.ERROR


class TestStructlogBridge:
    """Test forwarding structlog events to loguru."""

    def test_events_reach_loguru(self):
        """Test that message, context and logger name are forwarded."""
        messages = []
        configure_structlog("INFO")
        logger.remove()
        logger.add(messages.append, level="DEBUG", format="{message}")

        get_logger("wikitaxon.extraction").info("Category extraction finished", pages=2)

        (message,) = messages
        assert "Category extraction finished" in message
        assert "pages=2" in message
        assert message.record["extra"]["name"] == "wikitaxon.extraction"
        assert message.record["extra"]["pages"] == 2

    def test_level_filtering(self):
        """Test that events below the configured level are dropped."""
        messages = []
        configure_structlog("WARNING")
        logger.remove()
        logger.add(messages.append, level="DEBUG", format="{message}")

        log = get_logger("wikitaxon.test")
        log.info("Hidden")
        log.warning("Shown")

        assert len(messages) == 1
        assert message_level(messages[0]) == "WARNING"


def message_level(message) -> str:
    return message.record["level"].name


class TestGetLoggingStatus:
    """Test logging status reporting."""

    def test_get_status_interactive_mode(self, tmp_path, monkeypatch):
        """Test status reporting for interactive mode."""
        monkeypatch.chdir(tmp_path)
        Path("logs").mkdir()

        with patch("wikitaxon.utils.logging.config.detect_logging_mode", return_value=LoggingMode.INTERACTIVE):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.INTERACTIVE
        assert status["log_directory"] is not None
        assert status["log_files"]["main"] == str(Path("logs") / "wikitaxon.log")

    def test_get_status_production_mode(self, tmp_path, monkeypatch):
        """Test status reporting for production mode."""
        monkeypatch.chdir(tmp_path)

        with patch("wikitaxon.utils.logging.config.detect_logging_mode", return_value=LoggingMode.PRODUCTION):
            status = get_logging_status()

        assert status["mode"] == LoggingMode.PRODUCTION
        assert status["log_directory"] is None
        assert all(value is None for value in status["log_files"].values())
