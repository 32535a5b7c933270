"""
Tests for logging infrastructure.

Verifies logger configuration, file creation, and Qt message routing.
"""

import logging
from logging.handlers import RotatingFileHandler
from unittest.mock import patch

import pytest
from PySide6.QtCore import QtMsgType

import audiototext.utils.logger as logger_module
from audiototext.utils.logger import (
    LOGGER_NAME,
    get_logger,
    install_qt_message_handler,
    shutdown_logging,
)


@pytest.fixture
def fresh_logging(tmp_path):
    """Re-initialize logging into a temporary directory."""
    shutdown_logging()
    with patch.object(logger_module, "get_log_dir", return_value=tmp_path):
        yield tmp_path
        shutdown_logging()


class TestLoggerConfiguration:
    """Tests for logger setup and configuration."""

    def test_get_logger_returns_logger(self):
        """Test get_logger returns a Logger instance."""
        logger = get_logger("test")
        assert isinstance(logger, logging.Logger)

    def test_get_logger_singleton(self):
        """Test get_logger returns same instance for root logger."""
        logger1 = get_logger(LOGGER_NAME)
        logger2 = get_logger(LOGGER_NAME)
        assert logger1 is logger2

    def test_src_prefixed_names_are_normalized(self):
        logger = get_logger("src.audiototext.core.session.controller")
        assert logger.name == "audiototext.core.session.controller"

    def test_logger_writes_to_file(self, fresh_logging):
        """Test logger writes messages to file."""
        logger = get_logger("audiototext.tests")
        logger.info("Test message")

        log_file = fresh_logging / "app.log"
        assert log_file.exists()

        content = log_file.read_text(encoding="utf-8")
        assert "Test message" in content
        assert "INFO" in content

    def test_file_handler_rotates(self, fresh_logging):
        root = get_logger(LOGGER_NAME)
        handlers = [h for h in root.handlers if isinstance(h, RotatingFileHandler)]

        assert len(handlers) == 1
        assert handlers[0].maxBytes == 10 * 1024 * 1024
        assert handlers[0].backupCount == 5

    def test_file_handler_added_next_to_foreign_handler(self, fresh_logging):
        root = logging.getLogger(LOGGER_NAME)
        foreign = logging.NullHandler()
        root.addHandler(foreign)
        try:
            get_logger("audiototext.tests").warning("Still logged")

            content = (fresh_logging / "app.log").read_text(encoding="utf-8")
            assert "Still logged" in content
            assert foreign in root.handlers
        finally:
            root.removeHandler(foreign)

    def test_shutdown_removes_handlers(self, fresh_logging):
        root = get_logger(LOGGER_NAME)
        foreign = logging.NullHandler()
        root.addHandler(foreign)
        try:
            shutdown_logging()

            assert not any(isinstance(h, RotatingFileHandler) for h in root.handlers)
            assert foreign in root.handlers
        finally:
            root.removeHandler(foreign)


class TestQtMessageHandler:
    def test_qt_warnings_are_logged(self):
        with patch("PySide6.QtCore.qInstallMessageHandler") as mock_install:
            install_qt_message_handler()

        handler = mock_install.call_args.args[0]
        qt_logger = logging.getLogger(f"{LOGGER_NAME}.qt")
        with patch.object(qt_logger, "log") as mock_log:
            handler(QtMsgType.QtWarningMsg, None, "QFont::setPointSize: Point size <= 0")

        mock_log.assert_called_once_with(
            logging.WARNING, "QFont::setPointSize: Point size <= 0"
        )
