import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List, Optional

from platformdirs import user_log_path

LOGGER_NAME = "audiototext"

_logger_instance: Optional[logging.Logger] = None
# Handlers added by get_logger. Other handlers on the logger are left alone.
_app_handlers: List[logging.Handler] = []


def get_log_dir() -> Path:
    return user_log_path(LOGGER_NAME, appauthor=False, ensure_exists=True)


def get_log_file() -> Path:
    return get_log_dir() / "app.log"


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    global _logger_instance

    if name.startswith("src.audiototext."):
        name = name.replace("src.audiototext.", "audiototext.", 1)
    elif name == "src.audiototext":
        name = LOGGER_NAME

    if _logger_instance is None:
        from ..core.settings.config import LOG_TO_CONSOLE, get_log_level

        root_logger = logging.getLogger(LOGGER_NAME)

        if _app_handlers:
            _logger_instance = root_logger
        else:
            level = get_log_level()
            root_logger.setLevel(level)

            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )

            file_handler = RotatingFileHandler(
                get_log_file(),
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
            _app_handlers.append(file_handler)

            if LOG_TO_CONSOLE:
                console_handler = logging.StreamHandler(sys.stderr)
                console_handler.setLevel(level)
                console_handler.setFormatter(formatter)
                root_logger.addHandler(console_handler)
                _app_handlers.append(console_handler)

            root_logger.propagate = False

            _logger_instance = root_logger

    if name == LOGGER_NAME:
        return _logger_instance

    return logging.getLogger(name)


def install_qt_message_handler() -> None:
    """Route Qt's own warnings into the application log."""
    from PySide6.QtCore import QtMsgType, qInstallMessageHandler

    qt_logger = get_logger(f"{LOGGER_NAME}.qt")
    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def handler(msg_type, context, message):
        qt_logger.log(levels.get(msg_type, logging.WARNING), message)

    qInstallMessageHandler(handler)


def shutdown_logging() -> None:
    """Shutdown logging and close all file handlers to release file locks."""
    global _logger_instance
    root_logger = logging.getLogger(LOGGER_NAME)
    for handler in _app_handlers:
        handler.close()
        root_logger.removeHandler(handler)
    _app_handlers.clear()
    _logger_instance = None
