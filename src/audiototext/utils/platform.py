"""Platform-specific utilities for cross-platform compatibility."""

import platform
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QLocale, QStandardPaths

from .logger import get_logger

logger = get_logger(__name__)


def get_platform() -> str:
    system = platform.system()
    if system == "Darwin":
        return "macos"
    return system.lower()


def get_system_locale() -> Optional[str]:
    """Return the user's locale as e.g. 'en_US', or None for the C locale."""
    name = QLocale.system().name()
    if not name or name == "C":
        return None
    return name


def get_documents_dir() -> str:
    location = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.DocumentsLocation
    )
    if location and Path(location).is_dir():
        return location
    return str(Path.home())


def get_start_dir(remembered: Optional[str]) -> str:
    if remembered and Path(remembered).is_dir():
        return remembered
    if remembered:
        logger.debug(f"Remembered directory {remembered} no longer exists")
    return get_documents_dir()
