"""Settings and persistence utilities."""

from .settings import (
    DEFAULT_MODEL_ID,
    Settings,
    get_config_dir,
    get_data_dir,
    get_settings,
)

__all__ = [
    "DEFAULT_MODEL_ID",
    "Settings",
    "get_config_dir",
    "get_data_dir",
    "get_settings",
]
