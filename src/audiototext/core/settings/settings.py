"""
Settings management with JSON persistence.

Handles loading, saving, and validating application settings.
Uses platformdirs for cross-platform directory resolution.
"""

import json
from pathlib import Path
from typing import Dict, Optional, Tuple

from platformdirs import user_config_path, user_data_path
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ...utils.logger import get_logger

logger = get_logger(__name__)

APP_NAME = "audiototext"

DEFAULT_MODEL_ID = "sherpa-onnx-whisper-tiny"


def get_config_dir() -> Path:
    return user_config_path(APP_NAME, ensure_exists=True)


def get_data_dir() -> Path:
    return user_data_path(APP_NAME, ensure_exists=True)


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=False)

    model_id: str = DEFAULT_MODEL_ID
    # Overrides the system locale when set, e.g. "de_DE"
    locale: Optional[str] = None
    # Language code -> model id, takes precedence over the registry lookup
    locale_models: Dict[str, str] = Field(default_factory=dict)
    chunk_max_seconds: float = Field(default=30.0, ge=5.0, le=120.0)

    # None until the user has answered the consent prompt
    speech_recognition_consent: Optional[bool] = None

    last_open_dir: Optional[str] = None
    last_save_dir: Optional[str] = None
    window_geometry: Optional[Tuple[int, int, int, int]] = None

    @field_validator("model_id")
    @classmethod
    def model_id_not_empty(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError("model_id must be a non-empty string")
        return v

    @field_validator("locale")
    @classmethod
    def locale_not_blank(cls, v):
        if v is not None and (not isinstance(v, str) or not v.strip()):
            raise ValueError("locale must be a non-empty string or null")
        return v

    @classmethod
    def load(cls) -> "Settings":
        config_file = get_config_dir() / "settings.json"

        if not config_file.exists():
            return cls()

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                data = json.load(f)

            if not isinstance(data, dict):
                raise TypeError(f"settings root must be an object, got {type(data)}")

            valid_keys = cls.model_fields.keys()
            filtered_data = {k: v for k, v in data.items() if k in valid_keys}

            return cls._load_with_fallbacks(filtered_data)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(
                f"Could not load settings: {e}. Using defaults.", exc_info=True
            )
            return cls()

    @classmethod
    def _load_with_fallbacks(cls, data: dict) -> "Settings":
        """Load settings with field-level fallback to defaults on validation errors."""
        defaults = cls()
        result_data = {}

        for field_name in cls.model_fields:
            if field_name in data:
                try:
                    validated = cls.model_validate(
                        {**defaults.model_dump(), field_name: data[field_name]}
                    )
                    result_data[field_name] = getattr(validated, field_name)
                except Exception:
                    default_val = getattr(defaults, field_name)
                    logger.warning(
                        f"Invalid {field_name} {data[field_name]!r}, resetting to {default_val}"
                    )
                    result_data[field_name] = default_val
            else:
                result_data[field_name] = getattr(defaults, field_name)

        return cls.model_construct(**result_data)

    def save(self) -> None:
        config_file = get_config_dir() / "settings.json"

        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=2)

    def reset_to_defaults(self) -> None:
        default = Settings()
        for key, value in default.model_dump().items():
            setattr(self, key, value)

    def model_for_language(self, language: str) -> Optional[str]:
        return self.locale_models.get(language.lower())


_settings_instance: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings.load()
    return _settings_instance
