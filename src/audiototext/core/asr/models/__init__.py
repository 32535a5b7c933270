from .registry import (
    AVAILABLE_MODELS,
    MULTILINGUAL,
    ModelInfo,
    find_model_for_language,
    get_installed_models,
    get_model_by_id,
    is_model_downloaded,
)

__all__ = [
    "ModelInfo",
    "AVAILABLE_MODELS",
    "MULTILINGUAL",
    "find_model_for_language",
    "get_model_by_id",
    "is_model_downloaded",
    "get_installed_models",
]
