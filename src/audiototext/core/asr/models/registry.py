import json
import os
from dataclasses import dataclass
from typing import List, Optional

from ....utils.logger import get_logger
from ..file_utils import get_models_dir, is_valid_model_dir

logger = get_logger(__name__)

MULTILINGUAL = "multi"


@dataclass
class ModelInfo:
    id: str
    name: str
    type: str
    language: str = MULTILINGUAL

    @property
    def is_streaming(self) -> bool:
        return self.type == "streaming-transducer"

    def supports_language(self, language: str) -> bool:
        return self.language in (MULTILINGUAL, language.lower())


def load_models() -> List[ModelInfo]:
    json_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "models.json")
    try:
        with open(json_path, "r", encoding="utf-8") as f:
            return [ModelInfo(**item) for item in json.load(f)]
    except (OSError, ValueError, TypeError) as e:
        logger.error(f"Error loading models.json: {e}")
        return []


AVAILABLE_MODELS: List[ModelInfo] = load_models()


def get_model_by_id(model_id: str) -> Optional[ModelInfo]:
    for model in AVAILABLE_MODELS:
        if model.id == model_id:
            return model
    return None


def is_model_downloaded(model_id: str) -> bool:
    model = get_model_by_id(model_id)
    if model is None:
        return False
    return is_valid_model_dir(os.path.join(get_models_dir(), model_id), model.type)


def get_installed_models() -> List[ModelInfo]:
    return [model for model in AVAILABLE_MODELS if is_model_downloaded(model.id)]


def find_model_for_language(language: str) -> Optional[ModelInfo]:
    """Pick an installed model for a language, dedicated models before multilingual ones."""
    installed = [m for m in get_installed_models() if m.supports_language(language)]
    dedicated = [m for m in installed if m.language != MULTILINGUAL]
    candidates = dedicated or installed
    return candidates[0] if candidates else None
