import os
from typing import Dict, Optional

from PySide6.QtCore import QThreadPool

from ...utils.logger import get_logger
from ..settings import Settings, get_settings
from ..settings.config import SPEECH_RESTRICTED_ENV
from .backends import SherpaOnnxRecognizer, is_engine_installed, language_from_locale
from .models.registry import ModelInfo, find_model_for_language, get_model_by_id
from .recognizer import (
    AuthorizationHandler,
    AuthorizationStatus,
    RecognitionService,
    SpeechRecognizer,
)

logger = get_logger(__name__)


class LocalRecognitionService(RecognitionService):
    """
    On-device recognition backed by sherpa-onnx models.

    Authorization is the user's persisted consent, unless the engine is
    missing or disabled by the environment, which counts as restricted.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        thread_pool: Optional[QThreadPool] = None,
    ):
        self._settings = settings or get_settings()
        self._thread_pool = thread_pool or QThreadPool.globalInstance()
        self._recognizers: Dict[tuple[str, str], SherpaOnnxRecognizer] = {}

    def authorization_status(self) -> AuthorizationStatus:
        if os.environ.get(SPEECH_RESTRICTED_ENV):
            return AuthorizationStatus.RESTRICTED
        if not is_engine_installed():
            logger.warning("sherpa-onnx is not installed, speech recognition restricted")
            return AuthorizationStatus.RESTRICTED

        consent = self._settings.speech_recognition_consent
        if consent is None:
            return AuthorizationStatus.NOT_DETERMINED
        return AuthorizationStatus.AUTHORIZED if consent else AuthorizationStatus.DENIED

    def request_authorization(self, handler: AuthorizationHandler) -> None:
        def check():
            status = self.authorization_status()
            logger.debug(f"Authorization check finished: {status.name}")
            handler(status)

        self._thread_pool.start(check)

    def create_recognizer(self, locale: Optional[str]) -> Optional[SpeechRecognizer]:
        if self.authorization_status() != AuthorizationStatus.AUTHORIZED:
            logger.info("Speech recognition not authorized, no recognizer available")
            return None

        model = self._resolve_model(locale)
        if model is None:
            logger.info(f"No speech recognition model for locale {locale!r}")
            return None

        language = language_from_locale(locale)
        key = (model.id, language)
        recognizer = self._recognizers.get(key)
        if recognizer is None:
            recognizer = SherpaOnnxRecognizer(
                model,
                locale=locale,
                chunk_max_seconds=self._settings.chunk_max_seconds,
            )
            self._recognizers[key] = recognizer
        return recognizer

    def _resolve_model(self, locale: Optional[str]) -> Optional[ModelInfo]:
        if locale is None:
            return get_model_by_id(self._settings.model_id)

        language = language_from_locale(locale)
        override = self._settings.model_for_language(language)
        if override:
            return get_model_by_id(override)
        return find_model_for_language(language)

    def unload(self) -> None:
        for recognizer in self._recognizers.values():
            recognizer.unload()
        self._recognizers.clear()
