from .backends import SherpaOnnxRecognizer, is_engine_installed, language_from_locale
from .recognition_task import RecognitionTask
from .recognizer import (
    AuthorizationHandler,
    AuthorizationStatus,
    RecognitionRequest,
    RecognitionResult,
    RecognitionService,
    SpeechRecognizer,
)
from .service import LocalRecognitionService

__all__ = [
    "AuthorizationHandler",
    "AuthorizationStatus",
    "RecognitionRequest",
    "RecognitionResult",
    "RecognitionService",
    "SpeechRecognizer",
    "SherpaOnnxRecognizer",
    "LocalRecognitionService",
    "RecognitionTask",
    "is_engine_installed",
    "language_from_locale",
]
