"""
Interfaces of the speech recognition capability.

The session controller only talks to these types. Engines implement
SpeechRecognizer, and a RecognitionService hands out recognizers per
locale and answers authorization requests.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Iterator, Optional


class AuthorizationStatus(Enum):
    AUTHORIZED = auto()
    DENIED = auto()
    RESTRICTED = auto()
    NOT_DETERMINED = auto()


# Receives an AuthorizationStatus, or whatever unexpected value a service reports
AuthorizationHandler = Callable[[object], None]


@dataclass(frozen=True)
class RecognitionResult:
    # Best-effort transcript of everything heard so far, not a delta
    text: str
    is_final: bool = False


@dataclass(frozen=True)
class RecognitionRequest:
    audio_path: str
    report_partial_results: bool = True

    @classmethod
    def for_file(
        cls, path: Optional[str], report_partial_results: bool = True
    ) -> Optional["RecognitionRequest"]:
        """Build a request for a local file, or None if there is no such file."""
        if not path or not os.path.isfile(path):
            return None
        return cls(
            audio_path=os.path.abspath(path),
            report_partial_results=report_partial_results,
        )


class SpeechRecognizer(ABC):
    def __init__(self, locale: Optional[str] = None):
        self.locale = locale

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the recognizer can currently serve requests."""

    @abstractmethod
    def recognize(
        self,
        request: RecognitionRequest,
        is_cancelled: Callable[[], bool],
    ) -> Iterator[RecognitionResult]:
        """
        Recognize speech in the requested audio file.

        Yields partial results (if requested) followed by exactly one final
        result. Stops early without a final result once is_cancelled()
        returns True.

        Raises:
            RecognitionError: If the audio cannot be decoded or recognized.
        """


class RecognitionService(ABC):
    @abstractmethod
    def request_authorization(self, handler: AuthorizationHandler) -> None:
        """Ask for permission; handler may be called from any thread."""

    @abstractmethod
    def create_recognizer(self, locale: Optional[str]) -> Optional[SpeechRecognizer]:
        """Return a recognizer for the locale (None means default locale)."""
