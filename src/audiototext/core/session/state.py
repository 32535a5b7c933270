from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, NamedTuple, Optional

from ..asr.recognizer import AuthorizationStatus


class SessionStatus(Enum):
    IDLE = auto()
    AWAITING_AUTHORIZATION = auto()
    AUTHORIZATION_DENIED = auto()
    AUTHORIZATION_RESTRICTED = auto()
    AUTHORIZATION_NOT_DETERMINED = auto()
    AUTHORIZATION_UNKNOWN = auto()
    TRANSCRIBING = auto()
    COMPLETED = auto()
    FAILED = auto()


class ErrorKind(Enum):
    AUTHORIZATION_DENIED = auto()
    AUTHORIZATION_RESTRICTED = auto()
    AUTHORIZATION_NOT_DETERMINED = auto()
    AUTHORIZATION_UNKNOWN = auto()
    RECOGNIZER_UNAVAILABLE = auto()
    REQUEST_CREATION_FAILED = auto()
    RECOGNITION_FAILED = auto()
    FILE_SAVE_FAILED = auto()


@dataclass(frozen=True)
class SessionError:
    kind: ErrorKind
    reason: str


INITIAL_TRANSCRIPT = "Transcription will appear here..."
INITIAL_MESSAGE = "Ready. Please select an audio file."

AWAITING_AUTHORIZATION_MESSAGE = "Requesting speech recognition authorization..."
TRANSCRIBING_MESSAGE = "Transcribing..."
COMPLETED_MESSAGE = "Transcription finished successfully."
RECOGNIZER_UNAVAILABLE_REASON = "recognizer unavailable"
RECOGNIZER_UNAVAILABLE_MESSAGE = (
    "Speech recognizer is not available for the current locale."
)
REQUEST_CREATION_FAILED_REASON = "request creation failed"
REQUEST_CREATION_FAILED_MESSAGE = (
    "Unable to create recognition request from the audio file."
)
DENIED_GUIDANCE = (
    "Please enable speech recognition via Speech > Speech Recognition Access... "
    "to transcribe audio files."
)


def recognition_failed_message(reason: str) -> str:
    return f"Transcription failed: {reason}"


def saved_message(file_name: str) -> str:
    return f"Transcription saved successfully to {file_name}"


def save_failed_message(reason: str) -> str:
    return f"Error saving file: {reason}"


class AuthorizationOutcome(NamedTuple):
    status: SessionStatus
    message: str
    error_kind: Optional[ErrorKind] = None
    guidance: Optional[str] = None


AUTHORIZATION_OUTCOMES: Dict[AuthorizationStatus, AuthorizationOutcome] = {
    AuthorizationStatus.AUTHORIZED: AuthorizationOutcome(
        SessionStatus.IDLE,
        "Authorization granted. Ready to transcribe.",
    ),
    AuthorizationStatus.DENIED: AuthorizationOutcome(
        SessionStatus.AUTHORIZATION_DENIED,
        "Speech recognition authorization denied.",
        ErrorKind.AUTHORIZATION_DENIED,
        DENIED_GUIDANCE,
    ),
    AuthorizationStatus.RESTRICTED: AuthorizationOutcome(
        SessionStatus.AUTHORIZATION_RESTRICTED,
        "Speech recognition restricted on this device.",
        ErrorKind.AUTHORIZATION_RESTRICTED,
    ),
    AuthorizationStatus.NOT_DETERMINED: AuthorizationOutcome(
        SessionStatus.AUTHORIZATION_NOT_DETERMINED,
        "Speech recognition not yet authorized.",
        ErrorKind.AUTHORIZATION_NOT_DETERMINED,
    ),
}

UNKNOWN_AUTHORIZATION_OUTCOME = AuthorizationOutcome(
    SessionStatus.AUTHORIZATION_UNKNOWN,
    "Speech recognition authorization status is unknown.",
    ErrorKind.AUTHORIZATION_UNKNOWN,
)


def authorization_outcome(value: object) -> AuthorizationOutcome:
    if isinstance(value, AuthorizationStatus):
        return AUTHORIZATION_OUTCOMES.get(value, UNKNOWN_AUTHORIZATION_OUTCOME)
    return UNKNOWN_AUTHORIZATION_OUTCOME
