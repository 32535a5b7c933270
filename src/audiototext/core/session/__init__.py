from .controller import TranscriptionController
from .state import ErrorKind, SessionError, SessionStatus

__all__ = [
    "TranscriptionController",
    "ErrorKind",
    "SessionError",
    "SessionStatus",
]
