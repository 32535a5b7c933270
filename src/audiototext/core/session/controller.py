"""
Transcription session controller.

Coordinates at most one in-flight recognition attempt and publishes the
session state (transcript, status message, readiness) through Qt signals.
All state is mutated on the thread the controller lives in, which is the
UI thread. Worker callbacks reach it through queued signal connections.
"""

import itertools
from typing import Callable, Optional, Set

from PySide6.QtCore import QObject, Signal, Slot

from ...utils.logger import get_logger
from ..asr.recognition_task import RecognitionTask
from ..asr.recognizer import (
    RecognitionRequest,
    RecognitionService,
    SpeechRecognizer,
)
from ..errors import TranscriptSaveError
from ..output import write_transcript
from .state import (
    AWAITING_AUTHORIZATION_MESSAGE,
    COMPLETED_MESSAGE,
    INITIAL_MESSAGE,
    INITIAL_TRANSCRIPT,
    RECOGNIZER_UNAVAILABLE_MESSAGE,
    RECOGNIZER_UNAVAILABLE_REASON,
    REQUEST_CREATION_FAILED_MESSAGE,
    REQUEST_CREATION_FAILED_REASON,
    TRANSCRIBING_MESSAGE,
    ErrorKind,
    SessionError,
    SessionStatus,
    authorization_outcome,
    recognition_failed_message,
    save_failed_message,
    saved_message,
)

logger = get_logger(__name__)

# Statuses that belong to a transcription attempt. An authorization answer
# received in one of them only re-confirms and leaves the session untouched.
ATTEMPT_STATUSES = {
    SessionStatus.TRANSCRIBING,
    SessionStatus.COMPLETED,
    SessionStatus.FAILED,
}

TaskFactory = Callable[[int, SpeechRecognizer, RecognitionRequest], RecognitionTask]


class TranscriptionController(QObject):
    """
    Owns the lifecycle of one transcription attempt at a time.

    Signals:
        transcript_changed: The transcript buffer was replaced (text)
        status_changed: The human-readable status line changed (message)
        ready_changed: The transcript became (un)available for saving (ready)
        state_changed: The session status changed (SessionStatus)
    """

    transcript_changed = Signal(str)
    status_changed = Signal(str)
    ready_changed = Signal(bool)
    state_changed = Signal(object)

    # Carries authorization answers from any thread onto the controller's thread
    _authorization_received = Signal(object)

    def __init__(
        self,
        service: RecognitionService,
        locale_provider: Optional[Callable[[], Optional[str]]] = None,
        task_factory: Optional[TaskFactory] = None,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self._service = service
        self._locale_provider = locale_provider or (lambda: None)
        self._task_factory = task_factory or self._create_task

        self._status = SessionStatus.IDLE
        self._transcript = INITIAL_TRANSCRIPT
        self._status_message = INITIAL_MESSAGE
        self._is_ready = False
        self._error: Optional[SessionError] = None
        self._last_error: Optional[SessionError] = None

        self._task_ids = itertools.count(1)
        self._active_task: Optional[RecognitionTask] = None
        # Cancelled tasks stay referenced until their thread exits
        self._retired_tasks: Set[RecognitionTask] = set()

        self._authorization_received.connect(self._apply_authorization)

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def transcript(self) -> str:
        return self._transcript

    @property
    def status_message(self) -> str:
        return self._status_message

    @property
    def is_ready(self) -> bool:
        return self._is_ready

    @property
    def error(self) -> Optional[SessionError]:
        """Reason for the current FAILED or authorization status, if any."""
        return self._error

    @property
    def last_error(self) -> Optional[SessionError]:
        """Most recent error of any kind, including failed saves."""
        return self._last_error

    @property
    def active_task_id(self) -> Optional[int]:
        return self._active_task.task_id if self._active_task is not None else None

    @property
    def has_active_task(self) -> bool:
        return self._active_task is not None

    def request_authorization(self) -> None:
        if self._status not in ATTEMPT_STATUSES:
            self._publish(
                status=SessionStatus.AWAITING_AUTHORIZATION,
                message=AWAITING_AUTHORIZATION_MESSAGE,
            )
        logger.info("Requesting speech recognition authorization")
        self._service.request_authorization(self._authorization_received.emit)

    @Slot(object)
    def _apply_authorization(self, value: object) -> None:
        outcome = authorization_outcome(value)
        logger.info(f"Authorization result: {value!r} -> {outcome.status.name}")

        if self._status in ATTEMPT_STATUSES:
            logger.debug(f"Authorization re-confirmed while {self._status.name}")
            return

        error = None
        if outcome.error_kind is not None:
            error = SessionError(outcome.error_kind, outcome.message)
            self._last_error = error
        self._error = error

        self._publish(
            status=outcome.status,
            message=outcome.message,
            transcript=outcome.guidance,
            ready=False if outcome.error_kind is not None else None,
        )

    def start_transcription(self, path: str) -> None:
        self.cancel()

        logger.info(f"Starting transcription of {path}")
        self._error = None
        self._publish(
            status=SessionStatus.TRANSCRIBING,
            transcript="",
            message=TRANSCRIBING_MESSAGE,
            ready=False,
        )

        recognizer = self._make_recognizer()
        if recognizer is None or not recognizer.is_available:
            self._fail(
                ErrorKind.RECOGNIZER_UNAVAILABLE,
                RECOGNIZER_UNAVAILABLE_REASON,
                RECOGNIZER_UNAVAILABLE_MESSAGE,
            )
            return

        request = RecognitionRequest.for_file(path, report_partial_results=True)
        if request is None:
            self._fail(
                ErrorKind.REQUEST_CREATION_FAILED,
                REQUEST_CREATION_FAILED_REASON,
                REQUEST_CREATION_FAILED_MESSAGE,
            )
            return

        task = self._task_factory(next(self._task_ids), recognizer, request)
        task.partial_result.connect(self._on_partial_result)
        task.final_result.connect(self._on_final_result)
        task.failed.connect(self._on_failed)
        task.finished.connect(self._on_thread_finished)
        self._active_task = task
        task.start()
        logger.debug(f"Recognition task {task.task_id} started")

    def cancel(self) -> None:
        task = self._active_task
        if task is None:
            return

        logger.info(f"Cancelling recognition task {task.task_id}")
        task.cancel()
        self._active_task = None
        if task.isRunning():
            self._retired_tasks.add(task)

    def save_transcript(self, path: str) -> bool:
        if not self._is_ready:
            logger.warning("Save requested before transcription completed, ignoring")
            return False

        try:
            target = write_transcript(path, self._transcript)
        except TranscriptSaveError as e:
            self._last_error = SessionError(ErrorKind.FILE_SAVE_FAILED, str(e))
            self._publish(message=save_failed_message(str(e)))
            return False

        self._publish(message=saved_message(target.name))
        return True

    def shutdown(self, timeout_ms: int = 3000) -> None:
        """Cancel outstanding work and wait for worker threads to exit."""
        self.cancel()
        for task in list(self._retired_tasks):
            if not task.wait(timeout_ms):
                logger.warning(f"Recognition task {task.task_id} did not stop in time")
        self._retired_tasks.clear()

    def _make_recognizer(self) -> Optional[SpeechRecognizer]:
        locale = self._locale_provider()
        recognizer = None
        try:
            recognizer = self._service.create_recognizer(locale)
            if recognizer is None and locale is not None:
                logger.info(f"No recognizer for locale {locale}, using default locale")
                recognizer = self._service.create_recognizer(None)
        except Exception as e:
            logger.exception(f"Failed to create recognizer: {e}")
            return None
        return recognizer

    def _create_task(
        self, task_id: int, recognizer: SpeechRecognizer, request: RecognitionRequest
    ) -> RecognitionTask:
        return RecognitionTask(task_id, recognizer, request, parent=self)

    def _is_active(self, task_id: int) -> bool:
        if self._active_task is None or self._active_task.task_id != task_id:
            logger.debug(f"Ignoring event from stale recognition task {task_id}")
            return False
        return True

    @Slot(int, str)
    def _on_partial_result(self, task_id: int, text: str) -> None:
        if not self._is_active(task_id):
            return
        self._publish(transcript=text)

    @Slot(int, str)
    def _on_final_result(self, task_id: int, text: str) -> None:
        if not self._is_active(task_id):
            return
        self._retire_active()
        self._error = None
        self._publish(
            status=SessionStatus.COMPLETED,
            transcript=text,
            message=COMPLETED_MESSAGE,
            ready=True,
        )

    @Slot(int, str)
    def _on_failed(self, task_id: int, reason: str) -> None:
        if not self._is_active(task_id):
            return
        self._retire_active()
        self._fail(
            ErrorKind.RECOGNITION_FAILED, reason, recognition_failed_message(reason)
        )

    def _retire_active(self) -> None:
        task = self._active_task
        self._active_task = None
        if task is not None and task.isRunning():
            self._retired_tasks.add(task)

    @Slot()
    def _on_thread_finished(self) -> None:
        task = self.sender()
        if not isinstance(task, RecognitionTask):
            return
        self._retired_tasks.discard(task)
        if task is not self._active_task:
            task.deleteLater()

    def _fail(self, kind: ErrorKind, reason: str, message: str) -> None:
        logger.error(f"Transcription failed ({kind.name}): {reason}")
        self._error = SessionError(kind, reason)
        self._last_error = self._error
        self._publish(status=SessionStatus.FAILED, message=message, ready=False)

    def _publish(
        self,
        status: Optional[SessionStatus] = None,
        transcript: Optional[str] = None,
        message: Optional[str] = None,
        ready: Optional[bool] = None,
    ) -> None:
        if status is not None and status != self._status:
            logger.debug(f"Session status: {self._status.name} -> {status.name}")
            self._status = status
            self.state_changed.emit(status)
        if transcript is not None and transcript != self._transcript:
            self._transcript = transcript
            self.transcript_changed.emit(transcript)
        if message is not None and message != self._status_message:
            self._status_message = message
            self.status_changed.emit(message)
        if ready is not None and ready != self._is_ready:
            self._is_ready = ready
            self.ready_changed.emit(ready)
