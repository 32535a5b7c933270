import time

from PySide6.QtCore import QThread, Signal

from ...utils.logger import get_logger
from ..errors import RecognitionError
from .recognizer import RecognitionRequest, SpeechRecognizer

logger = get_logger(__name__)

NO_FINAL_RESULT_MESSAGE = "Recognition ended without a final result."


class RecognitionTask(QThread):
    """
    Background thread running one recognition request.

    Every signal carries the task id so receivers can drop events from a
    task that is no longer the active one. At most one of final_result or
    failed is emitted, and nothing is emitted after cancel().

    Signals:
        partial_result: Interim full transcript (task_id, text)
        final_result: Final transcript (task_id, text)
        failed: Recognition failed (task_id, reason)
    """

    partial_result = Signal(int, str)
    final_result = Signal(int, str)
    failed = Signal(int, str)

    def __init__(
        self,
        task_id: int,
        recognizer: SpeechRecognizer,
        request: RecognitionRequest,
        parent=None,
    ):
        super().__init__(parent)
        self.task_id = task_id
        self._recognizer = recognizer
        self._request = request

    def cancel(self) -> None:
        self.requestInterruption()

    @property
    def is_cancelled(self) -> bool:
        return self.isInterruptionRequested()

    def run(self):
        start_time = time.time()
        logger.info(f"Recognition task {self.task_id} started: {self._request.audio_path}")

        try:
            for result in self._recognizer.recognize(
                self._request, self.isInterruptionRequested
            ):
                if self.is_cancelled:
                    break

                if result.is_final:
                    duration = time.time() - start_time
                    logger.info(
                        f"Recognition task {self.task_id} completed in {duration:.2f}s: "
                        f"'{result.text[:50]}{'...' if len(result.text) > 50 else ''}'"
                    )
                    self.final_result.emit(self.task_id, result.text)
                    return

                self.partial_result.emit(self.task_id, result.text)

            if self.is_cancelled:
                logger.info(f"Recognition task {self.task_id} cancelled")
                return

            logger.warning(f"Recognition task {self.task_id}: {NO_FINAL_RESULT_MESSAGE}")
            self.failed.emit(self.task_id, NO_FINAL_RESULT_MESSAGE)

        except RecognitionError as e:
            logger.error(f"Recognition task {self.task_id} failed: {e}")
            if not self.is_cancelled:
                self.failed.emit(self.task_id, str(e))
        except Exception as e:
            logger.exception(f"Recognition task {self.task_id} error: {e}")
            if not self.is_cancelled:
                self.failed.emit(self.task_id, str(e) or type(e).__name__)
