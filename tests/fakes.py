"""Test doubles for the recognition capability and recognition tasks."""

from PySide6.QtCore import QObject, Signal

from audiototext.core.asr import (
    AuthorizationStatus,
    RecognitionService,
    SpeechRecognizer,
)


class FakeRecognizer(SpeechRecognizer):
    """Replays a scripted list of results; exceptions in the script are raised."""

    def __init__(self, script=None, available=True, locale=None, gate=None):
        super().__init__(locale)
        self.script = list(script or [])
        self.available = available
        self.gate = gate
        self.requests = []
        self.stopped_on_cancel = False

    @property
    def is_available(self):
        return self.available

    def recognize(self, request, is_cancelled):
        self.requests.append(request)
        for item in self.script:
            if self.gate is not None:
                self.gate.wait(timeout=5)
            if is_cancelled():
                self.stopped_on_cancel = True
                return
            if isinstance(item, Exception):
                raise item
            yield item


class FakeService(RecognitionService):
    """Answers authorization synchronously and hands out preset recognizers."""

    def __init__(self, authorization=AuthorizationStatus.AUTHORIZED, recognizer=None):
        self.authorization = authorization
        self.recognizer = recognizer
        self.requested_locales = []
        self.authorization_requests = 0

    def request_authorization(self, handler):
        self.authorization_requests += 1
        handler(self.authorization)

    def create_recognizer(self, locale):
        self.requested_locales.append(locale)
        return self.recognizer


class FakeTask(QObject):
    """Stands in for RecognitionTask so tests can emit its signals directly."""

    partial_result = Signal(int, str)
    final_result = Signal(int, str)
    failed = Signal(int, str)
    finished = Signal()

    def __init__(self, task_id, recognizer, request):
        super().__init__()
        self.task_id = task_id
        self.recognizer = recognizer
        self.request = request
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def isRunning(self):
        return self.started and not self.cancelled

    def wait(self, timeout_ms=0):
        return True
