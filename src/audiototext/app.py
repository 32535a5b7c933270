"""Application runtime."""

import signal
import sys
from typing import Optional

from PySide6.QtCore import QObject, QTimer
from PySide6.QtWidgets import QApplication

from audiototext import __app_name__, __version__
from audiototext.core.asr import LocalRecognitionService, RecognitionService
from audiototext.core.session import TranscriptionController
from audiototext.core.settings import Settings, get_settings
from audiototext.ui.consent_dialog import SpeechConsentDialog
from audiototext.ui.main_window import TranscriberWindow
from audiototext.utils.logger import (
    get_logger,
    install_qt_message_handler,
    shutdown_logging,
)
from audiototext.utils.platform import get_platform, get_system_locale

logger = get_logger(__name__)


class AudioToTextApp(QObject):

    def __init__(
        self,
        settings: Optional[Settings] = None,
        service: Optional[RecognitionService] = None,
    ):
        super().__init__()

        self._settings = settings or get_settings()
        self._service = service or LocalRecognitionService(self._settings)
        self._controller = TranscriptionController(
            self._service, locale_provider=self._current_locale, parent=self
        )
        self._window = TranscriberWindow(self._controller, self._settings)
        self._consent_prompted = False

        self._window.appeared.connect(self._on_window_appeared)
        self._window.consent_requested.connect(self._on_consent_requested)

    @property
    def controller(self) -> TranscriptionController:
        return self._controller

    @property
    def window(self) -> TranscriberWindow:
        return self._window

    def _current_locale(self) -> Optional[str]:
        return self._settings.locale or get_system_locale()

    def _on_window_appeared(self) -> None:
        # Let the window paint before a modal prompt can appear
        QTimer.singleShot(0, self._request_initial_authorization)

    def _request_initial_authorization(self) -> None:
        if self._settings.speech_recognition_consent is None and not self._consent_prompted:
            self._consent_prompted = True
            self._prompt_for_consent()
        self._controller.request_authorization()

    def _on_consent_requested(self) -> None:
        self._prompt_for_consent()
        self._controller.request_authorization()

    def _prompt_for_consent(self) -> None:
        dialog = SpeechConsentDialog(
            current=self._settings.speech_recognition_consent, parent=self._window
        )
        dialog.exec()
        if dialog.decision is None:
            logger.info("Speech recognition consent prompt dismissed")
            return

        self._settings.speech_recognition_consent = dialog.decision
        try:
            self._settings.save()
        except OSError as e:
            logger.error(f"Could not save speech recognition consent: {e}")

    def run(self) -> None:
        logger.info(f"Starting {__app_name__} v{__version__} on {get_platform()}")
        logger.info(
            f"Settings: model={self._settings.model_id}, locale={self._current_locale()}"
        )
        self._window.show()
        logger.info("Application initialization complete")

    def shutdown(self) -> None:
        logger.info("Shutting down application")
        self._controller.shutdown()
        if isinstance(self._service, LocalRecognitionService):
            self._service.unload()
        logger.info("Application shutdown complete")


def main():
    app = QApplication(sys.argv)
    app.setApplicationName(__app_name__)
    app.setApplicationVersion(__version__)
    install_qt_message_handler()
    signal.signal(signal.SIGINT, lambda *args: QApplication.quit())

    audio_to_text = AudioToTextApp()
    app.aboutToQuit.connect(audio_to_text.shutdown)
    audio_to_text.run()

    exit_code = app.exec()
    shutdown_logging()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
