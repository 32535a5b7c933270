"""Tests for the main window and the consent dialog."""

from unittest.mock import patch

import pytest
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QFileDialog

from audiototext.core.session import SessionStatus, TranscriptionController
from audiototext.core.settings import Settings
from audiototext.ui import SpeechConsentDialog, TranscriberWindow
from fakes import FakeRecognizer, FakeService


@pytest.fixture
def settings():
    return Settings(speech_recognition_consent=True)


@pytest.fixture
def controller(fake_tasks):
    controller = TranscriptionController(
        FakeService(recognizer=FakeRecognizer()), task_factory=fake_tasks
    )
    yield controller
    controller.shutdown()


@pytest.fixture
def window(qtbot, controller, settings):
    window = TranscriberWindow(controller, settings)
    qtbot.addWidget(window)
    return window


def complete(controller, fake_tasks, audio_file, text="Hello world."):
    controller.start_transcription(audio_file)
    task = fake_tasks.created[-1]
    task.final_result.emit(task.task_id, text)


class TestTranscriberWindow:
    def test_initial_state(self, window, controller):
        assert window._transcript_view.toPlainText() == controller.transcript
        assert window._status_label.text() == controller.status_message
        assert window._download_btn.isHidden()
        assert not window._save_action.isEnabled()

    def test_reflects_controller_updates(self, window, controller, fake_tasks, audio_file):
        controller.start_transcription(audio_file)
        task = fake_tasks.created[0]
        task.partial_result.emit(task.task_id, "Hello wor")

        assert window._transcript_view.toPlainText() == "Hello wor"
        assert window._status_label.text() == "Transcribing..."
        assert window._download_btn.isHidden()

    def test_save_button_shown_when_ready(self, window, controller, fake_tasks, audio_file):
        complete(controller, fake_tasks, audio_file)

        assert not window._download_btn.isHidden()
        assert window._save_action.isEnabled()

        controller.start_transcription(audio_file)

        assert window._download_btn.isHidden()
        assert not window._save_action.isEnabled()

    def test_open_file_starts_transcription(self, window, controller, settings, audio_file):
        with patch.object(
            QFileDialog, "getOpenFileName", return_value=(audio_file, "Audio Files")
        ):
            window._open_file_picker()

        assert controller.status == SessionStatus.TRANSCRIBING
        assert settings.last_open_dir is not None
        assert audio_file.startswith(settings.last_open_dir)

    def test_cancelled_open_dialog_does_nothing(self, window, controller):
        with patch.object(QFileDialog, "getOpenFileName", return_value=("", "")):
            window._open_file_picker()

        assert controller.status == SessionStatus.IDLE
        assert controller.has_active_task is False

    def test_save_writes_transcript(
        self, window, controller, fake_tasks, audio_file, tmp_path
    ):
        complete(controller, fake_tasks, audio_file)
        target = tmp_path / "out.txt"

        with patch.object(
            QFileDialog, "getSaveFileName", return_value=(str(target), "Text Files")
        ) as mock_save:
            window._download_btn.click()

        suggested = mock_save.call_args.args[2]
        assert suggested.endswith("transcription.txt")
        assert target.read_bytes() == b"Hello world."
        assert (
            window._status_label.text() == "Transcription saved successfully to out.txt"
        )

    def test_save_not_offered_before_ready(self, window):
        with patch.object(QFileDialog, "getSaveFileName") as mock_save:
            window._save_transcription()

        mock_save.assert_not_called()

    def test_appeared_emitted_once(self, qtbot, window):
        emitted = []
        window.appeared.connect(lambda: emitted.append(True))

        window.show()
        qtbot.waitExposed(window)
        window.hide()
        window.show()

        assert emitted == [True]

    def test_consent_menu_action(self, qtbot, window):
        action = next(
            a
            for a in window.findChildren(QAction)
            if a.text() == "Speech Recognition Access..."
        )

        with qtbot.waitSignal(window.consent_requested, timeout=1000):
            action.trigger()

    def test_close_remembers_geometry(self, qtbot, window, settings, isolated_config_dir):
        window.show()
        qtbot.waitExposed(window)
        window.close()

        rect = window.geometry()
        assert settings.window_geometry == (rect.x(), rect.y(), rect.width(), rect.height())
        assert (isolated_config_dir / "settings.json").exists()


class TestSpeechConsentDialog:
    def test_allow(self, qtbot):
        dialog = SpeechConsentDialog()
        qtbot.addWidget(dialog)

        qtbot.mouseClick(dialog._allow_btn, Qt.LeftButton)

        assert dialog.decision is True

    def test_deny(self, qtbot):
        dialog = SpeechConsentDialog(current=True)
        qtbot.addWidget(dialog)

        qtbot.mouseClick(dialog._deny_btn, Qt.LeftButton)

        assert dialog.decision is False

    def test_closed_without_answer(self, qtbot):
        dialog = SpeechConsentDialog()
        qtbot.addWidget(dialog)

        dialog.reject()

        assert dialog.decision is None
