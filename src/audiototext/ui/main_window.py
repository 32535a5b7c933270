"""
Main window: shows the transcript, the status line and the two actions.

The window only reflects the controller's published state; the open and
save dialogs are the only things it drives itself.
"""

import os
from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtGui import QAction, QFont, QKeySequence
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QTextEdit,
    QVBoxLayout,
    QWidget,
)

from ..core.session import TranscriptionController
from ..core.settings import Settings
from ..core.settings.config import (
    DEFAULT_TRANSCRIPT_FILENAME,
    SUPPORTED_AUDIO_EXTENSIONS,
)
from ..utils.logger import get_logger
from ..utils.platform import get_start_dir

logger = get_logger(__name__)

AUDIO_FILE_FILTER = "Audio Files ({})".format(
    " ".join(f"*.{ext}" for ext in SUPPORTED_AUDIO_EXTENSIONS)
)
TEXT_FILE_FILTER = "Text Files (*.txt)"


class TranscriberWindow(QMainWindow):
    """
    Signals:
        appeared: Emitted once, the first time the window is shown
        consent_requested: The user asked to change speech recognition access
    """

    appeared = Signal()
    consent_requested = Signal()

    def __init__(
        self,
        controller: TranscriptionController,
        settings: Settings,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._controller = controller
        self._settings = settings
        self._has_appeared = False

        self.setWindowTitle("Audio File Transcriber")
        self.setMinimumSize(500, 400)

        self._setup_ui()
        self._setup_menu()
        self._connect_controller()
        self._restore_geometry()

    def _setup_ui(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setSpacing(20)

        title = QLabel("Audio File Transcriber")
        title_font = QFont()
        title_font.setPointSize(20)
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        self._transcript_view = QTextEdit()
        self._transcript_view.setReadOnly(True)
        self._transcript_view.setMinimumHeight(200)
        self._transcript_view.setPlainText(self._controller.transcript)
        layout.addWidget(self._transcript_view, 1)

        self._status_label = QLabel(self._controller.status_message)
        self._status_label.setWordWrap(True)
        self._status_label.setStyleSheet("color: #888;")
        layout.addWidget(self._status_label)

        self._download_btn = QPushButton("Download Transcription")
        self._download_btn.setStyleSheet(
            """
            QPushButton {
                background-color: #28a745;
                color: white;
                border: none;
                padding: 8px 16px;
                border-radius: 4px;
            }
            QPushButton:hover {
                background-color: #218838;
            }
            """
        )
        self._download_btn.clicked.connect(self._save_transcription)
        self._download_btn.setVisible(self._controller.is_ready)

        self._select_btn = QPushButton("Select Audio File and Transcribe")
        self._select_btn.setStyleSheet(
            """
            QPushButton {
                background-color: #007bff;
                color: white;
                border: none;
                padding: 8px 16px;
                border-radius: 4px;
            }
            QPushButton:hover {
                background-color: #0069d9;
            }
            """
        )
        self._select_btn.clicked.connect(self._open_file_picker)

        button_layout = QHBoxLayout()
        button_layout.addStretch()
        button_layout.addWidget(self._download_btn)
        button_layout.addWidget(self._select_btn)
        button_layout.addStretch()
        layout.addLayout(button_layout)

        self.setCentralWidget(central)

    def _setup_menu(self) -> None:
        file_menu = self.menuBar().addMenu("&File")

        self._open_action = QAction("&Open Audio File...", self)
        self._open_action.setShortcut(QKeySequence.Open)
        self._open_action.triggered.connect(self._open_file_picker)
        file_menu.addAction(self._open_action)

        self._save_action = QAction("&Save Transcription...", self)
        self._save_action.setShortcut(QKeySequence.Save)
        self._save_action.setEnabled(self._controller.is_ready)
        self._save_action.triggered.connect(self._save_transcription)
        file_menu.addAction(self._save_action)

        file_menu.addSeparator()
        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        speech_menu = self.menuBar().addMenu("&Speech")
        consent_action = QAction("Speech Recognition Access...", self)
        consent_action.triggered.connect(self.consent_requested.emit)
        speech_menu.addAction(consent_action)

    def _connect_controller(self) -> None:
        self._controller.transcript_changed.connect(self._on_transcript_changed)
        self._controller.status_changed.connect(self._status_label.setText)
        self._controller.ready_changed.connect(self._on_ready_changed)

    def _on_transcript_changed(self, text: str) -> None:
        self._transcript_view.setPlainText(text)
        scrollbar = self._transcript_view.verticalScrollBar()
        scrollbar.setValue(scrollbar.maximum())

    def _on_ready_changed(self, ready: bool) -> None:
        self._download_btn.setVisible(ready)
        self._save_action.setEnabled(ready)

    def _open_file_picker(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Select Audio File",
            get_start_dir(self._settings.last_open_dir),
            AUDIO_FILE_FILTER,
        )
        if not path:
            return

        self._remember("last_open_dir", os.path.dirname(path))
        self._controller.start_transcription(path)

    def _save_transcription(self) -> None:
        if not self._controller.is_ready:
            return

        suggested = os.path.join(
            get_start_dir(self._settings.last_save_dir), DEFAULT_TRANSCRIPT_FILENAME
        )
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Transcription", suggested, TEXT_FILE_FILTER
        )
        if not path:
            return

        self._remember("last_save_dir", os.path.dirname(path))
        self._controller.save_transcript(path)

    def _remember(self, field: str, value: str) -> None:
        setattr(self._settings, field, value)
        try:
            self._settings.save()
        except OSError as e:
            logger.warning(f"Could not persist {field}: {e}")

    def _restore_geometry(self) -> None:
        geometry = self._settings.window_geometry
        if geometry:
            x, y, width, height = geometry
            self.setGeometry(x, y, width, height)

    def showEvent(self, event):
        super().showEvent(event)
        if not self._has_appeared:
            self._has_appeared = True
            self.appeared.emit()

    def closeEvent(self, event):
        rect = self.geometry()
        self._remember(
            "window_geometry", (rect.x(), rect.y(), rect.width(), rect.height())
        )
        super().closeEvent(event)
