from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QDialog,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from ..utils.logger import get_logger

logger = get_logger(__name__)


class SpeechConsentDialog(QDialog):
    """
    Asks the user whether speech recognition may be used.

    decision is True (allowed), False (denied) or None when the dialog was
    closed without an answer.
    """

    def __init__(self, current: Optional[bool] = None, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Speech Recognition Access")
        self.setMinimumWidth(450)
        self.setModal(True)

        self._current = current
        self._decision: Optional[bool] = None
        self._setup_ui()

    @property
    def decision(self) -> Optional[bool]:
        return self._decision

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setSpacing(16)

        title = QLabel("Allow Speech Recognition?")
        title_font = QFont()
        title_font.setPointSize(14)
        title_font.setBold(True)
        title.setFont(title_font)
        layout.addWidget(title)

        explanation = QLabel(
            "AudioToText transcribes the audio files you select with a speech "
            "recognition model that runs on this computer.<br><br>"
            "Audio never leaves your device. You can change this choice later "
            "from the <b>Speech</b> menu."
        )
        explanation.setTextFormat(Qt.RichText)
        explanation.setWordWrap(True)
        layout.addWidget(explanation)

        if self._current is not None:
            status_frame = QFrame()
            status_frame.setFrameShape(QFrame.StyledPanel)
            status_layout = QVBoxLayout(status_frame)
            status_label = QLabel(
                "✅ Currently allowed" if self._current else "⚠️ Currently denied"
            )
            status_layout.addWidget(status_label)
            layout.addWidget(status_frame)

        button_layout = QHBoxLayout()
        button_layout.addStretch()

        self._deny_btn = QPushButton("Don't Allow")
        self._deny_btn.clicked.connect(self._deny)
        button_layout.addWidget(self._deny_btn)

        self._allow_btn = QPushButton("Allow")
        self._allow_btn.setDefault(True)
        self._allow_btn.clicked.connect(self._allow)
        button_layout.addWidget(self._allow_btn)

        layout.addLayout(button_layout)

    def _allow(self) -> None:
        logger.info("Speech recognition allowed by user")
        self._decision = True
        self.accept()

    def _deny(self) -> None:
        logger.info("Speech recognition denied by user")
        self._decision = False
        self.accept()
