from .consent_dialog import SpeechConsentDialog
from .main_window import TranscriberWindow

__all__ = ["SpeechConsentDialog", "TranscriberWindow"]
