# AudioToText - Local Audio File Transcription

"""
Cross-platform desktop application for transcribing local audio files.
Uses on-device sherpa-onnx speech recognition models.
"""

__version__ = "0.1.0"
__app_name__ = "AudioToText"
