"""Audio decoding and splitting."""

from .audio_processor import (
    MAX_DURATION_SECONDS,
    AudioProcessor,
    needs_chunking,
)
from .decoder import TARGET_SAMPLE_RATE, is_supported_audio_file, load_audio_file

__all__ = [
    "MAX_DURATION_SECONDS",
    "AudioProcessor",
    "needs_chunking",
    "TARGET_SAMPLE_RATE",
    "is_supported_audio_file",
    "load_audio_file",
]
