"""Decoding of local audio files into mono float32 samples."""

import os

import numpy as np
from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from ...utils.logger import get_logger
from ..errors import RecognitionError
from ..settings.config import SUPPORTED_AUDIO_EXTENSIONS

logger = get_logger(__name__)

TARGET_SAMPLE_RATE = 16000


def is_supported_audio_file(path: str) -> bool:
    extension = os.path.splitext(path)[1].lower().lstrip(".")
    return extension in SUPPORTED_AUDIO_EXTENSIONS


def load_audio_file(path: str, sample_rate: int = TARGET_SAMPLE_RATE) -> np.ndarray:
    """
    Decode an audio file to mono float32 samples in [-1, 1].

    Raises:
        RecognitionError: If the format is not allowed or decoding fails.
    """
    if not is_supported_audio_file(path):
        extension = os.path.splitext(path)[1].lower() or "<none>"
        raise RecognitionError(f"Unsupported audio format: {extension}")

    try:
        segment = AudioSegment.from_file(path)
    except (CouldntDecodeError, OSError, IndexError) as e:
        raise RecognitionError(f"Could not decode audio file: {e}") from e

    segment = segment.set_channels(1).set_frame_rate(sample_rate).set_sample_width(2)
    samples = np.array(segment.get_array_of_samples(), dtype=np.int16)

    logger.debug(
        f"Decoded {os.path.basename(path)}: {len(samples) / sample_rate:.2f}s at {sample_rate} Hz"
    )
    return samples.astype(np.float32) / 32768.0
