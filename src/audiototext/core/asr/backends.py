import importlib.util
import threading
from typing import Callable, Dict, Iterator, Optional

import numpy as np

from ...utils.logger import get_logger
from ..audio.audio_processor import AudioProcessor
from ..audio.decoder import TARGET_SAMPLE_RATE, load_audio_file
from ..errors import RecognitionError
from .file_utils import find_model_files, is_valid_model_dir, resolve_model_path
from .models.registry import MULTILINGUAL, ModelInfo
from .recognizer import RecognitionRequest, RecognitionResult, SpeechRecognizer

logger = get_logger(__name__)

STREAM_STEP_SECONDS = 0.2
STREAM_TAIL_PADDING_SECONDS = 0.66


def is_engine_installed() -> bool:
    return importlib.util.find_spec("sherpa_onnx") is not None


def language_from_locale(locale: Optional[str]) -> str:
    """'de_DE' -> 'de'; empty for the default locale."""
    if not locale:
        return ""
    return locale.replace("-", "_").split("_")[0].lower()


class SherpaOnnxRecognizer(SpeechRecognizer):
    """
    Recognizes local audio files with a sherpa-onnx model.

    Offline models decode the file chunk by chunk and report the combined
    text after each chunk. Streaming models report the decoder's running
    hypothesis as audio is fed in.
    """

    def __init__(
        self,
        model: ModelInfo,
        locale: Optional[str] = None,
        chunk_max_seconds: float = 30.0,
        num_threads: int = 2,
    ):
        super().__init__(locale)
        self.model = model
        self.num_threads = num_threads
        self._model_id, self._model_path = resolve_model_path(model.id)
        self._audio_processor = AudioProcessor(max_duration=chunk_max_seconds)
        self._engine = None
        self._load_lock = threading.Lock()

    @property
    def is_available(self) -> bool:
        return is_engine_installed() and is_valid_model_dir(
            self._model_path, self.model.type
        )

    @property
    def is_loaded(self) -> bool:
        return self._engine is not None

    def recognize(
        self,
        request: RecognitionRequest,
        is_cancelled: Callable[[], bool],
    ) -> Iterator[RecognitionResult]:
        audio = load_audio_file(request.audio_path, TARGET_SAMPLE_RATE)
        if is_cancelled():
            return

        engine = self._ensure_loaded()

        if self.model.is_streaming:
            yield from self._recognize_streaming(engine, audio, request, is_cancelled)
        else:
            yield from self._recognize_offline(engine, audio, request, is_cancelled)

    def unload(self) -> None:
        with self._load_lock:
            self._engine = None

    def _ensure_loaded(self):
        with self._load_lock:
            if self._engine is None:
                self._engine = self._load()
            return self._engine

    def _load(self):
        import sherpa_onnx

        logger.info(f"Loading model '{self._model_id}' as type '{self.model.type}'")
        try:
            if self.model.type == "whisper":
                return self._load_whisper(sherpa_onnx)
            if self.model.is_streaming:
                return self._load_streaming_transducer(sherpa_onnx)
            return self._load_transducer(sherpa_onnx)
        except RecognitionError:
            raise
        except Exception as e:
            raise RecognitionError(
                f"Failed to load model from '{self._model_path}': {e}"
            ) from e

    def _load_whisper(self, sherpa_onnx):
        files = self._require_files()

        # English-only checkpoints reject an explicit language
        language = ""
        if self.model.language == MULTILINGUAL:
            language = language_from_locale(self.locale)

        return sherpa_onnx.OfflineRecognizer.from_whisper(
            encoder=files["encoder"],
            decoder=files["decoder"],
            tokens=files["tokens"],
            language=language,
            task="transcribe",
            num_threads=self.num_threads,
            provider="cpu",
            decoding_method="greedy_search",
        )

    def _load_transducer(self, sherpa_onnx):
        files = self._require_files()

        return sherpa_onnx.OfflineRecognizer.from_transducer(
            encoder=files["encoder"],
            decoder=files["decoder"],
            joiner=files["joiner"],
            tokens=files["tokens"],
            num_threads=self.num_threads,
            provider="cpu",
            decoding_method="greedy_search",
            model_type="nemo_transducer",
        )

    def _load_streaming_transducer(self, sherpa_onnx):
        files = self._require_files()

        return sherpa_onnx.OnlineRecognizer.from_transducer(
            tokens=files["tokens"],
            encoder=files["encoder"],
            decoder=files["decoder"],
            joiner=files["joiner"],
            num_threads=self.num_threads,
            sample_rate=TARGET_SAMPLE_RATE,
            feature_dim=80,
            provider="cpu",
            decoding_method="greedy_search",
        )

    def _require_files(self) -> Dict[str, str]:
        files = find_model_files(self._model_path, self.model.type)
        missing = [name for name, path in files.items() if not path]
        if missing:
            raise RecognitionError(
                f"Missing {self.model.type} model files in {self._model_path}: {', '.join(missing)}"
            )
        return files

    def _recognize_offline(
        self,
        engine,
        audio: np.ndarray,
        request: RecognitionRequest,
        is_cancelled: Callable[[], bool],
    ) -> Iterator[RecognitionResult]:
        chunks = self._audio_processor.split_audio(audio, TARGET_SAMPLE_RATE)
        texts = []

        for index, chunk in enumerate(chunks):
            if is_cancelled():
                return

            stream = engine.create_stream()
            stream.accept_waveform(TARGET_SAMPLE_RATE, chunk)
            engine.decode_stream(stream)
            texts.append(stream.result.text)

            combined = self._audio_processor.combine_transcriptions(texts)
            logger.debug(f"Decoded chunk {index + 1}/{len(chunks)}")

            if index == len(chunks) - 1:
                yield RecognitionResult(text=combined, is_final=True)
            elif request.report_partial_results:
                yield RecognitionResult(text=combined)

    def _recognize_streaming(
        self,
        engine,
        audio: np.ndarray,
        request: RecognitionRequest,
        is_cancelled: Callable[[], bool],
    ) -> Iterator[RecognitionResult]:
        stream = engine.create_stream()
        step = int(STREAM_STEP_SECONDS * TARGET_SAMPLE_RATE)
        last_text = ""

        for start in range(0, len(audio), step):
            if is_cancelled():
                return

            stream.accept_waveform(TARGET_SAMPLE_RATE, audio[start : start + step])
            while engine.is_ready(stream):
                engine.decode_stream(stream)

            text = self._stream_text(engine, stream)
            if request.report_partial_results and text and text != last_text:
                last_text = text
                yield RecognitionResult(text=text)

        tail = np.zeros(
            int(STREAM_TAIL_PADDING_SECONDS * TARGET_SAMPLE_RATE), dtype=np.float32
        )
        stream.accept_waveform(TARGET_SAMPLE_RATE, tail)
        stream.input_finished()
        while engine.is_ready(stream):
            engine.decode_stream(stream)

        yield RecognitionResult(text=self._stream_text(engine, stream), is_final=True)

    @staticmethod
    def _stream_text(engine, stream) -> str:
        result = engine.get_result(stream)
        text = result if isinstance(result, str) else getattr(result, "text", "")
        return text.strip()
