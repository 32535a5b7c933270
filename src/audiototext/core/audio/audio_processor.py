"""
Audio splitting for chunked recognition of long files.

Splits long audio at silences so each chunk can be decoded separately,
which also gives the recognizer natural points to report partial results.
"""

from typing import Iterator, List, Optional

import numpy as np

from ...utils.logger import get_logger

logger = get_logger(__name__)


MAX_DURATION_SECONDS = 30.0
MIN_CHUNK_DURATION_SECONDS = 5.0
SILENCE_THRESHOLD = 0.02
SILENCE_DURATION_SECONDS = 0.3
OVERLAP_DURATION_SECONDS = 0.1


def needs_chunking(
    audio_data: np.ndarray, sample_rate: int, max_duration: float = MAX_DURATION_SECONDS
) -> bool:
    return len(audio_data) / sample_rate > max_duration


class AudioProcessor:
    """Splits audio on silence and joins per-chunk transcripts."""

    def __init__(
        self,
        max_duration: float = MAX_DURATION_SECONDS,
        min_chunk_duration: float = MIN_CHUNK_DURATION_SECONDS,
        silence_threshold: float = SILENCE_THRESHOLD,
        silence_duration: float = SILENCE_DURATION_SECONDS,
        overlap_duration: float = OVERLAP_DURATION_SECONDS,
    ):
        self.max_duration = max_duration
        self.min_chunk_duration = min(min_chunk_duration, max_duration / 2)
        self.silence_threshold = silence_threshold
        self.silence_duration = silence_duration
        self.overlap_duration = overlap_duration

    def split_audio(self, audio_data: np.ndarray, sample_rate: int) -> List[np.ndarray]:
        duration = len(audio_data) / sample_rate

        if duration <= self.max_duration:
            logger.debug(
                f"Audio duration {duration:.1f}s under threshold, no splitting needed"
            )
            return [audio_data]

        split_points = self._find_split_points(audio_data, sample_rate)

        if not split_points:
            logger.warning(
                "No suitable silence points found, using time-based splitting"
            )
            split_points = self._generate_time_based_splits(
                len(audio_data), sample_rate
            )

        chunks = list(self._iter_chunks(audio_data, sample_rate, split_points))
        logger.info(f"Split {duration:.1f}s audio into {len(chunks)} chunks")
        return chunks

    def _chunk_window_samples(self, sample_rate: int) -> int:
        # Overlap is added on both sides, so emitted chunks stay within max_duration
        overlap_samples = int(self.overlap_duration * sample_rate)
        return int(self.max_duration * sample_rate) - 2 * overlap_samples

    def _find_split_points(self, audio_data: np.ndarray, sample_rate: int) -> List[int]:
        max_chunk_samples = self._chunk_window_samples(sample_rate)
        min_chunk_samples = int(self.min_chunk_duration * sample_rate)
        silence_samples = int(self.silence_duration * sample_rate)

        analysis = audio_data.mean(axis=1) if audio_data.ndim > 1 else audio_data
        analysis = np.abs(analysis.astype(np.float32))
        peak = float(np.max(analysis)) if analysis.size else 0.0
        if peak > 0:
            analysis = analysis / peak

        window_size = int(0.1 * sample_rate)
        if window_size > 1 and len(analysis) > window_size:
            analysis = np.convolve(
                analysis, np.ones(window_size) / window_size, mode="same"
            )

        split_points = []
        last_split = 0
        total = len(audio_data)

        while total - last_split > max_chunk_samples:
            search_start = last_split + min_chunk_samples
            search_end = last_split + max_chunk_samples

            best_split = self._find_best_silence(
                analysis, search_start, search_end, silence_samples, sample_rate
            )
            if best_split is None:
                best_split = search_end

            split_points.append(best_split)
            last_split = best_split

        return split_points

    def _find_best_silence(
        self,
        smoothed: np.ndarray,
        start: int,
        end: int,
        silence_samples: int,
        sample_rate: int,
    ) -> Optional[int]:
        step = max(1, int(0.05 * sample_rate))

        best_position = None
        best_quality = float("inf")

        for i in range(end - silence_samples, start, -step):
            if i < 0 or i + silence_samples >= len(smoothed):
                continue

            region = smoothed[i : i + silence_samples]
            max_level = float(np.max(region))
            if max_level >= self.silence_threshold:
                continue

            quality = float(np.mean(region)) + max_level * 0.1
            if quality < best_quality:
                best_quality = quality
                best_position = i + silence_samples // 2

        return best_position

    def _generate_time_based_splits(
        self, total_samples: int, sample_rate: int
    ) -> List[int]:
        target_samples = int(self._chunk_window_samples(sample_rate) * 0.9)
        min_tail = int(self.min_chunk_duration * sample_rate)
        return list(range(target_samples, total_samples - min_tail, target_samples))

    def _iter_chunks(
        self, audio_data: np.ndarray, sample_rate: int, split_points: List[int]
    ) -> Iterator[np.ndarray]:
        overlap_samples = int(self.overlap_duration * sample_rate)

        start_idx = 0
        for i, end_idx in enumerate(split_points + [len(audio_data)]):
            chunk_start = max(0, start_idx - (overlap_samples if i > 0 else 0))
            chunk_end = min(len(audio_data), end_idx + overlap_samples)
            logger.debug(
                f"Chunk {i + 1}: {(chunk_end - chunk_start) / sample_rate:.1f}s"
            )
            yield audio_data[chunk_start:chunk_end]
            start_idx = end_idx

    @staticmethod
    def combine_transcriptions(transcriptions: List[str]) -> str:
        parts = [t.strip() for t in transcriptions if t and t.strip()]
        return " ".join(" ".join(parts).split())
