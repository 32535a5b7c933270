"""Tests for writing transcripts to disk."""

import os
import stat

import pytest

from audiototext.core.errors import TranscriptSaveError
from audiototext.core.output import write_transcript


class TestWriteTranscript:
    def test_writes_exact_utf8_bytes(self, tmp_path):
        target = tmp_path / "transcription.txt"

        result = write_transcript(target, "Hello world.")

        assert result == target
        assert target.read_bytes() == b"Hello world."

    def test_line_endings_are_untouched(self, tmp_path):
        target = tmp_path / "transcription.txt"
        text = "first line\nsecond line\r\nthird – ünïcode"

        write_transcript(str(target), text)

        assert target.read_bytes() == text.encode("utf-8")

    def test_overwrites_existing_file(self, tmp_path):
        target = tmp_path / "transcription.txt"
        target.write_text("old and much longer content", encoding="utf-8")

        write_transcript(target, "new")

        assert target.read_text(encoding="utf-8") == "new"

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
    def test_keeps_existing_permissions(self, tmp_path):
        target = tmp_path / "transcription.txt"
        target.write_text("old", encoding="utf-8")
        os.chmod(target, 0o600)

        write_transcript(target, "new")

        assert stat.S_IMODE(os.stat(target).st_mode) == 0o600

    def test_missing_directory_raises(self, tmp_path):
        target = tmp_path / "missing" / "transcription.txt"

        with pytest.raises(TranscriptSaveError):
            write_transcript(target, "Hello world.")

    def test_failure_leaves_no_temp_files(self, tmp_path):
        target = tmp_path / "transcription.txt"

        with pytest.raises(TranscriptSaveError):
            write_transcript(target, "bad surrogate \ud800")

        assert not target.exists()
        assert list(tmp_path.glob(".transcription.txt.*")) == []
