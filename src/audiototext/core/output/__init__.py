from .transcript_writer import write_transcript

__all__ = ["write_transcript"]
