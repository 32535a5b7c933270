"""Exceptions raised inside the recognition and output layers.

They never reach the UI: the recognition task and the session controller
convert them into published state.
"""


class RecognitionError(Exception):
    """The recognition capability could not produce a transcript."""


class TranscriptSaveError(Exception):
    """Writing the transcript to disk failed."""
