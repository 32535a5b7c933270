"""
Centralized application configuration.

Edit the variables below to configure development settings.
"""

import logging

# =============================================================================
# DEVELOPMENT SETTINGS - Edit these for local development
# =============================================================================
LOG_LEVEL = "DEBUG"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_TO_CONSOLE = True  # Set to True to output logs to terminal
# =============================================================================

# =============================================================================
# RECOGNITION SETTINGS
# =============================================================================
# Set this environment variable to report speech recognition as restricted
SPEECH_RESTRICTED_ENV = "AUDIOTOTEXT_SPEECH_RESTRICTED"
SUPPORTED_AUDIO_EXTENSIONS = ("m4a", "mp3", "wav", "aiff", "aifc", "caf")
DEFAULT_TRANSCRIPT_FILENAME = "transcription.txt"
# =============================================================================


def get_log_level() -> int:
    """Get the logging level as an integer."""
    return getattr(logging, LOG_LEVEL.upper(), logging.INFO)
