"""
Transcript file output.

Writes the transcript as UTF-8 by replacing the destination atomically,
so a failed save never leaves a half-written file behind.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Union

from ...utils.logger import get_logger
from ..errors import TranscriptSaveError

logger = get_logger(__name__)


def write_transcript(path: Union[str, Path], text: str) -> Path:
    """
    Overwrite path with text encoded as UTF-8, exactly as given.

    Returns:
        The destination path.

    Raises:
        TranscriptSaveError: If the file could not be written.
    """
    target = Path(path)
    tmp_path = None

    try:
        fd, tmp_path = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        # newline="" keeps line endings untouched on every platform
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())

        if target.exists():
            shutil.copymode(target, tmp_path)
        else:
            os.chmod(tmp_path, 0o644)

        os.replace(tmp_path, target)
        tmp_path = None
    except (OSError, UnicodeEncodeError) as e:
        logger.error(f"Failed to write transcript to {target}: {e}")
        raise TranscriptSaveError(str(e)) from e
    finally:
        if tmp_path is not None and os.path.exists(tmp_path):
            os.unlink(tmp_path)

    logger.info(f"Wrote {len(text)} characters to {target}")
    return target
