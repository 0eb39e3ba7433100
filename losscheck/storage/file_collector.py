"""Collection of audio files to analyze."""

import logging
import os
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


def collect_audio_files(path: str, extensions: Iterable[str]) -> List[str]:
    """Collect supported audio files below ``path``.

    Args:
        path: A single file or a directory to walk recursively
        extensions: Supported extensions including the dot, e.g. ".flac"

    Returns:
        Sorted list of matching file paths

    Raises:
        FileNotFoundError: If ``path`` does not exist
    """
    root = Path(path)
    if not root.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")

    wanted = {extension.lower() for extension in extensions}

    if root.is_file():
        return [str(root)] if root.suffix.lower() in wanted else []

    files = []
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            if os.path.splitext(filename)[1].lower() in wanted:
                files.append(os.path.join(dirpath, filename))

    files.sort()
    logger.info(f"Collected {len(files)} audio files from {root}")
    return files
