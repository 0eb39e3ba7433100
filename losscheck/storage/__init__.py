"""File system helpers for losscheck."""

from .file_collector import collect_audio_files

__all__ = [
    "collect_audio_files",
]
