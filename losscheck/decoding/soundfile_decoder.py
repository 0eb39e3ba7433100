"""WAV and FLAC decoders backed by libsndfile (via soundfile)."""

import logging
import re
from typing import List, Optional, Tuple

import numpy as np
import soundfile as sf

from .base import AbstractAudioDecoder, AudioFile
from ..errors import DecodeError, SampleReadError
from ..models.audio import AudioMetadata, SampleBuffer

logger = logging.getLogger(__name__)

# Subtypes whose names carry no bit count
_SUBTYPE_BITS = {
    "FLOAT": 32,
    "DOUBLE": 64,
    "ULAW": 8,
    "ALAW": 8,
}


def bit_depth_from_subtype(subtype: Optional[str]) -> int:
    """Derive the sample bit depth from a soundfile subtype such as "PCM_24".

    Returns:
        Bit depth, or 0 when the subtype does not describe one
    """
    if not subtype:
        return 0
    if subtype in _SUBTYPE_BITS:
        return _SUBTYPE_BITS[subtype]
    match = re.search(r"\d+", subtype)
    return int(match.group()) if match else 0


def format_duration(seconds: float) -> str:
    """Format seconds the way a stopwatch would, e.g. "1h2m3.5s" or "3m25.48s"."""
    if seconds <= 0:
        return "0s"
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    secs_text = f"{secs:.3f}".rstrip("0").rstrip(".") or "0"
    if hours:
        return f"{int(hours)}h{int(minutes)}m{secs_text}s"
    if minutes:
        return f"{int(minutes)}m{secs_text}s"
    return f"{secs_text}s"


class SoundFileAudio(AudioFile):
    """An audio file opened through ``soundfile.SoundFile``."""

    def __init__(self, handle: sf.SoundFile, format_name: str, file_path: str):
        self._handle = handle
        self._format_name = format_name
        self.file_path = file_path
        self._bit_depth = bit_depth_from_subtype(handle.subtype)
        if self._bit_depth <= 0:
            handle.close()
            raise DecodeError(f"unsupported sample encoding {handle.subtype!r}: {file_path}")
        self._metadata = self._read_metadata()

    @property
    def format_name(self) -> str:
        return self._format_name

    @property
    def sample_rate(self) -> int:
        return int(self._handle.samplerate)

    @property
    def bit_depth(self) -> int:
        return self._bit_depth

    @property
    def channels(self) -> int:
        return int(self._handle.channels)

    @property
    def duration_seconds(self) -> float:
        return self._handle.frames / self._handle.samplerate

    @property
    def metadata(self) -> AudioMetadata:
        return self._metadata

    def _read_metadata(self) -> AudioMetadata:
        """Collect the string tags libsndfile exposes (INFO chunk or Vorbis comments)."""
        return AudioMetadata(
            title=self._handle.title or "",
            artist=self._handle.artist or "",
            album=self._handle.album or "",
            year=self._handle.date or "",
            genre=self._handle.genre or "",
            duration=format_duration(self.duration_seconds),
        )

    def read_samples(self) -> SampleBuffer:
        try:
            self._handle.seek(0)
            frames = self._handle.read(dtype="float64", always_2d=True)
        except (RuntimeError, ValueError) as e:
            raise SampleReadError(f"failed to read audio frames from {self.file_path}: {e}") from e

        logger.debug(f"Read {frames.shape[0]} frames x {frames.shape[1]} channels "
                     f"from {self.file_path}")
        # Interleave channels into one flat stream
        return SampleBuffer(
            samples=np.ascontiguousarray(frames).reshape(-1),
            sample_rate=self.sample_rate,
            bit_depth=self.bit_depth,
            channels=self.channels,
            metadata=self.metadata,
        )

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()


class SoundFileDecoder(AbstractAudioDecoder):
    """Decoder for containers libsndfile understands.

    Subclasses name the report format, the file extensions they claim and
    the libsndfile major formats they accept.
    """

    format_name: str = ""
    extensions: Tuple[str, ...] = ()
    container_formats: Tuple[str, ...] = ()

    def supported_formats(self) -> List[str]:
        return list(self.extensions)

    def decode(self, file_path: str) -> AudioFile:
        try:
            handle = sf.SoundFile(file_path, mode="r")
        except (RuntimeError, OSError) as e:
            raise DecodeError(f"failed to open {self.format_name} file {file_path}: {e}") from e

        if handle.format not in self.container_formats:
            actual = handle.format
            handle.close()
            raise DecodeError(f"invalid {self.format_name} file (found {actual}): {file_path}")

        logger.debug(f"Opened {file_path}: {handle.format}/{handle.subtype}, "
                     f"{handle.samplerate} Hz, {handle.channels} ch")
        return SoundFileAudio(handle, self.format_name, file_path)


class WavDecoder(SoundFileDecoder):
    """RIFF/WAVE decoder."""
    format_name = "WAV"
    extensions = ("wav",)
    container_formats = ("WAV", "WAVEX", "RF64")


class FlacDecoder(SoundFileDecoder):
    """FLAC decoder; tags come from the Vorbis comment block."""
    format_name = "FLAC"
    extensions = ("flac",)
    container_formats = ("FLAC",)
