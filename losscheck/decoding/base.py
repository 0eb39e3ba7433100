"""Abstract base classes for audio decoders."""

from abc import ABC, abstractmethod
from typing import List

from ..models.audio import AudioMetadata, SampleBuffer


class AudioFile(ABC):
    """An opened audio file whose samples can be read on demand."""

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Container name shown in reports, e.g. "FLAC"."""

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        pass

    @property
    @abstractmethod
    def bit_depth(self) -> int:
        pass

    @property
    @abstractmethod
    def channels(self) -> int:
        pass

    @property
    @abstractmethod
    def duration_seconds(self) -> float:
        pass

    @property
    @abstractmethod
    def metadata(self) -> AudioMetadata:
        pass

    @abstractmethod
    def read_samples(self) -> SampleBuffer:
        """Read every frame of the file into a normalized sample buffer.

        Returns:
            SampleBuffer with channel-interleaved float64 samples in [-1, 1]

        Raises:
            SampleReadError: If the frames cannot be read
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release the underlying file handle."""
        pass

    def __enter__(self) -> "AudioFile":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AbstractAudioDecoder(ABC):
    """Abstract base class for format-specific decoders."""

    @abstractmethod
    def supported_formats(self) -> List[str]:
        """Lowercase file extensions (without the dot) handled by this decoder."""
        pass

    @abstractmethod
    def decode(self, file_path: str) -> AudioFile:
        """Open ``file_path`` and read its stream properties.

        Args:
            file_path: Path to the audio file

        Returns:
            Opened AudioFile; the caller is responsible for closing it

        Raises:
            DecodeError: If the file cannot be opened or is not a valid stream
        """
        pass
