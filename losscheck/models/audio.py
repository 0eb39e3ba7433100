"""Audio-related data models."""

from dataclasses import dataclass, field, asdict
from typing import Dict

import numpy as np


@dataclass(frozen=True)
class AudioMetadata:
    """Textual tags read from the container."""
    title: str = ""
    artist: str = ""
    album: str = ""
    year: str = ""
    genre: str = ""
    duration: str = ""  # Human-readable duration, e.g. "3m25.48s"

    def to_dict(self) -> Dict[str, str]:
        """Return only the tags that are set."""
        return {key: value for key, value in asdict(self).items() if value}


@dataclass(frozen=True)
class SampleBuffer:
    """Normalized PCM samples for one file.

    Samples are float64 values in [-1, 1], channel-interleaved into a single
    flat array exactly as the decoder delivered them.
    """
    samples: np.ndarray
    sample_rate: int
    bit_depth: int
    channels: int
    metadata: AudioMetadata = field(default_factory=AudioMetadata)

    def __post_init__(self):
        assert self.sample_rate > 0, f"sample_rate must be positive, got {self.sample_rate}"
        assert self.bit_depth > 0, f"bit_depth must be positive, got {self.bit_depth}"
        assert self.channels > 0, f"channels must be positive, got {self.channels}"
        samples = np.asarray(self.samples, dtype=np.float64).reshape(-1)
        samples.setflags(write=False)
        object.__setattr__(self, "samples", samples)

    @property
    def total_samples(self) -> int:
        return int(self.samples.size)

    @property
    def duration_seconds(self) -> float:
        return self.total_samples / self.channels / self.sample_rate

    def mono_samples(self) -> np.ndarray:
        """Average the interleaved channels into one stream of frames.

        A trailing partial frame is dropped.
        """
        if self.channels == 1:
            return self.samples
        frames = self.total_samples // self.channels
        return self.samples[: frames * self.channels].reshape(frames, self.channels).mean(axis=1)
