"""Spectral analysis and classification data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any

import numpy as np

from .audio import AudioMetadata


@dataclass(frozen=True)
class PowerSpectrum:
    """Non-redundant half of a real-input power spectrum.

    Bin ``i`` sits at ``i * sample_rate / window_size`` Hz. Values are squared
    FFT magnitudes and are not normalized by the window length.
    """
    power: np.ndarray
    sample_rate: int
    window_size: int

    def __post_init__(self):
        power = np.array(self.power, dtype=np.float64)
        power.setflags(write=False)
        object.__setattr__(self, "power", power)

    def __len__(self) -> int:
        return int(self.power.size)

    @property
    def frequency_resolution(self) -> float:
        """Width of one bin in Hz."""
        return self.sample_rate / (2 * len(self))

    @property
    def nyquist(self) -> float:
        return self.sample_rate / 2


@dataclass(frozen=True)
class ClassificationVerdict:
    """Outcome of classifying one power spectrum."""
    is_fake: bool
    max_effective_frequency_hz: float
    cutoff_frequency_hz: float
    explanation: str
    signature: Optional[str] = None  # Matched lossy codec label, e.g. "MP3 128kbps"


class AnalysisStatus(Enum):
    """Final status of one analysis job."""
    OK = "OK"
    FAKE = "FAKE"
    ERROR = "ERROR"


@dataclass
class AnalysisDetails:
    """Verdict plus stream properties reported for a successfully analyzed file."""
    is_fake: bool
    cutoff_hz: float
    details: str
    sample_rate: int
    bit_depth: int
    channels: int
    duration: float  # Seconds
    max_frequency: float

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "isFake": self.is_fake,
            "details": self.details,
            "sampleRate": self.sample_rate,
            "bitDepth": self.bit_depth,
            "channels": self.channels,
            "duration": self.duration,
            "maxFrequency": self.max_frequency,
        }
        if self.cutoff_hz:
            data["cutoffHz"] = self.cutoff_hz
        return data


@dataclass
class AnalysisResult:
    """Result of one analysis job; exactly one is produced per submitted path."""
    file_path: str
    status: AnalysisStatus = AnalysisStatus.ERROR
    format: str = ""
    metadata: AudioMetadata = field(default_factory=AudioMetadata)
    analysis: Optional[AnalysisDetails] = None
    error: Optional[str] = None

    @property
    def is_fake(self) -> bool:
        return self.status is AnalysisStatus.FAKE

    def to_dict(self) -> Dict[str, Any]:
        """Render the result in the JSON shape used by ``--json`` output."""
        data: Dict[str, Any] = {
            "filePath": self.file_path,
            "format": self.format,
            "metadata": self.metadata.to_dict(),
            "status": self.status.value,
        }
        if self.analysis is not None:
            data["analysis"] = self.analysis.to_dict()
        if self.error:
            data["error"] = self.error
        return data
