"""Data models for the losscheck application."""

from .audio import AudioMetadata, SampleBuffer
from .analysis import (
    PowerSpectrum,
    ClassificationVerdict,
    AnalysisStatus,
    AnalysisDetails,
    AnalysisResult,
)
from .config import AnalyzerConfig

__all__ = [
    "AudioMetadata",
    "SampleBuffer",
    "PowerSpectrum",
    "ClassificationVerdict",
    "AnalysisStatus",
    "AnalysisDetails",
    "AnalysisResult",
    "AnalyzerConfig",
]
