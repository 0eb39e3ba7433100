"""Spectral analysis and classification for losscheck."""

from .spectrum import SpectralEstimator
from .classifier import FakeLosslessClassifier, apply_cutoff_override, CODEC_SIGNATURES
from .file_analyzer import FileAnalyzer

__all__ = [
    "SpectralEstimator",
    "FakeLosslessClassifier",
    "apply_cutoff_override",
    "CODEC_SIGNATURES",
    "FileAnalyzer",
]
