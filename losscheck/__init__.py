"""Spectral detection of lossless audio files transcoded from lossy sources."""

__version__ = "1.1.0"
