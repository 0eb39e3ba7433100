"""Audio decoding module for losscheck."""

from .base import AbstractAudioDecoder, AudioFile
from .soundfile_decoder import SoundFileDecoder, WavDecoder, FlacDecoder
from .registry import DecoderRegistry

__all__ = [
    "AbstractAudioDecoder",
    "AudioFile",
    "SoundFileDecoder",
    "WavDecoder",
    "FlacDecoder",
    "DecoderRegistry",
]
