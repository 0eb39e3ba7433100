"""Extension-based lookup of audio decoders."""

import logging
import os
from typing import Dict, List, Optional, Iterable

from .base import AbstractAudioDecoder, AudioFile
from .soundfile_decoder import WavDecoder, FlacDecoder
from ..errors import UnsupportedFormatError

logger = logging.getLogger(__name__)


class DecoderRegistry:
    """Maps lowercase file extensions to decoders.

    New formats are supported by registering another decoder; dispatch never
    changes.
    """

    def __init__(self, decoders: Optional[Iterable[AbstractAudioDecoder]] = None):
        """Initialize the registry.

        Args:
            decoders: Decoders to register. Defaults to the WAV and FLAC decoders.
        """
        self.decoders: Dict[str, AbstractAudioDecoder] = {}
        if decoders is None:
            decoders = [WavDecoder(), FlacDecoder()]
        for decoder in decoders:
            self.register(decoder)

    def register(self, decoder: AbstractAudioDecoder) -> None:
        for extension in decoder.supported_formats():
            self.decoders[extension.lower().lstrip(".")] = decoder
            logger.debug(f"Registered {type(decoder).__name__} for .{extension.lower()}")

    def supported_extensions(self) -> List[str]:
        """Registered extensions, with a leading dot, sorted."""
        return sorted(f".{extension}" for extension in self.decoders)

    def get_decoder(self, file_path: str) -> AbstractAudioDecoder:
        """Return the decoder for ``file_path`` based on its extension.

        Raises:
            UnsupportedFormatError: The extension is missing or not registered
        """
        extension = os.path.splitext(file_path)[1].lower()
        if not extension:
            raise UnsupportedFormatError(f"cannot determine audio format: {file_path}")

        decoder = self.decoders.get(extension[1:])
        if decoder is None:
            raise UnsupportedFormatError(f"unsupported audio format: {extension[1:]}")
        return decoder

    def decode(self, file_path: str) -> AudioFile:
        """Open ``file_path`` with the decoder registered for its extension."""
        return self.get_decoder(file_path).decode(file_path)
