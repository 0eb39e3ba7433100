"""Exception hierarchy for losscheck."""


class LossCheckError(Exception):
    """Base class for per-file analysis failures."""


class EmptyInputError(LossCheckError):
    """Raised when a sample buffer holds no samples to analyze."""


class InsufficientSamplesError(EmptyInputError):
    """Raised when a sample buffer is too short to produce any spectrum bins."""


class DecodeError(LossCheckError):
    """Raised when an audio file cannot be opened or parsed."""


class UnsupportedFormatError(DecodeError):
    """Raised when no decoder is registered for a file extension."""


class SampleReadError(LossCheckError):
    """Raised when reading audio frames fails after the file was opened."""
