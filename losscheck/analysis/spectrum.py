"""Windowed FFT power spectrum estimation."""

import logging
from typing import Tuple

import numpy as np
from scipy import fft, signal

from ..errors import EmptyInputError, InsufficientSamplesError
from ..models.audio import SampleBuffer
from ..models.analysis import PowerSpectrum
from ..models.config import DEFAULT_WINDOW_SIZE

logger = logging.getLogger(__name__)


def largest_power_of_two(n: int) -> int:
    """Return the largest power of two that does not exceed ``n`` (n >= 1)."""
    assert n >= 1, f"expected a positive length, got {n}"
    return 1 << (n.bit_length() - 1)


class SpectralEstimator:
    """Turns a sample buffer into a power spectrum of one analysis window.

    The window is taken a quarter of the way into the recording to stay clear
    of leading silence and fades, shaped with a symmetric Hamming window and
    transformed with a real FFT. Only the first ``N/2`` bins are kept.
    """

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE):
        """Initialize the estimator.

        Args:
            window_size: Preferred FFT length; must be a power of two.
        """
        assert window_size >= 2 and window_size & (window_size - 1) == 0, \
            f"window_size must be a power of two >= 2, got {window_size}"
        self.window_size = window_size

    def effective_window_size(self, total_samples: int) -> int:
        """Shrink the window for buffers shorter than the preferred size."""
        if total_samples < self.window_size:
            return largest_power_of_two(total_samples)
        return self.window_size

    @staticmethod
    def window_bounds(total_samples: int, window_size: int) -> Tuple[int, int]:
        """Return ``(start, end)`` of the analysis window inside the buffer."""
        start = total_samples // 4
        end = start + window_size
        if end > total_samples:
            end = total_samples
            start = max(end - window_size, 0)
        return start, end

    def estimate(self, buffer: SampleBuffer) -> PowerSpectrum:
        """Compute the power spectrum for ``buffer`` after merging its channels.

        Raises:
            EmptyInputError: The buffer holds no samples.
            InsufficientSamplesError: The buffer is too short to yield any bins.
        """
        return self.estimate_samples(buffer.mono_samples(), buffer.sample_rate)

    def estimate_samples(self, samples: np.ndarray, sample_rate: int) -> PowerSpectrum:
        assert sample_rate > 0, f"sample_rate must be positive, got {sample_rate}"
        samples = np.asarray(samples, dtype=np.float64).reshape(-1)
        total = samples.size
        if total == 0:
            raise EmptyInputError("audio sample data is empty")

        window_size = self.effective_window_size(total)
        if window_size < 2:
            raise InsufficientSamplesError(
                f"need at least 2 samples for spectral analysis, got {total}")

        start, end = self.window_bounds(total, window_size)
        windowed = samples[start:end] * signal.get_window("hamming", window_size, fftbins=False)

        coefficients = fft.rfft(windowed, n=window_size)
        power = np.abs(coefficients[: window_size // 2]) ** 2

        logger.debug(f"Spectrum: {window_size}-point window at [{start}, {end}) "
                     f"of {total} samples, {sample_rate} Hz")
        return PowerSpectrum(power=power, sample_rate=sample_rate, window_size=window_size)
