"""Heuristic fake-lossless classification of a power spectrum."""

import logging
from dataclasses import replace
from typing import Optional, Tuple

import numpy as np

from ..models.analysis import ClassificationVerdict, PowerSpectrum

logger = logging.getLogger(__name__)

# Typical low-pass frequencies of lossy encoders, in ascending order
CODEC_SIGNATURES: Tuple[Tuple[float, str], ...] = (
    (16000.0, "MP3 128kbps"),
    (17000.0, "MP3 160kbps"),
    (19000.0, "MP3 192kbps"),
    (20000.0, "MP3 256kbps"),
    (21000.0, "MP3 320kbps"),
)
SIGNATURE_TOLERANCE_HZ = 500.0
MIN_EFFECTIVE_FREQUENCY_HZ = 18000.0
NOISE_FLOOR_START_TENTHS = 9  # Noise floor is measured over bins [0.9 L, L)
NOISE_FLOOR_FACTOR = 10.0
CUTOFF_POWER_RATIO = 0.01
CUTOFF_CONSECUTIVE_BINS = 10
NYQUIST_CUTOFF_RATIO = 0.9


class FakeLosslessClassifier:
    """Decides whether a spectrum shows the high-frequency cliff of a lossy source.

    The classifier is stateless; classifying the same spectrum twice yields
    equal verdicts.
    """

    def classify(self, spectrum: PowerSpectrum) -> ClassificationVerdict:
        """Classify a non-empty power spectrum."""
        assert len(spectrum) > 0, "cannot classify an empty power spectrum"
        resolution = spectrum.frequency_resolution

        max_freq = self.find_max_effective_frequency(spectrum.power, resolution)
        cutoff_freq = self.detect_cutoff(spectrum.power, resolution)
        is_fake, explanation, signature = self.determine_status(
            max_freq, cutoff_freq, spectrum.nyquist)

        logger.debug(f"Classified spectrum: max={max_freq:.0f} Hz, cutoff={cutoff_freq:.0f} Hz, "
                     f"fake={is_fake}")
        return ClassificationVerdict(
            is_fake=is_fake,
            max_effective_frequency_hz=max_freq,
            cutoff_frequency_hz=cutoff_freq,
            explanation=explanation,
            signature=signature,
        )

    @staticmethod
    def noise_floor(power: np.ndarray) -> float:
        """Mean power of the highest 10% of bins."""
        start = len(power) * NOISE_FLOOR_START_TENTHS // 10
        tail = power[start:]
        if tail.size == 0:
            return 0.0
        return float(np.mean(tail))

    def find_max_effective_frequency(self, power: np.ndarray, resolution: float) -> float:
        """Frequency of the highest bin that stands clearly above the noise floor."""
        threshold = self.noise_floor(power) * NOISE_FLOOR_FACTOR
        above = np.flatnonzero(power > threshold)
        if above.size == 0:
            return 0.0
        return float(above[-1] * resolution)

    @staticmethod
    def detect_cutoff(power: np.ndarray, resolution: float) -> float:
        """Find the edge of the highest run of low-energy bins.

        Scans downward from the top bin; the first run of
        ``CUTOFF_CONSECUTIVE_BINS`` bins below 1% of the peak power puts the
        cutoff at ``(i + CUTOFF_CONSECUTIVE_BINS) * resolution``, where ``i``
        is the lowest bin of that run. Without such a run the content is taken
        to span the whole band.
        """
        threshold = float(np.max(power)) * CUTOFF_POWER_RATIO
        consecutive = 0
        for i in range(len(power) - 1, -1, -1):
            if power[i] < threshold:
                consecutive += 1
                if consecutive >= CUTOFF_CONSECUTIVE_BINS:
                    return float((i + CUTOFF_CONSECUTIVE_BINS) * resolution)
            else:
                consecutive = 0
        return float(len(power) * resolution)

    @staticmethod
    def match_signature(max_freq: float) -> Optional[Tuple[float, str]]:
        for cutoff, label in CODEC_SIGNATURES:
            if abs(max_freq - cutoff) < SIGNATURE_TOLERANCE_HZ:
                return cutoff, label
        return None

    def determine_status(self, max_freq: float, cutoff_freq: float,
                         nyquist: float) -> Tuple[bool, str, Optional[str]]:
        """Apply the classification rules in priority order.

        Returns:
            Tuple of (is_fake, explanation, matched signature label or None)
        """
        match = self.match_signature(max_freq)
        if match is not None:
            _, label = match
            return True, f"Typical {label} cutoff frequency detected ({max_freq:.0f} Hz)", label

        if max_freq < MIN_EFFECTIVE_FREQUENCY_HZ:
            return True, (f"Maximum effective frequency too low ({max_freq:.0f} Hz), "
                          f"likely converted from a lossy source"), None

        if cutoff_freq < nyquist * NYQUIST_CUTOFF_RATIO:
            return True, f"Significant frequency cutoff detected near {cutoff_freq:.0f} Hz", None

        return False, f"Spectrum looks normal, maximum effective frequency {max_freq:.0f} Hz", None


def apply_cutoff_override(verdict: ClassificationVerdict, cutoff_freq: float) -> ClassificationVerdict:
    """Force a fake verdict when the effective frequency is below ``cutoff_freq``.

    An explanation already produced by the classification rules is kept; a
    verdict that was genuine gets a threshold explanation instead.
    """
    if verdict.max_effective_frequency_hz >= cutoff_freq:
        return verdict
    if verdict.is_fake:
        return verdict
    return replace(
        verdict,
        is_fake=True,
        explanation=(f"Maximum frequency {verdict.max_effective_frequency_hz:.0f} Hz is below "
                     f"the configured threshold of {cutoff_freq:.0f} Hz"),
    )
