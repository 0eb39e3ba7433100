"""Unit tests for SpectralEstimator."""

import pytest
import numpy as np

from losscheck.analysis.spectrum import SpectralEstimator, largest_power_of_two
from losscheck.analysis.classifier import FakeLosslessClassifier
from losscheck.errors import EmptyInputError, InsufficientSamplesError
from losscheck.models.audio import SampleBuffer


def make_buffer(samples, sample_rate=44100, channels=1):
    return SampleBuffer(samples=np.asarray(samples, dtype=np.float64),
                        sample_rate=sample_rate, bit_depth=16, channels=channels)


@pytest.mark.unit
class TestWindowSelection:
    """Window size and placement rules."""

    @pytest.mark.parametrize("n, expected", [(1, 1), (2, 2), (63, 32), (64, 64), (100, 64), (8191, 4096)])
    def test_largest_power_of_two(self, n, expected):
        assert largest_power_of_two(n) == expected

    def test_default_window_size(self):
        estimator = SpectralEstimator()
        assert estimator.window_size == 8192
        assert estimator.effective_window_size(20000) == 8192

    def test_short_buffer_shrinks_window(self):
        estimator = SpectralEstimator()
        assert estimator.effective_window_size(100) == 64

    @pytest.mark.parametrize("total, window, expected", [
        (20000, 8192, (5000, 13192)),
        (10000, 8192, (1808, 10000)),
        (8192, 8192, (0, 8192)),
        (100, 64, (25, 89)),
    ])
    def test_window_bounds(self, total, window, expected):
        assert SpectralEstimator.window_bounds(total, window) == expected

    def test_rejects_non_power_of_two_window(self):
        with pytest.raises(AssertionError):
            SpectralEstimator(window_size=1000)


@pytest.mark.unit
class TestSpectralEstimator:
    """Power spectrum computation."""

    def test_empty_input_raises(self):
        with pytest.raises(EmptyInputError):
            SpectralEstimator().estimate_samples(np.array([]), 44100)

    def test_single_sample_raises(self):
        with pytest.raises(InsufficientSamplesError):
            SpectralEstimator().estimate(make_buffer([0.5]))

    def test_short_buffer_produces_spectrum(self):
        samples = np.sin(np.linspace(0, 20 * np.pi, 100))
        spectrum = SpectralEstimator().estimate(make_buffer(samples))

        assert spectrum.window_size == 64
        assert len(spectrum) == 32
        verdict = FakeLosslessClassifier().classify(spectrum)
        assert isinstance(verdict.is_fake, bool)

    def test_matches_hamming_windowed_fft(self):
        rng = np.random.default_rng(0)
        samples = rng.uniform(-1, 1, 20000)
        spectrum = SpectralEstimator().estimate(make_buffer(samples))

        n = np.arange(8192)
        hamming = 0.54 - 0.46 * np.cos(2 * np.pi * n / 8191)
        expected = np.abs(np.fft.fft(samples[5000:13192] * hamming)[:4096]) ** 2

        assert len(spectrum) == 4096
        np.testing.assert_allclose(spectrum.power, expected, rtol=1e-9, atol=1e-9)

    def test_frequency_resolution(self):
        spectrum = SpectralEstimator().estimate(make_buffer(np.ones(20000), sample_rate=48000))
        assert spectrum.frequency_resolution == pytest.approx(48000 / 8192)
        assert spectrum.nyquist == 24000

    def test_power_is_read_only(self):
        spectrum = SpectralEstimator().estimate(make_buffer(np.ones(1000)))
        with pytest.raises(ValueError):
            spectrum.power[0] = 1.0

    def test_stereo_channels_are_merged(self, tone):
        mono, _ = tone(44100, 18000)
        stereo = np.repeat(mono, 2)  # L R L R ... with identical channels

        mono_spectrum = SpectralEstimator().estimate(make_buffer(mono))
        stereo_spectrum = SpectralEstimator().estimate(make_buffer(stereo, channels=2))

        np.testing.assert_allclose(stereo_spectrum.power, mono_spectrum.power)

    @pytest.mark.parametrize("sample_rate, frequency", [
        (44100, 18000),
        (48000, 20000),
        (96000, 40000),
    ])
    def test_sine_max_effective_frequency_within_one_bin(self, tone, sample_rate, frequency):
        samples, actual = tone(sample_rate, frequency)
        spectrum = SpectralEstimator().estimate(make_buffer(samples, sample_rate=sample_rate))

        verdict = FakeLosslessClassifier().classify(spectrum)

        bin_width = sample_rate / 8192
        assert abs(verdict.max_effective_frequency_hz - actual) <= bin_width + 1e-6

    def test_silence_is_not_empty_input(self):
        spectrum = SpectralEstimator().estimate(make_buffer(np.zeros(20000)))

        assert len(spectrum) == 4096
        assert not np.any(spectrum.power)
