"""Pytest configuration and fixtures for losscheck tests."""

import pytest
import tempfile
import logging
from pathlib import Path
import numpy as np
import soundfile as sf


# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

WINDOW_SIZE = 8192


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests of a single component")
    config.addinivalue_line("markers", "integration: tests that decode real files end to end")


def bin_centered_tone(sample_rate, frequency, length=WINDOW_SIZE, amplitude=0.5, floor=0.4):
    """Sine on the FFT bin nearest ``frequency`` over a flat spectral floor.

    A single click in the middle of the buffer adds the same power to every
    bin, so the only bins standing out are the tone and its main lobe.

    Returns:
        Tuple of (samples, exact tone frequency in Hz)
    """
    bin_index = int(round(frequency * length / sample_rate))
    n = np.arange(length)
    samples = amplitude * np.sin(2 * np.pi * bin_index * n / length)
    samples[length // 2] += floor
    return samples, bin_index * sample_rate / length


def full_band_comb(length=WINDOW_SIZE, spacing=20, amplitude=0.01, top_offset=4):
    """Equal-amplitude bin-centred tones every ``spacing`` bins up to just below Nyquist.

    Returns:
        Tuple of (samples, bin index of the highest tone)
    """
    top_bin = length // 2 - top_offset
    bins = np.arange(top_bin, 0, -spacing)
    phases = np.random.default_rng(7).uniform(0, 2 * np.pi, size=bins.size)
    n = np.arange(length)
    samples = np.zeros(length)
    for bin_index, phase in zip(bins, phases):
        samples += amplitude * np.sin(2 * np.pi * bin_index * n / length + phase)
    return samples, int(top_bin)


@pytest.fixture
def temp_data_dir():
    """Create temporary directory for test data."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def write_audio(temp_data_dir):
    """Factory writing samples to an audio file in the temporary directory."""
    def _write(name, samples, sample_rate=44100, subtype="PCM_24", tags=None):
        file_path = Path(temp_data_dir) / name
        file_path.parent.mkdir(parents=True, exist_ok=True)
        data = np.asarray(samples, dtype=np.float64)
        channels = 1 if data.ndim == 1 else data.shape[1]
        with sf.SoundFile(str(file_path), mode="w", samplerate=sample_rate,
                          channels=channels, subtype=subtype) as f:
            for key, value in (tags or {}).items():
                setattr(f, key, value)
            f.write(data)
        return str(file_path)

    return _write


@pytest.fixture
def genuine_wav(write_audio):
    """WAV file whose spectrum reaches up to Nyquist."""
    samples, _ = full_band_comb()
    return write_audio("genuine.wav", samples)


@pytest.fixture
def mp3_128_wav(write_audio):
    """WAV file whose content stops at 16 kHz, like a 128kbps MP3 transcode."""
    samples, _ = bin_centered_tone(44100, 16000)
    return write_audio("transcoded.wav", samples)


@pytest.fixture
def mp3_128_flac(write_audio):
    """FLAC version of ``mp3_128_wav``."""
    samples, _ = bin_centered_tone(44100, 16000)
    return write_audio("transcoded.flac", samples)


@pytest.fixture
def corrupt_wav(temp_data_dir):
    """A .wav file that holds no audio stream."""
    file_path = Path(temp_data_dir) / "corrupt.wav"
    file_path.write_bytes(b"this is not a riff header" * 10)
    return str(file_path)


@pytest.fixture
def tone():
    """Factory for bin-centred test tones (see ``bin_centered_tone``)."""
    return bin_centered_tone


@pytest.fixture
def comb():
    """Factory for full-band tone combs (see ``full_band_comb``)."""
    return full_band_comb
