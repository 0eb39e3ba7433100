"""Unit tests for FileAnalyzer."""

import pytest
import numpy as np

from losscheck.analysis.file_analyzer import FileAnalyzer
from losscheck.decoding import AbstractAudioDecoder, AudioFile, DecoderRegistry
from losscheck.errors import SampleReadError
from losscheck.models.analysis import AnalysisStatus
from losscheck.models.audio import AudioMetadata
from losscheck.models.config import AnalyzerConfig


class UnreadableAudio(AudioFile):
    """Opens fine but fails when frames are read."""

    def __init__(self):
        self.closed = False

    format_name = "WAV"
    sample_rate = 44100
    bit_depth = 16
    channels = 2
    duration_seconds = 1.0
    metadata = AudioMetadata(title="Truncated")

    def read_samples(self):
        raise SampleReadError("unexpected end of data chunk")

    def close(self):
        self.closed = True


class UnreadableDecoder(AbstractAudioDecoder):
    def __init__(self):
        self.opened = []

    def supported_formats(self):
        return ["wav"]

    def decode(self, file_path):
        audio_file = UnreadableAudio()
        self.opened.append(audio_file)
        return audio_file


@pytest.fixture
def analyzer():
    return FileAnalyzer(AnalyzerConfig(concurrency=1))


@pytest.mark.unit
class TestFileAnalyzer:

    def test_genuine_file(self, analyzer, genuine_wav):
        result = analyzer(genuine_wav)

        assert result.status is AnalysisStatus.OK
        assert result.error is None
        assert result.format == "WAV"
        assert result.analysis.sample_rate == 44100
        assert result.analysis.bit_depth == 24
        assert result.analysis.channels == 1
        assert result.analysis.max_frequency > 18000
        assert not result.analysis.is_fake

    @pytest.mark.parametrize("fixture_name, format_name", [
        ("mp3_128_wav", "WAV"),
        ("mp3_128_flac", "FLAC"),
    ])
    def test_transcoded_file(self, request, analyzer, fixture_name, format_name):
        result = analyzer(request.getfixturevalue(fixture_name))

        assert result.status is AnalysisStatus.FAKE
        assert result.is_fake
        assert result.format == format_name
        assert "MP3 128kbps" in result.analysis.details
        assert result.analysis.duration == pytest.approx(8192 / 44100)

    def test_missing_file(self, analyzer, temp_data_dir):
        result = analyzer(f"{temp_data_dir}/missing.flac")

        assert result.status is AnalysisStatus.ERROR
        assert result.error.startswith("decode failed:")
        assert result.analysis is None

    def test_corrupt_file(self, analyzer, corrupt_wav):
        result = analyzer(corrupt_wav)

        assert result.status is AnalysisStatus.ERROR
        assert result.error.startswith("decode failed:")
        assert result.format == ""

    def test_unsupported_extension(self, analyzer, temp_data_dir):
        result = analyzer(f"{temp_data_dir}/song.mp3")

        assert result.status is AnalysisStatus.ERROR
        assert "unsupported audio format: mp3" in result.error

    def test_single_sample_file(self, analyzer, write_audio):
        result = analyzer(write_audio("blip.wav", np.array([0.25])))

        assert result.status is AnalysisStatus.ERROR
        assert result.error.startswith("spectrum analysis failed:")
        assert result.format == "WAV"

    def test_read_failure_keeps_stream_properties(self):
        decoder = UnreadableDecoder()
        analyzer = FileAnalyzer(AnalyzerConfig(concurrency=1), registry=DecoderRegistry([decoder]))

        result = analyzer.analyze("/music/truncated.wav")

        assert result.status is AnalysisStatus.ERROR
        assert result.error == "reading samples failed: unexpected end of data chunk"
        assert result.format == "WAV"
        assert result.metadata.title == "Truncated"
        assert decoder.opened[0].closed

    def test_configured_cutoff_forces_fake(self, genuine_wav):
        analyzer = FileAnalyzer(AnalyzerConfig(concurrency=1, cutoff_freq=23000))

        result = analyzer(genuine_wav)

        assert result.status is AnalysisStatus.FAKE
        assert "configured threshold of 23000 Hz" in result.analysis.details

    def test_json_shape(self, analyzer, mp3_128_flac):
        data = analyzer(mp3_128_flac).to_dict()

        assert data["filePath"] == mp3_128_flac
        assert data["format"] == "FLAC"
        assert data["status"] == "FAKE"
        assert data["analysis"]["isFake"] is True
        assert data["analysis"]["sampleRate"] == 44100
        assert "error" not in data
