"""Per-file analysis: decode, estimate the spectrum, classify."""

import logging
from typing import Optional

from .classifier import FakeLosslessClassifier, apply_cutoff_override
from .spectrum import SpectralEstimator
from ..decoding.registry import DecoderRegistry
from ..errors import DecodeError, EmptyInputError, SampleReadError
from ..models.analysis import AnalysisDetails, AnalysisResult, AnalysisStatus
from ..models.config import AnalyzerConfig

logger = logging.getLogger(__name__)


class FileAnalyzer:
    """Runs the full analysis for one file and always returns a result.

    Instances hold no per-file state, so one analyzer can be shared by all
    workers of a batch.
    """

    def __init__(self, config: AnalyzerConfig,
                 registry: Optional[DecoderRegistry] = None,
                 estimator: Optional[SpectralEstimator] = None,
                 classifier: Optional[FakeLosslessClassifier] = None):
        self.config = config
        self.registry = registry or DecoderRegistry()
        self.estimator = estimator or SpectralEstimator(config.window_size)
        self.classifier = classifier or FakeLosslessClassifier()

    def __call__(self, file_path: str) -> AnalysisResult:
        return self.analyze(file_path)

    def analyze(self, file_path: str) -> AnalysisResult:
        """Analyze ``file_path``.

        Decode, read and spectrum failures are reported as an ERROR result
        with a message naming the failed stage.
        """
        result = AnalysisResult(file_path=file_path)

        try:
            audio_file = self.registry.decode(file_path)
        except DecodeError as e:
            result.error = f"decode failed: {e}"
            logger.warning(f"Could not decode {file_path}: {e}")
            return result

        with audio_file:
            result.format = audio_file.format_name
            result.metadata = audio_file.metadata

            try:
                buffer = audio_file.read_samples()
            except SampleReadError as e:
                result.error = f"reading samples failed: {e}"
                logger.warning(f"Could not read samples from {file_path}: {e}")
                return result

        try:
            spectrum = self.estimator.estimate(buffer)
        except EmptyInputError as e:
            result.error = f"spectrum analysis failed: {e}"
            logger.warning(f"Spectrum analysis failed for {file_path}: {e}")
            return result

        verdict = apply_cutoff_override(self.classifier.classify(spectrum), self.config.cutoff_freq)

        result.analysis = AnalysisDetails(
            is_fake=verdict.is_fake,
            cutoff_hz=verdict.cutoff_frequency_hz,
            details=verdict.explanation,
            sample_rate=buffer.sample_rate,
            bit_depth=buffer.bit_depth,
            channels=buffer.channels,
            duration=buffer.duration_seconds,
            max_frequency=verdict.max_effective_frequency_hz,
        )
        result.status = AnalysisStatus.FAKE if verdict.is_fake else AnalysisStatus.OK
        logger.info(f"{file_path}: {result.status.value} ({verdict.explanation})")
        return result
