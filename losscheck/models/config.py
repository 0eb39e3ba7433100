"""Analyzer configuration model."""

import os
from dataclasses import dataclass, field

DEFAULT_CUTOFF_FREQ = 18000.0
DEFAULT_WINDOW_SIZE = 8192


def default_concurrency() -> int:
    """Number of logical CPUs, falling back to 1 when it cannot be determined."""
    return os.cpu_count() or 1


@dataclass(frozen=True)
class AnalyzerConfig:
    """Immutable settings for one batch run.

    Attributes:
        cutoff_freq: Files whose maximum effective frequency is below this
            value (Hz) are always reported as fake.
        concurrency: Number of worker threads analyzing files in parallel.
        window_size: FFT window length; must be a power of two.
        quiet: Only print the paths of fake files.
        only_fake: Only report fake files.
        json_output: Print one JSON object per result.
    """
    cutoff_freq: float = DEFAULT_CUTOFF_FREQ
    concurrency: int = field(default_factory=default_concurrency)
    window_size: int = DEFAULT_WINDOW_SIZE
    quiet: bool = False
    only_fake: bool = False
    json_output: bool = False

    def __post_init__(self):
        if self.concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {self.concurrency}")
        if self.cutoff_freq < 0:
            raise ValueError(f"cutoff_freq must not be negative, got {self.cutoff_freq}")
        if self.window_size < 2 or self.window_size & (self.window_size - 1):
            raise ValueError(f"window_size must be a power of two >= 2, got {self.window_size}")

    @property
    def show_progress(self) -> bool:
        """Progress is only rendered for human-readable output."""
        return not (self.quiet or self.json_output)
