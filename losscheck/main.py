"""Main application entry point for losscheck."""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.progress import Progress, BarColumn, MofNCompleteColumn, TextColumn, TimeElapsedColumn

from losscheck import __version__
from losscheck.analysis.file_analyzer import FileAnalyzer
from losscheck.decoding.registry import DecoderRegistry
from losscheck.models.config import AnalyzerConfig
from losscheck.reporting.publisher import ResultPublisher
from losscheck.reporting.reporter import ResultReporter
from losscheck.services.batch_scheduler import BatchScheduler
from losscheck.storage.file_collector import collect_audio_files

from .config import LOG_LEVELS, LossCheckConfig

logger = logging.getLogger(__name__)


class Checker:
    """Wires the decoder registry, batch scheduler and reporter for one CLI run."""

    def __init__(self, analyzer_config: AnalyzerConfig, console: Optional[Console] = None):
        self.analyzer_config = analyzer_config
        self.console = console or Console()
        self.registry = DecoderRegistry()

    def collect(self, target_path: str) -> List[str]:
        return collect_audio_files(target_path, self.registry.supported_extensions())

    def run(self, files: List[str]) -> None:
        """Analyze ``files`` and report every result, then the summary."""
        logger.info(f"Analyzing {len(files)} files with {self.analyzer_config.concurrency} workers")

        publisher = ResultPublisher()
        reporter = ResultReporter(self.analyzer_config, self.console, topic=publisher.topic)
        scheduler = BatchScheduler(
            FileAnalyzer(self.analyzer_config, self.registry),
            self.analyzer_config,
            result_callback=publisher.get_callback(),
        )

        try:
            if self.analyzer_config.show_progress:
                with Progress(
                    TextColumn("{task.description}"),
                    BarColumn(bar_width=50),
                    MofNCompleteColumn(),
                    TimeElapsedColumn(),
                    console=self.console,
                ) as progress:
                    task = progress.add_task("Analyzing audio files", total=len(files))
                    for _ in scheduler.run(files):
                        progress.advance(task)
            else:
                for _ in scheduler.run(files):
                    pass

            reporter.print_summary()
        finally:
            reporter.shutdown()


def setup_logging(config: LossCheckConfig, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path')
    console_output = config.get('logging.console_output', True)

    # Set up handlers
    handlers = []

    # File handler - only when a log file is configured
    if log_file_path:
        log_dir = Path(log_file_path).parent
        log_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file_path)
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(threadName)s - %(funcName)s:%(lineno)d - %(message)s'
        )
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    # Console handler - stderr, stdout is reserved for results
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
        console_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        console_handler.setFormatter(console_formatter)
        handlers.append(console_handler)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info(f"losscheck {__version__} starting up")
    if log_file_path:
        logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="losscheck",
        description="Detect lossless audio files (WAV, FLAC) that were transcoded from a lossy source",
        epilog="Files whose spectrum shows a lossy encoder's high-frequency cutoff are reported as FAKE."
    )

    parser.add_argument(
        "path",
        help="Audio file or directory to analyze (directories are searched recursively)"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=None,
        help="Quiet mode, only print the paths of fake lossless files"
    )

    parser.add_argument(
        "--only-fake",
        action="store_true",
        default=None,
        help="Only report fake lossless files"
    )

    parser.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        default=None,
        help="Print one JSON object per analyzed file"
    )

    parser.add_argument(
        "--cutoff",
        type=float,
        help="Frequency threshold in Hz below which a file is always fake (default: 18000)"
    )

    parser.add_argument(
        "-j", "--concurrency",
        type=int,
        help="Number of files analyzed concurrently (default: number of CPUs)"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=LOG_LEVELS,
        help="Set logging level (default: INFO)"
    )

    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"losscheck version {__version__}"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for losscheck."""
    args = build_parser().parse_args(argv)

    try:
        config = LossCheckConfig(args.config)
        analyzer_config = config.to_analyzer_config(
            cutoff_freq=args.cutoff,
            concurrency=args.concurrency,
            quiet=args.quiet,
            only_fake=args.only_fake,
            json_output=args.json_output,
        )
        log_level = config.log_level(args.log_level)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(config, log_level)

    checker = Checker(analyzer_config)
    try:
        files = checker.collect(args.path)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not files:
        if analyzer_config.show_progress:
            print("No supported audio files found")
        return 0

    try:
        checker.run(files)
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
