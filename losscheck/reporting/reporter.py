"""Result reporter that renders analysis results as they arrive.

The reporter subscribes to the analysis result topic, prints every result in
the configured output mode (detailed, quiet, only-fake or JSON) and keeps the
results so a summary can be printed once the batch is done.
"""

import json
import logging
import os
import threading
from typing import Dict, List, Optional

from pubsub import pub
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .publisher import RESULT_TOPIC
from ..models.analysis import AnalysisResult, AnalysisStatus
from ..models.config import AnalyzerConfig

logger = logging.getLogger(__name__)

_STATUS_STYLES = {
    AnalysisStatus.OK: "bold green",
    AnalysisStatus.FAKE: "bold red",
    AnalysisStatus.ERROR: "bold yellow",
}


class ResultReporter:
    """Prints analysis results and summary statistics."""

    def __init__(self, config: AnalyzerConfig, console: Optional[Console] = None,
                 topic: Optional[str] = RESULT_TOPIC):
        """Initialize the reporter.

        Args:
            config: Analyzer configuration providing the output mode flags
            console: Console used for human-readable output
            topic: Topic to subscribe to, or None to only accept direct calls
        """
        self.config = config
        self.console = console or Console()
        self.topic = topic

        self.results: List[AnalysisResult] = []
        self.lock = threading.RLock()

        if topic is not None:
            pub.subscribe(self.on_result, topic)
            logger.info(f"ResultReporter subscribed to {topic}")

    def on_result(self, result: AnalysisResult) -> None:
        """Handle one analysis result."""
        with self.lock:
            self.results.append(result)
            self._output_result(result)

    def _output_result(self, result: AnalysisResult) -> None:
        if self.config.only_fake and not result.is_fake:
            return

        if self.config.quiet:
            if result.is_fake:
                print(result.file_path, flush=True)
            return

        if self.config.json_output:
            print(json.dumps(result.to_dict(), ensure_ascii=False), flush=True)
            return

        self.console.print(self.render_result(result))

    def render_result(self, result: AnalysisResult) -> Panel:
        """Build the detailed panel for one result."""
        grid = Table.grid(padding=(0, 2))
        grid.add_column(style="dim", no_wrap=True)
        grid.add_column()

        grid.add_row("Path", Text(result.file_path))
        grid.add_row("Format", Text(result.format or "-"))
        grid.add_row("Status", Text(result.status.value, style=_STATUS_STYLES[result.status]))

        if result.error:
            grid.add_row("Error", Text(result.error, style="yellow"))
            return Panel(grid, title=Text(os.path.basename(result.file_path)), expand=False)

        analysis = result.analysis
        grid.add_row("Sample rate", f"{analysis.sample_rate} Hz")
        grid.add_row("Bit depth", f"{analysis.bit_depth} bit")
        grid.add_row("Channels", str(analysis.channels))
        grid.add_row("Duration", f"{analysis.duration:.2f} s")

        metadata = result.metadata
        if metadata.title:
            grid.add_row("Title", Text(metadata.title))
        if metadata.artist:
            grid.add_row("Artist", Text(metadata.artist))
        if metadata.album:
            grid.add_row("Album", Text(metadata.album))

        grid.add_row("Max effective frequency", f"{analysis.max_frequency:.0f} Hz")
        if analysis.cutoff_hz > 0:
            grid.add_row("Cutoff frequency", f"{analysis.cutoff_hz:.0f} Hz")
        grid.add_row("Details", Text(analysis.details))

        if analysis.is_fake:
            verdict = Text("Warning: this may be a fake lossless file!", style="bold red")
        else:
            verdict = Text("File looks like genuine lossless audio", style="green")
        grid.add_row("", verdict)

        return Panel(grid, title=Text(os.path.basename(result.file_path)), expand=False)

    def get_results_summary(self) -> Dict[str, int]:
        """Count results per status."""
        with self.lock:
            summary = {"total": len(self.results)}
            for status in AnalysisStatus:
                summary[status.value] = sum(1 for r in self.results if r.status is status)
            return summary

    def print_summary(self) -> None:
        """Print summary statistics for the batch.

        Nothing is printed in quiet or JSON mode.
        """
        if not self.config.show_progress:
            return

        summary = self.get_results_summary()
        table = Table(title="Analysis summary", show_header=False)
        table.add_column()
        table.add_column(justify="right")
        table.add_row("Total files", str(summary["total"]))
        table.add_row("Genuine", str(summary[AnalysisStatus.OK.value]))
        table.add_row("Fake lossless", str(summary[AnalysisStatus.FAKE.value]))
        if summary[AnalysisStatus.ERROR.value]:
            table.add_row("Errors", str(summary[AnalysisStatus.ERROR.value]))
        self.console.print(table)

        fake = summary[AnalysisStatus.FAKE.value]
        if fake:
            self.console.print(
                f"[bold red]Found {fake} suspicious fake lossless file(s), further checking recommended![/]")
        else:
            self.console.print("[green]All files look like genuine lossless audio[/]")

    def shutdown(self) -> None:
        """Unsubscribe from the result topic."""
        if self.topic is None:
            return
        try:
            pub.unsubscribe(self.on_result, self.topic)
        except Exception as e:
            logger.warning(f"Error during unsubscribe: {e}")
        logger.info("ResultReporter shutdown complete")
