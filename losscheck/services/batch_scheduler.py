"""Bounded worker pool that analyzes many files concurrently."""

import logging
import queue
import threading
from typing import Callable, Iterable, Iterator, List, Optional

from ..models.analysis import AnalysisResult
from ..models.config import AnalyzerConfig

logger = logging.getLogger(__name__)

# Marks the end of the result stream once every worker has exited
_STREAM_CLOSED = object()


class BatchScheduler:
    """Fans file paths out to a fixed pool of worker threads and fans results back in.

    Each ``run`` builds its own job queue, result queue and threads, so a
    scheduler can be reused for any number of batches.
    """

    def __init__(self,
                 analyze_file: Callable[[str], AnalysisResult],
                 config: AnalyzerConfig,
                 result_callback: Optional[Callable[[AnalysisResult], None]] = None):
        """Initialize the scheduler.

        Args:
            analyze_file: Callable producing the result for one path
                (normally a FileAnalyzer)
            config: Analyzer configuration; ``concurrency`` sets the pool size
            result_callback: Optional hook called from the consuming thread
                for every result, in stream order
        """
        self.analyze_file = analyze_file
        self.config = config
        self.pool_size = config.concurrency
        self.result_callback = result_callback

    def run(self, file_paths: Iterable[str]) -> Iterator[AnalysisResult]:
        """Analyze ``file_paths`` and yield one result per path in completion order.

        The iterator ends once every worker has drained the job queue.

        Raises:
            AssertionError: A job hit a broken internal invariant. Raised after
                the stream has been fully delivered.
        """
        jobs = list(file_paths)
        job_queue: "queue.Queue[Optional[str]]" = queue.Queue()
        result_queue: "queue.Queue[object]" = queue.Queue()
        defects: List[AssertionError] = []
        defects_lock = threading.Lock()

        for file_path in jobs:
            job_queue.put(file_path)
        # One sentinel per worker
        for _ in range(self.pool_size):
            job_queue.put(None)

        workers = []
        for i in range(self.pool_size):
            thread = threading.Thread(
                target=self._worker_loop,
                args=(job_queue, result_queue, defects, defects_lock),
            )
            thread.name = f"analysis_worker_{i}"
            thread.daemon = True
            thread.start()
            workers.append(thread)
        logger.info(f"Started {len(workers)} analysis workers for {len(jobs)} files")

        closer = threading.Thread(target=self._close_stream, args=(workers, result_queue))
        closer.name = "analysis_stream_closer"
        closer.daemon = True
        closer.start()

        emitted = 0
        while True:
            item = result_queue.get()
            if item is _STREAM_CLOSED:
                break
            emitted += 1
            if self.result_callback:
                self.result_callback(item)
            yield item

        logger.info(f"Batch complete: {emitted} results for {len(jobs)} files")
        if defects:
            raise defects[0]

    def analyze(self, file_paths: Iterable[str]) -> List[AnalysisResult]:
        """Run a batch to completion and return the results sorted by path."""
        return sorted(self.run(file_paths), key=lambda result: result.file_path)

    def _worker_loop(self, job_queue, result_queue, defects, defects_lock) -> None:
        """Take jobs until a sentinel arrives; every job yields exactly one result."""
        thread_name = threading.current_thread().name
        logger.debug(f"Worker thread {thread_name} starting")

        while True:
            file_path = job_queue.get()
            if file_path is None:
                logger.debug(f"Worker {thread_name} received sentinel, exiting.")
                break

            logger.debug(f"Worker {thread_name} analyzing {file_path}")
            try:
                result = self.analyze_file(file_path)
            except AssertionError as e:
                logger.critical(f"Broken invariant while analyzing {file_path}: {e}", exc_info=True)
                with defects_lock:
                    defects.append(e)
                result = AnalysisResult(file_path=file_path, error=f"internal error: {e}")
            except Exception as e:
                logger.error(f"Unhandled exception while analyzing {file_path}: {e}", exc_info=True)
                result = AnalysisResult(file_path=file_path, error=f"unexpected error: {e}")

            result_queue.put(result)

    @staticmethod
    def _close_stream(workers, result_queue) -> None:
        for thread in workers:
            thread.join()
        result_queue.put(_STREAM_CLOSED)
