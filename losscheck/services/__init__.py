"""Services layer for losscheck batch processing."""

from .batch_scheduler import BatchScheduler

__all__ = [
    "BatchScheduler",
]
