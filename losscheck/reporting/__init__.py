"""Result publishing and reporting for losscheck."""

from .publisher import ResultPublisher, RESULT_TOPIC
from .reporter import ResultReporter

__all__ = [
    "ResultPublisher",
    "ResultReporter",
    "RESULT_TOPIC",
]
