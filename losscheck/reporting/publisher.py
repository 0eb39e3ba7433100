"""Result publisher module for pub/sub event publishing."""

import logging
from typing import Callable
from pubsub import pub
from ..models.analysis import AnalysisResult

logger = logging.getLogger(__name__)

RESULT_TOPIC = "analysis.result"


class ResultPublisher:
    """Publishes analysis results using pubsub.pub."""
    
    def __init__(self, topic: str = RESULT_TOPIC):
        """Initialize result publisher.
        
        Args:
            topic: Pub/sub topic name for analysis results
        """
        self.topic = topic
        logger.info(f"ResultPublisher initialized with topic: {topic}")
    
    def publish_result(self, result: AnalysisResult) -> None:
        """Publish an analysis result to the pub/sub topic.
        
        Args:
            result: AnalysisResult to publish
        """
        pub.sendMessage(self.topic, result=result)
        logger.debug(f"Published result for {result.file_path} ({result.status.value})")
    
    def get_callback(self) -> Callable[[AnalysisResult], None]:
        """Get callback function for BatchScheduler to use.
        
        Returns:
            Callback function that publishes analysis results
        """
        return self.publish_result
