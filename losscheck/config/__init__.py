"""YAML settings file for losscheck.

Every key is optional; command line options override the file and built-in
defaults fill in the rest. See ``losscheck.example.yaml`` for the layout.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional
import logging

from ..models.config import AnalyzerConfig, DEFAULT_CUTOFF_FREQ, DEFAULT_WINDOW_SIZE, default_concurrency

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class LossCheckConfig:
    """Settings read from an optional YAML file, addressed with dotted keys."""

    def __init__(self, config_path: Optional[str] = None):
        """Load settings.

        Args:
            config_path: YAML file to read. Without one, every setting keeps
                        its built-in default.

        Raises:
            FileNotFoundError: If ``config_path`` does not exist
            ValueError: If the file is not a valid YAML mapping
        """
        self.config_file = Path(config_path) if config_path else None
        self.config: Dict[str, Any] = {}

        if self.config_file is None:
            return
        if not self.config_file.is_file():
            raise FileNotFoundError(f"Configuration file not found: {self.config_file}")

        logger.info(f"Reading settings from {self.config_file}")
        self.config = self._read_file()

    def _read_file(self) -> Dict[str, Any]:
        try:
            text = self.config_file.read_text(encoding='utf-8')
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {self.config_file}: {e}")
        except OSError as e:
            raise ValueError(f"Cannot read {self.config_file}: {e}")

        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.config_file} must contain a mapping of settings")

        self._anchor_log_file(data)
        logger.debug(f"Settings loaded: {sorted(data)}")
        return data

    def _anchor_log_file(self, data: Dict[str, Any]) -> None:
        """Make a relative ``logging.file_path`` relative to the settings file."""
        section = data.get('logging')
        if not isinstance(section, dict) or not section.get('file_path'):
            return
        log_path = str(section['file_path'])
        if not os.path.isabs(log_path):
            section['file_path'] = str(self.config_file.parent / log_path)

    def get(self, key_path: str, default: Any = None) -> Any:
        """Look up a dotted key such as ``'analysis.cutoff_freq'``.

        Returns:
            The stored value, or ``default`` when any part of the path is missing
        """
        node: Any = self.config
        for part in key_path.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key_path: str, value: Any) -> None:
        """Store ``value`` under a dotted key, creating sections on the way."""
        *sections, leaf = key_path.split('.')
        node = self.config
        for part in sections:
            node = node.setdefault(part, {})
        node[leaf] = value
        logger.debug(f"Setting {key_path} = {value!r}")

    def log_level(self, override: Optional[str] = None) -> str:
        """Return the logging level name, preferring ``override``.

        Raises:
            ValueError: If the level is not one of LOG_LEVELS
        """
        level = str(override or self.get('logging.level', 'INFO')).upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid logging.level {level!r}, expected one of {', '.join(LOG_LEVELS)}")
        return level

    def to_analyzer_config(self, **overrides: Any) -> AnalyzerConfig:
        """Build the immutable analyzer configuration.

        Args:
            **overrides: AnalyzerConfig fields that take precedence over the
                        file (None values are ignored)

        Returns:
            AnalyzerConfig for one batch run

        Raises:
            ValueError: If a setting is out of range or not a number
        """
        concurrency = self.get('analysis.concurrency')
        try:
            values = {
                'cutoff_freq': float(self.get('analysis.cutoff_freq', DEFAULT_CUTOFF_FREQ)),
                'concurrency': int(concurrency if concurrency is not None else default_concurrency()),
                'window_size': int(self.get('analysis.window_size', DEFAULT_WINDOW_SIZE)),
                'quiet': bool(self.get('output.quiet', False)),
                'only_fake': bool(self.get('output.only_fake', False)),
                'json_output': bool(self.get('output.json', False)),
            }
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid analysis setting in configuration: {e}")

        values.update({key: value for key, value in overrides.items() if value is not None})
        return AnalyzerConfig(**values)
