"""
Configuration defaults for mediasort.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import PROGRAM


class Config:
    """Read-only user defaults loaded from ~/.mediasort/config.yml."""

    def __init__(self, config_path: Optional[Path] = None):
        if config_path:
            self.config_path = Path(config_path)
        else:
            self.config_path = Path.home() / f".{PROGRAM}" / "config.yml"
        self.data = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            return {}

        try:
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logging.getLogger(PROGRAM).warning(f"Could not load config: {e}")
            return {}

        if not isinstance(data, dict):
            logging.getLogger(PROGRAM).warning(
                f"Ignoring config {self.config_path}: expected a mapping")
            return {}
        return data

    def get_target(self) -> Optional[str]:
        """Get the default target directory."""
        return self.data.get('target')

    def get_conflict_mode(self) -> str:
        """Get the conflict resolution mode (default: choose)."""
        return self.data.get('conflict_mode') or 'choose'

    def get_timezone(self) -> Optional[str]:
        """Get the timezone video creation times are converted to."""
        return self.data.get('timezone')

    def get_file_creation_fallback(self) -> bool:
        return bool(self.data.get('file_creation_fallback', False))

    def get_delete_skipped_duplicates(self) -> bool:
        return bool(self.data.get('delete_skipped_duplicates', False))

    def get_include_unsupported(self) -> bool:
        return bool(self.data.get('include_unsupported', False))
