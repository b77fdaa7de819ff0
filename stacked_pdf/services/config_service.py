"""
Configuration Service - Manages persisted generator defaults.

This service handles loading and saving user defaults to/from a JSON file,
falling back to built-in defaults when the file is missing or unreadable.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ..models import GeneratorDefaults

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".stacked_pdf.json"


class ConfigService:
    """
    Manages generator defaults persistence.

    Loading never fails: a missing or corrupted file yields built-in
    defaults. Saving is best-effort and only logs on failure.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize config service.

        Args:
            config_path: Optional custom config file path.
                        If None, uses .stacked_pdf.json in the user's home directory.
        """
        if config_path is None:
            config_path = Path.home() / CONFIG_FILENAME

        self.config_path = Path(config_path)

    def load(self) -> GeneratorDefaults:
        """
        Load defaults from file.

        Returns:
            GeneratorDefaults with loaded settings, or defaults if the file
            doesn't exist or is invalid
        """
        if not self.config_path.exists():
            return GeneratorDefaults()

        try:
            with open(self.config_path) as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("config root must be an object")
            return GeneratorDefaults.from_dict(data)

        except (json.JSONDecodeError, OSError, ValueError) as e:
            logger.warning("Failed to load config from %s: %s; using defaults", self.config_path, e)
            return GeneratorDefaults()

    def save(self, defaults: GeneratorDefaults) -> bool:
        """
        Save defaults to file.

        Returns:
            True if the file was written, False otherwise
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, 'w') as f:
                json.dump(defaults.to_dict(), f, indent=2)
            return True

        except OSError as e:
            logger.warning("Failed to save config to %s: %s", self.config_path, e)
            return False

    def reset_to_defaults(self) -> bool:
        """
        Delete config file to reset to defaults.

        Returns:
            True if config was deleted, False if it didn't exist or couldn't be deleted
        """
        try:
            if self.config_path.exists():
                self.config_path.unlink()
                return True
            return False

        except OSError as e:
            logger.warning("Failed to delete config file %s: %s", self.config_path, e)
            return False
