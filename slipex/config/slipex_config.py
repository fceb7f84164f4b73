"""
SlipEX Configuration Management

This module provides configuration management for SlipEX.
"""

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# Configure logging
logger = logging.getLogger(__name__)


class SlipEXConfig:
    """
    Manages system-wide configuration for SlipEX

    This class follows the singleton pattern to ensure only one configuration instance exists.
    It holds classifier and validation tunables plus logging settings.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, 'initialized'):
            # Initialize configuration
            self.config: Dict[str, Any] = {}

            # Load default configuration from file
            default_config_path = Path(__file__).parent / 'default_config.yaml'
            with open(default_config_path, 'r') as f:
                self.config = yaml.safe_load(f)

            # Load configuration from file if it exists
            self.config_file = Path.home() / '.slipex' / 'config.yaml'
            if self.config_file.exists():
                self._load_config(self.config_file)

            self.initialized = True

    @classmethod
    def from_file(cls, config_path: str) -> 'SlipEXConfig':
        """Load configuration overrides from file

        Args:
            config_path: Path to configuration file

        Returns:
            SlipEXConfig instance
        """
        instance = cls()
        try:
            instance._load_config(Path(config_path))
        except Exception as e:
            logger.error(f"Failed to load configuration from {config_path}: {str(e)}")
            raise
        return instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next access reloads defaults"""
        cls._instance = None

    def _load_config(self, path: Path) -> None:
        """Deep-merge a YAML file over the current configuration"""
        with open(path, 'r') as f:
            overrides = yaml.safe_load(f) or {}
        if not isinstance(overrides, dict):
            raise ValueError(f"Configuration file {path} must contain a mapping")
        self._update_config_recursive(self.config, overrides)
        logger.debug(f"Loaded configuration overrides from {path}")

    def _update_config_recursive(self, target: Dict[str, Any], source: Dict[str, Any]) -> None:
        """Recursively update nested configuration"""
        for key, value in source.items():
            if isinstance(value, dict) and isinstance(target.get(key), dict):
                self._update_config_recursive(target[key], value)
            else:
                target[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value

        Args:
            key: Configuration key (dot notation)
            default: Default value if key not found

        Returns:
            Configuration value
        """
        try:
            value = self.config
            for k in key.split('.'):
                value = value[k]
            return copy.deepcopy(value)
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Set configuration value

        Args:
            key: Configuration key (dot notation)
            value: Configuration value
        """
        keys = key.split('.')
        config = self.config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value

    def configure_logging(self, level: Optional[str] = None) -> None:
        """Apply logging settings; an explicit level wins over the configured one"""
        level_name = (level or self.get('logging.level', 'WARNING')).upper()
        numeric_level = getattr(logging, level_name, logging.WARNING)
        logging.basicConfig(
            level=numeric_level,
            format=self.get('logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
        )
        logging.getLogger('slipex').setLevel(numeric_level)
