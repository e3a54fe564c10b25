"""Configuration manager for loading client settings from YAML and the environment."""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List

from ..models.config import Config, BASE_URL
from ..utils.error_handler import ConfigurationError
from ..utils.logging_config import get_logger


class ConfigManager:
    """Manages client configuration from files and environment variables."""

    ENV_MAPPINGS = {
        'OMDB_API_KEY': ['omdb', 'api_key'],
        'OMDB_BASE_URL': ['omdb', 'base_url'],
        'OMDB_TIMEOUT': ['network', 'timeout'],
        'PYOMDB_LOG_LEVEL': ['logging', 'level'],
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_file: Path to the configuration file. If None, uses default locations.
        """
        self.logger = get_logger(__name__)
        self.config_file = config_file or self._find_config_file()
        self._config_data: Optional[Dict[str, Any]] = None
        self._config: Optional[Config] = None

    def _find_config_file(self) -> Optional[str]:
        """Find the configuration file in default locations."""
        possible_paths = [
            os.getenv('PYOMDB_CONFIG'),
            'pyomdb.yaml',
            'config/pyomdb.yaml',
            os.path.expanduser('~/.config/pyomdb/config.yaml'),
        ]

        for path in possible_paths:
            if path and Path(path).exists():
                self.logger.debug(f"Found config file: {path}")
                return path

        return None

    def load_config(self) -> Dict[str, Any]:
        """
        Load configuration from file and environment variables.

        Returns:
            Dictionary containing all configuration data

        Raises:
            ConfigurationError: If the config file is unreadable or invalid YAML
        """
        if self._config_data is not None:
            return self._config_data

        if self.config_file is None:
            self.logger.debug("No config file found, using defaults")
            self._config_data = {}
        else:
            config_path = Path(self.config_file)
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
            except FileNotFoundError as e:
                raise ConfigurationError(f"Config file not found: {config_path}") from e
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file {config_path}: {e}") from e

            if not isinstance(data, dict):
                raise ConfigurationError(f"Config file {config_path} must contain a mapping")

            self._config_data = data
            self.logger.debug(f"Loaded config from: {config_path}")

        self._apply_env_overrides()
        self._merge_defaults(self._config_data, self._get_default_config())

        return self._config_data

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        return {
            'omdb': {
                'base_url': BASE_URL,
                'api_key': None,
            },
            'network': {
                'timeout': 30,
                'user_agent': None,
            },
            'logging': {
                'level': 'INFO',
                'file': None,
            },
        }

    def _merge_defaults(self, target: Dict[str, Any], defaults: Dict[str, Any]) -> None:
        """Recursively merge default values without overwriting user-defined settings."""
        for key, default_value in defaults.items():
            if key not in target:
                target[key] = default_value.copy() if isinstance(default_value, dict) else default_value
            else:
                current_value = target[key]
                if isinstance(default_value, dict) and isinstance(current_value, dict):
                    self._merge_defaults(current_value, default_value)

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to configuration."""
        for env_var, config_path in self.ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value is None:
                continue

            if env_var == 'OMDB_TIMEOUT':
                try:
                    value = float(value)
                except ValueError:
                    self.logger.warning(f"Invalid numeric value for {env_var}: {value}")
                    continue

            self._set_nested_value(self._config_data, config_path, value)
            # The key itself is never logged
            self.logger.debug(f"Applied env override: {env_var}")

    def _set_nested_value(self, data: Dict[str, Any], path: List[str], value: Any) -> None:
        """Set a nested value in the configuration dictionary."""
        current = data
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., 'omdb.base_url')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if self._config_data is None:
            self.load_config()

        current = self._config_data
        try:
            for k in key.split('.'):
                current = current[k]
            return current
        except (KeyError, TypeError):
            return default

    def get_config(self, **overrides: Any) -> Config:
        """
        Get the configuration as a Config object.

        Args:
            **overrides: Config fields that take precedence over file and environment
                (None values are ignored)

        Returns:
            Config object with all settings

        Raises:
            ConfigurationError: If configuration is invalid
        """
        overrides = {k: v for k, v in overrides.items() if v is not None}
        if self._config is not None and not overrides:
            return self._config

        config_dict = {
            'base_url': self.get('omdb.base_url'),
            'api_key': self.get('omdb.api_key'),
            'timeout': self.get('network.timeout'),
            'user_agent': self.get('network.user_agent'),
            'log_level': self.get('logging.level'),
        }
        config_dict.update(overrides)

        # Remove None values
        config_dict = {k: v for k, v in config_dict.items() if v is not None}

        # YAML may give a number for the key
        if 'api_key' in config_dict:
            config_dict['api_key'] = str(config_dict['api_key'])

        try:
            config = Config(**config_dict)
        except (TypeError, ValueError) as e:
            self.logger.error(f"Error creating Config object: {e}")
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        if not overrides:
            self._config = config
        return config

    def validate_config(self) -> List[str]:
        """
        Validate the configuration and return any errors.

        Returns:
            List of validation error messages
        """
        errors = []

        try:
            config = self.get_config()
        except ConfigurationError as e:
            return [str(e)]

        if not config.has_api_key:
            errors.append("No API key configured (set OMDB_API_KEY or omdb.api_key)")

        return errors

    def reload_config(self) -> None:
        """Reload configuration from file."""
        self._config_data = None
        self._config = None
        self.load_config()
