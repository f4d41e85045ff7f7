"""
Launcher Configuration

Loads configuration from a YAML file, then applies environment variable overrides.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from launchopts import __version__

logger = logging.getLogger(__name__)


# Default configuration file locations (checked in order)
CONFIG_SEARCH_PATHS = [
    Path.home() / ".launchopts" / "config.yaml",
]


DEFAULT_CONFIG = {
    # Environment variable carrying inheritable options to child processes
    "inherit_variable": "WINEOPTIONS",
    # Characters read from the variable, terminator included
    "inherit_buffer_size": 1024,
    # Tokens accepted when replaying the variable
    "max_replay_tokens": 255,
    "release_info": f"launchopts {__version__}",
    "log_level": "WARNING",
}


CONFIG_TYPES = {
    "inherit_variable": str,
    "inherit_buffer_size": int,
    "max_replay_tokens": int,
    "release_info": str,
    "log_level": str,
}


ENV_OVERRIDES = {
    "LAUNCHOPTS_INHERIT_VARIABLE": "inherit_variable",
    "LAUNCHOPTS_INHERIT_BUFFER_SIZE": "inherit_buffer_size",
    "LAUNCHOPTS_MAX_REPLAY_TOKENS": "max_replay_tokens",
    "LAUNCHOPTS_RELEASE_INFO": "release_info",
    "LAUNCHOPTS_LOG_LEVEL": "log_level",
}


def convert_value(key: str, value: Any) -> Any:
    """
    Convert a raw file or environment value for a known key.

    Raises ValueError when the value does not fit the key's type; numbers
    must be positive.
    """
    convert = CONFIG_TYPES[key]
    if value is None or isinstance(value, (dict, list, bool)):
        raise ValueError(f"not a valid {convert.__name__}")
    try:
        converted = convert(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"not a valid {convert.__name__}") from e
    if convert is int and converted < 1:
        raise ValueError("must be positive")
    return converted


class LauncherConfig:
    """Configuration for the launcher front end."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._config: Dict[str, Any] = dict(DEFAULT_CONFIG)
        self._config_path: Optional[Path] = None

        self._load_config(config_path)
        self._apply_env_overrides(os.environ if environ is None else environ)

    def _load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML file."""
        search_paths = [Path(explicit_path)] if explicit_path else CONFIG_SEARCH_PATHS

        for config_path in search_paths:
            if config_path.exists():
                try:
                    with open(config_path, 'r', encoding='utf-8') as f:
                        user_config = yaml.safe_load(f) or {}
                    if not isinstance(user_config, dict):
                        raise ValueError("top level must be a mapping")
                    self._apply_values(user_config, str(config_path))
                    self._config_path = config_path
                    return
                except (OSError, ValueError, yaml.YAMLError) as e:
                    logger.warning(f"Failed to load config from {config_path}: {e}")

    def _apply_values(self, values: Mapping[str, Any], source: str) -> None:
        """Apply known keys from a config file; bad values keep the current setting."""
        for key, value in values.items():
            if key not in CONFIG_TYPES:
                logger.warning(f"Ignoring unknown config key {key!r} in {source}")
                continue
            try:
                self._config[key] = convert_value(key, value)
            except ValueError as e:
                logger.warning(f"Ignoring {key}={value!r} in {source}: {e}")

    def _apply_env_overrides(self, environ: Mapping[str, str]) -> None:
        """Apply environment variable overrides."""
        for env_var, config_key in ENV_OVERRIDES.items():
            if env_var in environ:
                try:
                    self._config[config_key] = convert_value(config_key, environ[env_var])
                except ValueError as e:
                    logger.warning(f"Ignoring {env_var}={environ[env_var]!r}: {e}")

    @property
    def config_path(self) -> Optional[Path]:
        """Path to loaded config file, or None if using defaults."""
        return self._config_path

    @property
    def inherit_variable(self) -> str:
        return str(self._config["inherit_variable"])

    @property
    def inherit_buffer_size(self) -> int:
        return int(self._config["inherit_buffer_size"])

    @property
    def max_replay_tokens(self) -> int:
        return int(self._config["max_replay_tokens"])

    @property
    def release_info(self) -> str:
        return str(self._config["release_info"])

    @property
    def log_level(self) -> int:
        """Logging level as a number; unknown names fall back to WARNING."""
        level = logging.getLevelName(str(self._config["log_level"]).upper())
        return level if isinstance(level, int) else logging.WARNING

    def to_dict(self) -> Dict[str, Any]:
        """Export current configuration as dict."""
        return {
            "inherit_variable": self.inherit_variable,
            "inherit_buffer_size": self.inherit_buffer_size,
            "max_replay_tokens": self.max_replay_tokens,
            "release_info": self.release_info,
            "log_level": logging.getLevelName(self.log_level),
            "config_path": str(self._config_path) if self._config_path else None,
        }


# Global config instance (lazy-loaded)
_config: Optional[LauncherConfig] = None


def get_config(config_path: Optional[Path] = None) -> LauncherConfig:
    """Get the global config instance, loading if needed."""
    global _config
    if _config is None or config_path is not None:
        _config = LauncherConfig(config_path)
    return _config
