"""gitstate configuration.

This module provides the public API for gitstate configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from gitstate.config import Config
    >>> config = Config.load(include_env=False)
    >>> config.refresh.max_workers
    4
"""

from gitstate.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._loader import deep_merge, parse_env_vars, parse_string_value, read_toml_file, set_nested_key
from ._models import Config, LogFormat, LoggingConfig, LogLevel, RefreshConfig

__all__ = [
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "RefreshConfig",
    "deep_merge",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "set_nested_key",
]
