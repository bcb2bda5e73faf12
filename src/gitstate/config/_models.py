"""Configuration models.

This module provides the Pydantic models for gitstate configuration
sections and the main Config container.
"""

import os
from enum import StrEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gitstate.config._loader import deep_merge, parse_env_vars, read_toml_file
from gitstate.exceptions import ConfigValidationError
from gitstate.utils._logging import create_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""


class RefreshConfig(BaseModel):
    """Refresh pipeline configuration section.

    Attributes:
        max_workers: Background threads running refreshes.
        locking_enabled: Whether to query the lock provider. When False the
            lock dimension is always UNKNOWN.
        current_branch: Checked-out branch; divergence reported against this
            branch is dropped.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    max_workers: int = Field(default=4, ge=1)
    locking_enabled: bool = True
    current_branch: str | None = None


class Config(BaseModel):
    """Configuration container with typed access.

    Use ``Config.load()`` or ``Config.from_dict()`` rather than the
    constructor so that validation errors surface as ConfigValidationError.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    refresh: RefreshConfig = Field(default_factory=RefreshConfig)

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],  # pyright: ignore[reportExplicitAny]
        *,
        source: str | None = None,
    ) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values, merged over the defaults.
            source: Where the values came from, reported on validation errors.

        Returns:
            Validated configuration.

        Raises:
            ConfigValidationError: If any value fails validation.
        """
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            error = e.errors()[0]
            key = ".".join(str(part) for part in error["loc"])
            msg = f"Invalid configuration value for '{key}'"
            raise ConfigValidationError(
                msg,
                key=key,
                value=error.get("input"),
                expected=error["msg"],
                source=source,
            ) from e

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a specific TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        return cls.from_dict(read_toml_file(path), source=str(path))

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        *,
        include_env: bool = True,
    ) -> Self:
        """Load merged configuration.

        Sources are merged in precedence order: defaults, then the TOML file
        (``path``, or ``GITSTATE_CONFIG`` when ``path`` is None), then
        ``GITSTATE_*`` environment variables.

        Args:
            path: TOML file to read. A missing file is an error only when
                given explicitly.
            include_env: Include environment variables as a source.

        Returns:
            Merged configuration.

        Raises:
            FileNotFoundError: If an explicit ``path`` does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        merged: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]
        source: str | None = None

        if path is not None:
            merged = read_toml_file(path)
            source = str(path)
        elif env_path := os.environ.get("GITSTATE_CONFIG"):
            candidate = Path(env_path)
            if candidate.is_file():
                merged = read_toml_file(candidate)
                source = str(candidate)

        if include_env:
            env_values = parse_env_vars()
            if env_values:
                merged = deep_merge(merged, env_values)
                source = "env" if source is None else f"{source}+env"

        return cls.from_dict(merged, source=source)

    def create_logger(self) -> "FilteringBoundLogger":  # noqa: UP037
        """Create a logger from the logging section."""
        return create_logger(
            level=self.logging.level.value,
            log_format=self.logging.format.value,
            log_file=self.logging.file,
        )
