"""gitstate exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class GitStateError(Exception):
    """Base exception for gitstate errors."""


# =============================================================================
# Status Exceptions
# =============================================================================


class HistoryIndexOutOfRangeError(GitStateError, IndexError):
    """Raised when a history position lies outside ``[0, size)``.

    Attributes:
        position: The requested position.
        size: Number of entries in the history index.
    """

    def __init__(self, message: str, *, position: int, size: int) -> None:
        """Initialize with error message and bounds context.

        Args:
            message: Human-readable error message.
            position: The requested position.
            size: Number of entries in the history index.
        """
        super().__init__(message)
        self.position: int = position
        self.size: int = size


class HandleNotTrackedError(GitStateError, KeyError):
    """Raised when a path has no status handle in the cache.

    Attributes:
        path: The path that is not tracked.
    """

    def __init__(self, message: str, *, path: Path) -> None:
        """Initialize with error message and path context."""
        super().__init__(message)
        self.path: Path = path


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GitStateError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
