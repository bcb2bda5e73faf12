"""Shared utilities for gitstate."""

from gitstate.utils._logging import LogFormatType, create_logger, get_default_logger

__all__ = [
    "LogFormatType",
    "create_logger",
    "get_default_logger",
]
