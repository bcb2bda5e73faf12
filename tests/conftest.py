"""Shared test fixtures for gitstate tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from gitstate.state import FakeProviders, StatusCache
from gitstate.utils import create_logger

if TYPE_CHECKING:
    from pendulum import DateTime
    from structlog.typing import FilteringBoundLogger


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    """Path of the log file written by the ``logger`` fixture."""
    return tmp_path / "logs" / "gitstate.log"


@pytest.fixture
def logger(log_file: Path, monkeypatch: pytest.MonkeyPatch) -> FilteringBoundLogger:
    """Debug-level JSON logger writing to ``log_file``."""
    monkeypatch.delenv("GITSTATE_DEBUG", raising=False)
    return create_logger(level="debug", log_file=str(log_file))


@pytest.fixture
def cache(logger: FilteringBoundLogger) -> StatusCache:
    return StatusCache(logger=logger)


@pytest.fixture
def fake() -> FakeProviders:
    return FakeProviders()


FreezeTimeFunc = Callable[[int, int, int, int, int, int], "DateTime"]


@pytest.fixture
def freeze_time(monkeypatch: pytest.MonkeyPatch) -> FreezeTimeFunc:
    """Return a function to freeze pendulum.now() to a fixed time."""
    import pendulum

    real_now = pendulum.now

    def _freeze(
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
    ) -> DateTime:
        fixed = pendulum.datetime(year, month, day, hour, minute, second, tz="UTC")

        def mock_now(tz: str | None = None) -> DateTime:
            return fixed if tz == "UTC" else real_now(tz)

        monkeypatch.setattr("pendulum.now", mock_now)
        return fixed

    return _freeze
