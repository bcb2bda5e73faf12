# ruff: noqa: TC003  # Path needed at runtime for Protocol method bodies
"""Collaborator protocols for the refresh pipeline.

These runtime-checkable Protocols describe what the refresh pipeline needs
from the outside world: a status parser, a history provider, a lock provider
and a branch-divergence provider. Implementations live in the surrounding
tool; ``FakeProviders`` implements all four for tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gitstate.state._history import HistoryIndex
    from gitstate.state._models import BranchDivergence, LockInfo, StatusRecord


@runtime_checkable
class StatusRecordProvider(Protocol):
    """Supplies the raw status dimensions for a path."""

    def get_status_record(self, path: Path) -> StatusRecord:
        """Return the raw status record for a path.

        The lock dimension may be left UNKNOWN; the lock provider fills it in.
        """
        ...


@runtime_checkable
class HistoryProvider(Protocol):
    """Supplies revision history for a path."""

    def get_history(self, path: Path) -> HistoryIndex:
        """Return the revision history for a path, newest first."""
        ...

    def get_merge_base(self, path: Path) -> str | None:
        """Return the revision the local copy diverged from, if any."""
        ...


@runtime_checkable
class LockProvider(Protocol):
    """Supplies exclusive-lock information for a path."""

    def get_lock(self, path: Path) -> LockInfo:
        """Return the lock state and, when locked, the owner identity."""
        ...


@runtime_checkable
class BranchDivergenceProvider(Protocol):
    """Supplies where the latest commit for a path lives."""

    def get_branch_divergence(self, path: Path) -> BranchDivergence | None:
        """Return the divergent-branch descriptor, or None when on this branch."""
        ...
