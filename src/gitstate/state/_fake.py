# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Fake collaborators for testing.

This module provides a FakeProviders class that implements every collaborator
protocol from in-memory dictionaries, for use in tests without a real
repository or lock server.
"""

from dataclasses import dataclass, field
from pathlib import Path

from gitstate.state._history import HistoryEntry, HistoryIndex
from gitstate.state._models import BranchDivergence, LockInfo, StatusRecord


@dataclass(slots=True)
class FakeProviders:
    """In-memory status, history, lock and branch-divergence provider.

    Unknown paths get default answers: a default record, empty history, no
    merge base, UNKNOWN lock and no divergence. Paths listed in ``failures``
    raise the mapped exception from ``get_status_record``.

    Example:
        >>> from gitstate.enums import TreeState
        >>> fake = FakeProviders()
        >>> fake.set_record(Path("a.txt"), StatusRecord(tree_state=TreeState.UNTRACKED))
        >>> fake.get_status_record(Path("a.txt")).tree_state
        <TreeState.UNTRACKED: 'untracked'>
    """

    records: dict[Path, StatusRecord] = field(default_factory=dict)
    histories: dict[Path, HistoryIndex] = field(default_factory=dict)
    merge_bases: dict[Path, str] = field(default_factory=dict)
    locks: dict[Path, LockInfo] = field(default_factory=dict)
    divergences: dict[Path, BranchDivergence] = field(default_factory=dict)
    failures: dict[Path, Exception] = field(default_factory=dict)
    calls: list[tuple[str, Path]] = field(default_factory=list)

    # =========================================================================
    # Scenario Helpers
    # =========================================================================

    def set_record(self, path: Path, record: StatusRecord) -> None:
        self.records[path] = record

    def set_history(self, path: Path, entries: list[HistoryEntry]) -> None:
        self.histories[path] = HistoryIndex(entries)

    def set_lock(self, path: Path, lock: LockInfo) -> None:
        self.locks[path] = lock

    def set_divergence(self, path: Path, divergence: BranchDivergence) -> None:
        self.divergences[path] = divergence

    # =========================================================================
    # Protocol Methods
    # =========================================================================

    def get_status_record(self, path: Path) -> StatusRecord:
        self.calls.append(("status", path))
        failure = self.failures.get(path)
        if failure is not None:
            raise failure
        return self.records.get(path, StatusRecord())

    def get_history(self, path: Path) -> HistoryIndex:
        self.calls.append(("history", path))
        return self.histories.get(path, HistoryIndex.empty())

    def get_merge_base(self, path: Path) -> str | None:
        return self.merge_bases.get(path)

    def get_lock(self, path: Path) -> LockInfo:
        self.calls.append(("lock", path))
        return self.locks.get(path, LockInfo())

    def get_branch_divergence(self, path: Path) -> BranchDivergence | None:
        self.calls.append(("divergence", path))
        return self.divergences.get(path)
