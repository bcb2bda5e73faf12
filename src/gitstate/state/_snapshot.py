# ruff: noqa: TC003  # datetime needed at runtime for dataclass fields
"""Immutable status snapshots.

A snapshot bundles everything a reader may look at for one file at one
refresh instant. Handles swap whole snapshots; fields are never updated
individually.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Self

from gitstate.enums import ConsolidatedStatus
from gitstate.state._history import HistoryEntry, HistoryIndex
from gitstate.state._models import BranchDivergence, StatusRecord
from gitstate.state._resolver import resolve_status


@dataclass(frozen=True, slots=True)
class StatusSnapshot:
    """Consistent bundle of status fields for one file.

    ``status`` is not a constructor argument; it is always resolved from
    ``record``.

    Attributes:
        record: Raw status dimensions.
        status: Consolidated status resolved from ``record``.
        history: Revision history, newest first.
        lock_owner: Identity of the lock holder, if any.
        merge_base: Revision the local copy diverged from while a conflict is
            unresolved.
        branch_divergence: Branch holding the latest commit when it is not the
            checked-out one.
        timestamp: When the refresh that produced this snapshot completed.
    """

    record: StatusRecord = field(default_factory=StatusRecord)
    status: ConsolidatedStatus = field(init=False, default=ConsolidatedStatus.NONE)
    history: HistoryIndex = field(default_factory=HistoryIndex.empty)
    lock_owner: str | None = None
    merge_base: str | None = None
    branch_divergence: BranchDivergence | None = None
    timestamp: datetime | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", resolve_status(self.record))

    @classmethod
    def build(
        cls,
        record: StatusRecord,
        *,
        history: HistoryIndex | None = None,
        lock_owner: str | None = None,
        merge_base: str | None = None,
        branch_divergence: BranchDivergence | None = None,
        timestamp: datetime | None = None,
    ) -> Self:
        """Create a snapshot, resolving the consolidated status from the record."""
        return cls(
            record=record,
            history=history if history is not None else HistoryIndex.empty(),
            lock_owner=lock_owner,
            merge_base=merge_base,
            branch_divergence=branch_divergence,
            timestamp=timestamp,
        )

    @classmethod
    def initial(cls) -> Self:
        """Return the snapshot of a handle that has never been refreshed."""
        return cls()

    @property
    def is_initialized(self) -> bool:
        """True once a refresh has been applied."""
        return self.timestamp is not None

    def base_for_merge(self) -> HistoryEntry | None:
        """Resolve this snapshot's merge base against its history."""
        return self.history.base_for_merge(self.merge_base)
