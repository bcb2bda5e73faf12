"""Per-file status handle.

A ``FileStatusHandle`` is the long-lived object the surrounding tool keeps for
each tracked path. It holds a single reference to an immutable
``StatusSnapshot``; a refresh builds a new snapshot off to the side and swaps
the reference, so readers see either the old snapshot or the new one in full.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Final

from gitstate.state._capabilities import Capabilities, derive_capabilities
from gitstate.state._snapshot import StatusSnapshot
from gitstate.utils._logging import get_default_logger

if TYPE_CHECKING:
    from datetime import datetime

    from structlog.typing import FilteringBoundLogger

    from gitstate.enums import ConsolidatedStatus
    from gitstate.state._history import HistoryEntry, HistoryIndex
    from gitstate.state._models import BranchDivergence, StatusRecord

# Generations are unique across handles, so a ticket issued by a retracted
# handle never equals one issued by its replacement.
_generations = itertools.count(1)


@dataclass(frozen=True, slots=True)
class RefreshTicket:
    """Token captured when a refresh starts.

    A ticket is only honoured if no later refresh has started for the same
    handle and the handle is still tracked when the result arrives.

    Attributes:
        path: Path of the handle the refresh targets.
        generation: Process-wide unique number identifying the refresh cycle.
    """

    path: Path
    generation: int


class FileStatusHandle:
    """Shared, swappable status snapshot for one tracked path.

    Accessors each read the current snapshot once. Code that needs several
    fields from the same refresh should read ``snapshot`` once and work on it.

    Example:
        >>> handle = FileStatusHandle(Path("Content/Hero.uasset"))
        >>> handle.status
        <ConsolidatedStatus.NONE: 'none'>
        >>> handle.capabilities().is_unknown
        True
    """

    __slots__: Final = (
        "_generation",
        "_lock",
        "_logger",
        "_path",
        "_retracted",
        "_snapshot",
    )

    def __init__(
        self,
        path: Path | str,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize an uninitialized handle.

        Args:
            path: Path of the tracked file.
            logger: Logger for refresh diagnostics.
        """
        self._path: Path = Path(path)
        self._snapshot: StatusSnapshot = StatusSnapshot.initial()
        self._generation: int = 0
        self._retracted: bool = False
        self._lock: threading.Lock = threading.Lock()
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_default_logger()
        )

    # =========================================================================
    # Snapshot Accessors
    # =========================================================================

    @property
    def path(self) -> Path:
        return self._path

    @property
    def snapshot(self) -> StatusSnapshot:
        """The current snapshot. Never partially updated."""
        return self._snapshot

    @property
    def record(self) -> StatusRecord:
        return self._snapshot.record

    @property
    def status(self) -> ConsolidatedStatus:
        return self._snapshot.status

    @property
    def history(self) -> HistoryIndex:
        return self._snapshot.history

    @property
    def lock_owner(self) -> str | None:
        return self._snapshot.lock_owner

    @property
    def merge_base(self) -> str | None:
        return self._snapshot.merge_base

    @property
    def branch_divergence(self) -> BranchDivergence | None:
        return self._snapshot.branch_divergence

    @property
    def last_refresh(self) -> datetime | None:
        """When the current snapshot was produced, None before the first refresh."""
        return self._snapshot.timestamp

    @property
    def is_initialized(self) -> bool:
        return self._snapshot.is_initialized

    @property
    def is_retracted(self) -> bool:
        """True once the path is no longer tracked."""
        return self._retracted

    def capabilities(self, current_branch: str | None = None) -> Capabilities:
        """Compute capability predicates from the current snapshot."""
        return derive_capabilities(self._snapshot, current_branch)

    def base_for_merge(self) -> HistoryEntry | None:
        """Resolve the merge base against the history of the same snapshot."""
        return self._snapshot.base_for_merge()

    # =========================================================================
    # Refresh
    # =========================================================================

    def begin_refresh(self) -> RefreshTicket:
        """Start a refresh cycle and return its ticket.

        Any ticket issued earlier becomes stale.
        """
        with self._lock:
            self._generation = next(_generations)
            return RefreshTicket(path=self._path, generation=self._generation)

    def is_stale(self, ticket: RefreshTicket) -> bool:
        """Check whether a ticket can no longer be applied to this handle."""
        return (
            self._retracted
            or ticket.path != self._path
            or ticket.generation != self._generation
        )

    def apply_refresh(  # noqa: PLR0913
        self,
        record: StatusRecord,
        history: HistoryIndex | None,
        lock_owner: str | None,
        branch_divergence: BranchDivergence | None,
        timestamp: datetime,
        *,
        merge_base: str | None = None,
        ticket: RefreshTicket | None = None,
    ) -> bool:
        """Replace the snapshot with one built from fresh collaborator output.

        The new snapshot is built before the handle's lock is taken and is
        swapped in with a single assignment.

        Args:
            record: Raw status dimensions.
            history: Revision history, newest first.
            lock_owner: Lock holder identity, if any.
            branch_divergence: Divergent-branch descriptor, if any.
            timestamp: When the refresh completed.
            merge_base: Merge-base revision while a conflict is unresolved.
            ticket: Ticket from ``begin_refresh()``. Without a ticket the
                refresh is applied unless the handle was retracted, and it
                supersedes every ticket issued before it.

        Returns:
            True if the snapshot was replaced, False if the result was stale
            and has been discarded.
        """
        snapshot = StatusSnapshot.build(
            record,
            history=history,
            lock_owner=lock_owner,
            merge_base=merge_base,
            branch_divergence=branch_divergence,
            timestamp=timestamp,
        )
        with self._lock:
            if self._retracted or (ticket is not None and self.is_stale(ticket)):
                self._logger.debug(
                    "refresh_discarded",
                    path=str(self._path),
                    ticket_generation=ticket.generation if ticket else None,
                    generation=self._generation,
                    retracted=self._retracted,
                )
                return False
            if ticket is None:
                self._generation = next(_generations)
            previous = self._snapshot
            self._snapshot = snapshot

        self._logger.debug(
            "refresh_applied",
            path=str(self._path),
            status=snapshot.status.value,
            changed=previous.record != snapshot.record,
        )
        return True

    def retract(self) -> None:
        """Stop tracking; outstanding tickets can no longer be applied."""
        with self._lock:
            self._retracted = True

    def __repr__(self) -> str:
        return f"FileStatusHandle(path={str(self._path)!r}, status={self.status.value!r})"
