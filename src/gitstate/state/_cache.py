"""Path-keyed table of status handles.

The cache owns one ``FileStatusHandle`` per tracked path. Handles are shared:
the table, in-flight refreshes and readers may all hold the same object.
Removing a path retracts its handle so that refreshes still in flight for it
are discarded when they complete.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import TYPE_CHECKING, Final

from gitstate.exceptions import HandleNotTrackedError
from gitstate.state._handle import FileStatusHandle, RefreshTicket
from gitstate.utils._logging import get_default_logger

if TYPE_CHECKING:
    from collections.abc import Iterator
    from datetime import datetime

    from structlog.typing import FilteringBoundLogger

    from gitstate.state._history import HistoryIndex
    from gitstate.state._models import BranchDivergence, StatusRecord
    from gitstate.state._snapshot import StatusSnapshot


class StatusCache:
    """Thread-safe table of status handles keyed by path.

    Example:
        >>> cache = StatusCache()
        >>> handle = cache.track("Content/Hero.uasset")
        >>> cache.get("Content/Hero.uasset") is handle
        True
        >>> cache.retract("Content/Hero.uasset")
        True
    """

    __slots__: Final = ("_handles", "_lock", "_logger")

    def __init__(self, *, logger: FilteringBoundLogger | None = None) -> None:
        """Initialize an empty cache.

        Args:
            logger: Logger shared with every handle this cache creates.
        """
        self._handles: dict[Path, FileStatusHandle] = {}
        self._lock: threading.Lock = threading.Lock()
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_default_logger()
        )

    def track(self, path: Path | str) -> FileStatusHandle:
        """Return the handle for a path, creating it on first observation."""
        key = Path(path)
        with self._lock:
            handle = self._handles.get(key)
            if handle is None:
                handle = FileStatusHandle(key, logger=self._logger)
                self._handles[key] = handle
                self._logger.debug("path_tracked", path=str(key))
            return handle

    def get(self, path: Path | str) -> FileStatusHandle | None:
        """Return the handle for a path, or None when it is not tracked."""
        with self._lock:
            return self._handles.get(Path(path))

    def __getitem__(self, path: Path | str) -> FileStatusHandle:
        handle = self.get(path)
        if handle is None:
            msg = f"Path is not tracked: {path}"
            raise HandleNotTrackedError(msg, path=Path(path))
        return handle

    def retract(self, path: Path | str) -> bool:
        """Stop tracking a path.

        Returns:
            True if the path was tracked.
        """
        key = Path(path)
        with self._lock:
            handle = self._handles.pop(key, None)
        if handle is None:
            return False
        handle.retract()
        self._logger.debug("path_retracted", path=str(key))
        return True

    def begin_refresh(self, path: Path | str) -> RefreshTicket:
        """Track the path if needed and start a refresh cycle for it."""
        return self.track(path).begin_refresh()

    def apply(  # noqa: PLR0913
        self,
        ticket: RefreshTicket,
        record: StatusRecord,
        history: HistoryIndex | None,
        lock_owner: str | None,
        branch_divergence: BranchDivergence | None,
        timestamp: datetime,
        *,
        merge_base: str | None = None,
    ) -> bool:
        """Apply a refresh result to the handle the ticket was issued for.

        Returns:
            False when the path is no longer tracked or the ticket has been
            superseded.
        """
        handle = self.get(ticket.path)
        if handle is None:
            self._logger.debug("refresh_discarded", path=str(ticket.path), tracked=False)
            return False
        return handle.apply_refresh(
            record,
            history,
            lock_owner,
            branch_divergence,
            timestamp,
            merge_base=merge_base,
            ticket=ticket,
        )

    def paths(self) -> list[Path]:
        """Return tracked paths in sorted order."""
        with self._lock:
            return sorted(self._handles)

    def snapshots(self) -> dict[Path, StatusSnapshot]:
        """Return the current snapshot of every tracked path."""
        with self._lock:
            handles = list(self._handles.values())
        return {handle.path: handle.snapshot for handle in handles}

    def clear(self) -> None:
        """Retract every handle."""
        with self._lock:
            handles = list(self._handles.values())
            self._handles.clear()
        for handle in handles:
            handle.retract()

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        with self._lock:
            return Path(path) in self._handles

    def __len__(self) -> int:
        with self._lock:
            return len(self._handles)

    def __iter__(self) -> Iterator[FileStatusHandle]:
        with self._lock:
            handles = list(self._handles.values())
        return iter(handles)
