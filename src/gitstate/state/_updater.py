"""Background refresh pipeline.

The updater gathers fresh collaborator output for a path on a worker thread
and applies it to the cache through a refresh ticket. Readers on the
foreground thread keep seeing the previous snapshot until the swap.

Example:
    >>> from gitstate.state import FakeProviders, StatusCache
    >>> fake = FakeProviders()
    >>> with StatusUpdater(StatusCache(), fake) as updater:
    ...     applied = updater.refresh("Content/Hero.uasset").result()
    >>> applied
    True
"""

from __future__ import annotations

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Final, Self

import pendulum

from gitstate.config import RefreshConfig
from gitstate.enums import FileState, LockState
from gitstate.state._history import HistoryIndex
from gitstate.state._protocol import BranchDivergenceProvider, HistoryProvider, LockProvider
from gitstate.utils._logging import get_default_logger

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime
    from types import TracebackType

    from structlog.typing import FilteringBoundLogger

    from gitstate.state._cache import StatusCache
    from gitstate.state._handle import RefreshTicket
    from gitstate.state._models import BranchDivergence, LockInfo
    from gitstate.state._protocol import StatusRecordProvider

_LOCK_HELD: Final = frozenset({LockState.LOCKED, LockState.LOCKED_OTHER})


def _utc_now() -> datetime:
    return pendulum.now("UTC")


class StatusUpdater:
    """Runs refreshes for tracked paths on a thread pool.

    Refreshes for one path are serialized through tickets: requesting a new
    refresh makes every earlier ticket for that path stale, so an older result
    that finishes late is discarded instead of overwriting a newer one.

    Attributes:
        cache: The cache whose handles are refreshed.
    """

    __slots__: Final = (
        "_branch_provider",
        "_clock",
        "_config",
        "_executor",
        "_history_provider",
        "_lock",
        "_lock_provider",
        "_logger",
        "_pending",
        "_status_provider",
        "cache",
    )

    def __init__(  # noqa: PLR0913
        self,
        cache: StatusCache,
        status_provider: StatusRecordProvider,
        *,
        history_provider: HistoryProvider | None = None,
        lock_provider: LockProvider | None = None,
        branch_provider: BranchDivergenceProvider | None = None,
        config: RefreshConfig | None = None,
        logger: FilteringBoundLogger | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the updater.

        When ``status_provider`` also implements the other collaborator
        protocols (as ``FakeProviders`` does), it is used for them unless a
        dedicated provider is given.

        Args:
            cache: Cache holding the handles to refresh.
            status_provider: Supplies raw status records.
            history_provider: Supplies revision history and merge bases.
            lock_provider: Supplies lock state and owner.
            branch_provider: Supplies divergent-branch descriptors.
            config: Refresh settings (worker count, locking, current branch).
            logger: Logger for refresh diagnostics.
            clock: Returns the refresh timestamp; defaults to UTC now.
        """
        self.cache: StatusCache = cache
        self._config: RefreshConfig = config if config is not None else RefreshConfig()
        self._status_provider: StatusRecordProvider = status_provider
        self._history_provider: HistoryProvider | None = history_provider or (
            status_provider if isinstance(status_provider, HistoryProvider) else None
        )
        self._lock_provider: LockProvider | None = lock_provider or (
            status_provider if isinstance(status_provider, LockProvider) else None
        )
        self._branch_provider: BranchDivergenceProvider | None = branch_provider or (
            status_provider
            if isinstance(status_provider, BranchDivergenceProvider)
            else None
        )
        self._logger: FilteringBoundLogger = (
            logger if logger is not None else get_default_logger()
        )
        self._clock: Callable[[], datetime] = clock if clock is not None else _utc_now
        self._executor: ThreadPoolExecutor = ThreadPoolExecutor(
            max_workers=self._config.max_workers,
            thread_name_prefix="gitstate-refresh",
        )
        self._pending: dict[Path, Future[bool]] = {}
        self._lock: threading.Lock = threading.Lock()

    # =========================================================================
    # Context Manager Protocol
    # =========================================================================

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Stop accepting refreshes and wait for every scheduled one to finish.

        Queued refreshes still run, so every future returned by ``refresh()``
        resolves to a bool or to the collaborator exception.
        """
        self._executor.shutdown(wait=True)

    # =========================================================================
    # Refresh Scheduling
    # =========================================================================

    def refresh(self, path: Path | str) -> Future[bool]:
        """Schedule a background refresh of a path.

        The path is tracked if it was not already.

        Returns:
            Future resolving to True if the result was applied, False if it
            was discarded as stale. Collaborator exceptions propagate through
            the future.
        """
        key = Path(path)
        ticket = self.cache.begin_refresh(key)
        with self._lock:
            superseded = self._pending.get(key)
            future = self._executor.submit(self._run, ticket)
            self._pending[key] = future
        if superseded is not None and not superseded.done():
            self._logger.debug("refresh_superseded", path=str(key))
        future.add_done_callback(lambda done: self._forget(key, done))
        return future

    def refresh_all(self) -> dict[Path, Future[bool]]:
        """Schedule a background refresh of every tracked path."""
        return {path: self.refresh(path) for path in self.cache.paths()}

    def refresh_now(self, path: Path | str) -> bool:
        """Refresh a path on the calling thread.

        Returns:
            True if the result was applied, False if it was discarded.
        """
        return self._run(self.cache.begin_refresh(path))

    def untrack(self, path: Path | str) -> bool:
        """Stop tracking a path; refreshes in flight for it are discarded."""
        return self.cache.retract(path)

    def pending(self) -> list[Path]:
        """Return paths with a refresh scheduled or running."""
        with self._lock:
            return sorted(path for path, future in self._pending.items() if not future.done())

    def _forget(self, path: Path, future: Future[bool]) -> None:
        with self._lock:
            if self._pending.get(path) is future:
                del self._pending[path]

    # =========================================================================
    # Refresh Job
    # =========================================================================

    def _run(self, ticket: RefreshTicket) -> bool:
        path = ticket.path
        handle = self.cache.get(path)
        if handle is None or handle.is_stale(ticket):
            self._logger.debug("refresh_skipped", path=str(path), generation=ticket.generation)
            return False

        try:
            record = self._status_provider.get_status_record(path)
            history = HistoryIndex.empty()
            merge_base: str | None = None
            if self._history_provider is not None:
                history = self._history_provider.get_history(path)
                merge_base = self._history_provider.get_merge_base(path)
            lock = self._query_lock(path)
            divergence = self._query_divergence(path)
        except Exception:
            self._logger.exception("refresh_failed", path=str(path))
            raise

        lock_owner: str | None = None
        if lock is None:
            record = record.with_lock_state(LockState.UNKNOWN)
        else:
            record = record.with_lock_state(lock.state)
            if lock.state in _LOCK_HELD:
                lock_owner = lock.owner

        # A merge base only means something while the conflict is unresolved
        if record.file_state != FileState.UNMERGED:
            merge_base = None

        return self.cache.apply(
            ticket,
            record,
            history,
            lock_owner,
            divergence,
            self._clock(),
            merge_base=merge_base,
        )

    def _query_lock(self, path: Path) -> LockInfo | None:
        if not self._config.locking_enabled or self._lock_provider is None:
            return None
        return self._lock_provider.get_lock(path)

    def _query_divergence(self, path: Path) -> BranchDivergence | None:
        if self._branch_provider is None:
            return None
        divergence = self._branch_provider.get_branch_divergence(path)
        if divergence is not None and divergence.branch == self._config.current_branch:
            return None
        return divergence
