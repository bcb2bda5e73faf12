"""gitstate: version-control status resolution for editor integrations."""

from gitstate.enums import ConsolidatedStatus, FileState, LockState, RemoteState, TreeState
from gitstate.exceptions import (
    GitStateError,
    HandleNotTrackedError,
    HistoryIndexOutOfRangeError,
)
from gitstate.state import (
    Capabilities,
    FileStatusHandle,
    HistoryEntry,
    HistoryIndex,
    StatusCache,
    StatusRecord,
    StatusSnapshot,
    StatusUpdater,
    derive_capabilities,
    resolve_status,
)

__all__ = [
    "Capabilities",
    "ConsolidatedStatus",
    "FileState",
    "FileStatusHandle",
    "GitStateError",
    "HandleNotTrackedError",
    "HistoryEntry",
    "HistoryIndex",
    "HistoryIndexOutOfRangeError",
    "LockState",
    "RemoteState",
    "StatusCache",
    "StatusRecord",
    "StatusSnapshot",
    "StatusUpdater",
    "TreeState",
    "derive_capabilities",
    "resolve_status",
]
