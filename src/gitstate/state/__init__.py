"""File status model.

This package resolves the raw version-control status of a tracked file into a
single consolidated status, derives the capability predicates that gate user
actions, and keeps one atomically swapped snapshot per tracked path.

Models:
    StatusRecord: The four raw status dimensions for one file.
    LockInfo: Lock provider answer (state and owner).
    BranchDivergence: Branch holding the latest commit for a file.
    HistoryEntry: Summary of one revision.
    HistoryIndex: Immutable newest-first revision history.
    StatusSnapshot: Consistent bundle of every field for one refresh.
    Capabilities: Every capability predicate for one snapshot.

Classes:
    FileStatusHandle: Shared per-path handle holding the current snapshot.
    StatusCache: Path-keyed table of handles.
    StatusUpdater: Background refresh pipeline.
    FakeProviders: In-memory collaborators for tests.

Example:
    >>> from gitstate.enums import FileState, LockState, TreeState
    >>> from gitstate.state import StatusRecord, StatusSnapshot, derive_capabilities
    >>> record = StatusRecord(FileState.MODIFIED, TreeState.STAGED, lock_state=LockState.NOT_LOCKED)
    >>> snapshot = StatusSnapshot.build(record)
    >>> snapshot.status
    <ConsolidatedStatus.MODIFIED: 'modified'>
    >>> derive_capabilities(snapshot).can_checkin
    True
"""

from gitstate.state._cache import StatusCache
from gitstate.state._capabilities import (
    Capabilities,
    can_add,
    can_checkin,
    can_checkout,
    can_delete,
    can_edit,
    can_revert,
    checked_out_other_owner,
    derive_capabilities,
    is_added,
    is_checked_out,
    is_checked_out_in_other_branch,
    is_checked_out_other,
    is_conflicted,
    is_current,
    is_deleted,
    is_ignored,
    is_modified,
    is_modified_in_other_branch,
    is_source_controlled,
    is_unknown,
    other_branch_head_modification,
)
from gitstate.state._fake import FakeProviders
from gitstate.state._handle import FileStatusHandle, RefreshTicket
from gitstate.state._history import HistoryEntry, HistoryIndex
from gitstate.state._models import BranchDivergence, LockInfo, StatusRecord
from gitstate.state._protocol import (
    BranchDivergenceProvider,
    HistoryProvider,
    LockProvider,
    StatusRecordProvider,
)
from gitstate.state._resolver import (
    PRECEDENCE_RULES,
    StatusRule,
    matching_rules,
    resolve_status,
)
from gitstate.state._snapshot import StatusSnapshot
from gitstate.state._updater import StatusUpdater

__all__ = [
    "PRECEDENCE_RULES",
    "BranchDivergence",
    "BranchDivergenceProvider",
    "Capabilities",
    "FakeProviders",
    "FileStatusHandle",
    "HistoryEntry",
    "HistoryIndex",
    "HistoryProvider",
    "LockInfo",
    "LockProvider",
    "RefreshTicket",
    "StatusCache",
    "StatusRecord",
    "StatusRecordProvider",
    "StatusRule",
    "StatusSnapshot",
    "StatusUpdater",
    "can_add",
    "can_checkin",
    "can_checkout",
    "can_delete",
    "can_edit",
    "can_revert",
    "checked_out_other_owner",
    "derive_capabilities",
    "is_added",
    "is_checked_out",
    "is_checked_out_in_other_branch",
    "is_checked_out_other",
    "is_conflicted",
    "is_current",
    "is_deleted",
    "is_ignored",
    "is_modified",
    "is_modified_in_other_branch",
    "is_source_controlled",
    "is_unknown",
    "matching_rules",
    "other_branch_head_modification",
    "resolve_status",
]
