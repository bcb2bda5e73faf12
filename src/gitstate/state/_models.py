# ruff: noqa: TC003  # datetime needed at runtime for dataclass fields
"""Status data models.

This module defines the raw four-dimensional status record and the small
value types that travel alongside it in a snapshot.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Self

from gitstate.enums import FileState, LockState, RemoteState, TreeState


@dataclass(frozen=True, slots=True)
class StatusRecord:
    """Raw status signals for one file.

    A default-constructed record carries no information: it never resolves to
    a false positive status.

    Attributes:
        file_state: Diff relationship between working copy and base.
        tree_state: Position in the staging and commit pipeline.
        remote_state: Relationship to the tracked remote branch tip.
        lock_state: Exclusive-lock status.
    """

    file_state: FileState = FileState.UNKNOWN
    tree_state: TreeState = TreeState.NOT_IN_REPO
    remote_state: RemoteState = RemoteState.BRANCHED
    lock_state: LockState = LockState.UNKNOWN

    def with_lock_state(self, lock_state: LockState) -> Self:
        """Return a copy of this record with a different lock dimension."""
        return replace(self, lock_state=lock_state)


@dataclass(frozen=True, slots=True)
class LockInfo:
    """Lock provider answer for one file.

    Attributes:
        state: Lock state of the file.
        owner: Identity of the lock holder, None when unknown or unlocked.
    """

    state: LockState = LockState.UNKNOWN
    owner: str | None = None


@dataclass(frozen=True, slots=True)
class BranchDivergence:
    """Where the latest commit for a file lives when it is not on this branch.

    Attributes:
        branch: Name of the branch holding the latest commit.
        action: What that commit did to the file (e.g. "modified").
        modified_at: Modification time of the file in that branch.
        commit: Commit id of the latest modification.
    """

    branch: str
    action: str
    modified_at: datetime | None = None
    commit: str | None = None
