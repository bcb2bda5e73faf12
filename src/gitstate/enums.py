"""Enumeration types for gitstate."""

from enum import StrEnum


class FileState(StrEnum):
    """Diff relationship between the working copy and its base."""

    UNKNOWN = "unknown"
    ADDED = "added"
    COPIED = "copied"
    DELETED = "deleted"
    MODIFIED = "modified"
    RENAMED = "renamed"
    MISSING = "missing"
    UNMERGED = "unmerged"


class TreeState(StrEnum):
    """Where the file sits relative to the staging and commit pipeline."""

    UNMODIFIED = "unmodified"
    """Synced to the commit."""
    WORKING = "working"
    """Modified, but not in the staging tree."""
    STAGED = "staged"
    """In the staging tree (git add)."""
    UNTRACKED = "untracked"
    """Not tracked in the repository yet."""
    IGNORED = "ignored"
    NOT_IN_REPO = "not_in_repo"
    """Outside the repository folder."""


class RemoteState(StrEnum):
    """Relationship of the local revision to the tracked remote tip."""

    NOT_AT_HEAD = "not_at_head"
    """Local version is behind the remote."""
    ADDED_AT_HEAD = "added_at_head"
    """File exists on the remote but not locally."""
    DELETED_AT_HEAD = "deleted_at_head"
    """Local file was deleted on the remote."""
    NOT_LATEST = "not_latest"
    """Not the latest revision amongst the tracked branches."""
    BRANCHED = "branched"
    """Branched off; tracked branches are ignored."""


class LockState(StrEnum):
    """Exclusive lock status for assets requiring serialized edits."""

    UNKNOWN = "unknown"
    UNLOCKABLE = "unlockable"
    NOT_LOCKED = "not_locked"
    LOCKED = "locked"
    LOCKED_OTHER = "locked_other"


class ConsolidatedStatus(StrEnum):
    """Single ranked status resolved from the four raw dimensions.

    Members are declared in precedence order: the first member wins when a
    record satisfies several rules.
    """

    NOT_AT_HEAD = "not_at_head"
    ADDED_AT_HEAD = "added_at_head"
    DELETED_AT_HEAD = "deleted_at_head"
    LOCKED_OTHER = "locked_other"
    NOT_LATEST = "not_latest"
    UNMERGED = "unmerged"
    """Modified, but with conflicts."""
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"
    CHECKED_OUT = "checked_out"
    """Not modified, but locked explicitly."""
    UNTRACKED = "untracked"
    LOCKABLE = "lockable"
    UNMODIFIED = "unmodified"
    IGNORED = "ignored"
    NONE = "none"
    """Whatever else."""

    @property
    def rank(self) -> int:
        """1-based precedence rank (1 dominates every other status)."""
        return list(ConsolidatedStatus).index(self) + 1
