"""Capability predicates derived from a status snapshot.

Every predicate is a pure, total function of one ``StatusSnapshot``. Command
gating code calls these directly, or takes all of them at once through
``derive_capabilities()``. Nothing here is cached: callers recompute from the
snapshot they hold.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from gitstate.enums import ConsolidatedStatus, LockState, RemoteState, TreeState

if TYPE_CHECKING:
    from gitstate.state._models import BranchDivergence
    from gitstate.state._snapshot import StatusSnapshot

_CHECKED_OUT: Final = frozenset(
    {
        ConsolidatedStatus.CHECKED_OUT,
        ConsolidatedStatus.ADDED,
        ConsolidatedStatus.DELETED,
        ConsolidatedStatus.MODIFIED,
        ConsolidatedStatus.UNMERGED,
    }
)

_CHECKIN_READY: Final = frozenset(
    {
        ConsolidatedStatus.ADDED,
        ConsolidatedStatus.DELETED,
        ConsolidatedStatus.MODIFIED,
        ConsolidatedStatus.CHECKED_OUT,
    }
)

_DELETE_BLOCKED: Final = frozenset(
    {
        ConsolidatedStatus.DELETED,
        ConsolidatedStatus.UNMERGED,
        ConsolidatedStatus.LOCKED_OTHER,
    }
)

_REMOTE_DIVERGED: Final = frozenset(
    {
        ConsolidatedStatus.NOT_AT_HEAD,
        ConsolidatedStatus.NOT_LATEST,
        ConsolidatedStatus.ADDED_AT_HEAD,
        ConsolidatedStatus.DELETED_AT_HEAD,
    }
)


def is_source_controlled(snapshot: StatusSnapshot) -> bool:
    """True unless the file lies outside the repository."""
    return snapshot.record.tree_state != TreeState.NOT_IN_REPO


def can_checkout(snapshot: StatusSnapshot) -> bool:
    """True when the file may be locked before editing."""
    return snapshot.status == ConsolidatedStatus.LOCKABLE


def is_checked_out(snapshot: StatusSnapshot) -> bool:
    """True when the file is locked by us or carries local changes."""
    return snapshot.status in _CHECKED_OUT


def is_checked_out_other(snapshot: StatusSnapshot) -> bool:
    """True when another actor holds the lock."""
    return snapshot.record.lock_state == LockState.LOCKED_OTHER


def checked_out_other_owner(snapshot: StatusSnapshot) -> str | None:
    """Return who holds the lock when it is held by another actor.

    Returns:
        The lock owner identity, or None when the file is not locked by
        someone else or the owner is unknown.
    """
    if not is_checked_out_other(snapshot):
        return None
    return snapshot.lock_owner


def is_checked_out_in_other_branch(
    snapshot: StatusSnapshot,  # noqa: ARG001
    current_branch: str | None = None,  # noqa: ARG001
) -> bool:
    """Always False: git locks are not held per branch."""
    return False


def can_checkin(snapshot: StatusSnapshot) -> bool:
    """True when the file has committable changes."""
    return snapshot.status in _CHECKIN_READY


def can_add(snapshot: StatusSnapshot) -> bool:
    return snapshot.status == ConsolidatedStatus.UNTRACKED


def can_delete(snapshot: StatusSnapshot) -> bool:
    """True for source-controlled files not already deleted, conflicted or locked away."""
    return is_source_controlled(snapshot) and snapshot.status not in _DELETE_BLOCKED


def can_revert(snapshot: StatusSnapshot) -> bool:
    """True when there is any local modification to throw away."""
    return snapshot.status in _CHECKED_OUT


def can_edit(snapshot: StatusSnapshot) -> bool:
    return is_checked_out(snapshot) or is_added(snapshot)


def is_conflicted(snapshot: StatusSnapshot) -> bool:
    return snapshot.status == ConsolidatedStatus.UNMERGED


def is_current(snapshot: StatusSnapshot) -> bool:
    """True when the local revision is in step with the tracked remote.

    A file that is not source controlled is never current.
    """
    return is_source_controlled(snapshot) and snapshot.status not in _REMOTE_DIVERGED


def is_ignored(snapshot: StatusSnapshot) -> bool:
    return snapshot.status == ConsolidatedStatus.IGNORED


def is_unknown(snapshot: StatusSnapshot) -> bool:
    return snapshot.status == ConsolidatedStatus.NONE


def is_modified(snapshot: StatusSnapshot) -> bool:
    return snapshot.status == ConsolidatedStatus.MODIFIED


def is_added(snapshot: StatusSnapshot) -> bool:
    return snapshot.status == ConsolidatedStatus.ADDED


def is_deleted(snapshot: StatusSnapshot) -> bool:
    return snapshot.status == ConsolidatedStatus.DELETED


def is_modified_in_other_branch(
    snapshot: StatusSnapshot,
    current_branch: str | None = None,
) -> bool:
    """True when the latest commit for the file lives on another branch.

    Args:
        snapshot: Snapshot to inspect.
        current_branch: Checked-out branch. When given, a divergence recorded
            against this same branch does not count.
    """
    if snapshot.record.remote_state != RemoteState.NOT_LATEST:
        return False
    divergence = snapshot.branch_divergence
    if divergence is None:
        return False
    return current_branch is None or divergence.branch != current_branch


def other_branch_head_modification(
    snapshot: StatusSnapshot,
    current_branch: str | None = None,
) -> BranchDivergence | None:
    """Return the divergent-branch descriptor when the file changed elsewhere."""
    if not is_modified_in_other_branch(snapshot, current_branch):
        return None
    return snapshot.branch_divergence


@dataclass(frozen=True, slots=True)
class Capabilities:
    """Every capability predicate evaluated against one snapshot."""

    can_checkout: bool = False
    can_checkin: bool = False
    can_add: bool = False
    can_delete: bool = False
    can_revert: bool = False
    can_edit: bool = False
    is_checked_out: bool = False
    is_checked_out_other: bool = False
    is_checked_out_in_other_branch: bool = False
    is_modified_in_other_branch: bool = False
    is_conflicted: bool = False
    is_current: bool = False
    is_source_controlled: bool = False
    is_ignored: bool = False
    is_unknown: bool = False
    is_modified: bool = False
    is_added: bool = False
    is_deleted: bool = False


def derive_capabilities(
    snapshot: StatusSnapshot,
    current_branch: str | None = None,
) -> Capabilities:
    """Evaluate every capability predicate against a snapshot.

    Args:
        snapshot: Snapshot to evaluate.
        current_branch: Checked-out branch, used for branch divergence.

    Returns:
        Capabilities computed from this snapshot alone.
    """
    return Capabilities(
        can_checkout=can_checkout(snapshot),
        can_checkin=can_checkin(snapshot),
        can_add=can_add(snapshot),
        can_delete=can_delete(snapshot),
        can_revert=can_revert(snapshot),
        can_edit=can_edit(snapshot),
        is_checked_out=is_checked_out(snapshot),
        is_checked_out_other=is_checked_out_other(snapshot),
        is_checked_out_in_other_branch=is_checked_out_in_other_branch(
            snapshot, current_branch
        ),
        is_modified_in_other_branch=is_modified_in_other_branch(
            snapshot, current_branch
        ),
        is_conflicted=is_conflicted(snapshot),
        is_current=is_current(snapshot),
        is_source_controlled=is_source_controlled(snapshot),
        is_ignored=is_ignored(snapshot),
        is_unknown=is_unknown(snapshot),
        is_modified=is_modified(snapshot),
        is_added=is_added(snapshot),
        is_deleted=is_deleted(snapshot),
    )
