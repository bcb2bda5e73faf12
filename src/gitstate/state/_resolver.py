"""Priority resolution of raw status records.

The four status dimensions are collapsed into one ``ConsolidatedStatus`` by
walking an ordered rule table: the first rule whose predicate matches wins,
and earlier rules mask any later rule the record would also satisfy.

Remote divergence and foreign locks rank above every local change.

Example:
    >>> from gitstate.state import StatusRecord, resolve_status
    >>> resolve_status(StatusRecord())
    <ConsolidatedStatus.NONE: 'none'>
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final, TypeAlias

from gitstate.enums import ConsolidatedStatus, FileState, LockState, RemoteState, TreeState
from gitstate.state._models import StatusRecord

StatusPredicate: TypeAlias = Callable[[StatusRecord], bool]


@dataclass(frozen=True, slots=True)
class StatusRule:
    """One row of the precedence table.

    Attributes:
        status: Status produced when the predicate matches.
        predicate: Test applied to the raw record.
        description: Human-readable form of the predicate.
    """

    status: ConsolidatedStatus
    predicate: StatusPredicate
    description: str

    def matches(self, record: StatusRecord) -> bool:
        """Return True if this rule applies to the record."""
        return self.predicate(record)


def _is_content_modified(record: StatusRecord) -> bool:
    if record.file_state == FileState.MODIFIED:
        return True
    return (
        record.tree_state in {TreeState.WORKING, TreeState.STAGED}
        and record.file_state != FileState.UNKNOWN
    )


PRECEDENCE_RULES: Final[tuple[StatusRule, ...]] = (
    StatusRule(
        ConsolidatedStatus.NOT_AT_HEAD,
        lambda r: r.remote_state == RemoteState.NOT_AT_HEAD,
        "remote_state == not_at_head",
    ),
    StatusRule(
        ConsolidatedStatus.ADDED_AT_HEAD,
        lambda r: r.remote_state == RemoteState.ADDED_AT_HEAD,
        "remote_state == added_at_head",
    ),
    StatusRule(
        ConsolidatedStatus.DELETED_AT_HEAD,
        lambda r: r.remote_state == RemoteState.DELETED_AT_HEAD,
        "remote_state == deleted_at_head",
    ),
    StatusRule(
        ConsolidatedStatus.LOCKED_OTHER,
        lambda r: r.lock_state == LockState.LOCKED_OTHER,
        "lock_state == locked_other",
    ),
    StatusRule(
        ConsolidatedStatus.NOT_LATEST,
        lambda r: r.remote_state == RemoteState.NOT_LATEST,
        "remote_state == not_latest",
    ),
    StatusRule(
        ConsolidatedStatus.UNMERGED,
        lambda r: r.file_state == FileState.UNMERGED,
        "file_state == unmerged",
    ),
    StatusRule(
        ConsolidatedStatus.ADDED,
        lambda r: r.file_state == FileState.ADDED,
        "file_state == added",
    ),
    StatusRule(
        ConsolidatedStatus.DELETED,
        lambda r: r.file_state == FileState.DELETED,
        "file_state == deleted",
    ),
    StatusRule(
        ConsolidatedStatus.MODIFIED,
        _is_content_modified,
        "file_state == modified, or tree_state in {working, staged} "
        "with file_state != unknown",
    ),
    StatusRule(
        ConsolidatedStatus.CHECKED_OUT,
        lambda r: r.lock_state == LockState.LOCKED,
        "lock_state == locked",
    ),
    StatusRule(
        ConsolidatedStatus.UNTRACKED,
        lambda r: r.tree_state == TreeState.UNTRACKED,
        "tree_state == untracked",
    ),
    StatusRule(
        ConsolidatedStatus.LOCKABLE,
        lambda r: (
            r.lock_state in {LockState.NOT_LOCKED, LockState.UNLOCKABLE}
            and r.tree_state == TreeState.UNMODIFIED
        ),
        "lock_state in {not_locked, unlockable} and tree_state == unmodified",
    ),
    StatusRule(
        ConsolidatedStatus.UNMODIFIED,
        lambda r: (
            r.tree_state == TreeState.UNMODIFIED and r.lock_state == LockState.UNKNOWN
        ),
        "tree_state == unmodified and lock_state == unknown",
    ),
    StatusRule(
        ConsolidatedStatus.IGNORED,
        lambda r: r.tree_state == TreeState.IGNORED,
        "tree_state == ignored",
    ),
    StatusRule(
        ConsolidatedStatus.NONE,
        lambda _r: True,
        "fallback",
    ),
)


def resolve_status(
    record: StatusRecord,
    rules: tuple[StatusRule, ...] = PRECEDENCE_RULES,
) -> ConsolidatedStatus:
    """Resolve a raw record to its consolidated status.

    Args:
        record: The raw status record.
        rules: Precedence table to evaluate, top to bottom.

    Returns:
        The status of the first matching rule, or NONE when nothing matches.
    """
    for rule in rules:
        if rule.matches(record):
            return rule.status
    return ConsolidatedStatus.NONE


def matching_rules(
    record: StatusRecord,
    rules: tuple[StatusRule, ...] = PRECEDENCE_RULES,
) -> tuple[ConsolidatedStatus, ...]:
    """Return every status whose rule the record satisfies, in precedence order.

    The first element is always the resolved status; the rest are the rules
    it masks.
    """
    return tuple(rule.status for rule in rules if rule.matches(record))
