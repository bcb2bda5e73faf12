"""Unit tests for priority resolution."""

import pytest

from gitstate.enums import ConsolidatedStatus, FileState, LockState, RemoteState, TreeState
from gitstate.state import PRECEDENCE_RULES, StatusRecord, matching_rules, resolve_status

# =============================================================================
# Rule Table Tests
# =============================================================================


class TestPrecedenceRules:
    def test_has_one_rule_per_status(self) -> None:
        assert [rule.status for rule in PRECEDENCE_RULES] == list(ConsolidatedStatus)

    def test_last_rule_is_unconditional_fallback(self) -> None:
        fallback = PRECEDENCE_RULES[-1]
        assert fallback.status == ConsolidatedStatus.NONE
        assert fallback.matches(StatusRecord()) is True

    def test_every_rule_has_description(self) -> None:
        assert all(rule.description for rule in PRECEDENCE_RULES)

    def test_rank_follows_declaration_order(self) -> None:
        assert ConsolidatedStatus.NOT_AT_HEAD.rank == 1
        assert ConsolidatedStatus.LOCKED_OTHER.rank == 4
        assert ConsolidatedStatus.MODIFIED.rank == 9
        assert ConsolidatedStatus.NONE.rank == 15


# =============================================================================
# Single Rule Tests
# =============================================================================


class TestResolveStatus:
    def test_default_record_resolves_to_none(self) -> None:
        assert resolve_status(StatusRecord()) == ConsolidatedStatus.NONE

    @pytest.mark.parametrize(
        ("remote_state", "expected"),
        [
            (RemoteState.NOT_AT_HEAD, ConsolidatedStatus.NOT_AT_HEAD),
            (RemoteState.ADDED_AT_HEAD, ConsolidatedStatus.ADDED_AT_HEAD),
            (RemoteState.DELETED_AT_HEAD, ConsolidatedStatus.DELETED_AT_HEAD),
            (RemoteState.NOT_LATEST, ConsolidatedStatus.NOT_LATEST),
        ],
    )
    def test_remote_states(
        self, remote_state: RemoteState, expected: ConsolidatedStatus
    ) -> None:
        record = StatusRecord(tree_state=TreeState.UNMODIFIED, remote_state=remote_state)
        assert resolve_status(record) == expected

    @pytest.mark.parametrize(
        ("file_state", "expected"),
        [
            (FileState.UNMERGED, ConsolidatedStatus.UNMERGED),
            (FileState.ADDED, ConsolidatedStatus.ADDED),
            (FileState.DELETED, ConsolidatedStatus.DELETED),
            (FileState.MODIFIED, ConsolidatedStatus.MODIFIED),
        ],
    )
    def test_file_states(self, file_state: FileState, expected: ConsolidatedStatus) -> None:
        record = StatusRecord(file_state=file_state, tree_state=TreeState.WORKING)
        assert resolve_status(record) == expected

    @pytest.mark.parametrize("file_state", [FileState.RENAMED, FileState.COPIED])
    @pytest.mark.parametrize("tree_state", [TreeState.WORKING, TreeState.STAGED])
    def test_working_or_staged_known_file_state_is_modified(
        self, file_state: FileState, tree_state: TreeState
    ) -> None:
        record = StatusRecord(file_state=file_state, tree_state=tree_state)
        assert resolve_status(record) == ConsolidatedStatus.MODIFIED

    def test_working_with_unknown_file_state_is_not_modified(self) -> None:
        record = StatusRecord(tree_state=TreeState.WORKING)
        assert resolve_status(record) == ConsolidatedStatus.NONE

    def test_explicit_lock_without_changes_is_checked_out(self) -> None:
        record = StatusRecord(tree_state=TreeState.UNMODIFIED, lock_state=LockState.LOCKED)
        assert resolve_status(record) == ConsolidatedStatus.CHECKED_OUT

    def test_untracked(self) -> None:
        record = StatusRecord(tree_state=TreeState.UNTRACKED)
        assert resolve_status(record) == ConsolidatedStatus.UNTRACKED

    @pytest.mark.parametrize("lock_state", [LockState.NOT_LOCKED, LockState.UNLOCKABLE])
    def test_unmodified_with_lock_support_is_lockable(self, lock_state: LockState) -> None:
        record = StatusRecord(tree_state=TreeState.UNMODIFIED, lock_state=lock_state)
        assert resolve_status(record) == ConsolidatedStatus.LOCKABLE

    def test_unmodified_without_lock_information(self) -> None:
        record = StatusRecord(tree_state=TreeState.UNMODIFIED)
        assert resolve_status(record) == ConsolidatedStatus.UNMODIFIED

    def test_ignored(self) -> None:
        record = StatusRecord(tree_state=TreeState.IGNORED)
        assert resolve_status(record) == ConsolidatedStatus.IGNORED

    def test_not_locked_outside_repo_falls_back_to_none(self) -> None:
        record = StatusRecord(lock_state=LockState.NOT_LOCKED)
        assert resolve_status(record) == ConsolidatedStatus.NONE


# =============================================================================
# Masking Tests
# =============================================================================


class TestPrecedenceMasking:
    def test_not_at_head_masks_modified(self) -> None:
        record = StatusRecord(
            file_state=FileState.MODIFIED,
            tree_state=TreeState.WORKING,
            remote_state=RemoteState.NOT_AT_HEAD,
        )
        assert resolve_status(record) == ConsolidatedStatus.NOT_AT_HEAD

    def test_locked_other_masks_not_latest(self) -> None:
        record = StatusRecord(
            tree_state=TreeState.UNMODIFIED,
            remote_state=RemoteState.NOT_LATEST,
            lock_state=LockState.LOCKED_OTHER,
        )
        assert resolve_status(record) == ConsolidatedStatus.LOCKED_OTHER

    def test_remote_masks_locked_other(self) -> None:
        record = StatusRecord(
            remote_state=RemoteState.DELETED_AT_HEAD,
            lock_state=LockState.LOCKED_OTHER,
        )
        assert resolve_status(record) == ConsolidatedStatus.DELETED_AT_HEAD

    def test_unmerged_masks_modified_working_tree(self) -> None:
        record = StatusRecord(file_state=FileState.UNMERGED, tree_state=TreeState.WORKING)
        assert resolve_status(record) == ConsolidatedStatus.UNMERGED

    def test_modified_masks_checked_out(self) -> None:
        record = StatusRecord(
            file_state=FileState.MODIFIED,
            tree_state=TreeState.STAGED,
            lock_state=LockState.LOCKED,
        )
        assert resolve_status(record) == ConsolidatedStatus.MODIFIED

    def test_matching_rules_lists_masked_rules_in_order(self) -> None:
        record = StatusRecord(
            file_state=FileState.MODIFIED,
            tree_state=TreeState.WORKING,
            remote_state=RemoteState.NOT_AT_HEAD,
            lock_state=LockState.LOCKED,
        )
        assert matching_rules(record) == (
            ConsolidatedStatus.NOT_AT_HEAD,
            ConsolidatedStatus.MODIFIED,
            ConsolidatedStatus.CHECKED_OUT,
            ConsolidatedStatus.NONE,
        )

    def test_custom_rule_table_without_match_falls_back_to_none(self) -> None:
        rules = PRECEDENCE_RULES[:1]
        assert resolve_status(StatusRecord(), rules) == ConsolidatedStatus.NONE


# =============================================================================
# Scenario Tests
# =============================================================================


class TestScenarios:
    def test_staged_modification(self) -> None:
        record = StatusRecord(
            FileState.MODIFIED, TreeState.STAGED, RemoteState.BRANCHED, LockState.NOT_LOCKED
        )
        assert resolve_status(record) == ConsolidatedStatus.MODIFIED

    def test_conflict(self) -> None:
        record = StatusRecord(
            FileState.UNMERGED, TreeState.WORKING, RemoteState.BRANCHED, LockState.NOT_LOCKED
        )
        assert resolve_status(record) == ConsolidatedStatus.UNMERGED

    def test_behind_remote(self) -> None:
        record = StatusRecord(
            FileState.UNKNOWN, TreeState.UNMODIFIED, RemoteState.NOT_AT_HEAD, LockState.NOT_LOCKED
        )
        assert resolve_status(record) == ConsolidatedStatus.NOT_AT_HEAD

    def test_locked_by_other(self) -> None:
        record = StatusRecord(
            FileState.UNKNOWN, TreeState.UNMODIFIED, RemoteState.BRANCHED, LockState.LOCKED_OTHER
        )
        assert resolve_status(record) == ConsolidatedStatus.LOCKED_OTHER

    def test_untracked_file(self) -> None:
        record = StatusRecord(
            FileState.UNKNOWN, TreeState.UNTRACKED, RemoteState.BRANCHED, LockState.UNKNOWN
        )
        assert resolve_status(record) == ConsolidatedStatus.UNTRACKED
