# ruff: noqa: TC003  # datetime needed at runtime for dataclass fields
"""Revision history index.

A ``HistoryIndex`` is the newest-first list of revisions attached to a status
snapshot. It is immutable and is replaced wholesale on refresh.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import datetime
from typing import Final, Self

from gitstate.exceptions import HistoryIndexOutOfRangeError


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Summary of one revision of a file.

    Only ``revision`` and ``revision_number`` are interpreted; everything
    else is carried for the surrounding tool.

    Attributes:
        revision: Full commit id (lookup key).
        revision_number: Orderable revision number, higher is newer.
        short_revision: Abbreviated commit id for display.
        description: Commit message.
        author: Commit author.
        action: What the revision did to the file (e.g. "add", "edit").
        date: Commit date.
        file_hash: Blob id of the file at this revision.
        file_size: Size of the file at this revision in bytes.
    """

    revision: str
    revision_number: int = 0
    short_revision: str = ""
    description: str = ""
    author: str = ""
    action: str = ""
    date: datetime | None = None
    file_hash: str | None = None
    file_size: int = 0


class HistoryIndex:
    """Immutable newest-first sequence of history entries.

    Entries are kept in the order given; the index never re-sorts them.

    Example:
        >>> index = HistoryIndex([HistoryEntry("b2", 2), HistoryEntry("a1", 1)])
        >>> index.latest().revision
        'b2'
        >>> index.find_by_revision("zz") is None
        True
    """

    __slots__: Final = ("_entries",)
    _entries: tuple[HistoryEntry, ...]

    def __init__(self, entries: Iterable[HistoryEntry] = ()) -> None:
        """Initialize the index.

        Args:
            entries: Revision summaries, newest first.
        """
        self._entries = tuple(entries)

    @classmethod
    def empty(cls) -> Self:
        """Return an index with no entries."""
        return cls()

    def size(self) -> int:
        """Return the number of entries."""
        return len(self._entries)

    def entry_at(self, position: int) -> HistoryEntry:
        """Return the entry at a position.

        Args:
            position: Zero-based position, 0 being the newest revision.

        Returns:
            The entry at that position.

        Raises:
            HistoryIndexOutOfRangeError: If position is outside ``[0, size)``.
        """
        size = len(self._entries)
        if position < 0 or position >= size:
            msg = f"History position {position} out of range for size {size}"
            raise HistoryIndexOutOfRangeError(msg, position=position, size=size)
        return self._entries[position]

    def latest(self) -> HistoryEntry | None:
        """Return the newest entry, or None for an empty index."""
        return self._entries[0] if self._entries else None

    def find_by_revision(self, revision: str) -> HistoryEntry | None:
        """Find the entry whose commit id equals ``revision`` exactly."""
        for entry in self._entries:
            if entry.revision == revision:
                return entry
        return None

    def find_by_revision_number(self, revision_number: int) -> HistoryEntry | None:
        """Find the entry with the given revision number."""
        for entry in self._entries:
            if entry.revision_number == revision_number:
                return entry
        return None

    def base_for_merge(self, merge_base: str | None) -> HistoryEntry | None:
        """Resolve a merge-base identifier against this index.

        Args:
            merge_base: Revision the local copy diverged from, if any.

        Returns:
            The matching entry, or None when there is no merge base or it is
            not part of this history.
        """
        if merge_base is None:
            return None
        return self.find_by_revision(merge_base)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HistoryIndex):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"HistoryIndex(size={len(self._entries)})"
