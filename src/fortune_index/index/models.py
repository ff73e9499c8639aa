"""Typed models for the in-memory adage index."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import overload


@dataclass(slots=True, frozen=True)
class Entry:
    """Location of one adage inside a data file.

    Entries decoded from the same index file hold the same ``source_path``
    object rather than equal copies.
    """

    source_path: Path
    offset: int
    delimiter: str


@dataclass(slots=True, frozen=True)
class IndexWarning:
    """Non-fatal failure recorded while building an index."""

    path: Path
    cause: str

    def __str__(self) -> str:
        return f"{self.path}: {self.cause}"


class FlatIndex(Sequence[Entry]):
    """Ordered, immutable collection of entries in discovery order.

    Entries from one source file are contiguous. Pattern search groups its
    output by relying on this.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Sequence[Entry] = ()) -> None:
        self._entries: tuple[Entry, ...] = tuple(entries)

    @overload
    def __getitem__(self, position: int) -> Entry: ...

    @overload
    def __getitem__(self, position: slice) -> FlatIndex: ...

    def __getitem__(self, position: int | slice) -> Entry | FlatIndex:
        if isinstance(position, slice):
            return FlatIndex(self._entries[position])
        return self._entries[position]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FlatIndex):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"FlatIndex({len(self._entries)} entries)"

    def source_paths(self) -> list[Path]:
        """Return distinct source paths in first-seen order."""
        seen: dict[Path, None] = {}
        for entry in self._entries:
            seen.setdefault(entry.source_path, None)
        return list(seen)
