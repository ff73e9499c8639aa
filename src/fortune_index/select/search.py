"""Regular-expression search over every adage, grouped by source file."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

from fortune_index.config import DEFAULT_RECORD_TERMINATOR
from fortune_index.index.models import Entry, FlatIndex
from fortune_index.index.reader import read_entry


@dataclass(slots=True, frozen=True)
class SearchMatch:
    """One matching adage and the group header preceding it, if any."""

    entry: Entry
    text: str
    header: str | None = None


def compile_pattern(
    pattern: str | re.Pattern[str], case_insensitive: bool = False
) -> re.Pattern[str]:
    """Compile a search pattern; invalid expressions raise ``re.error``."""
    if isinstance(pattern, re.Pattern):
        if case_insensitive and not pattern.flags & re.IGNORECASE:
            return re.compile(pattern.pattern, pattern.flags | re.IGNORECASE)
        return pattern
    return re.compile(pattern, re.IGNORECASE if case_insensitive else 0)


def group_header(entry: Entry, terminator: str = DEFAULT_RECORD_TERMINATOR) -> str:
    """Return the block announcing matches from ``entry``'s source file."""
    return f"({entry.source_path.name})\n{terminator}\n"


def iter_matches(
    index: FlatIndex,
    pattern: str | re.Pattern[str],
    case_insensitive: bool = False,
    *,
    terminator: str = DEFAULT_RECORD_TERMINATOR,
) -> Iterator[SearchMatch]:
    """Yield matching adages in index order.

    A header is attached whenever a match comes from a different source file
    than the previous match. Grouping is only correct because the builder
    keeps each file's entries contiguous; nothing here re-sorts.
    """
    regex = compile_pattern(pattern, case_insensitive)
    current_source: Path | None = None
    for entry in index:
        text = read_entry(entry)
        if regex.search(text) is None:
            continue
        header = None
        if entry.source_path != current_source:
            current_source = entry.source_path
            header = group_header(entry, terminator)
        yield SearchMatch(entry=entry, text=text, header=header)


def search_pattern(
    index: FlatIndex,
    pattern: str | re.Pattern[str],
    case_insensitive: bool = False,
    *,
    terminator: str = DEFAULT_RECORD_TERMINATOR,
) -> list[SearchMatch]:
    """Collect all matches; the first read error aborts the search."""
    return list(iter_matches(index, pattern, case_insensitive, terminator=terminator))


def write_matches(
    matches: Iterable[SearchMatch],
    out: TextIO,
    diagnostics: TextIO,
    *,
    terminator: str = DEFAULT_RECORD_TERMINATOR,
) -> int:
    """Write headers to ``diagnostics`` and adages to ``out``; return match count."""
    count = 0
    for match in matches:
        if match.header is not None:
            diagnostics.write(match.header)
        out.write(match.text)
        out.write(f"{terminator}\n")
        count += 1
    return count
