"""Fault-tolerant discovery and aggregation of adage indices."""

from __future__ import annotations

import os
import stat
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from fortune_index.config import FortuneConfig, default_config
from fortune_index.index.header import decode_header
from fortune_index.index.models import Entry, FlatIndex, IndexWarning

WarningHandler = Callable[[IndexWarning], None]


@dataclass(slots=True)
class _BuildState:
    """Entries and warnings accumulated across one build."""

    extension: str
    delimiter_width: int
    sort_listing: bool
    fallback_delimiter: str
    on_warning: WarningHandler | None
    entries: list[Entry] = field(default_factory=list)
    warnings: list[IndexWarning] = field(default_factory=list)

    def warn(self, path: Path, error: BaseException) -> None:
        cause = error.strerror if isinstance(error, OSError) and error.strerror else str(error)
        warning = IndexWarning(path=path, cause=cause)
        self.warnings.append(warning)
        if self.on_warning is not None:
            self.on_warning(warning)


def build_index(
    paths: Iterable[str | os.PathLike[str]],
    *,
    config: FortuneConfig | None = None,
    on_warning: WarningHandler | None = None,
) -> tuple[FlatIndex, list[IndexWarning]]:
    """Build a flat index from files and directory trees.

    Results follow the order of ``paths``; within a directory, children are
    visited depth-first, sorted by name unless the configured listing order is
    "filesystem". A top-level data file is accepted in place of its index when
    the sibling index exists. Failures on individual paths become warnings and
    never abort the build.
    """
    settings = config or default_config()
    state = _BuildState(
        extension=settings.index.extension,
        delimiter_width=settings.index.delimiter_width,
        sort_listing=settings.index.listing_order == "name",
        fallback_delimiter=settings.output.fallback_delimiter,
        on_warning=on_warning,
    )
    for raw_path in paths:
        _load_path(Path(raw_path), state)
    return FlatIndex(state.entries), state.warnings


def delimiter_char(raw: int, fallback: str = "%") -> str:
    """Map a raw delimiter byte to a character.

    Only printable ASCII is kept. Printable Latin-1 bytes such as 0xA7 also
    fall back, because data lines are compared as UTF-8.
    """
    if raw < 0x80:
        candidate = chr(raw)
        if candidate.isprintable():
            return candidate
    return fallback


def target_path(index_path: Path, extension: str) -> Path:
    """Return the data file paired with an index file."""
    return index_path.with_name(index_path.name[: -len(extension)])


def _is_index_name(name: str, extension: str) -> bool:
    return len(name) > len(extension) and name.endswith(extension)


def _load_path(path: Path, state: _BuildState) -> None:
    try:
        mode = path.stat().st_mode
    except OSError as exc:
        state.warn(path, exc)
        return
    if stat.S_ISDIR(mode):
        _load_directory(path, state)
    elif not stat.S_ISREG(mode):
        return
    elif _is_index_name(path.name, state.extension):
        _load_index_file(path, state)
    else:
        sibling = path.with_name(path.name + state.extension)
        if sibling.is_file():
            _load_index_file(sibling, state)


def _load_directory(path: Path, state: _BuildState) -> None:
    try:
        with os.scandir(path) as listing:
            children = list(listing)
    except OSError as exc:
        state.warn(path, exc)
        return
    if state.sort_listing:
        children.sort(key=lambda item: item.name)
    for child in children:
        child_path = Path(child.path)
        try:
            is_dir = child.is_dir(follow_symlinks=False)
            is_index = (
                not is_dir and _is_index_name(child.name, state.extension) and child.is_file()
            )
        except OSError as exc:
            state.warn(child_path, exc)
            continue
        if is_dir:
            _load_directory(child_path, state)
        elif is_index:
            _load_index_file(child_path, state)


def _load_index_file(path: Path, state: _BuildState) -> None:
    try:
        with path.open("rb") as handle:
            header = decode_header(handle, delimiter_width=state.delimiter_width)
    except OSError as exc:
        state.warn(path, exc)
        return
    source = target_path(path, state.extension)
    delimiter = delimiter_char(header.delimiter, state.fallback_delimiter)
    state.entries.extend(
        Entry(source_path=source, offset=offset, delimiter=delimiter) for offset in header.offsets
    )
