"""Seek-based extraction of one adage from its data file."""

from __future__ import annotations

from fortune_index.index.models import Entry


class EntryReadError(OSError):
    """Raised when an adage cannot be read from its data file."""

    def __init__(self, path: object, cause: str) -> None:
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


def read_entry(entry: Entry) -> str:
    """Return the adage starting at ``entry.offset``.

    Lines are collected with their terminators up to, but excluding, the
    first line equal to the delimiter, or up to end of file.
    """
    delimiter = entry.delimiter.encode("utf-8")
    collected: list[bytes] = []
    try:
        with open(entry.source_path, "rb") as handle:
            handle.seek(entry.offset)
            for line in handle:
                if line.rstrip(b"\r\n") == delimiter:
                    break
                collected.append(line)
        return b"".join(collected).decode("utf-8")
    except OSError as exc:
        raise EntryReadError(entry.source_path, exc.strerror or str(exc)) from exc
    except ValueError as exc:
        raise EntryReadError(entry.source_path, str(exc)) from exc
