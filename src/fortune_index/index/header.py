"""Binary index header decoding."""

from __future__ import annotations

import io
import struct
from dataclasses import dataclass
from typing import BinaryIO

_PREFIX = struct.Struct(">5I")
_OFFSET = struct.Struct(">I")


class HeaderDecodeError(OSError):
    """Raised when an index stream ends before a header field is complete."""

    def __init__(self, field: str, expected: int, received: int) -> None:
        super().__init__(
            f"unexpected end of index while reading {field} "
            f"(wanted {expected} bytes, got {received})"
        )
        self.field = field
        self.expected = expected
        self.received = received


@dataclass(slots=True, frozen=True)
class Header:
    """Decoded index header and offset table."""

    version: int
    record_count: int
    max_long_len: int
    max_short_len: int
    flags: int
    delimiter: int
    offsets: tuple[int, ...]


def _read_exact(stream: BinaryIO, size: int, field: str) -> bytes:
    chunks: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    data = b"".join(chunks)
    if len(data) < size:
        raise HeaderDecodeError(field, size, len(data))
    return data


def decode_header(stream: BinaryIO, delimiter_width: int = 1) -> Header:
    """Decode one header from a stream positioned at the start of an index file.

    The fixed prefix is five big-endian u32 fields followed by the delimiter
    slot (``delimiter_width`` bytes, of which only the first is used) and
    ``record_count`` big-endian u32 offsets. Field values are not validated.
    """
    if delimiter_width < 1:
        raise ValueError("delimiter_width must be positive.")
    version, record_count, max_long_len, max_short_len, flags = _PREFIX.unpack(
        _read_exact(stream, _PREFIX.size, "header")
    )
    delimiter = _read_exact(stream, delimiter_width, "delimiter")[0]
    offsets = tuple(
        _OFFSET.unpack(_read_exact(stream, _OFFSET.size, f"offset {position}"))[0]
        for position in range(record_count)
    )
    return Header(
        version=version,
        record_count=record_count,
        max_long_len=max_long_len,
        max_short_len=max_short_len,
        flags=flags,
        delimiter=delimiter,
        offsets=offsets,
    )


def decode_header_bytes(data: bytes, delimiter_width: int = 1) -> Header:
    """Decode a header held in memory."""
    return decode_header(io.BytesIO(data), delimiter_width=delimiter_width)
