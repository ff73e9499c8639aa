"""Index decoding, discovery and entry reading."""

from .builder import build_index, delimiter_char, target_path
from .header import Header, HeaderDecodeError, decode_header, decode_header_bytes
from .models import Entry, FlatIndex, IndexWarning
from .reader import EntryReadError, read_entry

__all__ = [
    "Entry",
    "EntryReadError",
    "FlatIndex",
    "Header",
    "HeaderDecodeError",
    "IndexWarning",
    "build_index",
    "decode_header",
    "decode_header_bytes",
    "delimiter_char",
    "read_entry",
    "target_path",
]
