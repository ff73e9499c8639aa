"""Random-access retrieval of adages through binary offset indices."""

from fortune_index.index import (
    Entry,
    EntryReadError,
    FlatIndex,
    Header,
    HeaderDecodeError,
    IndexWarning,
    build_index,
    decode_header,
    read_entry,
)
from fortune_index.select import EmptyIndexError, SearchMatch, search_pattern, select_random

__all__ = [
    "EmptyIndexError",
    "Entry",
    "EntryReadError",
    "FlatIndex",
    "Header",
    "HeaderDecodeError",
    "IndexWarning",
    "SearchMatch",
    "build_index",
    "decode_header",
    "read_entry",
    "search_pattern",
    "select_random",
]
