"""Adage selection: random pick and pattern search."""

from .random_pick import EmptyIndexError, create_rng, pick_entry, select_random
from .search import (
    SearchMatch,
    compile_pattern,
    group_header,
    iter_matches,
    search_pattern,
    write_matches,
)

__all__ = [
    "EmptyIndexError",
    "SearchMatch",
    "compile_pattern",
    "create_rng",
    "group_header",
    "iter_matches",
    "pick_entry",
    "search_pattern",
    "select_random",
    "write_matches",
]
