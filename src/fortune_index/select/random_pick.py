"""Uniform random selection of one adage."""

from __future__ import annotations

import random

from fortune_index.index.models import Entry, FlatIndex
from fortune_index.index.reader import read_entry


class EmptyIndexError(LookupError):
    """Raised when random selection is attempted on an index without entries."""

    def __init__(self) -> None:
        super().__init__("No fortunes found")


def create_rng(seed: int | None = None) -> random.Random:
    """Return a generator seeded from ``seed``, or from OS entropy when omitted."""
    if seed is None:
        return random.Random()
    return random.Random(seed)


def pick_entry(index: FlatIndex, rng: random.Random) -> Entry:
    """Choose one entry uniformly at random."""
    if not index:
        raise EmptyIndexError()
    return index[rng.randrange(len(index))]


def select_random(
    index: FlatIndex,
    seed: int | None = None,
    *,
    rng: random.Random | None = None,
) -> str:
    """Return the text of a uniformly chosen adage.

    An explicit ``rng`` takes precedence over ``seed``. Read failures
    propagate as ``EntryReadError``.
    """
    generator = rng if rng is not None else create_rng(seed)
    return read_entry(pick_entry(index, generator))
