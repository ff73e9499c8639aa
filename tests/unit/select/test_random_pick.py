from __future__ import annotations

import random
from pathlib import Path

import pytest

from fortune_index.index import Entry, EntryReadError, FlatIndex
from fortune_index.select import EmptyIndexError, create_rng, pick_entry, select_random


def _index(tmp_path: Path) -> FlatIndex:
    data = tmp_path / "quotes"
    data.write_bytes(b"".join(f"adage {n}\n%\n".encode() for n in range(20)))
    stride = len(b"adage 0\n%\n")
    return FlatIndex([Entry(data, n * stride, "%") for n in range(10)])


def test_same_seed_selects_same_adage(tmp_path: Path) -> None:
    index = _index(tmp_path)

    first = select_random(index, seed=1234)
    second = select_random(index, seed=1234)

    assert first == second
    assert first.startswith("adage ")


def test_seeded_choices_follow_uniform_range(tmp_path: Path) -> None:
    index = _index(tmp_path)
    rng = create_rng(7)
    expected = random.Random(7).randrange(len(index))

    assert pick_entry(index, rng) is index[expected]


def test_explicit_rng_is_used(tmp_path: Path) -> None:
    index = _index(tmp_path)
    rng = random.Random(99)
    position = random.Random(99).randrange(len(index))

    assert select_random(index, seed=1, rng=rng) == f"adage {position}\n"


def test_unseeded_selection_returns_an_adage(tmp_path: Path) -> None:
    index = _index(tmp_path)
    texts = {select_random(index) for _ in range(5)}
    assert texts <= {f"adage {n}\n" for n in range(10)}


def test_empty_index_raises_explicit_error() -> None:
    with pytest.raises(EmptyIndexError, match="No fortunes found"):
        select_random(FlatIndex(), seed=0)


def test_read_failure_propagates(tmp_path: Path) -> None:
    index = FlatIndex([Entry(tmp_path / "missing", 0, "%")])

    with pytest.raises(EntryReadError):
        select_random(index, seed=3)
