from __future__ import annotations

from pathlib import Path

import pytest

from fortune_index.index import Entry, EntryReadError, read_entry

CONTENT = b"line1\nline2\n%\nline3\n%\n"


def test_reads_until_delimiter_line(tmp_path: Path) -> None:
    data = tmp_path / "quotes"
    data.write_bytes(CONTENT)

    assert read_entry(Entry(data, 0, "%")) == "line1\nline2\n"
    assert read_entry(Entry(data, CONTENT.index(b"line3"), "%")) == "line3\n"


def test_reads_to_end_of_file_without_delimiter(tmp_path: Path) -> None:
    data = tmp_path / "quotes"
    data.write_bytes(b"first\n%\nlast line\nno newline")

    assert read_entry(Entry(data, 8, "%")) == "last line\nno newline"


def test_offset_past_end_returns_empty_text(tmp_path: Path) -> None:
    data = tmp_path / "quotes"
    data.write_bytes(CONTENT)

    assert read_entry(Entry(data, len(CONTENT) + 10, "%")) == ""


def test_delimiter_must_fill_whole_line(tmp_path: Path) -> None:
    data = tmp_path / "quotes"
    data.write_bytes(b"100% sure\n%%\n#\nafter\n")

    assert read_entry(Entry(data, 0, "#")) == "100% sure\n%%\n"


def test_crlf_delimiter_line_is_recognized(tmp_path: Path) -> None:
    data = tmp_path / "quotes"
    data.write_bytes(b"one\r\n%\r\ntwo\r\n")

    assert read_entry(Entry(data, 0, "%")) == "one\r\n"


def test_missing_data_file_raises_with_path(tmp_path: Path) -> None:
    data = tmp_path / "gone"

    with pytest.raises(EntryReadError) as excinfo:
        read_entry(Entry(data, 0, "%"))

    assert excinfo.value.path == data
    assert str(data) in str(excinfo.value)


def test_invalid_utf8_raises_read_error(tmp_path: Path) -> None:
    data = tmp_path / "quotes"
    data.write_bytes(b"\xff\xfe bad\n%\n")

    with pytest.raises(EntryReadError):
        read_entry(Entry(data, 0, "%"))
