"""Diagnostic channel for non-fatal index warnings."""

from __future__ import annotations

from typing import TextIO

from fortune_index.index.models import IndexWarning


def format_warning(warning: IndexWarning) -> str:
    """Render one warning as a single diagnostic line."""
    return f"[warn] {warning}"


class DiagnosticWriter:
    """Writes warnings to a text stream as they are reported."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._count = 0

    @property
    def count(self) -> int:
        """Return how many warnings were written."""
        return self._count

    def __call__(self, warning: IndexWarning) -> None:
        self._stream.write(format_warning(warning))
        self._stream.write("\n")
        self._count += 1
