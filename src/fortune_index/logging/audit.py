"""Structured JSONL audit log of command runs."""

from __future__ import annotations

import json
import uuid
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """Sanitized record of one command run."""

    timestamp: str
    request_id: str
    command: str
    ok: bool
    error_code: str | None
    metadata: dict[str, object]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_request_id() -> str:
    """Return a fresh identifier for one run."""
    return f"run-{uuid.uuid4().hex[:12]}"


def sanitize_arguments(arguments: dict[str, object]) -> dict[str, object]:
    """Keep scalar arguments; reduce strings and lists to their sizes."""
    sanitized: dict[str, object] = {}
    for key in sorted(arguments.keys()):
        value = arguments[key]
        if isinstance(value, (int, float, bool)) or value is None:
            sanitized[key] = value
        elif isinstance(value, str):
            sanitized[f"{key}_present"] = True
            sanitized[f"{key}_length"] = len(value)
        elif isinstance(value, (list, tuple)):
            sanitized[f"{key}_count"] = len(value)
        else:
            sanitized[f"{key}_type"] = type(value).__name__
    return sanitized


class JsonlAuditLogger:
    """Appends one JSON object per command run."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def record(
        self,
        command: str,
        arguments: dict[str, object],
        error_code: str | None = None,
        metadata: dict[str, object] | None = None,
    ) -> AuditEvent:
        """Build, write and return the event for a finished run.

        Raises ``OSError`` when the log directory or file cannot be written.
        """
        event = AuditEvent(
            timestamp=utc_timestamp(),
            request_id=new_request_id(),
            command=command,
            ok=error_code is None,
            error_code=error_code,
            metadata={**sanitize_arguments(arguments), **(metadata or {})},
        )
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")
        return event
