"""Structured logging utilities."""

from .audit import AuditEvent, JsonlAuditLogger, sanitize_arguments
from .diagnostics import DiagnosticWriter, format_warning

__all__ = [
    "AuditEvent",
    "DiagnosticWriter",
    "JsonlAuditLogger",
    "format_warning",
    "sanitize_arguments",
]
