"""Structured logging utilities."""

from .audit import AuditEvent, JsonlAuditLogger, summarize_run, utc_timestamp

__all__ = ["AuditEvent", "JsonlAuditLogger", "summarize_run", "utc_timestamp"]
