"""Structured JSONL audit log utilities."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path


@dataclass(slots=True, frozen=True)
class AuditEvent:
    """Sanitized representation of a single check run."""

    timestamp: str
    run_id: str
    source: str
    ok: bool
    error_code: str | None
    metadata: dict[str, object]


def utc_timestamp() -> str:
    """Return an ISO-8601 UTC timestamp."""
    return datetime.now(tz=UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def summarize_run(report: dict[str, object]) -> dict[str, object]:
    """Reduce a check report to counters; pattern text is never logged."""
    summary: dict[str, object] = {}
    result = report.get("result")
    if isinstance(result, dict):
        algorithm = result.get("algorithm")
        if isinstance(algorithm, str):
            summary["algorithm"] = algorithm
        pattern_count = result.get("pattern_count")
        if isinstance(pattern_count, int):
            summary["pattern_count"] = pattern_count
        for key in ("overlaps", "rejected"):
            items = result.get(key)
            if isinstance(items, list):
                summary[f"{key}_count"] = len(items)
        rejected = result.get("rejected")
        if isinstance(rejected, list):
            kinds = {str(item.get("kind")) for item in rejected if isinstance(item, dict)}
            summary["rejected_kinds"] = sorted(kinds)
    warnings = report.get("warnings")
    if isinstance(warnings, list):
        summary["warnings_count"] = len(warnings)
    return summary


class JsonlAuditLogger:
    """Append-only JSONL audit logger and bounded reader."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        """Return on-disk JSONL path."""
        return self._path

    def append(self, event: AuditEvent) -> None:
        """Append a sanitized event as one JSON object per line."""
        with self._path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(asdict(event), sort_keys=True))
            handle.write("\n")

    def read(self, since: str | None = None, limit: int = 50) -> list[dict[str, object]]:
        """Read recent events, optionally filtered by timestamp lower bound."""
        if limit < 1:
            return []
        entries: list[dict[str, object]] = []
        if not self._path.exists():
            return entries
        with self._path.open("r", encoding="utf-8") as handle:
            for line in handle:
                stripped = line.strip()
                if not stripped:
                    continue
                try:
                    record = json.loads(stripped)
                except json.JSONDecodeError:
                    continue
                if since is not None:
                    ts = record.get("timestamp")
                    if not isinstance(ts, str) or ts < since:
                        continue
                entries.append(record)
        if len(entries) <= limit:
            return entries
        return entries[-limit:]
