from __future__ import annotations

import json
from pathlib import Path

from pattern_overlap.cli import create_checker
from pattern_overlap.config import CliOverrides
from pattern_overlap.logging import AuditEvent, JsonlAuditLogger, summarize_run


def test_audit_log_writes_jsonl_schema(tmp_path: Path) -> None:
    checker = create_checker(root=str(tmp_path), cli_overrides=CliOverrides(audit_enabled=True))
    checker.check_lines(["a/*", "a/b", "x*y"], source="rules.txt")

    audit_path = tmp_path / ".pattern_overlap" / "audit.jsonl"
    assert audit_path.exists()

    lines = audit_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[-1])

    assert set(event.keys()) == {
        "error_code",
        "metadata",
        "ok",
        "run_id",
        "source",
        "timestamp",
    }
    assert event["run_id"] == "run-000001"
    assert event["source"] == "rules.txt"
    assert event["ok"] is True
    assert event["error_code"] is None
    assert event["timestamp"].endswith("Z")
    assert event["metadata"] == {
        "algorithm": "rolling",
        "overlaps_count": 1,
        "pattern_count": 2,
        "rejected_count": 1,
        "rejected_kinds": ["INVALID_WILDCARD_USAGE"],
        "warnings_count": 1,
    }


def test_audit_metadata_never_contains_pattern_text(tmp_path: Path) -> None:
    checker = create_checker(root=str(tmp_path), cli_overrides=CliOverrides(audit_enabled=True))
    checker.check_lines(["secret-tenant/*", "secret-tenant/x"])

    raw = (tmp_path / ".pattern_overlap" / "audit.jsonl").read_text(encoding="utf-8")
    assert "secret-tenant" not in raw


def test_audit_disabled_by_default(tmp_path: Path) -> None:
    checker = create_checker(root=str(tmp_path))
    checker.check_lines(["a"])

    assert checker.audit_logger is None
    assert not (tmp_path / ".pattern_overlap").exists()


def test_reader_applies_since_and_limit(tmp_path: Path) -> None:
    logger = JsonlAuditLogger(tmp_path / "nested" / "audit.jsonl")
    for index, timestamp in enumerate(["2024-01-01T00:00:00.000Z", "2024-02-01T00:00:00.000Z"]):
        logger.append(
            AuditEvent(
                timestamp=timestamp,
                run_id=f"run-{index}",
                source="<stdin>",
                ok=True,
                error_code=None,
                metadata={},
            )
        )
    with logger.path.open("a", encoding="utf-8") as handle:
        handle.write("not-json\n")

    assert [item["run_id"] for item in logger.read()] == ["run-0", "run-1"]
    assert [item["run_id"] for item in logger.read(since="2024-01-15")] == ["run-1"]
    assert [item["run_id"] for item in logger.read(limit=1)] == ["run-1"]
    assert logger.read(limit=0) == []


def test_summarize_run_handles_error_reports() -> None:
    summary = summarize_run({"ok": False, "result": {}, "warnings": ["x"]})

    assert summary == {"warnings_count": 1}
