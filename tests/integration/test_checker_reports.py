from __future__ import annotations

from pathlib import Path

import pytest

from pattern_overlap.cli import create_checker
from pattern_overlap.config import CliOverrides


def test_report_envelope_lists_overlaps_and_rejections(tmp_path: Path) -> None:
    checker = create_checker(root=str(tmp_path))

    report = checker.check_lines(["a/b/*\n", "a/b/c\n", "a//b\n", "d/e/f\n"])

    assert report["ok"] is True
    assert report["run_id"] == "run-000001"
    result = report["result"]
    assert result["algorithm"] == "rolling"
    assert result["pattern_count"] == 3
    assert result["overlaps"] == [
        {
            "first": "/a/b/c",
            "first_line": 2,
            "second": "/a/b/*",
            "second_line": 1,
            "message": "/a/b/c overlaps with /a/b/*",
        }
    ]
    assert result["rejected"] == [
        {
            "line": 3,
            "text": "a//b",
            "kind": "EMPTY_FRAGMENT",
            "message": "Pattern fragments must be non-empty.",
        }
    ]
    assert report["warnings"] == [
        "line 3: EMPTY_FRAGMENT: Pattern fragments must be non-empty."
    ]
    assert "error" not in report


def test_strict_mode_fails_on_rejected_lines(tmp_path: Path) -> None:
    checker = create_checker(root=str(tmp_path), strict=True)

    report = checker.check_lines(["a", "a*"])

    assert report["ok"] is False
    assert report["error"]["code"] == "PARSE_ERROR"
    assert report["result"]["overlaps"] == []


def test_limit_exceeded_skips_pairwise_check(tmp_path: Path) -> None:
    checker = create_checker(root=str(tmp_path), cli_overrides=CliOverrides(max_patterns=2))

    report = checker.check_lines(["**", "a", "b"])

    assert report["ok"] is False
    assert report["error"] == {
        "code": "LIMIT_EXCEEDED",
        "message": "Pattern count 3 exceeds max_patterns limit.",
        "hint": "Split the input or raise limits.max_patterns.",
    }
    assert report["result"]["overlaps"] == []
    assert report["warnings"] == []


def test_naive_algorithm_rejects_patterns_deeper_than_recursion_bound(tmp_path: Path) -> None:
    checker = create_checker(
        root=str(tmp_path),
        cli_overrides=CliOverrides(algorithm="naive", max_fragments=4096),
    )
    long_line = "/".join(["a"] * 1200)

    report = checker.check_lines([long_line, long_line])

    assert report["ok"] is False
    assert report["error"]["code"] == "LIMIT_EXCEEDED"
    assert "naive algorithm limit" in report["error"]["message"]
    assert report["error"]["hint"] == "Use the dp or rolling algorithm for long patterns."


def test_long_patterns_still_check_with_table_algorithms(tmp_path: Path) -> None:
    checker = create_checker(
        root=str(tmp_path),
        cli_overrides=CliOverrides(algorithm="rolling", max_fragments=4096),
    )
    long_line = "/".join(["a"] * 1200)

    report = checker.check_lines([long_line, long_line])

    assert report["ok"] is True
    assert len(report["result"]["overlaps"]) == 1


def test_report_carries_effective_config_snapshot(tmp_path: Path) -> None:
    checker = create_checker(
        root=str(tmp_path),
        cli_overrides=CliOverrides(algorithm="dp", comment_prefix="#", max_patterns=10),
    )

    report = checker.check_lines(["a"])

    config = report["result"]["config"]
    assert config["root"] == str(tmp_path.resolve())
    assert config["engine"] == {"algorithm": "dp"}
    assert config["input"] == {"comment_prefix": "#", "skip_blank_lines": False}
    assert config["limits"] == {"max_patterns": 10, "max_fragments": 256}
    assert config["audit"] == {"enabled": False}


@pytest.mark.parametrize("algorithm", ["naive", "dp", "rolling"])
def test_every_algorithm_produces_the_same_report(tmp_path: Path, algorithm: str) -> None:
    lines = ["**/d/e", "a/b/c/d/e", "a/b/c/d", "*/b/**", "x"]
    checker = create_checker(root=str(tmp_path), cli_overrides=CliOverrides(algorithm=algorithm))

    report = checker.check_lines(lines)

    assert [(item["first_line"], item["second_line"]) for item in report["result"]["overlaps"]] == [
        (2, 1),
        (4, 1),
        (4, 2),
        (4, 3),
    ]


def test_run_ids_are_sequential(tmp_path: Path) -> None:
    checker = create_checker(root=str(tmp_path))

    first = checker.check_lines(["a"])
    second = checker.check_lines(["b"])

    assert (first["run_id"], second["run_id"]) == ("run-000001", "run-000002")
