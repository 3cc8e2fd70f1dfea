"""Command-line overlap checker entrypoint."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from pattern_overlap.config import (
    OUTPUT_FORMATS,
    CheckerConfig,
    CliOverrides,
    load_effective_config,
)
from pattern_overlap.conflicts import (
    CheckLimitError,
    OverlapPair,
    RejectedLine,
    enforce_check_limits,
    find_overlaps,
    format_overlap,
    load_patterns,
)
from pattern_overlap.logging import AuditEvent, JsonlAuditLogger, summarize_run, utc_timestamp
from pattern_overlap.overlap import (
    ALGORITHM_NAMES,
    AlgorithmRegistry,
    UnknownAlgorithmError,
    build_algorithm_registry,
)

EXIT_OK = 0
EXIT_OVERLAPS = 1
EXIT_FAILURE = 2


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for checker startup configuration."""
    parser = argparse.ArgumentParser(
        prog="pattern-overlap",
        description="Report which path patterns can match a common concrete path.",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        default=["-"],
        help="Files with one pattern per line. '-' reads stdin (default).",
    )
    parser.add_argument("--root", required=False, default=".")
    parser.add_argument("--config", required=False, default=None)
    parser.add_argument("--data-dir", required=False, default=None)
    parser.add_argument("--algorithm", choices=ALGORITHM_NAMES, required=False, default=None)
    parser.add_argument("--format", choices=OUTPUT_FORMATS, required=False, default=None)
    parser.add_argument("--comment-prefix", required=False, default=None)
    parser.add_argument("--skip-blank-lines", action="store_true", default=None)
    parser.add_argument("--max-patterns", type=int, required=False, default=None)
    parser.add_argument("--max-fragments", type=int, required=False, default=None)
    parser.add_argument("--audit", action="store_true", default=None)
    parser.add_argument(
        "--show-audit",
        action="store_true",
        help="Print recorded audit events as JSON lines instead of checking input.",
    )
    parser.add_argument("--since", required=False, default=None)
    parser.add_argument("--limit", type=int, required=False, default=50)
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail the run when any line is rejected by the parser.",
    )
    parser.add_argument(
        "--fail-on-overlap",
        action="store_true",
        help="Exit with status 1 when any overlap is found.",
    )
    return parser


class OverlapChecker:
    """Deterministic pairwise checker over line-oriented pattern input."""

    def __init__(self, config: CheckerConfig, strict: bool = False) -> None:
        self._config = config
        self._strict = strict
        self._algorithms: AlgorithmRegistry = build_algorithm_registry()
        self._audit_logger: JsonlAuditLogger | None = None
        if config.audit_enabled:
            self._audit_logger = JsonlAuditLogger(path=config.data_dir / "audit.jsonl")
        self._run_counter = 0

    @property
    def config(self) -> CheckerConfig:
        return self._config

    @property
    def audit_logger(self) -> JsonlAuditLogger | None:
        return self._audit_logger

    def check_lines(self, lines: Iterable[str], source: str = "<stdin>") -> dict[str, object]:
        """Parse lines, compare every pair, and return a report envelope."""
        run_id = self.next_run_id()
        report = self._check(run_id=run_id, lines=lines)
        self.log_run(run_id=run_id, source=source, report=report)
        return report

    def _check(self, run_id: str, lines: Iterable[str]) -> dict[str, object]:
        try:
            overlap_fn = self._algorithms.resolve(self._config.algorithm)
        except UnknownAlgorithmError as error:
            return self.error_response(run_id=run_id, code=error.code, message=error.message)

        loaded = load_patterns(
            lines,
            comment_prefix=self._config.input.comment_prefix,
            skip_blank_lines=self._config.input.skip_blank_lines,
        )
        rejected = [_rejected_to_dict(item) for item in loaded.rejected]
        warnings = [
            f"line {item.line_number}: {item.kind}: {item.message}" for item in loaded.rejected
        ]
        result: dict[str, object] = {
            "algorithm": self._config.algorithm,
            "pattern_count": len(loaded.entries),
            "overlaps": [],
            "rejected": rejected,
            "config": self._config.to_public_dict(),
        }

        if self._strict and loaded.rejected:
            return self.error_response(
                run_id=run_id,
                code="PARSE_ERROR",
                message=f"{len(loaded.rejected)} line(s) rejected by the pattern parser.",
                result=result,
                warnings=warnings,
            )

        try:
            enforce_check_limits(
                loaded.entries,
                self._config.limits,
                recursive=self._config.algorithm == "naive",
            )
        except CheckLimitError as error:
            return self.error_response(
                run_id=run_id,
                code="LIMIT_EXCEEDED",
                message=error.reason,
                result=result,
                warnings=warnings,
                hint=error.hint,
            )

        pairs = find_overlaps(loaded.entries, overlap_fn)
        result["overlaps"] = [_pair_to_dict(pair) for pair in pairs]
        return self.success_response(run_id=run_id, result=result, warnings=warnings)

    def next_run_id(self) -> str:
        """Generate deterministic run IDs."""
        self._run_counter += 1
        return f"run-{self._run_counter:06d}"

    @staticmethod
    def success_response(
        run_id: str,
        result: dict[str, object],
        warnings: list[str] | None = None,
    ) -> dict[str, object]:
        """Build success envelope."""
        return {
            "run_id": run_id,
            "ok": True,
            "result": result,
            "warnings": warnings or [],
        }

    @staticmethod
    def error_response(
        run_id: str,
        code: str,
        message: str,
        result: dict[str, object] | None = None,
        warnings: list[str] | None = None,
        hint: str | None = None,
    ) -> dict[str, object]:
        """Build explicit error envelope."""
        error: dict[str, object] = {"code": code, "message": message}
        if hint is not None:
            error["hint"] = hint
        return {
            "run_id": run_id,
            "ok": False,
            "result": result or {},
            "warnings": warnings or [],
            "error": error,
        }

    def log_run(self, run_id: str, source: str, report: dict[str, object]) -> None:
        """Log one sanitized run event when auditing is enabled."""
        if self._audit_logger is None:
            return
        error_payload = report.get("error")
        error_code: str | None = None
        if isinstance(error_payload, dict):
            code_value = error_payload.get("code")
            if isinstance(code_value, str):
                error_code = code_value
        event = AuditEvent(
            timestamp=utc_timestamp(),
            run_id=run_id,
            source=source,
            ok=bool(report.get("ok", False)),
            error_code=error_code,
            metadata=summarize_run(report),
        )
        self._audit_logger.append(event)

    def read_audit(self, since: str | None = None, limit: int = 50) -> list[dict[str, object]]:
        """Read recent audit events from the data directory."""
        audit_path = self._config.data_dir / "audit.jsonl"
        if not audit_path.exists():
            return []
        return JsonlAuditLogger(path=audit_path).read(since=since, limit=limit)


def create_checker(
    root: str,
    cli_overrides: CliOverrides | None = None,
    config_path: str | None = None,
    strict: bool = False,
) -> OverlapChecker:
    """Create a configured checker instance."""
    config = load_effective_config(
        root=Path(root).resolve(),
        overrides=cli_overrides,
        config_path=Path(config_path) if config_path is not None else None,
    )
    return OverlapChecker(config=config, strict=strict)


def read_input_lines(inputs: list[str], stdin: TextIO) -> tuple[list[str], str]:
    """Concatenate lines from every input; '-' is stdin."""
    lines: list[str] = []
    for name in inputs:
        if name == "-":
            lines.extend(stdin)
            continue
        with Path(name).open("r", encoding="utf-8") as handle:
            lines.extend(handle)
    source = ",".join("<stdin>" if name == "-" else name for name in inputs)
    return lines, source


def emit_report(
    report: dict[str, object],
    output_format: str,
    out_stream: TextIO,
    err_stream: TextIO,
) -> None:
    """Write a report as text lines or a single JSON document."""
    if output_format == "json":
        out_stream.write(f"{json.dumps(report, sort_keys=True)}\n")
        return
    result = report.get("result")
    if isinstance(result, dict):
        for item in result.get("rejected", []):
            err_stream.write(
                f"line {item['line']}: {item['kind']}: {item['message']}: {item['text']!r}\n"
            )
        for item in result.get("overlaps", []):
            out_stream.write(f"{item['message']}\n")
    error_payload = report.get("error")
    if isinstance(error_payload, dict):
        err_stream.write(f"error: {error_payload.get('code')}: {error_payload.get('message')}\n")
        hint = error_payload.get("hint")
        if isinstance(hint, str):
            err_stream.write(f"hint: {hint}\n")


def main(
    argv: list[str] | None = None,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Entrypoint for the pattern-overlap command."""
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    overrides = CliOverrides(
        data_dir=Path(args.data_dir).resolve() if args.data_dir is not None else None,
        algorithm=args.algorithm,
        comment_prefix=args.comment_prefix,
        skip_blank_lines=args.skip_blank_lines,
        max_patterns=args.max_patterns,
        max_fragments=args.max_fragments,
        output_format=args.format,
        audit_enabled=args.audit,
    )
    try:
        checker = create_checker(
            root=args.root,
            cli_overrides=overrides,
            config_path=args.config,
            strict=args.strict,
        )
    except ValueError as error:
        stderr.write(f"error: {error}\n")
        return EXIT_FAILURE

    if args.show_audit:
        for event in checker.read_audit(since=args.since, limit=args.limit):
            stdout.write(f"{json.dumps(event, sort_keys=True)}\n")
        return EXIT_OK

    try:
        lines, source = read_input_lines(args.inputs, stdin)
    except (OSError, UnicodeDecodeError) as error:
        stderr.write(f"error: cannot read input: {error}\n")
        return EXIT_FAILURE

    report = checker.check_lines(lines, source=source)
    emit_report(report, checker.config.output_format, stdout, stderr)
    if not report["ok"]:
        return EXIT_FAILURE
    result = report["result"]
    if args.fail_on_overlap and isinstance(result, dict) and result.get("overlaps"):
        return EXIT_OVERLAPS
    return EXIT_OK


def _pair_to_dict(pair: OverlapPair) -> dict[str, object]:
    return {
        "first": str(pair.first.pattern),
        "first_line": pair.first.line_number,
        "second": str(pair.second.pattern),
        "second_line": pair.second.line_number,
        "message": format_overlap(pair),
    }


def _rejected_to_dict(item: RejectedLine) -> dict[str, object]:
    return {
        "line": item.line_number,
        "text": item.source_text,
        "kind": str(item.kind),
        "message": item.message,
    }


if __name__ == "__main__":
    raise SystemExit(main())
