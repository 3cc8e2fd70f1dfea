#!/usr/bin/env python3
"""Time the overlap algorithms on pathological pattern pairs."""

from __future__ import annotations

import argparse
import json
import statistics
import sys
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from pattern_overlap.overlap import ALGORITHM_NAMES, build_algorithm_registry
from pattern_overlap.patterns import GLOB, Fragment, Pattern

DEFAULT_SCENARIOS = ("glob_glob", "literal_literal", "mixed")
SCENARIO_NAMES = frozenset(DEFAULT_SCENARIOS)


@dataclass(frozen=True, slots=True)
class ScenarioProfile:
    """Shared prefix of a diverging pattern pair."""

    base: tuple[Fragment, ...]


@dataclass(slots=True)
class BenchmarkRun:
    """One timed batch for a scenario and algorithm."""

    scenario: str
    algorithm: str
    run_index: int
    iterations: int
    elapsed_seconds: float
    result: bool


SCENARIO_PROFILES: dict[str, ScenarioProfile] = {
    "glob_glob": ScenarioProfile(base=(GLOB,) * 5),
    "literal_literal": ScenarioProfile(base=(Fragment.literal("a"),) * 32),
    "mixed": ScenarioProfile(base=(GLOB, Fragment.literal("x"), GLOB, Fragment.literal("y"))),
}


def _parse_names(raw: str, allowed: frozenset[str] | tuple[str, ...], label: str) -> list[str]:
    names = [item.strip().lower() for item in raw.split(",") if item.strip()]
    if not names:
        raise SystemExit(f"At least one {label} is required.")
    unknown = sorted({name for name in names if name not in allowed})
    if unknown:
        raise SystemExit(f"Unknown {label}s: {unknown}. Allowed: {sorted(allowed)}.")
    ordered_unique: list[str] = []
    for name in names:
        if name not in ordered_unique:
            ordered_unique.append(name)
    return ordered_unique


def parse_scenarios(raw: str) -> list[str]:
    return _parse_names(raw, SCENARIO_NAMES, "scenario")


def parse_algorithms(raw: str) -> list[str]:
    return _parse_names(raw, ALGORITHM_NAMES, "algorithm")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--scenarios",
        default=",".join(DEFAULT_SCENARIOS),
        help=f"Comma-separated scenarios. Default: {','.join(DEFAULT_SCENARIOS)}.",
    )
    parser.add_argument(
        "--algorithms",
        default=",".join(ALGORITHM_NAMES),
        help=f"Comma-separated algorithms. Default: {','.join(ALGORITHM_NAMES)}.",
    )
    parser.add_argument(
        "--iterations",
        type=int,
        default=200,
        help="Overlap calls per timed run. Default: 200.",
    )
    parser.add_argument(
        "--runs",
        type=int,
        default=5,
        help="Timed runs per scenario and algorithm. Default: 5.",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Optional path for the JSON summary.",
    )
    return parser.parse_args()


def build_scenario_pair(name: str) -> tuple[Pattern, Pattern]:
    """Return the scenario's shared prefix followed by `a` and `b` respectively."""
    base = SCENARIO_PROFILES[name].base
    return (
        Pattern((*base, Fragment.literal("a"))),
        Pattern((*base, Fragment.literal("b"))),
    )


def run_one(scenario: str, algorithm: str, run_index: int, iterations: int) -> BenchmarkRun:
    overlap_fn = build_algorithm_registry().resolve(algorithm)
    left, right = build_scenario_pair(scenario)
    result = False
    started = time.perf_counter()
    for _ in range(iterations):
        result = overlap_fn(left, right)
    elapsed = time.perf_counter() - started
    return BenchmarkRun(
        scenario=scenario,
        algorithm=algorithm,
        run_index=run_index,
        iterations=iterations,
        elapsed_seconds=elapsed,
        result=result,
    )


def summarize_runs(runs: list[BenchmarkRun]) -> dict[str, object]:
    per_call = [run.elapsed_seconds / run.iterations for run in runs if run.iterations > 0]
    stats: dict[str, float] | None = None
    if per_call:
        stats = {
            "min_seconds": min(per_call),
            "max_seconds": max(per_call),
            "median_seconds": statistics.median(per_call),
        }
    return {
        "runs": len(runs),
        "results": sorted({run.result for run in runs}),
        "per_call_seconds": stats,
    }


def find_disagreements(summaries: dict[str, dict[str, dict[str, object]]]) -> list[str]:
    """Return scenarios where the algorithms did not return one shared answer."""
    disagreements: list[str] = []
    for scenario in sorted(summaries):
        answers: set[bool] = set()
        for summary in summaries[scenario].values():
            results = summary.get("results")
            if isinstance(results, list):
                answers.update(bool(item) for item in results)
        if len(answers) > 1:
            disagreements.append(scenario)
    return disagreements


def main() -> int:
    args = parse_args()
    if args.runs < 1:
        raise SystemExit("--runs must be >= 1")
    if args.iterations < 1:
        raise SystemExit("--iterations must be >= 1")

    scenarios = parse_scenarios(args.scenarios)
    algorithms = parse_algorithms(args.algorithms)

    summaries: dict[str, dict[str, dict[str, object]]] = {}
    for scenario in scenarios:
        summaries[scenario] = {}
        for algorithm in algorithms:
            runs = [
                run_one(
                    scenario=scenario,
                    algorithm=algorithm,
                    run_index=index,
                    iterations=args.iterations,
                )
                for index in range(1, args.runs + 1)
            ]
            summaries[scenario][algorithm] = summarize_runs(runs)

    disagreements = find_disagreements(summaries)
    summary = {
        "benchmark_version": 1,
        "timestamp_utc": datetime.now(UTC).isoformat(),
        "protocol": {
            "scenarios": scenarios,
            "algorithms": algorithms,
            "runs": args.runs,
            "iterations": args.iterations,
        },
        "scenarios": summaries,
        "disagreements": disagreements,
    }
    if args.output:
        output_path = Path(args.output).resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8")

    print("=== Overlap Benchmark ===")
    for scenario in scenarios:
        for algorithm in algorithms:
            stats = summaries[scenario][algorithm]["per_call_seconds"]
            median = stats["median_seconds"] if isinstance(stats, dict) else float("nan")
            print(f"{scenario:<16} {algorithm:<8} median_per_call={median:.9f}s")
    if disagreements:
        print(f"disagreements: {disagreements}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
