"""Load pattern lines and detect overlapping pairs."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from pattern_overlap.overlap import OverlapFn, overlap
from pattern_overlap.patterns import ParseError, ParseErrorKind, Pattern, parse


@dataclass(slots=True, frozen=True)
class CheckLimits:
    """Bounds on the O(n^2) pairwise check."""

    max_patterns: int = 5_000
    max_fragments: int = 256


RECURSIVE_MAX_FRAGMENTS = 256


class CheckLimitError(Exception):
    """Raised when loaded patterns exceed configured check limits."""

    def __init__(self, reason: str, hint: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


@dataclass(slots=True, frozen=True)
class PatternEntry:
    """A successfully parsed input line."""

    line_number: int
    source_text: str
    pattern: Pattern


@dataclass(slots=True, frozen=True)
class RejectedLine:
    """An input line that failed to parse."""

    line_number: int
    source_text: str
    kind: ParseErrorKind
    message: str


@dataclass(slots=True, frozen=True)
class LoadedPatterns:
    """Parsed entries and rejected lines in input order."""

    entries: tuple[PatternEntry, ...]
    rejected: tuple[RejectedLine, ...]


@dataclass(slots=True, frozen=True)
class OverlapPair:
    """Two entries that overlap; `first` appears later in the input."""

    first: PatternEntry
    second: PatternEntry


def load_patterns(
    lines: Iterable[str],
    comment_prefix: str | None = None,
    skip_blank_lines: bool = False,
) -> LoadedPatterns:
    """Parse one pattern per line, collecting parse failures per line."""
    entries: list[PatternEntry] = []
    rejected: list[RejectedLine] = []
    for line_number, raw_line in enumerate(lines, start=1):
        text = raw_line.rstrip("\r\n")
        if skip_blank_lines and not text.strip():
            continue
        if comment_prefix is not None and text.startswith(comment_prefix):
            continue
        try:
            pattern = parse(text)
        except ParseError as error:
            rejected.append(
                RejectedLine(
                    line_number=line_number,
                    source_text=text,
                    kind=error.kind,
                    message=error.message,
                )
            )
            continue
        entries.append(PatternEntry(line_number=line_number, source_text=text, pattern=pattern))
    return LoadedPatterns(entries=tuple(entries), rejected=tuple(rejected))


def enforce_check_limits(
    entries: Sequence[PatternEntry],
    limits: CheckLimits,
    recursive: bool = False,
) -> None:
    """Raise CheckLimitError when the pairwise check would exceed limits.

    Recursive matching descends once per consumed fragment, so `recursive`
    also bounds every pattern by RECURSIVE_MAX_FRAGMENTS.
    """
    if len(entries) > limits.max_patterns:
        raise CheckLimitError(
            reason=f"Pattern count {len(entries)} exceeds max_patterns limit.",
            hint="Split the input or raise limits.max_patterns.",
        )
    for entry in entries:
        if len(entry.pattern) > limits.max_fragments:
            raise CheckLimitError(
                reason=(
                    f"Pattern on line {entry.line_number} has {len(entry.pattern)} fragments, "
                    "exceeding max_fragments limit."
                ),
                hint="Shorten the pattern or raise limits.max_fragments.",
            )
        if recursive and len(entry.pattern) > RECURSIVE_MAX_FRAGMENTS:
            raise CheckLimitError(
                reason=(
                    f"Pattern on line {entry.line_number} has {len(entry.pattern)} fragments, "
                    f"exceeding the naive algorithm limit of {RECURSIVE_MAX_FRAGMENTS}."
                ),
                hint="Use the dp or rolling algorithm for long patterns.",
            )


def find_overlaps(
    entries: Sequence[PatternEntry],
    overlap_fn: OverlapFn = overlap,
) -> list[OverlapPair]:
    """Compare every unordered pair once, later entries against earlier ones."""
    pairs: list[OverlapPair] = []
    for i in range(1, len(entries)):
        for j in range(i):
            if overlap_fn(entries[i].pattern, entries[j].pattern):
                pairs.append(OverlapPair(first=entries[i], second=entries[j]))
    return pairs


def format_overlap(pair: OverlapPair) -> str:
    return f"{pair.first.pattern} overlaps with {pair.second.pattern}"
