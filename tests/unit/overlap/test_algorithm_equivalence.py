from __future__ import annotations

import itertools

from pattern_overlap.overlap import dp_overlap, naive_overlap, rolling_overlap
from pattern_overlap.patterns import GLOB, WILDCARD, Fragment, Pattern

ALPHABET = (Fragment.literal("a"), Fragment.literal("b"), WILDCARD, GLOB)


def _all_patterns(max_length: int) -> list[Pattern]:
    patterns: list[Pattern] = []
    for length in range(max_length + 1):
        for fragments in itertools.product(ALPHABET, repeat=length):
            patterns.append(Pattern(fragments))
    return patterns


def test_algorithms_agree_on_every_short_pattern_pair() -> None:
    patterns = _all_patterns(3)
    for a in patterns:
        for b in patterns:
            expected = naive_overlap(a, b)
            assert dp_overlap(a, b) is expected, (a.to_text(), b.to_text())
            assert rolling_overlap(a, b) is expected, (a.to_text(), b.to_text())


def test_overlap_is_reflexive() -> None:
    for pattern in _all_patterns(3):
        assert naive_overlap(pattern, pattern)
        assert dp_overlap(pattern, pattern)
        assert rolling_overlap(pattern, pattern)


def test_overlap_is_symmetric() -> None:
    patterns = _all_patterns(3)
    for a in patterns:
        for b in patterns:
            assert rolling_overlap(a, b) is rolling_overlap(b, a)
            assert dp_overlap(a, b) is dp_overlap(b, a)


def test_root_overlaps_only_glob_only_patterns() -> None:
    root = Pattern()
    for pattern in _all_patterns(3):
        only_globs = all(fragment is GLOB for fragment in pattern)
        assert rolling_overlap(root, pattern) is only_globs, pattern.to_text()
