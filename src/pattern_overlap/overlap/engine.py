"""Decide whether two path patterns can match a common concrete path.

Three implementations of the same recurrence are kept side by side:

* ``naive_overlap`` recurses directly and is exponential when glob runs face
  each other. It is the correctness oracle and the slow benchmark reference.
* ``dp_overlap`` fills an explicit ``(len(a) + 1) x (len(b) + 1)`` table of
  prefix results, O(len(a) * len(b)) time and space.
* ``rolling_overlap`` fills the same table keeping two rows only, with the
  shorter pattern as columns.

Cell ``(i, j)`` answers "do ``a[:i]`` and ``b[:j]`` overlap". A glob on either
side may stop (``(i - 1, j)`` or ``(i, j - 1)`` depending on the side), keep
absorbing the other side's fragment, or absorb it and stop (``(i - 1, j - 1)``).
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from pattern_overlap.patterns.models import Fragment, FragmentKind, Pattern

OverlapFn = Callable[[Pattern, Pattern], bool]


def naive_overlap(a: Pattern, b: Pattern) -> bool:
    """Recursive overlap check without memoisation."""
    left = a.fragments
    right = b.fragments

    def rec(i: int, j: int) -> bool:
        if i == len(left) and j == len(right):
            return True
        if i == len(left):
            return right[j].is_glob and rec(i, j + 1)
        if j == len(right):
            return left[i].is_glob and rec(i + 1, j)

        head_a = left[i]
        head_b = right[j]
        if head_a.is_glob or head_b.is_glob:
            return rec(i + 1, j + 1) or rec(i, j + 1) or rec(i + 1, j)
        if head_a.kind is FragmentKind.LITERAL and head_b.kind is FragmentKind.LITERAL:
            return head_a.text == head_b.text and rec(i + 1, j + 1)
        return rec(i + 1, j + 1)

    return rec(0, 0)


def dp_overlap(a: Pattern, b: Pattern) -> bool:
    """Overlap check over a full prefix table."""
    left = a.fragments
    right = b.fragments
    rows = len(left) + 1
    cols = len(right) + 1
    memo = [[False] * cols for _ in range(rows)]
    memo[0][0] = True
    for i in range(1, rows):
        memo[i][0] = memo[i - 1][0] and left[i - 1].is_glob
    for j in range(1, cols):
        memo[0][j] = memo[0][j - 1] and right[j - 1].is_glob

    for i in range(1, rows):
        for j in range(1, cols):
            memo[i][j] = _cell(
                left[i - 1],
                right[j - 1],
                diagonal=memo[i - 1][j - 1],
                up=memo[i - 1][j],
                back=memo[i][j - 1],
            )
    return memo[rows - 1][cols - 1]


def rolling_overlap(a: Pattern, b: Pattern) -> bool:
    """Overlap check keeping only the previous and current table rows."""
    left: Sequence[Fragment] = a.fragments
    right: Sequence[Fragment] = b.fragments
    if len(right) > len(left):
        left, right = right, left

    cols = len(right) + 1
    current = [False] * cols
    current[0] = True
    for j in range(1, cols):
        current[j] = current[j - 1] and right[j - 1].is_glob

    previous = [False] * cols
    for fragment in left:
        previous, current = current, previous
        current[0] = previous[0] and fragment.is_glob
        for j in range(1, cols):
            current[j] = _cell(
                fragment,
                right[j - 1],
                diagonal=previous[j - 1],
                up=previous[j],
                back=current[j - 1],
            )
    return current[cols - 1]


def overlap(a: Pattern, b: Pattern) -> bool:
    """Return True when some concrete path matches both patterns."""
    return rolling_overlap(a, b)


def _cell(x: Fragment, y: Fragment, *, diagonal: bool, up: bool, back: bool) -> bool:
    # Whichever side holds the glob, each neighbour is one of its three choices.
    if x.is_glob or y.is_glob:
        return diagonal or up or back
    if x.kind is FragmentKind.LITERAL and y.kind is FragmentKind.LITERAL:
        return diagonal and x.text == y.text
    return diagonal
