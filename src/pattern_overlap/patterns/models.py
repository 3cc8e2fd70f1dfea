"""Typed models for hierarchical path patterns."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import IntEnum
from typing import Final

DELIMITER: Final[str] = "/"
WILDCARD_CHAR: Final[str] = "*"


class FragmentKind(IntEnum):
    """Closed set of fragment shapes, ordered for structural comparison."""

    LITERAL = 0
    WILDCARD = 1
    GLOB = 2


@dataclass(slots=True, frozen=True, order=True)
class Fragment:
    """One path segment: a literal, a single-level `*`, or a multi-level `**`."""

    kind: FragmentKind
    text: str = ""

    def __post_init__(self) -> None:
        if self.kind is FragmentKind.LITERAL:
            if not self.text:
                raise ValueError("Literal fragment text must be non-empty.")
            if WILDCARD_CHAR in self.text:
                raise ValueError("Literal fragment text must not contain '*'.")
        elif self.text:
            raise ValueError(f"{self.kind.name.title()} fragment carries no text.")

    @classmethod
    def literal(cls, text: str) -> Fragment:
        """Build a literal fragment."""
        return cls(FragmentKind.LITERAL, text)

    @property
    def is_glob(self) -> bool:
        return self.kind is FragmentKind.GLOB

    def __str__(self) -> str:
        if self.kind is FragmentKind.LITERAL:
            return self.text
        if self.kind is FragmentKind.WILDCARD:
            return WILDCARD_CHAR
        return WILDCARD_CHAR * 2


WILDCARD: Final[Fragment] = Fragment(FragmentKind.WILDCARD)
GLOB: Final[Fragment] = Fragment(FragmentKind.GLOB)


@dataclass(slots=True, frozen=True)
class Pattern:
    """Immutable fragment sequence; the empty pattern is the root."""

    fragments: tuple[Fragment, ...] = ()

    @classmethod
    def of(cls, *fragments: Fragment) -> Pattern:
        return cls(tuple(fragments))

    def __len__(self) -> int:
        return len(self.fragments)

    def __iter__(self) -> Iterator[Fragment]:
        return iter(self.fragments)

    def to_text(self) -> str:
        """Return the delimiter-joined form accepted back by `parse`."""
        return DELIMITER.join(str(fragment) for fragment in self.fragments)

    def __str__(self) -> str:
        return render_pattern(self)


def render_pattern(pattern: Pattern) -> str:
    """Render a pattern for reports: `/a/*/**`, or `` for the root."""
    return "".join(f"{DELIMITER}{fragment}" for fragment in pattern.fragments)
