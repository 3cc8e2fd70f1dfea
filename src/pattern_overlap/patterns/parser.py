"""Parse delimited pattern text into typed fragments."""

from __future__ import annotations

from enum import StrEnum

from pattern_overlap.patterns.models import (
    DELIMITER,
    GLOB,
    WILDCARD,
    WILDCARD_CHAR,
    Fragment,
    Pattern,
)


class ParseErrorKind(StrEnum):
    """Documented reasons a pattern text is rejected."""

    EMPTY_FRAGMENT = "EMPTY_FRAGMENT"
    INVALID_WILDCARD_USAGE = "INVALID_WILDCARD_USAGE"


_MESSAGES = {
    ParseErrorKind.EMPTY_FRAGMENT: "Pattern fragments must be non-empty.",
    ParseErrorKind.INVALID_WILDCARD_USAGE: "Only '*' and '**' fragments may contain '*'.",
}


class ParseError(Exception):
    """Raised when pattern text cannot be parsed."""

    def __init__(self, kind: ParseErrorKind, text: str, index: int) -> None:
        super().__init__(_MESSAGES[kind])
        self.kind = kind
        self.text = text
        self.index = index

    @property
    def message(self) -> str:
        return _MESSAGES[self.kind]


def parse_fragment(token: str, index: int = 0) -> Fragment:
    """Classify a single delimiter-free token."""
    if not token:
        raise ParseError(ParseErrorKind.EMPTY_FRAGMENT, token, index)
    if WILDCARD_CHAR in token:
        if token == "*":
            return WILDCARD
        if token == "**":
            return GLOB
        raise ParseError(ParseErrorKind.INVALID_WILDCARD_USAGE, token, index)
    return Fragment.literal(token)


def parse(text: str) -> Pattern:
    """Parse `a/*/**` style text; the empty string is the root pattern."""
    if not text:
        return Pattern()
    fragments: list[Fragment] = []
    for index, token in enumerate(text.split(DELIMITER)):
        try:
            fragments.append(parse_fragment(token, index))
        except ParseError as error:
            raise ParseError(error.kind, text, index) from None
    return Pattern(tuple(fragments))
