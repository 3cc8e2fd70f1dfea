"""Static overlap detection for hierarchical path patterns."""

from .overlap import overlap
from .patterns import Fragment, FragmentKind, ParseError, ParseErrorKind, Pattern, parse

__all__ = [
    "Fragment",
    "FragmentKind",
    "ParseError",
    "ParseErrorKind",
    "Pattern",
    "overlap",
    "parse",
]
