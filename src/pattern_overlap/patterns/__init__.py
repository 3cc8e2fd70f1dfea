"""Pattern model and parser."""

from .models import (
    DELIMITER,
    GLOB,
    WILDCARD,
    Fragment,
    FragmentKind,
    Pattern,
    render_pattern,
)
from .parser import ParseError, ParseErrorKind, parse, parse_fragment

__all__ = [
    "DELIMITER",
    "GLOB",
    "WILDCARD",
    "Fragment",
    "FragmentKind",
    "ParseError",
    "ParseErrorKind",
    "Pattern",
    "parse",
    "parse_fragment",
    "render_pattern",
]
