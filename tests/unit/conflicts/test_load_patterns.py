from __future__ import annotations

from pattern_overlap.conflicts import load_patterns
from pattern_overlap.patterns import ParseErrorKind, Pattern, parse


def test_each_line_parses_independently() -> None:
    loaded = load_patterns(["a/b\n", "a//b\n", "x*y\r\n", "**\n"])

    assert [entry.line_number for entry in loaded.entries] == [1, 4]
    assert [entry.pattern for entry in loaded.entries] == [parse("a/b"), parse("**")]
    assert [(item.line_number, item.kind) for item in loaded.rejected] == [
        (2, ParseErrorKind.EMPTY_FRAGMENT),
        (3, ParseErrorKind.INVALID_WILDCARD_USAGE),
    ]
    assert loaded.rejected[1].source_text == "x*y"


def test_blank_lines_are_root_patterns_by_default() -> None:
    loaded = load_patterns(["\n", "a\n"])

    assert loaded.entries[0].pattern == Pattern()
    assert loaded.entries[0].source_text == ""


def test_blank_and_comment_lines_can_be_skipped() -> None:
    loaded = load_patterns(
        ["# header\n", "\n", "   \n", "a/*\n"],
        comment_prefix="#",
        skip_blank_lines=True,
    )

    assert [entry.line_number for entry in loaded.entries] == [4]
    assert loaded.rejected == ()
