# tests/test_source.py
import pytest

from bitpic_lint.source import Picture, iter_pictures, parse_marker

GO_SOURCE = '''package main

// plain comment, not a marker
var lintTests = []struct {
	desc string
	pic  string
}{
	//bitpeek:Example:1
	{`Bitpeek Example`, `Type:'F 'EXT=.ACK= Id:0xFHH from IPv4.Address32@:D.16@`},
	{`Not marked`, `HBBBBBBB`},
	//bitpeek:short
	{"D.11@"},
	//bitpeek
	{'"', `!64@`},
	/* //bitpeek:hidden
	   `FFF` */
	//bitpeek::2
	{"a", "b", "c\\"d"},
}
'''


@pytest.mark.parametrize(
    "comment,match,expected",
    [
        ("//bitpeek", "", ("unnamed", 0)),
        ("//bitpeek:Example", "", ("Example", 0)),
        ("//bitpeek:Example:1", "", ("Example", 1)),
        ("//bitpeek:Example:7  ", "", ("Example", 7)),
        ("//bitpeek:Example:8", "", ("Example", 0)),
        ("//bitpeek:Example:x", "", ("Example", 0)),
        ("//bitpeek:Example:", "", ("Example", 0)),
        ("//bitpeek::3", "", ("unnamed", 3)),
        ("//bitpeek:Example:1", "amp", ("Example", 1)),
        ("//bitpeek", "amp", ("unnamed", 0)),
    ],
)
def test_parse_marker(comment, match, expected):
    assert parse_marker(comment, match) == expected


@pytest.mark.parametrize(
    "comment,match",
    [("// bitpeek:x", ""), ("//bitpeeker:x", ""), ("//bitpeek:Octals:1", "amp")],
)
def test_parse_marker_ignored(comment, match):
    assert parse_marker(comment, match) is None


def test_iter_pictures():
    assert list(iter_pictures(GO_SOURCE)) == [
        Picture("Example", 9, "Type:'F 'EXT=.ACK= Id:0xFHH from IPv4.Address32@:D.16@"),
        Picture("short", 12, "D.11@"),
        Picture("unnamed", 14, "!64@"),
        Picture("unnamed", 18, 'c\\"d'),
    ]


def test_iter_pictures_match():
    assert [p.name for p in iter_pictures(GO_SOURCE, match="amp")] == [
        "Example", "unnamed", "unnamed",
    ]


def test_iter_pictures_without_markers():
    assert list(iter_pictures('var s = `FFF`\n')) == []


def test_iter_pictures_multiline_literal_reports_closing_line():
    source = "//bitpeek:multi\nvar pic = `Type:'F\n 'EXT=.ACK=`\n"
    assert list(iter_pictures(source)) == [Picture("multi", 3, "Type:'F\n 'EXT=.ACK=")]
