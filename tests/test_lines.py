"""Tests for line splitting and source line handling."""

from pando.lines import (
    is_identifier,
    leading_spaces,
    literal_end,
    scan_outside_quotes,
    split_line,
)
from pando.parse import parse_line, source_lines


def test_split_without_comment() -> None:
    parts = split_line("x: int = 1")
    assert parts.code == "x: int = 1"
    assert parts.comment is None
    assert parts.indent == 0


def test_split_trailing_comment_drops_one_space() -> None:
    parts = split_line("x: int = 1 #  two spaces")
    assert parts.code == "x: int = 1 "
    assert parts.comment == " two spaces"


def test_split_empty_comment() -> None:
    parts = split_line("print(\"a\") #")
    assert parts.comment == ""


def test_hash_inside_double_quotes() -> None:
    parts = split_line('print("#1") # real')
    assert parts.code == 'print("#1") '
    assert parts.comment == "real"


def test_hash_inside_single_quotes() -> None:
    parts = split_line("c: char = '#'")
    assert parts.comment is None


def test_escaped_quote_does_not_close_literal() -> None:
    parts = split_line('print("a\\"#b")')
    assert parts.comment is None


def test_indent_counts_leading_whitespace() -> None:
    assert split_line("    # note").indent == 4
    assert leading_spaces("\t x") == 2
    assert leading_spaces("") == 0


def test_indent_and_column_agree_on_unicode_space() -> None:
    line = "\u00a0\u00a0n: int = 1"
    assert split_line(line).indent == 2
    stmt = parse_line(line, 1, {})
    assert stmt.pos.col == 3
    assert stmt.indent == 2


def test_scan_outside_quotes_marks_quotes_inside() -> None:
    marks = scan_outside_quotes('a"b"c')
    assert marks == [True, False, False, False, True]


def test_identifier_shape() -> None:
    assert is_identifier("count_2")
    assert is_identifier("café")
    assert not is_identifier("2count")
    assert not is_identifier("_hidden")
    assert not is_identifier("a-b")
    assert not is_identifier("")


def test_source_lines_strips_crlf() -> None:
    assert source_lines("a\r\nb\r\n") == ["a", "b"]


def test_source_lines_final_newline_opens_no_line() -> None:
    assert source_lines("a\n") == ["a"]
    assert source_lines("a\n\n") == ["a", ""]
    assert source_lines("") == []


def test_source_lines_keeps_lone_carriage_return_inside_line() -> None:
    assert source_lines("a\rb\n") == ["a\rb"]


def test_literal_end_finds_first_closing_quote() -> None:
    assert literal_end('"abc"') == 4
    assert literal_end('"a" + "b"') == 2
    assert literal_end('"a\\"b"') == 5
    assert literal_end('"open') == -1
