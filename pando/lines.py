"""Pando line splitter — separates code from a trailing comment."""

from __future__ import annotations

from dataclasses import dataclass


COMMENT_MARK: str = "#"
QUOTES: str = "\"'"


@dataclass
class SplitLine:
    """One raw line split into its parts. comment is None when no '#' is present."""

    code: str
    comment: str | None
    indent: int


def _is_digit(c: str) -> bool:
    return c >= "0" and c <= "9"


def is_alpha(c: str) -> bool:
    """Letter test for name starts. Non-ASCII letters count."""
    return c.isalpha()


def is_ident_char(c: str) -> bool:
    return c.isalpha() or _is_digit(c) or c == "_"


def is_identifier(text: str) -> bool:
    """Name shape: starts with a letter, continues with letters, digits, '_'."""
    if text == "" or not is_alpha(text[0]):
        return False
    for c in text:
        if not is_ident_char(c):
            return False
    return True


def leading_spaces(text: str) -> int:
    """Leading whitespace width, as str.strip() sees it.

    Indentation and error columns both count whitespace this way.
    """
    return len(text) - len(text.lstrip())


def split_line(line: str) -> SplitLine:
    """Split a raw line into code and comment.

    Quotes of either kind toggle a single in-literal flag, and a backslash
    escapes the next character. The first '#' outside a literal starts the
    comment; one space after it is dropped as a separator.
    """
    in_quote = False
    escaped = False
    comment_at = -1
    i = 0
    while i < len(line):
        c = line[i]
        if escaped:
            escaped = False
        elif c == "\\":
            escaped = True
        elif c in QUOTES:
            in_quote = not in_quote
        elif c == COMMENT_MARK and not in_quote:
            comment_at = i
            break
        i += 1
    indent = leading_spaces(line)
    if comment_at < 0:
        return SplitLine(line, None, indent)
    comment = line[comment_at + 1 :]
    if comment.startswith(" "):
        comment = comment[1:]
    return SplitLine(line[:comment_at], comment, indent)


def scan_outside_quotes(text: str) -> list[bool]:
    """Mark each position of text that lies outside a quoted literal.

    Quote characters themselves are marked as inside.
    """
    marks: list[bool] = []
    in_quote = False
    escaped = False
    for c in text:
        if escaped:
            escaped = False
            marks.append(not in_quote)
            continue
        if c == "\\":
            escaped = True
            marks.append(not in_quote)
            continue
        if c in QUOTES:
            in_quote = not in_quote
            marks.append(False)
            continue
        marks.append(not in_quote)
    return marks


def literal_end(text: str) -> int:
    """Index of the quote closing the literal opened by text[0], or -1.

    A backslash escapes the character after it, so an escaped quote does not
    close the literal.
    """
    quote = text[0]
    escaped = False
    i = 1
    while i < len(text):
        c = text[i]
        if escaped:
            escaped = False
        elif c == "\\":
            escaped = True
        elif c == quote:
            return i
        i += 1
    return -1
