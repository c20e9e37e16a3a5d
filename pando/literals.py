"""Pando literal grammar — atomic value tokens and their static types."""

from __future__ import annotations

import re

from .ast import Literal, Pos
from .errors import InvalidLiteralError
from .lines import literal_end
from .types import (
    TY_BOOL,
    TY_BYTEARRAY,
    TY_BYTES,
    TY_CHAR,
    TY_FLOAT,
    TY_INT,
    TY_NONE,
    TY_STR,
    escape_char,
    escape_string,
)

INT_MIN: int = -(2**63)
INT_MAX: int = 2**63 - 1

_INT_RE = re.compile(r"-?[0-9]+")
_FLOAT_RE = re.compile(r"-?[0-9]+(\.[0-9]+([eE][+-]?[0-9]+)?|\.|[eE][+-]?[0-9]+)")
_EXPONENT_HEAD_RE = re.compile(r"[0-9]+(\.[0-9]+)?[eE]")

TRUE_SPELLING: str = "True"
FALSE_SPELLING: str = "False"
NONE_SPELLING: str = "None"
EMPTY_BUFFER_SPELLINGS: tuple[str, ...] = ("Vec::new()", "vec![]")

RESERVED_WORDS: frozenset[str] = frozenset(
    {TRUE_SPELLING, FALSE_SPELLING, NONE_SPELLING, "print"}
)


def is_int_literal(text: str) -> bool:
    if _INT_RE.fullmatch(text) is None:
        return False
    value = int(text)
    return value >= INT_MIN and value <= INT_MAX


def is_float_literal(text: str) -> bool:
    """Decimal float, or a digit string too wide for a 64-bit integer."""
    if _FLOAT_RE.fullmatch(text) is not None:
        return True
    return _INT_RE.fullmatch(text) is not None and not is_int_literal(text)


def ends_with_exponent(text: str) -> bool:
    """True when text ends in the mantissa of a float such as '1.5e'."""
    i = len(text)
    while i > 0 and (text[i - 1].isalnum() or text[i - 1] == "." or text[i - 1] == "_"):
        i -= 1
    return _EXPONENT_HEAD_RE.fullmatch(text[i:]) is not None


def is_numeric_literal(text: str) -> bool:
    return is_int_literal(text) or is_float_literal(text)


def _quoted(text: str, quote: str) -> bool:
    return len(text) >= 2 and text[0] == quote and text[-1] == quote


def _single_string(text: str) -> bool:
    """One double-quoted literal whose closing quote ends the text."""
    return _quoted(text, '"') and literal_end(text) == len(text) - 1


def _float_token(text: str) -> str:
    # Integer-shaped floats need a fraction to stay floats in Rust.
    if _INT_RE.fullmatch(text) is not None:
        return text + ".0"
    return text


def parse_literal(text: str, pos: Pos) -> Literal:
    """Recognize a literal token, trying each category in a fixed order."""
    t = text.strip()
    if is_int_literal(t):
        return Literal(pos, TY_INT, t)
    if is_float_literal(t):
        return Literal(pos, TY_FLOAT, _float_token(t))
    if t == TRUE_SPELLING:
        return Literal(pos, TY_BOOL, "true")
    if t == FALSE_SPELLING:
        return Literal(pos, TY_BOOL, "false")
    if t == NONE_SPELLING:
        return Literal(pos, TY_NONE, "()")
    if t.startswith("b") and _single_string(t[1:]):
        return Literal(pos, TY_BYTES, 'b"' + escape_string(t[2:-1]) + '"')
    if _single_string(t):
        return Literal(pos, TY_STR, '"' + escape_string(t[1:-1]) + '"')
    if _quoted(t, "'") and len(t) >= 3:
        return Literal(pos, TY_CHAR, "'" + escape_char(t[1:-1]) + "'")
    if t in EMPTY_BUFFER_SPELLINGS:
        return Literal(pos, TY_BYTEARRAY, "Vec::new()")
    raise InvalidLiteralError("invalid literal: " + repr(t), pos.line, pos.col)
