"""Pando expression parser — operator-split recursive descent over raw text.

Unlike a token-stream parser, each level scans the text for the loosest
binding operator outside parentheses and quoted literals, splits there, and
recurses on both halves. Every node is typed as it is built; an ill-typed
expression never produces a tree.
"""

from __future__ import annotations

from .ast import (
    OP_ADD,
    OP_BIT_AND,
    OP_BIT_NOT,
    OP_BIT_OR,
    OP_BIT_XOR,
    OP_DIV,
    OP_FLOOR_DIV,
    OP_MOD,
    OP_MUL,
    OP_NEG,
    OP_SUB,
    BinaryOp,
    CompoundAssign,
    Expr,
    Pos,
    UnaryOp,
    Variable,
)
from .errors import (
    OperatorNotValidForTypeError,
    PandoSyntaxError,
    TypeMismatchError,
    UndeclaredVariableError,
)
from .lines import is_identifier, leading_spaces, scan_outside_quotes
from .literals import (
    RESERVED_WORDS,
    ends_with_exponent,
    is_numeric_literal,
    parse_literal,
)
from .types import is_integer, is_numeric

# Loosest to tightest; bitwise operators bind looser than arithmetic.
# Within a tier, longer spellings come first.
TIERS: list[tuple[str, ...]] = [
    (OP_BIT_OR,),
    (OP_BIT_XOR,),
    (OP_BIT_AND,),
    (OP_ADD, OP_SUB),
    (OP_FLOOR_DIV, OP_MUL, OP_DIV, OP_MOD),
]

# Longest spelling first so '//=' is never read as '/='.
COMPOUND_OPS: list[tuple[str, str]] = [
    ("//=", OP_FLOOR_DIV),
    ("+=", OP_ADD),
    ("-=", OP_SUB),
    ("*=", OP_MUL),
    ("/=", OP_DIV),
    ("%=", OP_MOD),
    ("|=", OP_BIT_OR),
    ("&=", OP_BIT_AND),
    ("^=", OP_BIT_XOR),
]

NUMERIC_OPS: frozenset[str] = frozenset({OP_ADD, OP_SUB, OP_MUL, OP_DIV})
INTEGER_OPS: frozenset[str] = frozenset(
    {OP_FLOOR_DIV, OP_MOD, OP_BIT_OR, OP_BIT_AND, OP_BIT_XOR}
)

_OPERATOR_CHARS: str = "+-*/%|&^~"


def operator_valid_for_type(op: str, typ: str) -> bool:
    if op in NUMERIC_OPS:
        return is_numeric(typ)
    if op in INTEGER_OPS:
        return is_integer(typ)
    return False


def find_compound_assignment(text: str) -> tuple[int, str, str] | None:
    """Locate the earliest compound-assignment operator outside literals.

    Returns (index, spelling, operator) or None. Both sides of the operator
    must be non-empty.
    """
    outside = scan_outside_quotes(text)
    i = 0
    while i < len(text):
        if outside[i]:
            for spelling, op in COMPOUND_OPS:
                end = i + len(spelling)
                if text[i:end] != spelling:
                    continue
                if text[:i].strip() != "" and text[end:].strip() != "":
                    return (i, spelling, op)
                break
        i += 1
    return None


def _match_closing(text: str, open_at: int) -> int:
    """Index of the ')' closing the '(' at open_at, or -1."""
    outside = scan_outside_quotes(text)
    depth = 0
    i = open_at
    while i < len(text):
        if outside[i]:
            if text[i] == "(":
                depth += 1
            elif text[i] == ")":
                depth -= 1
                if depth == 0:
                    return i
        i += 1
    return -1


class ExpressionParser:
    """Parses expression text for one source line against a symbol table."""

    def __init__(self, symbols: dict[str, str], line: int):
        self.symbols: dict[str, str] = symbols
        self.line: int = line

    # ── Helpers ──────────────────────────────────────────────

    def _pos(self, col: int) -> Pos:
        return Pos(self.line, col)

    def _trim(self, text: str, col: int) -> tuple[str, int]:
        return text.strip(), col + leading_spaces(text)

    def _lookup(self, name: str, col: int) -> str:
        if name not in self.symbols:
            raise UndeclaredVariableError(
                "variable '" + name + "' is not declared", self.line, col
            )
        return self.symbols[name]

    # ── Entry ────────────────────────────────────────────────

    def parse(self, text: str, col: int) -> Expr:
        """Expr = CompoundAssign | Binary"""
        t, col = self._trim(text, col)
        found = find_compound_assignment(t)
        if found is not None:
            return self.parse_compound(t, col, found)
        return self.parse_binary(t, col)

    def parse_compound(
        self, text: str, col: int, found: tuple[int, str, str]
    ) -> CompoundAssign:
        at, spelling, op = found
        name = text[:at].strip()
        var_type = self._lookup(name, col)
        value_col = col + at + len(spelling)
        value = self.parse_binary(text[at + len(spelling) :], value_col)
        if value.typ != var_type:
            raise TypeMismatchError(
                "incompatible types: cannot apply "
                + spelling
                + " with "
                + value.typ
                + " to "
                + var_type,
                self.line,
                col + at,
            )
        if not operator_valid_for_type(op, var_type):
            raise OperatorNotValidForTypeError(
                "operator '" + spelling + "' is not valid for type " + var_type,
                self.line,
                col + at,
            )
        return CompoundAssign(self._pos(col), var_type, name, op, value)

    # ── Binary ───────────────────────────────────────────────

    def _find_split(self, text: str) -> tuple[int, str] | None:
        """Loosest-tier operator at paren depth zero; leftmost wins a tie."""
        outside = scan_outside_quotes(text)
        best: tuple[int, str] | None = None
        best_tier = len(TIERS)
        depth = 0
        i = 0
        while i < len(text):
            c = text[i]
            if not outside[i]:
                i += 1
                continue
            if c == "(":
                depth += 1
            elif c == ")":
                depth -= 1
            elif depth == 0:
                tier = 0
                while tier < best_tier:
                    op = self._operator_at(text, i, TIERS[tier])
                    if op is not None:
                        best = (i, op)
                        best_tier = tier
                        break
                    tier += 1
            i += 1
        return best

    def _operator_at(self, text: str, i: int, spellings: tuple[str, ...]) -> str | None:
        for op in spellings:
            if text[i : i + len(op)] != op:
                continue
            if op == OP_ADD or op == OP_SUB:
                before = text[:i].rstrip()
                # Sign of an operand, not a binary operator.
                if before == "" or before[-1] in _OPERATOR_CHARS:
                    return None
                if ends_with_exponent(before) and before == text[:i]:
                    return None
            return op
        return None

    def parse_binary(self, text: str, col: int) -> Expr:
        t, col = self._trim(text, col)
        if t == "":
            raise PandoSyntaxError("expected expression", self.line, col)
        split = self._find_split(t)
        if split is None:
            return self.parse_unary(t, col)
        at, op = split
        left = self.parse_binary(t[:at], col)
        right = self.parse_binary(t[at + len(op) :], col + at + len(op))
        if left.typ != right.typ:
            raise TypeMismatchError(
                "incompatible types in operation: " + left.typ + " and " + right.typ,
                self.line,
                col + at,
            )
        if not operator_valid_for_type(op, left.typ):
            raise OperatorNotValidForTypeError(
                "operator '" + op + "' is not valid for type " + left.typ,
                self.line,
                col + at,
            )
        return BinaryOp(self._pos(col), left.typ, left, op, right)

    # ── Unary ────────────────────────────────────────────────

    def parse_unary(self, text: str, col: int) -> Expr:
        t, col = self._trim(text, col)
        if t == "":
            raise PandoSyntaxError("expected expression", self.line, col)
        if t[0] == OP_NEG:
            if is_numeric_literal(t):
                return parse_literal(t, self._pos(col))
            operand = self.parse_unary(t[1:], col + 1)
            if not is_numeric(operand.typ):
                raise OperatorNotValidForTypeError(
                    "unary minus is not valid for type " + operand.typ,
                    self.line,
                    col,
                )
            return UnaryOp(self._pos(col), operand.typ, OP_NEG, operand)
        if t[0] == OP_BIT_NOT:
            operand = self.parse_unary(t[1:], col + 1)
            if not is_integer(operand.typ):
                raise OperatorNotValidForTypeError(
                    "bitwise not is not valid for type " + operand.typ,
                    self.line,
                    col,
                )
            return UnaryOp(self._pos(col), operand.typ, OP_BIT_NOT, operand)
        if t[0] == "(" and _match_closing(t, 0) == len(t) - 1:
            return self.parse_binary(t[1:-1], col + 1)
        return self.parse_atomic(t, col)

    # ── Atoms ────────────────────────────────────────────────

    def parse_atomic(self, text: str, col: int) -> Expr:
        if text in self.symbols:
            return Variable(self._pos(col), self.symbols[text], text)
        if is_identifier(text) and text not in RESERVED_WORDS:
            self._lookup(text, col)
        return parse_literal(text, self._pos(col))


def parse_expression(text: str, symbols: dict[str, str], line: int, col: int) -> Expr:
    """Parse expression text whose first character sits at (line, col)."""
    return ExpressionParser(symbols, line).parse(text, col)
