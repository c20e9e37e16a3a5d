"""Pando AST — typed expression and statement nodes."""

from __future__ import annotations

from dataclasses import dataclass, field


# ============================================================
# POSITION
# ============================================================


@dataclass
class Pos:
    """Source position, 1-indexed. col counts characters of the raw line."""

    line: int
    col: int


# ============================================================
# OPERATORS
# ============================================================

OP_ADD: str = "+"
OP_SUB: str = "-"
OP_MUL: str = "*"
OP_DIV: str = "/"
OP_FLOOR_DIV: str = "//"
OP_MOD: str = "%"
OP_BIT_OR: str = "|"
OP_BIT_AND: str = "&"
OP_BIT_XOR: str = "^"

OP_NEG: str = "-"
OP_BIT_NOT: str = "~"


# ============================================================
# EXPRESSIONS
# ============================================================


@dataclass
class Expr:
    """Base for all expressions. typ is the resolved Pando type name."""

    pos: Pos
    typ: str


@dataclass
class Literal(Expr):
    """Literal with value already spelled as a Rust token."""

    value: str


@dataclass
class Variable(Expr):
    name: str


@dataclass
class BinaryOp(Expr):
    """left op right."""

    left: Expr
    op: str
    right: Expr


@dataclass
class UnaryOp(Expr):
    """op operand."""

    op: str
    operand: Expr


@dataclass
class CompoundAssign(Expr):
    """name op= value."""

    name: str
    op: str
    value: Expr


# ============================================================
# STATEMENTS
# ============================================================


@dataclass
class Stmt:
    """Base for all statements."""

    pos: Pos


@dataclass
class Print(Stmt):
    """print("...") with content already escaped for Rust."""

    content: str
    comment: str | None
    indent: int


@dataclass
class VariableDecl(Stmt):
    """name: type [= value]."""

    name: str
    typ: str
    value: Expr | None
    comment: str | None
    indent: int


@dataclass
class VariableAssign(Stmt):
    """name = value, or name op= value when value is a CompoundAssign."""

    name: str
    value: Expr
    comment: str | None
    indent: int


@dataclass
class CommentLine(Stmt):
    """Comment-only line. text already carries the Rust marker."""

    text: str
    indent: int


@dataclass
class Blank(Stmt):
    pass


@dataclass
class Program:
    """Ordered statements and the symbol table they left behind."""

    stmts: list[Stmt]
    symbols: dict[str, str] = field(default_factory=dict)


# ============================================================
# SERIALIZATION
# ============================================================


def to_dict(obj: object) -> object:
    """Recursively convert nodes into JSON-compatible values."""
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if isinstance(obj, list):
        return [to_dict(x) for x in obj]
    if isinstance(obj, dict):
        return {str(k): to_dict(v) for k, v in obj.items()}
    if isinstance(obj, Pos):
        return {"line": obj.line, "col": obj.col}
    if isinstance(obj, Program):
        return {
            "_type": "Program",
            "stmts": to_dict(obj.stmts),
            "symbols": to_dict(obj.symbols),
        }
    if isinstance(obj, (Expr, Stmt)):
        d: dict[str, object] = {"_type": type(obj).__name__}
        for name in obj.__dataclass_fields__:
            d[name] = to_dict(getattr(obj, name))
        return d
    raise TypeError("cannot serialize " + type(obj).__name__)
