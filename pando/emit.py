"""RustEmitter: Pando AST -> Rust source.

Total over the node types in `pando/ast.py`: an unknown node raises
NotImplementedError so a newly added variant cannot be skipped silently.
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
    Blank,
    CommentLine,
    CompoundAssign,
    Expr,
    Literal,
    Print,
    Program,
    Stmt,
    UnaryOp,
    Variable,
    VariableAssign,
    VariableDecl,
)
from .types import default_value, rust_type

# Floor division lowers to Rust's truncating '/', so results differ from
# Pando's intent for negative operands.
_RUST_BINARY: dict[str, str] = {
    OP_ADD: "+",
    OP_SUB: "-",
    OP_MUL: "*",
    OP_DIV: "/",
    OP_FLOOR_DIV: "/",
    OP_MOD: "%",
    OP_BIT_OR: "|",
    OP_BIT_AND: "&",
    OP_BIT_XOR: "^",
}

_RUST_UNARY: dict[str, str] = {
    OP_NEG: "-",
    OP_BIT_NOT: "!",
}


def _with_comment(text: str, comment: str | None) -> str:
    if comment is None:
        return text
    if comment == "":
        return text + " //"
    return text + " // " + comment


def _format_string(content: str) -> str:
    """Double braces so println! prints them instead of interpolating."""
    return content.replace("{", "{{").replace("}", "}}")


class RustEmitter:
    """Emit a Rust program with every statement inside fn main()."""

    BODY_INDENT: str = "    "

    def emit(self, program: Program) -> str:
        out = ["fn main() {"]
        for stmt in program.stmts:
            text = self.emit_stmt(stmt)
            # Blank lines carry no body indent.
            out.append(self.BODY_INDENT + text if text else "")
        out.append("}")
        return "\n".join(out) + "\n"

    # ── statements ───────────────────────────────────────────

    def emit_stmt(self, stmt: Stmt) -> str:
        """Render one statement as a single line, source indentation included."""
        if isinstance(stmt, Print):
            text = 'println!("' + _format_string(stmt.content) + '");'
            return " " * stmt.indent + _with_comment(text, stmt.comment)
        if isinstance(stmt, VariableDecl):
            return " " * stmt.indent + _with_comment(self._emit_decl(stmt), stmt.comment)
        if isinstance(stmt, VariableAssign):
            return " " * stmt.indent + _with_comment(
                self._emit_assign(stmt), stmt.comment
            )
        if isinstance(stmt, CommentLine):
            return " " * stmt.indent + stmt.text
        if isinstance(stmt, Blank):
            return ""
        raise NotImplementedError("Rust statement: " + type(stmt).__name__)

    def _emit_decl(self, s: VariableDecl) -> str:
        if s.value is not None:
            value = self.emit_expr(s.value)
        else:
            value = default_value(s.typ)
        return "let mut " + s.name + ": " + rust_type(s.typ) + " = " + value + ";"

    def _emit_assign(self, s: VariableAssign) -> str:
        if isinstance(s.value, CompoundAssign):
            op = _RUST_BINARY[s.value.op] + "="
            return s.name + " " + op + " " + self.emit_expr(s.value.value) + ";"
        return s.name + " = " + self.emit_expr(s.value) + ";"

    # ── expressions ──────────────────────────────────────────

    def emit_expr(self, expr: Expr) -> str:
        if isinstance(expr, Literal):
            return expr.value
        if isinstance(expr, Variable):
            return expr.name
        if isinstance(expr, BinaryOp):
            left = self.emit_expr(expr.left)
            right = self.emit_expr(expr.right)
            return "(" + left + " " + _RUST_BINARY[expr.op] + " " + right + ")"
        if isinstance(expr, UnaryOp):
            return "(" + _RUST_UNARY[expr.op] + self.emit_expr(expr.operand) + ")"
        if isinstance(expr, CompoundAssign):
            op = _RUST_BINARY[expr.op] + "="
            return expr.name + " " + op + " " + self.emit_expr(expr.value)
        raise NotImplementedError("Rust expression: " + type(expr).__name__)


def emit_rust(program: Program) -> str:
    """Render a parsed program as a Rust source file."""
    return RustEmitter().emit(program)


def emit_statement(stmt: Stmt) -> str:
    return RustEmitter().emit_stmt(stmt)


def emit_expression(expr: Expr) -> str:
    return RustEmitter().emit_expr(expr)
