"""Pando statement parser — classifies each line and builds typed statements."""

from __future__ import annotations

from .ast import (
    Blank,
    CommentLine,
    Pos,
    Print,
    Program,
    Stmt,
    VariableAssign,
    VariableDecl,
)
from .errors import (
    NoExecutableCodeError,
    PandoSyntaxError,
    TypeMismatchError,
    UndeclaredVariableError,
    UnknownTypeError,
)
from .expr import ExpressionParser, find_compound_assignment
from .lines import (
    is_alpha,
    is_ident_char,
    is_identifier,
    leading_spaces,
    literal_end,
    split_line,
)
from .types import escape_string, is_known_type

PRINT_KEYWORD: str = "print"
RUST_COMMENT: str = "//"


def _starts_with_keyword(code: str, word: str) -> bool:
    if not code.startswith(word):
        return False
    return len(code) == len(word) or not is_ident_char(code[len(word)])


class StatementParser:
    """Parses one line at a time, threading a symbol table between lines."""

    def __init__(self, symbols: dict[str, str] | None = None):
        self.symbols: dict[str, str] = symbols if symbols is not None else {}

    def parse_line(self, raw: str, line: int) -> Stmt:
        parts = split_line(raw)
        code = parts.code.strip()
        col = 1 + leading_spaces(parts.code)
        comment: str | None = None
        if parts.comment is not None:
            comment = parts.comment.lstrip()
        pos = Pos(line, col)
        if code == "":
            if comment is None:
                return Blank(pos)
            if comment == "":
                return CommentLine(pos, RUST_COMMENT, parts.indent)
            return CommentLine(pos, RUST_COMMENT + " " + comment, parts.indent)
        if _starts_with_keyword(code, PRINT_KEYWORD):
            return self.parse_print(code, pos, comment, parts.indent)
        if ":" in code:
            return self.parse_decl(code, pos, comment, parts.indent)
        if "=" in code:
            stmt = self.parse_assign(code, pos, comment, parts.indent)
            if stmt is not None:
                return stmt
        raise PandoSyntaxError(
            "unrecognized statement: expected print, declaration or assignment",
            line,
            1,
        )

    # ── Print ────────────────────────────────────────────────

    def parse_print(
        self, code: str, pos: Pos, comment: str | None, indent: int
    ) -> Print:
        """Print = 'print' '(' StringLit ')'"""
        rest = code[len(PRINT_KEYWORD) :]
        rest_col = pos.col + len(PRINT_KEYWORD) + leading_spaces(rest)
        call = rest.strip()
        if not call.startswith("(") or not call.endswith(")") or len(call) < 2:
            raise PandoSyntaxError("print call requires parentheses", pos.line, pos.col)
        inner = call[1:-1]
        arg = inner.strip()
        arg_col = rest_col + 1 + leading_spaces(inner)
        # Exactly one string literal: its closing quote is the last character.
        if len(arg) < 2 or arg[0] != '"' or literal_end(arg) != len(arg) - 1:
            raise PandoSyntaxError(
                "print argument must be a double-quoted string", pos.line, arg_col
            )
        return Print(pos, escape_string(arg[1:-1]), comment, indent)

    # ── Declarations ─────────────────────────────────────────

    def parse_decl(
        self, code: str, pos: Pos, comment: str | None, indent: int
    ) -> VariableDecl:
        """Decl = Name ':' Type ( '=' Expr )?"""
        colon = code.index(":")
        name = code[:colon].strip()
        if name == "":
            raise PandoSyntaxError("missing variable name", pos.line, pos.col)
        if not is_alpha(name[0]):
            raise PandoSyntaxError(
                "variable name must start with a letter", pos.line, pos.col
            )
        after = code[colon + 1 :]
        eq = after.find("=")
        type_text = after if eq < 0 else after[:eq]
        type_name = type_text.strip()
        type_col = pos.col + colon + 1 + leading_spaces(type_text)
        if not is_known_type(type_name):
            raise UnknownTypeError("unknown type: " + type_name, pos.line, type_col)
        if not is_identifier(name):
            raise PandoSyntaxError(
                "invalid variable name '" + name + "'", pos.line, pos.col
            )
        # Visible to the initializer: 'x: int = x' resolves against this entry.
        self.symbols[name] = type_name
        if eq < 0:
            return VariableDecl(pos, name, type_name, None, comment, indent)
        value_col = pos.col + colon + 1 + eq + 1
        parser = ExpressionParser(self.symbols, pos.line)
        value = parser.parse(after[eq + 1 :], value_col)
        if value.typ != type_name:
            raise TypeMismatchError(
                "incompatible types: cannot assign "
                + value.typ
                + " to "
                + name
                + ": "
                + type_name,
                pos.line,
                value.pos.col,
            )
        return VariableDecl(pos, name, type_name, value, comment, indent)

    # ── Assignments ──────────────────────────────────────────

    def parse_assign(
        self, code: str, pos: Pos, comment: str | None, indent: int
    ) -> VariableAssign | None:
        """Assign = Name '=' Expr | Name CompoundOp Expr"""
        parser = ExpressionParser(self.symbols, pos.line)
        found = find_compound_assignment(code)
        eq = code.index("=")
        lhs = code[: found[0]] if found is not None else code[:eq]
        name = lhs.strip()
        if name == "" or not is_alpha(name[0]):
            return None
        if name not in self.symbols:
            raise UndeclaredVariableError(
                "variable '" + name + "' is not declared", pos.line, pos.col
            )
        var_type = self.symbols[name]
        if found is not None:
            value = parser.parse_compound(code, pos.col, found)
        else:
            value = parser.parse(code[eq + 1 :], pos.col + eq + 1)
        if value.typ != var_type:
            raise TypeMismatchError(
                "incompatible types: cannot assign " + value.typ + " to " + var_type,
                pos.line,
                value.pos.col,
            )
        return VariableAssign(pos, name, value, comment, indent)


def parse_line(raw: str, line: int, symbols: dict[str, str]) -> Stmt:
    """Parse one raw line, updating symbols in place."""
    return StatementParser(symbols).parse_line(raw, line)


def source_lines(source: str) -> list[str]:
    """Split at LF or CRLF; a final newline does not open an extra line."""
    lines = source.split("\n")
    if len(lines) > 0 and lines[-1] == "":
        lines.pop()
    i = 0
    while i < len(lines):
        if lines[i].endswith("\r"):
            lines[i] = lines[i][:-1]
        i += 1
    return lines


def has_executable_code(stmts: list[Stmt]) -> bool:
    for stmt in stmts:
        if isinstance(stmt, (Print, VariableDecl)):
            return True
    return False


def parse_program(source: str) -> Program:
    """Parse a whole source text; the first error aborts."""
    parser = StatementParser()
    stmts: list[Stmt] = []
    lines = source_lines(source)
    i = 0
    while i < len(lines):
        stmts.append(parser.parse_line(lines[i], i + 1))
        i += 1
    if not has_executable_code(stmts):
        raise NoExecutableCodeError("program contains no statements to execute", 1, 1)
    return Program(stmts, parser.symbols)
