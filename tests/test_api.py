"""Tests for the public translate/check API."""

import random

import pytest

import pando
from pando.ast import BinaryOp, Literal, Pos, Variable
from pando.emit import emit_expression, emit_statement
from pando.errors import (
    InvalidLiteralError,
    TranspileError,
    TypeMismatchError,
    UndeclaredVariableError,
    UnknownTypeError,
)
from pando.expr import parse_expression
from pando.parse import parse_line
from pando.types import TYPE_NAMES

# Literal source text -> the type it denotes
LITERAL_SAMPLES: dict[str, str] = {
    "7": "int",
    "-7": "int",
    "2.5": "float",
    "1e3": "float",
    "True": "bool",
    "None": "None",
    'b"xy"': "bytes",
    '"s"': "str",
    "'c'": "char",
    "vec![]": "bytearray",
}

SEED = 0x9D


def test_translate_wraps_in_main() -> None:
    out = pando.translate('print("hi")\n')
    assert out == 'fn main() {\n    println!("hi");\n}\n'


def test_parse_then_emit_matches_translate() -> None:
    source = "a: int = 3\na *= a\n"
    assert pando.emit(pando.parse(source)) == pando.translate(source)


def test_parse_exposes_symbols() -> None:
    program = pando.parse("a: uint8\nb: double = 1.5\n")
    assert program.symbols == {"a": "uint8", "b": "double"}


def test_check_ok() -> None:
    assert pando.check("x: int = 1\n") == []


def test_check_returns_first_error() -> None:
    errors = pando.check("x: nope\ny: nope\n")
    assert len(errors) == 1
    e = errors[0]
    assert isinstance(e, UnknownTypeError)
    assert (e.line, e.col) == (1, 4)


def test_translate_raises_with_position() -> None:
    with pytest.raises(TypeMismatchError) as info:
        pando.translate("x: int = True\n")
    assert info.value.line == 1
    assert info.value.col == 10
    assert str(info.value).endswith("at line 1 col 10")


def test_errors_share_base() -> None:
    with pytest.raises(TranspileError):
        pando.translate("x: int = 12abc\n")
    with pytest.raises(InvalidLiteralError):
        pando.translate("x: int = 12abc\n")


def test_same_input_same_output() -> None:
    source = 'n: int = 1 | 2 ^ 3 & 4 + 5 * 6\nprint("{}")\n'
    assert pando.translate(source) == pando.translate(source)


@pytest.mark.parametrize("type_name", TYPE_NAMES)
@pytest.mark.parametrize("literal", sorted(LITERAL_SAMPLES))
def test_literal_assignment_requires_exact_type(literal: str, type_name: str) -> None:
    errors = pando.check("v: " + type_name + " = " + literal + "\n")
    if LITERAL_SAMPLES[literal] == type_name:
        assert errors == []
    else:
        assert len(errors) == 1
        assert isinstance(errors[0], TypeMismatchError)


def _random_int_expr(rng: random.Random, depth: int) -> str:
    if depth == 0 or rng.random() < 0.3:
        return rng.choice(["a", "b", str(rng.randint(0, 99))])
    op = rng.choice(["+", "-", "*", "/", "//", "%", "|", "&", "^"])
    left = _random_int_expr(rng, depth - 1)
    right = _random_int_expr(rng, depth - 1)
    if rng.random() < 0.3:
        return "(" + left + " " + op + " " + right + ")"
    return left + " " + op + " " + right


def test_random_integer_expressions_translate() -> None:
    rng = random.Random(SEED)
    for _ in range(200):
        expr = _random_int_expr(rng, 4)
        out = pando.translate("a: int = 1\nb: int = 2\nc: int = " + expr + "\n")
        body = out.split("\n")[3]
        assert body.startswith("    let mut c: i32 = ")
        assert body.endswith(";")
        assert body.count("(") == body.count(")")


def test_emit_expression_parenthesizes_each_binary() -> None:
    p = Pos(1, 1)
    inner = BinaryOp(p, "int", Literal(p, "int", "1"), "+", Variable(p, "int", "x"))
    outer = BinaryOp(p, "int", inner, "//", Literal(p, "int", "2"))
    assert emit_expression(outer) == "((1 + x) / 2)"


# ---------------------------------------------------------------------------
# Line-level entry points
# ---------------------------------------------------------------------------


def test_parse_line_threads_symbols() -> None:
    symbols: dict[str, str] = {}
    decl = parse_line("  total: uint64  # running", 4, symbols)
    assert symbols == {"total": "uint64"}
    assert (decl.pos.line, decl.pos.col) == (4, 3)
    assert emit_statement(decl) == "  let mut total: u64 = 0; // running"
    step = parse_line("total += total", 5, symbols)
    assert emit_statement(step) == "total += total;"


def test_parse_expression_reports_columns_from_offset() -> None:
    with pytest.raises(UndeclaredVariableError) as info:
        parse_expression("1 + ghost", {}, 7, 20)
    assert (info.value.line, info.value.col) == (7, 24)


def test_parse_expression_types_nodes() -> None:
    expr = parse_expression("(a ^ a) & a", {"a": "int16"}, 1, 1)
    assert isinstance(expr, BinaryOp)
    assert expr.typ == "int16"
    assert emit_expression(expr) == "((a ^ a) & a)"
