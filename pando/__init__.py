"""Pando to Rust translator — public API."""

from __future__ import annotations

from .ast import Program
from .emit import emit_rust
from .errors import TranspileError as TranspileError
from .parse import parse_program


def parse(source: str) -> Program:
    """Parse Pando source into a typed Program."""
    return parse_program(source)


def emit(program: Program) -> str:
    """Render a Program as Rust source."""
    return emit_rust(program)


def translate(source: str) -> str:
    """Translate Pando source to Rust source. Raises TranspileError."""
    return emit_rust(parse_program(source))


def check(source: str) -> list[TranspileError]:
    """Parse and type-check Pando source. Returns list of errors (empty = ok)."""
    try:
        parse_program(source)
    except TranspileError as e:
        return [e]
    return []
