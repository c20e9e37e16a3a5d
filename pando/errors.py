"""Pando errors — every failure carries the line and column it refers to."""

from __future__ import annotations


class TranspileError(Exception):
    """Base for all translation errors."""

    kind: str = "error"

    def __init__(self, msg: str, line: int, col: int):
        self.msg: str = msg
        self.line: int = line
        self.col: int = col
        super().__init__(msg + " at line " + str(line) + " col " + str(col))


class PandoSyntaxError(TranspileError):
    """Unrecognized line shape or malformed print call."""

    kind = "syntax"


class UnknownTypeError(TranspileError):
    kind = "unknown-type"


class UndeclaredVariableError(TranspileError):
    kind = "undeclared-variable"


class TypeMismatchError(TranspileError):
    kind = "type-mismatch"


class InvalidLiteralError(TranspileError):
    kind = "invalid-literal"


class OperatorNotValidForTypeError(TranspileError):
    kind = "invalid-operator"


class NoExecutableCodeError(TranspileError):
    """Program has neither a print nor a declaration."""

    kind = "no-code"


class TranspileIOError(TranspileError):
    """Input could not be read or output could not be written."""

    kind = "io"

    def __init__(self, msg: str):
        super().__init__(msg, 1, 1)
