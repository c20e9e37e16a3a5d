"""Pando type catalog — names, Rust spellings, defaults, and type classes."""

from __future__ import annotations


TY_INT: str = "int"
TY_FLOAT: str = "float"
TY_DOUBLE: str = "double"
TY_BOOL: str = "bool"
TY_CHAR: str = "char"
TY_STR: str = "str"
TY_NONE: str = "None"
TY_BYTES: str = "bytes"
TY_BYTEARRAY: str = "bytearray"

SIGNED_INT_TYPES: tuple[str, ...] = (
    "int",
    "int8",
    "int16",
    "int32",
    "int64",
    "int128",
    "int_size",
)

UNSIGNED_INT_TYPES: tuple[str, ...] = (
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "uint128",
    "uint_size",
)

INTEGER_TYPES: frozenset[str] = frozenset(SIGNED_INT_TYPES + UNSIGNED_INT_TYPES)
FLOAT_TYPES: frozenset[str] = frozenset({TY_FLOAT, TY_DOUBLE})
NUMERIC_TYPES: frozenset[str] = INTEGER_TYPES | FLOAT_TYPES

# Pando type name -> Rust type, in catalog order
RUST_TYPES: dict[str, str] = {
    "int": "i32",
    "int8": "i8",
    "int16": "i16",
    "int32": "i32",
    "int64": "i64",
    "int128": "i128",
    "int_size": "isize",
    "uint8": "u8",
    "uint16": "u16",
    "uint32": "u32",
    "uint64": "u64",
    "uint128": "u128",
    "uint_size": "usize",
    "float": "f32",
    "double": "f64",
    "bool": "bool",
    "char": "char",
    "str": "&str",
    "None": "()",
    "bytes": "&[u8]",
    "bytearray": "Vec<u8>",
    "string": "String",
}

_DEFAULTS: dict[str, str] = {
    "float": "0.0f32",
    "double": "0.0f64",
    "bool": "false",
    "char": "'\\0'",
    "str": '""',
    "None": "()",
    "bytes": 'b""',
    "bytearray": "Vec::new()",
    "string": "String::new()",
}

TYPE_NAMES: tuple[str, ...] = tuple(RUST_TYPES.keys())


def is_known_type(name: str) -> bool:
    return name in RUST_TYPES


def rust_type(name: str) -> str:
    """Rust spelling of a catalog type. Raises KeyError for unknown names."""
    return RUST_TYPES[name]


def default_value(name: str) -> str:
    """Rust initializer used when a declaration has no value."""
    if name in INTEGER_TYPES:
        return "0"
    return _DEFAULTS[name]


def is_numeric(name: str) -> bool:
    return name in NUMERIC_TYPES


def is_integer(name: str) -> bool:
    return name in INTEGER_TYPES


def escape_string(value: str) -> str:
    """Escape text for use inside a Rust string literal (without quotes)."""
    return (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )


def escape_char(value: str) -> str:
    """Escape text for use inside a Rust char literal (without quotes)."""
    return (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\t", "\\t")
        .replace("\r", "\\r")
    )
