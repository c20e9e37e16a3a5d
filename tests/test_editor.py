"""Tests for editor diagnostics and completions."""

from pando.editor import (
    CODE_UNDEFINED_TYPE,
    Diagnostic,
    complete,
    validate,
)


def _labels(items) -> list[str]:
    return [c.label for c in items]


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------


def test_valid_program_has_no_diagnostics() -> None:
    assert validate('x: int = 1\nprint("ok")\n') == []


def test_unknown_type_is_reported_once() -> None:
    diags = validate("x: integer = 1\n")
    assert len(diags) == 1
    d = diags[0]
    assert d.line == 1
    assert d.col == 4
    assert d.end_col == 11
    assert d.code == CODE_UNDEFINED_TYPE
    assert d.message == "unknown type 'integer'"


def test_every_unknown_type_is_reported() -> None:
    diags = validate("a: foo = 1\nb: bar\n")
    assert [(d.line, d.message) for d in diags] == [
        (1, "unknown type 'foo'"),
        (2, "unknown type 'bar'"),
    ]


def test_colon_inside_string_is_not_a_declaration() -> None:
    assert validate('print("note: hello")\n') == []


def test_colon_inside_comment_is_ignored() -> None:
    assert validate("x: int = 1 # ratio: unknown\n") == []


def test_translation_error_is_appended() -> None:
    diags = validate("x: int = 1\ny = 2\n")
    assert len(diags) == 1
    d = diags[0]
    assert (d.line, d.col) == (2, 1)
    assert d.code == "undeclared-variable"
    assert d.message == "variable 'y' is not declared"


def test_scan_and_translation_errors_combine() -> None:
    diags = validate("x: int = 1.5\ny: weird\n")
    assert [d.code for d in diags] == [CODE_UNDEFINED_TYPE, "type-mismatch"]


def test_empty_buffer_reports_no_code() -> None:
    diags = validate("")
    assert len(diags) == 1
    assert diags[0].code == "no-code"


def test_diagnostic_to_dict() -> None:
    d = Diagnostic(3, 5, 6, "boom", code="syntax")
    assert d.to_dict() == {
        "line": 3,
        "col": 5,
        "end_col": 6,
        "message": "boom",
        "severity": "error",
        "code": "syntax",
    }


# ---------------------------------------------------------------------------
# complete
# ---------------------------------------------------------------------------


def test_empty_line_offers_print() -> None:
    assert _labels(complete("")) == ["print"]


def test_partial_keyword_offers_print() -> None:
    items = complete("  pri")
    assert _labels(items) == ["print"]
    assert items[0].kind == "keyword"


def test_after_colon_offers_every_type() -> None:
    items = complete("x: ")
    assert len(items) == 22
    assert items[0].label == "int"
    assert items[0].detail == "Rust i32"


def test_partial_type_is_filtered() -> None:
    assert _labels(complete("x: uint1")) == ["uint16", "uint128"]


def test_after_equals_offers_booleans() -> None:
    assert _labels(complete("flag: bool =")) == ["True", "False"]


def test_no_types_once_value_started() -> None:
    assert complete("x: int = 4") == []


def test_nothing_inside_comment() -> None:
    assert complete("# x: ") == []
