"""Editor support — diagnostics and completions for Pando buffers.

`validate` never raises: it reports every unknown type name it can find, then
appends the first error from a full translation, the same error the CLI would
print.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import TranspileError
from .lines import scan_outside_quotes, split_line
from .literals import FALSE_SPELLING, TRUE_SPELLING
from .parse import PRINT_KEYWORD, parse_program, source_lines
from .types import RUST_TYPES, TYPE_NAMES

SEVERITY_ERROR: str = "error"
CODE_UNDEFINED_TYPE: str = "undefined-type"

_DECL_RE = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*:\s*([A-Za-z_][A-Za-z0-9_]*)")

COMPLETION_KEYWORD: str = "keyword"
COMPLETION_TYPE: str = "type"
COMPLETION_VALUE: str = "value"


@dataclass
class Diagnostic:
    """Problem in a buffer. Columns are 1-based; end_col is exclusive."""

    line: int
    col: int
    end_col: int
    message: str
    severity: str = SEVERITY_ERROR
    code: str = ""

    def to_dict(self) -> dict[str, object]:
        return {
            "line": self.line,
            "col": self.col,
            "end_col": self.end_col,
            "message": self.message,
            "severity": self.severity,
            "code": self.code,
        }


@dataclass
class Completion:
    label: str
    kind: str
    detail: str


def _unknown_types(line: str, line_num: int) -> list[Diagnostic]:
    raw = split_line(line).code
    outside = scan_outside_quotes(raw)
    # Quoted text is blanked out; columns stay aligned.
    code = "".join(c if outside[i] else " " for i, c in enumerate(raw))
    found: list[Diagnostic] = []
    for m in _DECL_RE.finditer(code):
        type_name = m.group(2)
        if type_name in RUST_TYPES:
            continue
        start = m.start(2)
        found.append(
            Diagnostic(
                line_num,
                start + 1,
                start + 1 + len(type_name),
                "unknown type '" + type_name + "'",
                SEVERITY_ERROR,
                CODE_UNDEFINED_TYPE,
            )
        )
    return found


def validate(source: str) -> list[Diagnostic]:
    """Collect diagnostics for a whole buffer."""
    diagnostics: list[Diagnostic] = []
    lines = source_lines(source)
    i = 0
    while i < len(lines):
        diagnostics.extend(_unknown_types(lines[i], i + 1))
        i += 1
    try:
        parse_program(source)
    except TranspileError as e:
        for d in diagnostics:
            if d.line == e.line and d.col == e.col:
                return diagnostics
        diagnostics.append(
            Diagnostic(e.line, e.col, e.col + 1, e.msg, SEVERITY_ERROR, e.kind)
        )
    return diagnostics


def complete(prefix: str) -> list[Completion]:
    """Suggestions for the text between line start and the cursor."""
    code = prefix.strip()
    if split_line(prefix).comment is not None:
        return []
    items: list[Completion] = []
    if PRINT_KEYWORD.startswith(code) and code != PRINT_KEYWORD:
        items.append(Completion(PRINT_KEYWORD, COMPLETION_KEYWORD, 'print("text")'))
    if ":" in code and "=" not in code:
        partial = code.rsplit(":", 1)[1].strip()
        for name in TYPE_NAMES:
            if name.startswith(partial):
                items.append(Completion(name, COMPLETION_TYPE, "Rust " + RUST_TYPES[name]))
    if code.endswith("="):
        items.append(Completion(TRUE_SPELLING, COMPLETION_VALUE, "Rust true"))
        items.append(Completion(FALSE_SPELLING, COMPLETION_VALUE, "Rust false"))
    return items
