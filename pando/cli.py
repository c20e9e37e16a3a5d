"""Pando CLI — translate .pd files to Rust."""

from __future__ import annotations

import sys

from .ast import to_dict
from .editor import validate
from .emit import emit_rust
from .errors import TranspileError, TranspileIOError
from .parse import parse_program

PHASES: list[str] = ["parse", "emit"]

USAGE: str = """\
pando [OPTIONS] [INPUT] [-o OUTPUT]

Translate a Pando (.pd) program to Rust.

Options:
  --stop-at PHASE     Stop after phase: parse (prints the tree as JSON), emit
  --check             Report diagnostics only, write no output
  -o, --output FILE   Write output to FILE instead of stdout
  -q, --quiet         Do not print status messages
  --help              Show this help message
"""


class Options:
    """Parsed command-line options."""

    def __init__(self) -> None:
        self.input_file: str | None = None
        self.output_file: str | None = None
        self.stop_at: str = "emit"
        self.check: bool = False
        self.quiet: bool = False


def read_source(input_file: str | None) -> str:
    """Read source from file or stdin."""
    if input_file is not None:
        try:
            with open(input_file, "rb") as f:
                raw = f.read()
        except OSError as e:
            raise TranspileIOError("cannot open '" + input_file + "': " + str(e.strerror))
    else:
        raw = sys.stdin.buffer.read()
    try:
        return raw.decode("utf-8")
    except ValueError:
        raise TranspileIOError("invalid utf-8 in input")


def write_output(output: str, output_file: str | None) -> None:
    """Write output to file or stdout."""
    if output_file is None:
        sys.stdout.write(output)
        return
    try:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(output)
    except OSError as e:
        raise TranspileIOError("cannot write '" + output_file + "': " + str(e.strerror))


# --- JSON serialization ---

_JSON_ESCAPES: dict[int, str] = {c: "\\u%04x" % c for c in range(0x20)}
_JSON_ESCAPES.update(
    {
        ord("\\"): "\\\\",
        ord('"'): '\\"',
        ord("\n"): "\\n",
        ord("\r"): "\\r",
        ord("\t"): "\\t",
    }
)


def _json_string(s: str) -> str:
    return '"' + s.translate(_JSON_ESCAPES) + '"'


def to_json(value: object, depth: int = 0) -> str:
    """Pretty-print the output of `to_dict` as JSON, two spaces per level."""
    if isinstance(value, dict):
        items = [
            _json_string(str(k)) + ": " + to_json(v, depth + 1)
            for k, v in value.items()
        ]
        open_, close = "{", "}"
    elif isinstance(value, list):
        items = [to_json(v, depth + 1) for v in value]
        open_, close = "[", "]"
    elif value is None:
        return "null"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, int):
        return str(value)
    elif isinstance(value, str):
        return _json_string(value)
    else:
        raise TypeError("cannot write " + type(value).__name__ + " as JSON")
    if not items:
        return open_ + close
    pad = "  " * (depth + 1)
    body = ",\n".join(pad + item for item in items)
    return open_ + "\n" + body + "\n" + "  " * depth + close


# --- Pipeline ---


def run_pipeline(source: str, stop_at: str) -> str:
    """Parse and emit. Raises TranspileError on the first problem."""
    program = parse_program(source)
    if stop_at == "parse":
        return to_json(to_dict(program)) + "\n"
    return emit_rust(program)


def run_check(source: str) -> int:
    diagnostics = validate(source)
    for d in diagnostics:
        print(
            str(d.line) + ":" + str(d.col) + ": " + d.severity + ": " + d.message,
            file=sys.stderr,
        )
    if len(diagnostics) > 0:
        return 1
    return 0


def parse_args(args: list[str]) -> Options:
    """Parse command-line arguments. Exits with 0 on --help, 2 on misuse."""
    opts = Options()
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--help" or arg == "-h":
            print(USAGE, end="")
            sys.exit(0)
        elif arg == "--stop-at":
            if i + 1 >= len(args):
                print("error: --stop-at requires an argument", file=sys.stderr)
                sys.exit(2)
            opts.stop_at = args[i + 1]
            i += 2
        elif arg == "-o" or arg == "--output":
            if i + 1 >= len(args):
                print("error: " + arg + " requires an argument", file=sys.stderr)
                sys.exit(2)
            opts.output_file = args[i + 1]
            i += 2
        elif arg == "--check":
            opts.check = True
            i += 1
        elif arg == "-q" or arg == "--quiet":
            opts.quiet = True
            i += 1
        elif arg.startswith("-") and arg != "-":
            print("error: unknown flag '" + arg + "'", file=sys.stderr)
            sys.exit(2)
        else:
            if opts.input_file is not None:
                print("error: unexpected argument '" + arg + "'", file=sys.stderr)
                sys.exit(2)
            if arg != "-":
                opts.input_file = arg
            i += 1
    if opts.stop_at not in PHASES:
        print("error: unknown phase '" + opts.stop_at + "'", file=sys.stderr)
        sys.exit(2)
    return opts


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    opts = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        source = read_source(opts.input_file)
        if opts.check:
            return run_check(source)
        output = run_pipeline(source, opts.stop_at)
        write_output(output, opts.output_file)
    except TranspileError as e:
        print("error: " + str(e), file=sys.stderr)
        return 1
    if opts.output_file is not None and not opts.quiet:
        name = opts.input_file if opts.input_file is not None else "<stdin>"
        print("pando: " + name + " -> " + opts.output_file, file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
