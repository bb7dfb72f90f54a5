"""
AttoLisp command line: run script files, then optionally an interactive REPL.

    attolisp                      # REPL
    attolisp script.al            # run a script and exit
    attolisp -r script.al         # run a script, then enter the REPL
    attolisp -t -tp script.al     # trace evaluation and parsed forms
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, TextIO

# Readline support for line editing and history
try:
    import readline  # noqa: F401
    READLINE_AVAILABLE = True
except ImportError:
    READLINE_AVAILABLE = False

from attolisp import SExpression, __version__
from attolisp.config import get_recursion_limit
from attolisp.debug_utils.pprint import pformat_form
from attolisp.errors import AttoError, AttoSyntaxError
from attolisp.interpreter import Interpreter
from attolisp.reader.parser import parse_one
from attolisp.reader.tokenizer import tokenize
from attolisp.types.value import to_lisp_string

logger = logging.getLogger(__name__)

PROMPT = "lisp> "
EXIT_COMMANDS = {"exit", "quit"}
UNCLOSED_LIST_HINT = (
    "Hint: The list that ends here most likely started earlier in the file; "
    "check for a missing ')' before this position."
)


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="attolisp",
        description="AttoLisp interpreter",
    )
    parser.add_argument("scripts", nargs="*", help="script files to run in order")
    parser.add_argument(
        "-r", "--repl",
        action="store_true",
        help="enter the REPL after running scripts (default when no scripts are given)",
    )
    parser.add_argument("-t", "--trace", action="store_true", help="trace every evaluation step")
    parser.add_argument(
        "-tp", "--trace-parse",
        dest="trace_parse",
        action="store_true",
        help="pretty-print each parsed form before it is evaluated",
    )
    parser.add_argument("--no-prelude", action="store_true", help="do not load the standard library")
    parser.add_argument("--version", action="version", version=f"AttoLisp v{__version__}")
    return parser


def report_error(label: str, ex: BaseException, out: TextIO) -> None:
    """Friendly report for a failed script; syntax errors get their location and a hint."""
    if isinstance(ex, AttoSyntaxError):
        out.write(f"Syntax error while reading {label}: {ex.reason}.\n")
        if ex.line is not None:
            out.write(f"Location: line {ex.line}, column {ex.column}.\n")
            out.write(UNCLOSED_LIST_HINT + "\n")
    else:
        out.write(f"Error while running {label}: {ex}\n")


def _form_echo(label: str, out: TextIO) -> Callable[[SExpression], None]:
    def echo(expr: SExpression) -> None:
        out.write(f"[parse {label}]\n")
        out.write(pformat_form(expr) + "\n")

    return echo


def run_script(interp: Interpreter, path: str, *, trace_parse: bool = False, out: TextIO | None = None) -> bool:
    """Run one script; returns False if it was missing or failed."""
    out = out or sys.stdout
    p = Path(path)
    if not p.is_file():
        logger.warning("Warning: File not found: %s", path)
        return False
    on_form = _form_echo(p.name, out) if trace_parse else None
    try:
        interp.load_file(p, on_form)
    except (AttoError, RecursionError, OSError, UnicodeDecodeError) as ex:
        report_error(p.name, ex, out)
        return False
    return True


def eval_line(interp: Interpreter, line: str, *, trace_parse: bool = False, out: TextIO | None = None) -> str:
    """Evaluate one REPL line as a single form and return its printed result."""
    out = out or sys.stdout
    expr = parse_one(tokenize(line))
    if trace_parse and isinstance(expr, list):
        out.write("[parse repl]\n")
        out.write(pformat_form(expr) + "\n")
    return to_lisp_string(interp.evaluator.eval(expr))


def repl(
    interp: Interpreter,
    *,
    trace_parse: bool = False,
    read_line: Callable[[str], str] = input,
    out: TextIO | None = None,
) -> None:
    out = out or sys.stdout
    out.write("Type 'exit' or 'quit' to exit\n\n")
    while True:
        try:
            line = read_line(PROMPT)
        except (EOFError, KeyboardInterrupt):
            out.write("\n")
            break

        line = line.strip()
        if not line:
            continue
        if line.lower() in EXIT_COMMANDS:
            out.write("Goodbye!\n")
            break

        try:
            out.write(f"=> {eval_line(interp, line, trace_parse=trace_parse, out=out)}\n")
        except (AttoError, RecursionError) as ex:
            out.write(f"Error: {ex}\n")
        out.write("\n")


def main(argv: list[str] | None = None) -> int:
    args = create_arg_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.trace else logging.WARNING,
        format="%(message)s",
        stream=sys.stderr,
    )
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    print(f"AttoLisp Interpreter v{__version__}")
    if args.trace:
        print("[trace] Evaluation tracing enabled")
    if args.trace_parse:
        print("[trace] Parse tracing enabled")

    try:
        interp = Interpreter(prelude=None if args.no_prelude else 'auto', trace=args.trace)
    except AttoError as ex:
        report_error("standard library", ex, sys.stdout)
        interp = Interpreter(prelude=None, trace=args.trace)

    ok = True
    for path in args.scripts:
        ok = run_script(interp, path, trace_parse=args.trace_parse) and ok

    if args.scripts and not args.repl:
        return 0 if ok else 1
    if args.scripts:
        print("\nEntering REPL...")

    repl(interp, trace_parse=args.trace_parse)
    return 0
