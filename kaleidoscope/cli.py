"""
Command line entry point for the Kaleidoscope front end.

Runs the read-parse-dispatch loop over each file given on the command line,
or interactively over stdin, reporting every construct that parses.

Usage:
    kaleidoscope                   # interactive, "ready> " prompt
    kaleidoscope prog.kal          # parse a file
    kaleidoscope --dump-ast --binop '/=40' prog.kal
"""

import argparse
import sys
from typing import List, Optional, Tuple

from . import __version__
from .lexer import Lexer, StreamSource
from .diagnostics import StreamDiagnosticSink
from .parser import Parser, PrecedenceTable
from .driver import TopLevelDriver, ReportingHandler

PROMPT = "ready> "


def binop_spec(text: str) -> Tuple[str, int]:
    """argparse type for ``OP=PRECEDENCE``."""
    op, sep, precedence = text.rpartition("=")
    if not sep or len(op) != 1:
        raise argparse.ArgumentTypeError(
            f"expected OP=PRECEDENCE with a single character operator, got {text!r}")
    try:
        return op, int(precedence)
    except ValueError:
        raise argparse.ArgumentTypeError(f"precedence must be an integer, got {precedence!r}")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kaleidoscope",
        description="Parse Kaleidoscope source and report each top-level construct.",
    )
    parser.add_argument("files", nargs="*", metavar="FILE",
                        help="source files to parse ('-' or nothing reads stdin)")
    parser.add_argument("--dump-ast", action="store_true",
                        help="print each parsed construct as an s-expression")
    parser.add_argument("--binop", action="append", type=binop_spec, default=[],
                        metavar="OP=PREC",
                        help="install an extra binary operator (repeatable)")
    parser.add_argument("--no-prompt", action="store_true",
                        help="don't print the 'ready> ' prompt when reading stdin")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_stream(stream, name: str, precedence: PrecedenceTable, dump_ast: bool = False,
               prompt: Optional[str] = None) -> int:
    """Parse one stream to the end. Returns the number of syntax errors."""
    parser = Parser(
        Lexer(StreamSource(stream, name)),
        precedence=precedence.copy(),
        diagnostics=StreamDiagnosticSink(),
    )
    driver = TopLevelDriver(parser, ReportingHandler(dump_ast=dump_ast), prompt=prompt)
    driver.run()
    return len(driver.errors)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    precedence = PrecedenceTable(dict(args.binop))
    files = args.files or ["-"]

    errors = 0
    for path in files:
        if path == "-":
            prompt = None if args.no_prompt else PROMPT
            errors += run_stream(sys.stdin, "<stdin>", precedence, args.dump_ast, prompt)
            continue
        try:
            with open(path, "r", encoding="utf-8") as f:
                errors += run_stream(f, path, precedence, args.dump_ast)
        except OSError as e:
            print(f"Error: cannot read {path}: {e.strerror or e}", file=sys.stderr)
            return 1

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
