"""
Kaleidoscope Front End Package

Lexer and parser for the Kaleidoscope toy language: a stream of characters
becomes tokens, tokens become an AST of numbers, variables, binary
expressions, calls, prototypes and function definitions. Code generation is
left to whoever consumes the AST.

Architecture:
    kaleidoscope/
    ├── lexer/           # Character sources and tokenization
    ├── parser/          # AST, precedence table, recursive descent parser
    ├── driver/          # Top-level read-parse-dispatch loop
    ├── diagnostics.py   # Error reporting
    └── cli.py           # Command line entry point

Author: xwest
License: MIT
"""

from ._version import __version__

__author__ = "xwest"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType
from .parser import Parser, PrecedenceTable, ParseError, ParseResult
from .driver import TopLevelDriver, parse_string, parse_file

__all__ = [
    # Core classes
    "Lexer",
    "Token",
    "TokenType",
    "Parser",
    "PrecedenceTable",
    "ParseError",
    "ParseResult",
    "TopLevelDriver",
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
