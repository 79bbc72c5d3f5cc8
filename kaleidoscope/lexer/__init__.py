"""
Kaleidoscope Lexer Package

Implements the tokenizer for the Kaleidoscope language. Characters are pulled
lazily from a character source (string, file or terminal) and turned into
tokens one at a time.

Key Features:
- Pull-based, single pass tokenization
- ``def`` / ``extern`` keywords, identifiers, lenient number literals
- ``#`` line comments, fully transparent to the token stream
- Source location tracking for diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .source import CharacterSource, StringSource, StreamSource
from .lexer import Lexer, tokenize_string, tokenize_file, parse_number_prefix

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "CharacterSource",
    "StringSource",
    "StreamSource",
    "tokenize_string",
    "tokenize_file",
    "parse_number_prefix",
]
