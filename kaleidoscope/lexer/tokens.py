"""
Token definitions for the Kaleidoscope lexer.

The language only has a handful of token kinds:
- End of input
- The two keywords ``def`` and ``extern``
- Identifiers and numbers
- Single punctuation/unknown characters (operators, parentheses, commas, ...)

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


class TokenType(Enum):
    """Enumeration of all token types in Kaleidoscope."""

    EOF = auto()                    # End of input

    # Keywords
    DEF = auto()                    # def
    EXTERN = auto()                 # extern

    # Primary
    IDENTIFIER = auto()             # foo, x1
    NUMBER = auto()                 # 1.0, 42, .5

    # Anything else is returned as the character itself
    CHAR = auto()                   # + - * < ( ) , ; ...


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting and for the spans attached to AST nodes.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the Kaleidoscope language.

    Contains the token type, lexeme (raw text), semantic value
    and source location.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # float for NUMBER, str for IDENTIFIER
    location: SourceLocation

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def char(self) -> Optional[str]:
        """The character of a CHAR token, None for every other kind."""
        if self.type == TokenType.CHAR:
            return self.lexeme
        return None

    def is_char(self, char: str) -> bool:
        """Check if this is the punctuation token for ``char``."""
        return self.type == TokenType.CHAR and self.lexeme == char

    @property
    def is_keyword(self) -> bool:
        return self.type in (TokenType.DEF, TokenType.EXTERN)


KEYWORDS = {
    "def": TokenType.DEF,
    "extern": TokenType.EXTERN,
}
