"""
Kaleidoscope Lexer - turns a character stream into tokens

Tokens are produced on demand: the parser asks for one token at a time and the
lexer pulls exactly as many characters as it needs from its source. The only
state kept between calls is the pending (already read, not yet consumed)
character and the running source position.

Number literals are lexed leniently. Any run of digits and dots becomes a
NUMBER token and its value is the longest valid decimal prefix, the way C's
strtod would read it ("1.2.3" is 1.2).

xwest
"""

import re
from typing import Iterator, List, Optional, Union

from .tokens import Token, TokenType, SourceLocation, KEYWORDS
from .source import CharacterSource, StringSource, StreamSource


# Longest prefix of a digits-and-dots run that float() accepts
_NUMBER_PREFIX = re.compile(r'\d+\.?\d*|\.\d+')


def parse_number_prefix(text: str) -> float:
    """
    Best-effort conversion of a digits-and-dots run to a float.

    Trailing garbage is ignored, and text without any leading digits
    converts to 0.0.
    """
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(0))


def _is_digit(char: str) -> bool:
    return "0" <= char <= "9"


# Character classes are ASCII only; any other character is a CHAR token
def _is_letter(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z"


def _is_alnum(char: str) -> bool:
    return _is_letter(char) or _is_digit(char)


def _is_space(char: str) -> bool:
    return char in " \t\n\r\v\f"


class Lexer:
    """
    Kaleidoscope lexical analyzer.

    Converts characters pulled from a CharacterSource into tokens, one
    ``next_token()`` call at a time. Single pass, no rewind.
    """

    def __init__(self, source: Union[CharacterSource, str], filename: Optional[str] = None):
        """
        Initialize the lexer.

        Args:
            source: Character source, or a plain string to lex from memory
            filename: Name used in source locations (defaults to the source's name)
        """
        if isinstance(source, str):
            source = StringSource(source)
        self.source = source
        self.filename = filename or source.name

        # Position of the next character to be read from the source
        self.line = 1
        self.column = 1
        self.offset = 0

        # Pending character; starts out as whitespace so the first call reads
        self._char = " "
        self._char_location = SourceLocation(self.filename, 1, 1, 0)

    def next_token(self) -> Token:
        """Return the next token from the source."""
        while True:
            # Skip any whitespace
            while self._char and _is_space(self._char):
                self._advance()

            if self._char == "#":
                # Comment until end of line, then keep scanning
                while self._char and self._char not in "\n\r":
                    self._advance()
                continue

            break

        start = self._char_location

        if not self._char:
            # Stays here: every later call ends up in this branch again
            return Token(TokenType.EOF, "", None, start)

        if _is_letter(self._char):
            return self._lex_identifier(start)

        if _is_digit(self._char) or self._char == ".":
            return self._lex_number(start)

        char = self._char
        self._advance()
        return Token(TokenType.CHAR, char, None, start)

    def tokens(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return

    def _lex_identifier(self, start: SourceLocation) -> Token:
        chars = [self._char]
        self._advance()
        while self._char and _is_alnum(self._char):
            chars.append(self._char)
            self._advance()

        lexeme = "".join(chars)
        token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
        value = lexeme if token_type == TokenType.IDENTIFIER else None
        return Token(token_type, lexeme, value, start)

    def _lex_number(self, start: SourceLocation) -> Token:
        chars = []
        while self._char and (_is_digit(self._char) or self._char == "."):
            chars.append(self._char)
            self._advance()

        lexeme = "".join(chars)
        return Token(TokenType.NUMBER, lexeme, parse_number_prefix(lexeme), start)

    def _advance(self):
        """Read the next pending character, updating line/column."""
        self._char_location = SourceLocation(self.filename, self.line, self.column, self.offset)
        self._char = self.source.read()
        if not self._char:
            return
        if self._char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.offset += 1


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for source locations

    Returns:
        List of tokens ending with the EOF token
    """
    lexer = Lexer(StringSource(source, filename))
    return list(lexer.tokens())


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        lexer = Lexer(StreamSource(f, filepath))
        return list(lexer.tokens())
