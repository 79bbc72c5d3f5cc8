"""
Error handling for the Kaleidoscope parser.

Syntax errors are not fatal. A ParseError describes what was expected and
where, and is returned to the caller inside a ParseResult instead of
escaping as an exception. Callers that would rather have an exception can
call ``ParseResult.unwrap()``.

Author: xwest
"""

from typing import Generic, Optional, TypeVar

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..diagnostics import Diagnostic


class ParseError(Exception):
    """
    A syntax error.

    Contains the diagnostic to report and the token the parser was looking at.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation],
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
        )
        self.token = token

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


T = TypeVar("T")


class ParseResult(Generic[T]):
    """
    Outcome of a parse operation: either a node or a ParseError, never both.

    A failed result is falsy, so ``if result:`` reads naturally.
    """

    __slots__ = ("node", "error")

    def __init__(self, node: Optional[T] = None, error: Optional[ParseError] = None):
        if (node is None) == (error is None):
            raise ValueError("ParseResult needs exactly one of node or error")
        self.node = node
        self.error = error

    @classmethod
    def success(cls, node: T) -> "ParseResult[T]":
        return cls(node=node)

    @classmethod
    def failure(cls, error: ParseError) -> "ParseResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the node, or raise the stored ParseError."""
        if self.error is not None:
            raise self.error
        return self.node

    def __bool__(self) -> bool:
        return self.ok

    def __repr__(self) -> str:
        if self.ok:
            return f"ParseResult.success({self.node!r})"
        return f"ParseResult.failure({self.error.message!r})"


# Parser error codes
PARSER_ERROR_CODES = {
    "P001": "Unknown token when expecting an expression",
    "P002": "Expected ')'",
    "P003": "Expected ')' or ',' in argument list",
    "P004": "Expected function name in prototype",
    "P005": "Expected '(' in prototype",
    "P006": "Expected ')' in prototype",
    "P007": "Expression nested too deeply",
}


def describe_token(token: Token) -> str:
    """Short human readable name of a token for help texts."""
    if token.type == TokenType.EOF:
        return "end of input"
    if token.type == TokenType.CHAR:
        return f"'{token.lexeme}'"
    if token.is_keyword:
        return f"keyword '{token.lexeme}'"
    return f"{token.type.name.lower()} '{token.lexeme}'"


def _error(code: str, found: Token, help_text: str) -> ParseError:
    return ParseError(
        message=PARSER_ERROR_CODES[code],
        location=found.location,
        token=found,
        code=code,
        help_text=help_text,
    )


def create_unknown_token_error(found: Token) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    return _error(
        "P001", found,
        f"Found {describe_token(found)}; an expression starts with a number, "
        f"an identifier or '('.",
    )


def create_unclosed_paren_error(found: Token) -> ParseError:
    """Create an error for a parenthesised expression missing its ')'."""
    return _error("P002", found, f"Found {describe_token(found)} instead of ')'.")


def create_argument_list_error(found: Token) -> ParseError:
    """Create an error for a malformed call argument list."""
    return _error(
        "P003", found,
        f"Found {describe_token(found)}; call arguments are separated by ',' "
        f"and closed with ')'.",
    )


def create_missing_function_name_error(found: Token) -> ParseError:
    return _error("P004", found, f"Found {describe_token(found)} where the function name belongs.")


def create_missing_prototype_open_error(found: Token) -> ParseError:
    return _error("P005", found, f"Found {describe_token(found)} after the function name.")


def create_missing_prototype_close_error(found: Token) -> ParseError:
    return _error(
        "P006", found,
        f"Found {describe_token(found)}; parameter names are identifiers "
        f"separated by whitespace.",
    )


def create_nesting_too_deep_error(found: Token) -> ParseError:
    """Create an error for parentheses or calls nested past the parser's limit."""
    return _error(
        "P007", found,
        f"Found {describe_token(found)} past the nesting limit; split the "
        f"expression into smaller functions.",
    )
