"""
Kaleidoscope Parser Implementation

Recursive descent for primaries, prototypes and definitions, operator
precedence climbing for binary expressions. Operator priorities are not
hard-coded in the grammar: they come from the parser's PrecedenceTable, so
installing a new operator there is enough to make it parse.

Grammar:
    expression  ::= primary binoprhs
    binoprhs    ::= (binop primary)*
    primary     ::= numberexpr | identifierexpr | parenexpr
    identifierexpr
                ::= identifier
                ::= identifier '(' (expression (',' expression)*)? ')'
    prototype   ::= identifier '(' identifier* ')'
    definition  ::= 'def' prototype expression
    external    ::= 'extern' prototype
    toplevelexpr ::= expression

Author: xwest
"""

from typing import Callable, Dict, List, Optional, Union

from ..lexer.tokens import Token, TokenType
from ..lexer.lexer import Lexer
from ..diagnostics import DiagnosticSink, StreamDiagnosticSink
from .ast_nodes import (
    SourceSpan, Expression, Number, Variable, Binary, Call, Prototype, Function
)
from .errors import (
    ParseError, ParseResult, create_unknown_token_error, create_unclosed_paren_error,
    create_argument_list_error, create_missing_function_name_error,
    create_missing_prototype_open_error, create_missing_prototype_close_error,
    create_nesting_too_deep_error
)
from .precedence import PrecedenceTable


# Name of the prototype synthesized for top-level expressions
ANONYMOUS_FUNCTION_NAME = "__anon_expr"

# Parentheses and call argument lists deeper than this are rejected (P007)
MAX_NESTING_DEPTH = 100


class Parser:
    """
    Kaleidoscope parser.

    A parser is one parsing session: it owns the lexer, the current lookahead
    token and the operator precedence table. Every public ``parse_*`` method
    returns a ParseResult. On failure exactly one diagnostic has been sent to
    the diagnostic sink and the token position is unspecified; recovering is
    up to the caller (see TopLevelDriver).
    """

    def __init__(
        self,
        lexer: Union[Lexer, str],
        precedence: Union[PrecedenceTable, Dict[str, int], None] = None,
        diagnostics: Optional[DiagnosticSink] = None,
    ):
        """
        Initialize the parser.

        Args:
            lexer: Token source, or a string to lex from memory
            precedence: Operator table (defaults to the builtin operators)
            diagnostics: Where syntax errors are reported (stderr by default)
        """
        if isinstance(lexer, str):
            lexer = Lexer(lexer)
        self.lexer = lexer

        if precedence is None:
            precedence = PrecedenceTable()
        elif not isinstance(precedence, PrecedenceTable):
            precedence = PrecedenceTable(precedence)
        self.precedence = precedence

        self.diagnostics = diagnostics if diagnostics is not None else StreamDiagnosticSink()

        self._current: Optional[Token] = None
        self._previous: Optional[Token] = None
        self._depth = 0

    # ------------------------------------------------------------------
    # Token handling
    # ------------------------------------------------------------------

    @property
    def current(self) -> Token:
        """The lookahead token. The first token is read on first access."""
        if self._current is None:
            self._current = self.lexer.next_token()
        return self._current

    def next_token(self) -> Token:
        """Consume the lookahead token and return the new one."""
        self._previous = self.current
        self._current = self.lexer.next_token()
        return self._current

    def _current_precedence(self) -> int:
        return self.precedence.precedence_of(self.current.char)

    def _span_from(self, start: Token) -> SourceSpan:
        end = self._previous if self._previous is not None else start
        return SourceSpan(start.location, end.location)

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def parse_expression(self) -> ParseResult[Expression]:
        """expression ::= primary binoprhs"""
        return self._attempt(self._parse_expression)

    def parse_primary(self) -> ParseResult[Expression]:
        return self._attempt(self._parse_primary)

    def parse_prototype(self) -> ParseResult[Prototype]:
        return self._attempt(self._parse_prototype)

    def parse_definition(self) -> ParseResult[Function]:
        """definition ::= 'def' prototype expression"""
        return self._attempt(self._parse_definition)

    def parse_extern(self) -> ParseResult[Prototype]:
        """external ::= 'extern' prototype"""
        return self._attempt(self._parse_extern)

    def parse_top_level_expr(self) -> ParseResult[Function]:
        """Parse an expression and wrap it in an anonymous nullary function."""
        return self._attempt(self._parse_top_level_expr)

    def _attempt(self, parse_fn: Callable[[], object]) -> ParseResult:
        try:
            try:
                node = parse_fn()
            except RecursionError:
                # Long chains of ever tighter binding operators recurse too
                raise create_nesting_too_deep_error(self.current) from None
        except ParseError as e:
            self.diagnostics.emit(e.diagnostic)
            return ParseResult.failure(e)
        return ParseResult.success(node)

    def _enter_nesting(self) -> None:
        if self._depth >= MAX_NESTING_DEPTH:
            raise create_nesting_too_deep_error(self.current)
        self._depth += 1

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def _parse_expression(self) -> Expression:
        lhs = self._parse_primary()
        return self._parse_binop_rhs(0, lhs)

    def _parse_primary(self) -> Expression:
        token = self.current
        if token.type == TokenType.IDENTIFIER:
            return self._parse_identifier_expr()
        if token.type == TokenType.NUMBER:
            return self._parse_number_expr()
        if token.is_char("("):
            return self._parse_paren_expr()
        raise create_unknown_token_error(token)

    def _parse_number_expr(self) -> Number:
        token = self.current
        self.next_token()
        return Number(token.value, SourceSpan(token.location, token.location))

    def _parse_paren_expr(self) -> Expression:
        """parenexpr ::= '(' expression ')'"""
        self._enter_nesting()
        self.next_token()  # eat (
        try:
            expr = self._parse_expression()
        finally:
            self._depth -= 1
        if not self.current.is_char(")"):
            raise create_unclosed_paren_error(self.current)
        self.next_token()  # eat )
        return expr

    def _parse_identifier_expr(self) -> Expression:
        start = self.current
        name = start.value
        self.next_token()  # eat identifier

        if not self.current.is_char("("):
            return Variable(name, SourceSpan(start.location, start.location))

        self._enter_nesting()
        self.next_token()  # eat (
        args: List[Expression] = []
        try:
            if not self.current.is_char(")"):
                while True:
                    args.append(self._parse_expression())
                    if self.current.is_char(")"):
                        break
                    if not self.current.is_char(","):
                        raise create_argument_list_error(self.current)
                    self.next_token()  # eat ,
        finally:
            self._depth -= 1

        self.next_token()  # eat )
        return Call(name, args, self._span_from(start))

    def _parse_binop_rhs(self, min_precedence: int, lhs: Expression) -> Expression:
        """
        Fold binary operators into ``lhs`` as long as they bind at least as
        tightly as ``min_precedence``.
        """
        while True:
            precedence = self._current_precedence()
            if precedence < min_precedence:
                return lhs

            op = self.current.char
            self.next_token()  # eat binop

            rhs = self._parse_primary()

            # If the next operator binds tighter, it takes rhs as its lhs first
            if precedence < self._current_precedence():
                rhs = self._parse_binop_rhs(precedence + 1, rhs)

            span = None
            if lhs.span is not None and rhs.span is not None:
                span = SourceSpan(lhs.span.start, rhs.span.end)
            lhs = Binary(op, lhs, rhs, span)

    # ------------------------------------------------------------------
    # Declarations
    # ------------------------------------------------------------------

    def _parse_prototype(self) -> Prototype:
        start = self.current
        if start.type != TokenType.IDENTIFIER:
            raise create_missing_function_name_error(start)
        name = start.value
        self.next_token()

        if not self.current.is_char("("):
            raise create_missing_prototype_open_error(self.current)

        params: List[str] = []
        while self.next_token().type == TokenType.IDENTIFIER:
            params.append(self.current.value)
        if not self.current.is_char(")"):
            raise create_missing_prototype_close_error(self.current)

        self.next_token()  # eat )
        return Prototype(name, params, self._span_from(start))

    def _parse_definition(self) -> Function:
        start = self.current
        self.next_token()  # eat def
        proto = self._parse_prototype()
        body = self._parse_expression()
        return Function(proto, body, self._span_from(start))

    def _parse_extern(self) -> Prototype:
        self.next_token()  # eat extern
        return self._parse_prototype()

    def _parse_top_level_expr(self) -> Function:
        start = self.current
        body = self._parse_expression()
        span = self._span_from(start)
        proto = Prototype(ANONYMOUS_FUNCTION_NAME, [], span)
        return Function(proto, body, span)
