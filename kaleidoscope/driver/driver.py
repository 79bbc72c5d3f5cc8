"""
Top-level driver for the Kaleidoscope front end.

The driver is the read-parse-dispatch loop. It looks at the lookahead token,
parses one top-level construct (definition, extern or bare expression) and
hands it to a TopLevelHandler. A construct that fails to parse is dropped
after skipping exactly one token, so the loop always makes progress and
finishes once the input is exhausted.

Author: xwest
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TextIO, Union, Dict

from ..lexer.tokens import TokenType
from ..lexer.lexer import Lexer
from ..lexer.source import StringSource, StreamSource
from ..diagnostics import Diagnostic, ListDiagnosticSink
from ..parser.parser import Parser
from ..parser.precedence import PrecedenceTable
from ..parser.errors import ParseError, ParseResult
from ..parser.ast_nodes import Function, Prototype
from .handlers import TopLevelHandler, CollectingHandler


class DriverState(Enum):
    """READY until end of input has been reached, then DONE for good."""
    READY = "ready"
    DONE = "done"


class TopLevelDriver:
    """
    Drives a Parser over its whole input.

    Successfully parsed constructs go to the handler one at a time, in source
    order; the driver itself keeps none of them. Failed parses are recorded
    in ``errors``.
    """

    def __init__(
        self,
        parser: Parser,
        handler: TopLevelHandler,
        prompt: Optional[str] = None,
        prompt_stream: Optional[TextIO] = None,
    ):
        """
        Args:
            parser: Parsing session to drive
            handler: Consumer for parsed constructs
            prompt: Written before each iteration (interactive mode), e.g. "ready> "
            prompt_stream: Where the prompt goes (stderr by default)
        """
        self.parser = parser
        self.handler = handler
        self.prompt = prompt
        self.prompt_stream = prompt_stream
        self.state = DriverState.READY
        self.errors: List[ParseError] = []
        self.handled = 0

    def run(self) -> DriverState:
        """Loop until end of input."""
        while self.state is DriverState.READY:
            self.step()
        return self.state

    def step(self) -> DriverState:
        """Run a single iteration of the loop."""
        if self.state is DriverState.DONE:
            return self.state

        self._write_prompt()

        token = self.parser.current
        if token.type == TokenType.EOF:
            self.state = DriverState.DONE
        elif token.is_char(";"):
            # Top-level semicolons are ignored
            self.parser.next_token()
        elif token.type == TokenType.DEF:
            self._dispatch(self.parser.parse_definition(), self.handler.handle_definition)
        elif token.type == TokenType.EXTERN:
            self._dispatch(self.parser.parse_extern(), self.handler.handle_extern)
        else:
            self._dispatch(self.parser.parse_top_level_expr(),
                           self.handler.handle_top_level_expression)
        return self.state

    def _dispatch(self, result: ParseResult, handle):
        if result:
            self.handled += 1
            handle(result.node)
        else:
            self.errors.append(result.error)
            # Skip token for error recovery
            self.parser.next_token()

    def _write_prompt(self):
        if self.prompt is None:
            return
        stream = self.prompt_stream if self.prompt_stream is not None else sys.stderr
        stream.write(self.prompt)
        stream.flush()


@dataclass
class ParseSession:
    """Everything a full parse of one input produced."""
    items: List[Union[Function, Prototype]] = field(default_factory=list)
    errors: List[ParseError] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def has_errors(self) -> bool:
        return len(self.errors) > 0


def _run_session(lexer: Lexer,
                 precedence: Union[PrecedenceTable, Dict[str, int], None]) -> ParseSession:
    sink = ListDiagnosticSink()
    handler = CollectingHandler()
    parser = Parser(lexer, precedence=precedence, diagnostics=sink)
    driver = TopLevelDriver(parser, handler)
    driver.run()
    return ParseSession(handler.items, driver.errors, sink.diagnostics)


def parse_string(source: str, filename: str = "<string>",
                 precedence: Union[PrecedenceTable, Dict[str, int], None] = None) -> ParseSession:
    """
    Convenience function to parse a whole source string.

    Args:
        source: Source code string
        filename: Filename for source locations
        precedence: Operator table to parse with

    Returns:
        ParseSession with the parsed constructs and any syntax errors
    """
    return _run_session(Lexer(StringSource(source, filename)), precedence)


def parse_file(filepath: str,
               precedence: Union[PrecedenceTable, Dict[str, int], None] = None) -> ParseSession:
    """
    Convenience function to parse a source file.

    Raises:
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        return _run_session(Lexer(StreamSource(f, filepath)), precedence)
