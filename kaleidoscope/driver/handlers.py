"""
Consumers for the constructs produced by the top-level driver.

A code generator or interpreter would implement TopLevelHandler; the two
handlers here either report what was parsed or just keep it.
"""

import sys
from abc import ABC, abstractmethod
from typing import List, Optional, TextIO, Union

from ..parser.ast_nodes import Function, Prototype, dump


class TopLevelHandler(ABC):
    """Receives each successfully parsed top-level construct, in source order."""

    @abstractmethod
    def handle_definition(self, function: Function):
        """Called for ``def`` definitions."""
        pass

    @abstractmethod
    def handle_extern(self, prototype: Prototype):
        """Called for ``extern`` declarations."""
        pass

    @abstractmethod
    def handle_top_level_expression(self, function: Function):
        """Called for bare expressions, wrapped in an anonymous function."""
        pass


class ReportingHandler(TopLevelHandler):
    """Writes a short note for every construct, optionally with its AST."""

    def __init__(self, stream: Optional[TextIO] = None, dump_ast: bool = False):
        self.stream = stream
        self.dump_ast = dump_ast

    def _report(self, message: str, node: Union[Function, Prototype]):
        stream = self.stream if self.stream is not None else sys.stderr
        stream.write(message + "\n")
        if self.dump_ast:
            stream.write(dump(node) + "\n")
        stream.flush()

    def handle_definition(self, function: Function):
        self._report("Parsed a function definition.", function)

    def handle_extern(self, prototype: Prototype):
        self._report("Parsed an extern", prototype)

    def handle_top_level_expression(self, function: Function):
        self._report("Parsed a top-level expr", function)


class CollectingHandler(TopLevelHandler):
    """Keeps every construct in ``items``."""

    def __init__(self):
        self.items: List[Union[Function, Prototype]] = []

    def handle_definition(self, function: Function):
        self.items.append(function)

    def handle_extern(self, prototype: Prototype):
        self.items.append(prototype)

    def handle_top_level_expression(self, function: Function):
        self.items.append(function)
