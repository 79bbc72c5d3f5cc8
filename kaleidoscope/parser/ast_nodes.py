"""
Abstract Syntax Tree node definitions for Kaleidoscope.

The node set is closed: Number, Variable, Binary and Call are expressions,
Prototype is a function signature and Function pairs a prototype with its
single-expression body. Nodes own their children outright; there are no
parent pointers and no node is shared between two trees.

Equality is structural and ignores source spans, so two parses of the same
text compare equal.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Any, Tuple, Union
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import SourceLocation


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Expressions
    NUMBER = "Number"
    VARIABLE = "Variable"
    BINARY = "Binary"
    CALL = "Call"

    # Declarations
    PROTOTYPE = "Prototype"
    FUNCTION = "Function"


@dataclass
class SourceSpan:
    """Represents a span of source code (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


class ASTVisitor(ABC):
    """Abstract visitor interface for traversing AST nodes."""

    @abstractmethod
    def visit(self, node: 'ASTNode') -> Any:
        """Visit a generic AST node."""
        pass


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ASTNodeType
    # Names of the fields that make up the node's value
    _fields: Tuple[str, ...] = ()

    def __init__(self, span: Optional[SourceSpan] = None):
        self.span = span

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""
        pass

    def __eq__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return all(getattr(self, f) == getattr(other, f) for f in self._fields)

    # Nodes are mutable containers
    __hash__ = None

    def __repr__(self) -> str:
        args = ", ".join(repr(getattr(self, f)) for f in self._fields)
        return f"{self.__class__.__name__}({args})"

    def __str__(self) -> str:
        return dump(self)


# ============================================================================
# Expressions
# ============================================================================

class Number(ASTNode):
    """Numeric literal, e.g. ``1.0``."""
    node_type = ASTNodeType.NUMBER
    _fields = ("value",)

    def __init__(self, value: float, span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.value = float(value)

    def children(self) -> List[ASTNode]:
        return []


class Variable(ASTNode):
    """Reference to a variable, e.g. ``x``."""
    node_type = ASTNodeType.VARIABLE
    _fields = ("name",)

    def __init__(self, name: str, span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.name = name

    def children(self) -> List[ASTNode]:
        return []


class Binary(ASTNode):
    """Binary operator expression, e.g. ``a + b``."""
    node_type = ASTNodeType.BINARY
    _fields = ("op", "lhs", "rhs")

    def __init__(self, op: str, lhs: 'Expression', rhs: 'Expression',
                 span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.op = op
        self.lhs = lhs
        self.rhs = rhs

    def children(self) -> List[ASTNode]:
        return [self.lhs, self.rhs]


class Call(ASTNode):
    """Function call, e.g. ``foo(1, x)``."""
    node_type = ASTNodeType.CALL
    _fields = ("callee", "args")

    def __init__(self, callee: str, args: List['Expression'],
                 span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.callee = callee
        self.args = list(args)

    def children(self) -> List[ASTNode]:
        return list(self.args)


Expression = Union[Number, Variable, Binary, Call]


# ============================================================================
# Declarations
# ============================================================================

class Prototype(ASTNode):
    """
    The "prototype" of a function: its name and parameter names.

    This implicitly fixes the number of arguments the function takes.
    Parameter names are not checked for duplicates here.
    """
    node_type = ASTNodeType.PROTOTYPE
    _fields = ("name", "params")

    def __init__(self, name: str, params: List[str], span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.name = name
        self.params = list(params)

    @property
    def arity(self) -> int:
        return len(self.params)

    def children(self) -> List[ASTNode]:
        return []


class Function(ASTNode):
    """A function definition: prototype plus body expression."""
    node_type = ASTNodeType.FUNCTION
    _fields = ("proto", "body")

    def __init__(self, proto: Prototype, body: 'Expression', span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.proto = proto
        self.body = body

    @property
    def name(self) -> str:
        return self.proto.name

    def children(self) -> List[ASTNode]:
        return [self.proto, self.body]


# ============================================================================
# Printing
# ============================================================================

def _format_number(value: float) -> str:
    # 1.0 -> "1", 2.5 -> "2.5"
    if value.is_integer():
        return str(int(value))
    return repr(value)


class _Dumper(ASTVisitor):
    """Renders a tree as an s-expression."""

    def visit(self, node: ASTNode) -> str:
        if isinstance(node, Number):
            return f"(number {_format_number(node.value)})"
        if isinstance(node, Variable):
            return f"(variable {node.name})"
        if isinstance(node, Binary):
            return f"(binary {node.op} {node.lhs.accept(self)} {node.rhs.accept(self)})"
        if isinstance(node, Call):
            args = "".join(" " + arg.accept(self) for arg in node.args)
            return f"(call {node.callee}{args})"
        if isinstance(node, Prototype):
            return f"(prototype {node.name} ({' '.join(node.params)}))"
        if isinstance(node, Function):
            return f"(function {node.proto.accept(self)} {node.body.accept(self)})"
        raise TypeError(f"Unknown AST node: {node!r}")


def dump(node: ASTNode) -> str:
    """
    Render an AST as an s-expression.

    >>> dump(Binary('+', Number(1), Variable('x')))
    '(binary + (number 1) (variable x))'
    """
    return node.accept(_Dumper())
