"""
Kaleidoscope Parser Package

Recursive descent parser with operator precedence climbing for binary
expressions. Produces Number/Variable/Binary/Call/Prototype/Function nodes.

Key Features:
- Table driven binary operator precedence (extensible at runtime)
- Structured results: every parse returns a ParseResult, never raises on bad syntax
- One diagnostic per failed parse, reported at the first violation
- Source spans on every node

Author: xwest
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, SourceSpan, Expression,
    Number, Variable, Binary, Call, Prototype, Function, dump
)
from .precedence import PrecedenceTable, DEFAULT_PRECEDENCE, NOT_AN_OPERATOR
from .parser import Parser, ANONYMOUS_FUNCTION_NAME, MAX_NESTING_DEPTH
from .errors import ParseError, ParseResult, PARSER_ERROR_CODES

__all__ = [
    # Core parser
    "Parser", "ANONYMOUS_FUNCTION_NAME", "MAX_NESTING_DEPTH",

    # Operator precedence
    "PrecedenceTable", "DEFAULT_PRECEDENCE", "NOT_AN_OPERATOR",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "SourceSpan", "Expression",
    "Number", "Variable", "Binary", "Call", "Prototype", "Function", "dump",

    # Error handling
    "ParseError", "ParseResult", "PARSER_ERROR_CODES",
]
