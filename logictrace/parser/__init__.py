"""
LogicTrace Parser Package

Pratt-based parser for propositional logic producing an immutable AST of
`Variable`, `Unary` and `Binary` nodes.
"""

from .ast_nodes import (
    ASTNodeType, Connective, SourceSpan, Node, Variable, Unary, Binary,
    walk, count_leaves, count_connectives, depth, variables, render,
)
from .parser import Parser, Precedence, parse_string
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "Precedence",
    "parse_string",

    # AST nodes
    "ASTNodeType", "Connective", "SourceSpan",
    "Node", "Variable", "Unary", "Binary",
    "walk", "count_leaves", "count_connectives", "depth", "variables", "render",

    # Error handling
    "ParseError",
]
