"""
Abstract Syntax Tree node definitions for LogicTrace.

The node set is closed: `Variable`, `Unary` and `Binary`. Nodes are frozen
dataclasses built only by the parser, never mutated afterwards and never
shared between expressions. There are no parent pointers; traversal goes
top-down through `children()`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple, Union

from ..lexer.tokens import SourceLocation, TokenType


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""
    VARIABLE = "Variable"
    UNARY = "Unary"
    BINARY = "Binary"


class Connective(Enum):
    """
    Logical connectives.

    Each member carries its keyword spelling, its binding strength
    (higher binds tighter) and its arity.
    """
    NOT = ("NOT", 5, 1)
    AND = ("AND", 4, 2)
    OR = ("OR", 3, 2)
    IMPLIES = ("IMPLIES", 2, 2)
    IFF = ("IFF", 1, 2)
    XOR = ("XOR", 1, 2)

    def __init__(self, keyword: str, precedence: int, arity: int):
        self.keyword = keyword
        self.precedence = precedence
        self.arity = arity

    def __str__(self) -> str:
        return self.keyword

    @classmethod
    def from_token_type(cls, token_type: TokenType) -> 'Connective':
        return _TOKEN_CONNECTIVES[token_type]


_TOKEN_CONNECTIVES: Dict[TokenType, Connective] = {
    TokenType.NOT: Connective.NOT,
    TokenType.AND: Connective.AND,
    TokenType.OR: Connective.OR,
    TokenType.IMPLIES: Connective.IMPLIES,
    TokenType.IFF: Connective.IFF,
    TokenType.XOR: Connective.XOR,
}

BINARY_CONNECTIVES = frozenset({
    Connective.AND, Connective.OR, Connective.IMPLIES, Connective.IFF, Connective.XOR,
})

# Binding strength of a bare variable; higher than any connective
ATOM_PRECEDENCE = 6


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of source text (start and end locations)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.column}"


# ============================================================================
# Nodes
# ============================================================================

@dataclass(frozen=True)
class Variable:
    """Leaf node: a propositional variable."""
    name: str
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    @property
    def node_type(self) -> ASTNodeType:
        return ASTNodeType.VARIABLE

    def children(self) -> List['Node']:
        return []


@dataclass(frozen=True)
class Unary:
    """Prefix connective applied to one operand. Only NOT is unary."""
    op: Connective
    operand: 'Node'
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.op is not Connective.NOT:
            raise ValueError(f"{self.op} is not a unary connective")

    @property
    def node_type(self) -> ASTNodeType:
        return ASTNodeType.UNARY

    def children(self) -> List['Node']:
        return [self.operand]


@dataclass(frozen=True)
class Binary:
    """Binary connective with left and right operands."""
    op: Connective
    left: 'Node'
    right: 'Node'
    span: Optional[SourceSpan] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        if self.op not in BINARY_CONNECTIVES:
            raise ValueError(f"{self.op} is not a binary connective")

    @property
    def node_type(self) -> ASTNodeType:
        return ASTNodeType.BINARY

    def children(self) -> List['Node']:
        return [self.left, self.right]


Node = Union[Variable, Unary, Binary]


# ============================================================================
# Traversal helpers
# ============================================================================

def walk(node: Node) -> Iterator[Node]:
    """Yield every node in pre-order, left before right."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


def count_leaves(node: Node) -> int:
    return sum(1 for n in walk(node) if isinstance(n, Variable))


def count_connectives(node: Node) -> int:
    return sum(1 for n in walk(node) if not isinstance(n, Variable))


def depth(node: Node) -> int:
    """Height of the tree; a lone variable has depth 1."""
    children = node.children()
    if not children:
        return 1
    return 1 + max(depth(child) for child in children)


def variables(node: Node) -> Tuple[str, ...]:
    """Distinct variable names in order of first appearance."""
    seen = {}
    for n in walk(node):
        if isinstance(n, Variable):
            seen.setdefault(n.name, None)
    return tuple(seen)


# ============================================================================
# Rendering
# ============================================================================

def precedence_of(node: Node) -> int:
    if isinstance(node, Variable):
        return ATOM_PRECEDENCE
    return node.op.precedence


def render(node: Node) -> str:
    """
    Render a tree as canonical keyword text with minimal parentheses.

    Binary connectives are left-associative, so a right operand of equal
    precedence keeps its parentheses: `A AND (B AND C)` round-trips.
    """
    if isinstance(node, Variable):
        return node.name

    if isinstance(node, Unary):
        operand = render(node.operand)
        if isinstance(node.operand, Binary):
            operand = f"({operand})"
        return f"{node.op.keyword} {operand}"

    if isinstance(node, Binary):
        own = node.op.precedence
        left = render(node.left)
        right = render(node.right)
        if precedence_of(node.left) < own:
            left = f"({left})"
        if precedence_of(node.right) <= own:
            right = f"({right})"
        return f"{left} {node.op.keyword} {right}"

    raise TypeError(f"Not an AST node: {node!r}")
