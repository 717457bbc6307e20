"""
Token definitions for the LogicTrace lexer.

This module defines all token types recognised in propositional-logic
expressions:
- Variable identifiers
- Connectives (keyword and symbolic spellings)
- Grouping parentheses
- End-of-input and invalid tokens
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Dict


class TokenType(Enum):
    """
    Enumeration of all token types in a logic expression.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    INVALID = auto()                # Unrecognised character or malformed run

    # ========================================================================
    # Identifiers
    # ========================================================================
    IDENTIFIER = auto()             # A, p1, rain_today

    # ========================================================================
    # Connectives
    # ========================================================================
    NOT = auto()                    # NOT, !, ~, ¬
    AND = auto()                    # AND, &, &&, ∧
    OR = auto()                     # OR, |, ||, ∨
    IMPLIES = auto()                # IMPLIES, ->, =>, →
    IFF = auto()                    # IFF, <->, <=>, ↔
    XOR = auto()                    # XOR, ^, ⊕

    # ========================================================================
    # Punctuation
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the expression text.

    `line` is the line of the input file the expression came from (1 for a
    standalone expression); `column` is 1-based and `offset` 0-based.
    """
    filename: str
    line: int
    column: int
    offset: int

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    A lexical token.

    Carries the token type, the raw lexeme, a semantic value (the name for
    identifiers, None otherwise) and its source location.
    """
    type: TokenType
    lexeme: str
    value: Any
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    @property
    def is_identifier(self) -> bool:
        """Check if this token is a variable identifier."""
        return self.type == TokenType.IDENTIFIER


# Reserved words, matched case-sensitively. Lower-case spellings are
# ordinary identifiers.
KEYWORDS: Dict[str, TokenType] = {
    "NOT": TokenType.NOT,
    "AND": TokenType.AND,
    "OR": TokenType.OR,
    "IMPLIES": TokenType.IMPLIES,
    "IFF": TokenType.IFF,
    "XOR": TokenType.XOR,
}

OPERATORS: Dict[str, TokenType] = {
    # Negation
    "!": TokenType.NOT,
    "~": TokenType.NOT,
    "¬": TokenType.NOT,

    # Conjunction
    "&": TokenType.AND,
    "&&": TokenType.AND,
    "∧": TokenType.AND,

    # Disjunction
    "|": TokenType.OR,
    "||": TokenType.OR,
    "∨": TokenType.OR,

    # Implication
    "->": TokenType.IMPLIES,
    "=>": TokenType.IMPLIES,
    "→": TokenType.IMPLIES,

    # Biconditional
    "<->": TokenType.IFF,
    "<=>": TokenType.IFF,
    "↔": TokenType.IFF,

    # Exclusive or
    "^": TokenType.XOR,
    "⊕": TokenType.XOR,

    # Punctuation
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}

# Longest spelling first so that "<->" wins over a lone "<"
MAX_OPERATOR_LENGTH = max(len(op) for op in OPERATORS)
