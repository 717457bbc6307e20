"""
LogicTrace Pratt Parser Implementation

Top-down operator precedence parser for propositional logic. The grammar,
from loosest to tightest binding:

    expr    := iff
    iff     := implies ( (IFF | XOR) implies )*
    implies := or ( IMPLIES or )*
    or      := and ( OR and )*
    and     := not ( AND not )*
    not     := NOT not | atom
    atom    := IDENTIFIER | '(' expr ')'

Every binary connective is left-associative; NOT is a right-associative
prefix. The parser pulls tokens lazily and stops at the first error.
"""

import logging
from typing import Callable, Dict, Iterable, Iterator, Optional
from enum import IntEnum

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import create_invalid_token_error
from .ast_nodes import Node, Variable, Unary, Binary, Connective, SourceSpan
from .errors import (
    create_unexpected_token_error, create_missing_connective_error,
    create_unclosed_delimiter_error, create_missing_operand_error,
    create_empty_expression_error
)

logger = logging.getLogger(__name__)


class Precedence(IntEnum):
    """Operator precedence levels for Pratt parsing."""
    NONE = 0
    IFF = 1             # IFF, XOR, <->, ^
    IMPLIES = 2         # IMPLIES, ->
    OR = 3              # OR, |
    AND = 4             # AND, &
    UNARY = 5           # NOT, !, ~


class Parser:
    """
    Pratt parser for one expression.

    Accepts any iterable of tokens (a list or the lexer's lazy stream) and
    produces the root node of the AST.
    """

    def __init__(self, tokens: Iterable[Token]):
        """
        Initialize parser with a token sequence.

        Args:
            tokens: Tokens from the lexer, terminated by EOF
        """
        self._stream: Iterator[Token] = iter(tokens)
        self._current: Optional[Token] = None
        self._previous: Optional[Token] = None
        self.tokens_consumed = 0

        self._init_parsing_tables()

    def _init_parsing_tables(self):
        """Initialize operator precedence and parsing function tables."""

        # Prefix parsing functions (tokens that can start an operand)
        self.prefix_parsers: Dict[TokenType, Callable[[], Node]] = {
            TokenType.IDENTIFIER: self._parse_variable,
            TokenType.NOT: self._parse_unary,
            TokenType.LEFT_PAREN: self._parse_grouping,
        }

        # Operator precedence table for infix connectives
        self.precedences: Dict[TokenType, Precedence] = {
            TokenType.IFF: Precedence.IFF,
            TokenType.XOR: Precedence.IFF,
            TokenType.IMPLIES: Precedence.IMPLIES,
            TokenType.OR: Precedence.OR,
            TokenType.AND: Precedence.AND,
        }

    def parse(self) -> Node:
        """
        Parse the token stream into an AST.

        Returns:
            Root node of the expression

        Raises:
            LexerError: If an invalid token is reached
            ParseError: On the first syntax error
        """
        self._advance()

        if self._check(TokenType.EOF):
            raise create_empty_expression_error(self._peek().location)

        root = self._parse_expression()

        if not self._check(TokenType.EOF):
            found = self._peek()
            if found.type in self.prefix_parsers:
                raise create_missing_connective_error(found)
            raise create_unexpected_token_error("end of input", found)

        logger.debug("Parsed %d tokens into %s", self.tokens_consumed, type(root).__name__)
        return root

    def _parse_expression(self) -> Node:
        """Parse a full expression (lowest precedence)."""
        return self._parse_precedence(Precedence.IFF)

    def _parse_precedence(self, precedence: Precedence) -> Node:
        """Parse an expression whose connectives bind at least as tightly as `precedence`."""
        prefix_parser = self.prefix_parsers.get(self._peek().type)
        if prefix_parser is None:
            raise create_missing_operand_error(self._peek())

        left = prefix_parser()

        while precedence <= self._get_precedence(self._peek().type):
            left = self._parse_binary(left)

        return left

    def _get_precedence(self, token_type: TokenType) -> Precedence:
        """Get precedence for a token type."""
        return self.precedences.get(token_type, Precedence.NONE)

    # Prefix parsers

    def _parse_variable(self) -> Variable:
        """Parse a variable identifier."""
        token = self._advance()
        return Variable(token.value, SourceSpan(token.location, token.location))

    def _parse_unary(self) -> Unary:
        """Parse NOT and its operand."""
        operator_token = self._advance()
        operand = self._parse_precedence(Precedence.UNARY)
        span = SourceSpan(operator_token.location, _span_end(operand, operator_token))
        return Unary(Connective.NOT, operand, span)

    def _parse_grouping(self) -> Node:
        """Parse a parenthesized expression."""
        open_token = self._advance()

        expr = self._parse_expression()

        if not self._check(TokenType.RIGHT_PAREN):
            found = self._peek()
            if found.type in self.prefix_parsers:
                raise create_missing_connective_error(found)
            raise create_unclosed_delimiter_error(open_token.location, found)
        self._advance()

        return expr

    # Infix parser

    def _parse_binary(self, left: Node) -> Binary:
        """Parse a left-associative binary connective."""
        operator_token = self._advance()
        precedence = self._get_precedence(operator_token.type)

        right = self._parse_precedence(Precedence(precedence + 1))

        start = left.span.start if left.span else operator_token.location
        span = SourceSpan(start, _span_end(right, operator_token))
        return Binary(Connective.from_token_type(operator_token.type), left, right, span)

    # Utility methods

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token matches type without consuming."""
        return self._peek().type == token_type

    def _peek(self) -> Token:
        """Return current token without consuming."""
        return self._current

    def _advance(self) -> Token:
        """Consume the current token and pull the next one from the stream."""
        self._previous = self._current
        if self._current is not None:
            self.tokens_consumed += 1

        if self._current is None or self._current.type != TokenType.EOF:
            self._current = self._next_token()

        return self._previous

    def _next_token(self) -> Token:
        try:
            token = next(self._stream)
        except StopIteration:
            # A stream without EOF behaves as if it ended with one
            location = self._previous.location if self._previous else SourceLocation("<expression>", 1, 1, 0)
            return Token(TokenType.EOF, "", None, location)

        if token.type == TokenType.INVALID:
            raise create_invalid_token_error(token.lexeme, token.location)
        return token


def _span_end(node: Node, fallback: Token) -> SourceLocation:
    return node.span.end if node.span else fallback.location


def parse_string(source: str, filename: str = "<expression>", line: int = 1) -> Node:
    """
    Convenience function to parse an expression string.

    Raises:
        LexerError: If the text contains an invalid token
        ParseError: If parsing fails
    """
    from ..lexer import Lexer

    return Parser(Lexer(source, filename, line).tokens()).parse()
