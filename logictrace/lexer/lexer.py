"""
LogicTrace Lexer - turns one expression line into tokens

The token stream is produced lazily: the parser pulls tokens one at a time
and stops at the first error, so nothing after a bad character is scanned.
Each call to `tokens()` restarts from the beginning of the text.
"""

import logging
import re
from typing import Iterator, List

from .tokens import (
    Token, TokenType, SourceLocation, KEYWORDS, OPERATORS, MAX_OPERATOR_LENGTH
)
from .errors import create_invalid_token_error

logger = logging.getLogger(__name__)


class Lexer:
    """
    Lexical analyzer for propositional-logic expressions.

    Recognises identifiers, connective keywords and symbols, and
    parentheses. Anything else becomes an INVALID token instead of being
    skipped, so the parser can report it.
    """

    identifier_pattern = re.compile(r'[A-Za-z][A-Za-z0-9_]*')
    # Numeric-looking runs are consumed whole so "12ab" is one bad token
    number_pattern = re.compile(r'[0-9][A-Za-z0-9_]*')

    def __init__(self, source: str, filename: str = "<expression>", line: int = 1):
        """
        Initialize the lexer with one expression.

        Args:
            source: Expression text (one line)
            filename: Name of the input for error reporting
            line: Line number of the expression within its input
        """
        self.source = source
        self.filename = filename
        self.line = line

    def tokens(self) -> Iterator[Token]:
        """
        Lazily yield the tokens of the expression, ending with EOF.

        INVALID tokens are yielded in place; scanning continues only if the
        consumer keeps pulling.
        """
        source = self.source
        pos = 0
        length = len(source)

        while True:
            while pos < length and source[pos].isspace():
                pos += 1

            if pos >= length:
                yield Token(TokenType.EOF, "", None, self._location(pos))
                return

            token = self._scan(pos)
            pos += len(token.lexeme)
            yield token

    def tokenize(self) -> List[Token]:
        """
        Tokenize the entire expression.

        Returns:
            List of tokens including the EOF token

        Raises:
            LexerError: On the first INVALID token
        """
        tokens = []
        for token in self.tokens():
            if token.type == TokenType.INVALID:
                raise create_invalid_token_error(token.lexeme, token.location)
            tokens.append(token)

        logger.debug("Lexed %d tokens from %r", len(tokens), self.source)
        return tokens

    def _scan(self, pos: int) -> Token:
        """Scan a single token starting at `pos`."""
        location = self._location(pos)
        current_char = self.source[pos]

        # Identifiers and keywords
        if current_char.isascii() and current_char.isalpha():
            lexeme = self.identifier_pattern.match(self.source, pos).group(0)
            token_type = KEYWORDS.get(lexeme, TokenType.IDENTIFIER)
            value = lexeme if token_type == TokenType.IDENTIFIER else None
            return Token(token_type, lexeme, value, location)

        match = self.number_pattern.match(self.source, pos)
        if match:
            return Token(TokenType.INVALID, match.group(0), None, location)

        # Operators and punctuation, longest spelling first
        for op_len in range(MAX_OPERATOR_LENGTH, 0, -1):
            potential_op = self.source[pos:pos + op_len]
            if len(potential_op) == op_len and potential_op in OPERATORS:
                return Token(OPERATORS[potential_op], potential_op, None, location)

        return Token(TokenType.INVALID, current_char, None, location)

    def _location(self, pos: int) -> SourceLocation:
        return SourceLocation(self.filename, self.line, pos + 1, pos)


def tokenize_string(source: str, filename: str = "<expression>", line: int = 1) -> List[Token]:
    """
    Convenience function to tokenize an expression string.

    Raises:
        LexerError: If the text contains an invalid token
    """
    return Lexer(source, filename, line).tokenize()
