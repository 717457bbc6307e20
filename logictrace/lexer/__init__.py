"""
LogicTrace Lexer Package

Lexical analysis for propositional-logic expressions. Connectives can be
written as upper-case keywords (AND, OR, NOT, IMPLIES, IFF, XOR) or with
their ASCII and Unicode symbols.
"""

from .tokens import Token, TokenType, SourceLocation
from .lexer import Lexer, tokenize_string
from .errors import Diagnostic, LogicTraceError, LexerError

__all__ = [
    "Lexer",
    "tokenize_string",
    "Token",
    "TokenType",
    "SourceLocation",
    "Diagnostic",
    "LogicTraceError",
    "LexerError",
]
