"""
Error handling for the LogicTrace lexer.

Provides the shared `Diagnostic` record and the base exception used across
the package, plus lexer-specific errors with source locations and
suggestions for near-miss connective spellings.
"""

from typing import Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """Base record for diagnostics (errors, warnings, info)."""
    message: str
    location: Optional[SourceLocation]
    severity: str  # "error", "warning", "info"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        result = f"{severity_prefix}: {self.message}"
        if self.code:
            result += f" [{self.code}]"
        result += "\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LogicTraceError(Exception):
    """
    Base class for every failure raised by the package.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def location(self) -> Optional[SourceLocation]:
        return self.diagnostic.location

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)


class LexerError(LogicTraceError):
    """Raised when the expression text contains an unrecognised token."""

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        lexeme: str = "",
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, location, code, help_text, suggestions)
        self.lexeme = lexeme


class ErrorRecovery:
    """
    Suggestion helpers for invalid lexemes.

    The lexer does not recover from errors; these only improve the message.
    """

    # Characters that start a valid connective spelling, mapped to it
    NEAR_MISSES = {
        '-': ['->'],
        '=': ['=>', '<=>'],
        '<': ['<->', '<=>'],
        '>': ['->'],
        '*': ['AND', '&'],
        '+': ['OR', '|'],
    }

    @staticmethod
    def suggest_connective_corrections(lexeme: str) -> List[str]:
        """Suggest connective spellings for a near-miss character."""
        return list(ErrorRecovery.NEAR_MISSES.get(lexeme[:1], []))

    @staticmethod
    def suggest_keyword_corrections(word: str) -> List[str]:
        """Suggest keywords for a word that differs only in case."""
        from .tokens import KEYWORDS

        return [keyword for keyword in KEYWORDS if keyword == word.upper() and keyword != word]


ASCII_DIGITS = "0123456789"

# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L003": "Invalid numeric literal",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    suggestions = ErrorRecovery.suggest_connective_corrections(char)

    if suggestions:
        help_text = f"Did you mean one of these connectives: {', '.join(suggestions)}?"
    elif char.isprintable():
        help_text = f"The character '{char}' is not valid in a logic expression."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        lexeme=char,
        code="L001",
        help_text=help_text,
        suggestions=suggestions
    )


def create_invalid_number_error(lexeme: str, location: SourceLocation) -> LexerError:
    """Create an error for a numeric-looking token."""
    return LexerError(
        message=f"Invalid numeric literal: '{lexeme}'",
        location=location,
        lexeme=lexeme,
        code="L003",
        help_text="Variables must start with a letter; numeric constants are not supported.",
        suggestions=[f"Rename to a letter-led identifier such as 'v{lexeme}'"]
    )


def create_invalid_token_error(lexeme: str, location: SourceLocation) -> LexerError:
    """Create the matching lexer error for an INVALID token's lexeme."""
    if lexeme[:1] in ASCII_DIGITS:
        return create_invalid_number_error(lexeme, location)
    return create_invalid_character_error(lexeme[:1], location)
