"""
Error handling for the LogicTrace parser.

The parser is fail-fast: it raises the first syntax error it meets and
never returns a partial tree. These helpers build the errors with
locations and suggestions.
"""

from typing import Optional, List, Union

from ..lexer.tokens import Token, TokenType, SourceLocation
from ..lexer.errors import LogicTraceError, ErrorRecovery


class ParseError(LogicTraceError):
    """
    Exception raised when a token sequence does not match the grammar.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, location, code, help_text, suggestions)
        self.token = token


class SyntaxErrorRecovery:
    """Suggestion helpers for syntax errors."""

    @staticmethod
    def suggest_missing_token(expected: TokenType) -> List[str]:
        """Suggest what token might be missing."""
        token_suggestions = {
            TokenType.RIGHT_PAREN: ["Add a closing parenthesis ')'"],
            TokenType.IDENTIFIER: ["Add a variable or a parenthesised sub-expression"],
        }
        return list(token_suggestions.get(expected, []))

    @staticmethod
    def suggest_connective_between(found: Token) -> List[str]:
        """Suggest connectives for two operands written side by side."""
        suggestions = []
        if found.is_identifier:
            for keyword in ErrorRecovery.suggest_keyword_corrections(found.lexeme):
                suggestions.append(f"Did you mean '{keyword}'? Connectives are upper-case")
        suggestions.append("Insert a connective such as AND or OR between the operands")
        return suggestions


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Expected token not found",
    "P004": "Unclosed delimiter",
    "P005": "Missing operand",
    "P006": "Empty expression",
    "P010": "Unexpected end of input",
    "P011": "Expression nested too deeply",
}


def describe_token(token: Token) -> str:
    if token.type == TokenType.EOF:
        return "end of input"
    return f"'{token.lexeme}'"


def create_unexpected_token_error(expected: Union[TokenType, str], found: Token) -> ParseError:
    """Create an error for an unexpected token."""
    expected_str = expected.name if isinstance(expected, TokenType) else expected
    found_str = describe_token(found)

    if isinstance(expected, TokenType):
        suggestions = SyntaxErrorRecovery.suggest_missing_token(expected)
    else:
        suggestions = []

    return ParseError(
        message=f"Expected {expected_str}, found {found_str}",
        location=found.location,
        token=found,
        code="P001",
        help_text=f"The parser expected {expected_str} at this position.",
        suggestions=suggestions
    )


def create_missing_connective_error(found: Token) -> ParseError:
    """Create an error for two operands with no connective between them."""
    return ParseError(
        message=f"Missing connective before {describe_token(found)}",
        location=found.location,
        token=found,
        code="P001",
        help_text="Operands must be joined by a connective; none is inserted implicitly.",
        suggestions=SyntaxErrorRecovery.suggest_connective_between(found)
    )


def create_unclosed_delimiter_error(open_location: SourceLocation, found: Token) -> ParseError:
    """Create an error for a '(' that is never closed."""
    return ParseError(
        message=f"Expected ')', found {describe_token(found)}",
        location=found.location,
        token=found,
        code="P004",
        help_text=f"The opening '(' at {open_location} was never closed.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(TokenType.RIGHT_PAREN)
    )


def create_missing_operand_error(found: Token) -> ParseError:
    """Create an error for a connective with no operand after it."""
    if found.type == TokenType.EOF:
        return ParseError(
            message="Unexpected end of input, expected an operand",
            location=found.location,
            token=found,
            code="P010",
            help_text="The expression ends right after a connective or '('.",
            suggestions=SyntaxErrorRecovery.suggest_missing_token(TokenType.IDENTIFIER)
        )

    return ParseError(
        message=f"Expected an operand, found {describe_token(found)}",
        location=found.location,
        token=found,
        code="P005",
        help_text="A variable, NOT or '(' must appear here.",
        suggestions=SyntaxErrorRecovery.suggest_missing_token(TokenType.IDENTIFIER)
    )


def create_empty_expression_error(location: SourceLocation) -> ParseError:
    """Create an error for an expression with no tokens."""
    return ParseError(
        message="Empty expression",
        location=location,
        code="P006",
        help_text="There is nothing to parse.",
    )


def create_nesting_too_deep_error(location: SourceLocation) -> ParseError:
    """Create an error for an expression nested beyond the parser's reach."""
    return ParseError(
        message="Expression nested too deeply",
        location=location,
        code="P011",
        help_text="Split the expression or remove redundant NOT and parentheses.",
    )
