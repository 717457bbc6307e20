"""
Evaluation error handling for LogicTrace.

Covers failures after a successful parse: unbound variables under a
valuation, malformed trees and empty traces, plus misuse of a released
result.
"""

from typing import Optional, List

from ..lexer.tokens import SourceLocation
from ..lexer.errors import LogicTraceError


class EvaluationError(LogicTraceError):
    """
    Raised when no step trace can be produced for a parsed expression.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        node: Optional[object] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, location, code, help_text, suggestions)
        self.node = node


class ResultReleasedError(LogicTraceError):
    """Raised when a released EvaluationResult is read or released again."""

    def __init__(self, message: str = "Evaluation result has already been released"):
        super().__init__(message, None, code="E010",
                         help_text="Copy the steps you need before calling release().")


# Evaluation error codes for categorization
EVALUATION_ERROR_CODES = {
    "E001": "Unbound variable",
    "E002": "Malformed expression tree",
    "E003": "No evaluation steps produced",
    "E004": "Expression tree too deep",
    "E010": "Result already released",
}


def create_unbound_variable_error(name: str, location: Optional[SourceLocation],
                                  bound: List[str]) -> EvaluationError:
    """Create an error for a variable with no truth value."""
    if bound:
        help_text = f"Bound variables: {', '.join(sorted(bound))}"
    else:
        help_text = "No variables are bound."

    return EvaluationError(
        message=f"Unbound variable '{name}'",
        location=location,
        code="E001",
        help_text=help_text,
        suggestions=[f"Bind it, for example with --assign {name}=1"]
    )


def create_malformed_tree_error(node: object) -> EvaluationError:
    """Create an error for a node outside the closed AST node set."""
    return EvaluationError(
        message=f"Malformed expression tree: unexpected node {type(node).__name__}",
        node=node,
        code="E002",
        help_text="Trees must be built from Variable, Unary and Binary nodes.",
    )


def create_empty_trace_error(expression: str) -> EvaluationError:
    """Create an error for an evaluation that produced no steps."""
    return EvaluationError(
        message=f"No evaluation steps could be produced for: {expression}",
        code="E003",
    )


def create_tree_too_deep_error() -> EvaluationError:
    """Create an error for a tree too deep to walk."""
    return EvaluationError(
        message="Expression nested too deeply to evaluate",
        code="E004",
        help_text="Split the expression into shorter lines.",
    )
