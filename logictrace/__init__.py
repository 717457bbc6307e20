"""
LogicTrace Package

Step-by-step evaluation of propositional logic expressions: each expression
is tokenized, parsed into an immutable tree and evaluated into an ordered
trace of human-readable steps.

Architecture:
    logictrace/
    ├── lexer/           # Tokenization and lexical analysis
    ├── parser/          # Syntax analysis and AST generation
    ├── analyzer/        # Step evaluation, policies and results
    ├── optimizer/       # Logical-law rewriting
    ├── engine.py        # Text to step trace
    ├── batch.py         # File driver
    └── cli.py           # Command-line interface

License: MIT
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, LogicTraceError, LexerError
from .parser import Parser, ParseError, parse_string
from .analyzer import (
    StepEvaluator, EvaluationResult, EvaluationStep, StepKind,
    Valuation, EvaluationError, ResultReleasedError,
)
from .optimizer import LawRewriter
from .config import EngineConfiguration, BatchConfiguration, StepMode
from .engine import evaluate, release
from .batch import process_file, BatchReport, BatchError

__all__ = [
    # Pipeline stages
    "Lexer",
    "Parser",
    "parse_string",
    "StepEvaluator",
    "LawRewriter",

    # Entry points
    "evaluate",
    "release",
    "process_file",

    # Results and configuration
    "EvaluationResult", "EvaluationStep", "StepKind", "Valuation",
    "EngineConfiguration", "BatchConfiguration", "StepMode", "BatchReport",

    # Errors
    "LogicTraceError", "LexerError", "ParseError", "EvaluationError",
    "ResultReleasedError", "BatchError",

    # Version info
    "__version__",
]
