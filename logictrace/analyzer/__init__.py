"""
LogicTrace Analyzer Package

Turns a parsed expression tree into an ordered derivation trace:
- Post-order step evaluation
- Pluggable step wording (descriptive or truth-valued)
- Variable valuations
- Releasable evaluation results
"""

from .evaluator import StepEvaluator, truth_value, BINARY_SEMANTICS
from .policies import (
    StepPolicy, DescriptivePolicy, TruthValuePolicy, Outcome,
    POLICIES, RESULT_PREFIX, get_policy,
)
from .result import EvaluationResult, EvaluationStep, StepKind
from .valuation import Valuation, parse_truth_value
from .errors import EvaluationError, ResultReleasedError

__all__ = [
    # Main evaluator
    "StepEvaluator", "truth_value", "BINARY_SEMANTICS",

    # Step policies
    "StepPolicy", "DescriptivePolicy", "TruthValuePolicy", "Outcome",
    "POLICIES", "RESULT_PREFIX", "get_policy",

    # Results
    "EvaluationResult", "EvaluationStep", "StepKind",

    # Valuations
    "Valuation", "parse_truth_value",

    # Error handling
    "EvaluationError", "ResultReleasedError",
]
