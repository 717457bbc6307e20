"""
Evaluation engine: the single entry point from expression text to step trace.

    text -> Lexer -> Parser -> [LawRewriter] -> StepEvaluator -> EvaluationResult

Each call is independent and keeps no state between calls, so evaluations
may run concurrently from several threads.
"""

import logging
from typing import Optional

from .analyzer.errors import create_tree_too_deep_error
from .analyzer.evaluator import StepEvaluator
from .analyzer.result import EvaluationResult
from .analyzer.valuation import Valuation
from .config import EngineConfiguration
from .lexer.lexer import Lexer
from .lexer.tokens import SourceLocation
from .optimizer.laws import LawRewriter
from .parser.errors import create_nesting_too_deep_error
from .parser.parser import Parser

logger = logging.getLogger(__name__)


def evaluate(expression_text: str, config: Optional[EngineConfiguration] = None,
             filename: str = "<expression>", line: int = 1) -> EvaluationResult:
    """
    Evaluate one expression into its ordered step trace.

    Args:
        expression_text: Propositional expression, e.g. "(A OR B) AND C"
        config: Engine configuration; defaults to descriptive steps without
            law rewriting
        filename: Name used in diagnostic locations
        line: Line number used in diagnostic locations

    Returns:
        A live EvaluationResult the caller must release

    Raises:
        LexerError: If the text contains an invalid token
        ParseError: If the text is not a well-formed expression or is
            nested too deeply to parse
        EvaluationError: If no trace can be produced, including for trees
            too deep to walk
    """
    config = config or EngineConfiguration()
    text = expression_text.strip()

    parser = Parser(Lexer(text, filename, line).tokens())
    try:
        tree = parser.parse()
    except RecursionError:
        raise create_nesting_too_deep_error(SourceLocation(filename, line, 1, 0)) from None
    logger.debug("Parsed %r from %d tokens", text, parser.tokens_consumed)

    policy = config.make_policy()
    valuation = config.valuation
    if valuation is None and policy.requires_valuation:
        # Every variable is then unbound and reported as such
        valuation = Valuation()

    try:
        law_steps = []
        if config.apply_laws:
            rewriter = LawRewriter(distribute=config.distribute, commute=config.commute)
            rewrite = rewriter.rewrite(tree)
            tree = rewrite.tree
            law_steps = rewrite.steps

        result = StepEvaluator(policy, valuation).evaluate(tree, text, law_steps)
    except RecursionError:
        raise create_tree_too_deep_error() from None
    logger.debug("Produced %d steps for %r", len(result), text)
    return result


def release(result: EvaluationResult):
    """
    Release a result's steps.

    Raises:
        ResultReleasedError: If the result was already released
    """
    result.release()
