"""
Step-producing evaluator for LogicTrace.

Walks the AST depth-first, left before right, and emits steps in strict
post-order: a connective's step is appended only after every step of its
operands. Each call owns its own step list, so one evaluator can be used
from several threads at once and re-running it on the same tree always
gives the same trace.
"""

import logging
from typing import Callable, Dict, List, Optional, Sequence

from ..parser.ast_nodes import Binary, Connective, Node, Unary, Variable, render
from .errors import create_malformed_tree_error
from .policies import DescriptivePolicy, Outcome, StepPolicy
from .result import EvaluationResult, EvaluationStep, StepKind
from .valuation import Valuation

logger = logging.getLogger(__name__)

BINARY_SEMANTICS: Dict[Connective, Callable[[bool, bool], bool]] = {
    Connective.AND: lambda left, right: left and right,
    Connective.OR: lambda left, right: left or right,
    Connective.IMPLIES: lambda left, right: (not left) or right,
    Connective.IFF: lambda left, right: left == right,
    Connective.XOR: lambda left, right: left != right,
}


class StepEvaluator:
    """
    Produces the ordered derivation trace of an expression tree.

    Guarantees, whatever the policy:
    - every Variable contributes at least one step naming it
    - every connective contributes exactly one step, after its operands
    - the last step belongs to the root
    """

    def __init__(self, policy: Optional[StepPolicy] = None,
                 valuation: Optional[Valuation] = None):
        """
        Args:
            policy: Step wording; DescriptivePolicy by default
            valuation: Truth values for variables; required by policies
                that report values

        Raises:
            ValueError: If the policy needs a valuation and none is given
        """
        self.policy = policy or DescriptivePolicy()
        self.valuation = valuation

        if self.policy.requires_valuation and valuation is None:
            raise ValueError(f"The {self.policy.name!r} step policy requires a valuation")

    def evaluate(self, root: Node, expression: Optional[str] = None,
                 leading_steps: Sequence[str] = ()) -> EvaluationResult:
        """
        Evaluate a tree into an EvaluationResult.

        Args:
            root: Root of the AST
            expression: Source text recorded on the result; defaults to
                the rendered tree
            leading_steps: Law steps to place before the evaluation steps

        Raises:
            EvaluationError: On an unbound variable, a malformed tree or
                an empty trace
        """
        steps: List[EvaluationStep] = []
        for description in leading_steps:
            steps.append(EvaluationStep(len(steps), description, StepKind.LAW, 0))

        outcome = self._visit(root, steps, 0, is_root=True)

        if expression is None:
            expression = render(root)
        logger.debug("Evaluated %r into %d steps", expression, len(steps))
        return EvaluationResult(expression, steps, outcome.value)

    def _visit(self, node: Node, steps: List[EvaluationStep], depth: int,
               is_root: bool = False) -> Outcome:
        if isinstance(node, Variable):
            outcome = self._outcome(node, self._lookup(node))
            for line in self.policy.variable_steps(node, outcome, is_root):
                steps.append(EvaluationStep(len(steps), line, StepKind.VARIABLE, depth))
            return outcome

        if isinstance(node, Unary):
            operand = self._visit(node.operand, steps, depth + 1)
            value = None if operand.value is None else not operand.value
            outcome = self._outcome(node, value)
            line = self.policy.unary_step(node, operand, outcome, is_root)
            steps.append(EvaluationStep(len(steps), line, StepKind.CONNECTIVE, depth))
            return outcome

        if isinstance(node, Binary):
            left = self._visit(node.left, steps, depth + 1)
            right = self._visit(node.right, steps, depth + 1)
            if left.value is None or right.value is None:
                value = None
            else:
                value = BINARY_SEMANTICS[node.op](left.value, right.value)
            outcome = self._outcome(node, value)
            line = self.policy.binary_step(node, left, right, outcome, is_root)
            steps.append(EvaluationStep(len(steps), line, StepKind.CONNECTIVE, depth))
            return outcome

        raise create_malformed_tree_error(node)

    def _lookup(self, node: Variable) -> Optional[bool]:
        if self.valuation is None:
            return None
        location = node.span.start if node.span else None
        return self.valuation.lookup(node.name, location)

    @staticmethod
    def _outcome(node: Node, value: Optional[bool]) -> Outcome:
        return Outcome(render(node), value, compound=isinstance(node, Binary))


def truth_value(node: Node, valuation: Valuation) -> bool:
    """
    Compute the truth value of a tree without producing steps.

    Raises:
        EvaluationError: On an unbound variable or a malformed tree
    """
    if isinstance(node, Variable):
        return valuation.lookup(node.name, node.span.start if node.span else None)
    if isinstance(node, Unary):
        return not truth_value(node.operand, valuation)
    if isinstance(node, Binary):
        return BINARY_SEMANTICS[node.op](truth_value(node.left, valuation),
                                         truth_value(node.right, valuation))
    raise create_malformed_tree_error(node)
