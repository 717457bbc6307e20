"""
Step policies: the vocabulary used to word evaluation steps.

The evaluator decides *when* a step is emitted (post-order, one per
connective, at least one per variable); a policy decides *what* it says.
Policies are stateless, so a single instance can serve any number of
evaluations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Type

from ..parser.ast_nodes import Binary, Unary, Variable

RESULT_PREFIX = "Result: "


@dataclass(frozen=True)
class Outcome:
    """What evaluating a subtree produced: its text and, if known, its value."""
    text: str
    value: Optional[bool]
    compound: bool = False

    @property
    def operand_text(self) -> str:
        """Text suitable for quoting as an operand."""
        return f"({self.text})" if self.compound else self.text


class StepPolicy(ABC):
    """Base class for step policies."""

    name = "abstract"
    requires_valuation = False

    def variable_steps(self, node: Variable, outcome: Outcome, is_root: bool) -> List[str]:
        return [self._finish(line, is_root) for line in self.describe_variable(node, outcome)]

    def unary_step(self, node: Unary, operand: Outcome, outcome: Outcome, is_root: bool) -> str:
        return self._finish(self.describe_unary(node, operand, outcome), is_root)

    def binary_step(self, node: Binary, left: Outcome, right: Outcome,
                    outcome: Outcome, is_root: bool) -> str:
        return self._finish(self.describe_binary(node, left, right, outcome), is_root)

    @abstractmethod
    def describe_variable(self, node: Variable, outcome: Outcome) -> List[str]:
        """Return at least one line naming the variable."""

    @abstractmethod
    def describe_unary(self, node: Unary, operand: Outcome, outcome: Outcome) -> str:
        pass

    @abstractmethod
    def describe_binary(self, node: Binary, left: Outcome, right: Outcome, outcome: Outcome) -> str:
        pass

    @staticmethod
    def _finish(line: str, is_root: bool) -> str:
        return RESULT_PREFIX + line if is_root else line


class DescriptivePolicy(StepPolicy):
    """
    Describes the structure of the expression without truth values.

        Variable A
        Variable B
        Result: AND of A and B gives A AND B
    """

    name = "describe"

    def describe_variable(self, node: Variable, outcome: Outcome) -> List[str]:
        return [f"Variable {node.name}"]

    def describe_unary(self, node: Unary, operand: Outcome, outcome: Outcome) -> str:
        return f"{node.op.keyword} applied to {operand.operand_text} gives {outcome.text}"

    def describe_binary(self, node: Binary, left: Outcome, right: Outcome, outcome: Outcome) -> str:
        return (f"{node.op.keyword} of {left.operand_text} and {right.operand_text} "
                f"gives {outcome.text}")


class TruthValuePolicy(StepPolicy):
    """
    Reports the truth value of every subexpression under a valuation.

        Variable A is True
        Variable B is False
        Result: A AND B is False (AND of True and False)
    """

    name = "truth"
    requires_valuation = True

    def describe_variable(self, node: Variable, outcome: Outcome) -> List[str]:
        return [f"Variable {node.name} is {outcome.value}"]

    def describe_unary(self, node: Unary, operand: Outcome, outcome: Outcome) -> str:
        return f"{outcome.text} is {outcome.value} ({node.op.keyword} of {operand.value})"

    def describe_binary(self, node: Binary, left: Outcome, right: Outcome, outcome: Outcome) -> str:
        return (f"{outcome.text} is {outcome.value} "
                f"({node.op.keyword} of {left.value} and {right.value})")


POLICIES: Dict[str, Type[StepPolicy]] = {
    DescriptivePolicy.name: DescriptivePolicy,
    TruthValuePolicy.name: TruthValuePolicy,
}


def get_policy(name: str) -> StepPolicy:
    """
    Instantiate a registered policy by name.

    Raises:
        ValueError: If no policy has that name
    """
    try:
        return POLICIES[name]()
    except KeyError:
        raise ValueError(
            f"Unknown step policy {name!r}; choose from {', '.join(sorted(POLICIES))}"
        ) from None
