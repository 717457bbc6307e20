"""
Step-trace container.

An `EvaluationResult` owns the ordered steps of one evaluation. The caller
reads or copies what it needs and then releases the result exactly once;
afterwards every access raises `ResultReleasedError`. Using the result as a
context manager releases it on every exit path.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

from .errors import ResultReleasedError, create_empty_trace_error


class StepKind(Enum):
    """What a step describes."""
    VARIABLE = "variable"
    CONNECTIVE = "connective"
    LAW = "law"


@dataclass(frozen=True)
class EvaluationStep:
    """One line of the derivation trace, in emission order."""
    index: int
    description: str
    kind: StepKind
    depth: int = 0

    def __str__(self) -> str:
        return self.description


class EvaluationResult:
    """Ordered, non-empty sequence of steps for one expression."""

    def __init__(self, expression: str, steps: Sequence[EvaluationStep],
                 value: Optional[bool] = None):
        if not steps:
            raise create_empty_trace_error(expression)
        self.expression = expression
        self._steps: Optional[Tuple[EvaluationStep, ...]] = tuple(steps)
        self._value = value

    @property
    def released(self) -> bool:
        return self._steps is None

    @property
    def steps(self) -> Tuple[EvaluationStep, ...]:
        self._ensure_live()
        return self._steps

    @property
    def value(self) -> Optional[bool]:
        """Truth value of the root, when evaluated under a valuation."""
        self._ensure_live()
        return self._value

    @property
    def final_step(self) -> EvaluationStep:
        return self.steps[-1]

    def descriptions(self) -> List[str]:
        """Copy of the step texts, safe to keep after release."""
        return [step.description for step in self.steps]

    def release(self):
        """Release the steps. Calling this twice raises ResultReleasedError."""
        self._ensure_live()
        self._steps = None
        self._value = None

    def _ensure_live(self):
        if self._steps is None:
            raise ResultReleasedError()

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[EvaluationStep]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> EvaluationStep:
        return self.steps[index]

    def __enter__(self) -> 'EvaluationResult':
        self._ensure_live()
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.released:
            self.release()
        return False

    def __repr__(self) -> str:
        if self.released:
            return f"EvaluationResult({self.expression!r}, released)"
        return f"EvaluationResult({self.expression!r}, {len(self._steps)} steps)"
