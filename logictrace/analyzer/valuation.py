"""
Truth-value bindings for propositional variables.

A `Valuation` maps variable names to booleans. It is read-only during
evaluation, so one valuation can be shared by evaluations running in
parallel.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from ..lexer.tokens import SourceLocation
from .errors import create_unbound_variable_error

TRUE_SPELLINGS = frozenset({"1", "true", "t", "yes", "on"})
FALSE_SPELLINGS = frozenset({"0", "false", "f", "no", "off"})


def parse_truth_value(text: str) -> bool:
    """Parse 1/0, true/false, t/f, yes/no or on/off (any case)."""
    lowered = text.strip().lower()
    if lowered in TRUE_SPELLINGS:
        return True
    if lowered in FALSE_SPELLINGS:
        return False
    raise ValueError(f"Not a truth value: {text!r}")


class Valuation:
    """Variable name to truth value bindings."""

    def __init__(self, bindings: Optional[Mapping[str, bool]] = None):
        self._bindings: Dict[str, bool] = {}
        for name, value in (bindings or {}).items():
            self.bind(name, value)

    @classmethod
    def from_assignments(cls, assignments: Iterable[str]) -> 'Valuation':
        """
        Build a valuation from `NAME=VALUE` strings.

        Raises:
            ValueError: If an assignment is malformed
        """
        valuation = cls()
        for assignment in assignments:
            name, sep, value = assignment.partition("=")
            if not sep or not name.strip():
                raise ValueError(f"Expected NAME=VALUE, got {assignment!r}")
            valuation.bind(name.strip(), parse_truth_value(value))
        return valuation

    def bind(self, name: str, value: bool):
        if not isinstance(value, bool):
            raise TypeError(f"Truth value for {name!r} must be a bool, got {type(value).__name__}")
        self._bindings[name] = value

    def lookup(self, name: str, location: Optional[SourceLocation] = None) -> bool:
        """
        Look up a variable's truth value.

        Raises:
            EvaluationError: If the variable is unbound
        """
        try:
            return self._bindings[name]
        except KeyError:
            raise create_unbound_variable_error(name, location, list(self._bindings)) from None

    def is_bound(self, name: str) -> bool:
        return name in self._bindings

    def names(self) -> List[str]:
        return list(self._bindings)

    def items(self) -> List[Tuple[str, bool]]:
        return list(self._bindings.items())

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Valuation):
            return NotImplemented
        return self._bindings == other._bindings

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={int(value)}" for name, value in self._bindings.items())
        return f"Valuation({inner})"
