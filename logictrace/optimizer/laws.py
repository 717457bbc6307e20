"""
Logical-Law Rewriting Pass
==========================

Rewrites an expression tree into an equivalent one using the classical
equivalence laws, recording every rewrite as a law step.

Laws:
- Implication: A IMPLIES B becomes NOT A OR B
- Biconditional: A IFF B becomes (A IMPLIES B) AND (B IMPLIES A)
- Exclusive or: A XOR B becomes (A OR B) AND NOT (A AND B)
- Double negation: NOT NOT A becomes A
- De Morgan: NOT (A AND B) becomes NOT A OR NOT B, and the dual
- Distributive (opt-in): A AND (B OR C) becomes (A AND B) OR (A AND C)
- Commutative (opt-in): operands of AND and OR are put in sorted order,
  so B AND A becomes A AND B

The pass works bottom-up and never mutates its input; rewritten nodes are
fresh and are normalised again until no law fires.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..parser.ast_nodes import Binary, Connective, Node, Unary, Variable, render
from ..analyzer.errors import create_malformed_tree_error

logger = logging.getLogger(__name__)


class Law(Enum):
    """Equivalence laws known to the rewriter, in the order they are tried."""
    IMPLICATION = "Implication Law"
    BICONDITIONAL = "Biconditional Law"
    EXCLUSIVE_OR = "Exclusive Or Law"
    DOUBLE_NEGATION = "Double Negation Law"
    DE_MORGAN = "De Morgan's Law"
    DISTRIBUTIVE = "Distributive Law"
    COMMUTATIVE = "Commutative Law"


@dataclass
class RewriteResult:
    """Rewritten tree plus one description per law application."""
    tree: Node
    steps: List[str] = field(default_factory=list)
    laws: List[Law] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.steps)


def _not(node: Node, like: Node) -> Unary:
    return Unary(Connective.NOT, node, span=like.span)


def _binary(op: Connective, left: Node, right: Node, like: Node) -> Binary:
    return Binary(op, left, right, span=like.span)


def _implication(node: Node) -> Optional[Node]:
    if isinstance(node, Binary) and node.op is Connective.IMPLIES:
        return _binary(Connective.OR, _not(node.left, node), node.right, node)
    return None


def _biconditional(node: Node) -> Optional[Node]:
    if isinstance(node, Binary) and node.op is Connective.IFF:
        forward = _binary(Connective.IMPLIES, node.left, node.right, node)
        backward = _binary(Connective.IMPLIES, node.right, node.left, node)
        return _binary(Connective.AND, forward, backward, node)
    return None


def _exclusive_or(node: Node) -> Optional[Node]:
    if isinstance(node, Binary) and node.op is Connective.XOR:
        either = _binary(Connective.OR, node.left, node.right, node)
        both = _binary(Connective.AND, node.left, node.right, node)
        return _binary(Connective.AND, either, _not(both, node), node)
    return None


def _double_negation(node: Node) -> Optional[Node]:
    if isinstance(node, Unary) and isinstance(node.operand, Unary):
        return node.operand.operand
    return None


_DE_MORGAN_DUALS = {Connective.AND: Connective.OR, Connective.OR: Connective.AND}


def _de_morgan(node: Node) -> Optional[Node]:
    if not isinstance(node, Unary):
        return None
    inner = node.operand
    if isinstance(inner, Binary) and inner.op in _DE_MORGAN_DUALS:
        return _binary(_DE_MORGAN_DUALS[inner.op],
                       _not(inner.left, inner), _not(inner.right, inner), node)
    return None


def _distributive(node: Node) -> Optional[Node]:
    if not isinstance(node, Binary) or node.op is not Connective.AND:
        return None
    left, right = node.left, node.right
    if isinstance(right, Binary) and right.op is Connective.OR:
        return _binary(Connective.OR,
                       _binary(Connective.AND, left, right.left, node),
                       _binary(Connective.AND, left, right.right, node),
                       node)
    if isinstance(left, Binary) and left.op is Connective.OR:
        return _binary(Connective.OR,
                       _binary(Connective.AND, left.left, right, node),
                       _binary(Connective.AND, left.right, right, node),
                       node)
    return None


def _commutative(node: Node) -> Optional[Node]:
    if not isinstance(node, Binary) or node.op not in _DE_MORGAN_DUALS:
        return None
    # Sorting by rendered text gives each operand pair one fixed order
    if render(node.right) < render(node.left):
        return _binary(node.op, node.right, node.left, node)
    return None


LAW_REWRITES: Dict[Law, Callable[[Node], Optional[Node]]] = {
    Law.IMPLICATION: _implication,
    Law.BICONDITIONAL: _biconditional,
    Law.EXCLUSIVE_OR: _exclusive_or,
    Law.DOUBLE_NEGATION: _double_negation,
    Law.DE_MORGAN: _de_morgan,
    Law.DISTRIBUTIVE: _distributive,
    Law.COMMUTATIVE: _commutative,
}


class LawRewriter:
    """
    Applies equivalence laws to a tree, bottom-up.

    Distribution can grow a tree exponentially, so it only runs when
    `distribute` is set. Commutation reorders operands and only runs when
    `commute` is set.
    """

    def __init__(self, distribute: bool = False, commute: bool = False):
        self.distribute = distribute
        self.commute = commute
        opted_in = {Law.DISTRIBUTIVE: distribute, Law.COMMUTATIVE: commute}
        self.enabled_laws = [law for law in Law if opted_in.get(law, True)]

        # Pass statistics
        self.stats = {
            'trees_rewritten': 0,
            'nodes_visited': 0,
            'laws_applied': 0,
        }

    def rewrite(self, root: Node) -> RewriteResult:
        """
        Rewrite a tree with every enabled law until none applies.

        Raises:
            EvaluationError: If the tree contains a foreign node
        """
        result = RewriteResult(root)
        result.tree = self._normalize(root, result)

        self.stats['trees_rewritten'] += 1
        self.stats['laws_applied'] += len(result.steps)
        logger.debug("Applied %d laws to %s", len(result.steps), render(root))
        return result

    def _normalize(self, node: Node, result: RewriteResult) -> Node:
        self.stats['nodes_visited'] += 1

        if isinstance(node, Variable):
            return node
        if isinstance(node, Unary):
            operand = self._normalize(node.operand, result)
            if operand is not node.operand:
                node = Unary(node.op, operand, span=node.span)
        elif isinstance(node, Binary):
            left = self._normalize(node.left, result)
            right = self._normalize(node.right, result)
            if left is not node.left or right is not node.right:
                node = Binary(node.op, left, right, span=node.span)
        else:
            raise create_malformed_tree_error(node)

        for law in self.enabled_laws:
            rewritten = LAW_REWRITES[law](node)
            if rewritten is not None:
                result.steps.append(f"{law.value}: {render(node)} becomes {render(rewritten)}")
                result.laws.append(law)
                return self._normalize(rewritten, result)

        return node

    def get_rewrite_report(self) -> Dict[str, Any]:
        """Summary of what the pass has done so far."""
        return {
            'pass_name': 'Logical Law Rewriting Pass',
            'distribute': self.distribute,
            'commute': self.commute,
            'statistics': self.stats.copy(),
        }


def rewrite(root: Node, distribute: bool = False, commute: bool = False) -> RewriteResult:
    """Convenience wrapper around LawRewriter."""
    return LawRewriter(distribute=distribute, commute=commute).rewrite(root)
