"""
Test suite for the logical-law rewriting pass.

Tests cover:
- Each law firing once on its own pattern
- Law steps recorded in firing order
- Rewritten trees staying equivalent to their input
- The input tree never being modified
"""

import itertools
import unittest

from logictrace.analyzer import Valuation, truth_value
from logictrace.optimizer import Law, LawRewriter, rewrite
from logictrace.parser import parse_string, render, variables


def assert_equivalent(test: unittest.TestCase, before, after):
    names = variables(before)
    for values in itertools.product([False, True], repeat=len(names)):
        valuation = Valuation(dict(zip(names, values)))
        test.assertEqual(truth_value(before, valuation), truth_value(after, valuation),
                         f"{render(before)} and {render(after)} differ under {valuation}")


class TestLawRewriter(unittest.TestCase):
    """Test cases for individual laws."""

    def test_implication(self):
        result = rewrite(parse_string("A IMPLIES B"))
        self.assertEqual(result.steps, ["Implication Law: A IMPLIES B becomes NOT A OR B"])
        self.assertEqual(result.tree, parse_string("NOT A OR B"))

    def test_biconditional(self):
        result = rewrite(parse_string("A IFF B"))
        self.assertEqual(result.laws, [Law.BICONDITIONAL, Law.IMPLICATION, Law.IMPLICATION])
        self.assertEqual(
            result.steps[0],
            "Biconditional Law: A IFF B becomes (A IMPLIES B) AND (B IMPLIES A)"
        )
        self.assertEqual(result.tree, parse_string("(NOT A OR B) AND (NOT B OR A)"))

    def test_exclusive_or(self):
        result = rewrite(parse_string("A XOR B"))
        self.assertEqual(result.laws, [Law.EXCLUSIVE_OR, Law.DE_MORGAN])
        self.assertEqual(
            result.steps[0],
            "Exclusive Or Law: A XOR B becomes (A OR B) AND NOT (A AND B)"
        )
        self.assertEqual(result.tree, parse_string("(A OR B) AND (NOT A OR NOT B)"))

    def test_double_negation(self):
        result = rewrite(parse_string("NOT NOT A"))
        self.assertEqual(result.steps, ["Double Negation Law: NOT NOT A becomes A"])
        self.assertEqual(result.tree, parse_string("A"))

    def test_de_morgan_and_its_dual(self):
        result = rewrite(parse_string("NOT (A AND B)"))
        self.assertEqual(result.steps, ["De Morgan's Law: NOT (A AND B) becomes NOT A OR NOT B"])

        result = rewrite(parse_string("NOT (A OR B)"))
        self.assertEqual(result.tree, parse_string("NOT A AND NOT B"))

    def test_de_morgan_then_double_negation(self):
        result = rewrite(parse_string("NOT (NOT A OR B)"))
        self.assertEqual(result.laws, [Law.DE_MORGAN, Law.DOUBLE_NEGATION])
        self.assertEqual(result.tree, parse_string("A AND NOT B"))

    def test_distribution_is_opt_in(self):
        tree = parse_string("A AND (B OR C)")
        self.assertFalse(rewrite(tree).changed)

        result = rewrite(tree, distribute=True)
        self.assertEqual(result.laws, [Law.DISTRIBUTIVE])
        self.assertEqual(result.tree, parse_string("(A AND B) OR (A AND C)"))

    def test_distribution_from_the_left(self):
        result = rewrite(parse_string("(A OR B) AND C"), distribute=True)
        self.assertEqual(result.tree, parse_string("(A AND C) OR (B AND C)"))

    def test_commutation_is_opt_in(self):
        tree = parse_string("B AND A")
        self.assertFalse(rewrite(tree).changed)

        result = rewrite(tree, commute=True)
        self.assertEqual(result.steps, ["Commutative Law: B AND A becomes A AND B"])
        self.assertEqual(result.tree, parse_string("A AND B"))

    def test_commutation_leaves_sorted_operands_alone(self):
        for source in ["A OR B", "A AND A", "A OR NOT B"]:
            with self.subTest(source=source):
                self.assertFalse(rewrite(parse_string(source), commute=True).changed)

    def test_commutation_after_implication(self):
        result = rewrite(parse_string("B IMPLIES A"), commute=True)
        self.assertEqual(result.laws, [Law.IMPLICATION, Law.COMMUTATIVE])
        self.assertEqual(result.tree, parse_string("A OR NOT B"))

    def test_nothing_to_rewrite(self):
        tree = parse_string("NOT A OR B AND C")
        result = rewrite(tree)
        self.assertFalse(result.changed)
        self.assertIs(result.tree, tree)

    def test_input_tree_is_not_modified(self):
        tree = parse_string("NOT (A IMPLIES B) IFF C")
        snapshot = render(tree)
        rewrite(tree, distribute=True)
        self.assertEqual(render(tree), snapshot)
        self.assertEqual(tree, parse_string("NOT (A IMPLIES B) IFF C"))

    def test_rewrites_preserve_truth_values(self):
        sources = [
            "A IMPLIES B",
            "A IFF B",
            "A XOR B XOR C",
            "NOT (A AND (B IMPLIES NOT C))",
            "(A OR B) AND (C OR NOT A)",
            "NOT NOT NOT (A IFF B)",
        ]
        for source in sources:
            for distribute, commute in itertools.product((False, True), repeat=2):
                with self.subTest(source=source, distribute=distribute, commute=commute):
                    tree = parse_string(source)
                    assert_equivalent(self, tree, rewrite(tree, distribute, commute).tree)

    def test_fixed_point(self):
        tree = rewrite(parse_string("A IFF (B XOR NOT C)"), distribute=True, commute=True).tree
        self.assertFalse(rewrite(tree, distribute=True, commute=True).changed)

    def test_statistics(self):
        rewriter = LawRewriter()
        rewriter.rewrite(parse_string("A IMPLIES B"))
        rewriter.rewrite(parse_string("NOT NOT A"))
        report = rewriter.get_rewrite_report()
        self.assertEqual(report['statistics']['trees_rewritten'], 2)
        self.assertEqual(report['statistics']['laws_applied'], 2)


if __name__ == '__main__':
    unittest.main()
