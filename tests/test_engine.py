"""
Test suite for the evaluation engine and result lifecycle.

Tests cover:
- Text to trace through the whole pipeline
- Law steps preceding evaluation steps
- Explicit and context-managed release
- Configuration from the environment
- Typed failures for expressions nested too deeply
"""

import sys
import unittest

from logictrace import (
    EngineConfiguration, EvaluationError, LexerError, LogicTraceError, ParseError,
    ResultReleasedError, StepKind, StepMode, Valuation, evaluate, release,
)
from logictrace.analyzer.errors import EVALUATION_ERROR_CODES
from logictrace.lexer.errors import ERROR_CODES
from logictrace.parser.errors import PARSER_ERROR_CODES


class TestEngine(unittest.TestCase):
    """Test cases for evaluate()."""

    def test_default_configuration(self):
        result = evaluate("  (A OR B) AND C  ")
        self.assertEqual(result.expression, "(A OR B) AND C")
        self.assertEqual(len(result), 5)
        self.assertEqual(result.final_step.description,
                         "Result: AND of (A OR B) and C gives (A OR B) AND C")
        release(result)

    def test_truth_mode(self):
        config = EngineConfiguration(step_mode=StepMode.TRUTH,
                                     valuation=Valuation({"A": True, "B": False}))
        with evaluate("A AND B", config) as result:
            self.assertTrue(result.final_step.description.startswith("Result: A AND B is False"))
            self.assertIs(result.value, False)

    def test_truth_mode_without_valuation_reports_unbound(self):
        with self.assertRaises(EvaluationError) as ctx:
            evaluate("A", EngineConfiguration(step_mode="truth"))
        self.assertEqual(ctx.exception.code, "E001")

    def test_law_steps_come_first(self):
        with evaluate("A IMPLIES B", EngineConfiguration(apply_laws=True)) as result:
            self.assertEqual(result.descriptions(), [
                "Implication Law: A IMPLIES B becomes NOT A OR B",
                "Variable A",
                "NOT applied to A gives NOT A",
                "Variable B",
                "Result: OR of NOT A and B gives NOT A OR B",
            ])
            self.assertEqual([s.kind for s in result][:2], [StepKind.LAW, StepKind.VARIABLE])
            self.assertEqual([s.index for s in result], list(range(5)))
            self.assertEqual(result.expression, "A IMPLIES B")

    def test_errors_share_a_base_class(self):
        for source, error in [("A $ B", LexerError), ("A AND", ParseError), ("", ParseError)]:
            with self.subTest(source=source):
                with self.assertRaises(error):
                    evaluate(source)
                with self.assertRaises(LogicTraceError):
                    evaluate(source)

    def test_error_location_uses_filename_and_line(self):
        with self.assertRaises(ParseError) as ctx:
            evaluate("A B", filename="input.txt", line=4)
        self.assertEqual(ctx.exception.location.filename, "input.txt")
        self.assertEqual(ctx.exception.location.line, 4)

    def test_distribute_requires_laws(self):
        with self.assertRaises(ValueError):
            EngineConfiguration(distribute=True)
        with self.assertRaises(ValueError):
            EngineConfiguration(commute=True)

    def test_raised_codes_are_catalogued(self):
        cases = [
            ("A $ B", None, LexerError, ERROR_CODES),
            ("A AND 9", None, LexerError, ERROR_CODES),
            ("A B", None, ParseError, PARSER_ERROR_CODES),
            ("(A", None, ParseError, PARSER_ERROR_CODES),
            ("A AND", None, ParseError, PARSER_ERROR_CODES),
            ("OR A", None, ParseError, PARSER_ERROR_CODES),
            ("", None, ParseError, PARSER_ERROR_CODES),
            ("A", EngineConfiguration(step_mode=StepMode.TRUTH), EvaluationError,
             EVALUATION_ERROR_CODES),
        ]
        for source, config, error, table in cases:
            with self.subTest(source=source):
                with self.assertRaises(error) as ctx:
                    evaluate(source, config)
                self.assertIn(ctx.exception.code, table)


class TestDeepExpressions(unittest.TestCase):
    """Test cases for expressions nested beyond the interpreter's recursion limit."""

    def setUp(self):
        self.depth = sys.getrecursionlimit() + 100

    def test_stacked_negations_fail_to_parse(self):
        with self.assertRaises(ParseError) as ctx:
            evaluate("NOT " * self.depth + "A", filename="input.txt", line=3)
        self.assertEqual(ctx.exception.code, "P011")
        self.assertIn(ctx.exception.code, PARSER_ERROR_CODES)
        self.assertEqual(ctx.exception.location.line, 3)

    def test_long_chain_fails_to_evaluate(self):
        source = " AND ".join(["A"] * self.depth)
        for config in (None, EngineConfiguration(apply_laws=True, commute=True)):
            with self.subTest(config=config):
                with self.assertRaises(EvaluationError) as ctx:
                    evaluate(source, config)
                self.assertEqual(ctx.exception.code, "E004")
                self.assertIn(ctx.exception.code, EVALUATION_ERROR_CODES)

    def test_moderate_nesting_still_evaluates(self):
        with evaluate(" AND ".join(["A"] * 200)) as result:
            self.assertEqual(len(result), 399)


class TestResultLifecycle(unittest.TestCase):
    """Test cases for releasing results."""

    def test_release_then_access_raises(self):
        result = evaluate("A AND B")
        steps = result.descriptions()
        release(result)

        self.assertTrue(result.released)
        self.assertEqual(len(steps), 3)
        with self.assertRaises(ResultReleasedError):
            result.steps
        with self.assertRaises(ResultReleasedError):
            len(result)

    def test_double_release_raises(self):
        result = evaluate("A")
        result.release()
        with self.assertRaises(ResultReleasedError) as ctx:
            result.release()
        self.assertEqual(ctx.exception.code, "E010")

    def test_context_manager_releases_on_error(self):
        result = evaluate("NOT A")
        with self.assertRaises(RuntimeError):
            with result:
                raise RuntimeError("boom")
        self.assertTrue(result.released)

    def test_context_manager_tolerates_release_inside(self):
        with evaluate("A") as result:
            result.release()
        self.assertTrue(result.released)

    def test_results_are_independent(self):
        first = evaluate("A OR B")
        second = evaluate("A OR B")
        first.release()
        self.assertEqual(len(second), 3)
        second.release()


class TestConfigurationFromEnv(unittest.TestCase):
    """Test cases for EngineConfiguration.from_env()."""

    def test_defaults(self):
        config = EngineConfiguration.from_env({})
        self.assertEqual(config.step_mode, StepMode.DESCRIBE)
        self.assertFalse(config.apply_laws)
        self.assertFalse(config.distribute)

    def test_reads_variables(self):
        config = EngineConfiguration.from_env({
            "LOGICTRACE_STEP_MODE": "Truth",
            "LOGICTRACE_APPLY_LAWS": "yes",
        })
        self.assertEqual(config.step_mode, StepMode.TRUTH)
        self.assertTrue(config.apply_laws)

    def test_distribute_turns_laws_on(self):
        config = EngineConfiguration.from_env({"LOGICTRACE_DISTRIBUTE": "1"})
        self.assertTrue(config.apply_laws)
        self.assertTrue(config.distribute)

    def test_commute_turns_laws_on(self):
        config = EngineConfiguration.from_env({"LOGICTRACE_COMMUTE": "on"})
        self.assertTrue(config.apply_laws)
        self.assertTrue(config.commute)
        self.assertFalse(config.distribute)

    def test_rejects_unknown_values(self):
        with self.assertRaises(ValueError):
            EngineConfiguration.from_env({"LOGICTRACE_STEP_MODE": "verbose"})
        with self.assertRaises(ValueError):
            EngineConfiguration.from_env({"LOGICTRACE_APPLY_LAWS": "sometimes"})


if __name__ == '__main__':
    unittest.main()
