"""
Test suite for the batch driver and command-line interface.

Tests cover:
- Output layout and blank-line handling
- Fatal failures naming the line number
- Ordered output with a thread pool
- CLI exit codes
"""

import contextlib
import io
import os
import sys
import tempfile
import unittest

from logictrace.batch import BATCH_ERROR_CODES, BatchError, format_block, process_file
from logictrace.cli import main
from logictrace.config import BatchConfiguration, EngineConfiguration


class BatchTestCase(unittest.TestCase):
    """Creates a scratch directory with input and output paths."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.input_path = os.path.join(self._tmp.name, "input.txt")
        self.output_path = os.path.join(self._tmp.name, "output.txt")

    def tearDown(self):
        self._tmp.cleanup()

    def write_input(self, text: str):
        with open(self.input_path, "w", encoding="utf-8") as f:
            f.write(text)

    def read_output(self) -> str:
        with open(self.output_path, encoding="utf-8") as f:
            return f.read()


class TestProcessFile(BatchTestCase):
    """Test cases for process_file()."""

    def test_output_layout(self):
        self.write_input("A AND B\n\n   \nNOT A\n")

        report = process_file(self.input_path, self.output_path)

        self.assertEqual(self.read_output(), (
            "Expression: A AND B\n"
            "  Variable A\n"
            "  Variable B\n"
            "  Result: AND of A and B gives A AND B\n"
            "\n"
            "Expression: NOT A\n"
            "  Variable A\n"
            "  Result: NOT applied to A gives NOT A\n"
            "\n"
        ))
        self.assertEqual(report.lines_read, 4)
        self.assertEqual(report.expressions, 2)
        self.assertEqual(report.blank_lines, 2)
        self.assertEqual(report.steps_written, 5)

    def test_empty_input(self):
        self.write_input("\n\n")
        report = process_file(self.input_path, self.output_path)
        self.assertEqual(report.expressions, 0)
        self.assertEqual(self.read_output(), "")

    def test_failure_is_fatal_and_names_line(self):
        self.write_input("A OR B\n\nA B\nC\n")

        with self.assertRaises(BatchError) as ctx:
            process_file(self.input_path, self.output_path)

        self.assertEqual(ctx.exception.line_number, 3)
        self.assertEqual(ctx.exception.code, "B001")
        self.assertIn(ctx.exception.code, BATCH_ERROR_CODES)
        self.assertTrue(ctx.exception.message.startswith("line 3: Missing connective"))
        self.assertEqual(self.read_output(), format_block("A OR B", [
            "Variable A", "Variable B", "Result: OR of A and B gives A OR B",
        ]))

    def test_lexical_failure_keeps_location(self):
        self.write_input("A & 7\n")
        with self.assertRaises(BatchError) as ctx:
            process_file(self.input_path, self.output_path)
        self.assertEqual(ctx.exception.location.line, 1)
        self.assertEqual(ctx.exception.location.column, 5)

    def test_missing_input_file(self):
        with self.assertRaises(BatchError) as ctx:
            process_file(os.path.join(self._tmp.name, "missing.txt"), self.output_path)
        self.assertEqual(ctx.exception.code, "B002")
        self.assertIn(ctx.exception.code, BATCH_ERROR_CODES)

    def test_unwritable_output(self):
        self.write_input("A\n")
        with self.assertRaises(BatchError) as ctx:
            process_file(self.input_path, self._tmp.name)
        self.assertEqual(ctx.exception.code, "B002")

    def test_jobs_preserve_order(self):
        lines = [f"X{i} AND (Y{i} OR NOT Z{i})" for i in range(25)]
        self.write_input("\n".join(lines) + "\n")

        process_file(self.input_path, self.output_path)
        sequential = self.read_output()
        process_file(self.input_path, self.output_path, BatchConfiguration(jobs=4))

        self.assertEqual(self.read_output(), sequential)

    def test_laws_in_batch(self):
        self.write_input("NOT NOT A\n")
        config = BatchConfiguration(engine=EngineConfiguration(apply_laws=True))
        process_file(self.input_path, self.output_path, config)
        self.assertEqual(self.read_output(), (
            "Expression: NOT NOT A\n"
            "  Double Negation Law: NOT NOT A becomes A\n"
            "  Result: Variable A\n"
            "\n"
        ))

    def test_deep_expression_becomes_batch_error(self):
        depth = sys.getrecursionlimit() + 100
        self.write_input("A\n" + " AND ".join(["B"] * depth) + "\n")
        with self.assertRaises(BatchError) as ctx:
            process_file(self.input_path, self.output_path)
        self.assertEqual(ctx.exception.line_number, 2)
        self.assertEqual(ctx.exception.cause.code, "E004")

    def test_invalid_jobs(self):
        with self.assertRaises(ValueError):
            BatchConfiguration(jobs=0)


class TestCommandLine(BatchTestCase):
    """Test cases for the logictrace command."""

    def run_main(self, *argv):
        stderr = io.StringIO()
        with contextlib.redirect_stderr(stderr):
            code = main(list(argv))
        return code, stderr.getvalue()

    def test_success(self):
        self.write_input("A IMPLIES B\n")
        code, stderr = self.run_main(self.input_path, self.output_path)
        self.assertEqual(code, 0)
        self.assertEqual(stderr, "")
        self.assertIn("Result: IMPLIES of A and B gives A IMPLIES B", self.read_output())

    def test_truth_policy_with_assignments(self):
        self.write_input("A XOR B\n")
        code, _ = self.run_main(self.input_path, self.output_path,
                                "--policy", "truth", "--assign", "A=1", "-a", "B=1")
        self.assertEqual(code, 0)
        self.assertIn("Result: A XOR B is False (XOR of True and True)", self.read_output())

    def test_distribute_implies_laws(self):
        self.write_input("A AND (B OR C)\n")
        code, _ = self.run_main(self.input_path, self.output_path, "--distribute")
        self.assertEqual(code, 0)
        self.assertIn("Distributive Law: ", self.read_output())

    def test_commute_implies_laws(self):
        self.write_input("B OR A\n")
        code, _ = self.run_main(self.input_path, self.output_path, "--commute")
        self.assertEqual(code, 0)
        self.assertIn("Commutative Law: B OR A becomes A OR B", self.read_output())

    def test_deeply_nested_expression_exits_one(self):
        self.write_input("NOT " * (sys.getrecursionlimit() + 100) + "A\n")
        code, stderr = self.run_main(self.input_path, self.output_path)
        self.assertEqual(code, 1)
        self.assertTrue(stderr.startswith("error: line 1: Expression nested too deeply"))
        self.assertNotIn("Traceback", stderr)

    def test_wrong_argument_count(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(self.input_path)
        self.assertEqual(ctx.exception.code, 2)

    def test_expression_error_exits_one(self):
        self.write_input("A AND\n")
        code, stderr = self.run_main(self.input_path, self.output_path)
        self.assertEqual(code, 1)
        self.assertTrue(stderr.startswith("error: line 1: Unexpected end of input"))

    def test_bad_assignment_exits_one(self):
        self.write_input("A\n")
        code, stderr = self.run_main(self.input_path, self.output_path, "--assign", "A")
        self.assertEqual(code, 1)
        self.assertTrue(stderr.startswith("error: Expected NAME=VALUE"))

    def test_missing_input_exits_one(self):
        code, stderr = self.run_main(os.path.join(self._tmp.name, "nope.txt"), self.output_path)
        self.assertEqual(code, 1)
        self.assertIn("Cannot read input file", stderr)


if __name__ == '__main__':
    unittest.main()
