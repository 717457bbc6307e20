"""
Batch driver: evaluates every expression in a text file, one per line.

Output layout for each non-blank input line:

    Expression: (A OR B) AND C
      Variable A
      Variable B
      OR of A and B gives A OR B
      Variable C
      Result: AND of (A OR B) and C gives (A OR B) AND C

followed by a blank line. The first failing line stops the run.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from . import engine
from .config import BatchConfiguration
from .lexer.errors import LogicTraceError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class BatchError(LogicTraceError):
    """Raised when a batch run cannot be completed."""

    def __init__(self, message: str, line_number: Optional[int] = None,
                 code: Optional[str] = None, cause: Optional[LogicTraceError] = None):
        location = cause.location if cause is not None else None
        help_text = cause.diagnostic.help_text if cause is not None else None
        suggestions = cause.diagnostic.suggestions if cause is not None else None
        super().__init__(message, location, code, help_text, suggestions)
        self.line_number = line_number
        self.cause = cause


# Batch error codes for categorization
BATCH_ERROR_CODES = {
    "B001": "Expression failed to evaluate",
    "B002": "Input or output file error",
}


@dataclass
class BatchReport:
    """Summary of a completed batch run."""
    input_path: Path
    output_path: Path
    lines_read: int = 0
    expressions: int = 0
    steps_written: int = 0

    @property
    def blank_lines(self) -> int:
        return self.lines_read - self.expressions


def read_expressions(input_path: PathLike) -> Tuple[int, List[Tuple[int, str]]]:
    """
    Read the input file.

    Returns:
        Total line count and the (line number, text) pairs of non-blank lines

    Raises:
        BatchError: If the file cannot be read
    """
    try:
        with open(input_path, encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise BatchError(f"Cannot read input file {input_path}: {e}", code="B002") from e

    expressions = [(number, line.strip()) for number, line in enumerate(lines, start=1)
                   if line.strip()]
    return len(lines), expressions


def _evaluate_line(item: Tuple[int, str], input_path: PathLike,
                   config: BatchConfiguration) -> List[str]:
    number, text = item
    try:
        with engine.evaluate(text, config.engine, filename=str(input_path), line=number) as result:
            return result.descriptions()
    except LogicTraceError as e:
        raise BatchError(f"line {number}: {e.message}", line_number=number,
                         code="B001", cause=e) from e


def _traces(expressions: List[Tuple[int, str]], input_path: PathLike,
            config: BatchConfiguration) -> Iterator[List[str]]:
    if config.jobs == 1 or len(expressions) < 2:
        for item in expressions:
            yield _evaluate_line(item, input_path, config)
        return

    with ThreadPoolExecutor(max_workers=config.jobs) as pool:
        # map() yields in submission order, so output order matches input
        yield from pool.map(lambda item: _evaluate_line(item, input_path, config), expressions)


def format_block(text: str, steps: List[str], config: Optional[BatchConfiguration] = None) -> str:
    """Format one expression and its steps as written to the output file."""
    config = config or BatchConfiguration()
    lines = [f"{config.expression_prefix}{text}"]
    lines.extend(f"{config.indent}{step}" for step in steps)
    return "\n".join(lines) + "\n\n"


def process_file(input_path: PathLike, output_path: PathLike,
                 config: Optional[BatchConfiguration] = None) -> BatchReport:
    """
    Evaluate every non-blank line of `input_path` and write the traces.

    Blocks are written as they complete; if a line fails, the blocks of the
    lines before it remain in the output.

    Raises:
        BatchError: On the first failing expression (naming its line
            number) or on any file error
    """
    config = config or BatchConfiguration()
    report = BatchReport(Path(input_path), Path(output_path))

    report.lines_read, expressions = read_expressions(input_path)
    logger.info("Read %d expressions from %s", len(expressions), input_path)

    try:
        with open(output_path, "w", encoding="utf-8") as out:
            for (_, text), steps in zip(expressions, _traces(expressions, input_path, config)):
                out.write(format_block(text, steps, config))
                report.expressions += 1
                report.steps_written += len(steps)
    except OSError as e:
        raise BatchError(f"Cannot write output file {output_path}: {e}", code="B002") from e

    logger.info("Wrote %d expressions (%d steps) to %s",
                report.expressions, report.steps_written, output_path)
    return report
