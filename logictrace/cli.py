"""
Command-line interface.

    logictrace expressions.txt trace.txt
    logictrace expressions.txt trace.txt --policy truth --assign A=1 --assign B=0
    logictrace expressions.txt trace.txt --laws --distribute --jobs 4
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .analyzer.valuation import Valuation
from .batch import process_file
from .config import BatchConfiguration, EngineConfiguration, StepMode
from .lexer.errors import LogicTraceError

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logictrace",
        description="Write step-by-step evaluations of propositional logic expressions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  logictrace input.txt output.txt                         # Describe each expression
  logictrace input.txt output.txt --policy truth -a A=1   # Report truth values
  logictrace input.txt output.txt --laws                  # Rewrite with logical laws first
        """
    )

    parser.add_argument('input', help='File with one expression per line')
    parser.add_argument('output', help='File to write the step traces to')

    parser.add_argument('--policy', choices=[mode.value for mode in StepMode],
                        default=StepMode.DESCRIBE.value,
                        help='Step vocabulary (default: describe)')
    parser.add_argument('-a', '--assign', action='append', default=[], metavar='NAME=VALUE',
                        help='Bind a variable to a truth value; repeatable')
    parser.add_argument('--laws', action='store_true',
                        help='Rewrite with logical laws before evaluating')
    parser.add_argument('--distribute', action='store_true',
                        help='Also apply the distributive law (implies --laws)')
    parser.add_argument('--commute', action='store_true',
                        help='Also sort AND/OR operands with the commutative law (implies --laws)')
    parser.add_argument('-j', '--jobs', type=int, default=1,
                        help='Evaluate lines on this many threads (default: 1)')
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity on stderr (default: WARNING)')
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(levelname)s %(name)s: %(message)s",
                        stream=sys.stderr)

    try:
        valuation = Valuation.from_assignments(args.assign) if args.assign else None
        config = BatchConfiguration(
            jobs=args.jobs,
            engine=EngineConfiguration(
                step_mode=StepMode(args.policy),
                valuation=valuation,
                apply_laws=args.laws or args.distribute or args.commute,
                distribute=args.distribute,
                commute=args.commute,
            ),
        )
        report = process_file(args.input, args.output, config)
    except LogicTraceError as e:
        print(f"error: {e.message}", file=sys.stderr)
        if e.diagnostic.help_text:
            print(f"  help: {e.diagnostic.help_text}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    logger.info("Processed %d expressions from %s", report.expressions, args.input)
    return 0


if __name__ == "__main__":
    sys.exit(main())
