# main.py

"""
Interactive and batch front end for the RPN calculator.

Interactive mode reads lines through prompt_toolkit (history file, keyword
completion) and prints the whole stack after every line. Batch mode reads
lines from stdin without prompting and prints the stack once, when input runs
out or ``quit`` is read. Both report recoverable errors as ``error - ...``
and keep going.
"""

import argparse
import logging
import os
import sys
from typing import Iterable, List, Optional, TextIO

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory
from pydantic import ValidationError

from .commands import KEYWORDS
from .config import Settings, load_settings
from .evaluator import LineResult, Outcome, evaluate
from .stack import SegmentedStack

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

HELP_TEXT = """
RPN Calculator Help
-------------------
Enter numbers and operators separated by spaces. Operators follow their operands.

Numbers:
  3  3.14  .5  -2  +7.5      (no exponents)

Operators:
  +  -  *  /                 apply once to the top two values
  3+  2*  5-                 apply N times
  0+  0*                     apply until one value is left

Keywords:
  drop                       discard the top value
  clear                      empty the stack
  quit                       end the session
  help                       show this message (interactive only)

Examples:
  > 3 4 +
  7.000000
  > 1 2 3 0+
  6.000000
  > 10 0 /
  error - division by zero
""".strip()


def format_stack(values: Iterable[float], precision: int = 6) -> List[str]:
    """Render stack values bottom to top, one fixed-point line each."""
    return [f"{value:.{precision}f}" for value in values]


class REPL:
    """Read-Eval-Print Loop owning one stack for the whole session."""

    PROMPT = '> '

    def __init__(self, settings: Optional[Settings] = None, interactive: bool = True,
                 session=None, stdin: Optional[TextIO] = None):
        self.settings = settings or Settings()
        self.stack = SegmentedStack(self.settings.segment_capacity)
        self.interactive = interactive
        self.stdin = stdin
        self.session = session
        self.completer = WordCompleter(sorted(KEYWORDS) + ['help'])
        if self.interactive and self.session is None:
            history_dir = os.path.dirname(self.settings.history_file)
            if history_dir:
                os.makedirs(history_dir, exist_ok=True)
            self.session = PromptSession(history=FileHistory(self.settings.history_file))

    def print_stack(self) -> None:
        for line in format_stack(self.stack.iterate(), self.settings.precision):
            print(line)

    def process_line(self, line: str) -> LineResult:
        """Evaluate one line and report its errors."""
        result = evaluate(self.stack, line)
        for error in result.errors:
            print(f"error - {error}")
        logger.debug(f"Line {line!r}: {result.outcome.value}, {result.applied} command(s), "
                     f"stack size {self.stack.size()}")
        return result

    def run(self) -> None:
        if self.interactive:
            self.repl_loop()
        else:
            self.batch_loop()

    def repl_loop(self) -> None:
        """Prompt for lines until quit or EOF, printing the stack after each one."""
        while True:
            try:
                line = self.session.prompt(self.PROMPT, completer=self.completer)
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print()
                break
            if line.strip() == 'help':
                print(HELP_TEXT)
                continue
            result = self.process_line(line)
            if result.outcome is Outcome.QUIT_REQUESTED:
                break
            self.print_stack()

    def batch_loop(self) -> None:
        """Evaluate every line of stdin, then print the final stack."""
        stream = self.stdin if self.stdin is not None else sys.stdin
        for raw in stream:
            result = self.process_line(raw.rstrip('\r\n'))
            if result.outcome is Outcome.QUIT_REQUESTED:
                break
        self.print_stack()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rpncalc", description="Reverse Polish Notation calculator.")
    parser.add_argument("-b", "--batch", action="store_true",
                        help="Read lines from stdin without a prompt and print the stack at the end")
    parser.add_argument("--precision", type=int, default=None,
                        help="Decimal places when printing the stack (default: 6)")
    parser.add_argument("--segment-capacity", type=int, default=None,
                        help="Values per stack segment (default: 10)")
    parser.add_argument("--log-level", default=None,
                        help="Logging level: DEBUG, INFO, WARNING, ERROR or CRITICAL")
    parser.add_argument("--env-file", default=None,
                        help="Read RPNCALC_* settings from this file instead of the nearest .env")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings(
            env_file=args.env_file,
            precision=args.precision,
            segment_capacity=args.segment_capacity,
            log_level=args.log_level,
        )
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=settings.log_level_number, format=LOG_FORMAT)
    logger.debug(f"Starting {'batch' if args.batch else 'interactive'} session with {settings!r}")

    if not args.batch:
        print("RPN calculator. Type 'help' for help, 'quit' or Ctrl-D to exit.")
    repl = REPL(settings, interactive=not args.batch)
    repl.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
