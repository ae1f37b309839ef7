# evaluator.py

"""
Line evaluator: classify and execute every token of one input line.

Tokens are applied as soon as they are classified. An invalid token stops the
line where it stands, and whatever the earlier tokens did to the stack is
kept. A division by zero is recorded and the line carries on with the next
token.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from . import executor
from .commands import Clear, Command, Drop, Number, Operator, Quit, classify
from .errors import CalculatorError, DivisionByZero, InvalidToken
from .stack import SegmentedStack

logger = logging.getLogger(__name__)


class Outcome(Enum):
    COMPLETED = 'completed'
    PARTIAL_FAILURE = 'partial_failure'
    QUIT_REQUESTED = 'quit_requested'


@dataclass
class LineResult:
    """What happened to one line: its outcome, recoverable errors, commands applied."""
    outcome: Outcome
    errors: List[CalculatorError] = field(default_factory=list)
    applied: int = 0

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.COMPLETED and not self.errors


def dispatch(stack: SegmentedStack, command: Command) -> None:
    """Execute one non-Quit command against the stack."""
    if isinstance(command, Number):
        stack.push(command.value)
    elif isinstance(command, Operator):
        executor.apply(stack, command.kind, command.repeat)
    elif isinstance(command, Drop):
        stack.pop()
    elif isinstance(command, Clear):
        stack.clear()
    else:
        raise TypeError(f"Cannot dispatch command: {command!r}")


def evaluate(stack: SegmentedStack, line: str) -> LineResult:
    """Evaluate a newline-stripped line against the stack."""
    tokens = line.split()
    if not tokens:
        return LineResult(Outcome.PARTIAL_FAILURE, [InvalidToken('', "empty line")])

    result = LineResult(Outcome.COMPLETED)
    for position, token in enumerate(tokens):
        try:
            command = classify(token)
        except InvalidToken as e:
            logger.info(f"Stopped at token {position} of {len(tokens)}: {e}")
            result.outcome = Outcome.PARTIAL_FAILURE
            result.errors.append(e)
            return result

        if isinstance(command, Quit):
            result.outcome = Outcome.QUIT_REQUESTED
            return result

        try:
            dispatch(stack, command)
        except DivisionByZero as e:
            result.errors.append(e)
        result.applied += 1

    return result
