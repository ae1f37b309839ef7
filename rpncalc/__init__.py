"""Reverse Polish Notation calculator with a segmented operand stack."""

from .commands import Clear, Command, Drop, Number, Operator, OpKind, Quit, classify
from .errors import CalculatorError, DivisionByZero, InvalidToken
from .evaluator import LineResult, Outcome, evaluate
from .executor import apply
from .stack import SegmentedStack

__version__ = "0.1.0"
