# executor.py

"""Applies a binary operator to the stack, optionally many times over."""

import logging

from .commands import OpKind
from .errors import DivisionByZero
from .stack import SegmentedStack

logger = logging.getLogger(__name__)


def compute(kind: OpKind, x: float, y: float) -> float:
    """Combine x (the former top of stack) with y (the value below it)."""
    if kind is OpKind.ADD:
        return x + y
    elif kind is OpKind.SUBTRACT:
        return y - x
    elif kind is OpKind.MULTIPLY:
        return x * y
    elif kind is OpKind.DIVIDE:
        if x == 0:
            raise DivisionByZero(kind)
        return y / x
    raise ValueError(f"Unknown operator: {kind!r}")


def apply(stack: SegmentedStack, kind: OpKind, repeat: int = 1) -> int:
    """
    Apply ``kind`` to the top two values ``repeat`` times.

    A repeat of 0 runs until a single value (or none) remains. Running out of
    operands ends the loop quietly. A zero divisor raises DivisionByZero and
    abandons the remaining repeats; the two operands already popped for that
    step are not pushed back.

    Returns the number of results pushed.
    """
    if repeat < 0:
        raise ValueError(f"repeat count must be non-negative, got {repeat}")
    times = repeat if repeat else max(stack.size() - 1, 0)

    applied = 0
    for _ in range(times):
        if stack.size() <= 1:
            break
        x = stack.pop()
        y = stack.pop()
        try:
            result = compute(kind, x, y)
        except DivisionByZero:
            logger.info(f"Division by zero after {applied} of {times} application(s) of {kind.value}")
            raise
        stack.push(result)
        applied += 1

    logger.debug(f"Applied {kind.value} {applied} time(s), requested {repeat}")
    return applied
