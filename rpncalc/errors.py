# errors.py

"""Recoverable errors raised by the calculator core."""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .commands import OpKind


class CalculatorError(Exception):
    """Base class for calculator errors."""
    pass


class InvalidToken(CalculatorError):
    """Raised when a token cannot be classified as a command."""

    def __init__(self, token: str, reason: str = "invalid token"):
        self.token = token
        self.reason = reason
        super().__init__(f"{reason}: {token!r}" if token else reason)


class DivisionByZero(CalculatorError):
    """Raised when a division is attempted with a zero divisor."""

    def __init__(self, kind: Optional["OpKind"] = None):
        self.kind = kind
        super().__init__("division by zero")
