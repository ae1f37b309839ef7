# commands.py

"""
Command model and token classifier.

A token is one whitespace-delimited word of an input line. ``classify`` turns
it into exactly one immutable Command:

    3.14  -2  +.5        Number
    +  -  *  /           Operator applied once
    3+  10*  0/          Operator with a repeat count (0 = until underflow)
    drop  clear  quit    keywords

The checks run in a fixed order because the categories overlap: a leading
sign makes ``-5`` a number while ``-`` alone is an operator, and ``5-`` is a
repeated operator rather than a malformed number.
"""

import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InvalidToken


class OpKind(Enum):
    """Binary operators, valued by their symbol."""
    ADD = '+'
    SUBTRACT = '-'
    MULTIPLY = '*'
    DIVIDE = '/'


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Operator:
    kind: OpKind
    repeat: int = 1


@dataclass(frozen=True)
class Drop:
    pass


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[Number, Operator, Drop, Clear, Quit]

KEYWORDS = {
    'drop': Drop,
    'clear': Clear,
    'quit': Quit,
}

_OPERATOR_CHARS = {kind.value: kind for kind in OpKind}

# Digits with at most one dot, and at least one digit somewhere.
_DECIMAL_RE = re.compile(r'(?:\d+\.?\d*|\.\d+)', re.ASCII)
_INTEGER_RE = re.compile(r'\d+', re.ASCII)

# the stack runs out of operands long before a repeat this large is reached
_MAX_REPEAT_DIGITS = 18


def is_decimal(text: str) -> bool:
    """True for plain unsigned decimals such as '3', '3.', '.5' or '3.14'."""
    return _DECIMAL_RE.fullmatch(text) is not None


def is_integer(text: str) -> bool:
    return _INTEGER_RE.fullmatch(text) is not None


def parse_repeat(digits: str) -> int:
    """Convert a repeat prefix, clamping very long ones to sys.maxsize."""
    digits = digits.lstrip('0') or '0'
    if len(digits) > _MAX_REPEAT_DIGITS:
        return sys.maxsize
    return min(int(digits), sys.maxsize)


def classify(token: str) -> Command:
    """Classify a single token, raising InvalidToken when it fits no form."""
    if not token:
        raise InvalidToken(token, "empty token")

    keyword = KEYWORDS.get(token)
    if keyword is not None:
        return keyword()

    first = token[0]
    if first in '+-':
        if len(token) == 1:
            return Operator(_OPERATOR_CHARS[first], 1)
        if is_decimal(token[1:]):
            return Number(float(token))
        raise InvalidToken(token)

    if first in '*/':
        if len(token) == 1:
            return Operator(_OPERATOR_CHARS[first], 1)
        # no number can start with these, so '*3' is never valid
        raise InvalidToken(token)

    if is_decimal(token):
        return Number(float(token))

    prefix, last = token[:-1], token[-1]
    if last in _OPERATOR_CHARS and is_integer(prefix):
        return Operator(_OPERATOR_CHARS[last], parse_repeat(prefix))

    raise InvalidToken(token)
