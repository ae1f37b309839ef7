# stack.py

"""
Segmented operand stack.

Values live in fixed-capacity segments held in an indexed list. A push that
overflows the last segment appends a new one; a pop that empties a trailing
segment releases it right away. Stored values are never moved, so push and
pop stay O(1) without the copy cost of a doubling array.

The first segment is permanent: ``clear()`` only drops the segments after it.
"""

import logging
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_SEGMENT_CAPACITY = 10


class SegmentedStack:
    """Stack of floats stored in a chain of fixed-size segments."""

    def __init__(self, segment_capacity: int = DEFAULT_SEGMENT_CAPACITY):
        if segment_capacity < 1:
            raise ValueError(f"segment capacity must be at least 1, got {segment_capacity}")
        self.segment_capacity = segment_capacity
        self._segments: List[List[float]] = [self._new_segment()]
        # filled slots in the last segment
        self._top = 0
        self._count = 0

    def _new_segment(self) -> List[float]:
        return [0.0] * self.segment_capacity

    def push(self, value: float) -> None:
        """Append value, growing by one segment when the last one is full."""
        if self._top == self.segment_capacity:
            self._segments.append(self._new_segment())
            self._top = 0
            logger.debug(f"Allocated segment {len(self._segments)} at count {self._count}")
        self._segments[-1][self._top] = value
        self._top += 1
        self._count += 1

    def pop(self) -> Optional[float]:
        """Remove and return the most recent value, or None if the stack is empty."""
        if self._count == 0:
            return None
        self._top -= 1
        value = self._segments[-1][self._top]
        self._count -= 1
        if self._top == 0 and len(self._segments) > 1:
            self._segments.pop()
            self._top = self.segment_capacity
            logger.debug(f"Released segment {len(self._segments) + 1} at count {self._count}")
        return value

    def size(self) -> int:
        return self._count

    def clear(self) -> None:
        """Drop every segment after the first and empty the first one."""
        released = len(self._segments) - 1
        del self._segments[1:]
        self._top = 0
        self._count = 0
        if released:
            logger.debug(f"Cleared stack, released {released} segment(s)")

    def iterate(self) -> Iterator[float]:
        """Yield the stored values bottom to top without modifying the stack."""
        last = len(self._segments) - 1
        for index, segment in enumerate(self._segments):
            filled = self._top if index == last else self.segment_capacity
            for slot in range(filled):
                yield segment[slot]

    @property
    def segment_count(self) -> int:
        return len(self._segments)

    def __len__(self) -> int:
        return self._count

    def __iter__(self) -> Iterator[float]:
        return self.iterate()

    def __repr__(self) -> str:
        return f"SegmentedStack({list(self.iterate())!r}, segment_capacity={self.segment_capacity})"
