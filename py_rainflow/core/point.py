"""
Ground points and their neighborhood on a one-dimensional landscape.
"""

from dataclasses import dataclass
from typing import Any, Iterator


@dataclass
class Point:
    """A single segment of terrain with the water standing on it."""

    ground: Any
    water: Any

    @classmethod
    def with_height(cls, h, number_type=float) -> "Point":
        return cls(ground=number_type(h), water=number_type(0.0))

    def height(self):
        """Level of water: dry point height plus the water over it."""
        return self.ground + self.water

    def rain(self, cnt) -> None:
        """Simulate `cnt` amount of water raining on the point."""
        self.water += cnt


def neighbors(idx: int, max_idx: int) -> Iterator[int]:
    """
    Yield the indices adjacent to ``idx`` in a landscape of ``max_idx`` points.

    Index 0 only ever sees index 1. Every other index sees its left
    neighbor and, unless it is the last point, its right neighbor.

    Args:
        idx: Point index
        max_idx: Number of points in the landscape
    """
    if idx > 0:
        yield idx - 1
    elif max_idx > 1:
        yield 1

    if idx == 0:
        return
    if idx < max_idx - 1:
        yield idx + 1
