"""Frozen, identity-less geometry types shared across all layers.

Hit-test paths, tracked instances, and candidates all describe space with
these two types. Coordinates are absolute (global) units unless a method
says otherwise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A position in global coordinates."""

    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle: top-left corner plus size."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.left + self.width

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def center(self) -> Point:
        return Point(self.left + self.width / 2, self.top + self.height / 2)

    def to_local(self, point: Point) -> Point:
        """Translate a global point into this rectangle's local space."""
        return Point(point.x - self.left, point.y - self.top)

    def edges_match(self, other: Rect, tolerance: float) -> bool:
        """True when all four edges are within ``tolerance`` of ``other``."""
        return (
            abs(self.left - other.left) <= tolerance
            and abs(self.top - other.top) <= tolerance
            and abs(self.right - other.right) <= tolerance
            and abs(self.bottom - other.bottom) <= tolerance
        )
