"""Plane geometry shared by the game and the map editor."""

from __future__ import annotations

from dataclasses import dataclass

CELL_SIZE = 32
"""Edge length of one map cell in world units."""

COLUMN_COUNT = 100
ROW_COUNT = 100


@dataclass(frozen=True)
class Vec2:
    """An immutable two-dimensional vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> Vec2:
        return Vec2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    width: float
    height: float

    def collides(self, other: Rect) -> bool:
        """Return True if the two rectangles overlap; touching edges do not count."""
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )

    def contains(self, point: Vec2) -> bool:
        """Return True if the point lies inside; the right and bottom edges are outside."""
        return (
            self.x <= point.x < self.x + self.width
            and self.y <= point.y < self.y + self.height
        )


def clamp(value: float, low: float, high: float) -> float:
    """Limit value to the range [low, high]."""
    result = low if value < low else value
    return high if result > high else result