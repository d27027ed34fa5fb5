"""
Planar geometry primitives for the point quad-tree.

Coordinates live in map-point space: the Web Mercator projection of the
world scaled to the square [-1, 1] x [-1, 1].
"""

import math
from typing import NamedTuple, Tuple


class InvalidBoundsError(ValueError):
    """Raised when a rectangle has a minimum greater than its maximum."""


class MapPoint(NamedTuple):
    x: float
    y: float

    def distance_squared_to(self, other: "MapPoint") -> float:
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy


class Bounds:
    """Closed axis-aligned rectangle."""

    __slots__ = ("min_x", "min_y", "max_x", "max_y")

    def __init__(self, min_x: float, min_y: float, max_x: float, max_y: float):
        if any(math.isnan(v) for v in (min_x, min_y, max_x, max_y)):
            raise InvalidBoundsError("Bounds must not contain NaN")
        if min_x > max_x or min_y > max_y:
            raise InvalidBoundsError(
                f"Malformed bounds: min ({min_x}, {min_y}) exceeds max ({max_x}, {max_y})"
            )
        self.min_x = float(min_x)
        self.min_y = float(min_y)
        self.max_x = float(max_x)
        self.max_y = float(max_y)

    @classmethod
    def around(cls, center: MapPoint, radius: float) -> "Bounds":
        """Square of half-width ``radius`` centred on ``center``."""
        return cls(center.x - radius, center.y - radius,
                   center.x + radius, center.y + radius)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)

    @property
    def midpoint(self) -> MapPoint:
        return MapPoint((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def contains(self, point: MapPoint) -> bool:
        return (self.min_x <= point.x <= self.max_x and
                self.min_y <= point.y <= self.max_y)

    def intersects(self, other: "Bounds") -> bool:
        return not (self.max_y < other.min_y or other.max_y < self.min_y or
                    self.max_x < other.min_x or other.max_x < self.min_x)

    def quadrants(self) -> Tuple["Bounds", "Bounds", "Bounds", "Bounds"]:
        """Child bounds ordered top-right, top-left, bottom-right, bottom-left."""
        mid = self.midpoint
        return (
            Bounds(mid.x, mid.y, self.max_x, self.max_y),
            Bounds(self.min_x, mid.y, mid.x, self.max_y),
            Bounds(mid.x, self.min_y, self.max_x, mid.y),
            Bounds(self.min_x, self.min_y, mid.x, mid.y),
        )

    def __eq__(self, other):
        if not isinstance(other, Bounds):
            return NotImplemented
        return self.as_tuple() == other.as_tuple()

    def __hash__(self):
        return hash(self.as_tuple())

    def __repr__(self):
        return f"Bounds({self.min_x}, {self.min_y}, {self.max_x}, {self.max_y})"
