"""
Point spatial index.

A bounded quad-tree over map-point coordinates supporting insert, delete,
closed-rectangle range search and constant-time clear.
"""

from .bounds import Bounds, MapPoint, InvalidBoundsError
from .point_quadtree import PointQuadTree

__all__ = [
    "Bounds",
    "MapPoint",
    "InvalidBoundsError",
    "PointQuadTree"
]
