"""
Cluster items and their index representation.

Callers own their items; the engine only reads ``item.position``. Items are
tracked by identity, so two distinct items at the same coordinate are still
two items, and an item never needs to be hashable.
"""

from typing import Any, Dict

from clustering.geometry import LatLng, project
from quadtree.bounds import MapPoint


def position_of(item: Any) -> LatLng:
    """Read an item's position, accepting a ``LatLng`` or a (lat, lng) pair."""
    position = item.position
    if isinstance(position, LatLng):
        return position
    if isinstance(position, (tuple, list)) and len(position) == 2:
        return LatLng(*position)
    raise TypeError(f"Item position must be a LatLng, got {type(position).__name__}")


class ItemKey:
    """Dictionary key comparing the wrapped object by identity."""

    __slots__ = ("obj",)

    def __init__(self, obj: Any):
        self.obj = obj

    def __hash__(self):
        return id(self.obj)

    def __eq__(self, other):
        if not isinstance(other, ItemKey):
            return NotImplemented
        return self.obj is other.obj

    def __repr__(self):
        return f"ItemKey({self.obj!r})"


class QuadItem:
    """An item's projected map point plus the key of the item it came from."""

    __slots__ = ("key", "position", "point")

    def __init__(self, item: Any):
        self.key = ItemKey(item)
        self.position = position_of(item)
        self.point: MapPoint = project(self.position)

    @property
    def item(self) -> Any:
        return self.key.obj

    def __eq__(self, other):
        if not isinstance(other, QuadItem):
            return NotImplemented
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return f"QuadItem({self.item!r} at {self.point})"


class PointItem:
    """Ready-made cluster item: a position plus arbitrary caller data."""

    def __init__(self, position: LatLng, data: Dict[str, Any] = None):
        if not isinstance(position, LatLng):
            position = LatLng(*position)
        self.position = position
        self.data = data or {}

    def __repr__(self):
        return f"PointItem({self.position.latitude}, {self.position.longitude})"
