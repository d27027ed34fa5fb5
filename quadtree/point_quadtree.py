"""
Bounded point quad-tree.

Leaves hold up to ``bucket_capacity`` entries. Inserting into a full leaf
splits it into four equal quadrants and pushes its entries down, unless the
leaf already sits at ``max_depth``, in which case it simply grows. Deletes
never merge children back together; call ``rebuild`` after heavy churn.

Not thread-safe.
"""

import logging
from typing import Any, Iterator, List, Optional, Tuple

from config import QUADTREE_CONFIG
from quadtree.bounds import Bounds, MapPoint

logger = logging.getLogger(__name__)

# (point, payload)
Entry = Tuple[MapPoint, Any]


class _Node:
    __slots__ = ("entries", "children")

    def __init__(self):
        self.entries: Optional[List[Entry]] = []
        # top-right, top-left, bottom-right, bottom-left
        self.children: Optional[Tuple["_Node", "_Node", "_Node", "_Node"]] = None

    @staticmethod
    def quadrant_index(point: MapPoint, mid: MapPoint) -> int:
        # Points on a split line belong to the left/bottom child
        index = 0 if point.y > mid.y else 2
        if point.x <= mid.x:
            index += 1
        return index

    def insert(self, entry: Entry, bounds: Bounds, depth: int,
               bucket_capacity: int, max_depth: int) -> None:
        if self.children is None and len(self.entries) >= bucket_capacity and depth < max_depth:
            self._split(bounds, depth, bucket_capacity, max_depth)

        if self.children is None:
            self.entries.append(entry)
            return

        index = self.quadrant_index(entry[0], bounds.midpoint)
        self.children[index].insert(entry, bounds.quadrants()[index], depth + 1,
                                    bucket_capacity, max_depth)

    def _split(self, bounds: Bounds, depth: int, bucket_capacity: int, max_depth: int) -> None:
        self.children = (_Node(), _Node(), _Node(), _Node())
        entries, self.entries = self.entries, None
        mid = bounds.midpoint
        quadrants = bounds.quadrants()
        for entry in entries:
            index = self.quadrant_index(entry[0], mid)
            self.children[index].insert(entry, quadrants[index], depth + 1,
                                        bucket_capacity, max_depth)

    def remove(self, point: MapPoint, payload: Any, bounds: Bounds) -> bool:
        node = self
        while node.children is not None:
            index = self.quadrant_index(point, bounds.midpoint)
            node, bounds = node.children[index], bounds.quadrants()[index]

        for i, (_, candidate) in enumerate(node.entries):
            if candidate is payload or candidate == payload:
                del node.entries[i]
                return True
        return False

    def search(self, search_bounds: Bounds, own_bounds: Bounds, results: List[Any]) -> None:
        if self.children is None:
            results.extend(payload for point, payload in self.entries
                           if search_bounds.contains(point))
            return

        for child, child_bounds in zip(self.children, own_bounds.quadrants()):
            if child_bounds.intersects(search_bounds):
                child.search(search_bounds, child_bounds, results)

    def iter_entries(self) -> Iterator[Entry]:
        if self.children is None:
            yield from self.entries
        else:
            for child in self.children:
                yield from child.iter_entries()

    def depth(self) -> int:
        if self.children is None:
            return 0
        return 1 + max(child.depth() for child in self.children)


class PointQuadTree:
    def __init__(self, bounds: Bounds = None, bucket_capacity: int = None,
                 max_depth: int = None):
        if bounds is None:
            bounds = Bounds(*QUADTREE_CONFIG["bounds"])
        if bucket_capacity is None:
            bucket_capacity = QUADTREE_CONFIG["bucket_capacity"]
        if max_depth is None:
            max_depth = QUADTREE_CONFIG["max_depth"]
        if bucket_capacity < 1:
            raise ValueError("bucket_capacity must be at least 1")
        if max_depth < 0:
            raise ValueError("max_depth must not be negative")

        self.bounds = bounds
        self.bucket_capacity = bucket_capacity
        self.max_depth = max_depth
        self._root = _Node()
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    def __len__(self) -> int:
        return self._count

    def insert(self, point: Tuple[float, float], payload: Any) -> bool:
        """
        Add ``payload`` at ``point``.

        Returns False without storing anything when the point lies outside
        the tree bounds.
        """
        point = MapPoint(*point)
        if not self.bounds.contains(point):
            logger.debug("Rejected point %s outside quad-tree bounds %s", point, self.bounds)
            return False
        self._root.insert((point, payload), self.bounds, 0,
                          self.bucket_capacity, self.max_depth)
        self._count += 1
        return True

    def remove(self, point: Tuple[float, float], payload: Any) -> bool:
        """Remove the entry for ``payload`` stored at ``point``; False if absent."""
        point = MapPoint(*point)
        if not self.bounds.contains(point):
            return False
        removed = self._root.remove(point, payload, self.bounds)
        if removed:
            self._count -= 1
        return removed

    def clear(self) -> None:
        self._root = _Node()
        self._count = 0

    def search(self, search_bounds: Bounds) -> List[Any]:
        """Payloads of every entry inside the closed rectangle ``search_bounds``."""
        results: List[Any] = []
        if search_bounds.intersects(self.bounds):
            self._root.search(search_bounds, self.bounds, results)
        return results

    def entries(self) -> List[Entry]:
        return list(self._root.iter_entries())

    def depth(self) -> int:
        return self._root.depth()

    def rebuild(self) -> None:
        """Re-insert every entry into a fresh root, dropping empty subtrees."""
        entries = self.entries()
        old_depth = self.depth()
        self._root = _Node()
        for entry in entries:
            self._root.insert(entry, self.bounds, 0, self.bucket_capacity, self.max_depth)
        logger.debug("Rebuilt quad-tree with %d entries (depth %d -> %d)",
                     len(entries), old_depth, self.depth())
