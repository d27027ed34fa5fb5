"""
Common contract for clustering strategies.

Every strategy keeps its items in insertion order, keyed by identity, and
produces a flat list of clusters for a zoom level on request. Strategies that
maintain a spatial index hook into the add/remove/clear steps.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List

from config import CLUSTERING_CONFIG
from clustering.cluster import StaticCluster
from clustering.geometry import LatLngBounds
from clustering.items import ItemKey, QuadItem

logger = logging.getLogger(__name__)


def validate_zoom(zoom: float) -> float:
    zoom = float(zoom)
    if math.isnan(zoom) or math.isinf(zoom):
        raise ValueError(f"Zoom must be a finite number, got {zoom}")
    min_zoom, max_zoom = CLUSTERING_CONFIG["zoom_range"]
    if not min_zoom <= zoom <= max_zoom:
        raise ValueError(f"Zoom {zoom} outside supported range [{min_zoom}, {max_zoom}]")
    return zoom


class ClusterAlgorithm(ABC):
    name = "base"

    def __init__(self):
        self._quad_items: Dict[ItemKey, QuadItem] = {}

    @property
    def items(self) -> List[Any]:
        """Current items in insertion order."""
        return [quad_item.item for quad_item in self._quad_items.values()]

    def __len__(self) -> int:
        return len(self._quad_items)

    def __contains__(self, item: Any) -> bool:
        return ItemKey(item) in self._quad_items

    def add_item(self, item: Any) -> None:
        key = ItemKey(item)
        if key in self._quad_items:
            return
        quad_item = QuadItem(item)
        self._quad_items[key] = quad_item
        self._index_item(quad_item)

    def add_items(self, items: Iterable[Any]) -> None:
        for item in items:
            self.add_item(item)

    def remove_item(self, item: Any) -> bool:
        quad_item = self._quad_items.pop(ItemKey(item), None)
        if quad_item is None:
            return False
        self._unindex_item(quad_item)
        return True

    def remove_items(self) -> None:
        """Drop every item."""
        self._quad_items = {}
        self._clear_index()

    def remove_items_not_in_rectangle(self, min_lat: float, min_lng: float,
                                      max_lat: float, max_lng: float) -> int:
        """Keep only items inside the closed rectangle; returns how many were dropped."""
        bounds = LatLngBounds(min_lat, min_lng, max_lat, max_lng)
        outside = [quad_item for quad_item in self._quad_items.values()
                   if not bounds.contains(quad_item.position)]
        for quad_item in outside:
            del self._quad_items[quad_item.key]
            self._unindex_item(quad_item)

        logger.debug("Removed %d items outside %s, %d remain",
                     len(outside), bounds, len(self._quad_items))
        return len(outside)

    @abstractmethod
    def get_clusters(self, zoom: float) -> List[StaticCluster]:
        """Partition the current items into clusters for ``zoom``."""

    def _index_item(self, quad_item: QuadItem) -> None:
        pass

    def _unindex_item(self, quad_item: QuadItem) -> None:
        pass

    def _clear_index(self) -> None:
        pass
