"""
Cluster manager.

Ties a clustering strategy to a map view and a renderer. Mutations are passed
straight to the strategy and never trigger clustering by themselves; the host
calls ``cluster`` (or ``on_camera_changed`` from its camera notifications)
when it wants fresh clusters on screen.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional

from clustering.algorithm import ClusterAlgorithm
from clustering.cluster import StaticCluster

logger = logging.getLogger(__name__)


class ClusterRenderer(ABC):
    @abstractmethod
    def render_clusters(self, clusters: List[StaticCluster]) -> None:
        """Replace whatever is on the map with ``clusters``."""

    @abstractmethod
    def update(self) -> None:
        """Refresh the current clusters after a camera move at the same zoom."""


def integral_zoom(zoom: float) -> float:
    """Round a camera zoom to the nearest whole level."""
    return float(math.floor(zoom + 0.5))


class ClusterManager:
    def __init__(self, map_view: Any, algorithm: ClusterAlgorithm, renderer: ClusterRenderer):
        """
        Args:
            map_view: Object exposing the current camera ``zoom``
            algorithm: Clustering strategy that owns the items
            renderer: Receives every freshly computed cluster list
        """
        self._map_view = map_view
        self._algorithm = algorithm
        self._renderer = renderer
        self._previous_zoom: Optional[float] = None

    @property
    def algorithm(self) -> ClusterAlgorithm:
        return self._algorithm

    @property
    def renderer(self) -> ClusterRenderer:
        return self._renderer

    @property
    def previous_zoom(self) -> Optional[float]:
        """Camera zoom at the last ``cluster`` call, None before the first."""
        return self._previous_zoom

    def add_item(self, item: Any) -> None:
        self._algorithm.add_item(item)

    def add_items(self, items: Iterable[Any]) -> None:
        self._algorithm.add_items(items)

    def remove_item(self, item: Any) -> bool:
        return self._algorithm.remove_item(item)

    def remove_items(self) -> None:
        self._algorithm.remove_items()

    def remove_items_not_in_rectangle(self, min_lat: float, min_lng: float,
                                      max_lat: float, max_lng: float) -> int:
        return self._algorithm.remove_items_not_in_rectangle(min_lat, min_lng, max_lat, max_lng)

    def cluster(self) -> List[StaticCluster]:
        """Recompute clusters at the map's current zoom and hand them to the renderer."""
        zoom = self._map_view.zoom
        clusters = self._algorithm.get_clusters(integral_zoom(zoom))
        self._renderer.render_clusters(clusters)
        self._previous_zoom = zoom
        logger.info("Rendered %d clusters for %d items at zoom %s",
                    len(clusters), len(self._algorithm), zoom)
        return clusters

    def on_camera_changed(self) -> bool:
        """
        Handle a camera move reported by the host.

        Re-clusters when the rounded zoom level changed since the last
        render, otherwise only asks the renderer to refresh. Returns True
        when clusters were recomputed.
        """
        current = integral_zoom(self._map_view.zoom)
        if self._previous_zoom is None or integral_zoom(self._previous_zoom) != current:
            self.cluster()
            return True
        self._renderer.update()
        return False
