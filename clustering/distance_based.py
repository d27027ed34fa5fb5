"""
Non-hierarchical distance-based clustering.

Items are visited in insertion order. Each item not yet claimed seeds a new
cluster positioned at the seed itself and claims every unclaimed item within
the zoom's search radius of it. Claimed items extend the search in turn, so
a cluster is the group of items linked by gaps no wider than the radius and
items in different clusters are always farther apart than the radius. Claimed
items are never reconsidered; the result is reproducible for a given
insertion order.

With ``single_link`` disabled only the seed searches, which keeps every
member within the radius of the cluster position but lets neighbouring
clusters come closer than the radius.

The threshold is given in screen points and converted to map-point units for
the requested zoom: the world is ``tile_size_points * 2 ** zoom`` points wide
on screen and ``map_point_width`` units wide in map-point space.
"""

import logging
from typing import List, Set

from config import CLUSTERING_CONFIG
from clustering.algorithm import ClusterAlgorithm, validate_zoom
from clustering.cluster import StaticCluster
from clustering.items import ItemKey, QuadItem
from quadtree import Bounds, PointQuadTree

logger = logging.getLogger(__name__)


class NonHierarchicalDistanceBasedAlgorithm(ClusterAlgorithm):
    name = "distance"

    def __init__(self, max_distance_points: float = None, single_link: bool = None):
        super().__init__()
        if max_distance_points is None:
            max_distance_points = CLUSTERING_CONFIG["max_distance_points"]
        if single_link is None:
            single_link = CLUSTERING_CONFIG["single_link"]
        if max_distance_points < 0:
            raise ValueError("max_distance_points must not be negative")

        self.max_distance_points = max_distance_points
        self.single_link = single_link
        self._quad_tree = PointQuadTree()

    @property
    def quad_tree(self) -> PointQuadTree:
        return self._quad_tree

    def search_radius(self, zoom: float) -> float:
        """Clustering threshold in map-point units at ``zoom``."""
        zoom = validate_zoom(zoom)
        world_width_points = CLUSTERING_CONFIG["tile_size_points"] * 2.0 ** zoom
        return self.max_distance_points * CLUSTERING_CONFIG["map_point_width"] / world_width_points

    def rebuild_index(self) -> None:
        self._quad_tree.rebuild()

    def get_clusters(self, zoom: float) -> List[StaticCluster]:
        radius = self.search_radius(zoom)
        if radius <= 0:
            clusters = []
            for quad_item in self._quad_items.values():
                cluster = StaticCluster(quad_item.position)
                cluster.add_item(quad_item.item)
                clusters.append(cluster)
            return clusters

        radius_squared = radius * radius
        assigned: Set[ItemKey] = set()
        clusters: List[StaticCluster] = []

        for seed in self._quad_items.values():
            if seed.key in assigned:
                continue

            cluster = StaticCluster(seed.position)
            cluster.add_item(seed.item)
            assigned.add(seed.key)

            pending: List[QuadItem] = [seed]
            while pending:
                origin = pending.pop()
                for neighbour in self._quad_tree.search(Bounds.around(origin.point, radius)):
                    if neighbour.key in assigned:
                        continue
                    # Exactly-at-threshold neighbours are in range
                    if neighbour.point.distance_squared_to(origin.point) > radius_squared:
                        continue
                    assigned.add(neighbour.key)
                    cluster.add_item(neighbour.item)
                    if self.single_link:
                        pending.append(neighbour)

            clusters.append(cluster)

        logger.debug("Zoom %s: radius %.3g, %d items -> %d clusters",
                     zoom, radius, len(self._quad_items), len(clusters))
        return clusters

    def _index_item(self, quad_item: QuadItem) -> None:
        self._quad_tree.insert(quad_item.point, quad_item)

    def _unindex_item(self, quad_item: QuadItem) -> None:
        self._quad_tree.remove(quad_item.point, quad_item)

    def _clear_index(self) -> None:
        self._quad_tree.clear()
