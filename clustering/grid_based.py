"""
Grid-based clustering.

The world is cut into a square grid whose cells are ``grid_cell_size_points``
screen points wide at the requested zoom. Each non-empty cell becomes one
cluster positioned at the centre of the cell. Linear in the number of items
and needs no spatial index, at the price of splitting close items that fall
on either side of a cell edge.
"""

import logging
import math
from typing import Dict, List, Tuple

from config import CLUSTERING_CONFIG
from clustering.algorithm import ClusterAlgorithm, validate_zoom
from clustering.cluster import StaticCluster
from clustering.geometry import unproject
from quadtree.bounds import MapPoint

logger = logging.getLogger(__name__)


class GridBasedClusterAlgorithm(ClusterAlgorithm):
    name = "grid"

    def __init__(self, grid_cell_size_points: float = None):
        super().__init__()
        if grid_cell_size_points is None:
            grid_cell_size_points = CLUSTERING_CONFIG["grid_cell_size_points"]
        if grid_cell_size_points <= 0:
            raise ValueError("grid_cell_size_points must be positive")
        self.grid_cell_size_points = grid_cell_size_points

    def cell_count(self, zoom: float) -> int:
        """Number of cells along each axis at ``zoom``."""
        zoom = validate_zoom(zoom)
        world_width_points = CLUSTERING_CONFIG["tile_size_points"] * 2.0 ** zoom
        return max(1, int(math.ceil(world_width_points / self.grid_cell_size_points)))

    @staticmethod
    def cell_for(point: MapPoint, num_cells: int) -> Tuple[int, int]:
        col = int(num_cells * (1.0 + point.x) / 2.0)
        row = int(num_cells * (1.0 + point.y) / 2.0)
        # x == 1.0 or y == 1.0 would land one past the last cell
        return (min(col, num_cells - 1), min(row, num_cells - 1))

    @staticmethod
    def cell_center(cell: Tuple[int, int], num_cells: int) -> MapPoint:
        col, row = cell
        return MapPoint((col + 0.5) * 2.0 / num_cells - 1.0,
                        (row + 0.5) * 2.0 / num_cells - 1.0)

    def get_clusters(self, zoom: float) -> List[StaticCluster]:
        num_cells = self.cell_count(zoom)
        clusters: Dict[Tuple[int, int], StaticCluster] = {}

        for quad_item in self._quad_items.values():
            cell = self.cell_for(quad_item.point, num_cells)
            cluster = clusters.get(cell)
            if cluster is None:
                cluster = StaticCluster(unproject(self.cell_center(cell, num_cells)))
                clusters[cell] = cluster
            cluster.add_item(quad_item.item)

        logger.debug("Zoom %s: %dx%d grid, %d items -> %d clusters",
                     zoom, num_cells, num_cells, len(self._quad_items), len(clusters))
        return list(clusters.values())
