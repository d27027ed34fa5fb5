"""
Map Point Clustering Module

Groups geo-located items into clusters for the current map zoom level.
Strategies share one contract and can be swapped when the manager is built.

Main Components:
- geometry.py: LatLng points and their Mercator map-point projection
- items.py: identity-tracked item wrappers stored in the spatial index
- distance_based.py: non-hierarchical distance-based clustering over a quad-tree
- grid_based.py: fixed grid clustering
- simple.py: round-robin clustering for demos
- manager.py: ties a strategy to a map view and a renderer
- export.py: JSON and DataFrame export of cluster results

Usage:
    from clustering import ClusterManager, NonHierarchicalDistanceBasedAlgorithm
    manager = ClusterManager(map_view, NonHierarchicalDistanceBasedAlgorithm(), renderer)
    manager.add_items(items)
    clusters = manager.cluster()
"""

from .geometry import LatLng, LatLngBounds, InvalidCoordinateError, project, unproject
from .items import ItemKey, QuadItem, PointItem
from .cluster import StaticCluster
from .algorithm import ClusterAlgorithm
from .distance_based import NonHierarchicalDistanceBasedAlgorithm
from .grid_based import GridBasedClusterAlgorithm
from .simple import SimpleClusterAlgorithm
from .manager import ClusterManager, ClusterRenderer, integral_zoom
from .export import clusters_to_records, clusters_to_dataframe, export_cluster_results

ALGORITHMS = {
    NonHierarchicalDistanceBasedAlgorithm.name: NonHierarchicalDistanceBasedAlgorithm,
    GridBasedClusterAlgorithm.name: GridBasedClusterAlgorithm,
    SimpleClusterAlgorithm.name: SimpleClusterAlgorithm
}

__version__ = "1.0.0"

__all__ = [
    # Geometry and items
    "LatLng",
    "LatLngBounds",
    "InvalidCoordinateError",
    "project",
    "unproject",
    "ItemKey",
    "QuadItem",
    "PointItem",
    "StaticCluster",

    # Strategies
    "ALGORITHMS",
    "ClusterAlgorithm",
    "NonHierarchicalDistanceBasedAlgorithm",
    "GridBasedClusterAlgorithm",
    "SimpleClusterAlgorithm",

    # Manager
    "ClusterManager",
    "ClusterRenderer",
    "integral_zoom",

    # Export
    "clusters_to_records",
    "clusters_to_dataframe",
    "export_cluster_results"
]
