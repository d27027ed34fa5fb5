from typing import List

from config import CLUSTERING_CONFIG
from clustering.algorithm import ClusterAlgorithm, validate_zoom
from clustering.cluster import StaticCluster


class SimpleClusterAlgorithm(ClusterAlgorithm):
    """
    Zoom-independent strategy for demos and renderer testing.

    The first ``cluster_count`` items each seed a cluster at their own
    position; the remaining items are dealt out to those clusters in turn.
    """

    name = "simple"

    def __init__(self, cluster_count: int = None):
        super().__init__()
        if cluster_count is None:
            cluster_count = CLUSTERING_CONFIG["simple_cluster_count"]
        if cluster_count < 1:
            raise ValueError("cluster_count must be at least 1")
        self.cluster_count = cluster_count

    def get_clusters(self, zoom: float) -> List[StaticCluster]:
        validate_zoom(zoom)
        quad_items = list(self._quad_items.values())
        clusters = [StaticCluster(quad_item.position)
                    for quad_item in quad_items[:self.cluster_count]]

        for index, quad_item in enumerate(quad_items):
            clusters[index % self.cluster_count].add_item(quad_item.item)
        return clusters
