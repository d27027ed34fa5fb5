import logging
from typing import List, Tuple

import folium

from config import DASHBOARD_CONFIG
from clustering.cluster import StaticCluster
from clustering.manager import ClusterRenderer

logger = logging.getLogger(__name__)


class MapViewport:
    """Camera state of a folium map: the map-view side of ClusterManager"""

    def __init__(self, center: Tuple[float, float] = None, zoom: float = None):
        self.center = list(center) if center is not None else list(DASHBOARD_CONFIG["map_center"])
        self.zoom = zoom if zoom is not None else DASHBOARD_CONFIG["map_zoom"]

    def move_to(self, center: Tuple[float, float] = None, zoom: float = None) -> None:
        if center is not None:
            self.center = list(center)
        if zoom is not None:
            self.zoom = zoom

    def create_base_map(self) -> folium.Map:
        """Create a base Folium map at the current camera position"""
        return folium.Map(
            location=self.center,
            zoom_start=int(round(self.zoom)),
            tiles=DASHBOARD_CONFIG["tiles"]
        )


class FoliumClusterRenderer(ClusterRenderer):
    def __init__(self, viewport: MapViewport):
        self.viewport = viewport
        self.map_obj = viewport.create_base_map()
        self.map_zoom = viewport.zoom
        self.clusters: List[StaticCluster] = []
        self.render_count = 0

    def render_clusters(self, clusters: List[StaticCluster]) -> None:
        """Redraw the map with one marker per cluster"""
        self.clusters = list(clusters)
        self._draw()
        self.render_count += 1
        logger.debug(f"Rendered {len(self.clusters)} cluster markers")

    def update(self) -> None:
        """Redraw the current markers at the camera's new centre and zoom"""
        self._draw()

    def _draw(self) -> None:
        self.map_obj = self.viewport.create_base_map()
        self.map_zoom = self.viewport.zoom
        layer = folium.FeatureGroup(name="Clusters")

        for cluster in self.clusters:
            location = [cluster.position.latitude, cluster.position.longitude]
            if cluster.count == 1:
                radius = DASHBOARD_CONFIG["item_marker_radius"]
                popup_content = f"{location[0]:.5f}, {location[1]:.5f}"
            else:
                radius = DASHBOARD_CONFIG["cluster_marker_radius"]
                popup_content = f"<b>{cluster.count} items</b>"

            folium.CircleMarker(
                location=location,
                radius=radius,
                popup=folium.Popup(popup_content, max_width=200),
                tooltip=str(cluster.count),
                fill=True
            ).add_to(layer)

        layer.add_to(self.map_obj)
        folium.LayerControl().add_to(self.map_obj)

    def export_map_to_html(self, filename: str) -> str:
        """Export map to HTML file"""
        self.map_obj.save(filename)
        return filename

    def get_map_as_html(self) -> str:
        """Get map as HTML string"""
        return self.map_obj._repr_html_()
