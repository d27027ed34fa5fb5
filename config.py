import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
OUTPUT_DIR = Path(os.environ.get("MAP_CLUSTERING_OUTPUT_DIR", DATA_DIR / "output"))

# Point quad-tree parameters
QUADTREE_CONFIG = {
    "bucket_capacity": 64,  # entries per leaf before it splits
    "max_depth": 30,  # leaves at this depth grow past capacity instead of splitting
    "bounds": (-1.0, -1.0, 1.0, 1.0)  # map-point space (min_x, min_y, max_x, max_y)
}

# Clustering parameters
CLUSTERING_CONFIG = {
    "max_distance_points": 100,  # screen points, distance-based algorithm
    "grid_cell_size_points": 100,  # screen points, grid-based algorithm
    "simple_cluster_count": 10,
    "tile_size_points": 256,  # width of the whole world at zoom 0
    "map_point_width": 2.0,  # width of the whole world in map-point units
    "default_algorithm": "distance",
    "single_link": True,  # grow clusters through every member, not only the seed
    "zoom_range": (-64.0, 64.0)  # accepted zoom levels, keeps 2 ** zoom finite and non-zero
}

# Web Mercator cannot represent the poles; latitudes are clamped to this value
MERCATOR_MAX_LATITUDE = 85.05112877980659

# Full coordinate domain accepted for items
WORLD_BOUNDS = {
    "min_lat": -90.0,
    "max_lat": 90.0,
    "min_lon": -180.0,
    "max_lon": 180.0
}

# Column names used when loading points from tabular files
DATA_CONFIG = {
    "lat_column": "latitude",
    "lon_column": "longitude",
    "random_seed": 42
}

# File naming conventions
FILE_PATTERNS = {
    "cluster_results": "clusters_{algorithm}_z{zoom}_{timestamp}.json",
    "cluster_map": "cluster_map_{algorithm}_z{zoom}_{timestamp}.html"
}

# Map rendering configuration
DASHBOARD_CONFIG = {
    "map_center": [0.0, 0.0],
    "map_zoom": 4,
    "tiles": "OpenStreetMap",
    "cluster_marker_radius": 12,
    "item_marker_radius": 5
}
