#!/usr/bin/env python3
"""
Launch Script for Map Point Clustering
Loads points, clusters them for a zoom level and exports the results
"""

import sys
import os
import argparse
import logging
from datetime import datetime
from pathlib import Path

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app.utils.map_utils import FoliumClusterRenderer, MapViewport
from clustering import ALGORITHMS, ClusterManager, clusters_to_dataframe, export_cluster_results
from config import CLUSTERING_CONFIG, DASHBOARD_CONFIG, FILE_PATTERNS, OUTPUT_DIR
from src.data.preprocessing import PointDataLoader, generate_random_points


def setup_logging(log_level=logging.INFO, log_file='clustering.log'):
    """Setup logging configuration"""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )
    return logging.getLogger(__name__)


def build_algorithm(name, max_distance=None, single_link=None, cell_size=None):
    """Create the clustering strategy selected on the command line"""
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}', expected one of: {', '.join(ALGORITHMS)}")

    if name == "distance":
        return ALGORITHMS[name](max_distance_points=max_distance, single_link=single_link)
    if name == "grid":
        return ALGORITHMS[name](grid_cell_size_points=cell_size)
    return ALGORITHMS[name]()


def load_items(input_path=None, random_count=None, seed=None):
    """Load items from a file or generate random ones"""
    logger = logging.getLogger(__name__)
    loader = PointDataLoader()

    if input_path:
        items = loader.load_items(Path(input_path))
    else:
        count = random_count or 1000
        logger.info(f"Generating {count} random points")
        items = loader.dataframe_to_items(generate_random_points(count, seed=seed))

    logger.info(f"Prepared {len(items)} items")
    return items


def run_clustering(args):
    """Run the load -> cluster -> export pipeline"""
    logger = logging.getLogger(__name__)

    items = load_items(args.input, args.random, args.seed)
    algorithm = build_algorithm(args.algorithm, args.max_distance, args.single_link, args.cell_size)

    viewport = MapViewport(center=args.center, zoom=args.zoom)
    renderer = FoliumClusterRenderer(viewport)
    manager = ClusterManager(viewport, algorithm, renderer)
    manager.add_items(items)

    if args.viewport:
        removed = manager.remove_items_not_in_rectangle(*args.viewport)
        logger.info(f"Removed {removed} items outside the viewport")

    start_time = datetime.now()
    clusters = manager.cluster()
    duration = datetime.now() - start_time
    logger.info(f"Clustering completed in {duration}")

    summary = clusters_to_dataframe(clusters)
    logger.info(f"{len(clusters)} clusters, largest: {summary['count'].max() if len(summary) else 0} items")
    print(summary.head(args.top).to_string(index=False))

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    if args.json:
        export_cluster_results(clusters, args.zoom, algorithm.name, output_dir=args.output_dir)
    if args.html:
        output_dir = Path(args.output_dir) if args.output_dir else OUTPUT_DIR
        output_dir.mkdir(parents=True, exist_ok=True)
        filename = FILE_PATTERNS["cluster_map"].format(
            algorithm=algorithm.name, zoom=args.zoom, timestamp=timestamp
        )
        path = renderer.export_map_to_html(str(output_dir / filename))
        logger.info(f"Cluster map saved to {path}")

    return clusters


def build_parser():
    parser = argparse.ArgumentParser(
        description="Cluster geo-located points for a map zoom level"
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--input",
        help="CSV or JSON file with latitude/longitude columns"
    )
    source.add_argument(
        "--random",
        type=int,
        default=None,
        help="Generate this many random points instead of reading a file"
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for generated points (default: from config)"
    )

    parser.add_argument(
        "--zoom",
        type=float,
        default=DASHBOARD_CONFIG["map_zoom"],
        help=f"Map zoom level (default: {DASHBOARD_CONFIG['map_zoom']})"
    )

    parser.add_argument(
        "--center",
        type=float,
        nargs=2,
        metavar=("LAT", "LNG"),
        default=None,
        help="Map centre for the HTML output"
    )

    parser.add_argument(
        "--algorithm",
        choices=sorted(ALGORITHMS),
        default=CLUSTERING_CONFIG["default_algorithm"],
        help="Clustering strategy (default: from config)"
    )

    parser.add_argument(
        "--max-distance",
        type=float,
        default=None,
        help="Clustering distance in screen points for the distance algorithm"
    )

    parser.add_argument(
        "--single-link",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Chain clusters through every member, not only the seed (default: from config)"
    )

    parser.add_argument(
        "--cell-size",
        type=float,
        default=None,
        help="Grid cell size in screen points for the grid algorithm"
    )

    parser.add_argument(
        "--viewport",
        type=float,
        nargs=4,
        metavar=("MIN_LAT", "MIN_LNG", "MAX_LAT", "MAX_LNG"),
        default=None,
        help="Drop items outside this rectangle before clustering"
    )

    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="Number of clusters to print (default: 10)"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Export cluster results to JSON"
    )

    parser.add_argument(
        "--html",
        action="store_true",
        help="Export a folium map of the clusters"
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory for exported files (default: from config)"
    )

    parser.add_argument(
        "--log-file",
        default="clustering.log",
        help="Log file path, empty to log to stdout only (default: clustering.log)"
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )

    return parser


def main(argv=None):
    """Main function"""
    args = build_parser().parse_args(argv)

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logger = setup_logging(log_level, args.log_file)

    try:
        run_clustering(args)
        logger.info("Operation completed successfully!")
        return 0
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Clustering failed: {str(e)}")
        return 1
    except KeyboardInterrupt:
        logger.info("Operation interrupted by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
