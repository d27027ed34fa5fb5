import unittest
import json
import tempfile
import numpy as np
import pandas as pd
import folium
from pathlib import Path
from unittest.mock import patch
import sys
import os

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from app.utils.map_utils import FoliumClusterRenderer, MapViewport
from config import CLUSTERING_CONFIG
from clustering import (
    ClusterManager,
    NonHierarchicalDistanceBasedAlgorithm,
    PointItem,
    clusters_to_dataframe,
    clusters_to_records,
    export_cluster_results
)
from src.data.preprocessing import PointDataLoader, generate_random_points
import launch


def sample_clusters():
    algorithm = NonHierarchicalDistanceBasedAlgorithm(max_distance_points=100)
    algorithm.add_items([
        PointItem((0.0, 0.0), {"point_id": 0}),
        PointItem((0.0, 0.0001), {"point_id": 1}),
        PointItem((10.0, 10.0), {"point_id": 2})
    ])
    return algorithm.get_clusters(10)


class TestPointDataLoader(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.data_dir = Path(self.temp_dir.name)
        self.loader = PointDataLoader()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_load_csv_drops_bad_rows(self):
        """Test rows with missing or invalid coordinates are dropped"""
        path = self.data_dir / "points.csv"
        pd.DataFrame({
            "latitude": ["40.7", "", "95.0", "abc", "-33.9"],
            "longitude": ["-74.0", "10.0", "0.0", "5.0", "151.2"],
            "name": ["nyc", "missing", "too_far_north", "junk", "sydney"]
        }).to_csv(path, index=False)

        items = self.loader.load_items(path)

        self.assertEqual(len(items), 2)
        self.assertEqual(self.loader.dropped_rows, 3)
        self.assertEqual([item.data["name"] for item in items], ["nyc", "sydney"])
        self.assertAlmostEqual(items[1].position.longitude, 151.2)

    def test_load_json(self):
        """Test JSON record files are supported"""
        path = self.data_dir / "points.json"
        with open(path, 'w') as f:
            json.dump([{"latitude": 1.5, "longitude": 2.5, "kind": "a"},
                       {"latitude": -1.0, "longitude": -2.0, "kind": "b"}], f)

        items = self.loader.load_items(path)

        self.assertEqual([item.position.as_tuple() for item in items], [(1.5, 2.5), (-1.0, -2.0)])
        self.assertEqual(items[0].data, {"kind": "a"})

    def test_custom_columns(self):
        """Test coordinate column names can be configured"""
        loader = PointDataLoader(lat_column="lat", lon_column="lon")
        items = loader.dataframe_to_items(pd.DataFrame({"lat": [1.0], "lon": [2.0]}))
        self.assertEqual(items[0].position.as_tuple(), (1.0, 2.0))
        self.assertEqual(items[0].data, {})

    def test_missing_columns(self):
        """Test a table without coordinate columns is rejected"""
        with self.assertRaises(ValueError):
            self.loader.dataframe_to_items(pd.DataFrame({"x": [1.0], "y": [2.0]}))

    def test_missing_file_and_bad_format(self):
        """Test load errors"""
        with self.assertRaises(FileNotFoundError):
            self.loader.load_dataframe(self.data_dir / "absent.csv")

        path = self.data_dir / "points.txt"
        path.write_text("latitude,longitude\n1,2\n")
        with self.assertRaises(ValueError):
            self.loader.load_dataframe(path)

    def test_generate_random_points(self):
        """Test generated points are reproducible and inside the bounds"""
        bounds = {"min_lat": 10.0, "max_lat": 20.0, "min_lon": -5.0, "max_lon": 5.0}
        first = generate_random_points(100, bounds, seed=1)
        second = generate_random_points(100, bounds, seed=1)

        pd.testing.assert_frame_equal(first, second)
        self.assertEqual(len(first), 100)
        self.assertTrue(first["latitude"].between(10.0, 20.0).all())
        self.assertTrue(first["longitude"].between(-5.0, 5.0).all())
        self.assertTrue(np.array_equal(first["point_id"].values, np.arange(100)))


class TestExport(unittest.TestCase):
    def setUp(self):
        self.clusters = sample_clusters()

    def test_records(self):
        """Test cluster records carry position, count and item data"""
        records = clusters_to_records(self.clusters)

        self.assertEqual([r["count"] for r in records], [2, 1])
        self.assertEqual([i["point_id"] for i in records[0]["items"]], [0, 1])
        self.assertNotIn("items", clusters_to_records(self.clusters, include_items=False)[0])

    def test_dataframe_sorted_by_size(self):
        """Test the summary lists the largest clusters first"""
        clusters = list(reversed(self.clusters))
        df = clusters_to_dataframe(clusters)

        self.assertEqual(list(df.columns), ["cluster_id", "latitude", "longitude", "count"])
        self.assertEqual(df["count"].tolist(), [2, 1])
        self.assertEqual(df["cluster_id"].tolist(), [1, 0])

    def test_empty_dataframe(self):
        """Test no clusters give an empty summary"""
        df = clusters_to_dataframe([])
        self.assertEqual(len(df), 0)
        self.assertIn("count", df.columns)

    def test_export_json(self):
        """Test exported JSON can be read back"""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = export_cluster_results(self.clusters, 10, "distance",
                                          filename="clusters.json", output_dir=temp_dir)
            with open(path) as f:
                data = json.load(f)

        self.assertEqual(data["algorithm"], "distance")
        self.assertEqual(data["n_clusters"], 2)
        self.assertEqual(data["n_items"], 3)
        self.assertEqual(data["clusters"][1]["items"][0]["point_id"], 2)


class TestFoliumClusterRenderer(unittest.TestCase):
    def setUp(self):
        self.viewport = MapViewport(center=(0.0, 0.0), zoom=5)
        self.renderer = FoliumClusterRenderer(self.viewport)

    def test_render_clusters(self):
        """Test each render replaces the previous markers"""
        clusters = sample_clusters()
        self.renderer.render_clusters(clusters)
        self.renderer.render_clusters(clusters[:1])

        self.assertEqual(self.renderer.render_count, 2)
        self.assertEqual(len(self.renderer.clusters), 1)
        self.assertIsInstance(self.renderer.get_map_as_html(), str)

    def test_update_follows_camera(self):
        """Test update redraws the current markers at the new centre and zoom"""
        self.renderer.render_clusters(sample_clusters())
        first_map = self.renderer.map_obj
        self.viewport.move_to(center=(10.0, 20.0), zoom=5.3)
        self.renderer.update()

        self.assertIsNot(self.renderer.map_obj, first_map)
        self.assertEqual(list(self.renderer.map_obj.location), [10.0, 20.0])
        self.assertEqual(self.renderer.map_zoom, 5.3)
        self.assertEqual(self.renderer.render_count, 1)
        self.assertEqual(len(self.renderer.clusters), 2)
        layers = [child for child in self.renderer.map_obj._children.values()
                  if isinstance(child, folium.FeatureGroup)]
        self.assertEqual(len(layers), 1)

    def test_manager_with_folium(self):
        """Test camera moves through a real viewport and renderer"""
        manager = ClusterManager(self.viewport, NonHierarchicalDistanceBasedAlgorithm(), self.renderer)
        manager.add_items([PointItem((0.0, 0.0)), PointItem((30.0, 30.0))])

        self.assertTrue(manager.on_camera_changed())
        self.viewport.move_to(zoom=5.3)
        self.assertFalse(manager.on_camera_changed())
        self.viewport.move_to(zoom=2)
        self.assertTrue(manager.on_camera_changed())
        self.assertEqual(self.renderer.render_count, 2)

    def test_export_html(self):
        """Test the map can be saved to disk"""
        self.renderer.render_clusters(sample_clusters())
        with tempfile.TemporaryDirectory() as temp_dir:
            path = self.renderer.export_map_to_html(os.path.join(temp_dir, "map.html"))
            self.assertTrue(os.path.exists(path))


class TestLaunch(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.output_dir = self.temp_dir.name

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_random_points_end_to_end(self):
        """Test the CLI clusters random points and writes both outputs"""
        exit_code = launch.main([
            "--random", "200", "--seed", "3", "--zoom", "3",
            "--json", "--html", "--output-dir", self.output_dir, "--log-file", ""
        ])

        self.assertEqual(exit_code, 0)
        files = os.listdir(self.output_dir)
        self.assertEqual(len([f for f in files if f.endswith(".json")]), 1)
        self.assertEqual(len([f for f in files if f.endswith(".html")]), 1)

    def test_input_file_with_viewport(self):
        """Test clustering a CSV restricted to a viewport"""
        path = Path(self.output_dir) / "points.csv"
        generate_random_points(50, seed=4).to_csv(path, index=False)

        exit_code = launch.main([
            "--input", str(path), "--algorithm", "grid", "--viewport", "-45", "-90", "45", "90",
            "--log-file", ""
        ])

        self.assertEqual(exit_code, 0)

    def test_errors_return_non_zero(self):
        """Test bad input is reported through the exit code"""
        self.assertEqual(launch.main(["--input", "missing.csv", "--log-file", ""]), 1)
        self.assertEqual(launch.main(["--random", "10", "--viewport", "10", "0", "-10", "5",
                                      "--log-file", ""]), 1)

    def test_single_link_defaults_to_config(self):
        """Test the CLI only overrides the chaining setting when the flag is given"""
        parser = launch.build_parser()

        def built(argv):
            args = parser.parse_args(argv)
            return launch.build_algorithm(args.algorithm, args.max_distance, args.single_link, args.cell_size)

        with patch.dict(CLUSTERING_CONFIG, {"single_link": False}):
            self.assertFalse(built([]).single_link)
            self.assertTrue(built(["--single-link"]).single_link)
        with patch.dict(CLUSTERING_CONFIG, {"single_link": True}):
            self.assertTrue(built([]).single_link)
            self.assertFalse(built(["--no-single-link"]).single_link)

    def test_build_algorithm(self):
        """Test strategy selection by name"""
        algorithm = launch.build_algorithm("distance", max_distance=50, single_link=True)
        self.assertEqual(algorithm.max_distance_points, 50)
        self.assertTrue(algorithm.single_link)
        self.assertEqual(launch.build_algorithm("grid", cell_size=64).grid_cell_size_points, 64)
        with self.assertRaises(ValueError):
            launch.build_algorithm("kmeans")


if __name__ == "__main__":
    # Run tests
    unittest.main(verbosity=2)
