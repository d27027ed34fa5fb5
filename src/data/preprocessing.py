import logging
from pathlib import Path
from typing import Dict, List

import numpy as np
import pandas as pd

from config import DATA_CONFIG, WORLD_BOUNDS
from clustering.items import PointItem

logger = logging.getLogger(__name__)


class PointDataLoader:
    def __init__(self, lat_column: str = None, lon_column: str = None):
        self.lat_column = lat_column or DATA_CONFIG["lat_column"]
        self.lon_column = lon_column or DATA_CONFIG["lon_column"]
        self.dropped_rows = 0

    def load_dataframe(self, path: Path) -> pd.DataFrame:
        """Load a CSV or JSON file of points"""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Point file not found: {path}")

        suffix = path.suffix.lower()
        if suffix == ".csv":
            df = pd.read_csv(path)
        elif suffix == ".json":
            df = pd.read_json(path)
        else:
            raise ValueError(f"Unsupported point file format: {suffix}")

        logger.info(f"Loaded {len(df)} rows from {path}")
        return df

    def clean_coordinates(self, df: pd.DataFrame) -> pd.DataFrame:
        """Drop rows with missing or out-of-range coordinates"""
        missing = [col for col in (self.lat_column, self.lon_column) if col not in df.columns]
        if missing:
            raise ValueError(f"Missing coordinate columns: {', '.join(missing)}")

        df = df.copy()
        df[self.lat_column] = pd.to_numeric(df[self.lat_column], errors="coerce")
        df[self.lon_column] = pd.to_numeric(df[self.lon_column], errors="coerce")

        valid = (
            df[self.lat_column].between(WORLD_BOUNDS["min_lat"], WORLD_BOUNDS["max_lat"]) &
            df[self.lon_column].between(WORLD_BOUNDS["min_lon"], WORLD_BOUNDS["max_lon"])
        )
        self.dropped_rows = int((~valid).sum())
        if self.dropped_rows:
            logger.warning(f"Dropped {self.dropped_rows} rows with missing or out-of-range coordinates")

        return df[valid].reset_index(drop=True)

    def dataframe_to_items(self, df: pd.DataFrame) -> List[PointItem]:
        """Build one PointItem per row, keeping the other columns as item data"""
        df = self.clean_coordinates(df)
        extra_columns = [col for col in df.columns if col not in (self.lat_column, self.lon_column)]

        items = []
        records: List[Dict] = df[extra_columns].to_dict(orient="records") if extra_columns else [{}] * len(df)
        for lat, lon, data in zip(df[self.lat_column], df[self.lon_column], records):
            items.append(PointItem((float(lat), float(lon)), data))
        return items

    def load_items(self, path: Path) -> List[PointItem]:
        return self.dataframe_to_items(self.load_dataframe(path))


def generate_random_points(n: int, bounds: Dict[str, float] = None, seed: int = None) -> pd.DataFrame:
    """Uniformly scatter ``n`` points inside ``bounds`` (defaults to the whole world)"""
    if bounds is None:
        bounds = WORLD_BOUNDS
    if seed is None:
        seed = DATA_CONFIG["random_seed"]

    rng = np.random.default_rng(seed)
    return pd.DataFrame({
        "point_id": np.arange(n),
        "latitude": rng.uniform(bounds["min_lat"], bounds["max_lat"], n),
        "longitude": rng.uniform(bounds["min_lon"], bounds["max_lon"], n)
    })
