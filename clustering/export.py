import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from config import CLUSTERING_CONFIG, FILE_PATTERNS, OUTPUT_DIR
from clustering.cluster import StaticCluster

logger = logging.getLogger(__name__)


def _item_record(item: Any) -> Dict[str, Any]:
    record = {
        "latitude": item.position.latitude,
        "longitude": item.position.longitude
    }
    data = getattr(item, "data", None)
    if isinstance(data, dict):
        record.update(data)
    return record


def clusters_to_records(clusters: List[StaticCluster], include_items: bool = True) -> List[Dict[str, Any]]:
    """Convert clusters to JSON-serializable dictionaries"""
    records = []
    for cluster_id, cluster in enumerate(clusters):
        record = {
            "cluster_id": cluster_id,
            "latitude": cluster.position.latitude,
            "longitude": cluster.position.longitude,
            "count": cluster.count
        }
        if include_items:
            record["items"] = [_item_record(item) for item in cluster.items]
        records.append(record)
    return records


def clusters_to_dataframe(clusters: List[StaticCluster]) -> pd.DataFrame:
    """One row per cluster, largest clusters first"""
    columns = ["cluster_id", "latitude", "longitude", "count"]
    df = pd.DataFrame(clusters_to_records(clusters, include_items=False), columns=columns)
    return df.sort_values(["count", "cluster_id"], ascending=[False, True]).reset_index(drop=True)


def export_cluster_results(clusters: List[StaticCluster], zoom: float, algorithm: str,
                           filename: str = None, output_dir: Path = None) -> str:
    """Export clustering results to JSON"""
    if filename is None:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = FILE_PATTERNS["cluster_results"].format(
            algorithm=algorithm, zoom=zoom, timestamp=timestamp
        )
    output_dir = Path(output_dir) if output_dir is not None else OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)

    export_data = {
        "algorithm": algorithm,
        "zoom": zoom,
        "n_clusters": len(clusters),
        "n_items": sum(cluster.count for cluster in clusters),
        "clusters": clusters_to_records(clusters),
        "timestamp": datetime.now().isoformat(),
        "config": CLUSTERING_CONFIG
    }

    filepath = output_dir / filename
    with open(filepath, 'w') as f:
        json.dump(export_data, f, indent=2, default=str)

    logger.info(f"Cluster results exported to {filepath}")
    return str(filepath)
