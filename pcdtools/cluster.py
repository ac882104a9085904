"""Point clustering backends."""
from __future__ import annotations

import logging
from typing import Callable, Dict

import numpy as np

from exceptions.exceptions import ClusteringError
from .io import points_to_point_cloud
from .model import ClusterLabels, ClusterParameters, PointSet

logger = logging.getLogger(__name__)


def _open3d_dbscan(points: PointSet, params: ClusterParameters, print_progress: bool) -> np.ndarray:
    pcd = points_to_point_cloud(points)
    return np.asarray(
        pcd.cluster_dbscan(eps=params.radius, min_points=params.min_points, print_progress=print_progress)
    )


def _sklearn_dbscan(points: PointSet, params: ClusterParameters, print_progress: bool) -> np.ndarray:
    from sklearn.cluster import DBSCAN

    # min_samples counts the point itself, like Open3D's min_points
    clustering = DBSCAN(eps=params.radius, min_samples=params.min_points).fit(points.as_array())
    return clustering.labels_


BACKENDS: Dict[str, Callable[[PointSet, ClusterParameters, bool], np.ndarray]] = {
    "open3d": _open3d_dbscan,
    "sklearn": _sklearn_dbscan,
}


def dbscan_labels(
    points: PointSet,
    params: ClusterParameters,
    *,
    print_progress: bool = True,
    backend: str = "open3d",
) -> ClusterLabels:
    """Cluster 3D points with DBSCAN.

    Returns one label per input point, in input order. Noise is labeled -1.
    Any failure inside the clustering library is raised as ClusteringError.
    """
    if backend not in BACKENDS:
        raise ClusteringError("UNKNOWN_BACKEND", f"Unknown clustering backend: {backend}", context="dbscan_labels")
    if len(points) == 0:
        return ClusterLabels()

    logger.debug("Running %s DBSCAN on %d points (eps=%s, min_points=%d)",
                 backend, len(points), params.radius, params.min_points)
    try:
        raw = BACKENDS[backend](points, params, print_progress)
    except Exception as e:
        raise ClusteringError("DBSCAN_FAILED", f"Failed to find clusters on point cloud: {e}",
                              context=backend) from e

    labels = ClusterLabels.from_iterable(raw.tolist())
    if len(labels) != len(points):
        raise ClusteringError(
            "LABEL_COUNT_MISMATCH",
            f"Clustering returned {len(labels)} labels for {len(points)} points",
            context=backend,
        )
    return labels
