"""Run summary helpers.

Keeps log formatting out of the pipeline orchestration.
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Dict

from .model import ClusterLabels, NOISE_LABEL

logger = logging.getLogger(__name__)


def cluster_name(cluster_id: int) -> str:
    """Human-friendly cluster label."""
    if cluster_id == NOISE_LABEL:
        return "Noise"
    return f"Cluster-{chr(65+cluster_id) if cluster_id < 26 else cluster_id+1}"


def cluster_sizes(labels: ClusterLabels) -> Dict[int, int]:
    """Number of points per label, ordered by label."""
    return dict(sorted(Counter(labels).items()))


def log_run_summary(labels: ClusterLabels, output_path: str) -> None:
    logger.info("Clustered %d points: %d cluster(s), %d noise point(s) -> %s",
                len(labels), labels.n_clusters, labels.n_noise, output_path)
    for cluster_id, size in cluster_sizes(labels).items():
        logger.debug("  %s: %d point(s)", cluster_name(cluster_id), size)
