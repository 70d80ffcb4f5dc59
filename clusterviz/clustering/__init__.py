"""
Clustering orchestration for generated datasets.

The actual algorithms come from scikit-learn; this package wires them to
:class:`~clusterviz.data.examples.Example` lists.
"""

from .cluster import (
    CLUSTERING_METHODS,
    NOISE_CLUSTER,
    ClusteringResult,
    clustering_metrics,
    compute_centroids,
    decision_grid,
    run_clustering,
)

__all__ = [
    "CLUSTERING_METHODS",
    "NOISE_CLUSTER",
    "ClusteringResult",
    "clustering_metrics",
    "compute_centroids",
    "decision_grid",
    "run_clustering",
]
