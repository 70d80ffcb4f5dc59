"""
Clustering orchestration on top of scikit-learn.

This module implements:
    - k-means, DBSCAN and expectation-maximization (Gaussian mixture) runs
      on a list of generated examples
    - write-back of cluster ids onto the examples
    - centroid markers for every cluster found
    - a decision grid of cluster ids over the display domain
    - agreement and separation metrics
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

import numpy as np
from sklearn.cluster import DBSCAN, KMeans
from sklearn.metrics import adjusted_rand_score, silhouette_score
from sklearn.mixture import GaussianMixture

from clusterviz.data.examples import Example
from clusterviz.utils.configs import ClusteringConfig
from clusterviz.utils.seed import RandomSource

logger = logging.getLogger(__name__)

NOISE_CLUSTER = -1
CLUSTERING_METHODS = ("kmeans", "dbscan", "em")


@dataclass
class ClusteringResult:
    """
    Outcome of :func:`run_clustering`.

    Args:
        method (str): Clustering method that produced the result.
        examples (List[Example]): Input examples, with ``cluster`` set.
        centroids (List[Example]): One centroid marker per cluster.
        model (Any): Fitted scikit-learn estimator.
        config (ClusteringConfig): Configuration used for the run.
        cluster_sizes (Dict[int, int]): Number of examples per cluster id.
    """

    method: str
    examples: List[Example]
    centroids: List[Example]
    model: Any
    config: ClusteringConfig
    cluster_sizes: Dict[int, int] = field(default_factory=dict)


def _to_array(examples: Sequence[Example]) -> np.ndarray:
    return np.array([[e.x, e.y] for e in examples], dtype=np.float64).reshape(-1, 2)


def _build_model(config: ClusteringConfig, n_points: int, random_state: int) -> Any:
    """
    Create the scikit-learn estimator for ``config.method``.

    Args:
        config (ClusteringConfig): Clustering configuration.
        n_points (int): Number of points that will be clustered.
        random_state (int): Seed for stochastic estimators.

    Returns:
        Any: Unfitted estimator.
    """
    if config.method == "dbscan":
        if config.eps <= 0:
            raise ValueError(f"DBSCAN eps must be positive, got {config.eps}.")
        if config.min_samples < 1:
            raise ValueError(f"DBSCAN min_samples must be at least 1, got {config.min_samples}.")
        return DBSCAN(eps=config.eps, min_samples=config.min_samples)

    if config.method not in CLUSTERING_METHODS:
        raise ValueError(f"Unsupported clustering method: {config.method}")
    if not 1 <= config.n_clusters <= n_points:
        raise ValueError(f"n_clusters must be between 1 and {n_points}, got {config.n_clusters}.")

    if config.method == "kmeans":
        return KMeans(n_clusters=config.n_clusters, n_init=10, random_state=random_state)
    return GaussianMixture(n_components=config.n_clusters, random_state=random_state)


def compute_centroids(examples: Sequence[Example]) -> List[Example]:
    """
    Build one centroid marker per assigned cluster.

    Each centroid sits at the mean position of its members and carries their
    mean label. Unassigned examples and DBSCAN noise get no centroid.

    Args:
        examples (Sequence[Example]): Examples with ``cluster`` set.

    Returns:
        List[Example]: Centroids ordered by cluster id.
    """
    members: Dict[int, List[Example]] = {}
    for example in examples:
        if example.is_centroid or example.cluster <= 0:
            continue
        members.setdefault(example.cluster, []).append(example)

    centroids: List[Example] = []
    for cluster_id in sorted(members):
        group = members[cluster_id]
        centroids.append(
            Example(
                x=float(np.mean([e.x for e in group])),
                y=float(np.mean([e.y for e in group])),
                label=float(np.mean([e.label for e in group])),
                cluster=cluster_id,
                is_centroid=True,
            )
        )
    return centroids


def run_clustering(
    examples: List[Example],
    config: ClusteringConfig,
    rng: RandomSource,
) -> ClusteringResult:
    """
    Cluster ``examples`` and write the cluster ids back onto them.

    Cluster ``k`` reported by scikit-learn is stored as ``k + 1`` so that
    ``0`` keeps meaning "unassigned"; DBSCAN noise is stored as ``-1``.

    Args:
        examples (List[Example]): Examples to cluster. Centroid markers from a
            previous run are ignored.
        config (ClusteringConfig): Clustering configuration.
        rng (RandomSource): Random source providing the estimator seed.

    Returns:
        ClusteringResult: Fitted model, updated examples and centroids.
    """
    points = [e for e in examples if not e.is_centroid]
    if not points:
        raise ValueError("Cannot cluster an empty dataset.")

    random_state = rng.randint(2**31 - 1)
    model = _build_model(config, len(points), random_state)
    assignments = model.fit_predict(_to_array(points))

    for example, assignment in zip(points, assignments):
        example.cluster = NOISE_CLUSTER if assignment < 0 else int(assignment) + 1

    centroids = compute_centroids(points)
    ids, counts = np.unique([e.cluster for e in points], return_counts=True)
    cluster_sizes = {int(i): int(c) for i, c in zip(ids, counts)}

    logger.info(
        "%s found %d clusters on %d points (noise points: %d)",
        config.method,
        len(centroids),
        len(points),
        cluster_sizes.get(NOISE_CLUSTER, 0),
    )
    return ClusteringResult(
        method=config.method,
        examples=points,
        centroids=centroids,
        model=model,
        config=config,
        cluster_sizes=cluster_sizes,
    )


def decision_grid(
    result: ClusteringResult,
    density: int = 50,
    domain: Tuple[float, float] = (-6.0, 6.0),
) -> np.ndarray:
    """
    Evaluate cluster ids on a regular grid over the display domain.

    Entry ``[i, j]`` holds the cluster id at ``(xs[i], ys[j])``. DBSCAN has no
    ``predict``; a grid cell takes the cluster of its nearest core sample when
    that sample is within ``eps``, and ``-1`` otherwise.

    Args:
        result (ClusteringResult): Result of :func:`run_clustering`.
        density (int): Number of cells per axis.
        domain (Tuple[float, float]): Range covered on both axes.

    Returns:
        np.ndarray: Integer array of shape (density, density).
    """
    axis = np.linspace(domain[0], domain[1], density)
    gx, gy = np.meshgrid(axis, axis, indexing="ij")
    grid_points = np.column_stack([gx.ravel(), gy.ravel()])

    if result.method != "dbscan":
        ids = result.model.predict(grid_points) + 1
        return ids.reshape(density, density).astype(int)

    model = result.model
    ids = np.full(grid_points.shape[0], NOISE_CLUSTER, dtype=int)
    if len(model.core_sample_indices_) == 0:
        return ids.reshape(density, density)

    core_points = model.components_
    core_ids = model.labels_[model.core_sample_indices_] + 1
    dists = np.linalg.norm(grid_points[:, None, :] - core_points[None, :, :], axis=2)
    nearest = dists.argmin(axis=1)
    within = dists[np.arange(grid_points.shape[0]), nearest] <= model.eps
    ids[within] = core_ids[nearest[within]]
    return ids.reshape(density, density)


def clustering_metrics(examples: Sequence[Example]) -> Dict[str, float]:
    """
    Compare cluster assignments with the generated labels.

    Args:
        examples (Sequence[Example]): Clustered examples. Centroid markers
            are skipped.

    Returns:
        Dict[str, float]: ``\"Adjusted Rand\"`` between labels and clusters
        when every label is a whole number (regression targets are skipped),
        and ``\"Silhouette\"`` when at least two clusters and fewer clusters
        than points exist.
    """
    points = [e for e in examples if not e.is_centroid]
    if not points:
        raise ValueError("Cannot compute metrics for an empty dataset.")

    labels = [e.label for e in points]
    clusters = [e.cluster for e in points]
    metrics: Dict[str, float] = {}
    if all(float(label).is_integer() for label in labels):
        labels = [int(label) for label in labels]
        metrics["Adjusted Rand"] = float(adjusted_rand_score(labels, clusters))

    n_clusters = len(set(clusters))
    if 2 <= n_clusters < len(points):
        metrics["Silhouette"] = float(silhouette_score(_to_array(points), clusters))
    return metrics
