"""
Configuration dataclasses for the clustering playground.

These dataclasses collect the control values of a run (dataset shape, noise,
seed, clustering method) so that modules do not rely on hard-coded constants
spread throughout the codebase.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional

NUM_SAMPLES_CLASSIFY = 400
NUM_SAMPLES_REGRESS = 800


@dataclass
class DatasetConfig:
    """
    Configuration for synthetic dataset generation.

    Args:
        name (str): Registered dataset name (e.g. ``\"circle\"``).
        problem (str): ``\"classification\"`` or ``\"regression\"``; decides
            the default sample count.
        noise (float): Noise level in percent, ``0`` to ``100``.
        seed (Optional[str]): Seed string. A fresh one is drawn when ``None``.
        n_samples (Optional[int]): Number of examples to generate. Defaults
            to 400 for classification and 800 for regression.
        perc_train (float): Percentage of examples used for training.
    """

    name: str = "circle"
    problem: Literal["classification", "regression"] = "classification"
    noise: float = 0.0
    seed: Optional[str] = None
    n_samples: Optional[int] = None
    perc_train: float = 70.0

    def resolved_n_samples(self) -> int:
        """Return ``n_samples`` or the problem's default sample count."""
        if self.n_samples is not None:
            return self.n_samples
        if self.problem == "regression":
            return NUM_SAMPLES_REGRESS
        return NUM_SAMPLES_CLASSIFY


@dataclass
class ClusteringConfig:
    """
    Configuration for a clustering run.

    Args:
        method (str): ``\"kmeans\"``, ``\"dbscan\"`` or ``\"em\"``.
        n_clusters (int): Number of clusters (k-means) or mixture
            components (EM). Ignored by DBSCAN.
        eps (float): DBSCAN neighbourhood radius.
        min_samples (int): DBSCAN core point threshold.
    """

    method: Literal["kmeans", "dbscan", "em"] = "kmeans"
    n_clusters: int = 2
    eps: float = 0.5
    min_samples: int = 5


@dataclass
class ExperimentConfig:
    """
    Aggregate configuration describing a single playground run.

    Args:
        dataset (DatasetConfig): Dataset configuration.
        clustering (ClusteringConfig): Clustering configuration.
    """

    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
