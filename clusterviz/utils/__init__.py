"""
Utility modules for the clustering playground.

This subpackage provides:
    - the reseedable random source used by every sampler
    - configuration dataclasses
"""

from .seed import RandomSource, new_seed, seed_to_int
from .configs import (
    NUM_SAMPLES_CLASSIFY,
    NUM_SAMPLES_REGRESS,
    ClusteringConfig,
    DatasetConfig,
    ExperimentConfig,
)

__all__ = [
    "RandomSource",
    "new_seed",
    "seed_to_int",
    "NUM_SAMPLES_CLASSIFY",
    "NUM_SAMPLES_REGRESS",
    "DatasetConfig",
    "ClusteringConfig",
    "ExperimentConfig",
]
