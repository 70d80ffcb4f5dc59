"""
Synthetic dataset generation utilities for the clustering playground.

This subpackage exposes the labeled 2D dataset generators, the shuffle and
train/test split helpers, and the validator for uploaded datasets.
"""

from .examples import Example, Point, distance
from .splits import examples_to_tensors, export_splits, shuffle, split_train_test
from .datasets import (
    CLASSIFICATION_DATASETS,
    CLUSTERING_DATASETS,
    REGRESSION_DATASETS,
    DataGenerator,
    GeneratedData,
    classify_circle_data,
    classify_moon_data,
    classify_spiral_data,
    classify_three_gauss_data,
    classify_two_gauss_data,
    classify_xor_data,
    cluster_anisotropic_data,
    generate_data,
    get_generator,
    regress_gaussian,
    regress_plane,
    split_counts,
)
from .validation import InvalidDatasetError, is_valid, load_uploaded_dataset

__all__ = [
    "Example",
    "Point",
    "distance",
    "shuffle",
    "split_train_test",
    "examples_to_tensors",
    "export_splits",
    "DataGenerator",
    "GeneratedData",
    "CLASSIFICATION_DATASETS",
    "REGRESSION_DATASETS",
    "CLUSTERING_DATASETS",
    "classify_two_gauss_data",
    "classify_three_gauss_data",
    "classify_spiral_data",
    "classify_circle_data",
    "classify_moon_data",
    "classify_xor_data",
    "cluster_anisotropic_data",
    "regress_plane",
    "regress_gaussian",
    "generate_data",
    "get_generator",
    "split_counts",
    "InvalidDatasetError",
    "is_valid",
    "load_uploaded_dataset",
]
