"""
Unit tests for synthetic dataset generators.
"""

from __future__ import annotations

import math
import statistics
from typing import List

import pytest

from clusterviz.data import (
    CLASSIFICATION_DATASETS,
    CLUSTERING_DATASETS,
    REGRESSION_DATASETS,
    Example,
    classify_circle_data,
    classify_moon_data,
    classify_two_gauss_data,
    cluster_anisotropic_data,
    generate_data,
    get_generator,
    split_counts,
)
from clusterviz.utils.configs import DatasetConfig
from clusterviz.utils.seed import RandomSource

ALL_GENERATORS = {**CLASSIFICATION_DATASETS, **REGRESSION_DATASETS, **CLUSTERING_DATASETS}


def _check_fresh_examples(examples: List[Example]) -> None:
    for example in examples:
        assert example.cluster == 0
        assert example.is_centroid is False
        assert example.vote_counts is None
        assert math.isfinite(example.x) and math.isfinite(example.y)


@pytest.mark.parametrize("name", sorted(ALL_GENERATORS))
@pytest.mark.parametrize("n_samples", [0, 1, 7, 100])
def test_generators_return_exactly_n_samples(name: str, n_samples: int) -> None:
    rng = RandomSource(0)
    examples = ALL_GENERATORS[name](n_samples, 0.3, rng)
    assert len(examples) == n_samples
    _check_fresh_examples(examples)


@pytest.mark.parametrize("name", sorted(CLASSIFICATION_DATASETS))
@pytest.mark.parametrize("noise", [0.0, 0.5, 1.0])
def test_classification_labels_are_plus_or_minus_one(name: str, noise: float) -> None:
    examples = CLASSIFICATION_DATASETS[name](200, noise, RandomSource("labels"))
    assert {e.label for e in examples} <= {-1, 1}


@pytest.mark.parametrize("name", sorted(REGRESSION_DATASETS))
@pytest.mark.parametrize("noise", [0.0, 1.0])
def test_regression_labels_stay_in_unit_range(name: str, noise: float) -> None:
    examples = REGRESSION_DATASETS[name](300, noise, RandomSource(5))
    assert all(-1.0 <= e.label <= 1.0 for e in examples)


@pytest.mark.parametrize("name", sorted(ALL_GENERATORS))
def test_generators_are_deterministic_under_same_seed(name: str) -> None:
    generator = ALL_GENERATORS[name]
    first = generator(50, 0.2, RandomSource("seed-a"))
    second = generator(50, 0.2, RandomSource("seed-a"))
    assert first == second

    other = generator(50, 0.2, RandomSource("seed-b"))
    assert other != first


def test_reseeding_a_source_replays_the_same_dataset() -> None:
    rng = RandomSource("12345")
    first = classify_circle_data(10, 0, rng)
    rng.reseed("12345")
    second = classify_circle_data(10, 0, rng)

    assert len(first) == 10
    assert {e.label for e in first} <= {-1, 1}
    _check_fresh_examples(first)
    assert first == second


def test_negative_sample_count_is_rejected() -> None:
    for generator in ALL_GENERATORS.values():
        with pytest.raises(ValueError):
            generator(-1, 0.0, RandomSource(0))


def test_split_counts_give_remainder_to_first_populations() -> None:
    assert split_counts(7, 2) == [4, 3]
    assert split_counts(10, 3) == [4, 3, 3]
    assert split_counts(0, 3) == [0, 0, 0]
    assert sum(split_counts(1001, 3)) == 1001


def test_two_gauss_blobs_keep_their_sign_and_order() -> None:
    examples = classify_two_gauss_data(9, 0.0, RandomSource(1))
    assert [e.label for e in examples] == [1] * 5 + [-1] * 4
    positives = [e for e in examples if e.label == 1]
    assert statistics.mean(e.x for e in positives) > 0


def test_circle_inner_radius_spread_grows_with_noise() -> None:
    n_samples = 2000
    n_inner = split_counts(n_samples, 2)[0]

    def inner_radius_variance(noise: float) -> float:
        examples = classify_circle_data(n_samples, noise, RandomSource(11))
        return statistics.pvariance(math.hypot(e.x, e.y) for e in examples[:n_inner])

    variances = [inner_radius_variance(noise) for noise in (0.0, 0.5, 1.0)]
    assert variances[0] < variances[1] < variances[2]


def test_circle_without_noise_labels_by_inner_disk() -> None:
    examples = classify_circle_data(200, 0.0, RandomSource(3))
    for example in examples:
        expected = 1 if math.hypot(example.x, example.y) < 2.5 else -1
        assert example.label == expected


def test_moon_without_noise_labels_match_their_arc() -> None:
    examples = classify_moon_data(101, 0.0, RandomSource(4))
    n_upper = split_counts(101, 2)[0]
    assert all(e.label == 1 for e in examples[:n_upper])
    assert all(e.label == -1 for e in examples[n_upper:])


def test_anisotropic_blobs_use_blob_ids_as_labels() -> None:
    examples = cluster_anisotropic_data(90, 0.1, RandomSource(6))
    assert {e.label for e in examples} == {1, -3, -4}
    assert "aniso" not in CLASSIFICATION_DATASETS


def test_get_generator_finds_every_registry() -> None:
    assert get_generator("circle") is classify_circle_data
    assert get_generator("aniso") is cluster_anisotropic_data
    assert get_generator("reg-plane") is REGRESSION_DATASETS["reg-plane"]
    with pytest.raises(ValueError):
        get_generator("hexagon")


def test_generate_data_shuffles_and_splits() -> None:
    cfg = DatasetConfig(name="circle", noise=0, seed="12345", n_samples=10, perc_train=70)
    generated = generate_data(cfg)
    assert generated.seed == "12345"
    assert len(generated.examples) == 10
    assert len(generated.train) == 7 and len(generated.test) == 3
    assert generated.train + generated.test == generated.examples

    again = generate_data(cfg)
    assert again.examples == generated.examples

    unshuffled = classify_circle_data(10, 0, RandomSource("12345"))
    assert sorted(unshuffled, key=lambda e: (e.x, e.y)) == sorted(generated.examples, key=lambda e: (e.x, e.y))


def test_generate_data_uses_problem_defaults_and_draws_a_seed() -> None:
    generated = generate_data(DatasetConfig(name="reg-gauss", problem="regression", noise=20))
    assert len(generated.examples) == 800
    assert generated.seed

    replay = generate_data(
        DatasetConfig(name="reg-gauss", problem="regression", noise=20, seed=generated.seed)
    )
    assert replay.examples == generated.examples


def test_generate_data_rejects_bad_configs() -> None:
    with pytest.raises(ValueError):
        generate_data(DatasetConfig(name="reg-plane", problem="classification"))
    with pytest.raises(ValueError):
        generate_data(DatasetConfig(name="circle", noise=150))
