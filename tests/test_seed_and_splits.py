"""
Unit tests for the random source, shuffling and train/test splitting.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable

import pytest
import torch

from clusterviz.data import (
    Example,
    Point,
    distance,
    examples_to_tensors,
    export_splits,
    shuffle,
    split_train_test,
)
from clusterviz.utils.seed import RandomSource, new_seed, seed_to_int


class _ScriptedSource(RandomSource):
    """Random source replaying a fixed list of ``[0, 1)`` draws."""

    def __init__(self, values: Iterable[float]) -> None:
        super().__init__(0)
        self._values = iter(values)

    def random(self) -> float:
        self.draws += 1
        return next(self._values)


def test_same_seed_gives_same_draws() -> None:
    a = RandomSource("12345")
    b = RandomSource("12345")
    assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]
    assert a.draws == 5


def test_reseed_restarts_sequence_and_counter() -> None:
    rng = RandomSource(7)
    first = [rng.uniform(-1, 1) for _ in range(3)]
    rng.reseed(7)
    assert rng.draws == 0
    assert [rng.uniform(-1, 1) for _ in range(3)] == first


def test_seed_to_int_accepts_strings_and_ints() -> None:
    assert seed_to_int(42) == 42
    assert seed_to_int("0.12345") == seed_to_int("0.12345")
    assert seed_to_int("0.12345") != seed_to_int("0.12346")
    with pytest.raises(ValueError):
        seed_to_int(-1)


def test_new_seed_looks_like_a_five_digit_fraction() -> None:
    seed = new_seed()
    assert seed.startswith("0.") and len(seed) == 7


def test_uniform_stays_in_range() -> None:
    rng = RandomSource(1)
    samples = [rng.uniform(-6, 6) for _ in range(1000)]
    assert all(-6 <= s < 6 for s in samples)


def test_normal_matches_requested_moments() -> None:
    rng = RandomSource(2)
    samples = [rng.normal(3.0, 4.0) for _ in range(20000)]
    mean = sum(samples) / len(samples)
    variance = sum((s - mean) ** 2 for s in samples) / len(samples)
    assert abs(mean - 3.0) < 0.1
    assert abs(variance - 4.0) < 0.25


def test_normal_resamples_when_s_is_zero() -> None:
    # (0.5, 0.5) maps to v1 = v2 = 0, which must be rejected.
    rng = _ScriptedSource([0.5, 0.5, 0.75, 0.5])
    value = rng.normal(1.0, 1.0)
    expected = 1.0 + 0.5 * math.sqrt(-2 * math.log(0.25) / 0.25)
    assert math.isfinite(value)
    assert value == pytest.approx(expected)
    assert rng.draws == 4


def test_normal_resamples_outside_unit_disk() -> None:
    # (0.95, 0.95) maps to s = 1.62 > 1.
    rng = _ScriptedSource([0.95, 0.95, 0.75, 0.5])
    rng.normal()
    assert rng.draws == 4


def test_distance_is_euclidean() -> None:
    assert distance(Point(0, 0), Point(3, 4)) == 5
    assert distance(Example(1, 1, 1), Point(1, 1)) == 0


@pytest.mark.parametrize("n_items", [0, 1, 2, 10, 257])
def test_shuffle_is_a_permutation_with_n_minus_one_draws(n_items: int) -> None:
    rng = RandomSource(3)
    items = list(range(n_items))
    shuffle(items, rng)
    assert sorted(items) == list(range(n_items))
    assert rng.draws == max(n_items - 1, 0)


def test_shuffle_leaves_examples_untouched() -> None:
    examples = [Example(float(i), -float(i), 1 if i % 2 else -1) for i in range(20)]
    before = [Example(e.x, e.y, e.label) for e in examples]
    shuffle(examples, RandomSource("fields"))
    assert sorted(examples, key=lambda e: e.x) == before


def test_shuffle_produces_different_orderings_across_seeds() -> None:
    orderings = set()
    for seed in range(30):
        items = list(range(6))
        shuffle(items, RandomSource(seed))
        orderings.add(tuple(items))
    assert len(orderings) > 1


def test_split_train_test_uses_floor_of_percentage() -> None:
    examples = [Example(0.0, 0.0, 1) for _ in range(11)]
    train, test = split_train_test(examples, 70)
    assert len(train) == 7 and len(test) == 4
    assert split_train_test([], 50) == ([], [])
    with pytest.raises(ValueError):
        split_train_test(examples, 120)


def test_examples_to_tensors_shapes() -> None:
    examples = [Example(1.0, 2.0, 1), Example(-3.0, 0.5, -1), Example(0.0, 0.0, 0.25)]
    x, y = examples_to_tensors(examples)
    assert x.shape == (3, 2) and y.shape == (3,)
    assert x.dtype == torch.float32
    assert torch.allclose(y, torch.tensor([1.0, -1.0, 0.25]))

    x_empty, y_empty = examples_to_tensors([])
    assert x_empty.shape == (0, 2) and y_empty.shape == (0,)


def test_export_splits_standardizes_with_training_statistics(tmp_path: Path) -> None:
    train = [Example(0.0, 1.0, 1), Example(2.0, 3.0, -1), Example(4.0, 5.0, 1)]
    test = [Example(2.0, 3.0, -1)]
    path = tmp_path / "tensors" / "circle.pt"

    splits = export_splits(train, test, path)
    assert torch.allclose(splits["x_train"].mean(dim=0), torch.zeros(2), atol=1e-6)
    assert torch.allclose(splits["mean"], torch.tensor([2.0, 3.0]))
    assert torch.allclose(splits["x_test"], torch.zeros(1, 2), atol=1e-6)
    assert torch.allclose(splits["y_train"], torch.tensor([1.0, -1.0, 1.0]))

    saved = torch.load(path)
    assert set(saved) == {"x_train", "y_train", "x_test", "y_test", "mean", "std"}
    assert torch.equal(saved["x_train"], splits["x_train"])


def test_export_splits_needs_two_training_examples(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        export_splits([Example(0.0, 0.0, 1)], [], tmp_path / "one.pt")
