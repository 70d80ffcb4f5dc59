"""
Shuffling, train/test splitting and tensor export for generated examples.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, List, MutableSequence, Sequence, Tuple, TypeVar, Union

import torch
from torch import Tensor

from clusterviz.data.examples import Example
from clusterviz.utils.seed import RandomSource

T = TypeVar("T")


def shuffle(items: MutableSequence[T], rng: RandomSource) -> None:
    """
    Shuffle a sequence in place with the Fisher-Yates algorithm.

    Consumes exactly ``len(items) - 1`` draws from ``rng`` (none for fewer
    than two items). Elements are moved, never modified.

    Args:
        items (MutableSequence[T]): Sequence to permute.
        rng (RandomSource): Random source.

    Returns:
        None
    """
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(i + 1)
        items[i], items[j] = items[j], items[i]


def split_train_test(examples: Sequence[Example], perc_train: float) -> Tuple[List[Example], List[Example]]:
    """
    Split examples into train and test chunks at ``floor(n * perc_train / 100)``.

    Args:
        examples (Sequence[Example]): Examples, typically already shuffled.
        perc_train (float): Percentage of examples to put in the train chunk.

    Returns:
        Tuple[List[Example], List[Example]]: ``train`` and ``test`` lists.
    """
    if not 0 <= perc_train <= 100:
        raise ValueError(f"perc_train must be in [0, 100], got {perc_train}.")
    split_index = math.floor(len(examples) * perc_train / 100)
    return list(examples[:split_index]), list(examples[split_index:])


def examples_to_tensors(examples: Sequence[Example]) -> Tuple[Tensor, Tensor]:
    """
    Convert examples to feature and label tensors.

    Args:
        examples (Sequence[Example]): Examples to convert.

    Returns:
        Tuple[Tensor, Tensor]: Features of shape (N, 2) and labels of shape
        (N,), both ``float32``.
    """
    x = torch.tensor([[e.x, e.y] for e in examples], dtype=torch.float32).reshape(-1, 2)
    y = torch.tensor([float(e.label) for e in examples], dtype=torch.float32)
    return x, y


def export_splits(
    train: Sequence[Example],
    test: Sequence[Example],
    path: Union[str, Path],
    eps: float = 1e-8,
) -> Dict[str, Tensor]:
    """
    Standardize train/test features with training statistics and save them.

    The saved dictionary holds ``x_train``, ``y_train``, ``x_test``,
    ``y_test`` plus the ``mean`` and ``std`` used, so a model trained on the
    export can map display coordinates onto its inputs.

    Args:
        train (Sequence[Example]): Training examples, at least two.
        test (Sequence[Example]): Test examples.
        path (Union[str, Path]): Destination of the ``torch.save`` file.
        eps (float): Lower bound on the standard deviation.

    Returns:
        Dict[str, Tensor]: The tensors written to ``path``.
    """
    if len(train) < 2:
        raise ValueError(f"At least two training examples are needed to standardize, got {len(train)}.")

    x_train, y_train = examples_to_tensors(train)
    x_test, y_test = examples_to_tensors(test)
    mean = x_train.mean(dim=0)
    std = x_train.std(dim=0).clamp_min(eps)

    splits = {
        "x_train": (x_train - mean) / std,
        "y_train": y_train,
        "x_test": (x_test - mean) / std,
        "y_test": y_test,
        "mean": mean,
        "std": std,
    }
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    torch.save(splits, path)
    return splits
