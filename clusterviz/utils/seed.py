"""
Deterministic seeding and random sampling utilities.

All randomness used by the dataset generators and the clustering layer flows
through an explicit :class:`RandomSource` handle. Reseeding a handle with the
same seed reproduces the exact same sequence of draws.
"""

from __future__ import annotations

import hashlib
import math
from typing import Optional, Union

import numpy as np

Seed = Union[int, str]


def seed_to_int(seed: Seed) -> int:
    """
    Convert a seed value into a non-negative integer usable by NumPy.

    Integer seeds are used as-is. String seeds (e.g. ``"0.12345"`` as stored
    in the playground state) are hashed with SHA-256 and truncated to 64 bits.

    Args:
        seed (Seed): Integer or string seed.

    Returns:
        int: Integer seed.
    """
    if isinstance(seed, bool):
        raise TypeError("Seed must be an int or a str, not a bool.")
    if isinstance(seed, int):
        if seed < 0:
            raise ValueError(f"Integer seeds must be non-negative, got {seed}.")
        return seed
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


def new_seed() -> str:
    """
    Draw a fresh seed string from OS entropy, formatted like ``"0.12345"``.

    Returns:
        str: New seed string.
    """
    return f"0.{int(np.random.default_rng().integers(100000)):05d}"


class RandomSource:
    """
    Reseedable uniform/normal sampler.

    Every ``[0, 1)`` draw handed out is counted in ``draws`` so callers can
    check how much randomness an operation consumed.

    Args:
        seed (Optional[Seed]): Initial seed. A fresh seed string is drawn
            when omitted.
    """

    def __init__(self, seed: Optional[Seed] = None) -> None:
        self.seed: Seed = new_seed() if seed is None else seed
        self._generator = np.random.default_rng(seed_to_int(self.seed))
        self.draws = 0

    def reseed(self, seed: Seed) -> None:
        """
        Reset the underlying state so the next draws replay ``seed``.

        Args:
            seed (Seed): Seed to restart from.

        Returns:
            None
        """
        self.seed = seed
        self._generator = np.random.default_rng(seed_to_int(seed))
        self.draws = 0

    def random(self) -> float:
        """Return one sample from the uniform ``[0, 1)`` distribution."""
        self.draws += 1
        return float(self._generator.random())

    def uniform(self, a: float, b: float) -> float:
        """
        Return a sample from the uniform ``[a, b)`` distribution.

        No check is made that ``a <= b``.
        """
        return a + self.random() * (b - a)

    def normal(self, mean: float = 0.0, variance: float = 1.0) -> float:
        """
        Sample from a normal distribution with the Marsaglia polar method.

        Args:
            mean (float): The mean. Default is 0.
            variance (float): The variance. Default is 1.

        Returns:
            float: Gaussian sample.
        """
        while True:
            v1 = 2 * self.random() - 1
            v2 = 2 * self.random() - 1
            s = v1 * v1 + v2 * v2
            # s == 0 would give log(0) / 0.
            if 0 < s <= 1:
                break
        result = v1 * math.sqrt(-2 * math.log(s) / s)
        return mean + math.sqrt(variance) * result

    def randint(self, high: int) -> int:
        """Return an integer in ``[0, high)`` using a single draw."""
        return int(self.random() * high)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self.seed!r}, draws={self.draws})"
