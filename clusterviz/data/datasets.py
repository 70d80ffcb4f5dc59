"""
Synthetic dataset generators.

This module provides small labeled 2D datasets (Gaussian blobs, spirals,
circles, moons, XOR, anisotropic blobs) and two regression surfaces. Every
generator has the signature ``(n_samples, noise, rng)`` where ``noise`` is a
level in ``[0, 1]`` and ``rng`` is the :class:`RandomSource` all randomness
is drawn from, in a fixed order.

Datasets built from several populations split ``n_samples`` with
:func:`split_counts`: the first populations absorb the remainder, so every
generator returns exactly ``n_samples`` examples.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from clusterviz.data.examples import Example, Point, distance
from clusterviz.data.splits import shuffle, split_train_test
from clusterviz.utils.configs import DatasetConfig
from clusterviz.utils.seed import RandomSource

logger = logging.getLogger(__name__)

DataGenerator = Callable[[int, float, RandomSource], List[Example]]

# Linear transform applied to the anisotropic blobs.
ANISO_TRANSFORM = np.array([[0.6, -0.6], [-0.4, 0.8]])


def split_counts(n_samples: int, parts: int) -> List[int]:
    """
    Split ``n_samples`` into ``parts`` population sizes.

    Population ``i`` receives ``n_samples // parts`` samples plus one if
    ``i < n_samples % parts``.

    Args:
        n_samples (int): Total number of samples, must be non-negative.
        parts (int): Number of populations.

    Returns:
        List[int]: Population sizes summing to ``n_samples``.
    """
    if n_samples < 0:
        raise ValueError(f"n_samples must be non-negative, got {n_samples}.")
    base, remainder = divmod(n_samples, parts)
    return [base + (1 if i < remainder else 0) for i in range(parts)]


def _variance_for_noise(noise: float) -> float:
    # Linear map of the noise domain [0, 0.5] onto the variance range [0.5, 4].
    return 0.5 + noise * (4 - 0.5) / 0.5


def _gaussian_blobs(
    blobs: Sequence[Tuple[float, float, float]],
    n_samples: int,
    noise: float,
    rng: RandomSource,
    transform: Optional[np.ndarray] = None,
) -> List[Example]:
    variance = _variance_for_noise(noise)
    points: List[Example] = []
    for (cx, cy, label), count in zip(blobs, split_counts(n_samples, len(blobs))):
        for _ in range(count):
            x = rng.normal(cx, variance)
            y = rng.normal(cy, variance)
            if transform is not None:
                x, y = (float(v) for v in transform @ np.array([x, y]))
            points.append(Example(x, y, label))
    return points


def classify_two_gauss_data(n_samples: int, noise: float, rng: RandomSource) -> List[Example]:
    """
    Generate two Gaussian blobs with opposite labels.

    Args:
        n_samples (int): Number of examples.
        noise (float): Noise level in ``[0, 1]``; scales the blob variance.
        rng (RandomSource): Random source.

    Returns:
        List[Example]: Positive blob at (2, 2), negative blob at (-2, -2).
    """
    return _gaussian_blobs([(2, 2, 1), (-2, -2, -1)], n_samples, noise, rng)


def classify_three_gauss_data(n_samples: int, noise: float, rng: RandomSource) -> List[Example]:
    """Generate three Gaussian blobs: a negative one bottom-left, positive ones bottom-right and top."""
    return _gaussian_blobs([(-3, -2, -1), (3, -2, 1), (0, 3, 1)], n_samples, noise, rng)


def cluster_anisotropic_data(n_samples: int, noise: float, rng: RandomSource) -> List[Example]:
    """
    Generate three Gaussian blobs sheared by :data:`ANISO_TRANSFORM`.

    The blobs carry the labels ``1``, ``-3`` and ``-4``. These are blob ids
    rather than ``{-1, 1}`` classes, which is why this generator is only
    registered in :data:`CLUSTERING_DATASETS`.

    Args:
        n_samples (int): Number of examples.
        noise (float): Noise level in ``[0, 1]``; scales the source variance.
        rng (RandomSource): Random source.

    Returns:
        List[Example]: Elongated, sheared clusters.
    """
    blobs = [(-2, 2, 1), (2, 2, -3), (0, -3, -4)]
    return _gaussian_blobs(blobs, n_samples, noise, rng, transform=ANISO_TRANSFORM)


def classify_spiral_data(n_samples: int, noise: float, rng: RandomSource) -> List[Example]:
    """
    Generate two interleaved Archimedean spirals.

    Args:
        n_samples (int): Number of examples.
        noise (float): Noise level in ``[0, 1]``; scales the positional jitter.
        rng (RandomSource): Random source.

    Returns:
        List[Example]: Positive arm (phase 0) followed by the negative arm
        (phase pi).
    """
    points: List[Example] = []

    def gen_spiral(count: int, delta_t: float, label: int) -> None:
        for i in range(count):
            r = i / count * 5
            t = 1.75 * i / count * 2 * math.pi + delta_t
            x = r * math.sin(t) + rng.uniform(-1, 1) * noise
            y = r * math.cos(t) + rng.uniform(-1, 1) * noise
            points.append(Example(x, y, label))

    n_positive, n_negative = split_counts(n_samples, 2)
    gen_spiral(n_positive, 0, 1)
    gen_spiral(n_negative, math.pi, -1)
    return points


def classify_circle_data(n_samples: int, noise: float, rng: RandomSource) -> List[Example]:
    """
    Generate a disk surrounded by a ring.

    Ring radii widen with ``noise``. Labels are computed from a jittered copy
    of each point, so noise can mislabel points near the boundary; the stored
    coordinates are not jittered.

    Args:
        n_samples (int): Number of examples.
        noise (float): Noise level in ``[0, 1]``.
        rng (RandomSource): Random source.

    Returns:
        List[Example]: Inner population followed by the outer ring.
    """
    points: List[Example] = []
    radius = 5
    origin = Point(0, 0)

    def get_circle_label(p: Point) -> int:
        return 1 if distance(p, origin) < radius * 0.5 else -1

    def gen_circle(count: int, r_min: float, r_max: float) -> None:
        for _ in range(count):
            r = rng.uniform(r_min, r_max)
            angle = rng.uniform(0, 2 * math.pi)
            x = r * math.sin(angle)
            y = r * math.cos(angle)
            noise_x = rng.uniform(-radius, radius) * noise
            noise_y = rng.uniform(-radius, radius) * noise
            label = get_circle_label(Point(x + noise_x, y + noise_y))
            points.append(Example(x, y, label))

    n_inner, n_outer = split_counts(n_samples, 2)
    gen_circle(n_inner, 0, radius * 0.5 * (1 + noise))
    gen_circle(n_outer, radius * 0.7 * (1 - 0.5 * noise), radius * (1 + noise))
    return points


def _arc_distance(p: Point, center: Point, radius: float, upper: bool) -> float:
    """Distance from ``p`` to the upper or lower half circle around ``center``."""
    if (p.y >= center.y) == upper:
        return abs(distance(p, center) - radius)
    left = Point(center.x - radius, center.y)
    right = Point(center.x + radius, center.y)
    return min(distance(p, left), distance(p, right))


def classify_moon_data(n_samples: int, noise: float, rng: RandomSource) -> List[Example]:
    """
    Generate two interleaving half-moons.

    Each moon is an arc of a circle of radius 3; the lower moon is the upper
    one translated by (3, 1.5) and flipped. Points are sampled with a radius
    in ``[3 * (0.8 - noise), 3]``, so the arcs thicken as noise grows. A
    point is labeled ``1`` when it lies closer to the upper arc than to the
    lower one.

    Args:
        n_samples (int): Number of examples.
        noise (float): Noise level in ``[0, 1]``.
        rng (RandomSource): Random source.

    Returns:
        List[Example]: Upper moon followed by the lower moon.
    """
    points: List[Example] = []
    moon_radius = 3.0
    arc_radius = moon_radius * 0.9
    upper_center = Point(-1.5, -0.75)
    lower_center = Point(1.5, 0.75)
    r_min = moon_radius * max(0.8 - noise, 0.0)

    def get_moon_label(p: Point) -> int:
        d_upper = _arc_distance(p, upper_center, arc_radius, upper=True)
        d_lower = _arc_distance(p, lower_center, arc_radius, upper=False)
        return 1 if d_upper < d_lower else -1

    def gen_moon(count: int, center: Point, angle_start: float) -> None:
        for _ in range(count):
            r = rng.uniform(r_min, moon_radius)
            angle = rng.uniform(angle_start, angle_start + math.pi)
            p = Point(center.x + r * math.cos(angle), center.y + r * math.sin(angle))
            points.append(Example(p.x, p.y, get_moon_label(p)))

    n_upper, n_lower = split_counts(n_samples, 2)
    gen_moon(n_upper, upper_center, 0.0)
    gen_moon(n_lower, lower_center, math.pi)
    return points


def classify_xor_data(n_samples: int, noise: float, rng: RandomSource) -> List[Example]:
    """
    Generate XOR quadrants: positive where ``x * y >= 0``.

    Points are pushed ``0.3`` away from both axes. The label is evaluated on
    a jittered copy of the point.

    Args:
        n_samples (int): Number of examples.
        noise (float): Noise level in ``[0, 1]``.
        rng (RandomSource): Random source.

    Returns:
        List[Example]: XOR-labeled examples.
    """
    if n_samples < 0:
        raise ValueError(f"n_samples must be non-negative, got {n_samples}.")

    points: List[Example] = []
    padding = 0.3
    radius = 5

    def get_xor_label(p: Point) -> int:
        return 1 if p.x * p.y >= 0 else -1

    for _ in range(n_samples):
        x = rng.uniform(-radius, radius)
        x += padding if x > 0 else -padding
        y = rng.uniform(-radius, radius)
        y += padding if y > 0 else -padding

        noise_x = rng.uniform(-radius, radius) * noise
        noise_y = rng.uniform(-radius, radius) * noise
        label = get_xor_label(Point(x + noise_x, y + noise_y))
        points.append(Example(x, y, label))

    return points


def _regress(
    n_samples: int,
    noise: float,
    rng: RandomSource,
    get_label: Callable[[float, float], float],
) -> List[Example]:
    if n_samples < 0:
        raise ValueError(f"n_samples must be non-negative, got {n_samples}.")

    radius = 6
    points: List[Example] = []
    for _ in range(n_samples):
        x = rng.uniform(-radius, radius)
        y = rng.uniform(-radius, radius)
        noise_x = rng.uniform(-radius, radius) * noise
        noise_y = rng.uniform(-radius, radius) * noise
        points.append(Example(x, y, get_label(x + noise_x, y + noise_y)))
    return points


def regress_plane(n_samples: int, noise: float, rng: RandomSource) -> List[Example]:
    """
    Generate a regression plane whose target grows with ``x + y``.

    The target maps ``x + y`` from ``[-12, 12]`` onto ``[-1, 1]``. Jitter can
    push ``x + y`` past that range, so the target is clamped.
    """

    def get_label(x: float, y: float) -> float:
        return min(max((x + y) / 12, -1.0), 1.0)

    return _regress(n_samples, noise, rng, get_label)


# (cx, cy, sign) of the landmarks of the Gaussian regression surface.
REGRESSION_LANDMARKS: Tuple[Tuple[float, float, int], ...] = (
    (-4, 2.5, 1),
    (0, 2.5, -1),
    (4, 2.5, 1),
    (-4, -2.5, -1),
    (0, -2.5, 1),
    (4, -2.5, -1),
)


def regress_gaussian(n_samples: int, noise: float, rng: RandomSource) -> List[Example]:
    """
    Generate a regression surface made of six signed bumps.

    The target at a point is the landmark response with the largest absolute
    value, where a landmark responds with ``sign * clamp(1 - d / 2, 0, 1)``
    at distance ``d``.
    """

    def get_label(x: float, y: float) -> float:
        p = Point(x, y)
        label = 0.0
        for cx, cy, sign in REGRESSION_LANDMARKS:
            falloff = min(max(1 - distance(p, Point(cx, cy)) / 2, 0.0), 1.0)
            new_label = sign * falloff
            if abs(new_label) > abs(label):
                label = new_label
        return label

    return _regress(n_samples, noise, rng, get_label)


# Map between dataset names and functions generating classification data.
CLASSIFICATION_DATASETS: Dict[str, DataGenerator] = {
    "circle": classify_circle_data,
    "xor": classify_xor_data,
    "gauss": classify_two_gauss_data,
    "gauss3": classify_three_gauss_data,
    "spiral": classify_spiral_data,
    "moon": classify_moon_data,
}

# Map between dataset names and functions generating regression data.
REGRESSION_DATASETS: Dict[str, DataGenerator] = {
    "reg-plane": regress_plane,
    "reg-gauss": regress_gaussian,
}

# Datasets meant for clustering only; their labels are blob ids.
CLUSTERING_DATASETS: Dict[str, DataGenerator] = {
    "aniso": cluster_anisotropic_data,
}


def get_generator(name: str) -> DataGenerator:
    """
    Look up a dataset generator by name in every registry.

    Args:
        name (str): Registered dataset name.

    Returns:
        DataGenerator: The matching generator.
    """
    for registry in (CLASSIFICATION_DATASETS, REGRESSION_DATASETS, CLUSTERING_DATASETS):
        if name in registry:
            return registry[name]
    raise ValueError(f"Unknown dataset: {name}")


@dataclass
class GeneratedData:
    """
    Output of :func:`generate_data`.

    Args:
        examples (List[Example]): All generated examples, shuffled.
        train (List[Example]): Training split.
        test (List[Example]): Test split.
        seed (str): Seed the random source was started from.
    """

    examples: List[Example]
    train: List[Example]
    test: List[Example]
    seed: str


def generate_data(config: DatasetConfig, rng: Optional[RandomSource] = None) -> GeneratedData:
    """
    Seed, generate, shuffle and split a dataset described by ``config``.

    Args:
        config (DatasetConfig): Dataset configuration. ``noise`` is a
            percentage and is scaled to ``[0, 1]`` before generation.
        rng (Optional[RandomSource]): Random source to use. It is reseeded
            with ``config.seed`` when one is set; a new source is created when
            omitted.

    Returns:
        GeneratedData: Examples, splits and the seed used.
    """
    if not 0 <= config.noise <= 100:
        raise ValueError(f"DatasetConfig.noise must be a percentage in [0, 100], got {config.noise}.")

    registry = REGRESSION_DATASETS if config.problem == "regression" else CLASSIFICATION_DATASETS
    if config.name in registry:
        generator = registry[config.name]
    elif config.name in CLUSTERING_DATASETS and config.problem == "classification":
        generator = CLUSTERING_DATASETS[config.name]
    else:
        raise ValueError(f"Dataset {config.name!r} is not available for {config.problem}.")

    if rng is None:
        rng = RandomSource(config.seed)
    elif config.seed is not None:
        rng.reseed(config.seed)

    n_samples = config.resolved_n_samples()
    examples = generator(n_samples, config.noise / 100, rng)
    shuffle(examples, rng)
    train, test = split_train_test(examples, config.perc_train)

    logger.info(
        "Generated %d %s examples (seed=%s, noise=%.0f%%): %d train / %d test",
        len(examples),
        config.name,
        rng.seed,
        config.noise,
        len(train),
        len(test),
    )
    return GeneratedData(examples=examples, train=train, test=test, seed=str(rng.seed))
