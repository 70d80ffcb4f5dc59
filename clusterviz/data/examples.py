"""
Point and example records shared by the generators and the clustering layer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Protocol, Tuple


class HasXY(Protocol):
    x: float
    y: float


@dataclass(frozen=True)
class Point:
    """An immutable 2D coordinate pair."""

    x: float
    y: float


@dataclass
class Example:
    """
    A two dimensional example: coordinates, label and clustering fields.

    Args:
        x (float): Horizontal coordinate.
        y (float): Vertical coordinate.
        label (float): ``-1`` or ``1`` for classification data, a value in
            ``[-1, 1]`` for regression data.
        cluster (int): Assigned cluster id. ``0`` means unassigned, ``-1``
            marks DBSCAN noise.
        is_centroid (bool): True for centroid markers added after clustering.
        vote_counts (Optional[Tuple[int, int]]): Vote tallies of an ensemble
            classifier, when one has run.
    """

    x: float
    y: float
    label: float
    cluster: int = 0
    is_centroid: bool = False
    vote_counts: Optional[Tuple[int, int]] = None


def distance(a: HasXY, b: HasXY) -> float:
    """Return the Euclidean distance between two points in the plane."""
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy)
