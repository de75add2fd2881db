"""Velocity and dwell-time calculations over trace points.

All functions are pure and never raise on short or empty input: a series
computed from fewer than two points is empty, and statistics over an empty
series fall back to 0 or NaN as documented per function.
"""

from __future__ import annotations

import math
from typing import Sequence

from ..grid import DEFAULT_GRID, FixedPointGrid
from ..trace.types import Histogram, TimePoint


def step_distances(
    points: Sequence[TimePoint], grid: FixedPointGrid = DEFAULT_GRID
) -> list[float]:
    """Physical distance covered between each pair of adjacent samples."""
    distances = []
    for prev, curr in zip(points, points[1:]):
        dx = (curr.x - prev.x) * grid.field_width
        dy = (curr.y - prev.y) * grid.field_height
        distances.append(math.hypot(dx, dy))
    return distances


def velocity_series(
    points: Sequence[TimePoint], grid: FixedPointGrid = DEFAULT_GRID
) -> list[float]:
    """Speed in field units per second between adjacent samples.

    Returns:
        len(points) - 1 values (empty for fewer than two points)
    """
    return [d * grid.sample_rate for d in step_distances(points, grid)]


def histogram(values: Sequence[float], bins: int) -> Histogram:
    """Bucket values into ``bins`` equal-width buckets spanning [0, max).

    The bucket width is max / bins, or 1 when every value is 0. A value equal
    to max lands in the last bucket. Labels are bucket midpoints.

    Example:
        histogram([0, 0, 10, 10], 4)
        # Histogram(bins=[2, 0, 0, 2], labels=[1.25, 3.75, 6.25, 8.75])
    """
    if bins < 1:
        raise ValueError(f"bins must be >= 1, got {bins}")
    if not values:
        return Histogram([], [])

    peak = max(values)
    width = peak / bins if peak > 0 else 1.0

    counts = [0] * bins
    for v in values:
        bucket = int(math.floor(v / width))
        counts[max(0, min(bins - 1, bucket))] += 1

    labels = [(i + 0.5) * width for i in range(bins)]
    return Histogram(counts, labels)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean; NaN for an empty series."""
    if not values:
        return math.nan
    return math.fsum(values) / len(values)


def seconds_below(
    values: Sequence[float], threshold: float, sample_rate: int
) -> float:
    """Time spent with speed strictly below threshold."""
    samples = sum(1 for v in values if v < threshold)
    return samples / sample_rate
