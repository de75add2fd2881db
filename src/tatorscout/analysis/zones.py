"""Polygon zones on the normalized field and time spent inside them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from ..trace.types import TimePoint

Point2D = tuple[float, float]
Polygon = Sequence[Point2D]


@dataclass(frozen=True)
class AllianceZone:
    """A field area that exists once per alliance."""

    red: Polygon
    blue: Polygon

    def for_alliance(self, alliance: str) -> Polygon | None:
        if alliance == "red":
            return self.red
        if alliance == "blue":
            return self.blue
        return None


def is_inside(point: Point2D, polygon: Polygon) -> bool:
    """Check if a point lies inside a polygon (even-odd rule).

    Args:
        point: (x, y) in normalized field coordinates
        polygon: Vertices in order; fewer than three never contain anything

    Returns:
        True if the point is inside
    """
    if len(polygon) < 3:
        return False

    x, y = point
    inside = False
    j = len(polygon) - 1
    for i in range(len(polygon)):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


def occupancy(points: Sequence[TimePoint], polygon: Polygon) -> int:
    """Number of samples positioned inside the polygon."""
    return sum(1 for p in points if is_inside(p.position, polygon))


def dwell_seconds(
    points: Sequence[TimePoint], polygon: Polygon, sample_rate: int
) -> float:
    return occupancy(points, polygon) / sample_rate


def zone_occupancy(
    points: Sequence[TimePoint], zones: Mapping[str, Polygon], sample_rate: int
) -> dict[str, float]:
    """Seconds spent in each named zone.

    Zones may overlap, so the values need not sum to the match length.
    """
    return {
        name: dwell_seconds(points, polygon, sample_rate)
        for name, polygon in zones.items()
    }
