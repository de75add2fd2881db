"""Heatmap generation for robot positioning over a match."""

from __future__ import annotations

from typing import Any, Sequence

from ..trace.types import TimePoint


def generate_position_heatmap(
    points: Sequence[TimePoint],
    x_bins: int = 24,
    y_bins: int = 12,
) -> dict[str, Any]:
    """Generate a position occupancy heatmap from trace points.

    Args:
        points: Trace points in normalized field coordinates
        x_bins: Grid columns across the field width
        y_bins: Grid rows across the field height

    Returns:
        Dictionary with x_bins, y_bins and ``values``: a y_bins x x_bins grid of
        occupancy fractions summing to 1 (all zeros for no points)
    """
    if x_bins < 1 or y_bins < 1:
        raise ValueError("heatmap needs at least one bin per axis")

    # Initialize grid
    grid = [[0.0 for _ in range(x_bins)] for _ in range(y_bins)]
    total = 0

    for point in points:
        x_idx, y_idx = _position_to_grid_coords(point.x, point.y, x_bins, y_bins)
        grid[y_idx][x_idx] += 1.0
        total += 1

    # Normalize to [0, 1] range
    if total > 0:
        for y in range(y_bins):
            for x in range(x_bins):
                grid[y][x] = grid[y][x] / total

    return {"x_bins": x_bins, "y_bins": y_bins, "values": grid}


def _position_to_grid_coords(
    x: float, y: float, x_bins: int, y_bins: int
) -> tuple[int, int]:
    """Convert a normalized position to grid cell indices."""
    x_idx = int(x * x_bins)
    y_idx = int(y * y_bins)

    # Clamp to valid range (x == 1.0 belongs to the last column)
    x_idx = max(0, min(x_bins - 1, x_idx))
    y_idx = max(0, min(y_bins - 1, y_idx))

    return x_idx, y_idx
