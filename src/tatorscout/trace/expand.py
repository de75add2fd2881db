"""Conversion between sparse and dense trace representations.

Recorded traces are bursty: a robot holds position for many samples and
only occasionally moves or acts. Storage keeps the sparse form; analysis
works on the dense form with one point per grid slot.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..grid import DEFAULT_GRID, FixedPointGrid
from .types import NO_ACTION, TimePoint

logger = logging.getLogger(__name__)


def is_dense(points: Sequence[TimePoint], grid: FixedPointGrid = DEFAULT_GRID) -> bool:
    """Check if points cover every grid slot exactly once, in order."""
    if len(points) != grid.size:
        return False
    return all(p.index == i for i, p in enumerate(points))


def expand(
    sparse: Sequence[TimePoint], grid: FixedPointGrid = DEFAULT_GRID
) -> list[TimePoint]:
    """Fill a sparse trace out to one point per grid slot.

    Missing slots take the position of the most recent earlier known point
    ((0, 0) before the first one) and no action. When an index appears more
    than once the first occurrence wins, and indices off the grid are
    dropped.

    Args:
        sparse: Points with unique, increasing indices (gaps allowed)
        grid: Target time grid

    Returns:
        Exactly ``grid.size`` points with indices 0..size-1

    Example:
        expand([TimePoint(0, 0.1, 0.1), TimePoint(5, 0.2, 0.2, "act")],
               FixedPointGrid(size=10))
        # slots 1-4 at (0.1, 0.1), slot 5 acts, slots 6-9 at (0.2, 0.2)
    """
    if is_dense(sparse, grid):
        return list(sparse)

    known: dict[int, TimePoint] = {}
    dropped = 0
    for point in sparse:
        if len(known) == grid.size:
            break
        if not grid.contains(point.index) or point.index in known:
            dropped += 1
            continue
        known[point.index] = point

    if len(sparse) > grid.size or dropped:
        logger.warning(
            f"Expanding {len(sparse)} points onto a {grid.size} slot grid: "
            f"dropped {dropped} duplicate or off-grid points"
        )

    dense: list[TimePoint] = []
    x, y = 0.0, 0.0
    for index in range(grid.size):
        point = known.get(index)
        if point is None:
            dense.append(TimePoint(index, x, y, NO_ACTION))
        else:
            dense.append(point)
            x, y = point.x, point.y

    return dense


def compact(dense: Sequence[TimePoint]) -> list[TimePoint]:
    """Remove redundant points from a dense trace.

    A point is kept if it is the first one, moves away from the last kept
    point, or carries an action. Dropped points are exactly the filler that
    expand() recreates by forward-filling positions.
    """
    sparse: list[TimePoint] = []
    last: TimePoint | None = None
    for point in dense:
        if (
            last is not None
            and point.position == last.position
            and point.action is NO_ACTION
        ):
            continue
        sparse.append(point)
        last = point
    return sparse
