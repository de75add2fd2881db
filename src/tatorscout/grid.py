"""Fixed time grid and field dimensions for trace analysis.

This module defines the canonical discrete time grid every trace conforms
to, together with the physical field size used to turn normalized
coordinates into real distances.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

# Sampling
SAMPLE_RATE: int = 4  # samples per second
MATCH_SECONDS: int = 150  # 15s auto + 120s teleop + 15s endgame
GRID_SIZE: int = MATCH_SECONDS * SAMPLE_RATE

# Time indices are encoded in two base-52 characters capped at 999
MAX_GRID_SIZE: int = 1000

# Physical field size (feet) for normalized x/y in [0, 1]
FIELD_WIDTH: float = 54.0
FIELD_HEIGHT: float = 27.0

# Match phases in seconds from match start, [start, end)
SECTION_SECONDS: dict[str, tuple[float, float]] = {
    "auto": (0.0, 15.0),
    "teleop": (15.0, 135.0),
    "endgame": (135.0, 150.0),
}

SECTION_NAMES: tuple[str, ...] = ("auto", "teleop", "endgame")


@dataclass(frozen=True)
class FixedPointGrid:
    """Discrete time grid and field geometry shared by all traces.

    Coordinate system:
    - index: 0 to size - 1, one slot every 1 / sample_rate seconds
    - x: 0 to 1 across the field width
    - y: 0 to 1 across the field height
    """

    size: int = GRID_SIZE
    sample_rate: int = SAMPLE_RATE
    field_width: float = FIELD_WIDTH
    field_height: float = FIELD_HEIGHT
    sections: Mapping[str, tuple[int, int]] = field(
        default_factory=lambda: sections_from_seconds(SECTION_SECONDS, SAMPLE_RATE)
    )

    def __post_init__(self):
        """Validate grid parameters after initialization."""
        if not 1 <= self.size <= MAX_GRID_SIZE:
            raise ValueError(
                f"grid size must be between 1 and {MAX_GRID_SIZE}, got {self.size}"
            )

        if self.sample_rate <= 0:
            raise ValueError("sample_rate must be positive")

        if self.field_width <= 0 or self.field_height <= 0:
            raise ValueError("field dimensions must be positive")

    @property
    def duration_seconds(self) -> float:
        return self.size / self.sample_rate

    def contains(self, index: int) -> bool:
        """Check if a time index lies on the grid."""
        return 0 <= index < self.size

    def index_to_seconds(self, index: int) -> float:
        return index / self.sample_rate

    def seconds_to_index(self, seconds: float) -> int:
        return int(round(seconds * self.sample_rate))

    def section_bounds(self, section: str) -> tuple[int, int] | None:
        """Get the [start, end) index range for a match phase, clipped to the grid.

        Returns:
            Index range, or None for an unknown section name
        """
        bounds = self.sections.get(section)
        if bounds is None:
            return None
        start, end = bounds
        start = min(max(0, start), self.size)
        return start, max(start, min(self.size, end))

    def section_of(self, index: int) -> str | None:
        """Get the match phase a time index falls in, if any."""
        for name, (start, end) in self.sections.items():
            if start <= index < end:
                return name
        return None


def sections_from_seconds(
    seconds: Mapping[str, tuple[float, float]], sample_rate: int
) -> dict[str, tuple[int, int]]:
    """Convert phase boundaries in seconds to grid index ranges.

    Args:
        seconds: Mapping of section name to (start, end) seconds
        sample_rate: Samples per second

    Returns:
        Mapping of section name to (start, end) indices
    """
    return {
        name: (int(round(start * sample_rate)), int(round(end * sample_rate)))
        for name, (start, end) in seconds.items()
    }


# Export commonly used grid
DEFAULT_GRID = FixedPointGrid()
