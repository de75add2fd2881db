"""Season definitions and the registry that selects them by year.

Example usage:
    from tatorscout.seasons import default_registry

    registry = default_registry()
    season = registry.get(2024)
    alliance = season.get_alliance(trace)
    score = season.parse_score(trace)
"""

from __future__ import annotations

from ..errors import SeasonNotFoundError
from .season import ALLIANCES, UNKNOWN_ALLIANCE, Season
from .y2024 import SEASON_2024
from .y2025 import SEASON_2025


class SeasonRegistry:
    """Seasons keyed by year.

    Built once at startup and passed to whatever needs season rules.
    """

    def __init__(self, seasons: list[Season] | None = None):
        self._seasons: dict[int, Season] = {}
        for season in seasons or []:
            self.register(season)

    def register(self, season: Season) -> None:
        """Register a season under its year.

        Raises:
            ValueError: If the year is already registered
        """
        if season.year in self._seasons:
            raise ValueError(f"Season {season.year} is already registered")
        self._seasons[season.year] = season

    def get(self, year: int) -> Season:
        """Get a season by year.

        Raises:
            SeasonNotFoundError: If the year is not registered
        """
        if year not in self._seasons:
            raise SeasonNotFoundError(year, self.years())
        return self._seasons[year]

    def years(self) -> list[int]:
        return sorted(self._seasons)

    def __contains__(self, year: int) -> bool:
        return year in self._seasons

    def __len__(self) -> int:
        return len(self._seasons)


def default_registry() -> SeasonRegistry:
    """Create a registry holding every bundled season."""
    return SeasonRegistry([SEASON_2024, SEASON_2025])


# Export public API
__all__ = [
    "ALLIANCES",
    "UNKNOWN_ALLIANCE",
    "Season",
    "SeasonRegistry",
    "SEASON_2024",
    "SEASON_2025",
    "default_registry",
]
