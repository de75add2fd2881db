"""Season capability bundle: field zones, action codes and scoring rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from ..analysis.zones import AllianceZone, Polygon, is_inside, zone_occupancy
from ..trace.trace import Trace

ALLIANCES = ("red", "blue")
UNKNOWN_ALLIANCE = "unknown"

# period -> action code -> points
ScoreTable = Mapping[str, Mapping[str, int]]


@dataclass(frozen=True)
class Season:
    """Everything the analysis layer needs to know about one game year.

    A season is plain data plus a scoring function; seasons differ by the
    values they carry, not by subclassing.
    """

    year: int
    name: str
    actions: Mapping[str, str]  # code -> display name
    global_zones: Mapping[str, Polygon]
    alliance_zones: Mapping[str, AllianceZone]
    border: Polygon
    score_table: ScoreTable
    scorer: Callable[[Season, Trace], dict[str, Any]]
    # period -> [start, end) grid indices used for scoring
    sections: Mapping[str, tuple[int, int]] = field(
        default_factory=lambda: {"auto": (0, 66), "teleop": (66, 540), "endgame": (540, 600)}
    )

    def get_alliance(self, trace: Trace) -> str:
        """Determine alliance from the robot's starting position.

        Returns:
            "red" if the first point is in the red alliance zone, "blue"
            otherwise, "unknown" for an empty trace
        """
        if not len(trace):
            return UNKNOWN_ALLIANCE
        first = trace.points[0]
        if is_inside(first.position, self.alliance_zones["zones"].red):
            return "red"
        return "blue"

    def parse_score(self, trace: Trace) -> dict[str, Any]:
        """Score breakdown by match period for this season's rules."""
        return self.scorer(self, trace)

    def period_of(self, index: int) -> str | None:
        for name, (start, end) in self.sections.items():
            if start <= index < end:
                return name
        return None

    def is_known_action(self, code: str) -> bool:
        return code in self.actions

    def zone_time(self, trace: Trace, alliance: str | None = None) -> dict[str, float]:
        """Seconds spent in each global zone and, given an alliance, its own zones."""
        zones: dict[str, Polygon] = dict(self.global_zones)
        if alliance in ALLIANCES:
            for name, zone in self.alliance_zones.items():
                zones[name] = zone.for_alliance(alliance)
        return zone_occupancy(trace.points, zones, trace.grid.sample_rate)
