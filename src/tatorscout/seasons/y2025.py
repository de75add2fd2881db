"""2025 REEFSCAPE field layout, actions and scoring."""

from __future__ import annotations

from typing import Any

from ..analysis.zones import AllianceZone
from ..trace.trace import Trace
from .season import Season

# Coral stations in the four corners
GLOBAL_ZONES = {
    "sta1": ((0.026, 0.227), (0.01, 0.16), (0.1, 0.028), (0.129, 0.067)),
    "sta2": ((0.869, 0.064), (0.9, 0.03), (0.99, 0.16), (0.975, 0.222)),
    "sta3": ((0.975, 0.776), (0.99, 0.846), (0.903, 0.969), (0.871, 0.937)),
    "sta4": ((0.027, 0.776), (0.131, 0.939), (0.097, 0.982), (0.009, 0.85)),
}

ALLIANCE_ZONES = {
    "auto": AllianceZone(
        red=((0.435, 0.066), (0.565, 0.067), (0.567, 0.51), (0.437, 0.502)),
        blue=((0.436, 0.506), (0.566, 0.51), (0.567, 0.935), (0.435, 0.935)),
    ),
    "zones": AllianceZone(
        blue=(
            (0.5, 0.064), (0.882, 0.067), (0.976, 0.205),
            (0.978, 0.798), (0.888, 0.937), (0.505, 0.935),
        ),
        red=(
            (0.499, 0.064), (0.501, 0.945), (0.12, 0.937),
            (0.027, 0.802), (0.025, 0.203), (0.12, 0.069),
        ),
    ),
    "reefs": AllianceZone(
        blue=(
            (0.472, 0.519), (0.47, 0.938), (0.884, 0.941), (0.977, 0.799),
            (0.975, 0.204), (0.886, 0.071), (0.531, 0.063), (0.529, 0.522),
        ),
        red=(
            (0.528, 0.486), (0.531, 0.068), (0.117, 0.071), (0.024, 0.205),
            (0.024, 0.804), (0.116, 0.935), (0.467, 0.936), (0.472, 0.489),
        ),
    ),
    "processors": AllianceZone(
        red=((0.608, 0.067), (0.608, 0.006), (0.674, 0.006), (0.674, 0.066)),
        blue=((0.327, 0.997), (0.326, 0.932), (0.392, 0.93), (0.394, 0.997)),
    ),
    "barges": AllianceZone(
        blue=((0.469, 0.067), (0.534, 0.069), (0.534, 0.489), (0.467, 0.487)),
        red=((0.471, 0.515), (0.53, 0.519), (0.532, 0.928), (0.468, 0.926)),
    ),
}

BORDER = (
    (0.117, 0.064), (0.882, 0.067), (0.975, 0.207), (0.977, 0.8),
    (0.885, 0.939), (0.119, 0.941), (0.026, 0.8), (0.025, 0.201),
)

ACTIONS = {
    "cl1": "Coral L1",
    "cl2": "Coral L2",
    "cl3": "Coral L3",
    "cl4": "Coral L4",
    "prc": "Processor",
    "brg": "Barge",
    "dpc": "Deep Climb",
    "shc": "Shallow Climb",
}

SCORE_TABLE = {
    "auto": {"cl1": 3, "cl2": 4, "cl3": 6, "cl4": 7, "brg": 4, "prc": 6},
    "teleop": {"cl1": 2, "cl2": 3, "cl3": 4, "cl4": 5, "brg": 4, "prc": 6},
    "endgame": {"shc": 6, "dpc": 12, "park": 2},
}

_PERIOD_ACTIONS = ("cl1", "cl2", "cl3", "cl4", "brg", "prc")
_CLIMB_ACTIONS = ("shc", "dpc")


def score_2025(season: Season, trace: Trace) -> dict[str, Any]:
    """Score a trace under REEFSCAPE rules.

    Coral, barge and processor actions score at auto or teleop value by
    time. Climbs score at endgame value. Park cannot be told apart from an
    unscored finish in a trace, so it is always 0.
    """
    table = season.score_table
    score = {
        "auto": {**{code: 0 for code in _PERIOD_ACTIONS}, "total": 0},
        "teleop": {**{code: 0 for code in _PERIOD_ACTIONS}, "total": 0},
        "endgame": {"shc": 0, "dpc": 0, "park": 0, "total": 0},
        "total": 0,
    }

    for p in trace.points:
        if p.action in _PERIOD_ACTIONS:
            period = "auto" if season.period_of(p.index) == "auto" else "teleop"
            score[period][p.action] += table[period][p.action]
        elif p.action in _CLIMB_ACTIONS:
            score["endgame"][p.action] += table["endgame"][p.action]

    for period in ("auto", "teleop", "endgame"):
        score[period]["total"] = sum(
            v for k, v in score[period].items() if k != "total"
        )
    score["total"] = (
        score["auto"]["total"] + score["teleop"]["total"] + score["endgame"]["total"]
    )
    return score


SEASON_2025 = Season(
    year=2025,
    name="REEFSCAPE",
    actions=ACTIONS,
    global_zones=GLOBAL_ZONES,
    alliance_zones=ALLIANCE_ZONES,
    border=BORDER,
    score_table=SCORE_TABLE,
    scorer=score_2025,
)
