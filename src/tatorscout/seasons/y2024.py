"""2024 CRESCENDO field layout, actions and scoring."""

from __future__ import annotations

from typing import Any

from ..analysis.zones import AllianceZone, is_inside
from ..trace.trace import Trace
from .season import UNKNOWN_ALLIANCE, Season

# Neutral stage corner areas
GLOBAL_ZONES = {
    "sta1": ((0.026, 0.227), (0.01, 0.16), (0.1, 0.028), (0.129, 0.067)),
    "sta2": ((0.869, 0.064), (0.9, 0.03), (0.99, 0.16), (0.975, 0.222)),
    "sta3": ((0.975, 0.776), (0.99, 0.846), (0.903, 0.969), (0.871, 0.937)),
    "sta4": ((0.027, 0.776), (0.131, 0.939), (0.097, 0.982), (0.009, 0.85)),
}

ALLIANCE_ZONES = {
    "stages": AllianceZone(
        blue=(
            (0.362, 0.330), (0.375, 0.347), (0.377, 0.648),
            (0.361, 0.665), (0.241, 0.518), (0.243, 0.476),
        ),
        red=(
            (0.624, 0.346), (0.639, 0.331), (0.758, 0.479),
            (0.759, 0.519), (0.639, 0.670), (0.623, 0.651),
        ),
    ),
    "amps": AllianceZone(
        blue=((0.246, 0.044), (0.245, 0.095), (0.081, 0.092), (0.082, 0.046)),
        red=((0.755, 0.044), (0.754, 0.092), (0.919, 0.095), (0.919, 0.044)),
    ),
    "zones": AllianceZone(
        blue=(
            (0.377, 0.046), (0.077, 0.038), (0.079, 0.226), (0.124, 0.282),
            (0.124, 0.398), (0.078, 0.451), (0.080, 0.772), (0.175, 0.892),
            (0.173, 0.953), (0.376, 0.949),
        ),
        red=(
            (0.624, 0.043), (0.920, 0.043), (0.920, 0.225), (0.874, 0.283),
            (0.875, 0.396), (0.920, 0.454), (0.920, 0.771), (0.827, 0.886),
            (0.826, 0.952), (0.624, 0.952),
        ),
    ),
    "srcs": AllianceZone(
        blue=((0.827, 0.949), (0.921, 0.832), (0.919, 0.773), (0.828, 0.889)),
        red=((0.080, 0.776), (0.079, 0.830), (0.173, 0.950), (0.174, 0.891)),
    ),
    "auto": AllianceZone(
        blue=(
            (0.079, 0.094), (0.175, 0.092), (0.176, 0.950), (0.080, 0.833),
            (0.080, 0.455), (0.124, 0.400), (0.124, 0.282), (0.080, 0.225),
        ),
        red=(
            (0.823, 0.095), (0.919, 0.097), (0.920, 0.224), (0.875, 0.285),
            (0.875, 0.396), (0.921, 0.449), (0.921, 0.832), (0.827, 0.949),
        ),
    ),
}

BORDER = (
    (0.920, 0.042), (0.920, 0.227), (0.875, 0.282), (0.875, 0.395),
    (0.921, 0.456), (0.921, 0.833), (0.824, 0.955), (0.174, 0.955),
    (0.079, 0.832), (0.079, 0.449), (0.126, 0.399), (0.124, 0.283),
    (0.080, 0.224), (0.080, 0.042),
)

ACTIONS = {
    "spk": "Speaker",
    "amp": "Amp",
    "src": "Source",
    "trp": "Trap",
    "clb": "Climb",
    "lob": "Lob",
    "cne": "Cone",
    "cbe": "Cube",
    "bal": "Balance",
    "pck": "Pick",
    "nte": "Note",
}

SCORE_TABLE = {
    "auto": {"spk": 5, "amp": 2},
    "teleop": {"spk": 2, "lob": 0, "amp": 1},
    "endgame": {"clb": 3, "park": 2, "trp": 5},
}


def _empty_score() -> dict[str, Any]:
    return {
        "auto": {"spk": 0, "amp": 0, "total": 0},
        "teleop": {"spk": 0, "amp": 0, "lob": 0, "total": 0},
        "endgame": {"clb": 0, "park": 0, "trp": 0, "total": 0},
        "total": 0,
    }


def score_2024(season: Season, trace: Trace) -> dict[str, Any]:
    """Score a trace under CRESCENDO rules.

    Speaker and amp notes score at auto or teleop value depending on when
    they happen; climbs and traps score as endgame whenever they happen. A
    robot that never climbs but finishes inside its stage earns park points.
    """
    score = _empty_score()
    alliance = season.get_alliance(trace)
    if alliance == UNKNOWN_ALLIANCE:
        return score

    table = season.score_table

    for p in trace.points:
        if season.period_of(p.index) == "auto":
            if p.action in ("spk", "amp"):
                score["auto"][p.action] += table["auto"][p.action]
        elif p.action in ("spk", "amp", "lob"):
            score["teleop"][p.action] += table["teleop"][p.action]
        elif p.action in ("clb", "trp"):
            score["endgame"][p.action] += table["endgame"][p.action]

    stage = season.alliance_zones["stages"].for_alliance(alliance)
    no_climb = not trace.filter_by_action("clb")
    last = trace.points[-1]
    if no_climb and is_inside(last.position, stage):
        score["endgame"]["park"] += table["endgame"]["park"]

    score["auto"]["total"] = score["auto"]["spk"] + score["auto"]["amp"]
    score["teleop"]["total"] = score["teleop"]["spk"] + score["teleop"]["amp"]
    score["endgame"]["total"] = score["endgame"]["clb"] + score["endgame"]["park"]
    score["total"] = (
        score["auto"]["total"] + score["teleop"]["total"] + score["endgame"]["total"]
    )
    return score


def climb_times(season: Season, trace: Trace) -> list[int]:
    """Samples spent in the alliance stage before each climb or trap.

    Returns:
        One count per clb/trp action, in quarter-second samples
    """
    alliance = season.get_alliance(trace)
    if alliance == UNKNOWN_ALLIANCE:
        return []
    stage = season.alliance_zones["stages"].for_alliance(alliance)

    times = []
    time = 0
    for p in trace.points:
        if is_inside(p.position, stage):
            time += 1
        else:
            time = 0

        if p.action in ("clb", "trp"):
            times.append(time)
            time = 0

    return times


def must_ground_pick(trace: Trace) -> bool:
    """True when there were more speaker shots than source pickups plus the preload."""
    return len(trace.filter_by_action("spk")) > len(trace.filter_by_action("src")) + 1


SEASON_2024 = Season(
    year=2024,
    name="CRESCENDO",
    actions=ACTIONS,
    global_zones=GLOBAL_ZONES,
    alliance_zones=ALLIANCE_ZONES,
    border=BORDER,
    score_table=SCORE_TABLE,
    scorer=score_2024,
)
