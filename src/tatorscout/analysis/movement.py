"""Movement and speed analysis for robot traces.

This module computes one movement summary per trace:
- Average and peak speed over the match
- Total distance, overall and per match phase
- Time spent effectively stationary
- Speed distribution histogram
- Action counts

All calculations are deterministic functions of the trace points with
fixed thresholds, so results are stable across runs.
"""

from __future__ import annotations

import math
from typing import Any

from ..grid import SECTION_NAMES
from ..trace.trace import DEFAULT_STATIONARY_THRESHOLD, Trace
from . import kinematics

DEFAULT_HISTOGRAM_BINS = 10


def analyze_movement(
    trace: Trace,
    threshold: float = DEFAULT_STATIONARY_THRESHOLD,
    bins: int = DEFAULT_HISTOGRAM_BINS,
) -> dict[str, Any]:
    """Analyze movement metrics for one robot trace.

    Args:
        trace: Dense robot trace
        threshold: Speed below which the robot counts as not moving
        bins: Number of velocity histogram buckets

    Returns:
        JSON-serializable dictionary:
        {
            "avg_velocity": float,
            "max_velocity": float,
            "distance": float,
            "seconds_not_moving": float,
            "velocity_histogram": {"bins": [int], "labels": [float]},
            "action_counts": {code: int},
            "sections": {"auto": {"distance": float, "actions": int}, ...}
        }
    """
    series = trace.velocity_series()
    avg = kinematics.mean(series)
    hist = kinematics.histogram(series, bins)

    sections = {}
    for name in SECTION_NAMES:
        points = trace.get_section(name)
        sections[name] = {
            "distance": round(sum(kinematics.step_distances(points, trace.grid)), 2),
            "actions": sum(1 for p in points if p.has_action),
        }

    return {
        "avg_velocity": 0.0 if math.isnan(avg) else round(avg, 2),
        "max_velocity": round(max(series), 2) if series else 0.0,
        "distance": round(sum(kinematics.step_distances(trace.points, trace.grid)), 2),
        "seconds_not_moving": round(
            kinematics.seconds_below(series, threshold, trace.grid.sample_rate), 2
        ),
        "velocity_histogram": {
            "bins": hist.bins,
            "labels": [round(label, 3) for label in hist.labels],
        },
        "action_counts": trace.action_counts(),
        "sections": sections,
    }
