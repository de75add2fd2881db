"""Aggregate statistics of per-trace metrics across many matches."""

from __future__ import annotations

import statistics
from typing import Any, Callable, Iterable, Sequence

from ..trace.trace import Trace


def summarize(values: Sequence[float]) -> dict[str, float]:
    """Summary statistics for a series of metric values.

    Returns:
        count, mean, median, min, max and population stddev; all zero for an
        empty series
    """
    if not values:
        return {
            "count": 0,
            "mean": 0.0,
            "median": 0.0,
            "min": 0.0,
            "max": 0.0,
            "stddev": 0.0,
        }

    return {
        "count": len(values),
        "mean": statistics.fmean(values),
        "median": statistics.median(values),
        "min": min(values),
        "max": max(values),
        "stddev": statistics.pstdev(values),
    }


def summarize_traces(
    traces: Iterable[Trace],
    metrics: dict[str, Callable[[Trace], float]],
) -> dict[str, dict[str, Any]]:
    """Apply each metric to every trace and summarize the results.

    Example:
        summarize_traces(team_traces, {
            "avg_velocity": Trace.average_velocity,
            "seconds_not_moving": Trace.seconds_not_moving,
        })
    """
    traces = list(traces)
    return {
        name: summarize([metric(trace) for trace in traces])
        for name, metric in metrics.items()
    }
