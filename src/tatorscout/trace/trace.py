"""The Trace aggregate: a validated dense trace and its analytics."""

from __future__ import annotations

import json
import logging
import math
from collections import Counter
from typing import Any, Callable, Iterator, Sequence

from ..analysis import kinematics
from ..errors import ParseError, TatorScoutError, ValidationError
from ..grid import DEFAULT_GRID, FixedPointGrid
from ..result import Result
from . import codec
from .expand import compact, expand
from .schema import validate_envelope, validate_payload, validate_points
from .types import Histogram, TimePoint

logger = logging.getLogger(__name__)

DEFAULT_STATIONARY_THRESHOLD = 0.1  # field units per second


class Trace:
    """Robot movement and actions over a full match.

    A Trace always holds exactly ``grid.size`` points, one per grid slot,
    in index order. Points are stored in a tuple and never mutated; every
    analytic is recomputed from them on demand.

    Example:
        result = Trace.parse('{"state": "compressed", "trace": "AAAAAA0"}')
        if result.ok:
            trace = result.value
            print(trace.average_velocity())
            print(trace.serialize(compressed=False))
    """

    def __init__(
        self, points: Sequence[TimePoint], grid: FixedPointGrid = DEFAULT_GRID
    ):
        """Create a trace from dense points.

        Raises:
            ValidationError: If points are not exactly grid.size long with
                indices 0..size-1 in order
        """
        if len(points) != grid.size:
            raise ValidationError(
                f"trace must have exactly {grid.size} points, got {len(points)}",
                "trace",
                grid.size,
                len(points),
            )
        for i, point in enumerate(points):
            if point.index != i:
                raise ValidationError(
                    f"expected time index {i}, got {point.index}",
                    f"trace[{i}][0]",
                    i,
                    point.index,
                )

        self._points: tuple[TimePoint, ...] = tuple(points)
        self._grid = grid

    @classmethod
    def from_sparse(
        cls, points: Sequence[TimePoint], grid: FixedPointGrid = DEFAULT_GRID
    ) -> Trace:
        """Expand sparse points onto the grid and wrap them."""
        return cls(expand(points, grid), grid)

    @classmethod
    def parse(cls, data: Any, grid: FixedPointGrid = DEFAULT_GRID) -> Result[Trace]:
        """Parse trace data from any supported external shape.

        Accepts JSON text, a bare point array (coordinates clamped into
        [0, 1]) or a tagged payload with state compressed, parsed or expanded.
        Never raises for malformed input.

        Args:
            data: Raw trace data
            grid: Grid the trace must conform to

        Returns:
            Result holding the Trace, or a ParseError describing the failure
        """
        try:
            return Result.success(cls._parse(data, grid))
        except ParseError as e:
            logger.debug(f"Trace parse failed: {e}")
            return Result.failure(e)
        except RecursionError as e:
            logger.debug("Trace parse failed: input nested too deeply")
            return Result.failure(ParseError("input nested too deeply", e))
        except TatorScoutError as e:
            logger.debug(f"Trace parse failed: {e}")
            return Result.failure(ParseError(str(e), e))

    @classmethod
    def _parse(cls, data: Any, grid: FixedPointGrid) -> Trace:
        if isinstance(data, (str, bytes, bytearray)):
            data = _load_json(data)

        if isinstance(data, list):
            raw = validate_points(_clamp_raw_points(data), grid)
            return cls.from_sparse([TimePoint.from_wire(p) for p in raw], grid)

        state, payload = validate_envelope(data)
        payload = validate_payload(state, payload, grid)
        return _STATE_LOADERS[state](cls, payload, grid)

    @property
    def points(self) -> tuple[TimePoint, ...]:
        return self._points

    @property
    def grid(self) -> FixedPointGrid:
        return self._grid

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[TimePoint]:
        return iter(self._points)

    def __getitem__(self, index):
        return self._points[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Trace):
            return NotImplemented
        return self._points == other._points and self._grid == other._grid

    __hash__ = None

    def __repr__(self) -> str:
        actions = sum(1 for p in self._points if p.has_action)
        return f"Trace(points={len(self._points)}, actions={actions})"

    def velocity_series(self) -> list[float]:
        """Speed between adjacent samples in field units per second.

        Returns:
            grid.size - 1 values
        """
        return kinematics.velocity_series(self._points, self._grid)

    def velocity_histogram(self, bins: int) -> Histogram:
        """Distribution of speeds over ``bins`` equal-width buckets."""
        return kinematics.histogram(self.velocity_series(), bins)

    def average_velocity(self) -> float:
        """Mean speed over the match; NaN when there are no sample pairs."""
        return kinematics.mean(self.velocity_series())

    def max_velocity(self) -> float:
        series = self.velocity_series()
        return max(series) if series else 0.0

    def distance_traveled(self) -> float:
        return sum(kinematics.step_distances(self._points, self._grid))

    def seconds_not_moving(
        self, threshold: float = DEFAULT_STATIONARY_THRESHOLD
    ) -> float:
        """Seconds spent slower than threshold (slow counts as stationary)."""
        return kinematics.seconds_below(
            self.velocity_series(), threshold, self._grid.sample_rate
        )

    def filter_by_action(self, code: str) -> list[TimePoint]:
        """All points carrying the given action code, in time order."""
        return [p for p in self._points if p.action == code]

    def action_counts(self) -> dict[str, int]:
        return dict(Counter(p.action for p in self._points if p.has_action))

    def get_section(self, section: str) -> list[TimePoint]:
        """Points within a match phase ("auto", "teleop" or "endgame").

        Unknown section names yield an empty list.
        """
        bounds = self._grid.section_bounds(section)
        if bounds is None:
            return []
        start, end = bounds
        return list(self._points[start:end])

    def to_sparse(self) -> list[TimePoint]:
        return compact(self._points)

    def serialize(self, compressed: bool = True) -> str:
        """Serialize to a JSON payload that Trace.parse accepts.

        Args:
            compressed: Encode the full trace as a string (default), or emit
                the compacted point array

        Returns:
            JSON text with "state" and "trace" keys
        """
        if compressed:
            return json.dumps(
                {
                    "state": "compressed",
                    "trace": codec.encode_trace(codec.quantize_points(self._points)),
                }
            )
        return json.dumps(
            {
                "state": "parsed",
                "trace": [p.to_wire() for p in codec.quantize_points(self.to_sparse())],
            }
        )


def _load_json(text: str | bytes | bytearray) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"invalid JSON: {e}", e) from e
    except RecursionError as e:
        raise ParseError("input nested too deeply", e) from e


def _reject_constant(name: str) -> Any:
    raise json.JSONDecodeError(f"non-finite number {name} not allowed", name, 0)


def _clamp(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return value
    if math.isnan(value):
        return value
    return min(1.0, max(0.0, value))


def _clamp_raw_points(raw: list) -> list:
    """Clamp coordinates of well-shaped raw points into [0, 1].

    Malformed entries are passed through untouched so validation can report
    them.
    """
    clamped = []
    for entry in raw:
        if isinstance(entry, (list, tuple)) and len(entry) == 4:
            index, x, y, action = entry
            clamped.append([index, _clamp(x), _clamp(y), action])
        else:
            clamped.append(entry)
    return clamped


def _load_compressed(cls: type[Trace], payload: str, grid: FixedPointGrid) -> Trace:
    return cls.from_sparse(codec.decode_trace(payload, grid), grid)


def _load_parsed(cls: type[Trace], payload: list, grid: FixedPointGrid) -> Trace:
    return cls.from_sparse([TimePoint.from_wire(p) for p in payload], grid)


def _load_expanded(cls: type[Trace], payload: list, grid: FixedPointGrid) -> Trace:
    return cls([TimePoint.from_wire(p) for p in payload], grid)


# State tag -> loader for an already validated payload
_STATE_LOADERS: dict[str, Callable[[type[Trace], Any, FixedPointGrid], Trace]] = {
    "compressed": _load_compressed,
    "parsed": _load_parsed,
    "expanded": _load_expanded,
}
