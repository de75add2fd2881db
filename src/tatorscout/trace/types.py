"""Core data types for the trace layer."""

from __future__ import annotations

from typing import NamedTuple

# Sentinel for "no action at this sample"
NO_ACTION = None

# Wire representations of NO_ACTION
WIRE_NO_ACTION = 0
ENCODED_NO_ACTION = "0"


def is_action_code(code: object) -> bool:
    """Check if a value can stand as an action code in every wire form.

    Codes are non-empty strings without whitespace or ";" and are never the
    literal "0" used for no action.
    """
    if not isinstance(code, str) or not code or code == ENCODED_NO_ACTION:
        return False
    return not any(char == ";" or char.isspace() for char in code)


class TimePoint(NamedTuple):
    """Robot state at one slot of the time grid."""

    index: int  # Slot on the fixed grid
    x: float  # Normalized field x, 0-1
    y: float  # Normalized field y, 0-1
    action: str | None = NO_ACTION  # Season action code

    @property
    def position(self) -> tuple[float, float]:
        return self.x, self.y

    @property
    def has_action(self) -> bool:
        return self.action is not NO_ACTION

    def to_wire(self) -> list:
        """Convert to the JSON tuple form [index, x, y, action|0]."""
        return [
            self.index,
            self.x,
            self.y,
            WIRE_NO_ACTION if self.action is NO_ACTION else self.action,
        ]

    @classmethod
    def from_wire(cls, raw) -> TimePoint:
        """Build a point from an already validated [index, x, y, action|0] tuple."""
        index, x, y, action = raw
        if action == WIRE_NO_ACTION and not isinstance(action, str):
            action = NO_ACTION
        return cls(int(index), float(x), float(y), action)


class Histogram(NamedTuple):
    """Bucket counts with the midpoint label of each bucket."""

    bins: list[int]
    labels: list[float]
