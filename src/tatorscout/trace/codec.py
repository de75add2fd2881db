"""Compact textual encoding of trace points.

Each point is written as three fixed-width base-52 numbers followed by the
action code:

    <2-char index><2-char x><2-char y><action or "0">

and points are joined with ``;``. Coordinates are quantized to three
decimal digits of precision (0.0 -> 0, 1.0 -> 999) before encoding, so the
coordinate round trip is lossy by at most half a quantization step.
"""

from __future__ import annotations

import math
from typing import Iterable

from ..errors import DecodeError, TatorScoutError
from ..grid import DEFAULT_GRID, FixedPointGrid
from ..result import Result
from .types import ENCODED_NO_ACTION, NO_ACTION, TimePoint, is_action_code

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BASE = len(ALPHABET)
_ALPHABET_INDEX = {char: i for i, char in enumerate(ALPHABET)}

FIELD_WIDTH = 2  # characters per numeric field
PRECISION_DIGITS = 3
MAX_VALUE = 10**PRECISION_DIGITS - 1  # 999

POINT_SEPARATOR = ";"
_NUMERIC_WIDTH = 3 * FIELD_WIDTH


def encode_number(n: int, width: int = FIELD_WIDTH) -> str:
    """Encode a non-negative integer as a fixed-width base-52 string.

    Values outside [0, 999] saturate to the nearest bound.

    Args:
        n: Integer to encode
        width: Output width in characters

    Returns:
        Exactly ``width`` characters from ALPHABET

    Example:
        encode_number(0)     # "AA"
        encode_number(52)    # "BA"
        encode_number(1000)  # same as encode_number(999)
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Expected integer, got {n!r}")

    n = max(0, min(n, MAX_VALUE, BASE**width - 1))

    chars = []
    for _ in range(width):
        n, digit = divmod(n, BASE)
        chars.append(ALPHABET[digit])
    return "".join(reversed(chars))


def decode_number(s: str, width: int = FIELD_WIDTH) -> int:
    """Decode a fixed-width base-52 string back to an integer.

    Raises:
        DecodeError: If the string is not ``width`` characters or contains
            characters outside ALPHABET
    """
    if len(s) != width:
        raise DecodeError(f"expected {width} characters, got {len(s)}: {s!r}", s)

    value = 0
    for char in s:
        digit = _ALPHABET_INDEX.get(char)
        if digit is None:
            raise DecodeError(f"invalid character {char!r} in {s!r}", s)
        value = value * BASE + digit
    return value


def quantize_coordinate(v: float) -> int:
    """Map a normalized coordinate in [0, 1] to an integer in [0, 999]."""
    if math.isnan(v):
        raise ValueError("Cannot quantize NaN coordinate")
    q = int(round(v * MAX_VALUE))
    return max(0, min(MAX_VALUE, q))


def dequantize_coordinate(q: int) -> float:
    return q / MAX_VALUE


def quantize_point(point: TimePoint) -> TimePoint:
    """Snap a point's coordinates onto the encodable precision.

    Idempotent: snapping an already snapped point returns equal values.
    """
    return point._replace(
        x=dequantize_coordinate(quantize_coordinate(point.x)),
        y=dequantize_coordinate(quantize_coordinate(point.y)),
    )


def quantize_points(points: Iterable[TimePoint]) -> list[TimePoint]:
    return [quantize_point(p) for p in points]


def encode_point(point: TimePoint) -> str:
    """Encode one point as ``index + x + y + action``.

    Raises:
        ValueError: If the index does not fit the numeric field or the action
            code would be ambiguous in the encoded form
    """
    if not 0 <= point.index <= MAX_VALUE:
        raise ValueError(f"Index {point.index} does not fit in {FIELD_WIDTH} characters")

    if point.action is NO_ACTION:
        action = ENCODED_NO_ACTION
    else:
        action = point.action
        if not is_action_code(action):
            raise ValueError(f"Action code cannot be encoded: {action!r}")

    return (
        encode_number(point.index)
        + encode_number(quantize_coordinate(point.x))
        + encode_number(quantize_coordinate(point.y))
        + action
    )


def decode_point(
    s: str, grid: FixedPointGrid = DEFAULT_GRID, position: int | None = None
) -> TimePoint:
    """Decode one encoded point.

    The action is everything after the three numeric fields.

    Raises:
        DecodeError: On a short point, bad characters, a coordinate above 999,
            an index outside the grid or an action code with whitespace
    """
    if len(s) <= _NUMERIC_WIDTH:
        raise DecodeError(
            f"expected at least {_NUMERIC_WIDTH + 1} characters, got {len(s)}: {s!r}",
            s,
            position,
        )

    try:
        index = decode_number(s[0:FIELD_WIDTH])
        qx = decode_number(s[FIELD_WIDTH : 2 * FIELD_WIDTH])
        qy = decode_number(s[2 * FIELD_WIDTH : _NUMERIC_WIDTH])
    except DecodeError as e:
        raise DecodeError(e.details["reason"], s, position) from e

    if not grid.contains(index):
        raise DecodeError(
            f"time index {index} outside grid of {grid.size} slots", s, position
        )
    if qx > MAX_VALUE or qy > MAX_VALUE:
        raise DecodeError(
            f"coordinate above {MAX_VALUE} ({qx}, {qy})", s, position
        )

    action = s[_NUMERIC_WIDTH:]
    if action != ENCODED_NO_ACTION and not is_action_code(action):
        raise DecodeError(f"invalid action code {action!r}", s, position)

    return TimePoint(
        index,
        dequantize_coordinate(qx),
        dequantize_coordinate(qy),
        NO_ACTION if action == ENCODED_NO_ACTION else action,
    )


def encode_trace(points: Iterable[TimePoint]) -> str:
    """Encode a sequence of points into a ``;``-separated string."""
    return POINT_SEPARATOR.join(encode_point(p) for p in points)


def decode_trace(encoded: str, grid: FixedPointGrid = DEFAULT_GRID) -> list[TimePoint]:
    """Decode a ``;``-separated string into points.

    Raises:
        DecodeError: If any point is malformed; the error names its position
    """
    if not isinstance(encoded, str):
        raise DecodeError(f"expected a string, got {type(encoded).__name__}")
    if not encoded:
        raise DecodeError("empty trace string", encoded)

    return [
        decode_point(chunk, grid, position)
        for position, chunk in enumerate(encoded.split(POINT_SEPARATOR))
    ]


def try_decode_trace(
    encoded: str, grid: FixedPointGrid = DEFAULT_GRID
) -> Result[list[TimePoint]]:
    """Decode without raising; malformed input becomes a failed Result."""
    try:
        return Result.success(decode_trace(encoded, grid))
    except TatorScoutError as e:
        return Result.failure(e)
