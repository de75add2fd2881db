"""Trace subsystem: fixed-grid robot traces, their encoding and analytics.

Example usage:
    from tatorscout.trace import Trace

    result = Trace.parse(payload)
    if result.ok:
        trace = result.value
        print(trace.average_velocity())
        stored = trace.serialize(compressed=True)
"""

from __future__ import annotations

from .codec import (
    decode_number,
    decode_point,
    decode_trace,
    encode_number,
    encode_point,
    encode_trace,
    quantize_point,
    quantize_points,
    try_decode_trace,
)
from .expand import compact, expand, is_dense
from .trace import Trace
from .types import NO_ACTION, Histogram, TimePoint, is_action_code

# Export public API
__all__ = [
    # Core types
    "Trace",
    "TimePoint",
    "Histogram",
    "NO_ACTION",
    "is_action_code",
    # Codec
    "encode_number",
    "decode_number",
    "encode_point",
    "decode_point",
    "encode_trace",
    "decode_trace",
    "try_decode_trace",
    "quantize_point",
    "quantize_points",
    # Sparse/dense conversion
    "expand",
    "compact",
    "is_dense",
]
