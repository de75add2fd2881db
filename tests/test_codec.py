"""Tests for the base-52 trace point codec."""

from __future__ import annotations

import pytest

from tatorscout.errors import DecodeError
from tatorscout.grid import FixedPointGrid
from tatorscout.trace import (
    TimePoint,
    decode_number,
    decode_point,
    decode_trace,
    encode_number,
    encode_point,
    encode_trace,
    try_decode_trace,
)
from tatorscout.trace.codec import (
    ALPHABET,
    MAX_VALUE,
    dequantize_coordinate,
    quantize_coordinate,
    quantize_point,
)

# Half a quantization step
TOLERANCE = 0.5 / MAX_VALUE + 1e-12


class TestNumberEncoding:
    def test_alphabet(self):
        assert len(ALPHABET) == 52
        assert ALPHABET.startswith("ABC")
        assert ALPHABET.endswith("xyz")

    def test_known_values(self):
        assert encode_number(0, 2) == "AA"
        assert encode_number(1, 2) == "AB"
        assert encode_number(52, 2) == "BA"
        assert encode_number(999, 2) == "TL"

    def test_saturates_above_max(self):
        assert encode_number(1000, 2) == encode_number(999, 2)
        assert encode_number(10**6) == "TL"

    def test_saturates_below_zero(self):
        assert encode_number(-5) == "AA"

    def test_rejects_non_integers(self):
        with pytest.raises(TypeError):
            encode_number(1.5)
        with pytest.raises(TypeError):
            encode_number(True)

    @pytest.mark.parametrize("n", [0, 1, 51, 52, 500, 998, 999])
    def test_decode_inverts_encode(self, n):
        assert decode_number(encode_number(n)) == n

    def test_decode_wrong_width(self):
        with pytest.raises(DecodeError, match="expected 2 characters"):
            decode_number("AAA")

    def test_decode_invalid_character(self):
        with pytest.raises(DecodeError, match="invalid character"):
            decode_number("A!")


class TestQuantization:
    def test_bounds_are_exact(self):
        assert quantize_coordinate(0.0) == 0
        assert quantize_coordinate(1.0) == MAX_VALUE
        assert dequantize_coordinate(0) == 0.0
        assert dequantize_coordinate(MAX_VALUE) == 1.0

    def test_out_of_range_saturates(self):
        assert quantize_coordinate(-0.2) == 0
        assert quantize_coordinate(1.7) == MAX_VALUE

    def test_nan_rejected(self):
        with pytest.raises(ValueError):
            quantize_coordinate(float("nan"))

    @pytest.mark.parametrize(
        "v", [0.0, 0.0004, 0.0005004, 0.1234, 0.3333, 0.5, 0.76543, 0.9999, 1.0]
    )
    def test_round_trip_within_half_step(self, v):
        """0 and 1 are exact, so one step is 1/999 and the worst case is
        half of it (1/1998), a little above 0.0005.
        """
        assert abs(dequantize_coordinate(quantize_coordinate(v)) - v) <= TOLERANCE

    def test_quantize_point_idempotent(self):
        point = TimePoint(3, 0.12345, 0.98765, "spk")

        once = quantize_point(point)

        assert quantize_point(once) == once
        assert once.index == 3
        assert once.action == "spk"


class TestPointEncoding:
    def test_encode_known_point(self):
        assert encode_point(TimePoint(5, 0.0, 1.0, "spk")) == "AFAATLspk"

    def test_encode_no_action(self):
        assert encode_point(TimePoint(0, 0.0, 0.0)) == "AAAAAA0"

    def test_decode_known_point(self):
        assert decode_point("AFAATLspk") == TimePoint(5, 0.0, 1.0, "spk")

    def test_decode_no_action(self):
        point = decode_point("AAAAAA0")

        assert point.action is None
        assert not point.has_action

    def test_point_round_trip_within_tolerance(self):
        original = TimePoint(42, 0.3141, 0.2718, "amp")

        decoded = decode_point(encode_point(original))

        assert decoded.index == 42
        assert decoded.action == "amp"
        assert abs(decoded.x - original.x) <= TOLERANCE
        assert abs(decoded.y - original.y) <= TOLERANCE

    @pytest.mark.parametrize("action", ["", "a;b", "0", "a b", "0\n"])
    def test_ambiguous_action_rejected(self, action):
        with pytest.raises(ValueError, match="Action code"):
            encode_point(TimePoint(0, 0.5, 0.5, action))

    def test_index_too_large_rejected(self):
        with pytest.raises(ValueError, match="Index"):
            encode_point(TimePoint(1000, 0.5, 0.5))

    def test_decode_short_point(self):
        with pytest.raises(DecodeError, match="at least 7 characters"):
            decode_point("AAAAAA")

    def test_decode_action_with_whitespace(self):
        with pytest.raises(DecodeError, match="invalid action code"):
            decode_point("AAAAAA0\n")

    def test_decode_action_error_names_point(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_trace("AAAAAA0;ABAAAAsp k")

        assert exc_info.value.details["position"] == 1

    def test_decode_coordinate_above_max(self):
        with pytest.raises(DecodeError, match="coordinate above 999"):
            decode_point("AAZZAA0")

    def test_decode_index_off_grid(self):
        # "Lc" is index 600, one past the default grid
        with pytest.raises(DecodeError, match="outside grid"):
            decode_point("LcAAAA0")

    def test_decode_index_checked_against_given_grid(self):
        with pytest.raises(DecodeError, match="outside grid of 10 slots"):
            decode_point("AKAAAA0", FixedPointGrid(size=10))


class TestTraceEncoding:
    def test_encode_joins_with_separator(self):
        points = [TimePoint(0, 0.0, 0.0), TimePoint(1, 1.0, 1.0, "clb")]

        assert encode_trace(points) == "AAAAAA0;ABTLTLclb"

    def test_decode_trace(self):
        points = decode_trace("AAAAAA0;ABTLTLclb")

        assert points == [TimePoint(0, 0.0, 0.0), TimePoint(1, 1.0, 1.0, "clb")]

    def test_decode_malformed_numeric_field(self):
        """A one-character field is a decode failure, not a crash."""
        with pytest.raises(DecodeError):
            decode_trace("A")

    def test_decode_error_names_failing_point(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_trace("AAAAAA0;AB!AAA0")

        assert exc_info.value.details["position"] == 1
        assert "point 1" in str(exc_info.value)

    def test_decode_empty_string(self):
        with pytest.raises(DecodeError, match="empty"):
            decode_trace("")

    def test_decode_non_string(self):
        with pytest.raises(DecodeError, match="expected a string"):
            decode_trace(["AAAAAA0"])

    def test_try_decode_returns_failure_instead_of_raising(self):
        result = try_decode_trace("A")

        assert not result.ok
        assert isinstance(result.error, DecodeError)

    def test_try_decode_success(self):
        result = try_decode_trace("AAAAAA0")

        assert result.ok
        assert result.value == [TimePoint(0, 0.0, 0.0)]
