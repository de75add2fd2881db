"""Tests for polygon zone membership and dwell time."""

from __future__ import annotations

from tatorscout.analysis.zones import (
    AllianceZone,
    dwell_seconds,
    is_inside,
    occupancy,
    zone_occupancy,
)
from tatorscout.trace import TimePoint

SQUARE = ((0.0, 0.0), (0.5, 0.0), (0.5, 0.5), (0.0, 0.5))

# L shape: the square (0.5, 0.5)-(1, 1) is cut out
L_SHAPE = ((0.0, 0.0), (1.0, 0.0), (1.0, 0.5), (0.5, 0.5), (0.5, 1.0), (0.0, 1.0))


class TestIsInside:
    def test_inside_and_outside(self):
        assert is_inside((0.25, 0.25), SQUARE)
        assert not is_inside((0.75, 0.25), SQUARE)
        assert not is_inside((0.25, -0.1), SQUARE)

    def test_concave_polygon(self):
        assert is_inside((0.75, 0.25), L_SHAPE)
        assert is_inside((0.25, 0.75), L_SHAPE)
        assert not is_inside((0.75, 0.75), L_SHAPE)

    def test_degenerate_polygon(self):
        assert not is_inside((0.0, 0.0), ())
        assert not is_inside((0.25, 0.0), ((0.0, 0.0), (0.5, 0.0)))


class TestDwell:
    def _points(self):
        return [
            TimePoint(0, 0.1, 0.1),
            TimePoint(1, 0.2, 0.2),
            TimePoint(2, 0.9, 0.9),
            TimePoint(3, 0.3, 0.3),
        ]

    def test_occupancy(self):
        assert occupancy(self._points(), SQUARE) == 3

    def test_dwell_seconds(self):
        assert dwell_seconds(self._points(), SQUARE, 4) == 0.75

    def test_zone_occupancy_allows_overlap(self):
        result = zone_occupancy(
            self._points(), {"square": SQUARE, "l": L_SHAPE}, 4
        )

        assert result == {"square": 0.75, "l": 0.75}


def test_alliance_zone_lookup():
    zone = AllianceZone(red=SQUARE, blue=L_SHAPE)

    assert zone.for_alliance("red") is SQUARE
    assert zone.for_alliance("blue") is L_SHAPE
    assert zone.for_alliance("unknown") is None
