"""Tests for sparse/dense trace conversion."""

from __future__ import annotations

import logging

from fixtures import create_sparse_points, small_grid
from tatorscout.grid import FixedPointGrid
from tatorscout.trace import TimePoint, compact, expand, is_dense


class TestExpand:
    def test_fills_gaps_with_previous_position(self):
        grid = FixedPointGrid(size=10)
        sparse = create_sparse_points((0, 0.1, 0.1), (5, 0.2, 0.2, "act"))

        dense = expand(sparse, grid)

        assert len(dense) == 10
        assert [p.index for p in dense] == list(range(10))
        for i in range(1, 5):
            assert dense[i] == TimePoint(i, 0.1, 0.1, None)
        assert dense[5] == TimePoint(5, 0.2, 0.2, "act")
        for i in range(6, 10):
            assert dense[i] == TimePoint(i, 0.2, 0.2, None)

    def test_actions_are_never_forward_filled(self):
        grid = small_grid()
        dense = expand(create_sparse_points((0, 0.5, 0.5, "spk")), grid)

        assert dense[0].action == "spk"
        assert all(p.action is None for p in dense[1:])

    def test_slots_before_first_point_start_at_origin(self):
        grid = small_grid()
        dense = expand(create_sparse_points((3, 0.4, 0.6)), grid)

        assert dense[0] == TimePoint(0, 0.0, 0.0, None)
        assert dense[2].position == (0.0, 0.0)
        assert dense[3].position == (0.4, 0.6)

    def test_already_dense_is_returned_unchanged(self):
        grid = small_grid()
        dense = [TimePoint(i, 0.1 * i, 0.5) for i in range(grid.size)]

        assert expand(dense, grid) == dense

    def test_duplicate_index_keeps_first(self, caplog):
        grid = small_grid()
        sparse = create_sparse_points((0, 0.1, 0.1), (2, 0.3, 0.3), (2, 0.9, 0.9))

        with caplog.at_level(logging.WARNING, logger="tatorscout.trace.expand"):
            dense = expand(sparse, grid)

        assert dense[2].position == (0.3, 0.3)
        assert "dropped 1" in caplog.text

    def test_longer_than_grid_is_truncated_with_warning(self, caplog):
        grid = small_grid()
        sparse = [TimePoint(i, 0.5, 0.5) for i in range(15)]

        with caplog.at_level(logging.WARNING, logger="tatorscout.trace.expand"):
            dense = expand(sparse, grid)

        assert len(dense) == grid.size
        assert dense[-1].index == grid.size - 1
        assert "Expanding 15 points" in caplog.text

    def test_off_grid_points_are_dropped(self):
        grid = small_grid()
        sparse = create_sparse_points((0, 0.1, 0.1), (42, 0.9, 0.9, "spk"))

        dense = expand(sparse, grid)

        assert len(dense) == grid.size
        assert all(p.position == (0.1, 0.1) for p in dense)
        assert all(p.action != "spk" for p in dense)


class TestIsDense:
    def test_dense(self):
        grid = small_grid()
        assert is_dense([TimePoint(i, 0, 0) for i in range(grid.size)], grid)

    def test_wrong_length(self):
        assert not is_dense([TimePoint(0, 0, 0)], small_grid())

    def test_out_of_order(self):
        grid = small_grid()
        points = [TimePoint(i, 0, 0) for i in range(grid.size)]
        points[3], points[4] = points[4], points[3]
        assert not is_dense(points, grid)


class TestCompact:
    def test_identical_points_collapse_to_first(self):
        dense = [TimePoint(i, 0.5, 0.5) for i in range(10)]

        assert compact(dense) == [dense[0]]

    def test_keeps_moves_and_actions(self):
        dense = create_sparse_points(
            (0, 0.1, 0.1),
            (1, 0.1, 0.1),
            (2, 0.2, 0.1),
            (3, 0.2, 0.1, "amp"),
            (4, 0.2, 0.1),
        )

        assert [p.index for p in compact(dense)] == [0, 2, 3]

    def test_return_to_earlier_position_is_kept(self):
        dense = create_sparse_points(
            (0, 0.1, 0.1), (1, 0.2, 0.2), (2, 0.1, 0.1)
        )

        assert [p.index for p in compact(dense)] == [0, 1, 2]

    def test_idempotent(self):
        dense = create_sparse_points(
            (0, 0.1, 0.1), (1, 0.1, 0.1, "spk"), (2, 0.1, 0.1), (3, 0.3, 0.2)
        )

        once = compact(dense)

        assert compact(once) == once

    def test_empty(self):
        assert compact([]) == []


class TestCompactExpandCoupling:
    """compact() only drops points that expand() forward-fills back.

    If expansion ever interpolates between known points instead of holding
    the last position, these round trips stop holding.
    """

    def test_expand_after_compact_restores_dense_trace(self):
        grid = small_grid()
        dense = [
            TimePoint(i, 0.1 if i < 4 else 0.6, 0.2, "spk" if i == 6 else None)
            for i in range(grid.size)
        ]

        assert expand(compact(dense), grid) == dense

    def test_filler_between_moves_holds_position(self):
        grid = small_grid()
        sparse = create_sparse_points((0, 0.0, 0.0), (8, 0.8, 0.0))

        dense = expand(sparse, grid)

        # Holding, not interpolating: slot 4 is not halfway
        assert dense[4].position == (0.0, 0.0)
        assert compact(dense) == sparse
