"""Tests for grid conversion and scalar helpers."""

import pytest

from twolink_sim.utils.helpers import (
    clamp,
    grid_to_screen,
    lerp,
    screen_to_grid,
    snap_to_grid,
)

PIVOT = (400.0, 300.0)


class TestGridConversion:
    """Grid units are relative to the pivot with y pointing up."""

    def test_grid_to_screen_flips_y(self):
        assert grid_to_screen(3, 2, PIVOT, 10) == (430.0, 280.0)

    def test_screen_to_grid_inverts(self):
        assert screen_to_grid(430.0, 280.0, PIVOT, 10) == pytest.approx((3.0, 2.0))

    def test_pivot_is_grid_origin(self):
        assert screen_to_grid(*PIVOT, PIVOT, 10) == (0.0, 0.0)

    def test_snap_to_nearest_intersection(self):
        assert snap_to_grid(433.0, 287.0, PIVOT, 10) == (430.0, 290.0)

    def test_snap_is_anchored_at_pivot(self):
        assert snap_to_grid(404.0, 296.0, (403.0, 297.0), 10) == (403.0, 297.0)


class TestScalarHelpers:
    def test_lerp(self):
        assert lerp(0.0, 10.0, 0.25) == 2.5
        assert lerp(4.0, 4.0, 0.5) == 4.0

    def test_clamp(self):
        assert clamp(5.0, 0.0, 1.0) == 1.0
        assert clamp(-5.0, 0.0, 1.0) == 0.0
        assert clamp(0.5, 0.0, 1.0) == 0.5
