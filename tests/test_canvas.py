"""Tests for the NumPy canvas renderer."""

import numpy as np
import pytest

from twolink_sim.kinematics.types import Point2D
from twolink_sim.rendering.canvas import ArmCanvasRenderer
from twolink_sim.robots.planar_arm import PlanarArm, RenderState
from twolink_sim.utils.constants import (
    COLOR_BACKGROUND,
    COLOR_GRID,
    COLOR_LOWER_ARM,
    COLOR_REACH,
    COLOR_TARGET,
    COLOR_UPPER_ARM,
)


@pytest.fixture
def frame():
    """Default arm in the zero pose: pivot (400, 300), elbow (500, 300)."""
    return ArmCanvasRenderer().render(PlanarArm().render_state())


class TestArmCanvasRenderer:
    def test_frame_shape_and_dtype(self, frame):
        assert frame.shape == (600, 800, 3)
        assert frame.dtype == np.uint8

    def test_segments_use_their_colours(self, frame):
        assert tuple(frame[299, 449]) == COLOR_UPPER_ARM
        assert tuple(frame[299, 549]) == COLOR_LOWER_ARM

    def test_grid_and_background(self, frame):
        assert tuple(frame[10, 5]) == COLOR_GRID
        assert tuple(frame[5, 5]) == COLOR_BACKGROUND

    def test_outer_reach_circle(self, frame):
        assert tuple(frame[100, 399]) == COLOR_REACH

    def test_target_marker(self):
        state = RenderState(
            pivot=Point2D(400.0, 300.0),
            joint2=Point2D(500.0, 300.0),
            end_effector=Point2D(600.0, 300.0),
            heading=0.0,
            target=Point2D(405.0, 205.0),
            inner_radius=0.0,
            outer_radius=200.0,
        )
        frame = ArmCanvasRenderer().render(state)
        assert tuple(frame[204, 404]) == COLOR_TARGET

    def test_zero_length_segment_draws_nothing(self):
        renderer = ArmCanvasRenderer(width=20, height=20, grid_size=0)
        canvas = np.zeros((20, 20, 3), dtype=np.uint8)
        point = Point2D(10.0, 10.0)
        renderer._draw_thick_line(canvas, point, point, COLOR_UPPER_ARM)
        assert not canvas.any()

    def test_downscaled_render(self):
        renderer = ArmCanvasRenderer(width=400, height=300, scale=0.5)
        frame = renderer.render(PlanarArm().render_state())
        assert frame.shape == (300, 400, 3)
        assert tuple(frame[149, 224]) == COLOR_UPPER_ARM
