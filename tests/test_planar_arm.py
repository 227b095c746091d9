"""Tests for the planar arm owning configuration, pivot, and pose."""

import math

import pytest

from twolink_sim.kinematics.animator import PoseAnimator, forward_kinematics
from twolink_sim.kinematics.types import (
    ArmConfig,
    ElbowBranch,
    InvalidConfigError,
    JointAngles,
    Point2D,
    UnreachableTargetError,
)
from twolink_sim.robots.planar_arm import PlanarArm


def _settle(arm, limit=10_000):
    for _ in range(limit):
        if arm.is_settled:
            return
        arm.step()
    raise AssertionError("arm did not settle")


@pytest.fixture
def arm():
    """Arm with L1 = L2 = 100 pivoting at the origin."""
    return PlanarArm(
        config=ArmConfig(100.0, 100.0),
        pivot=Point2D(0.0, 0.0),
        animator=PoseAnimator(smoothing=0.25),
    )


class TestDefaults:
    def test_default_arm_is_centred(self):
        arm = PlanarArm()
        assert arm.pivot == Point2D(400.0, 300.0)
        assert arm.config == ArmConfig(100.0, 100.0)
        assert arm.animator.current == JointAngles(0.0, 0.0)
        assert arm.target_point is None


class TestSetTargetPoint:
    """Accepting and rejecting targets."""

    def test_accepted_target_becomes_animator_goal(self, arm):
        solution = arm.set_target_point(Point2D(120.0, 80.0))
        assert arm.animator.target == solution.angles
        assert arm.animator.branch is solution.branch
        assert arm.target_point == Point2D(120.0, 80.0)
        assert arm.animator.current == JointAngles(0.0, 0.0)

    def test_first_target_picks_branch_nearest_zero_pose(self, arm):
        """Candidates at angle1 ~ 0.85 (up) and ~ 2.29 (down) from angle1 = 0."""
        solution = arm.set_target_point(Point2D(0.0, 150.0))
        assert solution.branch is ElbowBranch.UP

    def test_recommanding_target_keeps_branch(self, arm):
        """Heading -0.75, elbow 2.5: down (angle1 0.5) beats up (angle1 -2.0) from 0."""
        distance = 200.0 * math.cos(1.25)
        target = Point2D(distance * math.cos(-0.75), distance * math.sin(-0.75))
        branches, shoulders = [], []
        for _ in range(10):
            solution = arm.set_target_point(target)
            branches.append(solution.branch)
            shoulders.append(solution.angles.angle1)
            arm.step()
        assert set(branches) == {ElbowBranch.DOWN}
        assert shoulders == pytest.approx([0.5] * 10)

    def test_end_effector_reaches_target(self, arm):
        arm.set_target_point(Point2D(-60.0, 110.0))
        _settle(arm)
        ee = arm.end_effector()
        assert ee.x == pytest.approx(-60.0, abs=1e-6)
        assert ee.y == pytest.approx(110.0, abs=1e-6)

    def test_unreachable_target_leaves_state_untouched(self, arm):
        arm.set_target_point(Point2D(100.0, 100.0))
        arm.step()
        before_target = arm.animator.target
        before_branch = arm.animator.branch
        before_current = arm.animator.current
        with pytest.raises(UnreachableTargetError):
            arm.set_target_point(Point2D(500.0, 0.0))
        assert arm.animator.target == before_target
        assert arm.animator.branch is before_branch
        assert arm.animator.current == before_current
        assert arm.target_point == Point2D(100.0, 100.0)

    def test_branch_follows_current_shoulder_angle(self, arm):
        """Second solve picks the candidate nearest the current angle1."""
        arm.set_target_point(Point2D(0.0, 150.0))
        _settle(arm)
        previous = arm.animator.current.angle1
        candidates = arm.solver.solve_candidates(arm.pivot, Point2D(141.42, 0.0), arm.config)
        expected = min(
            candidates, key=lambda b: (abs(candidates[b].angle1 - previous), b is ElbowBranch.DOWN)
        )
        solution = arm.set_target_point(Point2D(141.42, 0.0))
        assert solution.branch is expected


class TestReconfiguration:
    """Segment length and pivot changes."""

    def test_invalid_lengths_keep_previous_config(self, arm):
        with pytest.raises(InvalidConfigError):
            arm.configure(0.0, 100.0)
        assert arm.config == ArmConfig(100.0, 100.0)

    def test_target_is_resolved_for_new_lengths(self, arm):
        arm.set_target_point(Point2D(150.0, 0.0))
        arm.configure(100.0, 60.0)
        _, ee = forward_kinematics(arm.pivot, arm.animator.target, 100.0, 60.0)
        assert ee.x == pytest.approx(150.0, abs=1e-6)
        assert ee.y == pytest.approx(0.0, abs=1e-6)

    def test_target_out_of_new_reach_keeps_old_angles(self, arm):
        arm.set_target_point(Point2D(150.0, 0.0))
        old_target = arm.animator.target
        arm.configure(50.0, 50.0)
        assert arm.config == ArmConfig(50.0, 50.0)
        assert arm.animator.target == old_target

    def test_move_pivot_resolves_target(self, arm):
        arm.set_target_point(Point2D(150.0, 0.0))
        arm.move_pivot(Point2D(50.0, 0.0))
        assert arm.pivot == Point2D(50.0, 0.0)
        _, ee = forward_kinematics(arm.pivot, arm.animator.target, 100.0, 100.0)
        assert ee.x == pytest.approx(150.0, abs=1e-6)

    @pytest.mark.parametrize("x, y", [(float("nan"), 0.0), (0.0, float("inf"))])
    def test_non_finite_pivot_rejected(self, arm, x, y):
        arm.set_target_point(Point2D(150.0, 0.0))
        target = arm.animator.target
        with pytest.raises(InvalidConfigError):
            arm.move_pivot(Point2D(x, y))
        assert arm.pivot == Point2D(0.0, 0.0)
        assert arm.animator.target == target

    def test_reset(self, arm):
        arm.set_target_point(Point2D(150.0, 0.0))
        arm.step()
        arm.reset()
        assert arm.animator.current == JointAngles()
        assert arm.target_point is None


class TestRenderState:
    """Per-frame snapshot."""

    def test_snapshot_matches_forward_kinematics(self, arm):
        arm.configure(100.0, 40.0)
        arm.set_target_point(Point2D(80.0, 60.0))
        for _ in range(3):
            arm.step()
        state = arm.render_state()
        joint2, ee = forward_kinematics(arm.pivot, arm.animator.current, 100.0, 40.0)
        assert state.joint2 == joint2
        assert state.end_effector == ee
        current = arm.animator.current
        assert state.heading == pytest.approx(current.angle1 + current.angle2)
        assert state.inner_radius == pytest.approx(60.0)
        assert state.outer_radius == pytest.approx(140.0)
        assert state.target == Point2D(80.0, 60.0)

    def test_zero_pose_is_fully_extended(self, arm):
        state = arm.render_state()
        assert state.end_effector.x == pytest.approx(200.0)
        assert math.isclose(state.heading, 0.0)
        assert state.target is None
