"""
Two-link planar arm tracking a target point.

The arm is the single owner of the segment lengths, the pivot position, and
the animated pose.  Input code hands it new target points and
reconfiguration commands; the render loop calls ``step`` once per frame and
reads a ``RenderState`` snapshot.

Classes:
    RenderState: Per-frame snapshot consumed by the renderers.
    PlanarArm: The arm itself.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from twolink_sim.kinematics.animator import PoseAnimator, forward_kinematics
from twolink_sim.kinematics.solver import IKSolver
from twolink_sim.kinematics.types import (
    ArmConfig,
    IKError,
    IKSolution,
    InvalidConfigError,
    JointAngles,
    Point2D,
)
from twolink_sim.utils.constants import (
    DEFAULT_L1,
    DEFAULT_L2,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderState:
    """Everything a renderer needs to draw one frame.

    Attributes:
        pivot: Shoulder position.
        joint2: Elbow position.
        end_effector: Tip of the forearm.
        heading: End-effector orientation, ``angle1 + angle2``.
        target: Last accepted target point, if any.
        inner_radius: ``|L1 - L2|`` reachability boundary.
        outer_radius: ``L1 + L2`` reachability boundary.
    """

    pivot: Point2D
    joint2: Point2D
    end_effector: Point2D
    heading: float
    target: Optional[Point2D]
    inner_radius: float
    outer_radius: float


@dataclass
class PlanarArm:
    """A two-link arm that smoothly follows accepted target points.

    Rejected commands (unreachable targets, invalid lengths) raise and leave
    every piece of state exactly as it was.

    Attributes:
        config: Segment lengths.
        pivot: Shoulder position.
        animator: Owner of the animated pose.
        solver: Inverse-kinematics solver.
        target_point: Last accepted target point.
    """

    config: ArmConfig = field(default_factory=lambda: ArmConfig(DEFAULT_L1, DEFAULT_L2))
    pivot: Point2D = field(
        default_factory=lambda: Point2D(DEFAULT_WINDOW_WIDTH / 2, DEFAULT_WINDOW_HEIGHT / 2)
    )
    animator: PoseAnimator = field(default_factory=PoseAnimator)
    solver: IKSolver = field(default_factory=IKSolver)
    target_point: Optional[Point2D] = None

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_target_point(self, target: Point2D) -> IKSolution:
        """Solve for *target* and make it the animator's new goal.

        Args:
            target: Desired end-effector position.

        Returns:
            The accepted ``IKSolution``.

        Raises:
            IKError: If the target cannot be reached; nothing is changed.
        """
        try:
            solution = self._solve(target)
        except IKError as exc:
            logger.warning("Rejected target (%.2f, %.2f): %s", target.x, target.y, exc)
            raise
        self.animator.set_target(solution.angles, solution.branch)
        self.target_point = target
        return solution

    def configure(self, l1: float, l2: float) -> None:
        """Change the segment lengths.

        The current target point is re-solved against the new lengths.  If
        it is no longer reachable the previous target angles are kept.

        Raises:
            InvalidConfigError: If a length is not positive; nothing is changed.
        """
        config = ArmConfig(l1, l2)
        self.config = config
        logger.info("Segment lengths set to L1=%.2f L2=%.2f", l1, l2)
        self._retarget()

    def move_pivot(self, pivot: Point2D) -> None:
        """Relocate the shoulder and re-solve the current target point.

        Raises:
            InvalidConfigError: If a coordinate is not finite; nothing is changed.
        """
        if not (math.isfinite(pivot.x) and math.isfinite(pivot.y)):
            raise InvalidConfigError(f"Pivot ({pivot.x}, {pivot.y}) must be finite")
        self.pivot = pivot
        logger.info("Pivot moved to (%.2f, %.2f)", pivot.x, pivot.y)
        self._retarget()

    def reset(self) -> None:
        """Return to the zero pose and forget the target point."""
        self.animator.reset()
        self.target_point = None

    # ------------------------------------------------------------------
    # Per-frame API
    # ------------------------------------------------------------------

    def step(self, factor: Optional[float] = None) -> JointAngles:
        """Advance the animation by one frame.

        Args:
            factor: Optional override of the smoothing factor.

        Returns:
            The updated current angles.
        """
        return self.animator.tick(factor)

    def end_effector(self) -> Point2D:
        """Return the current end-effector position."""
        return self._forward()[1]

    def render_state(self) -> RenderState:
        """Return a snapshot of the current frame for the renderers."""
        joint2, end_effector = self._forward()
        current = self.animator.current
        return RenderState(
            pivot=self.pivot,
            joint2=joint2,
            end_effector=end_effector,
            heading=current.angle1 + current.angle2,
            target=self.target_point,
            inner_radius=self.config.inner_radius,
            outer_radius=self.config.outer_radius,
        )

    @property
    def is_settled(self) -> bool:
        return self.animator.is_settled

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _solve(self, target: Point2D) -> IKSolution:
        return self.solver.solve(
            self.pivot, target, self.config, self.animator.current.angle1
        )

    def _retarget(self) -> None:
        """Re-solve the stored target point after a geometry change."""
        if self.target_point is None:
            return
        try:
            solution = self._solve(self.target_point)
        except IKError as exc:
            logger.warning("Target no longer reachable, keeping previous pose: %s", exc)
            return
        self.animator.set_target(solution.angles, solution.branch)

    def _forward(self) -> Tuple[Point2D, Point2D]:
        return forward_kinematics(
            self.pivot, self.animator.current, self.config.l1, self.config.l2
        )
