"""
Analytic inverse kinematics for a two-link planar arm.

Given a pivot P, a target T and segment lengths (L1, L2) the solver
classifies the target against the reachable annulus ``[|L1 - L2|, L1 + L2]``,
computes both elbow solutions with the law of cosines, and picks the one
whose shoulder angle is closest to the arm's previous shoulder angle so that
a continuously moving target never makes the elbow flip.

Classes:
    IKSolver: Configurable solver.

Functions:
    solve: Convenience wrapper around a default ``IKSolver``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional

from twolink_sim.kinematics.types import (
    ArmConfig,
    ElbowBranch,
    IKSolution,
    InvalidGeometryError,
    JointAngles,
    Point2D,
    UnreachableTargetError,
)
from twolink_sim.utils.constants import COS_EPSILON
from twolink_sim.utils.helpers import clamp

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IKSolver:
    """Closed-form solver for the two-link planar IK problem.

    Boundary distances are reachable: a target at exactly ``L1 + L2`` gives
    the fully extended arm and one at exactly ``|L1 - L2|`` the fully folded
    arm.

    Attributes:
        cos_epsilon: How far the law-of-cosines ratio may stray outside
            [-1, 1] from rounding before the input is rejected as malformed.
    """

    cos_epsilon: float = COS_EPSILON

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def solve(
        self,
        pivot: Point2D,
        target: Point2D,
        config: ArmConfig,
        previous_angle1: Optional[float] = None,
    ) -> IKSolution:
        """Solve for the joint angles that place the end effector on *target*.

        Args:
            pivot: Shoulder position.
            target: Desired end-effector position.
            config: Segment lengths.
            previous_angle1: Shoulder angle before this solve, used to pick
                the elbow branch.  ``None`` selects elbow-up.

        Returns:
            The selected ``IKSolution``.

        Raises:
            UnreachableTargetError: If the target is outside the annulus.
            InvalidGeometryError: If the inputs are numerically malformed.
        """
        distance = self.check_reachability(pivot, target, config)
        if distance == 0.0:
            # Only reachable when L1 == L2: fully folded, shoulder arbitrary.
            angle1 = previous_angle1 if previous_angle1 is not None else 0.0
            logger.debug("Target on pivot, folding arm at angle1=%.4f", angle1)
            return IKSolution(JointAngles(angle1, math.pi), ElbowBranch.UP, distance)

        candidates = self._candidates(pivot, target, config, distance)
        branch = self.select_branch(candidates, previous_angle1)
        solution = IKSolution(candidates[branch], branch, distance)
        logger.debug(
            "Solved target (%.3f, %.3f): angle1=%.4f angle2=%.4f branch=%s",
            target.x,
            target.y,
            solution.angles.angle1,
            solution.angles.angle2,
            branch.value,
        )
        return solution

    def check_reachability(
        self, pivot: Point2D, target: Point2D, config: ArmConfig
    ) -> float:
        """Return the pivot-to-target distance if the target is reachable.

        Raises:
            UnreachableTargetError: When the distance is outside
                ``[|L1 - L2|, L1 + L2]``.
        """
        distance = pivot.distance_to(target)
        if distance > config.outer_radius or distance < config.inner_radius:
            raise UnreachableTargetError(
                distance, config.inner_radius, config.outer_radius
            )
        return distance

    def elbow_cosine(self, distance: float, config: ArmConfig) -> float:
        """Return ``cos(angle2)`` from the law of cosines, clamped to [-1, 1].

        Args:
            distance: Pivot-to-target distance.
            config: Segment lengths.

        Returns:
            The clamped cosine of the elbow angle.

        Raises:
            InvalidGeometryError: If the raw ratio is outside
                ``[-1 - eps, 1 + eps]`` or not a number.
        """
        l1, l2 = config.l1, config.l2
        cos_angle2 = (distance * distance - l1 * l1 - l2 * l2) / (2.0 * l1 * l2)
        if not (-1.0 - self.cos_epsilon <= cos_angle2 <= 1.0 + self.cos_epsilon):
            raise InvalidGeometryError(
                f"Law-of-cosines ratio {cos_angle2!r} outside [-1, 1] "
                f"(distance={distance!r}, l1={l1!r}, l2={l2!r})"
            )
        return clamp(cos_angle2, -1.0, 1.0)

    def solve_candidates(
        self, pivot: Point2D, target: Point2D, config: ArmConfig
    ) -> Dict[ElbowBranch, JointAngles]:
        """Compute both elbow solutions without choosing between them.

        Args:
            pivot: Shoulder position.
            target: Desired end-effector position.
            config: Segment lengths.

        Returns:
            Mapping of ``ElbowBranch`` to its ``JointAngles``.

        Raises:
            UnreachableTargetError: If the target is outside the annulus.
            InvalidGeometryError: If the inputs are numerically malformed.
        """
        distance = self.check_reachability(pivot, target, config)
        return self._candidates(pivot, target, config, distance)

    @staticmethod
    def select_branch(
        candidates: Dict[ElbowBranch, JointAngles],
        previous_angle1: Optional[float],
    ) -> ElbowBranch:
        """Pick the branch whose shoulder angle moves least.

        Ties and the first solve (no previous angle) go to elbow-up.

        Args:
            candidates: Output of ``solve_candidates``.
            previous_angle1: Shoulder angle before this solve.

        Returns:
            The selected ``ElbowBranch``.
        """
        if previous_angle1 is None:
            return ElbowBranch.UP
        up_jump = abs(candidates[ElbowBranch.UP].angle1 - previous_angle1)
        down_jump = abs(candidates[ElbowBranch.DOWN].angle1 - previous_angle1)
        return ElbowBranch.DOWN if down_jump < up_jump else ElbowBranch.UP

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _candidates(
        self, pivot: Point2D, target: Point2D, config: ArmConfig, distance: float
    ) -> Dict[ElbowBranch, JointAngles]:
        """Both elbow solutions for a target already known to be reachable."""
        cos_angle2 = self.elbow_cosine(distance, config)
        delta = target - pivot
        heading = math.atan2(delta.y, delta.x)
        elbow = math.acos(cos_angle2)
        return {
            ElbowBranch.UP: self._shoulder_for(heading, elbow, config),
            ElbowBranch.DOWN: self._shoulder_for(heading, -elbow, config),
        }

    @staticmethod
    def _shoulder_for(heading: float, angle2: float, config: ArmConfig) -> JointAngles:
        """Derive the shoulder angle that pairs with elbow angle *angle2*."""
        offset = math.atan2(
            config.l2 * math.sin(angle2), config.l1 + config.l2 * math.cos(angle2)
        )
        return JointAngles(heading - offset, angle2)


_DEFAULT_SOLVER = IKSolver()


def solve(
    pivot: Point2D,
    target: Point2D,
    l1: float,
    l2: float,
    previous_angle1: Optional[float] = None,
) -> IKSolution:
    """Solve the two-link IK problem with the default tolerances.

    Args:
        pivot: Shoulder position.
        target: Desired end-effector position.
        l1: Upper-arm length.
        l2: Forearm length.
        previous_angle1: Shoulder angle before this solve, or ``None``.

    Returns:
        The selected ``IKSolution``.

    Raises:
        InvalidConfigError: If a segment length is not positive.
        UnreachableTargetError: If the target is outside the annulus.
        InvalidGeometryError: If the inputs are numerically malformed.
    """
    return _DEFAULT_SOLVER.solve(pivot, target, ArmConfig(l1, l2), previous_angle1)
