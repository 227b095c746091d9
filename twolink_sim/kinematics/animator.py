"""
Pose animation and forward kinematics.

The animator owns the arm pose and, once per rendered frame, moves the
current joint angles a fixed fraction of the way towards the target angles
(first-order exponential smoothing).  Because geometric decay never reaches
zero, each angle snaps exactly onto its target once the remaining error
drops below ``snap_epsilon``.

Classes:
    ArmPose: Current angles, target angles, and selected elbow branch.
    PoseAnimator: Drives an ``ArmPose`` towards its target.

Functions:
    forward_kinematics: Joint and end-effector positions from angles.
    steps_to_settle: Upper bound on ticks needed to settle.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Tuple

from twolink_sim.kinematics.types import (
    AngleState,
    ElbowBranch,
    InvalidConfigError,
    JointAngles,
    Point2D,
)
from twolink_sim.utils.constants import DEFAULT_SMOOTHING, DEFAULT_SNAP_EPSILON
from twolink_sim.utils.helpers import lerp

logger = logging.getLogger(__name__)


def forward_kinematics(
    pivot: Point2D, angles: JointAngles, l1: float, l2: float
) -> Tuple[Point2D, Point2D]:
    """Compute the elbow and end-effector positions for *angles*.

    Args:
        pivot: Shoulder position.
        angles: Joint angles in radians.
        l1: Upper-arm length.
        l2: Forearm length.

    Returns:
        Tuple of (elbow position, end-effector position).
    """
    a1 = angles.angle1
    a12 = angles.angle1 + angles.angle2
    joint2 = Point2D(pivot.x + l1 * math.cos(a1), pivot.y + l1 * math.sin(a1))
    end_effector = Point2D(joint2.x + l2 * math.cos(a12), joint2.y + l2 * math.sin(a12))
    return joint2, end_effector


def _validate_factor(factor: float) -> None:
    """Raise if *factor* is outside (0, 1].

    Raises:
        InvalidConfigError: When the smoothing factor is out of range.
    """
    if not 0.0 < factor <= 1.0:
        raise InvalidConfigError(f"Smoothing factor {factor} must lie in (0, 1]")


def steps_to_settle(
    delta: float,
    factor: float = DEFAULT_SMOOTHING,
    snap_epsilon: float = DEFAULT_SNAP_EPSILON,
) -> int:
    """Return how many ticks an angular error of *delta* needs to settle.

    Args:
        delta: Initial ``target - current`` difference (radians).
        factor: Smoothing factor in (0, 1].
        snap_epsilon: Snap threshold (radians).

    Returns:
        The smallest ``n`` with ``|delta| * (1 - factor) ** n < snap_epsilon``.
    """
    _validate_factor(factor)
    error = abs(delta)
    if error < snap_epsilon:
        return 0
    if factor == 1.0:
        return 1
    ratio = math.log(snap_epsilon / error) / math.log(1.0 - factor)
    return int(math.floor(ratio)) + 1


@dataclass
class ArmPose:
    """The arm's animated state.

    Attributes:
        current: Angles drawn this frame; mutated by every tick.
        target: Angles of the last accepted target.
        branch: Elbow branch of the last accepted target.
    """

    current: JointAngles = field(default_factory=JointAngles)
    target: JointAngles = field(default_factory=JointAngles)
    branch: ElbowBranch = ElbowBranch.UP


@dataclass
class PoseAnimator:
    """Advances an ``ArmPose`` towards its target once per frame.

    Not re-entrant: a single control loop must own the animator and call
    ``tick`` at most once per frame.

    Attributes:
        smoothing: Fraction of the remaining error removed per tick, in (0, 1].
        snap_epsilon: Remaining error (radians) below which an angle snaps
            onto its target.
        pose: The owned pose.
    """

    smoothing: float = DEFAULT_SMOOTHING
    snap_epsilon: float = DEFAULT_SNAP_EPSILON
    pose: ArmPose = field(default_factory=ArmPose)

    def __post_init__(self) -> None:
        _validate_factor(self.smoothing)
        if not self.snap_epsilon > 0.0:
            raise InvalidConfigError(
                f"Snap epsilon {self.snap_epsilon} must be positive"
            )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def current(self) -> JointAngles:
        return self.pose.current

    @property
    def target(self) -> JointAngles:
        return self.pose.target

    @property
    def branch(self) -> ElbowBranch:
        return self.pose.branch

    def set_target(self, angles: JointAngles, branch: ElbowBranch) -> None:
        """Replace the target angles and branch; ``current`` is untouched.

        Args:
            angles: New target angles.
            branch: Elbow branch the angles belong to.
        """
        self.pose.target = angles
        self.pose.branch = branch

    def tick(self, factor: Optional[float] = None) -> JointAngles:
        """Move the current angles one smoothing step towards the target.

        Args:
            factor: Optional override of the configured smoothing factor.

        Returns:
            The updated current angles.
        """
        if factor is None:
            factor = self.smoothing
        else:
            _validate_factor(factor)
        current, target = self.pose.current, self.pose.target
        self.pose.current = JointAngles(
            self._advance(current.angle1, target.angle1, factor),
            self._advance(current.angle2, target.angle2, factor),
        )
        return self.pose.current

    def state(self) -> Tuple[AngleState, AngleState]:
        """Return the settle state of (angle1, angle2)."""
        current, target = self.pose.current, self.pose.target
        return (
            self._angle_state(current.angle1, target.angle1),
            self._angle_state(current.angle2, target.angle2),
        )

    @property
    def is_settled(self) -> bool:
        """True when both angles are settled."""
        return all(s is AngleState.SETTLED for s in self.state())

    def reset(self) -> None:
        """Return to the zero pose with elbow-up."""
        self.pose = ArmPose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _advance(self, current: float, target: float, factor: float) -> float:
        value = lerp(current, target, factor)
        if abs(target - value) < self.snap_epsilon:
            return target
        return value

    def _angle_state(self, current: float, target: float) -> AngleState:
        if abs(target - current) < self.snap_epsilon:
            return AngleState.SETTLED
        return AngleState.CONVERGING
