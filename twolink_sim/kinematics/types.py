"""
Value types and the error taxonomy for two-link planar kinematics.

Classes:
    Point2D: Planar coordinates (pivot, target, joint positions).
    ArmConfig: Validated pair of positive segment lengths.
    JointAngles: Shoulder and elbow angles in radians.
    ElbowBranch: Which of the two IK roots was selected.
    AngleState: Per-angle animator state.
    IKSolution: Result of a successful inverse-kinematics solve.
    ArmError: Base class for every error raised by the arm core.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ArmError(ValueError):
    """Base class for rejected arm commands."""


class IKError(ArmError):
    """Raised when an inverse-kinematics solve cannot produce a pose."""


class UnreachableTargetError(IKError):
    """The target lies outside the reachable annulus.

    Attributes:
        distance: Pivot-to-target distance.
        inner_radius: ``|L1 - L2|``.
        outer_radius: ``L1 + L2``.
    """

    def __init__(self, distance: float, inner_radius: float, outer_radius: float) -> None:
        self.distance = distance
        self.inner_radius = inner_radius
        self.outer_radius = outer_radius
        super().__init__(
            f"Target out of reach (distance {distance:.3f}, "
            f"reachable [{inner_radius:.3f}, {outer_radius:.3f}])"
        )


class InvalidGeometryError(IKError):
    """The law-of-cosines ratio fell outside [-1, 1] beyond tolerance.

    This signals malformed input (non-finite coordinates or lengths) rather
    than a target outside the workspace.
    """


class InvalidConfigError(ArmError):
    """A configuration value (segment length, smoothing factor) is invalid."""


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Point2D:
    """Real-valued planar coordinates."""

    x: float
    y: float

    def __sub__(self, other: Point2D) -> Point2D:
        return Point2D(self.x - other.x, self.y - other.y)

    def __add__(self, other: Point2D) -> Point2D:
        return Point2D(self.x + other.x, self.y + other.y)

    def norm(self) -> float:
        """Return the Euclidean length of the vector from the origin."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Point2D) -> float:
        """Return the Euclidean distance to *other*."""
        return (other - self).norm()

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class ArmConfig:
    """Segment lengths of the arm.

    Attributes:
        l1: Length of the upper arm (pivot to elbow).
        l2: Length of the forearm (elbow to end effector).

    Raises:
        InvalidConfigError: If either length is not a finite positive number.
    """

    l1: float
    l2: float

    def __post_init__(self) -> None:
        for name, value in (("l1", self.l1), ("l2", self.l2)):
            if not (math.isfinite(value) and value > 0.0):
                raise InvalidConfigError(
                    f"Segment length {name}={value} must be a finite positive number"
                )

    @property
    def inner_radius(self) -> float:
        """Radius of the unreachable inner disc, ``|L1 - L2|``."""
        return abs(self.l1 - self.l2)

    @property
    def outer_radius(self) -> float:
        """Maximum extension, ``L1 + L2``."""
        return self.l1 + self.l2


@dataclass(frozen=True)
class JointAngles:
    """Joint angles in radians.

    Attributes:
        angle1: Shoulder angle measured from the positive x-axis at the pivot.
        angle2: Elbow angle relative to the upper arm's direction.
    """

    angle1: float = 0.0
    angle2: float = 0.0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.angle1, self.angle2)


class ElbowBranch(Enum):
    """The two mirror-image roots of the two-link IK system."""

    UP = "up"
    DOWN = "down"


class AngleState(Enum):
    """Animator state for a single joint angle."""

    SETTLED = "settled"
    CONVERGING = "converging"


@dataclass(frozen=True)
class IKSolution:
    """Outcome of a successful inverse-kinematics solve.

    Attributes:
        angles: Selected joint angles.
        branch: Elbow configuration the angles belong to.
        distance: Pivot-to-target distance that was solved for.
    """

    angles: JointAngles
    branch: ElbowBranch
    distance: float
