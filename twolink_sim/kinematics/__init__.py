"""
Kinematics for a two-link planar (revolute-revolute) arm.

Provides the analytic inverse-kinematics solver with reachability
classification and elbow-branch selection, forward kinematics, and the
exponential-smoothing animator that drives the pose frame by frame.
"""

from twolink_sim.kinematics.animator import (
    ArmPose,
    PoseAnimator,
    forward_kinematics,
    steps_to_settle,
)
from twolink_sim.kinematics.solver import IKSolver, solve
from twolink_sim.kinematics.types import (
    AngleState,
    ArmConfig,
    ArmError,
    ElbowBranch,
    IKError,
    IKSolution,
    InvalidConfigError,
    InvalidGeometryError,
    JointAngles,
    Point2D,
    UnreachableTargetError,
)

__all__ = [
    "AngleState",
    "ArmConfig",
    "ArmError",
    "ArmPose",
    "ElbowBranch",
    "IKError",
    "IKSolution",
    "IKSolver",
    "InvalidConfigError",
    "InvalidGeometryError",
    "JointAngles",
    "Point2D",
    "PoseAnimator",
    "UnreachableTargetError",
    "forward_kinematics",
    "solve",
    "steps_to_settle",
]
