"""
Gymnasium-compatible target-tracking environment for the two-link arm.

Provides the tracking task, its configuration dataclass, and a factory that
returns vectorised environments.
"""

from twolink_sim.envs.configs import ArmSimConfig
from twolink_sim.envs.factory import make_sim_env
from twolink_sim.envs.track_target import TargetTrackingEnv

__all__ = [
    "ArmSimConfig",
    "TargetTrackingEnv",
    "make_sim_env",
]
