"""
Planar robot arm owning segment lengths, pivot, and animated pose.

Provides the two-link arm that accepts target points and reconfiguration
commands, animates towards solved poses, and exposes per-frame render
snapshots.
"""

from twolink_sim.robots.planar_arm import PlanarArm, RenderState

__all__ = ["PlanarArm", "RenderState"]
