"""
Two-link planar arm simulation.

An interactive 2-D visualisation of a revolute-revolute robot arm that
tracks a user-supplied target point.  Provides an analytic inverse
kinematics solver with elbow-branch selection, an exponential-smoothing
pose animator, a Gymnasium-compatible tracking environment, mouse and
keyboard input mapping, and real-time Pygame rendering.

Modules:
    kinematics: IK solver, forward kinematics, and pose animation.
    robots: The planar arm that owns configuration, pivot, and pose.
    envs: Gymnasium-compatible target-tracking environment.
    rendering: NumPy canvas drawing for the arm scene.
    teleop: Keyboard, mouse, and terminal input mapping.
    visualization: Real-time Pygame window.
    utils: Shared constants and helper utilities.
"""

__version__ = "0.1.0"
