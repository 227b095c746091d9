"""
Keyboard, mouse, and terminal input for driving the arm.

Maps raw input events to arm commands (new target, segment lengths, pivot,
reset, quit) and applies them to a ``PlanarArm``.
"""

from twolink_sim.teleop.input_mapper import InputMapper, apply_command

__all__ = ["InputMapper", "apply_command"]
