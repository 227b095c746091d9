"""
NumPy canvas drawing for the arm scene.

Turns a ``RenderState`` snapshot into an (H, W, 3) uint8 RGB image that the
Pygame visualizer blits and the Gymnasium environment returns as pixels.
"""

from twolink_sim.rendering.canvas import ArmCanvasRenderer

__all__ = ["ArmCanvasRenderer"]
