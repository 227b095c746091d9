"""
Shared constants for the twolink_sim package.

Screen-space defaults follow an 800x600 window with the arm pivot at its
centre and a 10 pixel grid.  All lengths are in pixels and all angles in
radians.
"""

from __future__ import annotations

from typing import Tuple

# ---------------------------------------------------------------------------
# Window / grid defaults
# ---------------------------------------------------------------------------
DEFAULT_WINDOW_WIDTH: int = 800
DEFAULT_WINDOW_HEIGHT: int = 600
DEFAULT_GRID_SIZE: int = 10
DEFAULT_FPS: int = 60
WINDOW_TITLE: str = "Robotic Arm Simulation"

# ---------------------------------------------------------------------------
# Arm defaults (pixels)
# ---------------------------------------------------------------------------
DEFAULT_L1: float = 100.0
DEFAULT_L2: float = 100.0
DEFAULT_SEGMENT_THICKNESS: float = 3.0

# ---------------------------------------------------------------------------
# Numerical tolerances
# ---------------------------------------------------------------------------
# Allowed overshoot of the law-of-cosines ratio before it is rejected.
COS_EPSILON: float = 1e-6
# Angular distance (radians) below which the animator snaps to target.
DEFAULT_SNAP_EPSILON: float = 1e-4
# Fraction of the remaining angular error removed on every tick.
DEFAULT_SMOOTHING: float = 0.1

# ---------------------------------------------------------------------------
# Gymnasium environment defaults
# ---------------------------------------------------------------------------
DEFAULT_EPISODE_LENGTH: int = 200
DEFAULT_RENDER_WIDTH: int = 400
DEFAULT_RENDER_HEIGHT: int = 300

# ---------------------------------------------------------------------------
# Color palette (RGB 0-255) used by the 2-D renderers
# ---------------------------------------------------------------------------
COLOR_BACKGROUND: Tuple[int, int, int] = (255, 255, 255)
COLOR_GRID: Tuple[int, int, int] = (200, 200, 200)
COLOR_UPPER_ARM: Tuple[int, int, int] = (0, 0, 255)
COLOR_LOWER_ARM: Tuple[int, int, int] = (255, 0, 0)
COLOR_JOINT: Tuple[int, int, int] = (40, 40, 40)
COLOR_TARGET: Tuple[int, int, int] = (15, 157, 88)
COLOR_REACH: Tuple[int, int, int] = (244, 180, 0)
COLOR_TEXT: Tuple[int, int, int] = (50, 50, 50)
COLOR_WARNING: Tuple[int, int, int] = (219, 68, 55)
