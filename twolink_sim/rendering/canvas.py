"""
Rasterise the arm scene onto a NumPy RGB canvas.

Classes:
    ArmCanvasRenderer: Draws grid, reachability annulus, arm, and target.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from twolink_sim.kinematics.types import Point2D
from twolink_sim.robots.planar_arm import RenderState
from twolink_sim.utils.constants import (
    COLOR_BACKGROUND,
    COLOR_GRID,
    COLOR_JOINT,
    COLOR_LOWER_ARM,
    COLOR_REACH,
    COLOR_TARGET,
    COLOR_UPPER_ARM,
    DEFAULT_GRID_SIZE,
    DEFAULT_SEGMENT_THICKNESS,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
)

Color = Tuple[int, int, int]


@dataclass
class ArmCanvasRenderer:
    """Draws a ``RenderState`` into an (H, W, 3) uint8 image.

    Scene coordinates are window pixels; *scale* maps them onto the canvas
    so the same scene can be rendered at observation resolution.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        grid_size: Grid spacing in scene pixels (0 disables the grid).
        thickness: Segment thickness in scene pixels.
        scale: Canvas pixels per scene pixel.
        show_reach: Whether to draw the reachability annulus.
    """

    width: int = DEFAULT_WINDOW_WIDTH
    height: int = DEFAULT_WINDOW_HEIGHT
    grid_size: float = DEFAULT_GRID_SIZE
    thickness: float = DEFAULT_SEGMENT_THICKNESS
    scale: float = 1.0
    show_reach: bool = True

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def render(self, state: RenderState) -> np.ndarray:
        """Render one frame.

        Args:
            state: Snapshot from ``PlanarArm.render_state``.

        Returns:
            (H, W, 3) uint8 NumPy array.
        """
        canvas = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        canvas[:] = COLOR_BACKGROUND
        self._draw_grid(canvas, state.pivot)
        if self.show_reach:
            self._draw_reach(canvas, state)
        if state.target is not None:
            self.draw_marker(canvas, state.target, 3.0, COLOR_TARGET)
        self._draw_thick_line(canvas, state.pivot, state.joint2, COLOR_UPPER_ARM)
        self._draw_thick_line(canvas, state.joint2, state.end_effector, COLOR_LOWER_ARM)
        self.draw_marker(canvas, state.pivot, self.thickness * 1.5, COLOR_JOINT)
        self.draw_marker(canvas, state.joint2, self.thickness, COLOR_JOINT)
        return canvas

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------

    def _pixel_grid(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return scene-space (x, y) coordinates of every canvas pixel centre."""
        rows, cols = np.ogrid[: self.height, : self.width]
        return (cols + 0.5) / self.scale, (rows + 0.5) / self.scale

    def _draw_grid(self, canvas: np.ndarray, pivot: Point2D) -> None:
        """Draw grid lines anchored at the pivot.

        Args:
            canvas: Mutable (H, W, 3) uint8 array.
            pivot: Grid origin in scene pixels.
        """
        if self.grid_size <= 0:
            return
        step = self.grid_size * self.scale
        if step < 2.0:
            return
        x0 = (pivot.x * self.scale) % step
        y0 = (pivot.y * self.scale) % step
        cols = np.arange(x0, self.width, step).astype(int)
        rows = np.arange(y0, self.height, step).astype(int)
        canvas[:, cols[cols < self.width]] = COLOR_GRID
        canvas[rows[rows < self.height], :] = COLOR_GRID

    def _draw_reach(self, canvas: np.ndarray, state: RenderState) -> None:
        """Outline the inner and outer reachability circles."""
        xs, ys = self._pixel_grid()
        dist = np.hypot(xs - state.pivot.x, ys - state.pivot.y)
        band = 0.5 / self.scale
        for radius in (state.inner_radius, state.outer_radius):
            if radius > 0.0:
                canvas[np.abs(dist - radius) <= band] = COLOR_REACH

    def draw_marker(
        self, canvas: np.ndarray, centre: Point2D, radius: float, color: Color
    ) -> None:
        """Fill a disc of *radius* scene pixels around *centre*."""
        xs, ys = self._pixel_grid()
        mask = (xs - centre.x) ** 2 + (ys - centre.y) ** 2 <= radius**2
        canvas[mask] = color

    def _draw_thick_line(
        self, canvas: np.ndarray, start: Point2D, end: Point2D, color: Color
    ) -> None:
        """Draw a segment of the configured thickness.

        Zero-length segments draw nothing.
        """
        dx, dy = end.x - start.x, end.y - start.y
        length_sq = dx * dx + dy * dy
        if length_sq == 0.0:
            return
        xs, ys = self._pixel_grid()
        t = np.clip(((xs - start.x) * dx + (ys - start.y) * dy) / length_sq, 0.0, 1.0)
        px = start.x + t * dx
        py = start.y + t * dy
        # At least one canvas pixel wide when downscaled.
        half = max(self.thickness / 2.0, 0.75 / self.scale)
        mask = (xs - px) ** 2 + (ys - py) ** 2 <= half**2
        canvas[mask] = color
