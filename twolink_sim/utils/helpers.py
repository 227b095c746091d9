"""
Small stateless helpers used across the twolink_sim package.

Provides scalar interpolation and clamping, and the conversions between
screen pixels and grid units relative to the arm pivot.  Screen space is
y-down, grid space is y-up.
"""

from __future__ import annotations

from typing import Tuple


def clamp(value: float, lo: float, hi: float) -> float:
    """Return *value* clamped to the closed interval [*lo*, *hi*].

    Args:
        value: The scalar to clamp.
        lo: Lower bound (inclusive).
        hi: Upper bound (inclusive).

    Returns:
        The clamped scalar.
    """
    return max(lo, min(hi, value))


def lerp(a: float, b: float, t: float) -> float:
    """Linearly interpolate from *a* towards *b* by fraction *t*."""
    return a + (b - a) * t


def grid_to_screen(
    gx: float, gy: float, pivot: Tuple[float, float], grid_size: float
) -> Tuple[float, float]:
    """Convert grid units relative to *pivot* into screen pixels.

    Args:
        gx: Grid cells to the right of the pivot.
        gy: Grid cells above the pivot.
        pivot: Pivot position in screen pixels.
        grid_size: Pixels per grid cell.

    Returns:
        Tuple of (x, y) screen coordinates.
    """
    return pivot[0] + gx * grid_size, pivot[1] - gy * grid_size


def screen_to_grid(
    sx: float, sy: float, pivot: Tuple[float, float], grid_size: float
) -> Tuple[float, float]:
    """Convert screen pixels into grid units relative to *pivot*.

    Args:
        sx: Screen x coordinate.
        sy: Screen y coordinate.
        pivot: Pivot position in screen pixels.
        grid_size: Pixels per grid cell.

    Returns:
        Tuple of (gx, gy) grid coordinates.
    """
    return (sx - pivot[0]) / grid_size, -(sy - pivot[1]) / grid_size


def snap_to_grid(
    sx: float, sy: float, pivot: Tuple[float, float], grid_size: float
) -> Tuple[float, float]:
    """Align a screen position to the nearest grid intersection.

    The grid is anchored at *pivot*, so the pivot itself is always a grid
    point.

    Args:
        sx: Screen x coordinate (e.g. a mouse click).
        sy: Screen y coordinate.
        pivot: Pivot position in screen pixels.
        grid_size: Pixels per grid cell.

    Returns:
        Tuple of grid-aligned (x, y) screen coordinates.
    """
    x = round((sx - pivot[0]) / grid_size) * grid_size + pivot[0]
    y = round((sy - pivot[1]) / grid_size) * grid_size + pivot[1]
    return float(x), float(y)
