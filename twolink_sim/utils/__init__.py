"""
Shared constants and helper utilities.

Centralizes window defaults, numerical tolerances, the colour palette, and
small stateless helpers (interpolation, clamping, grid conversion) used
across the twolink_sim package.
"""
