"""
Real-time rendering of the arm scene.

Provides a Pygame-based window that shows the arm, its reachability
boundaries, and a HUD, and forwards mouse and keyboard input.
"""
