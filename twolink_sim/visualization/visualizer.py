"""
Real-time Pygame window for the arm scene.

Blits canvas frames produced by ``ArmCanvasRenderer``, overlays a small
HUD (joint angles, branch, segment lengths, status), and turns window
events into arm commands through an ``InputMapper``.

Classes:
    ArmVisualizer: Live rendering window.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np

from twolink_sim.teleop.input_mapper import Command, InputMapper
from twolink_sim.utils.constants import (
    COLOR_TEXT,
    DEFAULT_FPS,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    WINDOW_TITLE,
)


def _import_pygame() -> Any:
    """Import Pygame or raise with an install hint.

    Raises:
        ImportError: If Pygame is not installed.
    """
    try:
        import pygame
    except ImportError as exc:
        raise ImportError("Pygame required: pip install pygame") from exc
    return pygame


@dataclass
class ArmVisualizer:
    """Pygame window that displays the arm and collects user input.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels.
        fps: Target frames per second.
        window_title: Caption displayed in the title bar.
    """

    width: int = DEFAULT_WINDOW_WIDTH
    height: int = DEFAULT_WINDOW_HEIGHT
    fps: int = DEFAULT_FPS
    window_title: str = WINDOW_TITLE
    _pygame: Optional[Any] = None
    _screen: Optional[Any] = None
    _clock: Optional[Any] = None
    _font: Optional[Any] = None

    # ------------------------------------------------------------------
    # Initialisation / teardown
    # ------------------------------------------------------------------

    def init_display(self) -> None:
        """Create the Pygame window, clock, and HUD font.

        Raises:
            ImportError: If Pygame is not installed.
        """
        pygame = _import_pygame()
        pygame.init()
        self._pygame = pygame
        self._screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption(self.window_title)
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 14)

    def close(self) -> None:
        """Destroy the Pygame window and quit Pygame."""
        if self._pygame is not None:
            self._pygame.quit()
            self._pygame = None
            self._screen = None

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def poll_commands(self, mapper: InputMapper) -> List[Command]:
        """Drain pending window events and map them to commands.

        Args:
            mapper: Input mapper holding the current pivot and cursor.

        Returns:
            Commands in event order.
        """
        if self._screen is None:
            self.init_display()
        pygame = self._pygame
        return mapper.process_pygame_events(pygame.event.get(), pygame)

    # ------------------------------------------------------------------
    # Live rendering
    # ------------------------------------------------------------------

    def _image_to_surface(self, image: np.ndarray) -> Any:
        """Convert an (H, W, 3) uint8 NumPy image to a Pygame surface."""
        return self._pygame.surfarray.make_surface(np.transpose(image, (1, 0, 2)))

    def _draw_hud(self, lines: Sequence[str]) -> None:
        """Draw HUD text lines down the top-left corner."""
        for idx, text in enumerate(lines):
            rendered = self._font.render(text, True, COLOR_TEXT)
            self._screen.blit(rendered, (8, 4 + idx * 16))

    def render_frame(self, image: np.ndarray, hud: Sequence[str] = ()) -> None:
        """Blit one frame with HUD overlay and wait for the next frame slot.

        Args:
            image: (H, W, 3) uint8 RGB image.
            hud: Text lines drawn over the image.
        """
        if self._screen is None:
            self.init_display()
        surface = self._image_to_surface(image)
        if surface.get_size() != (self.width, self.height):
            surface = self._pygame.transform.scale(surface, (self.width, self.height))
        self._screen.blit(surface, (0, 0))
        self._draw_hud(hud)
        self._pygame.display.flip()
        self._clock.tick(self.fps)
