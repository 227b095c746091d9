"""
Keyboard, mouse, and terminal input mapping for the arm.

Translates raw input into small command objects and applies them to a
``PlanarArm``.  Mouse clicks are aligned to the grid; typed coordinates are
in grid units relative to the pivot with y pointing up.  Pygame events are
handled when Pygame is available; the terminal parser works headless.

Classes:
    InputMapper: Maps input events to commands.

Functions:
    apply_command: Execute a command against a ``PlanarArm``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from twolink_sim.kinematics.types import Point2D
from twolink_sim.robots.planar_arm import PlanarArm
from twolink_sim.utils.constants import DEFAULT_GRID_SIZE
from twolink_sim.utils.helpers import grid_to_screen, screen_to_grid, snap_to_grid

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetTarget:
    point: Point2D


@dataclass(frozen=True)
class Reconfigure:
    l1: float
    l2: float


@dataclass(frozen=True)
class AdjustLengths:
    dl1: float = 0.0
    dl2: float = 0.0


@dataclass(frozen=True)
class MovePivot:
    point: Point2D


@dataclass(frozen=True)
class PromptTarget:
    """Ask the user to type a target in grid units."""


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Quit:
    pass


Command = Union[
    SetTarget, Reconfigure, AdjustLengths, MovePivot, PromptTarget, Reset, Quit
]

# Arrow-key nudges in grid cells (gx, gy), y up.
_NUDGES = {
    "up": (0, 1),
    "down": (0, -1),
    "left": (-1, 0),
    "right": (1, 0),
}


@dataclass
class InputMapper:
    """Maps keyboard, mouse, and terminal input to arm commands.

    Key bindings: arrows nudge the target one grid cell, ``c`` prompts for
    typed coordinates, ``+``/``-`` grow/shrink L2, ``]``/``[`` grow/shrink
    L1, ``r`` resets, ``q``/``escape`` quits.  Left click sets a
    grid-aligned target, right click moves the pivot.

    Attributes:
        grid_size: Pixels per grid cell.
        pivot: Current pivot, used for grid conversions.
        cursor: Last target the mapper emitted; arrow keys nudge it.
    """

    grid_size: float = DEFAULT_GRID_SIZE
    pivot: Point2D = Point2D(0.0, 0.0)
    cursor: Optional[Point2D] = None

    def sync(self, arm: PlanarArm) -> None:
        """Track the arm's pivot and accepted target."""
        self.pivot = arm.pivot
        self.cursor = arm.target_point

    # ------------------------------------------------------------------
    # Raw input
    # ------------------------------------------------------------------

    def handle_mouse(self, button: int, sx: float, sy: float) -> Optional[Command]:
        """Map a mouse click at screen position (*sx*, *sy*).

        Args:
            button: 1 for left, 3 for right (Pygame numbering).
            sx: Screen x coordinate.
            sy: Screen y coordinate.

        Returns:
            A command, or *None* for unbound buttons.
        """
        if button == 1:
            x, y = snap_to_grid(sx, sy, self.pivot.as_tuple(), self.grid_size)
            return self._target(Point2D(x, y))
        if button == 3:
            return MovePivot(Point2D(float(sx), float(sy)))
        return None

    def handle_key(self, key: str) -> Optional[Command]:
        """Map a key name (``'up'``, ``'c'``, ``'+'`` ...) to a command."""
        key = key.lower()
        if key in ("q", "escape"):
            return Quit()
        if key == "r":
            return Reset()
        if key == "c":
            return PromptTarget()
        if key in _NUDGES:
            return self._nudge(*_NUDGES[key])
        length_keys = {
            "+": AdjustLengths(dl2=self.grid_size),
            "=": AdjustLengths(dl2=self.grid_size),
            "-": AdjustLengths(dl2=-self.grid_size),
            "]": AdjustLengths(dl1=self.grid_size),
            "[": AdjustLengths(dl1=-self.grid_size),
        }
        return length_keys.get(key)

    def parse_terminal_command(self, line: str) -> Optional[Command]:
        """Parse one line of terminal input.

        Supported forms::

            gx gy        target in grid units
            c gx gy      same as above
            l l1 l2      set segment lengths (pixels)
            p gx gy      move the pivot by (gx, gy) grid cells
            r            reset
            q            quit

        Args:
            line: Raw input line.

        Returns:
            The command, or *None* for a blank line.

        Raises:
            ValueError: If the line is malformed.
        """
        parts = line.split()
        if not parts:
            return None
        head = parts[0].lower()
        if head in ("q", "r") and len(parts) == 1:
            return Quit() if head == "q" else Reset()
        if head in ("c", "l", "p"):
            args = parts[1:]
        else:
            head, args = "c", parts
        if len(args) != 2:
            raise ValueError(f"Expected two numbers in {line!r}")
        a, b = (float(v) for v in args)
        if head == "l":
            return Reconfigure(a, b)
        if head == "p":
            x, y = grid_to_screen(a, b, self.pivot.as_tuple(), self.grid_size)
            return MovePivot(Point2D(x, y))
        return self.grid_target(a, b)

    def grid_target(self, gx: float, gy: float) -> SetTarget:
        """Build a target command from grid units relative to the pivot."""
        x, y = grid_to_screen(gx, gy, self.pivot.as_tuple(), self.grid_size)
        return self._target(Point2D(x, y))

    def describe(self, point: Point2D) -> str:
        """Format *point* in grid units, e.g. ``'(3, -2)'``."""
        gx, gy = screen_to_grid(point.x, point.y, self.pivot.as_tuple(), self.grid_size)
        return f"({gx:g}, {gy:g})"

    def process_pygame_events(self, events: List[Any], pygame_module: Any) -> List[Command]:
        """Map a batch of Pygame events to commands.

        Args:
            events: Events from ``pygame.event.get()``.
            pygame_module: The ``pygame`` module (passed to avoid re-import).

        Returns:
            Commands in event order.
        """
        pg = pygame_module
        commands: List[Command] = []
        for event in events:
            command: Optional[Command] = None
            if event.type == pg.QUIT:
                command = Quit()
            elif event.type == pg.MOUSEBUTTONDOWN:
                command = self.handle_mouse(event.button, *event.pos)
            elif event.type == pg.KEYDOWN:
                command = self.handle_key(pg.key.name(event.key))
            if command is not None:
                commands.append(command)
        return commands

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _target(self, point: Point2D) -> SetTarget:
        self.cursor = point
        return SetTarget(point)

    def _nudge(self, gx: int, gy: int) -> SetTarget:
        base = self.cursor if self.cursor is not None else self.pivot
        x, y = grid_to_screen(gx, gy, base.as_tuple(), self.grid_size)
        return self._target(Point2D(x, y))


def apply_command(arm: PlanarArm, command: Command) -> None:
    """Execute *command* against *arm*.

    ``PromptTarget`` and ``Quit`` are handled by the caller's loop and are
    ignored here.

    Raises:
        ArmError: If the arm rejects the command; its state is unchanged.
    """
    if isinstance(command, SetTarget):
        arm.set_target_point(command.point)
    elif isinstance(command, Reconfigure):
        arm.configure(command.l1, command.l2)
    elif isinstance(command, AdjustLengths):
        arm.configure(arm.config.l1 + command.dl1, arm.config.l2 + command.dl2)
    elif isinstance(command, MovePivot):
        arm.move_pivot(command.point)
    elif isinstance(command, Reset):
        arm.reset()
    else:
        logger.debug("Command %r left to the caller", command)
