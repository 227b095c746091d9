"""
Dataclass configuration for the arm simulation.

One config drives both the interactive window and the Gymnasium
environment: window and grid geometry, segment lengths, animation
smoothing, and observation settings.

Classes:
    ArmSimConfig: Validated simulation configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from twolink_sim.kinematics.animator import PoseAnimator
from twolink_sim.kinematics.types import ArmConfig, InvalidConfigError, Point2D
from twolink_sim.robots.planar_arm import PlanarArm
from twolink_sim.utils.constants import (
    DEFAULT_EPISODE_LENGTH,
    DEFAULT_FPS,
    DEFAULT_GRID_SIZE,
    DEFAULT_L1,
    DEFAULT_L2,
    DEFAULT_RENDER_HEIGHT,
    DEFAULT_RENDER_WIDTH,
    DEFAULT_SEGMENT_THICKNESS,
    DEFAULT_SMOOTHING,
    DEFAULT_SNAP_EPSILON,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
)

_OBS_TYPES = ("agent_pos", "pixels_agent_pos")


@dataclass
class ArmSimConfig:
    """Configuration shared by the interactive app and the Gymnasium env.

    Attributes:
        task: Human-readable task identifier.
        fps: Frames (animator ticks) per second.
        episode_length: Maximum env steps per episode.
        obs_type: ``'agent_pos'`` or ``'pixels_agent_pos'``.
        render_mode: Gymnasium render mode.
        observation_height: Pixel height of rendered observations.
        observation_width: Pixel width of rendered observations.
        seed: Random seed for goal sampling.
        window_width: Scene width in pixels.
        window_height: Scene height in pixels.
        grid_size: Pixels per grid cell.
        l1: Upper-arm length in pixels.
        l2: Forearm length in pixels.
        smoothing: Animator smoothing factor in (0, 1].
        snap_epsilon: Animator snap threshold in radians.
        thickness: Drawn segment thickness in pixels.
        pivot_x: Pivot x in pixels; defaults to the window centre.
        pivot_y: Pivot y in pixels; defaults to the window centre.

    Raises:
        InvalidConfigError: If any value is out of range.
    """

    task: str = "TwoLinkTrack-v0"
    fps: int = DEFAULT_FPS
    episode_length: int = DEFAULT_EPISODE_LENGTH
    obs_type: str = "pixels_agent_pos"
    render_mode: str = "rgb_array"
    observation_height: int = DEFAULT_RENDER_HEIGHT
    observation_width: int = DEFAULT_RENDER_WIDTH
    seed: int = 42
    window_width: int = DEFAULT_WINDOW_WIDTH
    window_height: int = DEFAULT_WINDOW_HEIGHT
    grid_size: float = DEFAULT_GRID_SIZE
    l1: float = DEFAULT_L1
    l2: float = DEFAULT_L2
    smoothing: float = DEFAULT_SMOOTHING
    snap_epsilon: float = DEFAULT_SNAP_EPSILON
    thickness: float = DEFAULT_SEGMENT_THICKNESS
    pivot_x: Optional[float] = None
    pivot_y: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate every field and fill in the default pivot."""
        if self.pivot_x is None:
            self.pivot_x = self.window_width / 2
        if self.pivot_y is None:
            self.pivot_y = self.window_height / 2
        self._check_positive("fps", self.fps)
        self._check_positive("episode_length", self.episode_length)
        self._check_positive("observation_height", self.observation_height)
        self._check_positive("observation_width", self.observation_width)
        self._check_positive("window_width", self.window_width)
        self._check_positive("window_height", self.window_height)
        self._check_positive("grid_size", self.grid_size)
        self._check_positive("thickness", self.thickness)
        if self.obs_type not in _OBS_TYPES:
            raise InvalidConfigError(
                f"Unknown obs_type '{self.obs_type}'. Choose from {list(_OBS_TYPES)}"
            )
        self.arm_config()
        self.build_animator()

    @staticmethod
    def _check_positive(name: str, value: float) -> None:
        if not value > 0:
            raise InvalidConfigError(f"{name}={value} must be positive")

    @property
    def env_type(self) -> str:
        """Return the ``task`` field value."""
        return self.task

    @property
    def render_scale(self) -> float:
        """Observation pixels per scene pixel."""
        return self.observation_width / self.window_width

    def arm_config(self) -> ArmConfig:
        return ArmConfig(self.l1, self.l2)

    def pivot(self) -> Point2D:
        return Point2D(float(self.pivot_x), float(self.pivot_y))

    def build_animator(self) -> PoseAnimator:
        return PoseAnimator(smoothing=self.smoothing, snap_epsilon=self.snap_epsilon)

    def build_arm(self) -> PlanarArm:
        """Create a ``PlanarArm`` in the zero pose from this configuration."""
        return PlanarArm(
            config=self.arm_config(),
            pivot=self.pivot(),
            animator=self.build_animator(),
        )
