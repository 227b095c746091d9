"""
2-D target-tracking environment (Gymnasium-compatible).

Each episode samples a goal point inside the arm's reachable annulus.  The
agent commands target points in grid units relative to the pivot; every
command is run through the arm's IK solver (unreachable commands are
rejected and the previous target is kept) and the animator advances one
frame per step.  The episode succeeds once the arm has settled with its end
effector within one grid cell of the goal.

Classes:
    TargetTrackingEnv: Gymnasium environment for the tracking task.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces
from gymnasium.utils import seeding

from twolink_sim.envs.configs import ArmSimConfig
from twolink_sim.kinematics.types import IKError, Point2D
from twolink_sim.rendering.canvas import ArmCanvasRenderer
from twolink_sim.utils.constants import COLOR_WARNING
from twolink_sim.utils.helpers import grid_to_screen, screen_to_grid

# Keeps sampled goals strictly inside the annulus after float32 round trips.
_GOAL_MARGIN: float = 0.01


class TargetTrackingEnv(gym.Env):
    """Gymnasium environment in which a two-link arm tracks a goal point.

    Attributes:
        metadata: Gymnasium metadata with supported render modes.
        cfg: ``ArmSimConfig`` controlling geometry, smoothing, and rendering.
        arm: The simulated ``PlanarArm``.
    """

    metadata: Dict[str, Any] = {"render_modes": ["rgb_array"], "render_fps": 60}

    def __init__(self, cfg: ArmSimConfig | None = None) -> None:
        """Initialise the tracking environment.

        Args:
            cfg: Optional configuration; a default ``ArmSimConfig`` is used
                when *None*.
        """
        super().__init__()
        self.cfg = cfg or ArmSimConfig()
        self.render_mode = self.cfg.render_mode
        self.metadata = {**self.metadata, "render_fps": self.cfg.fps}
        self.arm = self.cfg.build_arm()
        self._renderer = ArmCanvasRenderer(
            width=self.cfg.observation_width,
            height=self.cfg.observation_height,
            grid_size=self.cfg.grid_size,
            thickness=self.cfg.thickness,
            scale=self.cfg.render_scale,
        )
        self._goal = self.arm.pivot
        self._step_count = 0
        self._init_spaces()
        self.np_random, _ = seeding.np_random(self.cfg.seed)

    # ------------------------------------------------------------------
    # Initialisation helpers (called by __init__)
    # ------------------------------------------------------------------

    def _init_spaces(self) -> None:
        """Define action and observation Gymnasium spaces."""
        reach = float(self.arm.config.outer_radius / self.cfg.grid_size)
        self.action_space = spaces.Box(
            low=-reach, high=reach, shape=(2,), dtype=np.float32
        )
        obs_dict: Dict[str, spaces.Space] = {
            "agent_pos": spaces.Box(
                low=-np.inf, high=np.inf, shape=(6,), dtype=np.float32
            )
        }
        if "pixels" in self.cfg.obs_type:
            h, w = self.cfg.observation_height, self.cfg.observation_width
            obs_dict["pixels"] = spaces.Box(
                low=0, high=255, shape=(h, w, 3), dtype=np.uint8
            )
        self.observation_space = spaces.Dict(obs_dict)

    # ------------------------------------------------------------------
    # Gymnasium API
    # ------------------------------------------------------------------

    def _sample_goal(self) -> Point2D:
        """Sample a goal point uniformly in radius and angle inside the annulus."""
        config = self.arm.config
        margin = _GOAL_MARGIN * config.outer_radius
        radius = float(
            self.np_random.uniform(config.inner_radius + margin, config.outer_radius - margin)
        )
        angle = float(self.np_random.uniform(0.0, 2.0 * np.pi))
        pivot = self.arm.pivot
        return Point2D(
            pivot.x + radius * float(np.cos(angle)),
            pivot.y + radius * float(np.sin(angle)),
        )

    def reset(
        self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """Reset the arm to the zero pose and sample a new goal.

        Args:
            seed: Optional seed for the random number generator.
            options: Unused; reserved for Gymnasium compatibility.

        Returns:
            Tuple of (observation dict, info dict).
        """
        super().reset(seed=seed)
        self._step_count = 0
        self.arm.reset()
        self._goal = self._sample_goal()
        return self._build_observation(), {}

    def _apply_command(self, action: np.ndarray) -> bool:
        """Send the commanded target to the arm.

        Args:
            action: Target (gx, gy) in grid units relative to the pivot.

        Returns:
            True if the arm rejected the command.
        """
        pivot = self.arm.pivot.as_tuple()
        sx, sy = grid_to_screen(float(action[0]), float(action[1]), pivot, self.cfg.grid_size)
        try:
            self.arm.set_target_point(Point2D(sx, sy))
        except IKError:
            return True
        return False

    def _goal_distance(self) -> float:
        return self.arm.end_effector().distance_to(self._goal)

    def _compute_reward(self) -> Tuple[float, bool]:
        """Compute the reward and success flag.

        Returns:
            Tuple of (scalar reward, success boolean).
        """
        dist = self._goal_distance()
        reward = -dist / self.arm.config.outer_radius
        success = self.arm.is_settled and dist <= self.cfg.grid_size
        return float(reward), bool(success)

    def step(
        self, action: np.ndarray
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """Apply one target command and advance the animation one frame.

        Args:
            action: Target (gx, gy) in grid units relative to the pivot.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        action = np.asarray(action, dtype=np.float32)
        rejected = self._apply_command(action)
        self.arm.step()
        self._step_count += 1
        reward, success = self._compute_reward()
        truncated = self._step_count >= self.cfg.episode_length
        info = {"is_success": success, "rejected": rejected}
        return self._build_observation(), reward, success, truncated, info

    # ------------------------------------------------------------------
    # Observation builder
    # ------------------------------------------------------------------

    def goal_grid(self) -> np.ndarray:
        """Return the current goal in grid units relative to the pivot."""
        gx, gy = screen_to_grid(
            self._goal.x, self._goal.y, self.arm.pivot.as_tuple(), self.cfg.grid_size
        )
        return np.array([gx, gy], dtype=np.float32)

    def _build_observation(self) -> Dict[str, np.ndarray]:
        """Assemble the observation dictionary.

        Returns:
            Dictionary with ``'agent_pos'`` (6-D) and optionally ``'pixels'``.
            ``agent_pos`` holds [angle1, angle2, ee_gx, ee_gy, goal_gx, goal_gy].
        """
        current = self.arm.animator.current
        ee = self.arm.end_effector()
        ee_grid = screen_to_grid(ee.x, ee.y, self.arm.pivot.as_tuple(), self.cfg.grid_size)
        state = np.concatenate(
            [
                np.array(current.as_tuple(), dtype=np.float32),
                np.array(ee_grid, dtype=np.float32),
                self.goal_grid(),
            ]
        ).astype(np.float32)
        obs: Dict[str, np.ndarray] = {"agent_pos": state}
        if "pixels" in self.cfg.obs_type:
            obs["pixels"] = self.render()
        return obs

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> np.ndarray:
        """Render the current scene, goal included, as an RGB image.

        Returns:
            (H, W, 3) uint8 NumPy array.
        """
        canvas = self._renderer.render(self.arm.render_state())
        self._renderer.draw_marker(canvas, self._goal, 4.0, COLOR_WARNING)
        return canvas
