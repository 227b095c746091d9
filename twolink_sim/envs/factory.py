"""
Build vectorised tracking environments by preset name or config.

The result is keyed the same way for every caller,
``{task: {0: VectorEnv}}``, so evaluation loops can iterate suites without
knowing which preset produced them.

Functions:
    make_sim_env: Create one or more vectorised tracking environments.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Dict, List

import gymnasium as gym

from twolink_sim.envs.configs import ArmSimConfig

logger = logging.getLogger(__name__)

# Preset name -> keyword overrides on top of the ArmSimConfig defaults.
_PRESETS: Dict[str, Dict[str, object]] = {
    "track": {},
    "track_state": {"obs_type": "agent_pos"},
    "track_uneven": {"l1": 120.0, "l2": 60.0},
}


def _resolve_config(cfg: ArmSimConfig | str) -> ArmSimConfig:
    """Return *cfg* itself, or the config built from a preset name.

    Raises:
        ValueError: For an unregistered preset name.
    """
    if isinstance(cfg, ArmSimConfig):
        return cfg
    try:
        overrides = _PRESETS[cfg]
    except KeyError:
        raise ValueError(f"Unknown env '{cfg}'. Choose from {sorted(_PRESETS)}") from None
    return ArmSimConfig(**overrides)


def _env_fns(cfg: ArmSimConfig, n_envs: int) -> List[Callable[[], gym.Env]]:
    """One constructor per copy, each seeded ``cfg.seed + index``."""
    from twolink_sim.envs.track_target import TargetTrackingEnv

    return [
        lambda c=dataclasses.replace(cfg, seed=cfg.seed + idx): TargetTrackingEnv(c)
        for idx in range(n_envs)
    ]


def make_sim_env(
    cfg: ArmSimConfig | str = "track",
    n_envs: int = 1,
    use_async_envs: bool = False,
) -> Dict[str, Dict[int, gym.vector.VectorEnv]]:
    """Create vectorised tracking environments.

    Args:
        cfg: An ``ArmSimConfig`` or a preset name (``'track'``,
            ``'track_state'``, ``'track_uneven'``).
        n_envs: Number of parallel copies; each samples its own goals.
        use_async_envs: Run copies in subprocesses via ``AsyncVectorEnv``.

    Returns:
        ``{task: {0: VectorEnv}}`` mapping.

    Raises:
        ValueError: For an unknown preset or ``n_envs < 1``.
    """
    if n_envs < 1:
        raise ValueError(f"`n_envs` must be at least 1, got {n_envs}")
    resolved = _resolve_config(cfg)
    vector_cls = gym.vector.AsyncVectorEnv if use_async_envs else gym.vector.SyncVectorEnv
    logger.info("Creating %d x %s (%s)", n_envs, resolved.env_type, vector_cls.__name__)
    return {resolved.env_type: {0: vector_cls(_env_fns(resolved, n_envs))}}
