#!/usr/bin/env python3
"""
Main entry point for the two-link arm simulation.

Runs the interactive window, solves single targets headlessly, or plays
scripted tracking episodes through the Gymnasium environment.  Run directly
with ``python run_sim.py`` or import individual components for custom
workflows.

Usage examples::

    # Interactive window: click to set targets, C to type coordinates
    python run_sim.py --mode interactive

    # Solve one target given in grid units relative to the pivot
    python run_sim.py --mode solve --x 14.142 --y 0 --previous-angle1 0.3

    # Headless tracking episodes with a goal-seeking controller
    python run_sim.py --mode demo --episodes 3
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import List, Optional

from twolink_sim.envs.configs import ArmSimConfig
from twolink_sim.envs.track_target import TargetTrackingEnv
from twolink_sim.kinematics.types import ArmError, IKError, Point2D
from twolink_sim.rendering.canvas import ArmCanvasRenderer
from twolink_sim.robots.planar_arm import PlanarArm
from twolink_sim.teleop.input_mapper import (
    InputMapper,
    PromptTarget,
    Quit,
    SetTarget,
    apply_command,
)
from twolink_sim.utils.helpers import grid_to_screen

# ======================================================================
# Configuration builders
# ======================================================================


def _build_config(args: argparse.Namespace) -> ArmSimConfig:
    """Construct an ``ArmSimConfig`` from parsed CLI arguments.

    Raises:
        InvalidConfigError: If any argument is out of range.
    """
    return ArmSimConfig(
        fps=args.fps,
        grid_size=args.grid_size,
        l1=args.l1,
        l2=args.l2,
        smoothing=args.smoothing,
        seed=args.seed,
        obs_type="pixels_agent_pos" if args.render else "agent_pos",
    )


def _hud_lines(arm: PlanarArm, mapper: InputMapper) -> List[str]:
    """Build the HUD text for one frame."""
    current = arm.animator.current
    target = arm.target_point
    status = "settled" if arm.is_settled else "moving"
    return [
        f"angle1 {math.degrees(current.angle1):7.2f} deg",
        f"angle2 {math.degrees(current.angle2):7.2f} deg",
        f"branch {arm.animator.branch.value}  {status}",
        f"L1 {arm.config.l1:g}  L2 {arm.config.l2:g}",
        f"target {mapper.describe(target) if target else '-'}",
    ]


# ======================================================================
# Mode runners
# ======================================================================


def _prompt_target(mapper: InputMapper) -> Optional[SetTarget]:
    """Read a target in grid units from the terminal."""
    line = input("Enter new target coordinates (tx ty): ")
    command = mapper.parse_terminal_command(line)
    return command if isinstance(command, SetTarget) else None


def _run_interactive(cfg: ArmSimConfig, args: argparse.Namespace) -> int:
    """Run the Pygame window until the user quits.

    Args:
        cfg: Simulation configuration.
        args: Parsed CLI arguments.

    Returns:
        Process exit code.
    """
    from twolink_sim.visualization.visualizer import ArmVisualizer

    arm = cfg.build_arm()
    renderer = ArmCanvasRenderer(
        width=cfg.window_width,
        height=cfg.window_height,
        grid_size=cfg.grid_size,
        thickness=cfg.thickness,
    )
    mapper = InputMapper(grid_size=cfg.grid_size)
    viz = ArmVisualizer(width=cfg.window_width, height=cfg.window_height, fps=cfg.fps)
    print("Click to set a target, C to type one, arrows to nudge, Q to quit.")
    running = True
    while running:
        mapper.sync(arm)
        for command in viz.poll_commands(mapper):
            if isinstance(command, Quit):
                running = False
                break
            try:
                if isinstance(command, PromptTarget):
                    command = _prompt_target(mapper)
                    if command is None:
                        continue
                apply_command(arm, command)
            except ArmError as exc:
                print(f"Rejected: {exc}")
            except ValueError as exc:
                print(f"Could not parse input: {exc}")
            else:
                if isinstance(command, SetTarget):
                    print(f"New target set at {mapper.describe(command.point)} in grid coordinates")
            mapper.sync(arm)
        arm.step()
        viz.render_frame(renderer.render(arm.render_state()), _hud_lines(arm, mapper))
    viz.close()
    return 0


def _run_solve(cfg: ArmSimConfig, args: argparse.Namespace) -> int:
    """Solve a single target and print the result.

    Args:
        cfg: Simulation configuration.
        args: Parsed CLI arguments with ``x``, ``y``, ``previous_angle1``.

    Returns:
        0 on success, 1 if the target was rejected.
    """
    arm = cfg.build_arm()
    pivot = arm.pivot
    tx, ty = grid_to_screen(args.x, args.y, pivot.as_tuple(), cfg.grid_size)
    target = Point2D(tx, ty)
    try:
        solution = arm.solver.solve(pivot, target, arm.config, args.previous_angle1)
    except IKError as exc:
        print(f"Target ({args.x:g}, {args.y:g}) rejected: {exc}")
        return 1
    arm.animator.set_target(solution.angles, solution.branch)
    while not arm.is_settled:
        arm.step()
    reached = arm.end_effector()
    angles = solution.angles
    print(f"angle1 = {angles.angle1:.6f} rad ({math.degrees(angles.angle1):.3f} deg)")
    print(f"angle2 = {angles.angle2:.6f} rad ({math.degrees(angles.angle2):.3f} deg)")
    print(f"branch = {solution.branch.value}")
    print(f"end effector error = {reached.distance_to(target):.3e} px")
    return 0


def _run_demo(cfg: ArmSimConfig, args: argparse.Namespace) -> int:
    """Run tracking episodes that command the goal directly.

    Args:
        cfg: Simulation configuration.
        args: Parsed CLI arguments with ``episodes`` and ``render``.

    Returns:
        Process exit code.
    """
    env = TargetTrackingEnv(cfg)
    viz = None
    if args.render:
        from twolink_sim.visualization.visualizer import ArmVisualizer

        viz = ArmVisualizer(width=cfg.window_width, height=cfg.window_height, fps=cfg.fps)
    for episode in range(args.episodes):
        seed = cfg.seed + episode
        _run_demo_episode(env, episode, seed, viz)
    if viz is not None:
        viz.close()
    env.close()
    return 0


def _run_demo_episode(
    env: TargetTrackingEnv, episode: int, seed: int, viz: Optional[object]
) -> None:
    """Step one episode to completion and print its summary."""
    obs, _ = env.reset(seed=seed)
    action = env.goal_grid()
    total_reward = 0.0
    steps = 0
    info = {}
    done = False
    while not done:
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += reward
        steps += 1
        done = terminated or truncated
        if viz is not None:
            viz.render_frame(obs["pixels"])
    print(
        f"Episode {episode} goal=({action[0]:.2f}, {action[1]:.2f}) "
        f"steps={steps} reward={total_reward:.2f} "
        f"success={info.get('is_success', False)}"
    )


# ======================================================================
# CLI
# ======================================================================


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed ``argparse.Namespace``.
    """
    parser = argparse.ArgumentParser(description="Two-link robotic arm simulation")
    parser.add_argument(
        "--mode", choices=["interactive", "solve", "demo"], default="interactive"
    )
    parser.add_argument("--l1", type=float, default=100.0)
    parser.add_argument("--l2", type=float, default=100.0)
    parser.add_argument("--smoothing", type=float, default=0.1)
    parser.add_argument("--fps", type=int, default=60)
    parser.add_argument("--grid-size", type=float, default=10.0)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--x", type=float, default=0.0, help="target x in grid units")
    parser.add_argument("--y", type=float, default=0.0, help="target y in grid units")
    parser.add_argument("--previous-angle1", type=float, default=None)
    parser.add_argument("--episodes", type=int, default=3)
    parser.add_argument("--render", action="store_true")
    parser.add_argument(
        "--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    return parser.parse_args(argv)


# ======================================================================
# Dispatch
# ======================================================================


# Mapping from mode name to runner function
_MODE_DISPATCH = {
    "interactive": _run_interactive,
    "solve": _run_solve,
    "demo": _run_demo,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, build the configuration, and run the chosen mode."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    try:
        cfg = _build_config(args)
    except ArmError as exc:
        print(f"Invalid configuration: {exc}")
        return 2
    print(f"Mode: {args.mode} | L1={cfg.l1:g} L2={cfg.l2:g} | grid={cfg.grid_size:g}px")
    print("-" * 60)
    runner = _MODE_DISPATCH[args.mode]
    return runner(cfg, args)


# ------------------------------------------------------------------
# Entry point
# ------------------------------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
