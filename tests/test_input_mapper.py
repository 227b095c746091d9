"""Tests for keyboard, mouse, and terminal input mapping."""

from types import SimpleNamespace

import pytest

from twolink_sim.kinematics.types import (
    ArmConfig,
    InvalidConfigError,
    Point2D,
    UnreachableTargetError,
)
from twolink_sim.robots.planar_arm import PlanarArm
from twolink_sim.teleop.input_mapper import (
    AdjustLengths,
    InputMapper,
    MovePivot,
    PromptTarget,
    Quit,
    Reconfigure,
    Reset,
    SetTarget,
    apply_command,
)


@pytest.fixture
def mapper():
    return InputMapper(grid_size=10, pivot=Point2D(400.0, 300.0))


class TestMouse:
    def test_left_click_snaps_to_grid(self, mapper):
        assert mapper.handle_mouse(1, 433, 287) == SetTarget(Point2D(430.0, 290.0))

    def test_right_click_moves_pivot(self, mapper):
        assert mapper.handle_mouse(3, 120, 80) == MovePivot(Point2D(120.0, 80.0))

    def test_unbound_button(self, mapper):
        assert mapper.handle_mouse(2, 10, 10) is None


class TestKeys:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("q", Quit()),
            ("escape", Quit()),
            ("r", Reset()),
            ("c", PromptTarget()),
            ("+", AdjustLengths(dl2=10)),
            ("-", AdjustLengths(dl2=-10)),
            ("]", AdjustLengths(dl1=10)),
            ("[", AdjustLengths(dl1=-10)),
            ("x", None),
        ],
    )
    def test_bindings(self, mapper, key, expected):
        assert mapper.handle_key(key) == expected

    def test_arrows_nudge_from_pivot_then_cursor(self, mapper):
        assert mapper.handle_key("up") == SetTarget(Point2D(400.0, 290.0))
        assert mapper.handle_key("right") == SetTarget(Point2D(410.0, 290.0))


class TestTerminal:
    def test_bare_coordinates_are_grid_target(self, mapper):
        assert mapper.parse_terminal_command("3 2") == SetTarget(Point2D(430.0, 280.0))

    def test_prefixed_target(self, mapper):
        assert mapper.parse_terminal_command("c -5 0") == SetTarget(Point2D(350.0, 300.0))

    def test_lengths(self, mapper):
        assert mapper.parse_terminal_command("l 120 80") == Reconfigure(120.0, 80.0)

    def test_pivot(self, mapper):
        assert mapper.parse_terminal_command("p 1 0") == MovePivot(Point2D(410.0, 300.0))

    def test_single_letters(self, mapper):
        assert mapper.parse_terminal_command("q") == Quit()
        assert mapper.parse_terminal_command("R") == Reset()
        assert mapper.parse_terminal_command("   ") is None

    @pytest.mark.parametrize("line", ["3", "a b", "c 1 2 3"])
    def test_malformed(self, mapper, line):
        with pytest.raises(ValueError):
            mapper.parse_terminal_command(line)

    def test_describe(self, mapper):
        assert mapper.describe(Point2D(430.0, 280.0)) == "(3, 2)"


class TestPygameEvents:
    def test_events_map_in_order(self, mapper):
        pg = SimpleNamespace(
            QUIT=256,
            KEYDOWN=768,
            MOUSEBUTTONDOWN=1025,
            key=SimpleNamespace(name=lambda key: key),
        )
        events = [
            SimpleNamespace(type=1025, button=1, pos=(433, 287)),
            SimpleNamespace(type=768, key="x"),
            SimpleNamespace(type=768, key="c"),
            SimpleNamespace(type=1024),
            SimpleNamespace(type=256),
        ]
        commands = mapper.process_pygame_events(events, pg)
        assert commands == [SetTarget(Point2D(430.0, 290.0)), PromptTarget(), Quit()]


class TestApplyCommand:
    @pytest.fixture
    def arm(self):
        return PlanarArm()

    def test_set_target(self, arm):
        apply_command(arm, SetTarget(Point2D(500.0, 250.0)))
        assert arm.target_point == Point2D(500.0, 250.0)

    def test_unreachable_target_raises(self, arm):
        with pytest.raises(UnreachableTargetError):
            apply_command(arm, SetTarget(Point2D(0.0, 0.0)))
        assert arm.target_point is None

    def test_adjust_and_reconfigure(self, arm):
        apply_command(arm, AdjustLengths(dl1=10.0))
        assert arm.config == ArmConfig(110.0, 100.0)
        apply_command(arm, Reconfigure(80.0, 60.0))
        assert arm.config == ArmConfig(80.0, 60.0)
        with pytest.raises(InvalidConfigError):
            apply_command(arm, AdjustLengths(dl2=-60.0))
        assert arm.config == ArmConfig(80.0, 60.0)

    def test_move_pivot_and_reset(self, arm):
        apply_command(arm, MovePivot(Point2D(100.0, 100.0)))
        assert arm.pivot == Point2D(100.0, 100.0)
        apply_command(arm, SetTarget(Point2D(150.0, 100.0)))
        apply_command(arm, Reset())
        assert arm.target_point is None

    def test_sync_tracks_arm(self, mapper, arm):
        apply_command(arm, SetTarget(Point2D(500.0, 250.0)))
        mapper.sync(arm)
        assert mapper.cursor == Point2D(500.0, 250.0)
        assert mapper.pivot == arm.pivot
