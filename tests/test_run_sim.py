"""Tests for the command-line entry point."""

import pytest

from run_sim import main


class TestSolveMode:
    def test_fully_extended_target(self, capsys):
        assert main(["--mode", "solve", "--x", "20", "--y", "0"]) == 0
        out = capsys.readouterr().out
        assert "branch = up" in out
        assert "angle2 = 0.000000 rad" in out

    def test_unreachable_target(self, capsys):
        assert main(["--mode", "solve", "--x", "30", "--y", "0"]) == 1
        assert "rejected" in capsys.readouterr().out

    def test_previous_angle_selects_branch(self, capsys):
        argv = ["--mode", "solve", "--x", "14.142", "--y", "0", "--previous-angle1", "0.3"]
        assert main(argv) == 0
        assert "branch = down" in capsys.readouterr().out

    def test_invalid_configuration(self, capsys):
        assert main(["--mode", "solve", "--l1", "0"]) == 2
        assert "Invalid configuration" in capsys.readouterr().out


class TestDemoMode:
    def test_single_episode_succeeds(self, capsys):
        assert main(["--mode", "demo", "--episodes", "1"]) == 0
        out = capsys.readouterr().out
        assert "Episode 0" in out
        assert "success=True" in out


@pytest.mark.parametrize("mode", ["fly", ""])
def test_unknown_mode_exits(mode):
    with pytest.raises(SystemExit):
        main(["--mode", mode])
