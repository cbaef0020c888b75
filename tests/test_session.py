from __future__ import annotations

import pytest

from sandbox3d.app_config import RunConfig
from sandbox3d.common.vecmath import vec3
from sandbox3d.game.input_system import InputHandler
from sandbox3d.game.session import HELP_LINES, GameSession, SessionState


def _xyz(v) -> tuple[float, float, float]:
    return (float(v.x), float(v.y), float(v.z))


def test_initial_state() -> None:
    s = GameSession()
    assert s.state is SessionState.RUNNING
    assert s.running is True
    assert s.show_help is True
    assert s.score == 0
    assert s.game_time == 0.0
    assert s.ticks == 0
    assert s.is_on_ground() is True
    assert _xyz(s.get_position()) == (0.0, 2.0, 0.0)
    pose = s.get_camera_pose()
    assert _xyz(pose.position) == (0.0, 7.0, -10.0)
    assert _xyz(pose.target) == (0.0, 2.0, 0.0)


def test_move_advances_one_fixed_tick_and_follows_with_camera() -> None:
    s = GameSession()
    assert s.move("w") is True
    assert s.ticks == 1
    assert s.game_time == pytest.approx(0.1)
    assert _xyz(s.get_position()) == (pytest.approx(0.0), pytest.approx(2.0), pytest.approx(0.5))
    pose = s.get_camera_pose()
    assert _xyz(pose.position) == (pytest.approx(0.0), pytest.approx(10.0), pytest.approx(-11.5))
    assert _xyz(pose.target) == (pytest.approx(0.0), pytest.approx(3.0), pytest.approx(0.5))


def test_non_movement_key_does_not_step() -> None:
    s = GameSession()
    assert s.move("x") is False
    assert s.ticks == 0
    assert s.game_time == 0.0


def test_ten_ticks_report_exactly_one_second() -> None:
    s = GameSession()
    for _ in range(10):
        s.move("d")
    assert s.game_time == 1.0
    assert "Game Time: 1 seconds" in s.status_lines()


def test_step_with_live_input_uses_same_intent_contract() -> None:
    s = GameSession()
    h = InputHandler()
    h.set_key("w", True)
    h.set_key("d", True)
    intent = s.step_with_input(h)
    assert intent.length() == pytest.approx(1.0, abs=1e-6)
    pos = s.get_position()
    assert pos.x == pytest.approx(0.5 * 0.70710678, abs=1e-5)
    assert pos.z == pytest.approx(0.5 * 0.70710678, abs=1e-5)
    assert s.ticks == 1


def test_custom_step_size_accumulates_separately() -> None:
    s = GameSession()
    s.step(0.25)
    s.move("w")
    assert s.game_time == pytest.approx(0.35)
    assert s.ticks == 2


def test_help_toggle_is_its_own_inverse() -> None:
    s = GameSession()
    assert s.toggle_help() is False
    assert s.help_lines() == []
    assert s.toggle_help() is True
    assert s.help_lines() == list(HELP_LINES)


def test_stop_is_terminal() -> None:
    s = GameSession()
    s.stop()
    assert s.state is SessionState.STOPPED
    assert s.running is False
    s.stop()
    assert s.state is SessionState.STOPPED


def test_block_edits_do_not_advance_time() -> None:
    s = GameSession()
    block = s.create_block(vec3(5, 0, 5))
    assert block.key == (5, 0, 5)
    assert s.block_keys() == [(5, 0, 5)]
    assert s.destroy_block(vec3(5, 0, 5)) is True
    assert s.destroy_block(vec3(5, 0, 5)) is False
    assert s.game_time == 0.0
    assert s.ticks == 0


def test_status_report_layout() -> None:
    s = GameSession()
    assert s.status_lines() == [
        "",
        "=== GAME STATUS ===",
        "Player Position: (0, 2, 0)",
        "Player Velocity: (0, 0, 0)",
        "On Ground: Yes",
        "Game Time: 0 seconds",
        "World Bounds: (-50, -5, -50) to (50, 50, 50)",
        "==================",
        "",
    ]


def test_status_reports_airborne_after_jump_step() -> None:
    s = GameSession()
    assert s.jump() is True
    s.move("w")
    lines = s.status_lines()
    assert "On Ground: No" in lines


def test_snapshots_do_not_alias_session_state() -> None:
    s = GameSession()
    pos = s.get_position()
    pos.z = 42.0
    vel = s.get_velocity()
    vel.x = 3.0
    assert s.get_position().z == pytest.approx(0.0)
    assert s.get_velocity().x == pytest.approx(0.0)


def test_config_drives_world_setup() -> None:
    cfg = RunConfig(spawn=(3.0, 12.0, -4.0), ground_height=10.0, bounds_max=(20.0, 30.0, 20.0), show_help=False)
    s = GameSession(cfg)
    assert s.is_on_ground() is True
    assert s.show_help is False
    assert float(s.get_bounds().maximum.x) == pytest.approx(20.0)
