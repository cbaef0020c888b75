from __future__ import annotations

import pytest

from sandbox3d.game.input_system import InputHandler, intent_for_key, normalize_move_key


def test_intent_for_key_uses_local_axes() -> None:
    w = intent_for_key("w")
    s = intent_for_key("S")
    a = intent_for_key("a")
    d = intent_for_key("d")
    assert (w.x, w.y, w.z) == (0.0, 0.0, 1.0)
    assert (s.x, s.y, s.z) == (0.0, 0.0, -1.0)
    assert (a.x, a.y, a.z) == (-1.0, 0.0, 0.0)
    assert (d.x, d.y, d.z) == (1.0, 0.0, 0.0)
    assert intent_for_key("x").length() == 0.0
    assert normalize_move_key("D") == "d"
    assert normalize_move_key("forward") is None


def test_diagonal_intent_is_not_faster_than_cardinal() -> None:
    h = InputHandler()
    h.set_key("w", True)
    h.set_key("d", True)
    v = h.update_movement_input()
    assert v.length() <= 1.0 + 1e-6
    assert v.length() == pytest.approx(1.0, abs=1e-6)
    assert v.x == pytest.approx(v.z, abs=1e-6)


def test_single_key_intent_is_unit() -> None:
    h = InputHandler()
    h.set_key("a", True)
    v = h.update_movement_input()
    assert (v.x, v.y, v.z) == (-1.0, 0.0, 0.0)


def test_uppercase_keys_count_for_movement() -> None:
    h = InputHandler()
    h.set_key("W", True)
    v = h.update_movement_input()
    assert v.z == pytest.approx(1.0)
    assert h.is_key_pressed("W") is True
    assert h.is_key_pressed("w") is False


def test_opposing_keys_cancel() -> None:
    h = InputHandler()
    h.set_key("w", True)
    h.set_key("s", True)
    v = h.update_movement_input()
    assert v.length() == pytest.approx(0.0)


def test_set_key_is_assignment_not_toggle() -> None:
    h = InputHandler()
    h.set_key("w", True)
    h.set_key("w", True)
    assert h.is_key_pressed("w") is True
    h.set_key("w", False)
    assert h.is_key_pressed("w") is False
    h.set_key("w", False)
    assert h.is_key_pressed("w") is False


def test_any_single_character_can_be_tracked() -> None:
    h = InputHandler()
    h.set_key("é", True)
    h.set_key(" ", True)
    assert h.pressed_keys() == frozenset({"é", " "})
    assert h.update_movement_input().length() == pytest.approx(0.0)


def test_set_key_rejects_non_single_characters() -> None:
    h = InputHandler()
    with pytest.raises(ValueError):
        h.set_key("", True)
    with pytest.raises(ValueError):
        h.set_key("wd", True)


def test_clear_resets_keys_and_intent() -> None:
    h = InputHandler()
    h.set_key("d", True)
    h.update_movement_input()
    h.clear()
    assert h.pressed_keys() == frozenset()
    assert h.get_movement_input().length() == pytest.approx(0.0)
