from __future__ import annotations

from panda3d.core import LVector3f

from sandbox3d.common.vecmath import clamp_length, copy_vec, vec3, zero


# Local axes: forward is +z, right is +x. Not camera-relative.
KEY_INTENTS: dict[str, tuple[float, float, float]] = {
    "w": (0.0, 0.0, 1.0),
    "s": (0.0, 0.0, -1.0),
    "a": (-1.0, 0.0, 0.0),
    "d": (1.0, 0.0, 0.0),
}

KEY_DIRECTION_NAMES: dict[str, str] = {
    "w": "forward",
    "s": "backward",
    "a": "left",
    "d": "right",
}


def normalize_move_key(key: str) -> str | None:
    k = str(key or "").lower()
    if k in KEY_INTENTS:
        return k
    return None


def intent_for_key(key: str) -> LVector3f:
    """Unit intent for a movement key, or a zero vector for any other key."""

    k = normalize_move_key(key)
    if k is None:
        return zero()
    return vec3(*KEY_INTENTS[k])


class InputHandler:
    """
    Live key state -> movement intent.

    Keys are stored exactly as given; movement lookup folds case so `W` and `w` both count.
    """

    def __init__(self) -> None:
        self._pressed: set[str] = set()
        self._movement = zero()

    def set_key(self, key: str, pressed: bool) -> None:
        k = str(key)
        if len(k) != 1:
            raise ValueError(f"expected a single-character key, got {key!r}")
        if pressed:
            self._pressed.add(k)
        else:
            self._pressed.discard(k)

    def is_key_pressed(self, key: str) -> bool:
        return str(key) in self._pressed

    def pressed_keys(self) -> frozenset[str]:
        return frozenset(self._pressed)

    def clear(self) -> None:
        self._pressed.clear()
        self._movement = zero()

    def _move_key_down(self, key: str) -> bool:
        return key in self._pressed or key.upper() in self._pressed

    def update_movement_input(self) -> LVector3f:
        combined = zero()
        for key, intent in KEY_INTENTS.items():
            if self._move_key_down(key):
                combined += vec3(*intent)
        # Diagonals are no faster than a single axis.
        self._movement = clamp_length(combined, 1.0)
        return copy_vec(self._movement)

    def get_movement_input(self) -> LVector3f:
        return copy_vec(self._movement)
