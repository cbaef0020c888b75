from __future__ import annotations

import logging

from panda3d.core import LVector3f

from sandbox3d.common.aabb import AABB
from sandbox3d.common.vecmath import copy_vec, is_zero, zero
from sandbox3d.physics.tuning import PhysicsTuning


logger = logging.getLogger(__name__)

# Feet within this distance of a surface count as standing on it.
_SUPPORT_EPS = 1e-4


class Player:
    """
    Player entity stepped by the game session.

    The session owns the only instance. Accessors hand out copies; state changes only
    through `jump()`, `set_input_direction()` and the per-step `update()`.
    """

    def __init__(self, position: LVector3f, *, tuning: PhysicsTuning | None = None) -> None:
        self.tuning = tuning if tuning is not None else PhysicsTuning()
        self._pos = copy_vec(position)
        self._vel = zero()
        self._input_dir = zero()
        self._grounded = False

    def get_position(self) -> LVector3f:
        return copy_vec(self._pos)

    def get_velocity(self) -> LVector3f:
        return copy_vec(self._vel)

    def get_input_direction(self) -> LVector3f:
        return copy_vec(self._input_dir)

    def is_on_ground(self) -> bool:
        return bool(self._grounded)

    def aabb(self) -> AABB:
        return self._box_at(self._pos)

    def set_input_direction(self, direction: LVector3f) -> None:
        self._input_dir = copy_vec(direction)

    def jump(self) -> bool:
        if not self._grounded:
            logger.debug("jump ignored: player is airborne")
            return False
        self._vel.y = float(self.tuning.jump_speed)
        self._grounded = False
        return True

    def settle(self, world) -> None:
        """Resolve grounded state at the current position without integrating motion."""

        feet = self._feet_y(self._pos)
        support = self._support_height(world, box=self._box_at(self._pos), feet_old=feet, feet_new=feet)
        if support is not None and abs(feet - support) <= _SUPPORT_EPS:
            self._pos.y = support + float(self.tuning.player_height)
            self._vel.y = 0.0
            self._grounded = True
        else:
            self._grounded = False

    def update(self, dt: float, world) -> None:
        dt = max(0.0, float(dt))
        self._apply_input()
        self._vel.y -= float(self.tuning.gravity) * dt
        self._grounded = False

        self._move_horizontal(world, axis="x", delta=float(self._vel.x) * dt)
        self._move_horizontal(world, axis="z", delta=float(self._vel.z) * dt)
        self._move_vertical(world, delta=float(self._vel.y) * dt)

        clamped = world.clamp_to_bounds(self._pos)
        for axis in ("x", "y", "z"):
            if float(getattr(clamped, axis)) != float(getattr(self._pos, axis)):
                setattr(self._vel, axis, 0.0)
        self._pos = clamped

        # One intent per step: the next step needs a fresh direction.
        self._input_dir = zero()

    def _apply_input(self) -> None:
        if not is_zero(self._input_dir):
            speed = float(self.tuning.move_speed)
            self._vel.x = float(self._input_dir.x) * speed
            self._vel.z = float(self._input_dir.z) * speed
            return
        friction = float(self.tuning.ground_friction)
        stop = float(self.tuning.stop_speed)
        vx = float(self._vel.x) * friction
        vz = float(self._vel.z) * friction
        self._vel.x = 0.0 if abs(vx) < stop else vx
        self._vel.z = 0.0 if abs(vz) < stop else vz

    def _move_horizontal(self, world, *, axis: str, delta: float) -> None:
        if delta == 0.0:
            return
        start = self._box_at(self._pos)
        trial = copy_vec(self._pos)
        setattr(trial, axis, float(getattr(trial, axis)) + delta)
        box = self._box_at(trial)
        for block_box in world.solid_boxes():
            # A block placed inside the player does not pin them; they can walk out of it.
            if box.overlaps(block_box) and not start.overlaps(block_box):
                setattr(self._vel, axis, 0.0)
                return
        self._pos = trial

    def _move_vertical(self, world, *, delta: float) -> None:
        feet_old = self._feet_y(self._pos)
        head_old = float(self._pos.y)
        target_y = head_old + delta
        box = self._box_at(self._pos)

        if delta <= 0.0:
            support = self._support_height(world, box=box, feet_old=feet_old, feet_new=feet_old + delta)
            if support is not None:
                self._pos.y = support + float(self.tuning.player_height)
                self._vel.y = 0.0
                self._grounded = True
                return
            self._pos.y = target_y
            return

        ceiling = None
        for block_box in world.solid_boxes():
            if not box.overlaps_xz(block_box):
                continue
            bottom = float(block_box.minimum.y)
            if head_old - _SUPPORT_EPS <= bottom <= target_y:
                ceiling = bottom if ceiling is None else min(ceiling, bottom)
        if ceiling is not None:
            self._pos.y = ceiling
            self._vel.y = 0.0
            return
        self._pos.y = target_y

    def _support_height(self, world, *, box: AABB, feet_old: float, feet_new: float) -> float | None:
        """Highest surface between `feet_old` and `feet_new` under the player's footprint."""

        best = None
        ground = world.ground_height
        if ground is not None and feet_new <= ground <= feet_old + _SUPPORT_EPS:
            best = float(ground)
        for block_box in world.solid_boxes():
            if not box.overlaps_xz(block_box):
                continue
            top = float(block_box.maximum.y)
            if feet_new <= top <= feet_old + _SUPPORT_EPS:
                best = top if best is None else max(best, top)
        return best

    def _feet_y(self, pos: LVector3f) -> float:
        return float(pos.y) - float(self.tuning.player_height)

    def _box_at(self, pos: LVector3f) -> AABB:
        r = float(self.tuning.player_radius)
        h = float(self.tuning.player_height)
        return AABB(
            minimum=LVector3f(float(pos.x) - r, float(pos.y) - h, float(pos.z) - r),
            maximum=LVector3f(float(pos.x) + r, float(pos.y), float(pos.z) + r),
        )
