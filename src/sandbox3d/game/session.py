from __future__ import annotations

import enum
import logging
from typing import Sequence

from panda3d.core import LVector3f

from sandbox3d.app_config import RunConfig
from sandbox3d.common.aabb import AABB
from sandbox3d.common.vecmath import format_vec, from_seq
from sandbox3d.game.input_system import InputHandler, intent_for_key, normalize_move_key
from sandbox3d.physics.player import Player
from sandbox3d.world.camera import CameraPose
from sandbox3d.world.world import Block, BlockKey, World


logger = logging.getLogger(__name__)

WELCOME_LINES = (
    "",
    "=== 3D SANDBOX GAME ===",
    "Welcome to the 3D Sandbox!",
    "Use WASD to move, and try the 'create' and 'destroy' commands!",
)

HELP_LINES = (
    "",
    "=== CONTROLS ===",
    "Movement:",
    "  w/forward  - Move forward",
    "  s/backward - Move backward",
    "  a/left     - Move left",
    "  d/right    - Move right",
    "  jump/j     - Jump",
    "",
    "Sandbox Commands:",
    "  create <x> <y> <z> - Create a block",
    "  destroy <x> <y> <z> - Destroy a block",
    "",
    "Commands:",
    "  look/l     - Show world view",
    "  status     - Show game status",
    "  help/h     - Toggle this help",
    "  quit/q     - Exit game",
    "================",
    "",
)

FAREWELL_LINES = ("", "Thanks for playing the 3D Sandbox Game!")


class SessionState(enum.Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class GameSession:
    """
    Owns the world and the player and everything the command interpreter mutates.

    RUNNING -> STOPPED is the only transition (`stop()`); help and status never change it.
    Simulated time advances only through `step()`, in fixed ticks.
    """

    def __init__(self, cfg: RunConfig | None = None) -> None:
        self.cfg = cfg if cfg is not None else RunConfig()
        self._state = SessionState.RUNNING
        self._show_help = bool(self.cfg.show_help)
        self._score = 0
        self._ticks = 0
        self._fixed_ticks = 0
        self._extra_time = 0.0

        self._world = World(AABB(minimum=from_seq(self.cfg.bounds_min), maximum=from_seq(self.cfg.bounds_max)))
        self._player = Player(from_seq(self.cfg.spawn), tuning=self.cfg.tuning)
        self._setup_world()

    def _setup_world(self) -> None:
        self._world.create_ground(self.cfg.ground_height)
        self._player.settle(self._world)
        pos = self._player.get_position()
        self._world.camera.set_position(pos + from_seq(self.cfg.camera_start_offset))
        self._world.camera.look_at(pos)

    # -- lifecycle ---------------------------------------------------------

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def running(self) -> bool:
        return self._state is SessionState.RUNNING

    def stop(self) -> None:
        if self._state is SessionState.RUNNING:
            logger.debug("session stopped after %d tick(s)", self._ticks)
        self._state = SessionState.STOPPED

    @property
    def show_help(self) -> bool:
        return self._show_help

    def toggle_help(self) -> bool:
        self._show_help = not self._show_help
        return self._show_help

    @property
    def score(self) -> int:
        return self._score

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def game_time(self) -> float:
        # Fixed ticks are multiplied, not summed, so ten 0.1 s ticks read as exactly 1 s.
        return self._fixed_ticks * float(self.cfg.step_dt) + self._extra_time

    # -- read-only snapshots ------------------------------------------------

    def get_position(self) -> LVector3f:
        return self._player.get_position()

    def get_velocity(self) -> LVector3f:
        return self._player.get_velocity()

    def is_on_ground(self) -> bool:
        return self._player.is_on_ground()

    def get_bounds(self) -> AABB:
        return self._world.get_bounds()

    def get_camera_pose(self) -> CameraPose:
        return self._world.camera.pose()

    def block_keys(self) -> list[BlockKey]:
        return [b.key for b in self._world.blocks()]

    # -- simulation --------------------------------------------------------

    def step(self, dt: float | None = None) -> None:
        step_dt = float(self.cfg.step_dt if dt is None else dt)
        self._ticks += 1
        if dt is None:
            self._fixed_ticks += 1
        else:
            self._extra_time += step_dt

        self._player.update(step_dt, self._world)
        self._world.update(step_dt)

        self._world.camera.follow(
            self._player.get_position(),
            offset=from_seq(self.cfg.camera_offset),
            look_offset=from_seq(self.cfg.camera_look_offset),
        )

    def move(self, key: str) -> bool:
        """Apply one movement key and advance exactly one tick. False for non-movement keys."""

        if normalize_move_key(key) is None:
            return False
        self._player.set_input_direction(intent_for_key(key))
        self.step()
        return True

    def step_with_input(self, handler: InputHandler, dt: float | None = None) -> LVector3f:
        intent = handler.update_movement_input()
        self._player.set_input_direction(intent)
        self.step(dt)
        return intent

    def jump(self) -> bool:
        return self._player.jump()

    # -- world edits (instantaneous) ----------------------------------------

    def create_block(self, position: Sequence[float]) -> Block:
        return self._world.create_platform(position, from_seq(self.cfg.block_size))

    def destroy_block(self, position: Sequence[float]) -> bool:
        return self._world.destroy_platform(position)

    # -- text reports ------------------------------------------------------

    def help_lines(self) -> list[str]:
        if not self._show_help:
            return []
        return list(HELP_LINES)

    def look_lines(self) -> list[str]:
        return self._world.draw(player_position=self._player.get_position())

    def status_lines(self) -> list[str]:
        bounds = self._world.get_bounds()
        return [
            "",
            "=== GAME STATUS ===",
            f"Player Position: {format_vec(self._player.get_position())}",
            f"Player Velocity: {format_vec(self._player.get_velocity())}",
            f"On Ground: {'Yes' if self._player.is_on_ground() else 'No'}",
            f"Game Time: {int(self.game_time)} seconds",
            f"World Bounds: {format_vec(bounds.minimum)} to {format_vec(bounds.maximum)}",
            "==================",
            "",
        ]
