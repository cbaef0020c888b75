from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from panda3d.core import LVector3f

from sandbox3d.common.aabb import AABB
from sandbox3d.common.vecmath import copy_vec, format_real, format_vec, vec3
from sandbox3d.world.camera import Camera


logger = logging.getLogger(__name__)

BlockKey = tuple[int, int, int]

# Largest cell coordinate whose block centre is exact in a float32 vector.
MAX_BLOCK_COORD = float(2**24)


def is_block_coord(value: float) -> bool:
    v = float(value)
    return math.isfinite(v) and abs(v) <= MAX_BLOCK_COORD


def _round_half_away(value: float) -> int:
    v = float(value)
    if not is_block_coord(v):
        raise ValueError(f"block coordinate out of range: {value!r}")
    if v >= 0.0:
        return int(math.floor(v + 0.5))
    return -int(math.floor(-v + 0.5))


def block_key(position: Sequence[float]) -> BlockKey:
    """
    Grid cell addressed by a real-valued position.

    Each component rounds to the nearest integer, halves away from zero:
    5.4 -> 5, 5.5 -> 6, 5.6 -> 6, -5.5 -> -6. Components are read as Python floats, so a
    plain tuple keeps full precision where an `LVector3f` would round to float32 first.
    Raises ValueError for non-finite components or ones beyond `MAX_BLOCK_COORD`.
    """

    x, y, z = (position[i] for i in range(3))
    return (_round_half_away(x), _round_half_away(y), _round_half_away(z))


@dataclass(frozen=True)
class Block:
    key: BlockKey
    size: tuple[float, float, float] = (1.0, 1.0, 1.0)

    def center(self) -> LVector3f:
        return vec3(*self.key)

    def aabb(self) -> AABB:
        return AABB.from_center(self.center(), vec3(*self.size))


class World:
    """Bounded world: optional ground plane, unit blocks keyed by grid cell, follow camera."""

    def __init__(self, bounds: AABB) -> None:
        self._bounds = bounds
        self._ground_height: float | None = None
        self._blocks: dict[BlockKey, Block] = {}
        self._camera = Camera()
        self.world_time = 0.0

    @property
    def bounds(self) -> AABB:
        return self._bounds

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def ground_height(self) -> float | None:
        return self._ground_height

    def get_bounds(self) -> AABB:
        return self._bounds

    def get_camera(self) -> Camera:
        return self._camera

    def create_ground(self, plane_height: float) -> None:
        self._ground_height = float(plane_height)
        logger.debug("ground plane at y=%s", format_real(plane_height))

    def create_platform(self, position: Sequence[float], size: LVector3f | None = None) -> Block:
        s = size if size is not None else vec3(1.0, 1.0, 1.0)
        key = block_key(position)
        block = Block(key=key, size=(float(s.x), float(s.y), float(s.z)))
        replaced = key in self._blocks
        self._blocks[key] = block
        logger.debug("%s block at cell %s", "replaced" if replaced else "created", key)
        return block

    def destroy_platform(self, position: Sequence[float]) -> bool:
        key = block_key(position)
        if self._blocks.pop(key, None) is None:
            logger.debug("no block at cell %s", key)
            return False
        logger.debug("destroyed block at cell %s", key)
        return True

    def has_block(self, position: Sequence[float]) -> bool:
        return block_key(position) in self._blocks

    def blocks(self) -> list[Block]:
        return [self._blocks[k] for k in sorted(self._blocks)]

    def block_count(self) -> int:
        return len(self._blocks)

    def solid_boxes(self) -> Iterator[AABB]:
        for block in self._blocks.values():
            yield block.aabb()

    def clamp_to_bounds(self, point: LVector3f) -> LVector3f:
        return self._bounds.clamp(point)

    def update(self, dt: float) -> None:
        self.world_time += max(0.0, float(dt))

    def draw(self, *, player_position: LVector3f | None = None) -> list[str]:
        pose = self._camera.pose()
        lines = [
            "",
            "=== WORLD VIEW ===",
            f"Camera: {format_vec(pose.position)} looking at {format_vec(pose.target)}",
        ]
        if self._ground_height is None:
            lines.append("Ground: none")
        else:
            lines.append(f"Ground: y = {format_real(self._ground_height)}")
        if player_position is not None:
            lines.append(f"Player: {format_vec(copy_vec(player_position))}")
        blocks = self.blocks()
        lines.append(f"Blocks: {len(blocks)}")
        for block in blocks:
            lines.append(f"  block at {format_vec(block.center())}")
        lines.append("==================")
        lines.append("")
        return lines
