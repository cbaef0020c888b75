from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f

from sandbox3d.common.vecmath import copy_vec, zero


@dataclass(frozen=True)
class CameraPose:
    position: LVector3f
    target: LVector3f


class Camera:
    """Follow camera: position and look-at target, both derived from an anchor point."""

    def __init__(self) -> None:
        self._pos = zero()
        self._target = zero()

    def set_position(self, position: LVector3f) -> None:
        self._pos = copy_vec(position)

    def look_at(self, target: LVector3f) -> None:
        self._target = copy_vec(target)

    def position(self) -> LVector3f:
        return copy_vec(self._pos)

    def target(self) -> LVector3f:
        return copy_vec(self._target)

    def pose(self) -> CameraPose:
        return CameraPose(position=copy_vec(self._pos), target=copy_vec(self._target))

    def follow(self, anchor: LVector3f, *, offset: LVector3f, look_offset: LVector3f) -> CameraPose:
        self.set_position(anchor + offset)
        self.look_at(anchor + look_offset)
        return self.pose()
