from __future__ import annotations

from dataclasses import dataclass

from panda3d.core import LVector3f


_TOUCH_EPS = 1e-5


@dataclass(frozen=True)
class AABB:
    minimum: LVector3f
    maximum: LVector3f

    @classmethod
    def from_center(cls, center: LVector3f, size: LVector3f) -> "AABB":
        half = LVector3f(float(size.x), float(size.y), float(size.z)) * 0.5
        return cls(minimum=LVector3f(center - half), maximum=LVector3f(center + half))

    def size(self) -> LVector3f:
        return LVector3f(self.maximum - self.minimum)

    def center(self) -> LVector3f:
        return LVector3f(self.minimum + (self.maximum - self.minimum) * 0.5)

    def contains(self, point: LVector3f) -> bool:
        return (
            float(self.minimum.x) <= float(point.x) <= float(self.maximum.x)
            and float(self.minimum.y) <= float(point.y) <= float(self.maximum.y)
            and float(self.minimum.z) <= float(point.z) <= float(self.maximum.z)
        )

    def overlaps(self, other: "AABB", *, eps: float = _TOUCH_EPS) -> bool:
        """True when the boxes share volume. Faces that merely touch do not count."""

        for axis in ("x", "y", "z"):
            a_min = float(getattr(self.minimum, axis))
            a_max = float(getattr(self.maximum, axis))
            b_min = float(getattr(other.minimum, axis))
            b_max = float(getattr(other.maximum, axis))
            if a_min >= b_max - eps or a_max <= b_min + eps:
                return False
        return True

    def overlaps_xz(self, other: "AABB", *, eps: float = _TOUCH_EPS) -> bool:
        for axis in ("x", "z"):
            a_min = float(getattr(self.minimum, axis))
            a_max = float(getattr(self.maximum, axis))
            b_min = float(getattr(other.minimum, axis))
            b_max = float(getattr(other.maximum, axis))
            if a_min >= b_max - eps or a_max <= b_min + eps:
                return False
        return True

    def clamp(self, point: LVector3f) -> LVector3f:
        return LVector3f(
            min(max(float(point.x), float(self.minimum.x)), float(self.maximum.x)),
            min(max(float(point.y), float(self.minimum.y)), float(self.maximum.y)),
            min(max(float(point.z), float(self.minimum.z)), float(self.maximum.z)),
        )
