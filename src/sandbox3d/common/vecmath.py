from __future__ import annotations

from panda3d.core import LVector3f


_EPS_SQ = 1e-12


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> LVector3f:
    return LVector3f(float(x), float(y), float(z))


def zero() -> LVector3f:
    return LVector3f(0.0, 0.0, 0.0)


def copy_vec(v: LVector3f) -> LVector3f:
    return LVector3f(float(v.x), float(v.y), float(v.z))


def from_seq(values) -> LVector3f:
    x, y, z = values
    return vec3(x, y, z)


def is_zero(v: LVector3f) -> bool:
    return float(v.lengthSquared()) <= _EPS_SQ


def normalized_or_zero(v: LVector3f) -> LVector3f:
    """Unit-length copy of `v`, or a zero vector when `v` has no direction."""

    if is_zero(v):
        return zero()
    out = copy_vec(v)
    out.normalize()
    return out


def clamp_length(v: LVector3f, max_len: float) -> LVector3f:
    # Only shrink: sub-unit intent stays as-is.
    length = float(v.length())
    limit = max(0.0, float(max_len))
    if length <= limit or length <= 0.0:
        return copy_vec(v)
    return v * (limit / length)


def format_real(value: float) -> str:
    """Render a real like a default C++ ostream: `%g`, six significant digits."""

    return f"{float(value):g}"


def format_vec(v: LVector3f) -> str:
    return f"({format_real(v.x)}, {format_real(v.y)}, {format_real(v.z)})"


def format_triple(x: float, y: float, z: float) -> str:
    return f"({format_real(x)}, {format_real(y)}, {format_real(z)})"
