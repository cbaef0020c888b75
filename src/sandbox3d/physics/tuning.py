from __future__ import annotations

from dataclasses import dataclass, fields


@dataclass
class PhysicsTuning:
    # Vertical motion.
    gravity: float = 15.0
    jump_speed: float = 8.0
    # Horizontal motion: intent sets velocity directly; no intent decays it by friction.
    move_speed: float = 5.0
    ground_friction: float = 0.88
    # Horizontal speeds below this snap to zero to avoid endless drift.
    stop_speed: float = 0.01
    # Player box: square footprint of half-width `player_radius`, `player_height` tall.
    # Position is the eye point at the top of the box.
    player_radius: float = 0.3
    player_height: float = 2.0


def tuning_field_names() -> tuple[str, ...]:
    return tuple(f.name for f in fields(PhysicsTuning))


def apply_tuning_overrides(tuning: PhysicsTuning, overrides: dict[str, float]) -> PhysicsTuning:
    known = set(tuning_field_names())
    kwargs = {name: getattr(tuning, name) for name in known}
    for key, value in overrides.items():
        if key in known:
            kwargs[key] = float(value)
    return PhysicsTuning(**kwargs)
