"""Run configuration with optional JSON overrides stored at ~/.sandbox3d/config.json."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from sandbox3d.physics.tuning import PhysicsTuning, apply_tuning_overrides


logger = logging.getLogger(__name__)

Triple = tuple[float, float, float]


@dataclass(frozen=True)
class RunConfig:
    # World box: 100 x 55 x 100 units around the origin.
    bounds_min: Triple = (-50.0, -5.0, -50.0)
    bounds_max: Triple = (50.0, 50.0, 50.0)
    spawn: Triple = (0.0, 2.0, 0.0)
    ground_height: float = 0.0
    # Simulated seconds per movement command.
    step_dt: float = 0.1
    # Camera placement relative to the player: at session start, then after every step.
    camera_start_offset: Triple = (0.0, 5.0, -10.0)
    camera_offset: Triple = (0.0, 8.0, -12.0)
    camera_look_offset: Triple = (0.0, 1.0, 0.0)
    block_size: Triple = (1.0, 1.0, 1.0)
    # Help starts visible; the first `help` hides it.
    show_help: bool = True
    tuning: PhysicsTuning = field(default_factory=PhysicsTuning)


_TRIPLE_FIELDS = (
    "bounds_min",
    "bounds_max",
    "spawn",
    "camera_start_offset",
    "camera_offset",
    "camera_look_offset",
    "block_size",
)
_FLOAT_FIELDS = ("ground_height", "step_dt")
_BOOL_FIELDS = ("show_help",)


def config_dir() -> Path:
    """
    Directory for the optional config file.

    Override for tests/dev via `SANDBOX3D_CONFIG_DIR`.
    """

    override = os.environ.get("SANDBOX3D_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".sandbox3d"


def config_path() -> Path:
    return config_dir() / "config.json"


def _coerce_triple(value: Any) -> Triple | None:
    if not isinstance(value, (list, tuple)) or len(value) != 3:
        return None
    out: list[float] = []
    for v in value:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            return None
        out.append(float(v))
    return (out[0], out[1], out[2])


def _coerce_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        v = value.strip().lower()
        if v in ("1", "true", "on", "yes", "y"):
            return True
        if v in ("0", "false", "off", "no", "n"):
            return False
    return None


def config_from_payload(payload: dict[str, Any], *, base: RunConfig | None = None) -> RunConfig:
    cfg = base if base is not None else RunConfig()
    kwargs: dict[str, Any] = {}
    for name in _TRIPLE_FIELDS:
        if name not in payload:
            continue
        triple = _coerce_triple(payload[name])
        if triple is None:
            logger.warning("ignoring config %s: expected a list of 3 numbers", name)
            continue
        kwargs[name] = triple
    for name in _FLOAT_FIELDS:
        raw = payload.get(name)
        if raw is None:
            continue
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            logger.warning("ignoring config %s: expected a number", name)
            continue
        kwargs[name] = float(raw)
    for name in _BOOL_FIELDS:
        if name not in payload:
            continue
        b = _coerce_bool(payload[name])
        if b is None:
            logger.warning("ignoring config %s: expected a bool", name)
            continue
        kwargs[name] = b

    raw_tuning = payload.get("tuning")
    if isinstance(raw_tuning, dict):
        overrides: dict[str, float] = {}
        for key, value in raw_tuning.items():
            if not isinstance(key, str) or not key.strip():
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                continue
            overrides[key] = float(value)
        kwargs["tuning"] = apply_tuning_overrides(cfg.tuning, overrides)

    if "step_dt" in kwargs and kwargs["step_dt"] <= 0.0:
        logger.warning("ignoring config step_dt: must be > 0")
        kwargs.pop("step_dt")
    return replace(cfg, **kwargs)


def load_config() -> RunConfig:
    p = config_path()
    if not p.exists():
        return RunConfig()
    try:
        payload = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("could not read %s, using defaults: %s", p, e)
        return RunConfig()
    if not isinstance(payload, dict):
        logger.warning("config %s is not a JSON object, using defaults", p)
        return RunConfig()
    return config_from_payload(payload)
