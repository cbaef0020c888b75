from __future__ import annotations

import logging
import os
import sys


LOG_LEVEL_ENV = "SANDBOX3D_LOG_LEVEL"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def level_from_env(default: str = "WARNING") -> int:
    raw = str(os.environ.get(LOG_LEVEL_ENV) or default).strip().upper()
    level = logging.getLevelName(raw)
    if isinstance(level, int):
        return level
    return logging.WARNING


def configure_logging(level: int | None = None) -> logging.Logger:
    """Attach a single stderr handler to the package logger (idempotent)."""

    root = logging.getLogger("sandbox3d")
    root.setLevel(level_from_env() if level is None else int(level))
    if not any(getattr(h, "_sandbox3d_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._sandbox3d_handler = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    return root
