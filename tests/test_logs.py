from __future__ import annotations

import logging

from sandbox3d.common.logs import configure_logging, level_from_env


def test_level_from_env(monkeypatch) -> None:
    monkeypatch.delenv("SANDBOX3D_LOG_LEVEL", raising=False)
    assert level_from_env() == logging.WARNING
    monkeypatch.setenv("SANDBOX3D_LOG_LEVEL", "debug")
    assert level_from_env() == logging.DEBUG
    monkeypatch.setenv("SANDBOX3D_LOG_LEVEL", "chatty")
    assert level_from_env() == logging.WARNING


def test_configure_logging_is_idempotent() -> None:
    root = logging.getLogger("sandbox3d")
    prev_handlers = list(root.handlers)
    prev_level = root.level
    try:
        configure_logging(logging.INFO)
        count = len(root.handlers)
        configure_logging(logging.INFO)
        assert len(root.handlers) == count
        assert root.level == logging.INFO
    finally:
        for h in list(root.handlers):
            if h not in prev_handlers:
                root.removeHandler(h)
        root.setLevel(prev_level)
