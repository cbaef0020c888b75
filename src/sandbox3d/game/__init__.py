from __future__ import annotations

"""
Sandbox game wiring.

- `GameSession`: world + player state mutated by the command interpreter.
- `InputHandler`: live key state -> movement intent.
- `run(...)`: the stdin/stdout REPL used by `python -m sandbox3d`.
"""

from .app import run
from .input_system import InputHandler
from .session import GameSession, SessionState

__all__ = ["GameSession", "InputHandler", "SessionState", "run"]
