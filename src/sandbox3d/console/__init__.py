from __future__ import annotations

from sandbox3d.console.command_bus import CommandBus, CommandExecution, CommandMetadata, CommandResult
from sandbox3d.console.core import Interpreter, scan_reals
from sandbox3d.console.sandbox_bindings import build_sandbox_bus

__all__ = [
    "CommandBus",
    "CommandExecution",
    "CommandMetadata",
    "CommandResult",
    "Interpreter",
    "build_sandbox_bus",
    "scan_reals",
]
