from __future__ import annotations

import logging
import sys
from typing import TextIO

from sandbox3d.app_config import RunConfig, load_config
from sandbox3d.console.core import Interpreter
from sandbox3d.game.session import FAREWELL_LINES, WELCOME_LINES, GameSession


logger = logging.getLogger(__name__)

PROMPT = "> "


def _write_lines(out: TextIO, lines) -> None:
    for ln in lines:
        out.write(f"{ln}\n")


def run(cfg: RunConfig | None = None, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    """
    Line-at-a-time REPL: one command in, its response out, then the next prompt.

    End of input stops the loop the same way `quit` does.
    """

    src = stdin if stdin is not None else sys.stdin
    out = stdout if stdout is not None else sys.stdout
    session = GameSession(cfg if cfg is not None else load_config())
    interpreter = Interpreter(session)

    _write_lines(out, WELCOME_LINES)
    _write_lines(out, session.help_lines())

    while session.running:
        out.write(PROMPT)
        out.flush()
        raw = src.readline()
        if raw == "":
            logger.debug("end of input, stopping session")
            session.stop()
            break
        line = raw[:-1] if raw.endswith("\n") else raw
        if line.endswith("\r"):
            line = line[:-1]
        _write_lines(out, interpreter.interpret(line))

    _write_lines(out, FAREWELL_LINES)
    out.flush()
    return 0
