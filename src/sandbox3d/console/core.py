from __future__ import annotations

import math
import re
from typing import Callable

from sandbox3d.common.error_log import ErrorLog
from sandbox3d.console.command_bus import CommandBus, CommandExecution


InterpreterListener = Callable[[str, list[str]], None]

_C_SPACE = " \t\n\v\f\r"
# Hex floats come first: "0x1p3" must not stop after the decimal "0".
_REAL_RE = re.compile(
    r"[+-]?(?:(?P<hex>0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?)"
    r"|(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


def _real_value(m: re.Match[str]) -> float:
    text = m.group(0)
    if m.group("hex") is None:
        return float(text)
    try:
        return float.fromhex(text)
    except OverflowError:
        return -math.inf if text.startswith("-") else math.inf


def scan_reals(text: str, count: int) -> tuple[float, ...] | None:
    """
    Read `count` reals from the start of `text` with `%lf` rules.

    Leading whitespace before each value is skipped and the longest real literal prefix is
    consumed, so `1-2-3` reads as (1, -2, -3). Decimal, scientific, hex (`0x1.8p3`), `inf` and
    `nan` forms are accepted; out-of-range magnitudes read as infinities. Anything after the last
    value is ignored. Returns None when fewer than `count` values can be read.
    """

    s = str(text or "")
    pos = 0
    out: list[float] = []
    for _ in range(max(0, int(count))):
        while pos < len(s) and s[pos] in _C_SPACE:
            pos += 1
        m = _REAL_RE.match(s, pos)
        if m is None:
            return None
        out.append(_real_value(m))
        pos = m.end()
    return tuple(out)


class Interpreter:
    """Runs one command line against a game session and returns the response lines."""

    def __init__(self, session, *, bus: CommandBus | None = None, error_log: ErrorLog | None = None) -> None:
        if bus is None:
            # Deferred: the bindings import the session layer.
            from sandbox3d.console.sandbox_bindings import build_sandbox_bus

            bus = build_sandbox_bus(error_log=error_log)
        self.session = session
        self._bus = bus
        self._listeners: list[InterpreterListener] = []

    @property
    def bus(self) -> CommandBus:
        return self._bus

    @property
    def error_log(self) -> ErrorLog:
        return self._bus.error_log

    def register_listener(self, listener: InterpreterListener) -> None:
        self._listeners.append(listener)

    def execute(self, line: str) -> CommandExecution:
        raw = str(line or "")
        if not raw:
            ex = CommandExecution(name="", ok=True, out=[], data={}, elapsed_ms=0.0)
        else:
            ex = self._bus.dispatch(session=self.session, line=raw)
        for it in list(self._listeners):
            try:
                it(raw, list(ex.out))
            except Exception as e:
                # Listener failures must never break command execution.
                self.error_log.log_exception(context="interpreter.listener", exc=e)
        return ex

    def interpret(self, line: str) -> list[str]:
        return list(self.execute(line).out)
