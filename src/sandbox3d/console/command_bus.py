from __future__ import annotations

import logging
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any, Callable

from sandbox3d.common.error_log import ErrorLog


logger = logging.getLogger(__name__)

# (lowered line, raw line) -> does this rule claim the line?
LineMatcher = Callable[[str, str], bool]
# (session, raw line) -> result
CommandHandler = Callable[[Any, str], "CommandResult"]


@dataclass(frozen=True)
class CommandMetadata:
    name: str
    summary: str
    usage: str = ""
    # Movement rules advance the simulation by one tick; everything else is instantaneous.
    advances_time: bool = False


@dataclass
class CommandResult:
    ok: bool
    out: list[str] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)
    error_code: str = ""

    @staticmethod
    def success(*, out: list[str] | None = None, data: dict[str, Any] | None = None) -> "CommandResult":
        return CommandResult(ok=True, out=list(out or []), data=dict(data or {}), error_code="")

    @staticmethod
    def silent(*, data: dict[str, Any] | None = None) -> "CommandResult":
        return CommandResult(ok=True, out=[], data=dict(data or {}), error_code="")

    @staticmethod
    def failure(
        message: str,
        *,
        error_code: str = "command-error",
        out: list[str] | None = None,
        data: dict[str, Any] | None = None,
    ) -> "CommandResult":
        lines = list(out or [])
        if message:
            lines.append(message)
        return CommandResult(ok=False, out=lines, data=dict(data or {}), error_code=str(error_code))


@dataclass
class CommandExecution:
    name: str
    ok: bool
    out: list[str]
    data: dict[str, Any]
    elapsed_ms: float
    error_code: str = ""
    ticks_advanced: int = 0


def exact(*words: str) -> LineMatcher:
    choices = frozenset(words)
    return lambda lowered, _raw: lowered in choices


def prefix(word: str) -> LineMatcher:
    return lambda lowered, _raw: lowered.startswith(word)


def single_char() -> LineMatcher:
    return lambda _lowered, raw: len(raw) == 1


@dataclass
class _Rule:
    metadata: CommandMetadata
    match: LineMatcher
    handler: CommandHandler


class CommandBus:
    """
    Ordered rule list for free-form command lines.

    Rules are evaluated top-to-bottom and the first match wins, so registration order is part
    of the grammar (`create 1 2 3` must reach the `create` rule before any catch-all).
    A line no rule claims goes to the fallback handler.
    """

    def __init__(self, *, error_log: ErrorLog | None = None) -> None:
        self._rules: list[_Rule] = []
        self._fallback: _Rule | None = None
        self.error_log = error_log if error_log is not None else ErrorLog()

    def register(self, *, metadata: CommandMetadata, match: LineMatcher, handler: CommandHandler) -> None:
        name = str(metadata.name or "").strip()
        if not name:
            raise ValueError("command name is required")
        if self.get_metadata(name) is not None:
            raise ValueError(f"duplicate command: {name}")
        self._rules.append(_Rule(metadata=metadata, match=match, handler=handler))

    def set_fallback(self, *, metadata: CommandMetadata, handler: CommandHandler) -> None:
        self._fallback = _Rule(metadata=metadata, match=lambda _lowered, _raw: True, handler=handler)

    def list_metadata(self) -> list[CommandMetadata]:
        return [r.metadata for r in self._rules]

    def get_metadata(self, name: str) -> CommandMetadata | None:
        for r in self._rules:
            if r.metadata.name == str(name):
                return r.metadata
        return None

    def match(self, line: str) -> CommandMetadata | None:
        rule = self._find(line)
        return rule.metadata if rule is not None else None

    def _find(self, line: str) -> _Rule | None:
        raw = str(line)
        lowered = raw.lower()
        for r in self._rules:
            if r.match(lowered, raw):
                return r
        return self._fallback

    def dispatch(self, *, session: Any, line: str) -> CommandExecution:
        rule = self._find(line)
        if rule is None:
            return CommandExecution(
                name="",
                ok=False,
                out=[f"unknown command: {line}"],
                data={},
                elapsed_ms=0.0,
                error_code="unknown-command",
            )
        meta = rule.metadata
        ticks_before = _session_ticks(session)
        t0 = perf_counter()
        try:
            result = rule.handler(session, str(line))
            if not isinstance(result, CommandResult):
                result = CommandResult.failure(
                    f"error in {meta.name}: handler returned invalid result type",
                    error_code="handler-contract",
                )
        except Exception as e:
            self.error_log.log_exception(context=f"command.{meta.name}", exc=e)
            result = CommandResult.failure(f"error in {meta.name}: {e}", error_code="handler-error")
        elapsed_ms = (perf_counter() - t0) * 1000.0

        ticks_advanced = 0
        if ticks_before is not None:
            ticks_advanced = _session_ticks(session) - ticks_before
            if ticks_advanced and not meta.advances_time:
                logger.warning("command %s advanced %d tick(s) without advances_time", meta.name, ticks_advanced)
        return CommandExecution(
            name=meta.name,
            ok=bool(result.ok),
            out=list(result.out),
            data=dict(result.data),
            elapsed_ms=elapsed_ms,
            error_code=str(result.error_code or ""),
            ticks_advanced=ticks_advanced,
        )


def _session_ticks(session: Any) -> int | None:
    ticks = getattr(session, "ticks", None)
    return ticks if isinstance(ticks, int) else None
