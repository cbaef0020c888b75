from __future__ import annotations

import logging

from sandbox3d.common.error_log import ErrorLog
from sandbox3d.common.vecmath import format_triple, format_vec
from sandbox3d.console.command_bus import CommandBus, CommandMetadata, CommandResult, exact, prefix, single_char
from sandbox3d.console.core import scan_reals
from sandbox3d.game.input_system import KEY_DIRECTION_NAMES, normalize_move_key
from sandbox3d.game.session import GameSession
from sandbox3d.world.world import is_block_coord


logger = logging.getLogger(__name__)

MOVE_WORDS: dict[str, str] = {
    "forward": "w",
    "w": "w",
    "backward": "s",
    "back": "s",
    "s": "s",
    "left": "a",
    "a": "a",
    "right": "d",
    "d": "d",
}

UNKNOWN_HINT = "Type 'help' for available commands."


def _move(session: GameSession, key: str) -> CommandResult:
    k = normalize_move_key(key)
    if k is None or not session.move(k):
        return CommandResult.silent(data={"ignored": key})
    pos = session.get_position()
    return CommandResult.success(
        out=[f"Player moved {KEY_DIRECTION_NAMES[k]} to position {format_vec(pos)}"],
        data={"key": k, "position": (float(pos.x), float(pos.y), float(pos.z))},
    )


def _parse_block_args(keyword: str, line: str) -> tuple[float, float, float] | None:
    values = scan_reals(line[len(keyword) :], 3)
    if values is None or not all(is_block_coord(v) for v in values):
        return None
    return (values[0], values[1], values[2])


def _cmd_quit(session: GameSession, _line: str) -> CommandResult:
    session.stop()
    return CommandResult.silent()


def _cmd_help(session: GameSession, _line: str) -> CommandResult:
    shown = session.toggle_help()
    return CommandResult.success(out=session.help_lines(), data={"show_help": shown})


def _cmd_jump(session: GameSession, _line: str) -> CommandResult:
    jumped = session.jump()
    return CommandResult.success(out=["Player jumps!"], data={"jumped": jumped})


def _cmd_look(session: GameSession, _line: str) -> CommandResult:
    return CommandResult.success(out=session.look_lines())


def _cmd_status(session: GameSession, _line: str) -> CommandResult:
    return CommandResult.success(out=session.status_lines())


def _cmd_create(session: GameSession, line: str) -> CommandResult:
    args = _parse_block_args("create", line)
    if args is None:
        return CommandResult.failure("Usage: create <x> <y> <z>", error_code="usage")
    block = session.create_block(args)
    return CommandResult.success(out=[f"Created a block at {format_triple(*args)}"], data={"key": block.key})


def _cmd_destroy(session: GameSession, line: str) -> CommandResult:
    args = _parse_block_args("destroy", line)
    if args is None:
        return CommandResult.failure("Usage: destroy <x> <y> <z>", error_code="usage")
    if session.destroy_block(args):
        return CommandResult.success(out=[f"Destroyed a block at {format_triple(*args)}"], data={"found": True})
    return CommandResult.success(out=[f"No block found at {format_triple(*args)}"], data={"found": False})


def _cmd_key(session: GameSession, line: str) -> CommandResult:
    return _move(session, line.lower())


def _cmd_move_word(session: GameSession, line: str) -> CommandResult:
    return _move(session, MOVE_WORDS[line.lower()])


def _cmd_unknown(_session: GameSession, line: str) -> CommandResult:
    logger.debug("unknown command: %r", line)
    return CommandResult.failure("", error_code="unknown-command", out=[f"Unknown command: {line}", UNKNOWN_HINT])


def build_sandbox_bus(*, error_log: ErrorLog | None = None) -> CommandBus:
    """
    Command grammar of the sandbox, in match order.

    Exact keywords first, then the `create`/`destroy` prefixes, then single-character keys,
    then movement words. Unclaimed lines are unknown commands.
    """

    bus = CommandBus(error_log=error_log)
    bus.register(
        metadata=CommandMetadata(name="quit", summary="Exit game", usage="quit | exit | q"),
        match=exact("quit", "exit", "q"),
        handler=_cmd_quit,
    )
    bus.register(
        metadata=CommandMetadata(name="help", summary="Toggle help", usage="help | h"),
        match=exact("help", "h"),
        handler=_cmd_help,
    )
    bus.register(
        metadata=CommandMetadata(name="jump", summary="Jump", usage="jump | j"),
        match=exact("jump", "j", " "),
        handler=_cmd_jump,
    )
    bus.register(
        metadata=CommandMetadata(name="look", summary="Show world view", usage="look | l"),
        match=exact("look", "l"),
        handler=_cmd_look,
    )
    bus.register(
        metadata=CommandMetadata(name="status", summary="Show game status", usage="status | stat"),
        match=exact("status", "stat"),
        handler=_cmd_status,
    )
    bus.register(
        metadata=CommandMetadata(name="create", summary="Create a block", usage="create <x> <y> <z>"),
        match=prefix("create"),
        handler=_cmd_create,
    )
    bus.register(
        metadata=CommandMetadata(name="destroy", summary="Destroy a block", usage="destroy <x> <y> <z>"),
        match=prefix("destroy"),
        handler=_cmd_destroy,
    )
    # Any other single character is swallowed silently by this rule.
    bus.register(
        metadata=CommandMetadata(name="key", summary="Move by key", usage="w | a | s | d", advances_time=True),
        match=single_char(),
        handler=_cmd_key,
    )
    bus.register(
        metadata=CommandMetadata(
            name="move",
            summary="Move by direction word",
            usage="forward | backward | back | left | right",
            advances_time=True,
        ),
        match=exact(*MOVE_WORDS),
        handler=_cmd_move_word,
    )
    bus.set_fallback(
        metadata=CommandMetadata(name="unknown", summary="Unknown command"),
        handler=_cmd_unknown,
    )
    return bus
