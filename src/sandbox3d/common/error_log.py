from __future__ import annotations

import logging
import traceback
from collections import deque
from dataclasses import dataclass


logger = logging.getLogger(__name__)


@dataclass
class ErrorItem:
    context: str
    message: str
    tb: str
    count: int = 1

    def summary_line(self) -> str:
        line = f"{self.context}: {self.message}"
        return line if self.count == 1 else f"{line} (x{self.count})"


class ErrorLog:
    """
    Exceptions caught by the command bus and the interpreter, newest last.

    A failure that repeats the previous one (same context and message) bumps its count instead of
    taking another slot. Every failure also goes to the logger at ERROR with its traceback.
    """

    def __init__(self, *, max_items: int = 30) -> None:
        self._items: deque[ErrorItem] = deque(maxlen=max(1, int(max_items)))

    def items(self) -> list[ErrorItem]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def log_exception(self, *, context: str, exc: BaseException) -> None:
        message = f"{type(exc).__name__}: {exc}"
        last = self._items[-1] if self._items else None
        if last is not None and last.context == context and last.message == message:
            last.count += 1
        else:
            tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            self._items.append(ErrorItem(context=context, message=message, tb=tb))
        logger.error("%s: %s", context, message, exc_info=exc)
