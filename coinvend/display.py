"""Operator-facing notices and the displays that render them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Protocol

from rich.console import Console
from rich.markup import escape

Severity = Literal["info", "warning"]

logger = logging.getLogger("coinvend.machine")


class NoticeKind(str, Enum):
    SOLD = "sold"
    CANCELLED = "cancelled"
    OUT_OF_STOCK = "out_of_stock"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_CHANGE = "insufficient_change"
    INVALID_COIN = "invalid_coin"
    NOT_RUNNING = "not_running"
    SHUTDOWN = "shutdown"


@dataclass(frozen=True, slots=True)
class Notice:
    kind: NoticeKind
    severity: Severity
    message: str

    @classmethod
    def info(cls, kind: NoticeKind, message: str) -> "Notice":
        return cls(kind=kind, severity="info", message=message)

    @classmethod
    def warning(cls, kind: NoticeKind, message: str) -> "Notice":
        return cls(kind=kind, severity="warning", message=message)


class OperatorDisplay(Protocol):
    def publish(self, notice: Notice) -> None:
        ...


class LoggingDisplay(OperatorDisplay):
    """Route notices to the ``coinvend.machine`` logger."""

    def __init__(self, target: logging.Logger | None = None) -> None:
        self._logger = target or logger

    def publish(self, notice: Notice) -> None:
        if notice.severity == "warning":
            self._logger.warning("[%s] %s", notice.kind.value, notice.message)
        else:
            self._logger.info("[%s] %s", notice.kind.value, notice.message)


class ConsoleDisplay(OperatorDisplay):
    """Print success messages to stdout and warnings to stderr."""

    def __init__(self, *, out: Console | None = None, err: Console | None = None) -> None:
        self._out = out or Console()
        self._err = err or Console(stderr=True)

    def publish(self, notice: Notice) -> None:
        if notice.severity == "warning":
            self._err.print(f"[bold yellow]![/bold yellow] {escape(notice.message)}", highlight=False)
        else:
            self._out.print(f"[green]✓[/green] {escape(notice.message)}", highlight=False)


__all__ = [
    "ConsoleDisplay",
    "LoggingDisplay",
    "Notice",
    "NoticeKind",
    "OperatorDisplay",
    "Severity",
]
