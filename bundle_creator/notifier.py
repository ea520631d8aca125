"""Progress and outcome reporting for scaffold runs.

The generator reports through an injected ``Notifier``.  ``ConsoleNotifier``
prints to the shared Rich console; ``FlashBag`` collects the messages per
type, the way a backend session flash bag does, so they can be shown (or
asserted on) after the run.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rich.markup import escape

from bundle_creator.utils import print_error, print_info

INFO = "info"
ERROR = "error"


@runtime_checkable
class Notifier(Protocol):
    """Fire-and-forget sink for human readable progress messages."""

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Print messages to the Rich console as they arrive."""

    def info(self, message: str) -> None:
        print_info(escape(message))

    def error(self, message: str) -> None:
        print_error(escape(message))


class FlashBag:
    """Collect messages per type, preserving arrival order."""

    def __init__(self) -> None:
        self._messages: dict[str, list[str]] = {}

    def add(self, kind: str, message: str) -> None:
        self._messages.setdefault(kind, []).append(message)

    def info(self, message: str) -> None:
        self.add(INFO, message)

    def error(self, message: str) -> None:
        self.add(ERROR, message)

    def has(self, kind: str) -> bool:
        return bool(self._messages.get(kind))

    def peek(self, kind: str) -> list[str]:
        """Return the messages of *kind* without clearing them."""
        return list(self._messages.get(kind, []))

    def pop(self, kind: str) -> list[str]:
        """Return and clear the messages of *kind*."""
        return self._messages.pop(kind, [])

    def all(self) -> dict[str, list[str]]:
        """Return and clear every message, grouped by type."""
        messages, self._messages = self._messages, {}
        return messages
