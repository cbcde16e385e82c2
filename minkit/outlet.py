"""Outlets: the points through which objects emit messages."""

from __future__ import annotations

from typing import Any, Callable, Optional


class Outlet:
    """An outlet that records every message sent through it.

    Each message is stored as a list of its atoms. An optional ``on_send``
    callback receives every message as it is sent, which lets outlets be
    chained to other objects.
    """

    def __init__(
        self,
        description: str = "",
        on_send: Optional[Callable[[list[Any]], None]] = None,
    ) -> None:
        self.description = description
        self.messages: list[list[Any]] = []
        self._on_send = on_send

    def send(self, *args: Any) -> None:
        """Emit one message made of ``args``."""
        message = list(args)
        self.messages.append(message)
        if self._on_send is not None:
            self._on_send(message)

    def clear(self) -> None:
        """Forget every recorded message."""
        self.messages.clear()

    def __repr__(self) -> str:
        return f"Outlet({self.description!r}, messages={len(self.messages)})"