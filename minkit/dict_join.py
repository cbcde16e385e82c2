"""Merge the content of two dictionaries."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from minkit.outlet import Outlet


class DictJoin:
    """Combine a dictionary from the left inlet with one stored from the right.

    Keys already held by the right-hand dictionary win; the incoming left
    dictionary only adds keys that are not present yet.
    """

    description = "Merge the content of two dictionaries."

    def __init__(self, initial: Optional[Mapping[str, Any]] = None) -> None:
        self.output = Outlet("dictionary of entries combined from both inlets")
        self._right: dict[str, Any] = {}
        self._merged: dict[str, Any] = {}
        if initial:
            self._right = dict(self._checked(initial))

    @property
    def right(self) -> dict[str, Any]:
        """A copy of the dictionary stored from the right inlet."""
        return dict(self._right)

    @property
    def merged(self) -> dict[str, Any]:
        """A copy of the most recently combined dictionary."""
        return dict(self._merged)

    def bang(self) -> None:
        """Resend the most recently combined dictionary."""
        self.output.send("dictionary", dict(self._merged))

    def dictionary(self, d: Mapping[str, Any], inlet: int = 0) -> None:
        """Combine on the left inlet (0); store for later on the right inlet."""
        incoming = self._checked(d)
        if inlet == 0:
            merged = dict(self._right)
            for key, value in incoming.items():
                merged.setdefault(key, value)
            self._merged = merged
            self.bang()
        else:
            self._right = dict(incoming)

    @staticmethod
    def _checked(d: Any) -> Mapping[str, Any]:
        if not isinstance(d, Mapping):
            raise TypeError(f"expected a dictionary, got {type(d).__name__}")
        return d