"""Detect logical transitions in a stream of samples."""

from __future__ import annotations

from collections.abc import Iterable

from minkit.outlet import Outlet


class Edge:
    """Bang on zero to non-zero and non-zero to zero transitions."""

    description = "Detect logical signal transitions. Output at high priority."

    def __init__(self) -> None:
        self.output_true = Outlet("(bang) input is non-zero")
        self.output_false = Outlet("(bang) input is zero")
        self._prev = 0.0

    def __call__(self, x: float) -> None:
        """Process a single sample."""
        if x != 0.0 and self._prev == 0.0:
            self.output_true.send("bang")
        elif x == 0.0 and self._prev != 0.0:
            self.output_false.send("bang")
        self._prev = x

    def process(self, samples: Iterable[float]) -> None:
        """Process a block of samples in order."""
        for x in samples:
            self(x)


class EdgeLow(Edge):
    """Bang on logical transitions; the low-priority variant of :class:`Edge`."""

    description = "Detect logical signal transitions. Output at low priority."