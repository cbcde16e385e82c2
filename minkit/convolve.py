"""Discrete convolution of a list with a kernel."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Optional

from minkit.outlet import Outlet


def convolve(values: Sequence[float], kernel: Sequence[float]) -> list[float]:
    """Convolve ``values`` with ``kernel``, keeping the length of ``values``.

    Samples before the start of ``values`` count as zero.
    """
    inputs = [float(v) for v in values]
    weights = [float(k) for k in kernel]
    return [
        sum(inputs[i - k] * weight for k, weight in enumerate(weights) if i - k >= 0)
        for i in range(len(inputs))
    ]


class Convolve:
    """Perform convolution on incoming lists."""

    description = "Perform convolution on a list."

    def __init__(self, kernel: Optional[Iterable[float]] = None) -> None:
        self.output = Outlet("(list) result of convolution")
        self.kernel = [1.0, 0.0] if kernel is None else kernel

    @property
    def kernel(self) -> list[float]:
        """The convolution kernel."""
        return list(self._kernel)

    @kernel.setter
    def kernel(self, values: Iterable[float]) -> None:
        self._kernel = [float(v) for v in values]

    def list(self, *args: float) -> None:
        """Convolve the incoming values and send the result."""
        self.output.send(*convolve(args, self._kernel))