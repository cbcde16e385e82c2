"""Objects that bang at intervals: a repeating pattern or random timing."""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Any, Callable, Optional

from minkit.outlet import Outlet
from minkit.timer import Timer

DEFAULT_PATTERN = (250.0, 250.0, 250.0, 250.0, 500.0, 500.0, 500.0, 500.0)


class BeatPattern:
    """Bang at intervals in a repeating pattern."""

    description = "Bang at intervals in a repeating pattern."

    def __init__(self, timer_factory: Callable[[Callable[[], None]], Any] = Timer) -> None:
        self.bang_out = Outlet("(bang) triggers at according to specified pattern")
        self.interval_out = Outlet("(float) the interval for the current bang")
        self.metro = timer_factory(self._tick)
        self._index = 0
        self._sequence: list[float] = list(DEFAULT_PATTERN)
        self._on = False

    @property
    def pattern(self) -> tuple[float, ...]:
        """The intervals, in milliseconds, that the object cycles through."""
        return tuple(self._sequence)

    @property
    def on(self) -> bool:
        """Whether the internal timer is running."""
        return self._on

    @on.setter
    def on(self, value: Any) -> None:
        self._on = bool(value)
        if self._on:
            self.metro.delay(0.0)
        else:
            self.metro.stop()

    def toggle(self, value: Any) -> None:
        """Turn the internal timer on or off."""
        self.on = value

    def dictionary(self, d: Mapping[str, Any]) -> None:
        """Take the pattern of intervals from the ``pattern`` entry of ``d``."""
        if not isinstance(d, Mapping):
            raise TypeError("dictionary expects a mapping")
        sequence = [float(value) for value in d["pattern"]]
        if not sequence:
            raise ValueError("pattern must hold at least one interval")
        self._sequence = sequence
        if self._index >= len(sequence):
            self._index = 0

    def _tick(self) -> None:
        interval = self._sequence[self._index]
        self.interval_out.send(interval)
        self.bang_out.send("bang")
        self.metro.delay(interval)
        self._index += 1
        if self._index >= len(self._sequence):
            self._index = 0


def _at_least_one(value: Any) -> float:
    return max(float(value), 1.0)


class BeatRandom:
    """Bang at random intervals between a minimum and a maximum."""

    description = "Bang at random intervals."

    def __init__(
        self,
        minimum: Optional[float] = None,
        maximum: Optional[float] = None,
        *,
        rng: Optional[random.Random] = None,
        timer_factory: Callable[[Callable[[], None]], Any] = Timer,
    ) -> None:
        self.bang_out = Outlet("(bang) triggers at randomized interval")
        self.interval_out = Outlet("(float) the interval for the current bang")
        self._rng = rng if rng is not None else random.Random()
        self.metro = timer_factory(self._tick)
        self._minimum = 250.0
        self._maximum = 1500.0
        self._on = False
        if minimum is not None:
            self.minimum = minimum
        if maximum is not None:
            self.maximum = maximum

    @property
    def minimum(self) -> float:
        """Lower bound of the random interval, never below 1 ms."""
        return self._minimum

    @minimum.setter
    def minimum(self, value: Any) -> None:
        self._minimum = _at_least_one(value)

    @property
    def maximum(self) -> float:
        """Upper bound of the random interval, never below 1 ms."""
        return self._maximum

    @maximum.setter
    def maximum(self, value: Any) -> None:
        self._maximum = _at_least_one(value)

    @property
    def on(self) -> bool:
        """Whether the internal timer is running."""
        return self._on

    @on.setter
    def on(self, value: Any) -> None:
        self._on = bool(value)
        if self._on:
            self.metro.delay(0.0)
        else:
            self.metro.stop()

    def toggle(self, value: Any) -> None:
        """Turn the internal timer on or off."""
        self.on = value

    def _tick(self) -> None:
        interval = self._rng.uniform(self._minimum, self._maximum)
        self.interval_out.send(interval)
        self.bang_out.send("bang")
        self.metro.delay(interval)