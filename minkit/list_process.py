"""Process lists: collect them, or compute their average or product."""

from __future__ import annotations

import math
import statistics
import threading
from enum import Enum
from typing import Any

from minkit.outlet import Outlet


class Operation(Enum):
    """What the object does with incoming lists."""

    COLLECT = "collect"
    AVERAGE = "average"
    PRODUCT = "product"


class ListProcess:
    """Collect incoming items, or compute statistics on incoming lists."""

    description = "Process lists in various ways."

    def __init__(self, operation: Operation | str = Operation.COLLECT) -> None:
        self.out1 = Outlet("(list) result")
        self.out2 = Outlet("(list) result")
        self._data: list[Any] = []
        self._lock = threading.Lock()
        self.operation = operation

    @property
    def operation(self) -> Operation:
        """The operation performed on incoming lists."""
        return self._operation

    @operation.setter
    def operation(self, value: Operation | str) -> None:
        self._operation = Operation(value)

    def process(self, *args: Any) -> None:
        """Apply the current operation to ``args``."""
        if self._operation is Operation.COLLECT:
            with self._lock:
                self._data.extend(args)
        elif self._operation is Operation.AVERAGE:
            values = [float(a) for a in args]
            if not values:
                raise ValueError("cannot average an empty list")
            mean = statistics.fmean(values)
            deviation = statistics.pstdev(values, mu=mean)
            self.out1.send(mean, deviation)
        else:
            values = [float(a) for a in args]
            self.out1.send(math.prod(values, start=1.0))

    def list(self, *args: Any) -> None:
        """Operate on a list."""
        self.process(*args)

    def anything(self, *args: Any) -> None:
        """Operate on an arbitrary message."""
        self.process(*args)

    def number(self, value: Any) -> None:
        """Operate on a single number."""
        self.process(value)

    def bang(self) -> None:
        """Send the collected items and empty the collection."""
        with self._lock:
            data_copy = list(self._data)
            self._data.clear()
        self.out1.send(*data_copy)