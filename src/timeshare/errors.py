from __future__ import annotations

from typing import Sequence


class TimeshareError(Exception):
    """Base class for errors raised by the aggregation engine."""


class CycleDetected(TimeshareError):
    """The category parent graph loops back on itself."""

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = list(cycle)
        super().__init__("category hierarchy contains a cycle: " + " -> ".join(self.cycle))


class InvalidArgument(TimeshareError, ValueError):
    """A caller passed a value outside a closed set (e.g. an unknown range)."""
