"""Logical clock driving all simulated holds."""

from __future__ import annotations


class SimulationClock:
    """Monotonic logical clock advanced explicitly by its owner.

    The controller advances the clock for the yellow hold, the pedestrian
    crossing window and the interval between cycles.  Instances are callable
    so they can be passed wherever a ``time_func`` is expected.
    """

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)

    def __call__(self) -> float:
        return self._now

    def now(self) -> float:
        return self._now

    def advance(self, duration: float) -> float:
        """Move the clock forward by ``duration`` and return the new instant."""

        if duration < 0:
            raise ValueError(f"Cannot move the clock backwards ({duration})")
        self._now += duration
        return self._now
