"""Configuration dataclasses for the intersection controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


ModeLiteral = Literal["console", "pygame"]


@dataclass(slots=True)
class IntersectionConfig:
    """Runtime configuration for :class:`intersection_control.system.TrafficSystem`.

    Parameters
    ----------
    mode:
        Display used for each cycle. ``"console"`` writes a text report while
        ``"pygame"`` draws the intersection in a window.
    cycles:
        Number of decision cycles to run before stopping.
    seed:
        Seed for the random stimulus generator.  ``None`` draws a fresh seed.
    scenario:
        Name of a predefined scenario to replay instead of random traffic.
    base_green_time, min_green_time, max_green_time:
        Adaptive green time formula and its bounds, in simulated seconds.
    yellow_time:
        Duration the outgoing approach stays yellow.
    crossing_time:
        Length of the pedestrian walk phase.
    cycle_interval:
        Simulated time that passes between the end of one cycle and the
        start of the next.
    initial_density:
        Traffic density every lane starts with, in ``[0, 10]``.
    cycle_delay:
        Wall-clock seconds to pause after each cycle so a human can follow
        the display.  Has no effect on simulated time.
    """

    mode: ModeLiteral = "console"
    cycles: int = 20
    seed: Optional[int] = None
    scenario: Optional[str] = None
    base_green_time: int = 20
    yellow_time: int = 3
    min_green_time: int = 10
    max_green_time: int = 60
    crossing_time: float = 3.0
    cycle_interval: float = 0.5
    initial_density: int = 5
    cycle_delay: float = 0.0

    def validate(self) -> None:
        """Reject inconsistent settings before any component is built."""

        if self.mode not in ("console", "pygame"):
            raise ValueError(f"Unknown mode: {self.mode!r}")
        if self.cycles < 1:
            raise ValueError("At least one cycle must be run")
        if self.min_green_time > self.max_green_time:
            raise ValueError("min_green_time must not exceed max_green_time")
        for name in ("base_green_time", "yellow_time", "min_green_time", "crossing_time",
                     "cycle_interval", "cycle_delay"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if not 0 <= self.initial_density <= 10:
            raise ValueError("initial_density must lie within [0, 10]")
