"""Seeded random traffic generator."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Mapping, Optional

from .base import StimulusEvents, StimulusGenerator
from ..lane import MAX_DENSITY, MIN_DENSITY
from ..model import Direction

if TYPE_CHECKING:  # pragma: no cover - used only for typing
    from ..controller import LaneStatus

# Each chance is expressed as "one in N" draws.
DENSITY_CHANGE_ODDS = 21
EMERGENCY_ODDS = 21
CROSSING_REQUEST_ODDS = 16


class RandomStimulus(StimulusGenerator):
    """Generate arrivals, density drift and crossing requests at random.

    A lane receives at most one vehicle per cycle.  The arrival probability
    grows with density: a uniform draw in ``[0, 10]`` must reach
    ``10 - density``.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random(seed)

    def _one_in(self, odds: int) -> bool:
        return self.rng.randint(0, odds - 1) == 0

    def next_events(self, status: Mapping[Direction, "LaneStatus"]) -> StimulusEvents:
        events = StimulusEvents()
        for direction in Direction.ordered():
            density = status[direction].density
            if self._one_in(DENSITY_CHANGE_ODDS):
                density = self.rng.randint(MIN_DENSITY, MAX_DENSITY)
                events.density_changes[direction] = density
            if self.rng.randint(MIN_DENSITY, MAX_DENSITY) >= MAX_DENSITY - density:
                events.add_arrival(direction, emergency=self._one_in(EMERGENCY_ODDS))

        for direction in Direction.ordered():
            if self._one_in(CROSSING_REQUEST_ODDS):
                events.crossing_requests.append(direction)
        return events
