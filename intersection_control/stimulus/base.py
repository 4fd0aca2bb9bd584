"""Stimulus abstractions feeding the intersection controller."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Mapping

from ..model import Direction, DirectionLike

if TYPE_CHECKING:  # pragma: no cover - used only for typing
    from ..controller import LaneStatus


@dataclass(frozen=True, slots=True)
class VehicleArrival:
    """Request to enqueue one vehicle on ``direction``."""

    direction: Direction
    emergency: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", Direction.parse(self.direction))


@dataclass(slots=True)
class StimulusEvents:
    """Everything that happens to the intersection before one cycle.

    Attributes
    ----------
    density_changes:
        New density per direction.  Values are clamped by the lane.
    arrivals:
        Vehicles to enqueue, in arrival order.
    crossing_requests:
        Directions where a pedestrian pressed the crossing button.
    """

    density_changes: Dict[Direction, int] = field(default_factory=dict)
    arrivals: List[VehicleArrival] = field(default_factory=list)
    crossing_requests: List[Direction] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.density_changes = {
            Direction.parse(direction): int(value)
            for direction, value in self.density_changes.items()
        }
        self.arrivals = [
            arrival if isinstance(arrival, VehicleArrival) else VehicleArrival(arrival)
            for arrival in self.arrivals
        ]
        self.crossing_requests = [Direction.parse(d) for d in self.crossing_requests]

    def is_empty(self) -> bool:
        return not (self.density_changes or self.arrivals or self.crossing_requests)

    def add_arrival(self, direction: DirectionLike, emergency: bool = False) -> None:
        self.arrivals.append(VehicleArrival(Direction.parse(direction), emergency))


class StimulusGenerator(ABC):
    """Source of per-cycle traffic and pedestrian events."""

    @abstractmethod
    def next_events(self, status: Mapping[Direction, "LaneStatus"]) -> StimulusEvents:
        """Return the events to apply before the next cycle.

        ``status`` is the controller's current read-only view of each lane.
        """
