"""Per-direction vehicle queue."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator

from .errors import EmptyQueueError
from .model import Direction, DirectionLike, Vehicle

MIN_DENSITY = 0
MAX_DENSITY = 10
DEFAULT_DENSITY = 5


def clamp_density(value: int) -> int:
    return max(MIN_DENSITY, min(MAX_DENSITY, int(value)))


class Lane:
    """FIFO queue of vehicles approaching from one direction.

    Vehicles only ever join at the tail and leave from the head.  All
    inspection helpers iterate over the queue in place and never consume or
    reorder it.
    """

    def __init__(self, direction: DirectionLike, density: int = DEFAULT_DENSITY) -> None:
        self.direction = Direction.parse(direction)
        self._queue: Deque[Vehicle] = deque()
        self._density = clamp_density(density)

    def __iter__(self) -> Iterator[Vehicle]:
        return iter(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return (
            f"Lane(direction={self.direction.label}, queue={len(self._queue)}, "
            f"density={self._density})"
        )

    @property
    def density(self) -> int:
        return self._density

    def set_density(self, density: int) -> None:
        self._density = clamp_density(density)

    def add_vehicle(self, vehicle: Vehicle) -> None:
        self._queue.append(vehicle)

    def has_vehicles(self) -> bool:
        return bool(self._queue)

    def queue_length(self) -> int:
        return len(self._queue)

    def process_vehicle(self) -> Vehicle:
        """Remove and return the vehicle at the head of the queue."""

        if not self._queue:
            raise EmptyQueueError(f"No vehicles to process on {self.direction.label}")
        return self._queue.popleft()

    def total_wait_time(self, now: float) -> float:
        return sum(vehicle.waiting_time(now) for vehicle in self._queue)

    def average_wait_time(self, now: float) -> float:
        if not self._queue:
            return 0.0
        return self.total_wait_time(now) / len(self._queue)

    def has_emergency_vehicle(self) -> bool:
        return any(vehicle.emergency for vehicle in self._queue)

    def priority_score(self, now: float) -> float:
        """Weight queue length and waiting time by the lane's traffic density."""

        return (
            self.queue_length()
            * self.average_wait_time(now)
            * (1 + self._density / MAX_DENSITY)
        )
