"""Basic value types shared by the intersection components."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from .errors import InvalidDirectionError

DirectionLike = Union["Direction", str, int]


class Direction(Enum):
    """Approach of the intersection, declared in scan order."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def index(self) -> int:
        return _ORDER.index(self)

    @classmethod
    def ordered(cls) -> tuple["Direction", ...]:
        """Return every direction in North, East, South, West order."""

        return _ORDER

    @classmethod
    def parse(cls, value: DirectionLike) -> "Direction":
        """Resolve a direction from an enum member, name, value or index.

        Raises
        ------
        InvalidDirectionError
            If ``value`` does not name one of the four approaches.
        """

        if isinstance(value, Direction):
            return value
        # bool is an int subclass but never a sensible index
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value < len(_ORDER):
                return _ORDER[value]
            raise InvalidDirectionError(f"Direction index out of range: {value}")
        if isinstance(value, str):
            key = value.strip().lower()
            for direction in _ORDER:
                if direction.value == key:
                    return direction
            raise InvalidDirectionError(f"Unknown direction: {value!r}")
        raise InvalidDirectionError(f"Unsupported direction type: {type(value).__name__}")


_ORDER: tuple[Direction, ...] = tuple(Direction)


class LightState(Enum):
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"


class PedestrianState(Enum):
    DONT_WALK = "dont_walk"
    WALK = "walk"


@dataclass(frozen=True, slots=True)
class Vehicle:
    """A vehicle waiting at the stop line.

    Attributes
    ----------
    id:
        Identifier assigned by the controller, increasing with every arrival.
    emergency:
        ``True`` for vehicles that preempt normal scheduling.
    arrival_time:
        Logical clock instant at which the vehicle joined its lane.
    """

    id: int
    emergency: bool = False
    arrival_time: float = 0.0

    def waiting_time(self, now: float) -> float:
        return now - self.arrival_time
