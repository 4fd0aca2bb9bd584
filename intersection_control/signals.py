"""Vehicle and pedestrian signal heads."""

from __future__ import annotations

from dataclasses import dataclass
import time
from typing import Callable, Dict, List, Optional

from .lane import Lane
from .model import Direction, DirectionLike, LightState, PedestrianState


@dataclass(frozen=True, slots=True)
class LightTransition:
    """A single light change, stamped with the clock instant it happened at."""

    at: float
    direction: Direction
    state: LightState


class Signal:
    """Vehicle signal heads for all four approaches.

    Only one approach may show green.  The outgoing approach passes through
    yellow via :meth:`set_yellow`; the following :meth:`change_light` turns it
    red and the new approach green in one step.
    """

    def __init__(
        self,
        base_green_time: int = 20,
        yellow_time: int = 3,
        min_green_time: int = 10,
        max_green_time: int = 60,
        time_func: Callable[[], float] | None = None,
    ) -> None:
        self.base_green_time = base_green_time
        self.yellow_time = yellow_time
        self.min_green_time = min_green_time
        self.max_green_time = max_green_time
        self.time_func = time_func or time.time
        self.light_states: Dict[Direction, LightState] = {
            direction: LightState.RED for direction in Direction.ordered()
        }
        self.current_green_direction: Optional[Direction] = None

    def light_state(self, direction: DirectionLike) -> LightState:
        return self.light_states[Direction.parse(direction)]

    def green_directions(self) -> List[Direction]:
        return [
            direction
            for direction, state in self.light_states.items()
            if state is LightState.GREEN
        ]

    def _set(self, direction: Direction, state: LightState) -> LightTransition:
        self.light_states[direction] = state
        return LightTransition(at=self.time_func(), direction=direction, state=state)

    def set_yellow(self) -> Optional[LightTransition]:
        """Turn the current green approach yellow, if there is one."""

        if self.current_green_direction is None:
            return None
        return self._set(self.current_green_direction, LightState.YELLOW)

    def change_light(self, new_green: DirectionLike) -> List[LightTransition]:
        """Give ``new_green`` the green light and return the resulting changes."""

        direction = Direction.parse(new_green)
        transitions: List[LightTransition] = []
        if self.current_green_direction is not None:
            transitions.append(self._set(self.current_green_direction, LightState.RED))
        transitions.append(self._set(direction, LightState.GREEN))
        self.current_green_direction = direction
        return transitions

    def calculate_adaptive_green_time(self, lane: Lane) -> int:
        """Extend the base green time by queue length and density, within bounds."""

        green_time = self.base_green_time + 2 * lane.queue_length() + 2 * lane.density
        return max(self.min_green_time, min(self.max_green_time, green_time))


class PedestrianSignal:
    """Crossing request and walk state for one approach.

    This is a passive holder; the controller is responsible for calling the
    methods in a sensible order.
    """

    def __init__(self) -> None:
        self.state = PedestrianState.DONT_WALK
        self.requested = False

    def request_crossing(self) -> None:
        self.requested = True

    def grant_crossing(self) -> None:
        self.state = PedestrianState.WALK
        self.requested = False

    def end_crossing(self) -> None:
        self.state = PedestrianState.DONT_WALK

    def is_requested(self) -> bool:
        return self.requested
