"""Four-way intersection controller running the signal decision cycle."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, List, Optional, Tuple

from .clock import SimulationClock
from .lane import DEFAULT_DENSITY, Lane
from .model import Direction, DirectionLike, Vehicle
from .signals import LightTransition, PedestrianSignal, Signal
from .stimulus.base import StimulusEvents

logger = logging.getLogger(__name__)

PEDESTRIAN_CROSSING_TIME = 3


@dataclass(frozen=True, slots=True)
class LaneStatus:
    """Read-only view of one approach at the start of a cycle."""

    direction: Direction
    queue_length: int
    average_wait: float
    density: int
    pedestrian_requested: bool
    has_emergency: bool


@dataclass(frozen=True, slots=True)
class VehiclePassed:
    """A vehicle that crossed the stop line during a green phase."""

    vehicle_id: int
    emergency: bool
    direction: Direction
    wait_time: float


@dataclass(frozen=True, slots=True)
class IntersectionStats:
    """Running totals since the controller was created."""

    total_vehicles_processed: int
    total_wait_time: float

    @property
    def average_wait_time(self) -> Optional[float]:
        if not self.total_vehicles_processed:
            return None
        return self.total_wait_time / self.total_vehicles_processed


@dataclass(slots=True)
class CycleReport:
    """Everything an observer needs to display one completed cycle."""

    cycle: int
    queue_status: Tuple[LaneStatus, ...]
    green_direction: Direction
    green_time: int
    emergency_preemption: bool
    previous_green: Optional[Direction] = None
    transitions: List[LightTransition] = field(default_factory=list)
    pedestrian_crossing: bool = False
    vehicles_passed: List[VehiclePassed] = field(default_factory=list)
    stats: IntersectionStats = field(
        default_factory=lambda: IntersectionStats(total_vehicles_processed=0, total_wait_time=0.0)
    )

    @property
    def passed_count(self) -> int:
        return len(self.vehicles_passed)


class IntersectionController:
    """Choose the next green approach and drain its queue, one cycle at a time.

    Every cycle runs the same fixed sequence:

    * Apply the stimulus events collected since the previous cycle.
    * Select the next green approach.  Any lane holding an emergency vehicle
      wins outright; otherwise the highest priority score wins.
    * Hold the outgoing approach yellow for ``yellow_time`` before the new
      approach turns green.
    * Serve a pending pedestrian request on the new approach.
    * Let up to half the adaptive green time worth of vehicles pass.

    Holds are advances of the logical :class:`SimulationClock`, so a cycle never
    blocks on wall-clock time.
    """

    def __init__(
        self,
        signal: Signal | None = None,
        clock: SimulationClock | None = None,
        crossing_time: float = PEDESTRIAN_CROSSING_TIME,
        cycle_interval: float = 0.0,
        initial_density: int = DEFAULT_DENSITY,
    ) -> None:
        self.clock = clock or SimulationClock()
        self.signal = signal or Signal(time_func=self.clock)
        self.signal.time_func = self.clock
        self.crossing_time = crossing_time
        self.cycle_interval = cycle_interval

        self.lanes: Dict[Direction, Lane] = {
            direction: Lane(direction, initial_density) for direction in Direction.ordered()
        }
        self.pedestrian_signals: Dict[Direction, PedestrianSignal] = {
            direction: PedestrianSignal() for direction in Direction.ordered()
        }

        self.vehicle_counter = 0
        self.total_vehicles_processed = 0
        self.total_wait_time = 0.0
        self.cycle_counter = 0

    def lane(self, direction: DirectionLike) -> Lane:
        return self.lanes[Direction.parse(direction)]

    def pedestrian_signal(self, direction: DirectionLike) -> PedestrianSignal:
        return self.pedestrian_signals[Direction.parse(direction)]

    def add_vehicle(self, direction: DirectionLike, emergency: bool = False) -> Vehicle:
        """Create a vehicle with the next identifier and enqueue it."""

        self.vehicle_counter += 1
        vehicle = Vehicle(
            id=self.vehicle_counter,
            emergency=emergency,
            arrival_time=self.clock.now(),
        )
        self.lane(direction).add_vehicle(vehicle)
        return vehicle

    def apply(self, events: StimulusEvents) -> None:
        """Apply one batch of stimulus events before a cycle starts."""

        for direction, density in events.density_changes.items():
            self.lane(direction).set_density(density)
        for arrival in events.arrivals:
            self.add_vehicle(arrival.direction, emergency=arrival.emergency)
        for direction in events.crossing_requests:
            self.pedestrian_signal(direction).request_crossing()

    def queue_status(self) -> Tuple[LaneStatus, ...]:
        now = self.clock.now()
        return tuple(
            LaneStatus(
                direction=direction,
                queue_length=lane.queue_length(),
                average_wait=lane.average_wait_time(now),
                density=lane.density,
                pedestrian_requested=self.pedestrian_signals[direction].is_requested(),
                has_emergency=lane.has_emergency_vehicle(),
            )
            for direction, lane in self.lanes.items()
        )

    def status_by_direction(self) -> Dict[Direction, LaneStatus]:
        return {status.direction: status for status in self.queue_status()}

    def statistics(self) -> IntersectionStats:
        return IntersectionStats(
            total_vehicles_processed=self.total_vehicles_processed,
            total_wait_time=self.total_wait_time,
        )

    def emergency_direction(self) -> Optional[Direction]:
        """Return the first approach, in scan order, holding an emergency vehicle."""

        for direction in Direction.ordered():
            if self.lanes[direction].has_emergency_vehicle():
                return direction
        return None

    def find_next_green_direction(self) -> Direction:
        emergency = self.emergency_direction()
        if emergency is not None:
            logger.info("Emergency vehicle detected on %s", emergency.label)
            return emergency

        now = self.clock.now()
        best_score = -1.0
        best = Direction.NORTH
        for direction in Direction.ordered():
            lane = self.lanes[direction]
            if not lane.has_vehicles():
                continue
            score = lane.priority_score(now)
            # strict comparison keeps the earliest approach on ties
            if score > best_score:
                best_score = score
                best = direction
        return best

    def _switch_to(self, direction: Direction) -> List[LightTransition]:
        transitions: List[LightTransition] = []
        yellow = self.signal.set_yellow()
        if yellow is not None:
            transitions.append(yellow)
            self.clock.advance(self.signal.yellow_time)
        transitions.extend(self.signal.change_light(direction))
        return transitions

    def _serve_pedestrians(self, direction: Direction) -> bool:
        pedestrian = self.pedestrian_signals[direction]
        if not pedestrian.is_requested():
            return False
        pedestrian.grant_crossing()
        logger.debug("Pedestrians walking across %s", direction.label)
        self.clock.advance(self.crossing_time)
        pedestrian.end_crossing()
        return True

    def process_vehicles(self, direction: DirectionLike, green_time: int) -> List[VehiclePassed]:
        """Let vehicles leave ``direction`` until capacity or the queue runs out."""

        lane = self.lane(direction)
        can_pass = green_time // 2
        now = self.clock.now()
        passed: List[VehiclePassed] = []
        while len(passed) < can_pass and lane.has_vehicles():
            vehicle = lane.process_vehicle()
            wait_time = vehicle.waiting_time(now)
            self.total_vehicles_processed += 1
            self.total_wait_time += wait_time
            passed.append(
                VehiclePassed(
                    vehicle_id=vehicle.id,
                    emergency=vehicle.emergency,
                    direction=lane.direction,
                    wait_time=wait_time,
                )
            )
        return passed

    def run_cycle(self, events: StimulusEvents | None = None) -> CycleReport:
        """Run one complete decision cycle and report what happened."""

        self.cycle_counter += 1
        if events is not None:
            self.apply(events)
        queue_status = self.queue_status()

        preempted = self.emergency_direction() is not None
        direction = self.find_next_green_direction()
        previous = self.signal.current_green_direction
        transitions = self._switch_to(direction)
        green_time = self.signal.calculate_adaptive_green_time(self.lanes[direction])
        logger.debug(
            "Cycle %d: green for %s (%ds)", self.cycle_counter, direction.label, green_time
        )

        crossing = self._serve_pedestrians(direction)
        passed = self.process_vehicles(direction, green_time)

        report = CycleReport(
            cycle=self.cycle_counter,
            queue_status=queue_status,
            green_direction=direction,
            green_time=green_time,
            emergency_preemption=preempted,
            previous_green=previous,
            transitions=transitions,
            pedestrian_crossing=crossing,
            vehicles_passed=passed,
            stats=self.statistics(),
        )
        if self.cycle_interval:
            self.clock.advance(self.cycle_interval)
        return report
