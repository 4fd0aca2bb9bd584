from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from intersection_control import (
    Direction,
    EmptyQueueError,
    InvalidDirectionError,
    Lane,
    LightState,
    PedestrianSignal,
    PedestrianState,
    Signal,
    SimulationClock,
    Vehicle,
)


def make_lane(waits, now=10.0, direction=Direction.NORTH, density=5, emergency_ids=()):
    lane = Lane(direction, density)
    for idx, wait in enumerate(waits, start=1):
        lane.add_vehicle(Vehicle(id=idx, emergency=idx in emergency_ids, arrival_time=now - wait))
    return lane


def test_direction_parse_accepts_members_names_and_indices():
    assert Direction.parse(Direction.EAST) is Direction.EAST
    assert Direction.parse("south") is Direction.SOUTH
    assert Direction.parse(" West ") is Direction.WEST
    assert Direction.parse(0) is Direction.NORTH
    assert [d.label for d in Direction.ordered()] == ["North", "East", "South", "West"]
    assert Direction.WEST.index == 3


@pytest.mark.parametrize("value", [4, -1, "up", True, 2.0])
def test_direction_parse_rejects_unknown_values(value):
    with pytest.raises(InvalidDirectionError):
        Direction.parse(value)


def test_invalid_direction_is_rejected_at_construction():
    with pytest.raises(ValueError):
        Lane("diagonal")


def test_vehicle_waiting_time_is_derived_from_clock():
    vehicle = Vehicle(id=1, arrival_time=4.0)
    assert vehicle.waiting_time(10.0) == 6.0
    with pytest.raises(AttributeError):
        vehicle.emergency = True  # type: ignore[misc]


def test_lane_is_fifo_and_raises_on_empty_dequeue():
    lane = make_lane([3, 2, 1])

    assert [lane.process_vehicle().id for _ in range(3)] == [1, 2, 3]
    assert not lane.has_vehicles()
    with pytest.raises(EmptyQueueError):
        lane.process_vehicle()


def test_lane_density_is_clamped_on_every_mutation():
    lane = Lane(Direction.EAST, density=42)
    assert lane.density == 10

    lane.set_density(-3)
    assert lane.density == 0
    lane.set_density(7)
    assert lane.density == 7
    lane.set_density(11)
    assert lane.density == 10


def test_lane_inspection_does_not_consume_queue():
    lane = make_lane([4, 10, 2], emergency_ids={3})

    assert lane.average_wait_time(10.0) == pytest.approx(16 / 3)
    assert lane.total_wait_time(10.0) == pytest.approx(16)
    assert lane.has_emergency_vehicle()
    assert lane.queue_length() == 3
    assert [vehicle.id for vehicle in lane] == [1, 2, 3]


def test_empty_lane_has_zero_average_wait_and_no_emergency():
    lane = Lane(Direction.SOUTH)
    assert lane.average_wait_time(100.0) == 0.0
    assert not lane.has_emergency_vehicle()
    assert len(lane) == 0


def test_priority_score_weights_density():
    lane = make_lane([4, 10, 2], density=5)
    assert lane.priority_score(10.0) == pytest.approx(24.0)


def test_adaptive_green_time_formula():
    signal = Signal()
    assert signal.calculate_adaptive_green_time(make_lane([1, 1, 1], density=5)) == 36
    assert signal.calculate_adaptive_green_time(Lane(Direction.NORTH, density=0)) == 20


def test_adaptive_green_time_respects_bounds():
    signal = Signal()
    crowded = make_lane([1] * 40, density=10)
    assert signal.calculate_adaptive_green_time(crowded) == signal.max_green_time

    short = Signal(base_green_time=0)
    assert short.calculate_adaptive_green_time(Lane(Direction.WEST, density=0)) == short.min_green_time


def test_signal_starts_all_red_without_green_direction():
    signal = Signal()
    assert signal.current_green_direction is None
    assert all(state is LightState.RED for state in signal.light_states.values())
    assert signal.set_yellow() is None


def test_signal_keeps_a_single_green():
    clock = SimulationClock()
    signal = Signal(time_func=clock)

    signal.change_light(Direction.NORTH)
    assert signal.green_directions() == [Direction.NORTH]

    yellow = signal.set_yellow()
    assert yellow.state is LightState.YELLOW
    assert signal.light_state("north") is LightState.YELLOW
    assert signal.current_green_direction is Direction.NORTH

    clock.advance(signal.yellow_time)
    transitions = signal.change_light(Direction.SOUTH)

    assert [(t.direction, t.state) for t in transitions] == [
        (Direction.NORTH, LightState.RED),
        (Direction.SOUTH, LightState.GREEN),
    ]
    assert transitions[0].at == signal.yellow_time
    assert signal.green_directions() == [Direction.SOUTH]
    assert signal.light_state(Direction.NORTH) is LightState.RED


def test_pedestrian_signal_cycle():
    pedestrian = PedestrianSignal()
    assert pedestrian.state is PedestrianState.DONT_WALK
    assert not pedestrian.is_requested()

    pedestrian.request_crossing()
    pedestrian.request_crossing()
    assert pedestrian.is_requested()

    pedestrian.grant_crossing()
    assert pedestrian.state is PedestrianState.WALK
    assert not pedestrian.is_requested()

    pedestrian.end_crossing()
    assert pedestrian.state is PedestrianState.DONT_WALK


def test_clock_refuses_to_go_backwards():
    clock = SimulationClock(5.0)
    assert clock() == 5.0
    assert clock.advance(2.5) == 7.5
    with pytest.raises(ValueError):
        clock.advance(-1)
