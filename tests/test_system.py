from pathlib import Path
import io
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

try:  # pragma: no cover - optional test dependency
    import pygame
except ImportError:  # pragma: no cover - gracefully handle headless environments
    pygame = None

import main as cli
from intersection_control import (
    Direction,
    IntersectionConfig,
    IntersectionController,
    LightState,
    SimulationClock,
    TrafficSystem,
)
from intersection_control.stimulus import (
    RandomStimulus,
    ScriptedStimulus,
    StimulusEvents,
    TrafficScenario,
    VehicleArrival,
    find_scenario,
    load_predefined_scenarios,
)
from intersection_control.visualization import ConsoleVisualization, VisualizationStrategy


class RecordingObserver(VisualizationStrategy):
    def __init__(self, system=None) -> None:
        self.reports = []
        self.greens = []
        self.densities = []
        self.closed = False
        self.system = system

    def render(self, report) -> None:
        self.reports.append(report)
        if self.system is not None:
            controller = self.system.controller
            self.greens.append(controller.signal.green_directions())
            self.densities.extend(lane.density for lane in controller.lanes.values())

    def close(self) -> None:
        self.closed = True


def test_random_stimulus_is_reproducible_with_seed():
    status = IntersectionController().status_by_direction()
    first = RandomStimulus(seed=7)
    second = RandomStimulus(seed=7)

    assert [first.next_events(status) for _ in range(10)] == [
        second.next_events(status) for _ in range(10)
    ]


def test_random_stimulus_stays_within_bounds():
    stimulus = RandomStimulus(seed=1)
    status = IntersectionController().status_by_direction()

    for _ in range(200):
        events = stimulus.next_events(status)
        assert all(0 <= value <= 10 for value in events.density_changes.values())
        # at most one arrival per lane and cycle
        directions = [arrival.direction for arrival in events.arrivals]
        assert len(directions) == len(set(directions))


def test_stimulus_events_normalise_directions():
    events = StimulusEvents(density_changes={"east": 3}, crossing_requests=["west", 0])

    assert events.density_changes == {Direction.EAST: 3}
    assert events.crossing_requests == [Direction.WEST, Direction.NORTH]
    assert not events.is_empty()
    assert StimulusEvents().is_empty()


def test_scenario_validation_and_iteration():
    scenarios = load_predefined_scenarios()
    assert len(scenarios) >= 2
    assert all(isinstance(s, TrafficScenario) for s in scenarios)
    assert all(isinstance(events, StimulusEvents) for events in scenarios[0].steps())

    with pytest.raises(ValueError):
        TrafficScenario(name="invalid", description="nothing", cycles=())
    with pytest.raises(ValueError):
        find_scenario("gridlock")


def test_scripted_stimulus_runs_out_of_events():
    scenario = TrafficScenario(
        name="single",
        description="one arrival",
        cycles=(StimulusEvents(arrivals=[VehicleArrival("east")]),),
    )
    stimulus = ScriptedStimulus(scenario)

    assert len(stimulus.next_events({}).arrivals) == 1
    assert stimulus.next_events({}).is_empty()


def test_ambulance_scenario_preempts_west():
    config = IntersectionConfig(cycles=3, scenario="ambulance")
    observer = RecordingObserver()
    system = TrafficSystem(config, observers=[observer])

    system.run()

    second = observer.reports[1]
    assert second.emergency_preemption
    assert second.green_direction is Direction.WEST
    assert [p.emergency for p in second.vehicles_passed] == [True]
    assert observer.reports[2].green_direction is Direction.NORTH
    assert observer.closed


def test_random_run_keeps_invariants():
    config = IntersectionConfig(cycles=40, seed=11)
    observer = RecordingObserver()
    system = TrafficSystem(config, observers=[observer])
    observer.system = system

    system.run()

    assert len(observer.reports) == 40
    assert all(len(greens) == 1 for greens in observer.greens)
    assert all(0 <= density <= 10 for density in observer.densities)
    for report in observer.reports:
        assert 10 <= report.green_time <= 60
        assert report.passed_count <= report.green_time // 2
        yellows = [t for t in report.transitions if t.state is LightState.YELLOW]
        reds = [t for t in report.transitions if t.state is LightState.RED]
        for yellow, red in zip(yellows, reds):
            assert red.direction is yellow.direction
            assert red.at - yellow.at == config.yellow_time

    processed = sum(report.passed_count for report in observer.reports)
    assert observer.reports[-1].stats.total_vehicles_processed == processed


def test_emergency_in_queue_always_wins_selection():
    config = IntersectionConfig(cycles=60, seed=5)
    system = TrafficSystem(config, observers=[])

    for _ in range(config.cycles):
        report = system.step()
        flagged = [s.direction for s in report.queue_status if s.has_emergency]
        if flagged:
            assert report.green_direction is flagged[0]
        else:
            assert not report.emergency_preemption


def test_cycle_delay_uses_injected_sleep():
    sleeps = []
    config = IntersectionConfig(cycles=3, seed=2, cycle_delay=0.25)
    system = TrafficSystem(config, observers=[], sleep_func=sleeps.append)

    system.run()

    assert sleeps == [0.25, 0.25, 0.25]
    assert system.controller.cycle_counter == 3


def test_keyboard_interrupt_stops_run_and_closes_observers():
    class InterruptingObserver(RecordingObserver):
        def render(self, report) -> None:
            super().render(report)
            if len(self.reports) == 2:
                raise KeyboardInterrupt

    observer = InterruptingObserver()
    system = TrafficSystem(IntersectionConfig(cycles=10, seed=3), observers=[observer])

    last = system.run()

    assert last is not None and last.cycle == 1
    assert system.controller.cycle_counter == 2
    assert observer.closed


@pytest.mark.parametrize(
    "overrides",
    [
        {"cycles": 0},
        {"min_green_time": 70},
        {"yellow_time": -1},
        {"initial_density": 11},
        {"mode": "hologram"},
    ],
)
def test_config_validation_rejects_inconsistent_settings(overrides):
    config = IntersectionConfig(**overrides)
    with pytest.raises(ValueError):
        config.validate()


def test_console_visualization_formats_cycle():
    controller = IntersectionController(clock=SimulationClock(10.0))
    controller.apply(
        StimulusEvents(
            arrivals=[VehicleArrival("north"), VehicleArrival("north", emergency=True)],
            crossing_requests=["north"],
        )
    )
    stream = io.StringIO()
    view = ConsoleVisualization(stream)

    view.render(controller.run_cycle())
    output = stream.getvalue()

    assert "=== Traffic Cycle #1 ===" in output
    assert "North: 2 vehicles, Avg Wait: 0.0s, Density: 5, Ped Request: Yes" in output
    assert "Emergency vehicle detected on North!" in output
    assert "Green light for North (34s)" in output
    assert "Pedestrians WALK on North" in output
    assert "Vehicle #2 (EMERGENCY) passed from North after waiting 3s" in output
    assert "Total Vehicles Processed: 2" in output
    assert "Average Wait Time: 3.00s" in output


def test_console_visualization_omits_average_before_traffic():
    stream = io.StringIO()
    ConsoleVisualization(stream).render(IntersectionController().run_cycle())

    assert "Total vehicles passed: 0" in stream.getvalue()
    assert "Average Wait Time" not in stream.getvalue()


def test_cli_runs_requested_cycles(capsys):
    assert cli.main(["--cycles", "2", "--seed", "4"]) == 0

    output = capsys.readouterr().out
    assert "=== Traffic Cycle #2 ===" in output
    assert "=== Traffic Cycle #3 ===" not in output


def test_cli_rejects_invalid_configuration():
    assert cli.main(["--min-green", "70", "--max-green", "60"]) == 2


@pytest.mark.skipif(pygame is None, reason="pygame visualization requires pygame")
def test_pygame_visualization_renders_headless(monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    from intersection_control.visualization.pygame_view import PygameVisualization

    controller = IntersectionController(clock=SimulationClock(5.0))
    controller.apply(StimulusEvents(arrivals=[VehicleArrival("east")] * 3))
    view = PygameVisualization(width=400, height=400, frames_per_cycle=1)
    try:
        view.render(controller.run_cycle())
    finally:
        view.close()
