"""Predefined, deterministic traffic scenarios."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, Iterator, List, Mapping, Sequence, Tuple

from .base import StimulusEvents, StimulusGenerator, VehicleArrival
from ..model import Direction

if TYPE_CHECKING:  # pragma: no cover - used only for typing
    from ..controller import LaneStatus


@dataclass(frozen=True)
class TrafficScenario:
    """Describes a repeatable sequence of per-cycle events."""

    name: str
    description: str
    cycles: Tuple[StimulusEvents, ...]

    def __post_init__(self) -> None:  # type: ignore[override]
        if not self.cycles:
            raise ValueError("A scenario must contain at least one cycle")
        object.__setattr__(self, "cycles", tuple(self.cycles))

    def __len__(self) -> int:
        return len(self.cycles)

    def steps(self) -> Iterator[StimulusEvents]:
        """Yield the events of each cycle in order."""

        yield from self.cycles


class ScriptedStimulus(StimulusGenerator):
    """Replay a :class:`TrafficScenario`, then report no further events."""

    def __init__(self, scenario: TrafficScenario) -> None:
        self.scenario = scenario
        self._steps = scenario.steps()

    def next_events(self, status: Mapping[Direction, "LaneStatus"]) -> StimulusEvents:
        return next(self._steps, StimulusEvents())


def _cycle(
    arrivals: Sequence[Tuple[str, bool]] = (),
    densities: Dict[str, int] | None = None,
    crossings: Sequence[str] = (),
) -> StimulusEvents:
    return StimulusEvents(
        density_changes=dict(densities or {}),
        arrivals=[VehicleArrival(direction, emergency) for direction, emergency in arrivals],
        crossing_requests=list(crossings),
    )


def load_predefined_scenarios() -> List[TrafficScenario]:
    """Return curated scenarios that cover common intersection situations."""

    rush_hour = TrafficScenario(
        name="rush-hour",
        description=(
            "Heavy north-south commuter flow with a light cross street. The "
            "dense approaches should win most green phases."
        ),
        cycles=(
            _cycle(
                arrivals=[("north", False)] * 4 + [("south", False)] * 3 + [("east", False)],
                densities={"north": 9, "south": 8, "east": 2, "west": 1},
            ),
            _cycle(arrivals=[("north", False), ("south", False), ("south", False)]),
            _cycle(arrivals=[("north", False), ("west", False)], crossings=["east"]),
            _cycle(arrivals=[("south", False), ("north", False)]),
            _cycle(arrivals=[("east", False)]),
        ),
    )

    ambulance = TrafficScenario(
        name="ambulance",
        description=(
            "An emergency vehicle joins the quiet west approach while the north "
            "queue builds up; the west approach must be preempted to green."
        ),
        cycles=(
            _cycle(
                arrivals=[("north", False)] * 5,
                densities={"north": 10},
            ),
            _cycle(arrivals=[("north", False), ("west", True)]),
            _cycle(arrivals=[("north", False)]),
        ),
    )

    pedestrian_peak = TrafficScenario(
        name="pedestrian-peak",
        description=(
            "Steady traffic on every approach with crossing requests on all "
            "sides, exercising the walk phase after each green."
        ),
        cycles=tuple(
            _cycle(
                arrivals=[(direction.value, False) for direction in Direction.ordered()],
                crossings=[direction.value for direction in Direction.ordered()],
            )
            for _ in range(4)
        ),
    )

    return [rush_hour, ambulance, pedestrian_peak]


def find_scenario(name: str) -> TrafficScenario:
    """Return the predefined scenario called ``name``."""

    for scenario in load_predefined_scenarios():
        if scenario.name == name:
            return scenario
    known = ", ".join(scenario.name for scenario in load_predefined_scenarios())
    raise ValueError(f"Unknown scenario {name!r}; choose one of: {known}")
