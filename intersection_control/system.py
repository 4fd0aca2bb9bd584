"""High level orchestration of the intersection simulation."""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional, Sequence

from .config import IntersectionConfig
from .controller import CycleReport, IntersectionController
from .signals import Signal
from .stimulus import RandomStimulus, ScriptedStimulus, StimulusGenerator, find_scenario
from .visualization.base import VisualizationStrategy
from .visualization.console import ConsoleVisualization

logger = logging.getLogger(__name__)


def build_visualization(config: IntersectionConfig) -> VisualizationStrategy:
    if config.mode == "pygame":
        from .visualization.pygame_view import PygameVisualization

        return PygameVisualization()
    return ConsoleVisualization()


def build_stimulus(config: IntersectionConfig) -> StimulusGenerator:
    if config.scenario is not None:
        return ScriptedStimulus(find_scenario(config.scenario))
    return RandomStimulus(seed=config.seed)


class TrafficSystem:
    """Main entry point driving the controller for a fixed number of cycles.

    Each cycle asks the stimulus generator for new events, hands them to the
    controller and passes the resulting report to every observer.
    """

    def __init__(
        self,
        config: IntersectionConfig,
        stimulus: Optional[StimulusGenerator] = None,
        observers: Optional[Sequence[VisualizationStrategy]] = None,
        sleep_func: Callable[[float], None] | None = None,
    ) -> None:
        config.validate()
        self.config = config
        self.controller = IntersectionController(
            signal=Signal(
                base_green_time=config.base_green_time,
                yellow_time=config.yellow_time,
                min_green_time=config.min_green_time,
                max_green_time=config.max_green_time,
            ),
            crossing_time=config.crossing_time,
            cycle_interval=config.cycle_interval,
            initial_density=config.initial_density,
        )
        self.stimulus = stimulus or build_stimulus(config)
        if observers is None:
            observers = [build_visualization(config)]
        self.observers: List[VisualizationStrategy] = list(observers)
        self.sleep_func = sleep_func or time.sleep

    def step(self) -> CycleReport:
        """Run a single cycle and notify the observers."""

        events = self.stimulus.next_events(self.controller.status_by_direction())
        report = self.controller.run_cycle(events)
        for observer in self.observers:
            observer.render(report)
        return report

    def run(self) -> Optional[CycleReport]:
        """Run the configured number of cycles and return the last report."""

        logger.info("Starting intersection simulation for %d cycles", self.config.cycles)
        last: Optional[CycleReport] = None
        try:
            for _ in range(self.config.cycles):
                last = self.step()
                if self.config.cycle_delay:
                    self.sleep_func(self.config.cycle_delay)
        except KeyboardInterrupt:
            logger.info("Intersection simulation interrupted by user")
        finally:
            for observer in self.observers:
                observer.close()

        stats = self.controller.statistics()
        logger.info(
            "Finished after %d cycles, %d vehicles processed",
            self.controller.cycle_counter,
            stats.total_vehicles_processed,
        )
        return last
