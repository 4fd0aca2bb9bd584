"""Traffic stimulus generators."""

from .base import StimulusEvents, StimulusGenerator, VehicleArrival
from .randomized import RandomStimulus
from .scripted import ScriptedStimulus, TrafficScenario, find_scenario, load_predefined_scenarios

__all__ = [
    "RandomStimulus",
    "ScriptedStimulus",
    "StimulusEvents",
    "StimulusGenerator",
    "TrafficScenario",
    "VehicleArrival",
    "find_scenario",
    "load_predefined_scenarios",
]
