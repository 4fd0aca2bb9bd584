"""Adaptive four-way intersection signal controller."""

from .clock import SimulationClock
from .config import IntersectionConfig
from .controller import CycleReport, IntersectionController, IntersectionStats, LaneStatus, VehiclePassed
from .errors import EmptyQueueError, IntersectionError, InvalidDirectionError
from .lane import Lane
from .model import Direction, LightState, PedestrianState, Vehicle
from .signals import LightTransition, PedestrianSignal, Signal
from .system import TrafficSystem

__all__ = [
    "CycleReport",
    "Direction",
    "EmptyQueueError",
    "IntersectionConfig",
    "IntersectionController",
    "IntersectionError",
    "IntersectionStats",
    "InvalidDirectionError",
    "Lane",
    "LaneStatus",
    "LightState",
    "LightTransition",
    "PedestrianSignal",
    "PedestrianState",
    "Signal",
    "SimulationClock",
    "TrafficSystem",
    "Vehicle",
    "VehiclePassed",
]
