"""Observers that display controller cycles."""

from .base import VisualizationStrategy
from .console import ConsoleVisualization

__all__ = ["ConsoleVisualization", "VisualizationStrategy"]
