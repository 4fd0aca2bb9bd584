"""Visualization strategy abstractions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - used only for typing
    from ..controller import CycleReport


class VisualizationStrategy(ABC):
    """Render the outcome of each controller cycle."""

    @abstractmethod
    def render(self, report: "CycleReport") -> None:
        """Render the intersection using the report of the latest cycle."""

    @abstractmethod
    def close(self) -> None:
        """Dispose of any resources such as windows or surfaces."""
