"""Plain text visualization written to a stream."""

from __future__ import annotations

import sys
from typing import List, Optional, TextIO

from .base import VisualizationStrategy
from ..controller import CycleReport
from ..model import LightState


class ConsoleVisualization(VisualizationStrategy):
    """Print queue status, light changes and statistics for every cycle."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self.stream = stream or sys.stdout

    def format(self, report: CycleReport) -> str:
        lines: List[str] = ["", f"=== Traffic Cycle #{report.cycle} ===", "", "--- Queue Status ---"]
        for status in report.queue_status:
            lines.append(
                f"{status.direction.label}: {status.queue_length} vehicles, "
                f"Avg Wait: {status.average_wait:.1f}s, Density: {status.density}, "
                f"Ped Request: {'Yes' if status.pedestrian_requested else 'No'}"
            )

        if report.emergency_preemption:
            lines.append(f"Emergency vehicle detected on {report.green_direction.label}!")
        for transition in report.transitions:
            if transition.state is LightState.YELLOW:
                lines.append(f"Yellow light for {transition.direction.label}")
        lines.append(f"Green light for {report.green_direction.label} ({report.green_time}s)")
        if report.pedestrian_crossing:
            lines.append(f"Pedestrians WALK on {report.green_direction.label}")

        for passed in report.vehicles_passed:
            tag = " (EMERGENCY)" if passed.emergency else ""
            lines.append(
                f"Vehicle #{passed.vehicle_id}{tag} passed from {passed.direction.label} "
                f"after waiting {passed.wait_time:g}s"
            )
        lines.append(f"Total vehicles passed: {report.passed_count}")

        lines.extend(["", "--- Statistics ---"])
        lines.append(f"Total Vehicles Processed: {report.stats.total_vehicles_processed}")
        average = report.stats.average_wait_time
        if average is not None:
            lines.append(f"Average Wait Time: {average:.2f}s")
        return "\n".join(lines)

    def render(self, report: CycleReport) -> None:
        print(self.format(report), file=self.stream)

    def close(self) -> None:
        self.stream.flush()
