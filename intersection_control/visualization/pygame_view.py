"""Pygame visualization for the four-way intersection."""

from __future__ import annotations

import logging
from typing import Dict, Tuple

from .base import VisualizationStrategy
from ..controller import CycleReport, LaneStatus
from ..model import Direction, LightState

logger = logging.getLogger(__name__)

try:  # pragma: no cover - optional runtime dependency
    import pygame
except Exception as exc:  # pragma: no cover - degrade gracefully
    pygame = None  # type: ignore[assignment]
    _PYGAME_IMPORT_ERROR = exc
else:  # pragma: no cover - environment dependent
    _PYGAME_IMPORT_ERROR = None

COLOR_BACKGROUND = (25, 28, 33)
COLOR_ROAD = (72, 76, 83)
COLOR_ROAD_EDGE = (54, 58, 63)
COLOR_LANE_MARK = (150, 150, 150)
COLOR_TEXT = (235, 235, 235)
COLOR_VEHICLE = (70, 180, 255)
COLOR_VEHICLE_GLASS = (210, 230, 245)
COLOR_EMERGENCY = (230, 60, 60)
COLOR_LIGHT_HOUSING = (32, 32, 36)
COLOR_LIGHT_OFF = (70, 70, 70)
COLOR_LIGHT_GREEN = (0, 200, 0)
COLOR_LIGHT_RED = (200, 0, 0)
COLOR_LIGHT_YELLOW = (230, 210, 0)
COLOR_WALK = (240, 240, 240)

# Unit vector pointing from the intersection centre out along each approach.
APPROACH_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


class PygameVisualization(VisualizationStrategy):
    """Draw the queues, lights and walk signals after each cycle."""

    def __init__(self, width: int = 800, height: int = 800, frames_per_cycle: int = 30) -> None:
        if pygame is None:  # pragma: no cover - executed when dependency missing
            raise RuntimeError(
                "pygame is required for PygameVisualization but could not be imported"
            ) from _PYGAME_IMPORT_ERROR

        pygame.init()
        self.surface = pygame.display.set_mode((width, height))
        pygame.display.set_caption("Intersection Control")
        self.clock = pygame.time.Clock()
        self.width = width
        self.height = height
        self.frames_per_cycle = frames_per_cycle

        self.road_width = 140
        self.vehicle_length = 34
        self.vehicle_width = 24
        self.vehicle_gap = 8
        self.font_small = pygame.font.Font(None, 18)
        self.font_label = pygame.font.Font(None, 24)

        half = self.road_width // 2
        self.intersection_rect = pygame.Rect(
            self.width // 2 - half, self.height // 2 - half, self.road_width, self.road_width
        )

    def _draw_roads(self) -> None:
        vertical = pygame.Rect(self.intersection_rect.left, 0, self.road_width, self.height)
        horizontal = pygame.Rect(0, self.intersection_rect.top, self.width, self.road_width)
        for rect in (vertical, horizontal):
            pygame.draw.rect(self.surface, COLOR_ROAD_EDGE, rect.inflate(12, 12))
        for rect in (vertical, horizontal):
            pygame.draw.rect(self.surface, COLOR_ROAD, rect)

        cx, cy = self.intersection_rect.center
        dash, gap = 24, 18
        y = 0
        while y < self.height:
            if not self.intersection_rect.top - 12 < y < self.intersection_rect.bottom + 12:
                pygame.draw.line(self.surface, COLOR_LANE_MARK, (cx, y), (cx, y + dash), 2)
            y += dash + gap
        x = 0
        while x < self.width:
            if not self.intersection_rect.left - 12 < x < self.intersection_rect.right + 12:
                pygame.draw.line(self.surface, COLOR_LANE_MARK, (x, cy), (x + dash, cy), 2)
            x += dash + gap

    def _stop_line(self, direction: Direction) -> Tuple[int, int]:
        dx, dy = APPROACH_VECTORS[direction]
        half = self.road_width // 2
        cx, cy = self.intersection_rect.center
        # Vehicles keep to the right-hand lane of their approach.
        offset = self.road_width // 4
        return cx + dx * half - dy * offset, cy + dy * half + dx * offset

    def _draw_queue(self, status: LaneStatus, remaining: int, emergency: bool) -> None:
        dx, dy = APPROACH_VECTORS[status.direction]
        sx, sy = self._stop_line(status.direction)
        step = self.vehicle_length + self.vehicle_gap
        max_visible = (min(self.width, self.height) // 2 - self.road_width // 2) // step
        for slot in range(min(remaining, max_visible)):
            distance = self.vehicle_gap + slot * step + self.vehicle_length // 2
            center = (sx + dx * distance, sy + dy * distance)
            if dx:
                body = pygame.Rect(0, 0, self.vehicle_length, self.vehicle_width)
            else:
                body = pygame.Rect(0, 0, self.vehicle_width, self.vehicle_length)
            body.center = center
            color = COLOR_EMERGENCY if emergency and slot == 0 else COLOR_VEHICLE
            pygame.draw.rect(self.surface, color, body, border_radius=6)
            pygame.draw.rect(self.surface, COLOR_VEHICLE_GLASS, body.inflate(-10, -10), border_radius=4)

        if remaining > max_visible:
            overflow = self.font_small.render(f"+{remaining - max_visible}", True, COLOR_TEXT)
            edge = (sx + dx * (max_visible * step + 20), sy + dy * (max_visible * step + 20))
            self.surface.blit(overflow, overflow.get_rect(center=edge))

    def _draw_light(self, direction: Direction, state: LightState, walk: bool) -> None:
        dx, dy = APPROACH_VECTORS[direction]
        sx, sy = self._stop_line(direction)
        # Housing sits on the kerb to the right of the approaching traffic.
        anchor = (sx - dy * 70 + dx * 30, sy + dx * 70 + dy * 30)
        horizontal = dy != 0
        rect = pygame.Rect(0, 0, 84, 30) if horizontal else pygame.Rect(0, 0, 30, 84)
        rect.center = anchor
        pygame.draw.rect(self.surface, COLOR_LIGHT_HOUSING, rect, border_radius=8)

        radius = 9
        if horizontal:
            positions = [(rect.left + 15, rect.centery), rect.center, (rect.right - 15, rect.centery)]
        else:
            positions = [(rect.centerx, rect.top + 15), rect.center, (rect.centerx, rect.bottom - 15)]
        lights = [
            (LightState.RED, COLOR_LIGHT_RED, positions[0]),
            (LightState.YELLOW, COLOR_LIGHT_YELLOW, positions[1]),
            (LightState.GREEN, COLOR_LIGHT_GREEN, positions[2]),
        ]
        for name, color, center in lights:
            pygame.draw.circle(self.surface, color if state is name else COLOR_LIGHT_OFF, center, radius)

        label = direction.label + (" - WALK" if walk else "")
        label_surface = self.font_label.render(label, True, COLOR_WALK if walk else COLOR_TEXT)
        label_rect = label_surface.get_rect()
        label_rect.midtop = (rect.centerx, rect.bottom + 6)
        self.surface.blit(label_surface, label_rect)

    def _draw_stats(self, report: CycleReport) -> None:
        average = report.stats.average_wait_time
        text_lines = [
            f"Cycle {report.cycle}: green {report.green_direction.label} for {report.green_time}s",
            f"Passed this cycle: {report.passed_count}",
            f"Processed: {report.stats.total_vehicles_processed}"
            + (f"  avg wait: {average:.2f}s" if average is not None else ""),
        ]
        if report.emergency_preemption:
            text_lines.append(f"EMERGENCY preemption on {report.green_direction.label}")
        for idx, text in enumerate(text_lines):
            surface = self.font_small.render(text, True, COLOR_TEXT)
            self.surface.blit(surface, (20, 20 + idx * 22))

    def render(self, report: CycleReport) -> None:
        passed = report.passed_count
        for _ in range(self.frames_per_cycle):
            for event in pygame.event.get():  # pragma: no cover - interactive loop
                if event.type == pygame.QUIT:
                    raise SystemExit

            self.surface.fill(COLOR_BACKGROUND)
            self._draw_roads()
            for status in report.queue_status:
                is_green = status.direction is report.green_direction
                remaining = status.queue_length - passed if is_green else status.queue_length
                self._draw_queue(status, remaining, status.has_emergency and not is_green)
                state = LightState.GREEN if is_green else LightState.RED
                walk = report.pedestrian_crossing and is_green
                self._draw_light(status.direction, state, walk)
            self._draw_stats(report)
            pygame.display.flip()
            self.clock.tick(60)

    def close(self) -> None:
        if pygame is not None:
            pygame.quit()
