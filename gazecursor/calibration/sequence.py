"""
Guided calibration sequence.

Targets are shown one at a time. Each target first settles (the user moves
their gaze onto it; a countdown is displayed), then holds for the capture
window, after which a capture is requested for that target's screen point.
The first target settles longer than the rest. After the last capture the
sequence reports completion.

The sequence is clock-driven: the host calls tick(now) once per frame and
acts on the returned events. No timers or threads are involved.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from gazecursor.utils.geometry import ScreenPoint

DEFAULT_FRACTIONS = (0.1, 0.5, 0.9)


def calibration_grid(fractions: Sequence[float] = DEFAULT_FRACTIONS) -> List[Tuple[float, float]]:
    """Row-major grid of (fx, fy) screen fractions; 3 fractions give 9 points."""
    if not fractions:
        raise ValueError("grid needs at least one fraction")
    return [(float(fx), float(fy)) for fy in fractions for fx in fractions]


def calibration_targets(
    points: Optional[Sequence[Tuple[float, float]]] = None,
    fractions: Sequence[float] = DEFAULT_FRACTIONS,
) -> List[Tuple[float, float]]:
    """Explicit (fx, fy) targets when given, otherwise the grid from fractions."""
    if points:
        return [(float(fx), float(fy)) for fx, fy in points]
    return calibration_grid(fractions)


@dataclass(frozen=True)
class CalibrationEvent:
    kind: str  # 'capture' | 'complete'
    index: int
    screen_point: Optional[ScreenPoint] = None


class CalibrationSequence:
    def __init__(
        self,
        points: Sequence[Tuple[float, float]],
        screen_size: Tuple[int, int],
        first_settle_s: float = 3.0,
        settle_s: float = 2.0,
        capture_s: float = 1.5,
    ) -> None:
        if not points:
            raise ValueError("calibration needs at least one target")
        self.points = [(float(fx), float(fy)) for fx, fy in points]
        self.screen_size = (int(screen_size[0]), int(screen_size[1]))
        self.first_settle_s = float(first_settle_s)
        self.settle_s = float(settle_s)
        self.capture_s = float(capture_s)
        self.index = -1
        self.finished = False
        self._point_start = 0.0

    # Public API ---------------------------------------------------------
    def start(self, now: float) -> None:
        self.index = 0
        self.finished = False
        self._point_start = float(now)

    @property
    def active(self) -> bool:
        return self.index >= 0 and not self.finished

    def target_at(self, index: int) -> ScreenPoint:
        fx, fy = self.points[index]
        w, h = self.screen_size
        return ScreenPoint(fx * w, fy * h)

    def current_target(self) -> Optional[ScreenPoint]:
        if not self.active:
            return None
        return self.target_at(self.index)

    def settle_time(self, index: int) -> float:
        return self.first_settle_s if index == 0 else self.settle_s

    def countdown(self, now: float) -> int:
        """Whole seconds left in the settle phase; 0 while capturing."""
        if not self.active:
            return 0
        left = self.settle_time(self.index) - (float(now) - self._point_start)
        return max(0, int(math.ceil(left)))

    def capturing(self, now: float) -> bool:
        return self.active and self.countdown(now) == 0

    def tick(self, now: float) -> List[CalibrationEvent]:
        """Advance the sequence to `now`; may emit several events after a long gap."""
        events: List[CalibrationEvent] = []
        now = float(now)
        while self.active:
            due = self._point_start + self.settle_time(self.index) + self.capture_s
            if now < due:
                break
            events.append(CalibrationEvent("capture", self.index, self.target_at(self.index)))
            if self.index < len(self.points) - 1:
                self.index += 1
                self._point_start = due
            else:
                self.finished = True
                events.append(CalibrationEvent("complete", self.index))
        return events
