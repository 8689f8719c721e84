from __future__ import annotations

from typing import Tuple

from gazecursor.utils.geometry import ScreenPoint, lerp

DEFAULT_ALPHA = 0.15


class CursorSmoother:
    """Exponential smoothing of screen positions.

    Each update moves alpha of the way from the previous output toward the raw
    point, per axis. The output depends on the order of updates.
    """

    def __init__(self, start: Tuple[float, float], alpha: float = DEFAULT_ALPHA) -> None:
        if not (0.0 <= float(alpha) <= 1.0):
            raise ValueError("alpha must be in [0, 1]")
        self.alpha = float(alpha)
        self._state = ScreenPoint(float(start[0]), float(start[1]))

    @property
    def position(self) -> ScreenPoint:
        return self._state

    def reset(self, point: Tuple[float, float]) -> None:
        self._state = ScreenPoint(float(point[0]), float(point[1]))

    def update(self, raw: Tuple[float, float]) -> ScreenPoint:
        x = lerp(self._state.x, float(raw[0]), self.alpha)
        y = lerp(self._state.y, float(raw[1]), self.alpha)
        self._state = ScreenPoint(x, y)
        return self._state
