from __future__ import annotations

"""
Gaze mapping from normalized face space to screen pixels.

GazeMapper normalizes the current face point against the bounding box of the
calibration face points, per axis, clamps to [0, 1] and scales to the screen.
Outside the calibrated range the output saturates at the screen edges.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from gazecursor.calibration.store import CalibrationSample
from gazecursor.utils.geometry import FacePoint, ScreenPoint, clamp

RANGE_EPSILON = 1e-4


@dataclass(frozen=True)
class ScreenSpec:
    width: int
    height: int


class GazeMapper:
    """
    Map a FacePoint to a ScreenPoint using calibration extremes.

    Notes:
    - Fewer than min_samples samples, or no face point, maps to screen center.
    - A zero range on an axis is replaced by epsilon; the result stays finite.
    - Bounds are recomputed from the samples on every call.
    """

    def __init__(self, screen_size: Tuple[int, int], min_samples: int = 4, epsilon: float = RANGE_EPSILON) -> None:
        if int(min_samples) < 1:
            raise ValueError("min_samples must be at least 1")
        if epsilon <= 0:
            raise ValueError("epsilon must be positive")
        self.min_samples = int(min_samples)
        self.epsilon = float(epsilon)
        self.resize(screen_size)

    def resize(self, screen_size: Tuple[int, int]) -> None:
        w, h = int(screen_size[0]), int(screen_size[1])
        if w <= 0 or h <= 0:
            raise ValueError("screen dimensions must be positive")
        self.spec = ScreenSpec(w, h)

    def center(self) -> ScreenPoint:
        return ScreenPoint(self.spec.width / 2.0, self.spec.height / 2.0)

    def bounds(self, samples: Sequence[CalibrationSample]) -> Tuple[float, float, float, float]:
        """Return (min_x, max_x, min_y, max_y) over the samples' face points."""
        pts = np.array([(s.face_point.x, s.face_point.y) for s in samples], dtype=np.float64)
        mins = pts.min(axis=0)
        maxs = pts.max(axis=0)
        return float(mins[0]), float(maxs[0]), float(mins[1]), float(maxs[1])

    def map(self, face_point: Optional[FacePoint], samples: Sequence[CalibrationSample]) -> ScreenPoint:
        if face_point is None or len(samples) < self.min_samples:
            return self.center()
        min_x, max_x, min_y, max_y = self.bounds(samples)
        range_x = (max_x - min_x) or self.epsilon
        range_y = (max_y - min_y) or self.epsilon
        nx = clamp((float(face_point[0]) - min_x) / range_x, 0.0, 1.0)
        ny = clamp((float(face_point[1]) - min_y) / range_y, 0.0, 1.0)
        return ScreenPoint(nx * self.spec.width, ny * self.spec.height)
