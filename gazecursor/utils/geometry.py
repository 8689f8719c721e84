"""
Geometry helpers shared by the EAR detector, gaze mapper and smoother.

Two point types keep the coordinate spaces apart:
- FacePoint: normalized camera-frame coordinates (roughly 0..1, origin top-left)
- ScreenPoint: display pixels (origin top-left)

Both unpack as (x, y), so helpers here accept either, or any object that
exposes .x/.y (e.g. a MediaPipe NormalizedLandmark).
"""
from __future__ import annotations

import math
from typing import Any, NamedTuple, Optional, Tuple


class FacePoint(NamedTuple):
    x: float
    y: float


class ScreenPoint(NamedTuple):
    x: float
    y: float


def as_xy(p: Any) -> Tuple[float, float]:
    if hasattr(p, "x") and hasattr(p, "y"):
        return float(p.x), float(p.y)
    return float(p[0]), float(p[1])


def lerp(start: float, end: float, amount: float) -> float:
    """Linear interpolation. amount is not clamped; overshoot is allowed.

    Endpoints and equal inputs are returned exactly, which the float formula
    alone does not guarantee.
    """
    if start == end or amount == 0:
        return start
    if amount == 1:
        return end
    return (1.0 - amount) * start + amount * end


def distance(p1: Optional[Any], p2: Optional[Any]) -> float:
    """Euclidean distance; 0.0 when either point is missing (sentinel, not a measurement)."""
    if p1 is None or p2 is None:
        return 0.0
    x1, y1 = as_xy(p1)
    x2, y2 = as_xy(p2)
    return math.hypot(x2 - x1, y2 - y1)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
