"""
Eye openness and blink state from the Eye Aspect Ratio (EAR).

Each eye is described by six contour landmarks in the order
[outer corner, upper lid 1, upper lid 2, inner corner, lower lid 1, lower lid 2]:

    EAR = (|p2 - p6| + |p3 - p5|) / (2 * |p1 - p4|)

Missing or short input and a zero-width eye both yield 1.0 (fully open), so a
bad frame never reads as a blink.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from gazecursor.utils.geometry import distance

OPEN_EAR = 1.0
DEFAULT_BLINK_THRESHOLD = 0.22


@dataclass(frozen=True)
class EyeState:
    ear_left: float = OPEN_EAR
    ear_right: float = OPEN_EAR
    avg_ear: float = OPEN_EAR
    is_blinking: bool = False
    is_left_open: bool = True
    is_right_open: bool = True


def eye_aspect_ratio(points: Optional[Sequence[Any]]) -> float:
    if not points or len(points) < 6:
        return OPEN_EAR
    p1, p2, p3, p4, p5, p6 = points[:6]
    if any(p is None for p in (p1, p2, p3, p4, p5, p6)):
        return OPEN_EAR
    horiz = distance(p1, p4)
    if horiz == 0:
        return OPEN_EAR
    return (distance(p2, p6) + distance(p3, p5)) / (2.0 * horiz)


class EyeStateDetector:
    """Classify both eyes against one threshold.

    Blink is decided on the average EAR, while each eye's open flag is decided
    on its own EAR, so a wink can leave is_blinking False with one eye closed.
    """

    def __init__(self, threshold: float = DEFAULT_BLINK_THRESHOLD) -> None:
        self.threshold = float(threshold)

    def update(self, left_points: Optional[Sequence[Any]], right_points: Optional[Sequence[Any]]) -> EyeState:
        ear_l = eye_aspect_ratio(left_points)
        ear_r = eye_aspect_ratio(right_points)
        avg = (ear_l + ear_r) / 2.0
        return EyeState(
            ear_left=ear_l,
            ear_right=ear_r,
            avg_ear=avg,
            is_blinking=avg < self.threshold,
            is_left_open=ear_l >= self.threshold,
            is_right_open=ear_r >= self.threshold,
        )
