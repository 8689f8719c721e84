from __future__ import annotations

"""
OpenCV status drawing.

- draw_status(): text lines on the camera preview (mode, FPS, EAR, blink)
- calibration_canvas(): fullscreen frame with the current calibration target

No tracking logic lives here.
"""

from typing import Optional, Tuple

import numpy as np

try:
    import cv2  # type: ignore
except Exception:  # pragma: no cover
    cv2 = None

from gazecursor.tracking.tracker import FrameOutcome, TrackingMode
from gazecursor.utils.geometry import ScreenPoint

WHITE = (255, 255, 255)
GREEN = (0, 200, 0)
AMBER = (0, 190, 255)
RED = (0, 0, 255)
ORANGE = (0, 140, 255)
GREY = (90, 90, 90)


def status_lines(mode: TrackingMode, outcome: FrameOutcome) -> list[tuple[str, tuple[int, int, int]]]:
    mode_color = GREEN if mode is TrackingMode.RUNNING else AMBER
    lines = [
        (f"STATE: {mode.value}", mode_color),
        (f"FPS: {outcome.fps}", WHITE),
        (f"EAR: {outcome.eye_state.avg_ear:.3f}", WHITE),
    ]
    if outcome.eye_state.is_blinking:
        lines.append(("BLINK", RED))
    if not outcome.face_found:
        lines.append(("NO FACE", AMBER))
    return lines


def draw_status(frame, mode: TrackingMode, outcome: FrameOutcome) -> None:
    if cv2 is None or frame is None:
        return
    y = 30
    for text, color in status_lines(mode, outcome):
        cv2.putText(frame, text, (20, y), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2)
        y += 28
    if outcome.eye_state.is_blinking:
        h, w = frame.shape[:2]
        cv2.rectangle(frame, (0, 0), (w - 1, h - 1), RED, 4)


def calibration_canvas(
    screen_size: Tuple[int, int],
    target: Optional[ScreenPoint],
    index: int,
    total: int,
    countdown: int,
):
    w, h = int(screen_size[0]), int(screen_size[1])
    canvas = np.zeros((h, w, 3), dtype=np.uint8)
    canvas[:] = (30, 20, 15)
    if cv2 is None or target is None:
        return canvas
    msg = f"Look at the target and keep your head steady. Point {index + 1} of {total}."
    cv2.putText(canvas, msg, (40, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.9, WHITE, 2)
    cx, cy = int(target.x), int(target.y)
    ring = ORANGE if countdown == 0 else GREY
    cv2.circle(canvas, (cx, cy), 24, ring, 4)
    cv2.circle(canvas, (cx, cy), 5, ORANGE, -1)
    if countdown > 0:
        cv2.putText(canvas, str(countdown), (cx - 10, cy + 60), cv2.FONT_HERSHEY_SIMPLEX, 1.0, ORANGE, 2)
    return canvas
