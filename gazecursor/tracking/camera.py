from __future__ import annotations

"""
Webcam frame source.

Responsibilities:
- Open a webcam
- Read frames at a fixed target FPS using a monotonic clock
- Close cleanly
"""
import time
from typing import Optional

try:
    import cv2  # type: ignore
except Exception:  # pragma: no cover
    cv2 = None


class Camera:
    def __init__(self, index: int = 0, width: int = 640, height: int = 480, target_fps: int = 30) -> None:
        self.index = int(index)
        self.width = int(width)
        self.height = int(height)
        self.target_fps = max(1, int(target_fps))
        self._frame_interval = 1.0 / float(self.target_fps)
        self._last_time = 0.0
        self.cap = None

    def start(self) -> bool:
        if cv2 is None:
            return False
        cap = cv2.VideoCapture(self.index)
        if not cap or not cap.isOpened():
            return False
        # Best-effort resolution/FPS hints
        try:
            cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
            cap.set(cv2.CAP_PROP_FPS, float(self.target_fps))
        except Exception:
            pass
        self.cap = cap
        self._last_time = time.perf_counter()
        return True

    def read(self) -> tuple[bool, Optional[object]]:
        if self.cap is None:
            return False, None
        now = time.perf_counter()
        remaining = self._frame_interval - (now - self._last_time)
        if remaining > 0:
            time.sleep(remaining)
        self._last_time = time.perf_counter()
        ok, frame = self.cap.read()
        if not ok:
            return False, None
        # Mirror so moving the eyes right moves the cursor right
        return True, cv2.flip(frame, 1)

    def stop(self) -> None:
        if self.cap is not None:
            try:
                self.cap.release()
            finally:
                self.cap = None
