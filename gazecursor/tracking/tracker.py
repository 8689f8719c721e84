from __future__ import annotations

"""
Gaze tracker: per-frame pipeline and calibration control.

Order per frame:
1) Frame rate from the time since the previous frame
2) First detected face only; face point = midpoint of both iris centers
3) Eye state (EAR) for both eyes
4) In RUNNING mode with enough calibration samples: map, then smooth

Every tracker owns its state (no module globals), so several trackers can run
side by side and tests can replay frames deterministically.
"""

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence, Tuple

from gazecursor.calibration.store import CalibrationStore
from gazecursor.core.settings import TrackerConfig
from gazecursor.tracking import landmarks
from gazecursor.tracking.ear import EyeState, EyeStateDetector
from gazecursor.tracking.mapping import GazeMapper
from gazecursor.tracking.smoothing import CursorSmoother
from gazecursor.utils.geometry import FacePoint, ScreenPoint

log = logging.getLogger(__name__)


class TrackingMode(Enum):
    IDLE = "IDLE"
    CALIBRATING = "CALIBRATING"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"


@dataclass
class TrackerState:
    cursor: ScreenPoint
    mode: TrackingMode = TrackingMode.IDLE
    face_point: Optional[FacePoint] = None
    eye_state: EyeState = field(default_factory=EyeState)
    last_frame_time: Optional[float] = None
    fps: int = 0


@dataclass
class FrameOutcome:
    ok: bool
    cursor: ScreenPoint
    eye_state: EyeState
    fps: int = 0
    face_found: bool = False
    face_point: Optional[FacePoint] = None
    raw_cursor: Optional[ScreenPoint] = None
    error: Optional[BaseException] = None
    dropped: bool = False


class GazeTracker:
    def __init__(self, screen_size: Tuple[int, int], config: Optional[TrackerConfig] = None) -> None:
        self.config = config or TrackerConfig()
        self.calibration = CalibrationStore()
        self.mapper = GazeMapper(screen_size, min_samples=self.config.min_calibration_samples)
        self.eyes = EyeStateDetector(threshold=self.config.blink_threshold)
        self.smoother = CursorSmoother(self.mapper.center(), alpha=self.config.smoothing_alpha)
        self.state = TrackerState(cursor=self.smoother.position)
        self._busy = threading.Lock()

    # Properties ----------------------------------------------------------
    @property
    def mode(self) -> TrackingMode:
        return self.state.mode

    @property
    def eye_state(self) -> EyeState:
        return self.state.eye_state

    @property
    def is_calibrated(self) -> bool:
        return self.calibration.is_sufficient(self.mapper.min_samples)

    def current_cursor_position(self) -> ScreenPoint:
        return self.state.cursor

    def resize(self, screen_size: Tuple[int, int]) -> None:
        self.mapper.resize(screen_size)

    # Calibration ---------------------------------------------------------
    def start_calibration(self) -> None:
        self.calibration.reset()
        self.state.mode = TrackingMode.CALIBRATING

    def capture_calibration_point(self, screen_point: Tuple[float, float]) -> bool:
        """Pair screen_point with the latest face point. False if no face seen yet."""
        fp = self.state.face_point
        if fp is None:
            log.debug("calibration capture skipped at %s: no face point", tuple(screen_point))
            return False
        self.calibration.capture(screen_point, fp)
        return True

    def finalize_calibration(self) -> None:
        if not self.is_calibrated:
            log.warning(
                "calibration finished with %d samples (need %d); cursor stays at center",
                len(self.calibration), self.mapper.min_samples,
            )
        self.state.mode = TrackingMode.RUNNING

    # Pause / resume --------------------------------------------------------
    def pause(self) -> None:
        if self.state.mode is TrackingMode.RUNNING:
            self.state.mode = TrackingMode.PAUSED

    def resume(self) -> None:
        if self.state.mode is TrackingMode.PAUSED:
            self.state.mode = TrackingMode.RUNNING

    def toggle_pause(self) -> None:
        if self.state.mode is TrackingMode.RUNNING:
            self.pause()
        else:
            self.resume()

    # Frame processing ------------------------------------------------------
    def process_frame(self, faces: Optional[Sequence[Sequence[Any]]], now: Optional[float] = None) -> FrameOutcome:
        """Process one detection result (list of faces, each a landmark list)."""
        return self._run(lambda: faces, now)

    def step(self, detector: Any, frame: Any, now: Optional[float] = None) -> FrameOutcome:
        """Run detector.detect(frame) and process it; detection errors land in the outcome."""
        return self._run(lambda: detector.detect(frame), now)

    def _run(self, get_faces, now: Optional[float]) -> FrameOutcome:
        if not self._busy.acquire(blocking=False):
            return self._outcome(ok=False, dropped=True)
        try:
            return self._process(get_faces(), time.perf_counter() if now is None else float(now))
        except Exception as e:
            log.debug("frame failed: %r", e)
            return self._outcome(ok=False, error=e)
        finally:
            self._busy.release()

    def _process(self, faces: Optional[Sequence[Sequence[Any]]], now: float) -> FrameOutcome:
        st = self.state
        if st.last_frame_time is not None and now > st.last_frame_time:
            st.fps = int(round(1.0 / (now - st.last_frame_time)))
        st.last_frame_time = now

        if not faces:
            return self._outcome(ok=True)

        face = faces[0]
        fp = landmarks.face_point(face)
        eye_state = self.eyes.update(
            landmarks.eye_points(face, landmarks.LEFT_EYE_IDX),
            landmarks.eye_points(face, landmarks.RIGHT_EYE_IDX),
        )
        if fp is not None:
            st.face_point = fp
        st.eye_state = eye_state

        raw = None
        if st.mode is TrackingMode.RUNNING and self.is_calibrated and st.face_point is not None:
            raw = self.mapper.map(st.face_point, self.calibration.samples())
            st.cursor = self.smoother.update(raw)
        return self._outcome(ok=True, face_found=True, raw_cursor=raw)

    def _outcome(self, **kw) -> FrameOutcome:
        st = self.state
        return FrameOutcome(
            cursor=st.cursor,
            eye_state=st.eye_state,
            fps=st.fps,
            face_point=st.face_point,
            **kw,
        )
