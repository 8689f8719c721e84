from __future__ import annotations

"""
Command-line runner: webcam -> FaceMesh -> GazeTracker -> OS cursor.

Keys (camera window):
- c: start / restart calibration
- p: pause / resume tracking
- q or Esc: quit
"""

import argparse
import asyncio
import logging
import time
from typing import List, Optional, Tuple

try:
    import cv2  # type: ignore
except Exception:  # pragma: no cover
    cv2 = None

try:
    import pyautogui  # type: ignore
except Exception:  # pragma: no cover
    pyautogui = None  # type: ignore

from gazecursor.calibration.sequence import CalibrationSequence, calibration_targets
from gazecursor.control.cursor import BlinkClicker, CursorController
from gazecursor.core.settings import SettingsManager, TrackerConfig
from gazecursor.tracking.camera import Camera
from gazecursor.tracking.detection import LandmarkDetector
from gazecursor.tracking.readiness import DetectorUnavailableError, RetryPolicy, wait_until_ready
from gazecursor.tracking.tracker import GazeTracker, TrackingMode
from gazecursor.ui.status import calibration_canvas, draw_status

log = logging.getLogger("gazecursor")

CAMERA_WINDOW = "gazecursor"
CALIBRATION_WINDOW = "gazecursor calibration"


def screen_size() -> Tuple[int, int]:
    try:
        if pyautogui:
            w, h = pyautogui.size()
            return int(w), int(h)
    except Exception:
        pass
    return (1920, 1080)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="gazecursor", description="Webcam gaze cursor with blink-to-click.")
    p.add_argument("--settings", help="path to settings JSON (default: gazecursor/settings.json)")
    p.add_argument("--camera", type=int, help="camera index (overrides settings)")
    p.add_argument("--click", action="store_true", help="click on blink")
    p.add_argument("--blink-threshold", type=float, help="EAR below which the eyes count as closed")
    p.add_argument("--alpha", type=float, help="cursor smoothing factor in [0, 1]")
    p.add_argument("--save", action="store_true", help="write the overrides back to the settings file")
    p.add_argument("--no-window", action="store_true", help="do not show the camera preview")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging (per-frame failures)")
    args = p.parse_args(argv)
    if args.alpha is not None and not 0.0 <= args.alpha <= 1.0:
        p.error("--alpha must be within [0, 1]")
    if args.blink_threshold is not None and args.blink_threshold <= 0:
        p.error("--blink-threshold must be positive")
    return args


def apply_overrides(settings: SettingsManager, args: argparse.Namespace) -> None:
    """Copy command-line overrides into settings (in memory; see --save)."""
    if args.camera is not None:
        settings.set_camera_index(args.camera)
    if args.click:
        settings.set_click_enabled(True)
    if args.blink_threshold is not None:
        settings.set_blink_threshold(args.blink_threshold)
    if args.alpha is not None:
        settings.set_smoothing_alpha(args.alpha)


def prepare_detector(detector: LandmarkDetector, config: TrackerConfig) -> None:
    policy = RetryPolicy(attempts=config.readiness_attempts, interval_s=config.readiness_interval_s)
    if not asyncio.run(wait_until_ready(detector.is_ready, policy)):
        raise DetectorUnavailableError(
            f"Face landmark model failed to load after {policy.attempts} attempts. "
            "Ensure mediapipe and opencv-python are installed."
        )


class Runner:
    def __init__(self, settings: SettingsManager, camera_index: int, click: bool, show_window: bool) -> None:
        self.settings = settings
        self.config = settings.tracker_config()
        self.screen = screen_size()
        w, h = settings.camera_resolution()
        self.camera = Camera(index=camera_index, width=w, height=h, target_fps=settings.camera_fps())
        self.detector = LandmarkDetector()
        self.tracker = GazeTracker(self.screen, self.config)
        self.cursor = CursorController()
        self.clicker = BlinkClicker(cooldown_ms=settings.click_cooldown_ms())
        self.click = bool(click)
        self.show_window = bool(show_window)
        self.sequence: Optional[CalibrationSequence] = None

    def begin_calibration(self, now: float) -> None:
        """Reset samples and start the target sequence; the OS cursor stays frozen until it completes."""
        self.screen = screen_size()
        self.tracker.resize(self.screen)
        c = self.config
        self.sequence = CalibrationSequence(
            calibration_targets(c.calibration_points, c.grid_fractions),
            self.screen,
            first_settle_s=c.first_settle_s,
            settle_s=c.settle_s,
            capture_s=c.capture_s,
        )
        self.tracker.start_calibration()
        self.cursor.freeze()
        self.sequence.start(now)

    def calibration_step(self, now: float) -> Optional[CalibrationSequence]:
        """Act on due capture/complete events. Returns the sequence while it is still running."""
        seq = self.sequence
        if seq is None:
            return None
        for ev in seq.tick(now):
            if ev.kind == "capture" and ev.screen_point is not None:
                if not self.tracker.capture_calibration_point(ev.screen_point):
                    print(f"Calibration point {ev.index + 1} skipped: no face detected.")
            elif ev.kind == "complete":
                self.tracker.finalize_calibration()
                print(f"Calibration complete: {len(self.tracker.calibration)} samples.")
        if seq.finished:
            self.sequence = None
            self.cursor.unfreeze()
            return None
        return seq

    def start_calibration(self) -> None:
        self.begin_calibration(time.perf_counter())
        if cv2 is not None:
            cv2.namedWindow(CALIBRATION_WINDOW, cv2.WND_PROP_FULLSCREEN)
            cv2.setWindowProperty(CALIBRATION_WINDOW, cv2.WND_PROP_FULLSCREEN, cv2.WINDOW_FULLSCREEN)

    def _advance_calibration(self, now: float) -> None:
        was_running = self.sequence is not None
        seq = self.calibration_step(now)
        if cv2 is None:
            return
        if seq is None:
            if was_running:
                cv2.destroyWindow(CALIBRATION_WINDOW)
            return
        canvas = calibration_canvas(self.screen, seq.current_target(), seq.index, len(seq.points), seq.countdown(now))
        cv2.imshow(CALIBRATION_WINDOW, canvas)

    def _handle_key(self, key: int) -> bool:
        """Return False to quit."""
        if key in (27, ord("q")):
            return False
        if key == ord("c"):
            self.start_calibration()
        elif key == ord("p"):
            self.tracker.toggle_pause()
        return True

    def run(self) -> int:
        prepare_detector(self.detector, self.config)
        if not self.camera.start():
            print("Failed to open camera.")
            return 1
        try:
            while True:
                ok, frame = self.camera.read()
                if not ok:
                    print("Camera stopped delivering frames.")
                    break
                now = time.perf_counter()
                outcome = self.tracker.step(self.detector, frame, now=now)
                if outcome.error is not None:
                    log.debug("frame dropped: %s", outcome.error)
                self._advance_calibration(now)

                blink_click = self.clicker.check(outcome.eye_state.is_blinking)
                if self.tracker.mode is TrackingMode.RUNNING and self.tracker.is_calibrated:
                    pos = self.tracker.current_cursor_position()
                    self.cursor.move(pos.x, pos.y)
                    if self.click and blink_click:
                        self.cursor.click()

                if cv2 is None:
                    continue
                if self.show_window:
                    draw_status(frame, self.tracker.mode, outcome)
                    cv2.imshow(CAMERA_WINDOW, frame)
                key = cv2.waitKey(1) & 0xFF
                if not self._handle_key(key):
                    break
        except KeyboardInterrupt:
            pass
        finally:
            self.detector.close()
            self.camera.stop()
            if cv2 is not None:
                cv2.destroyAllWindows()
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = SettingsManager(args.settings)
    apply_overrides(settings, args)
    if args.save:
        settings.save()
        print(f"Settings saved to {settings.path}")
    runner = Runner(
        settings,
        camera_index=settings.camera_index(),
        click=settings.click_enabled(),
        show_window=settings.show_camera_window() and not args.no_window,
    )
    print("Press 'c' to calibrate, 'p' to pause/resume, 'q' to quit.")
    try:
        return runner.run()
    except DetectorUnavailableError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
