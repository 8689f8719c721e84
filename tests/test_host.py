import numpy as np
import pytest

from gazecursor.tracking.camera import Camera
from gazecursor.tracking.detection import LandmarkDetector
from gazecursor.tracking.tracker import FrameOutcome, GazeTracker, TrackingMode
from gazecursor.tracking.ear import EyeState
from gazecursor.ui.status import calibration_canvas, status_lines
from gazecursor.utils.geometry import ScreenPoint


def test_detector_not_ready_fails_the_frame():
    det = LandmarkDetector()
    with pytest.raises(RuntimeError):
        det.detect(object())
    det.close()
    out = GazeTracker((100, 100)).step(det, frame=None)
    assert not out.ok and isinstance(out.error, RuntimeError)


def test_camera_read_before_start():
    cam = Camera()
    assert cam.read() == (False, None)
    cam.stop()


def test_status_lines_reflect_outcome():
    out = FrameOutcome(ok=True, cursor=ScreenPoint(1, 1), eye_state=EyeState(avg_ear=0.1, is_blinking=True), fps=30)
    texts = [t for t, _ in status_lines(TrackingMode.RUNNING, out)]
    assert texts[0] == "STATE: RUNNING"
    assert "FPS: 30" in texts
    assert "EAR: 0.100" in texts
    assert "BLINK" in texts
    assert "NO FACE" in texts


def test_calibration_canvas_shape():
    canvas = calibration_canvas((320, 200), ScreenPoint(32, 20), 0, 9, 3)
    assert isinstance(canvas, np.ndarray)
    assert canvas.shape == (200, 320, 3)
