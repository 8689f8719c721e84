from __future__ import annotations

"""
Face landmark detection via MediaPipe FaceMesh.

Responsibilities:
- Build the FaceMesh model (single face, refined iris landmarks)
- Convert BGR frames to RGB and run the model
- Return a list of faces, each a list of NormalizedLandmark (x, y in 0..1)

No gaze mapping, blink logic, or smoothing here.
"""
from typing import Any, List

try:
    import cv2  # type: ignore
except Exception:  # pragma: no cover
    cv2 = None  # type: ignore

try:
    import mediapipe as mp  # type: ignore
except Exception:  # pragma: no cover
    mp = None  # type: ignore


class LandmarkDetector:
    def __init__(self, min_detection_confidence: float = 0.5, min_tracking_confidence: float = 0.5) -> None:
        self.min_detection_confidence = float(min_detection_confidence)
        self.min_tracking_confidence = float(min_tracking_confidence)
        self._mesh = None

    def is_ready(self) -> bool:
        """Build the model on first call; True once it exists."""
        if self._mesh is not None:
            return True
        if mp is None or cv2 is None:
            return False
        self._mesh = mp.solutions.face_mesh.FaceMesh(
            max_num_faces=1,
            refine_landmarks=True,
            min_detection_confidence=self.min_detection_confidence,
            min_tracking_confidence=self.min_tracking_confidence,
        )
        return True

    def close(self) -> None:
        try:
            if self._mesh is not None:
                self._mesh.close()  # type: ignore[attr-defined]
        finally:
            self._mesh = None

    def detect(self, frame) -> List[List[Any]]:
        """Return detected faces for a BGR frame; empty list when none."""
        if self._mesh is None:
            raise RuntimeError("landmark detector is not ready")
        if frame is None:
            return []
        rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        res = self._mesh.process(rgb)
        if not res or not res.multi_face_landmarks:
            return []
        return [list(face.landmark) for face in res.multi_face_landmarks]
