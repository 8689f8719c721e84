"""
FaceMesh landmark indices and extraction helpers.

A face is an index-addressable sequence of landmarks (MediaPipe
NormalizedLandmark or plain (x, y) pairs) in normalized image coordinates.
With refine_landmarks=True FaceMesh yields 478 points; 468 and 473 are the
iris centers.
"""
from __future__ import annotations

from typing import Any, List, Optional, Sequence

from gazecursor.utils.geometry import FacePoint, as_xy

LEFT_EYE_IDX = [33, 160, 158, 133, 153, 144]
RIGHT_EYE_IDX = [362, 385, 387, 263, 373, 380]
LEFT_IRIS_CENTER_IDX = 468
RIGHT_IRIS_CENTER_IDX = 473


def landmark_at(face: Sequence[Any], idx: int) -> Optional[Any]:
    try:
        return face[idx]
    except (IndexError, KeyError, TypeError):
        return None


def eye_points(face: Sequence[Any], indices: Sequence[int]) -> List[Optional[Any]]:
    return [landmark_at(face, i) for i in indices]


def face_point(face: Sequence[Any]) -> Optional[FacePoint]:
    """Midpoint of both iris centers, or None if either is missing."""
    left = landmark_at(face, LEFT_IRIS_CENTER_IDX)
    right = landmark_at(face, RIGHT_IRIS_CENTER_IDX)
    if left is None or right is None:
        return None
    lx, ly = as_xy(left)
    rx, ry = as_xy(right)
    return FacePoint((lx + rx) / 2.0, (ly + ry) / 2.0)
