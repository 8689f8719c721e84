from __future__ import annotations

"""
In-memory calibration samples.

Each sample pairs the on-screen target the user was looking at with the face
point observed at that moment. Samples are kept in capture order with no
deduplication; spacing them across the screen is the sequencer's job.
"""

from dataclasses import dataclass
from typing import List, Tuple

from gazecursor.utils.geometry import FacePoint, ScreenPoint


@dataclass(frozen=True)
class CalibrationSample:
    screen_point: ScreenPoint
    face_point: FacePoint


class CalibrationStore:
    def __init__(self) -> None:
        self._samples: List[CalibrationSample] = []

    def reset(self) -> None:
        self._samples.clear()

    def capture(self, screen_point: Tuple[float, float], face_point: Tuple[float, float]) -> CalibrationSample:
        sample = CalibrationSample(
            screen_point=ScreenPoint(float(screen_point[0]), float(screen_point[1])),
            face_point=FacePoint(float(face_point[0]), float(face_point[1])),
        )
        self._samples.append(sample)
        return sample

    def samples(self) -> Tuple[CalibrationSample, ...]:
        return tuple(self._samples)

    def is_sufficient(self, min_samples: int) -> bool:
        return len(self._samples) >= int(min_samples)

    def __len__(self) -> int:
        return len(self._samples)
