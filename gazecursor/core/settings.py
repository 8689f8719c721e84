"""
Settings manager for gazecursor.

Loads/saves JSON settings from gazecursor/settings.json (or the path in
GAZECURSOR_SETTINGS) and builds the TrackerConfig used by the core.
"""
from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

DEFAULTS: Dict[str, Any] = {
    "camera_index": 0,
    "camera": {
        "resolution": [640, 480],
        "fps": 30,
        "show_window": True,
    },
    "blink": {"threshold": 0.22},
    "smoothing": {"alpha": 0.15},
    "calibration": {
        "min_samples": 4,
        "grid_fractions": [0.1, 0.5, 0.9],
        "points": None,
        "first_settle_s": 3.0,
        "settle_s": 2.0,
        "capture_s": 1.5,
    },
    "readiness": {"attempts": 20, "interval_s": 0.5},
    "click": {"enabled": False, "cooldown_ms": 400},
}


@dataclass(frozen=True)
class TrackerConfig:
    blink_threshold: float = 0.22
    smoothing_alpha: float = 0.15
    min_calibration_samples: int = 4
    grid_fractions: Tuple[float, ...] = (0.1, 0.5, 0.9)
    calibration_points: Optional[Tuple[Tuple[float, float], ...]] = None
    first_settle_s: float = 3.0
    settle_s: float = 2.0
    capture_s: float = 1.5
    readiness_attempts: int = 20
    readiness_interval_s: float = 0.5


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


class SettingsManager:
    def __init__(self, path: Optional[str] = None) -> None:
        if path is None:
            path = os.environ.get("GAZECURSOR_SETTINGS") or None
        if path is None:
            here = os.path.dirname(os.path.abspath(__file__))
            path = os.path.join(os.path.dirname(here), "settings.json")
        self.path = path
        self.data: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        if not os.path.exists(self.path):
            self.data = copy.deepcopy(DEFAULTS)
            return
        with open(self.path, "r", encoding="utf-8") as f:
            self.data = _merge(DEFAULTS, json.load(f))

    def save(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self.data, f, indent=2)

    # Convenience accessors -------------------------------------------------
    def camera_index(self) -> int:
        return int(self.data.get("camera_index", 0))

    def set_camera_index(self, idx: int) -> None:
        self.data["camera_index"] = int(idx)

    def camera_resolution(self) -> Tuple[int, int]:
        arr = self.data.get("camera", {}).get("resolution", [640, 480])
        try:
            return int(arr[0]), int(arr[1])
        except Exception:
            return 640, 480

    def camera_fps(self) -> int:
        return int(self.data.get("camera", {}).get("fps", 30))

    def show_camera_window(self) -> bool:
        return bool(self.data.get("camera", {}).get("show_window", True))

    def blink_threshold(self) -> float:
        return float(self.data.get("blink", {}).get("threshold", 0.22))

    def set_blink_threshold(self, t: float) -> None:
        self.data.setdefault("blink", {})["threshold"] = float(t)

    def smoothing_alpha(self) -> float:
        return float(self.data.get("smoothing", {}).get("alpha", 0.15))

    def set_smoothing_alpha(self, a: float) -> None:
        self.data.setdefault("smoothing", {})["alpha"] = float(a)

    def min_calibration_samples(self) -> int:
        return int(self.data.get("calibration", {}).get("min_samples", 4))

    def grid_fractions(self) -> Tuple[float, ...]:
        arr = self.data.get("calibration", {}).get("grid_fractions", [0.1, 0.5, 0.9])
        return tuple(float(v) for v in arr)

    def calibration_points(self) -> Optional[Tuple[Tuple[float, float], ...]]:
        """Explicit [fx, fy] targets, or None to use the grid. Malformed lists give None."""
        arr = self.data.get("calibration", {}).get("points")
        if not arr:
            return None
        try:
            if any(len(p) != 2 for p in arr):
                return None
            return tuple((float(p[0]), float(p[1])) for p in arr)
        except Exception:
            return None

    def calibration_timing(self) -> Tuple[float, float, float]:
        """Return (first_settle_s, settle_s, capture_s)."""
        c = self.data.get("calibration", {})
        return (
            float(c.get("first_settle_s", 3.0)),
            float(c.get("settle_s", 2.0)),
            float(c.get("capture_s", 1.5)),
        )

    def readiness_policy(self) -> Tuple[int, float]:
        r = self.data.get("readiness", {})
        return int(r.get("attempts", 20)), float(r.get("interval_s", 0.5))

    def click_enabled(self) -> bool:
        return bool(self.data.get("click", {}).get("enabled", False))

    def set_click_enabled(self, on: bool) -> None:
        self.data.setdefault("click", {})["enabled"] = bool(on)

    def click_cooldown_ms(self) -> int:
        return int(self.data.get("click", {}).get("cooldown_ms", 400))

    def tracker_config(self) -> TrackerConfig:
        first_settle, settle, capture = self.calibration_timing()
        attempts, interval = self.readiness_policy()
        return TrackerConfig(
            blink_threshold=self.blink_threshold(),
            smoothing_alpha=self.smoothing_alpha(),
            min_calibration_samples=self.min_calibration_samples(),
            grid_fractions=self.grid_fractions(),
            calibration_points=self.calibration_points(),
            first_settle_s=first_settle,
            settle_s=settle,
            capture_s=capture,
            readiness_attempts=attempts,
            readiness_interval_s=interval,
        )
