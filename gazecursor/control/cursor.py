from __future__ import annotations

"""
OS cursor driver and blink-to-click.

- CursorController: moves/clicks the OS cursor via pyautogui; no-op when
  pyautogui is unavailable (headless test runs).
- BlinkClicker: turns the per-frame blink flag into discrete click intents.
"""

import time
from typing import Callable, Optional

try:
    import pyautogui  # type: ignore
except Exception:  # pragma: no cover
    pyautogui = None  # type: ignore


class CursorController:
    """Minimal OS cursor control.

    Built-in pyautogui pauses are disabled (PAUSE=0) and FAILSAFE is off.
    """

    def __init__(self) -> None:
        self._frozen: bool = False
        if pyautogui is not None:
            pyautogui.FAILSAFE = False
            pyautogui.PAUSE = 0

    @property
    def frozen(self) -> bool:
        return self._frozen

    def move(self, x: float, y: float) -> None:
        if self._frozen or pyautogui is None:
            return
        pyautogui.moveTo(int(round(x)), int(round(y)), duration=0)

    def click(self) -> None:
        if self._frozen or pyautogui is None:
            return
        pyautogui.click()

    def freeze(self) -> None:
        """Freeze cursor movement and clicks until explicitly unfrozen."""
        self._frozen = True

    def unfreeze(self) -> None:
        self._frozen = False


class BlinkClicker:
    """Fire once per blink onset.

    check(is_blinking) returns True on the frame the blink flag turns on,
    provided at least cooldown_ms have passed since the last click. Holding the
    eyes closed does not repeat the click.
    """

    def __init__(self, cooldown_ms: int = 400, clock: Optional[Callable[[], float]] = None) -> None:
        self.cooldown_ms = int(cooldown_ms)
        self._clock = clock or time.monotonic
        self._was_blinking = False
        self._last_click: Optional[float] = None

    def reset(self) -> None:
        self._was_blinking = False
        self._last_click = None

    def check(self, is_blinking: bool) -> bool:
        onset = bool(is_blinking) and not self._was_blinking
        self._was_blinking = bool(is_blinking)
        if not onset:
            return False
        now = self._clock() * 1000.0
        if self._last_click is not None and (now - self._last_click) < self.cooldown_ms:
            return False
        self._last_click = now
        return True
