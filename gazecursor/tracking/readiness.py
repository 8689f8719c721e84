from __future__ import annotations

"""
Bounded wait for an externally loaded capability (e.g. the landmark model).

wait_until_ready() polls a probe up to `attempts` times, sleeping `interval_s`
between probes. A probe that raises counts as not ready. False is terminal:
the caller reports it and does not start tracking.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable

log = logging.getLogger(__name__)


class DetectorUnavailableError(RuntimeError):
    """The landmark detector never became ready."""


@dataclass(frozen=True)
class RetryPolicy:
    attempts: int = 20
    interval_s: float = 0.5


async def wait_until_ready(
    probe: Callable[[], bool],
    policy: RetryPolicy = RetryPolicy(),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> bool:
    for attempt in range(max(0, int(policy.attempts))):
        try:
            if probe():
                return True
        except Exception as e:
            log.debug("readiness probe %d failed: %r", attempt + 1, e)
        if attempt + 1 < policy.attempts:
            await sleep(policy.interval_s)
    return False
