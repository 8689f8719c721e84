import asyncio

from gazecursor.tracking.readiness import RetryPolicy, wait_until_ready


def run(coro):
    return asyncio.run(coro)


def recording_sleep(calls):
    async def _sleep(seconds):
        calls.append(seconds)

    return _sleep


def test_ready_after_some_attempts():
    answers = iter([False, False, True])
    sleeps = []
    ok = run(wait_until_ready(lambda: next(answers), RetryPolicy(attempts=5, interval_s=0.5), sleep=recording_sleep(sleeps)))
    assert ok is True
    assert sleeps == [0.5, 0.5]


def test_gives_up_after_bounded_attempts():
    probes = []

    def probe():
        probes.append(1)
        return False

    sleeps = []
    ok = run(wait_until_ready(probe, RetryPolicy(attempts=20, interval_s=0.5), sleep=recording_sleep(sleeps)))
    assert ok is False
    assert len(probes) == 20
    assert len(sleeps) == 19


def test_probe_errors_count_as_not_ready():
    answers = iter([RuntimeError("loading"), True])

    def probe():
        a = next(answers)
        if isinstance(a, Exception):
            raise a
        return a

    assert run(wait_until_ready(probe, RetryPolicy(attempts=3, interval_s=0.0), sleep=recording_sleep([]))) is True


def test_default_policy():
    p = RetryPolicy()
    assert p.attempts == 20
    assert p.interval_s == 0.5
