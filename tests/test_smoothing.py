import pytest

from gazecursor.tracking.smoothing import CursorSmoother


def test_first_update_moves_alpha_of_the_way():
    s = CursorSmoother((0.0, 0.0), alpha=0.15)
    assert s.update((100.0, 100.0)) == (15.0, 15.0)


def test_converges_monotonically_without_overshoot():
    s = CursorSmoother((0.0, 0.0), alpha=0.15)
    prev = 0.0
    for _ in range(10):
        p = s.update((100.0, 100.0))
        assert p.x == p.y
        assert prev < p.x < 100.0
        prev = p.x
    assert s.position.x == pytest.approx(100.0 * (1 - 0.85 ** 10))


def test_replay_is_deterministic():
    raws = [(10, 500), (800, 20), (400, 400), (1200, 900)]
    a = CursorSmoother((960, 540))
    b = CursorSmoother((960, 540))
    assert [a.update(r) for r in raws] == [b.update(r) for r in raws]


def test_order_matters():
    a = CursorSmoother((0, 0))
    b = CursorSmoother((0, 0))
    for r in [(100, 0), (0, 100)]:
        a.update(r)
    for r in [(0, 100), (100, 0)]:
        b.update(r)
    assert a.position != b.position


def test_reset_and_alpha_validation():
    s = CursorSmoother((0, 0))
    s.reset((5, 6))
    assert s.position == (5, 6)
    with pytest.raises(ValueError):
        CursorSmoother((0, 0), alpha=1.5)
