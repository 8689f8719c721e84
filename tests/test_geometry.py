import math

from gazecursor.utils.geometry import FacePoint, ScreenPoint, clamp, distance, lerp


def test_lerp_endpoints():
    assert lerp(3.0, 9.0, 0.0) == 3.0
    assert lerp(3.0, 9.0, 1.0) == 9.0


def test_lerp_same_value_any_amount():
    for value in (4.0, 0.1, 123.456, -7.3):
        for amount in (-2.0, 0.0, 0.3, 0.33, 0.7, 1.0, 5.0):
            assert lerp(value, value, amount) == value


def test_lerp_endpoints_exact_for_inexact_floats():
    for a, b in ((0.1, 0.7), (123.456, -0.3), (1e-9, 3.3)):
        assert lerp(a, b, 0) == a
        assert lerp(a, b, 1) == b


def test_lerp_does_not_clamp_amount():
    assert lerp(0.0, 10.0, 1.5) == 15.0
    assert lerp(0.0, 10.0, -0.5) == -5.0


def test_distance_identity_and_symmetry():
    p = ScreenPoint(3.0, 4.0)
    q = ScreenPoint(-1.0, 7.5)
    assert distance(p, p) == 0.0
    assert distance(p, q) == distance(q, p)
    assert distance((0, 0), (3, 4)) == 5.0


def test_distance_missing_point_is_zero():
    assert distance(None, (1, 1)) == 0.0
    assert distance((1, 1), None) == 0.0


def test_distance_accepts_landmark_like_objects():
    class Lm:
        def __init__(self, x, y):
            self.x = x
            self.y = y

    assert math.isclose(distance(Lm(0.0, 0.0), FacePoint(0.3, 0.4)), 0.5)


def test_clamp():
    assert clamp(1.5, 0.0, 1.0) == 1.0
    assert clamp(-0.1, 0.0, 1.0) == 0.0
    assert clamp(0.25, 0.0, 1.0) == 0.25
