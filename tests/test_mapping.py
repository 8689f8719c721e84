import math

import pytest

from gazecursor.calibration.store import CalibrationStore
from gazecursor.tracking.mapping import GazeMapper
from gazecursor.utils.geometry import FacePoint

W, H = 1920, 1080


def unit_square_store():
    store = CalibrationStore()
    store.capture((0, 0), (0.0, 0.0))
    store.capture((W, 0), (1.0, 0.0))
    store.capture((0, H), (0.0, 1.0))
    store.capture((W, H), (1.0, 1.0))
    return store


def test_too_few_samples_maps_to_center():
    store = CalibrationStore()
    store.capture((0, 0), (0.2, 0.2))
    store.capture((W, H), (0.8, 0.8))
    store.capture((W, 0), (0.8, 0.2))
    mapper = GazeMapper((W, H))
    for fp in (FacePoint(0.0, 0.0), FacePoint(0.9, 0.1), FacePoint(5.0, -3.0)):
        assert mapper.map(fp, store.samples()) == (W / 2, H / 2)


def test_missing_face_point_maps_to_center():
    assert GazeMapper((W, H)).map(None, unit_square_store().samples()) == (W / 2, H / 2)


def test_unit_square_center_and_corners():
    samples = unit_square_store().samples()
    mapper = GazeMapper((W, H))
    assert mapper.map(FacePoint(0.5, 0.5), samples) == (W / 2, H / 2)
    assert mapper.map(FacePoint(0.0, 0.0), samples) == (0, 0)
    assert mapper.map(FacePoint(1.0, 1.0), samples) == (W, H)


def test_outside_calibrated_range_saturates():
    samples = unit_square_store().samples()
    mapper = GazeMapper((W, H))
    assert mapper.map(FacePoint(1.5, 1.5), samples) == (W, H)
    assert mapper.map(FacePoint(-0.5, 2.0), samples) == (0, H)


def test_zero_range_axis_stays_finite():
    store = CalibrationStore()
    for y in (0.1, 0.4, 0.6, 0.9):
        store.capture((0, y * H), (0.3, y))
    mapper = GazeMapper((W, H))
    for fx in (0.3, 0.29, 0.31):
        p = mapper.map(FacePoint(fx, 0.5), store.samples())
        assert math.isfinite(p.x)
        assert 0.0 <= p.x <= W
    assert mapper.map(FacePoint(0.3, 0.5), store.samples()).x == 0.0


def test_bounds_follow_latest_samples():
    store = unit_square_store()
    mapper = GazeMapper((W, H))
    store.capture((W, H), (2.0, 2.0))
    assert mapper.map(FacePoint(1.0, 1.0), store.samples()) == (W / 2, H / 2)


def test_min_samples_configurable():
    store = CalibrationStore()
    store.capture((0, 0), (0.0, 0.0))
    store.capture((W, H), (1.0, 1.0))
    assert GazeMapper((W, H), min_samples=2).map(FacePoint(1.0, 0.0), store.samples()) == (W, 0)


def test_resize_changes_output_scale():
    samples = unit_square_store().samples()
    mapper = GazeMapper((W, H))
    mapper.resize((800, 600))
    assert mapper.map(FacePoint(0.5, 0.5), samples) == (400, 300)
    assert mapper.center() == (400, 300)


def test_invalid_construction():
    with pytest.raises(ValueError):
        GazeMapper((0, 100))
    with pytest.raises(ValueError):
        GazeMapper((100, 100), min_samples=0)
