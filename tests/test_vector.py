"""Tests for Vec2 / Vec3 value types."""

import logging
import math

import numpy as np
import pytest

from geomdist import DegenerateGeometryError, Vec2, Vec3


def test_vec3_arithmetic():
    a, b = Vec3(1, 2, 3), Vec3(4, 5, 6)
    assert a.add(b) == Vec3(5, 7, 9)
    assert b.subtract(a) == Vec3(3, 3, 3)
    assert a + b == Vec3(5, 7, 9)
    assert -a == Vec3(-1, -2, -3)
    assert 2 * a == a * 2 == Vec3(2, 4, 6)
    assert a.dot(b) == 32


def test_vec3_cross_right_handed():
    assert Vec3(1, 0, 0).cross(Vec3(0, 1, 0)) == Vec3(0, 0, 1)
    assert Vec3(0, 1, 0).cross(Vec3(1, 0, 0)) == Vec3(0, 0, -1)


def test_vec3_length_and_normalize():
    v = Vec3(3, 4, 12)
    assert v.length_squared() == 169
    assert v.length() == pytest.approx(13.0)
    assert v.normalize().length() == pytest.approx(1.0)
    assert v.normalize().is_close(Vec3(3 / 13, 4 / 13, 12 / 13))


def test_normalize_zero_raises():
    """Zero-length normalize is flagged, never silently divided."""
    with pytest.raises(DegenerateGeometryError):
        Vec3().normalize()
    with pytest.raises(DegenerateGeometryError):
        Vec2(0.0, 0.0).normalize()


def test_normalize_tiny_vector():
    assert Vec3(1e-8, 0, 0).normalize().is_close(Vec3(1, 0, 0))


def test_operations_return_new_values():
    a = Vec3(1, 1, 1)
    a.add(Vec3(1, 0, 0))
    assert a == Vec3(1, 1, 1)
    with pytest.raises(AttributeError):
        a.x = 5.0


def test_is_close_tolerance():
    assert Vec3(1, 1, 1).is_close(Vec3(1 + 1e-12, 1, 1))
    assert not Vec3(1, 1, 1).is_close(Vec3(1.1, 1, 1))
    assert Vec3(1, 1, 1).is_close(Vec3(1.05, 1, 1), tol=0.1)


def test_from_values_fills_with_warning(caplog):
    """Too few components are zero-filled, not rejected."""
    with caplog.at_level(logging.WARNING, logger="geomdist"):
        v = Vec3.from_values(1.0, 2.0)
    assert v == Vec3(1.0, 2.0, 0.0)
    assert "filled with zero" in caplog.text


def test_from_values_truncates_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="geomdist"):
        v = Vec2.from_values(1.0, 2.0, 3.0)
    assert v == Vec2(1.0, 2.0)
    assert "cut off" in caplog.text


def test_numpy_round_trip():
    v = Vec3(1.5, -2.0, 0.25)
    arr = np.asarray(v)
    assert arr.dtype == float
    np.testing.assert_array_equal(arr, [1.5, -2.0, 0.25])
    assert Vec3.from_array(arr) == v
    assert tuple(v) == (1.5, -2.0, 0.25)


def test_vec2_cross_is_scalar():
    assert Vec2(1, 0).cross(Vec2(0, 1)) == 1.0
    assert Vec2(0, 1).cross(Vec2(1, 0)) == -1.0


def test_vec2_basics():
    a = Vec2(3, 4)
    assert a.length() == pytest.approx(5.0)
    assert a.distance_to(Vec2(0, 0)) == pytest.approx(5.0)
    assert a.lerp(Vec2(5, 8), 0.5) == Vec2(4, 6)
    assert a - Vec2(1, 1) == Vec2(2, 3)


def test_distance_to_and_lerp():
    a, b = Vec3(0, 0, 0), Vec3(2, 2, 1)
    assert a.distance_to(b) == pytest.approx(3.0)
    assert a.lerp(b, 0.5) == Vec3(1, 1, 0.5)
    assert math.isclose(a.lerp(b, 1.0).x, 2.0)
