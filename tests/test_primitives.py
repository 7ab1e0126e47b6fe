"""Tests for primitive construction and accessors."""

import dataclasses
import math

import numpy as np
import pytest

from geomdist import (
    DegenerateGeometryError,
    Line,
    Point,
    Polyline,
    Ray,
    Segment,
    Triangle,
    Vec3,
    line,
    point,
    polyline,
    ray,
    segment,
    triangle,
)


def test_positions_coerced_to_vec3():
    """Tuples, numpy arrays, Vec3 and Point are all accepted."""
    a = Line((0, 0, 0), np.array([1.0, 2.0, 3.0]))
    assert a.origin == Vec3(0, 0, 0)
    assert a.end == Vec3(1, 2, 3)
    assert Segment(Point((1, 1, 1)), Vec3(2, 2, 2)).start == Vec3(1, 1, 1)


def test_line_direction_is_unit():
    d = Line((1, 1, 1), (1, 1, 5)).direction
    assert d == Vec3(0, 0, 1)


def test_degenerate_line_constructs_but_has_no_direction():
    """Construction succeeds; asking for the direction fails."""
    bad = Line((2, 2, 2), (2, 2, 2))
    with pytest.raises(DegenerateGeometryError):
        bad.direction


def test_segment_accessors():
    s = Segment((0, 0, 0), (4, 0, 3))
    assert s.length == pytest.approx(5.0)
    assert s.midpoint == Vec3(2, 0, 1.5)
    assert s.point_at(0.0) == s.start
    assert s.point_at(1.0) == s.end
    assert s.origin == s.start


def test_ray_point_at():
    r = Ray((1, 0, 0), (0, 2, 0))
    assert r.point_at(1.5) == Vec3(1, 3, 0)
    assert r.unit_direction == Vec3(0, 1, 0)


class TestTriangle:
    @pytest.fixture
    def tri(self):
        return Triangle((0, 0, 0), (3, 0, 0), (0, 3, 0))

    def test_normal_counter_clockwise(self, tri):
        assert tri.normal == Vec3(0, 0, 1)

    def test_centroid_and_area(self, tri):
        assert tri.centroid.is_close(Vec3(1, 1, 0))
        assert tri.area == pytest.approx(4.5)

    def test_edges_close_the_loop(self, tri):
        ab, bc, ca = tri.edges()
        assert ab.start == tri.a and ab.end == tri.b
        assert bc.start == tri.b and bc.end == tri.c
        assert ca.start == tri.c and ca.end == tri.a

    def test_collinear_is_degenerate(self):
        flat = Triangle((0, 0, 0), (1, 1, 1), (2, 2, 2))
        assert flat.is_degenerate()
        with pytest.raises(DegenerateGeometryError):
            flat.normal

    def test_small_triangle_is_not_degenerate(self):
        small = Triangle((0, 0, 0), (1e-3, 0, 0), (0, 1e-3, 0))
        assert not small.is_degenerate()
        assert small.normal.is_close(Vec3(0, 0, 1))

    def test_nearly_collinear_is_degenerate(self):
        sliver = Triangle((0, 0, 0), (1e3, 0, 0), (2e3, 1e-6, 0))
        assert sliver.is_degenerate()


class TestPolyline:
    def test_segments(self):
        pl = Polyline([(0, 0, 0), (1, 0, 0), (1, 1, 0)])
        segs = pl.segments()
        assert len(segs) == 2
        assert segs[-1].end == Vec3(1, 1, 0)

    def test_length(self):
        pl = Polyline([(0, 0, 0), (3, 0, 0), (3, 4, 0)])
        assert len(pl) == 3
        assert pl.length == pytest.approx(7.0)

    def test_too_few_points(self):
        with pytest.raises(DegenerateGeometryError):
            Polyline([(0, 0, 0)]).segments()


def test_primitives_are_frozen():
    s = Segment((0, 0, 0), (1, 0, 0))
    with pytest.raises(dataclasses.FrozenInstanceError):
        s.start = Vec3(5, 5, 5)


def test_factories_mirror_constructors():
    assert point((1, 2, 3)) == Point((1, 2, 3))
    assert line((0, 0, 0), (1, 1, 0)) == Line((0, 0, 0), (1, 1, 0))
    assert segment((0, 0, 0), (1, 1, 0)) == Segment((0, 0, 0), (1, 1, 0))
    assert ray((0, 0, 0), (0, 0, 1)) == Ray((0, 0, 0), (0, 0, 1))
    assert triangle((0, 0, 0), (1, 0, 0), (0, 1, 0)) == Triangle((0, 0, 0), (1, 0, 0), (0, 1, 0))
    assert polyline([(0, 0, 0), (1, 0, 0)]) == Polyline([(0, 0, 0), (1, 0, 0)])


def test_polyline_method_accepts_raw_positions():
    r = Line((0, 0, 0), (1, 0, 0)).distance_polyline([(0, 2, 0), (5, 2, 0)])
    assert r.distance == pytest.approx(2.0)


def test_point_queries():
    p = Point((0, 3, 4))
    assert p.distance_point((0, 0, 0)).distance == pytest.approx(5.0)
    assert p.distance_segment(Segment((0, 0, 0), (0, 10, 0))).distance == pytest.approx(4.0)
    assert math.isclose(p.distance_ray(Ray((0, 0, 0), (0, -1, 0))).distance, 5.0)
