"""Geometric primitive value types.

Each primitive wraps ``Vec3`` positions and is frozen after construction.
Degenerate geometry (coincident defining points) is accepted here and
rejected when a distance or orientation is requested.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from .errors import DegenerateGeometryError
from .parameters import Tolerances, resolve
from .vector import Vec3, as_vec3


class _Queries:
    """Distance and orientation methods shared by all primitives.

    The first primitive is always "self": ``a.distance_segment(b)`` fills
    ``closest_point_on_self`` with the point on ``a``.
    """

    def distance(self, other, tolerances: Tolerances | None = None):
        from .distance import distance

        return distance(self, other, tolerances)

    def distance_point(self, pt, tolerances: Tolerances | None = None):
        return self.distance(as_point(pt), tolerances)

    def distance_line(self, line: Line, tolerances: Tolerances | None = None):
        return self.distance(line, tolerances)

    def distance_segment(self, segment: Segment, tolerances: Tolerances | None = None):
        return self.distance(segment, tolerances)

    def distance_ray(self, ray: Ray, tolerances: Tolerances | None = None):
        return self.distance(ray, tolerances)

    def distance_triangle(self, triangle: Triangle, tolerances: Tolerances | None = None):
        return self.distance(triangle, tolerances)

    def distance_polyline(self, polyline, tolerances: Tolerances | None = None):
        return self.distance(as_polyline(polyline), tolerances)


@dataclass(frozen=True)
class Point(_Queries):
    """A location in space."""

    position: Vec3 = field(default_factory=Vec3)

    def __post_init__(self):
        object.__setattr__(self, "position", as_vec3(self.position))

    def __array__(self, dtype=None, copy=None):
        return self.position.__array__(dtype)


class _Linear(_Queries):
    """Primitives parametrised as ``origin + t * vector`` over an interval."""

    def orientation_point(self, pt, normal=None, tolerances: Tolerances | None = None):
        from .orientation import orientation_point

        return orientation_point(self, pt, normal, tolerances)


@dataclass(frozen=True)
class Line(_Linear):
    """Infinite line through ``origin`` and ``end``."""

    origin: Vec3 = field(default_factory=Vec3)
    end: Vec3 = field(default_factory=lambda: Vec3(1.0, 0.0, 0.0))

    def __post_init__(self):
        object.__setattr__(self, "origin", as_vec3(self.origin))
        object.__setattr__(self, "end", as_vec3(self.end))

    @property
    def direction(self) -> Vec3:
        """Unit direction ``normalize(end - origin)``; raises if origin == end."""
        return self.end.subtract(self.origin).normalize()

    def point_at(self, t: float) -> Vec3:
        return self.origin.add(self.direction.scale(t))


@dataclass(frozen=True)
class Segment(_Linear):
    """Bounded segment from ``start`` (t=0) to ``end`` (t=1)."""

    start: Vec3 = field(default_factory=Vec3)
    end: Vec3 = field(default_factory=lambda: Vec3(1.0, 0.0, 0.0))

    def __post_init__(self):
        object.__setattr__(self, "start", as_vec3(self.start))
        object.__setattr__(self, "end", as_vec3(self.end))

    @property
    def origin(self) -> Vec3:
        return self.start

    @property
    def direction(self) -> Vec3:
        """Unit direction from start to end; raises for a zero-length segment."""
        return self.end.subtract(self.start).normalize()

    @property
    def length(self) -> float:
        return self.start.distance_to(self.end)

    @property
    def midpoint(self) -> Vec3:
        return self.start.lerp(self.end, 0.5)

    def point_at(self, t: float) -> Vec3:
        return self.start.lerp(self.end, t)


@dataclass(frozen=True)
class Ray(_Linear):
    """Half-line ``origin + t * direction`` for t >= 0."""

    origin: Vec3 = field(default_factory=Vec3)
    direction: Vec3 = field(default_factory=lambda: Vec3(1.0, 0.0, 0.0))

    def __post_init__(self):
        object.__setattr__(self, "origin", as_vec3(self.origin))
        object.__setattr__(self, "direction", as_vec3(self.direction))

    @property
    def unit_direction(self) -> Vec3:
        return self.direction.normalize()

    def point_at(self, t: float) -> Vec3:
        return self.origin.add(self.direction.scale(t))


@dataclass(frozen=True)
class Triangle(_Queries):
    """Triangle with ordered vertices ``a``, ``b``, ``c`` (counter-clockwise about ``normal``)."""

    a: Vec3 = field(default_factory=Vec3)
    b: Vec3 = field(default_factory=lambda: Vec3(1.0, 0.0, 0.0))
    c: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))

    def __post_init__(self):
        for name in ("a", "b", "c"):
            object.__setattr__(self, name, as_vec3(getattr(self, name)))

    @property
    def vertices(self) -> Tuple[Vec3, Vec3, Vec3]:
        return (self.a, self.b, self.c)

    @property
    def normal(self) -> Vec3:
        """Unit normal ``normalize((b - a) x (c - a))``; raises for collinear vertices."""
        if self.is_degenerate():
            raise DegenerateGeometryError("Triangle vertices are collinear")
        return self.b.subtract(self.a).cross(self.c.subtract(self.a)).normalize()

    @property
    def centroid(self) -> Vec3:
        return self.a.add(self.b).add(self.c).scale(1.0 / 3.0)

    @property
    def area(self) -> float:
        return 0.5 * self.b.subtract(self.a).cross(self.c.subtract(self.a)).length()

    def is_degenerate(self, tolerances: Tolerances | None = None) -> bool:
        """True when the vertices are (numerically) collinear."""
        ab, ac = self.b.subtract(self.a), self.c.subtract(self.a)
        n2 = ab.cross(ac).length_squared()
        return n2 <= resolve(tolerances).degenerate * ab.length_squared() * ac.length_squared()

    def edges(self) -> Tuple[Segment, Segment, Segment]:
        return (Segment(self.a, self.b), Segment(self.b, self.c), Segment(self.c, self.a))

    def orientation_point(self, pt, normal=None, tolerances: Tolerances | None = None):
        from .orientation import orientation_point

        return orientation_point(self, pt, normal, tolerances)


@dataclass(frozen=True)
class Polyline(_Queries):
    """Ordered chain of points; the union of its consecutive segments."""

    points: Tuple[Vec3, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(as_vec3(p) for p in self.points))

    def __len__(self) -> int:
        return len(self.points)

    def segments(self) -> List[Segment]:
        """Consecutive segments ``points[i] -> points[i + 1]``.

        Raises
        ------
        DegenerateGeometryError
            If the polyline has fewer than two points.
        """
        if len(self.points) < 2:
            raise DegenerateGeometryError(f"Polyline needs at least 2 points, got {len(self.points)}")
        return [Segment(p, q) for p, q in zip(self.points[:-1], self.points[1:])]

    @property
    def length(self) -> float:
        return sum(p.distance_to(q) for p, q in zip(self.points[:-1], self.points[1:]))


def as_point(value) -> Point:
    """Coerce a Point, Vec3, tuple/list or numpy array to ``Point``."""
    return value if isinstance(value, Point) else Point(as_vec3(value))


def as_polyline(value) -> Polyline:
    """Coerce a Polyline or an ordered sequence of positions to ``Polyline``."""
    return value if isinstance(value, Polyline) else Polyline(tuple(value))


def point(position=(0.0, 0.0, 0.0)) -> Point:
    return Point(position)


def line(start=(0.0, 0.0, 0.0), end=(1.0, 0.0, 0.0)) -> Line:
    return Line(start, end)


def segment(start=(0.0, 0.0, 0.0), end=(1.0, 0.0, 0.0)) -> Segment:
    return Segment(start, end)


def ray(origin=(0.0, 0.0, 0.0), direction=(1.0, 0.0, 0.0)) -> Ray:
    return Ray(origin, direction)


def triangle(a=(0.0, 0.0, 0.0), b=(1.0, 0.0, 0.0), c=(0.0, 1.0, 0.0)) -> Triangle:
    return Triangle(a, b, c)


def polyline(points: Iterable = ()) -> Polyline:
    return Polyline(tuple(points))
