"""Closest-point and minimum-distance computations between primitives.

All functions are stateless and operate on immutable primitives. Every
query returns a ``DistanceResult`` whose ``closest_point_on_self`` lies on
the first argument.

Internally each primitive is lowered to one or more parts:

- ``point``: a position
- ``linear``: ``origin + t * vector`` with ``t`` in ``[lo, hi]``
  (line: (-inf, inf), ray: [0, inf), segment: [0, 1])
- ``triangle``: three vertices

and a polyline is the union of its segments. Pairs of parts are solved in
closed form; the global answer is the minimum over part pairs.
"""

from __future__ import annotations

import logging
import math
from typing import List, NamedTuple, Optional, Tuple, Union

import numpy as np

from .errors import DegenerateGeometryError
from .parameters import Tolerances, resolve
from .primitives import Line, Point, Polyline, Ray, Segment, Triangle, as_point, as_polyline
from .result import DistanceResult
from .vector import Vec3

logger = logging.getLogger(__name__)

Primitive = Union[Point, Line, Segment, Ray, Triangle, Polyline]
PointPair = Tuple[np.ndarray, np.ndarray]

_INF = math.inf


class _Param(NamedTuple):
    """Parametrised linear part ``origin + t * vector``, ``lo <= t <= hi``."""

    origin: np.ndarray
    vector: np.ndarray
    lo: float
    hi: float

    def at(self, t: float) -> np.ndarray:
        return self.origin + t * self.vector

    def clamp(self, t: float) -> float:
        return min(max(t, self.lo), self.hi)

    def bounds(self) -> List[float]:
        """Finite ends of the parameter domain."""
        return [t for t in (self.lo, self.hi) if math.isfinite(t)]


# ---------------------------------------------------------------------------
# Lowering primitives to parts
# ---------------------------------------------------------------------------


def _arr(v: Vec3) -> np.ndarray:
    return np.array([v.x, v.y, v.z], dtype=float)


def _segment_param(start: Vec3, end: Vec3) -> _Param:
    a = _arr(start)
    return _Param(a, _arr(end) - a, 0.0, 1.0)


def _parts(prim: Primitive, tol: Tolerances) -> List[tuple]:
    """Lower a primitive to ``[(kind, data), ...]``.

    Raises
    ------
    DegenerateGeometryError
        For a line with origin == end, a ray with zero direction,
        or a polyline with fewer than two points.
    """
    if isinstance(prim, Point):
        return [("point", _arr(prim.position))]
    if isinstance(prim, Line):
        origin = _arr(prim.origin)
        vector = _arr(prim.end) - origin
        if not np.any(vector):
            raise DegenerateGeometryError(f"Line origin and end coincide at {tuple(origin)}")
        return [("linear", _Param(origin, vector, -_INF, _INF))]
    if isinstance(prim, Ray):
        vector = _arr(prim.direction)
        if not np.any(vector):
            raise DegenerateGeometryError("Ray direction has zero length")
        return [("linear", _Param(_arr(prim.origin), vector, 0.0, _INF))]
    if isinstance(prim, Segment):
        return [("linear", _segment_param(prim.start, prim.end))]
    if isinstance(prim, Triangle):
        return [("triangle", (_arr(prim.a), _arr(prim.b), _arr(prim.c)))]
    if isinstance(prim, Polyline):
        return [("linear", _segment_param(s.start, s.end)) for s in prim.segments()]
    raise TypeError(f"Unsupported primitive type: {type(prim).__name__}")


# ---------------------------------------------------------------------------
# Part solvers. Each returns (point on first part, point on second part).
# ---------------------------------------------------------------------------


def _best(candidates: List[PointPair]) -> PointPair:
    """Candidate pair with the smallest separation; ties keep the earliest."""
    best = candidates[0]
    best_d2 = float(np.dot(best[0] - best[1], best[0] - best[1]))
    for pa, pb in candidates[1:]:
        diff = pa - pb
        d2 = float(np.dot(diff, diff))
        if d2 < best_d2:
            best, best_d2 = (pa, pb), d2
    return best


def _project(p: np.ndarray, lin: _Param) -> Tuple[float, np.ndarray]:
    """Clamped projection of ``p`` onto a linear part: ``(t, point)``."""
    vv = float(np.dot(lin.vector, lin.vector))
    if vv == 0.0:
        # zero-length segment
        return 0.0, lin.origin
    t = lin.clamp(float(np.dot(p - lin.origin, lin.vector)) / vv)
    return t, lin.at(t)


def _point_point(p: np.ndarray, q: np.ndarray, tol: Tolerances) -> PointPair:
    return p, q


def _point_linear(p: np.ndarray, lin: _Param, tol: Tolerances) -> PointPair:
    return p, _project(p, lin)[1]


def _linear_linear(la: _Param, lb: _Param, tol: Tolerances) -> PointPair:
    """Closest approach of two linear parts.

    The unconstrained skew-line solution is used when it falls inside both
    domains. Otherwise each finite end of either part is fixed and
    re-projected onto the other part, and the best of these wins. With
    parallel directions the 2x2 system is singular and the origin of ``lb``
    projected onto ``la`` stands in for the unconstrained solution.
    """
    u, v = la.vector, lb.vector
    w0 = la.origin - lb.origin
    a = float(np.dot(u, u))
    b = float(np.dot(u, v))
    c = float(np.dot(v, v))
    denom = a * c - b * b

    candidates: List[PointPair] = []
    if denom > tol.parallel * a * c and a > 0.0 and c > 0.0:
        d = float(np.dot(u, w0))
        e = float(np.dot(v, w0))
        s = (b * e - c * d) / denom
        t = (a * e - b * d) / denom
        if la.lo <= s <= la.hi and lb.lo <= t <= lb.hi:
            candidates.append((la.at(s), lb.at(t)))
    else:
        logger.debug("Parallel or zero-length directions, projecting origin instead")
        candidates.append((_project(lb.origin, la)[1], lb.origin))

    for s in la.bounds():
        pa = la.at(s)
        candidates.append((pa, _project(pa, lb)[1]))
    for t in lb.bounds():
        pb = lb.at(t)
        candidates.append((_project(pb, la)[1], pb))

    return _best(candidates)


def _triangle_normal(tri, tol: Tolerances) -> Optional[np.ndarray]:
    """Unnormalised normal, or ``None`` for (numerically) collinear vertices."""
    a, b, c = tri
    ab, ac = b - a, c - a
    n = np.cross(ab, ac)
    if np.dot(n, n) <= tol.degenerate * np.dot(ab, ab) * np.dot(ac, ac):
        return None
    return n


def _inside_triangle(x: np.ndarray, tri, n: np.ndarray, tol: Tolerances) -> bool:
    """Barycentric sign test for a point already in the triangle's plane."""
    a, b, c = tri
    nn = float(np.dot(n, n))
    slack = -tol.barycentric * nn
    return (
        float(np.dot(np.cross(b - a, x - a), n)) >= slack
        and float(np.dot(np.cross(c - b, x - b), n)) >= slack
        and float(np.dot(np.cross(a - c, x - c), n)) >= slack
    )


def _triangle_edges(tri) -> List[_Param]:
    a, b, c = tri
    return [_Param(a, b - a, 0.0, 1.0), _Param(b, c - b, 0.0, 1.0), _Param(c, a - c, 0.0, 1.0)]


def _point_triangle(p: np.ndarray, tri, tol: Tolerances) -> PointPair:
    """Closest point on a triangle by Voronoi region (vertex, edge, face)."""
    a, b, c = tri
    if _triangle_normal(tri, tol) is None:
        logger.debug("Degenerate triangle, using its edges")
        return _best([(p, _project(p, e)[1]) for e in _triangle_edges(tri)])

    ab, ac, ap = b - a, c - a, p - a
    d1, d2 = float(np.dot(ab, ap)), float(np.dot(ac, ap))
    if d1 <= 0.0 and d2 <= 0.0:
        return p, a

    bp = p - b
    d3, d4 = float(np.dot(ab, bp)), float(np.dot(ac, bp))
    if d3 >= 0.0 and d4 <= d3:
        return p, b

    vc = d1 * d4 - d3 * d2
    if vc <= 0.0 and d1 >= 0.0 and d3 <= 0.0:
        return p, a + (d1 / (d1 - d3)) * ab

    cp = p - c
    d5, d6 = float(np.dot(ab, cp)), float(np.dot(ac, cp))
    if d6 >= 0.0 and d5 <= d6:
        return p, c

    vb = d5 * d2 - d1 * d6
    if vb <= 0.0 and d2 >= 0.0 and d6 <= 0.0:
        return p, a + (d2 / (d2 - d6)) * ac

    va = d3 * d6 - d5 * d4
    if va <= 0.0 and (d4 - d3) >= 0.0 and (d5 - d6) >= 0.0:
        return p, b + ((d4 - d3) / ((d4 - d3) + (d5 - d6))) * (c - b)

    scale = 1.0 / (va + vb + vc)
    return p, a + ab * (vb * scale) + ac * (vc * scale)


def _linear_triangle(lin: _Param, tri, tol: Tolerances) -> PointPair:
    """Linear part against a triangle.

    If the part pierces the triangle's plane inside the triangle the
    distance is zero at the hit point. Otherwise the minimum lies on one of
    the triangle's edges or, for bounded parts, at a finite end.
    """
    n = _triangle_normal(tri, tol)
    if n is not None:
        denom = float(np.dot(n, lin.vector))
        if denom * denom > tol.parallel * float(np.dot(n, n)) * float(np.dot(lin.vector, lin.vector)):
            t = float(np.dot(n, tri[0] - lin.origin)) / denom
            if lin.lo <= t <= lin.hi:
                hit = lin.at(t)
                if _inside_triangle(hit, tri, n, tol):
                    return hit, hit
    else:
        logger.debug("Degenerate triangle, using its edges")

    candidates = [_linear_linear(lin, edge, tol) for edge in _triangle_edges(tri)]
    for t in lin.bounds():
        candidates.append(_point_triangle(lin.at(t), tri, tol))
    return _best(candidates)


def _triangle_triangle(ta, tb, tol: Tolerances) -> PointPair:
    """Each triangle's edges against the other triangle."""
    candidates = [_linear_triangle(edge, tb, tol) for edge in _triangle_edges(ta)]
    for edge in _triangle_edges(tb):
        pb, pa = _linear_triangle(edge, ta, tol)
        candidates.append((pa, pb))
    return _best(candidates)


_RANK = {"point": 0, "linear": 1, "triangle": 2}

_SOLVERS = {
    ("point", "point"): _point_point,
    ("point", "linear"): _point_linear,
    ("point", "triangle"): _point_triangle,
    ("linear", "linear"): _linear_linear,
    ("linear", "triangle"): _linear_triangle,
    ("triangle", "triangle"): _triangle_triangle,
}


def _solve_parts(part_a: tuple, part_b: tuple, tol: Tolerances) -> PointPair:
    kind_a, data_a = part_a
    kind_b, data_b = part_b
    if _RANK[kind_a] > _RANK[kind_b]:
        pb, pa = _SOLVERS[(kind_b, kind_a)](data_b, data_a, tol)
        return pa, pb
    return _SOLVERS[(kind_a, kind_b)](data_a, data_b, tol)


def _coerce(value) -> Primitive:
    """Accept raw positions (1-D) as points and raw position lists (2-D) as polylines."""
    if isinstance(value, (Point, Line, Segment, Ray, Triangle, Polyline)):
        return value
    ndim = np.ndim(value)
    if ndim == 1:
        return as_point(value)
    if ndim == 2:
        return as_polyline(value)
    raise TypeError(f"Cannot interpret {type(value).__name__} as a primitive")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def distance(a, b, tolerances: Tolerances | None = None) -> DistanceResult:
    """Minimum distance between any two supported primitives.

    Parameters
    ----------
    a, b : Point, Line, Segment, Ray, Triangle or Polyline
        Raw positions are accepted as points, and raw ordered position
        sequences as polylines.
    tolerances : Tolerances, optional
        Numeric thresholds. Defaults to ``DEFAULT_TOLERANCES``.

    Returns
    -------
    DistanceResult
        ``closest_point_on_self`` lies on ``a``, ``closest_point_on_other`` on ``b``.

    Raises
    ------
    DegenerateGeometryError
        If either primitive has no defined direction (see ``_parts``).
    """
    tol = resolve(tolerances)
    parts_a = _parts(_coerce(a), tol)
    parts_b = _parts(_coerce(b), tol)

    best: Optional[PointPair] = None
    best_d2 = _INF
    for part_a in parts_a:
        for part_b in parts_b:
            pa, pb = _solve_parts(part_a, part_b, tol)
            diff = pa - pb
            d2 = float(np.dot(diff, diff))
            if d2 < best_d2:
                best, best_d2 = (pa, pb), d2

    pa, pb = best
    return DistanceResult(
        distance=float(np.linalg.norm(pa - pb)),
        closest_point_on_self=Vec3.from_array(pa),
        closest_point_on_other=Vec3.from_array(pb),
    )


def point_point(p, q, tolerances: Tolerances | None = None) -> DistanceResult:
    """Euclidean distance between two points."""
    return distance(as_point(p), as_point(q), tolerances)


def line_point(line: Line, pt, tolerances: Tolerances | None = None) -> DistanceResult:
    """Unclamped projection of a point onto an infinite line."""
    return distance(line, as_point(pt), tolerances)


def segment_point(segment: Segment, pt, tolerances: Tolerances | None = None) -> DistanceResult:
    """Projection clamped to t in [0, 1]."""
    return distance(segment, as_point(pt), tolerances)


def ray_point(ray: Ray, pt, tolerances: Tolerances | None = None) -> DistanceResult:
    """Projection clamped to t >= 0."""
    return distance(ray, as_point(pt), tolerances)


def triangle_point(triangle: Triangle, pt, tolerances: Tolerances | None = None) -> DistanceResult:
    return distance(triangle, as_point(pt), tolerances)


def line_line(a: Line, b: Line, tolerances: Tolerances | None = None) -> DistanceResult:
    """Skew-line closest approach; parallel lines fall back to line-to-point."""
    return distance(a, b, tolerances)


def line_ray(line: Line, ray: Ray, tolerances: Tolerances | None = None) -> DistanceResult:
    return distance(line, ray, tolerances)


def line_segment(line: Line, segment: Segment, tolerances: Tolerances | None = None) -> DistanceResult:
    return distance(line, segment, tolerances)


def line_triangle(line: Line, triangle: Triangle, tolerances: Tolerances | None = None) -> DistanceResult:
    """Zero at the plane hit point when the line pierces the triangle, else the edge minimum."""
    return distance(line, triangle, tolerances)


def line_polyline(line: Line, polyline, tolerances: Tolerances | None = None) -> DistanceResult:
    """Minimum over the polyline's segments. ``polyline`` may be a raw position sequence."""
    return distance(line, as_polyline(polyline), tolerances)


def segment_segment(a: Segment, b: Segment, tolerances: Tolerances | None = None) -> DistanceResult:
    return distance(a, b, tolerances)


def segment_triangle(segment: Segment, triangle: Triangle, tolerances: Tolerances | None = None) -> DistanceResult:
    return distance(segment, triangle, tolerances)


def ray_triangle(ray: Ray, triangle: Triangle, tolerances: Tolerances | None = None) -> DistanceResult:
    return distance(ray, triangle, tolerances)


def triangle_triangle(a: Triangle, b: Triangle, tolerances: Tolerances | None = None) -> DistanceResult:
    return distance(a, b, tolerances)


def polyline_polyline(a, b, tolerances: Tolerances | None = None) -> DistanceResult:
    return distance(as_polyline(a), as_polyline(b), tolerances)
