"""Side-of classification of a point against a line or plane."""

from __future__ import annotations

import enum
import logging

import numpy as np

from .errors import DegenerateGeometryError
from .parameters import Tolerances, resolve
from .primitives import Line, Ray, Segment, Triangle
from .vector import UNIT_Z, as_vec3

logger = logging.getLogger(__name__)


class Orientation(enum.Enum):
    """Half-space a point occupies relative to a reference primitive."""

    NEGATIVE = -1
    COMMON = 0
    POSITIVE = 1


def _unit(v: np.ndarray, what: str) -> np.ndarray:
    n2 = float(np.dot(v, v))
    if n2 == 0.0:
        raise DegenerateGeometryError(f"{what} has zero length")
    return v / np.sqrt(n2)


def classify(value: float, tolerances: Tolerances | None = None) -> Orientation:
    """Map a signed distance to an ``Orientation``."""
    if abs(value) <= resolve(tolerances).coplanar:
        return Orientation.COMMON
    return Orientation.POSITIVE if value > 0 else Orientation.NEGATIVE


def signed_offset(primitive, pt, normal=None, tolerances: Tolerances | None = None) -> float:
    """Signed distance of ``pt`` from the primitive's dividing plane.

    Parameters
    ----------
    primitive : Line, Segment, Ray or Triangle
        Reference primitive.
    pt : Point, Vec3 or array-like
        Point to classify.
    normal : Vec3 or array-like, optional
        For linear primitives, the normal of the reference plane the line
        lies in; the dividing plane contains the line and ``normal``. The
        XY plane (normal +Z) is implied when omitted. For a triangle it
        replaces the triangle's own normal.
    tolerances : Tolerances, optional
        Numeric thresholds.

    Returns
    -------
    float
        ``dot(n, cross(d, p - o))`` for linear primitives and
        ``dot(n, p - a)`` for triangles, with ``d`` and ``n`` unit length.

    Raises
    ------
    DegenerateGeometryError
        If the direction, normal or triangle plane is undefined, or the
        direction is parallel to the reference normal.
    """
    tol = resolve(tolerances)
    p = np.asarray(as_vec3(pt), dtype=float)

    if isinstance(primitive, Triangle):
        a = np.asarray(primitive.a, dtype=float)
        if normal is None:
            if primitive.is_degenerate(tol):
                raise DegenerateGeometryError("Triangle vertices are collinear")
            n = _unit(np.cross(np.asarray(primitive.b) - a, np.asarray(primitive.c) - a), "Triangle normal")
        else:
            n = _unit(np.asarray(as_vec3(normal), dtype=float), "Normal")
        return float(np.dot(n, p - a))

    if isinstance(primitive, Line):
        origin, direction = primitive.origin, primitive.end.subtract(primitive.origin)
    elif isinstance(primitive, Segment):
        origin, direction = primitive.start, primitive.end.subtract(primitive.start)
    elif isinstance(primitive, Ray):
        origin, direction = primitive.origin, primitive.direction
    else:
        raise TypeError(f"Orientation is not defined for {type(primitive).__name__}")

    d = _unit(np.asarray(direction, dtype=float), "Direction")
    n = _unit(np.asarray(UNIT_Z if normal is None else as_vec3(normal), dtype=float), "Normal")
    dn = np.cross(d, n)
    if float(np.dot(dn, dn)) <= tol.parallel:
        raise DegenerateGeometryError("Direction is parallel to the reference normal, the dividing plane is undefined")
    return float(np.dot(n, np.cross(d, p - np.asarray(origin, dtype=float))))


def orientation_point(primitive, pt, normal=None, tolerances: Tolerances | None = None) -> Orientation:
    """Classify ``pt`` as POSITIVE, NEGATIVE or COMMON relative to ``primitive``.

    See ``signed_offset`` for the sign convention.
    """
    value = signed_offset(primitive, pt, normal, tolerances)
    result = classify(value, tolerances)
    logger.debug("Orientation of %s: offset=%.3g -> %s", tuple(as_vec3(pt)), value, result.name)
    return result
