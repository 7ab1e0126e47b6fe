"""2D and 3D vector value types.

All operations return new vectors; instances are frozen. Vectors support
numpy's array protocol, so ``np.asarray(v)`` yields a float array.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import numpy as np

from .errors import DegenerateGeometryError
from .parameters import resolve

logger = logging.getLogger(__name__)


def fit_components(values: Sequence[float], size: int, kind: str) -> Tuple[float, ...]:
    """Zero-fill or truncate ``values`` to exactly ``size`` floats.

    A mismatched count is not fatal; a warning is logged and the
    geometric default (zero) is used for missing components.
    """
    values = [float(v) for v in values]
    if len(values) > size:
        logger.warning("%s got %d values, extra values are cut off", kind, len(values))
        values = values[:size]
    elif len(values) < size:
        logger.warning("%s got %d values, missing values are filled with zero", kind, len(values))
        values = values + [0.0] * (size - len(values))
    return tuple(values)


@dataclass(frozen=True)
class Vec2:
    """Two-component vector."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_values(cls, *values: float) -> Vec2:
        return cls(*fit_components(values, 2, "Vec2"))

    @classmethod
    def from_array(cls, arr: Iterable[float]) -> Vec2:
        return cls.from_values(*np.asarray(arr, dtype=float).ravel())

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    def __array__(self, dtype=None, copy=None):
        return np.array([self.x, self.y], dtype=dtype or float)

    def __iter__(self):
        return iter((self.x, self.y))

    def add(self, other: Vec2) -> Vec2:
        return Vec2(self.x + other.x, self.y + other.y)

    def subtract(self, other: Vec2) -> Vec2:
        return Vec2(self.x - other.x, self.y - other.y)

    def scale(self, s: float) -> Vec2:
        return Vec2(self.x * s, self.y * s)

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vec2) -> float:
        """Perp-dot product (z of the 3D cross product)."""
        return self.x * other.y - self.y * other.x

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vec2:
        """Unit vector in the direction of this vector.

        Raises
        ------
        DegenerateGeometryError
            If the vector has zero length.
        """
        n2 = self.length_squared()
        if n2 == 0.0:
            raise DegenerateGeometryError("Cannot normalize a zero-length Vec2")
        return self.scale(1.0 / math.sqrt(n2))

    def distance_to(self, other: Vec2) -> float:
        return self.subtract(other).length()

    def lerp(self, other: Vec2, t: float) -> Vec2:
        return Vec2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def is_close(self, other: Vec2, tol: float | None = None) -> bool:
        tol = resolve(None).equality if tol is None else tol
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol

    __add__ = add
    __sub__ = subtract

    def __mul__(self, s: float) -> Vec2:
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)


@dataclass(frozen=True)
class Vec3:
    """Three-component vector."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def from_values(cls, *values: float) -> Vec3:
        return cls(*fit_components(values, 3, "Vec3"))

    @classmethod
    def from_array(cls, arr: Iterable[float]) -> Vec3:
        return cls.from_values(*np.asarray(arr, dtype=float).ravel())

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def __array__(self, dtype=None, copy=None):
        return np.array([self.x, self.y, self.z], dtype=dtype or float)

    def __iter__(self):
        return iter((self.x, self.y, self.z))

    def add(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def subtract(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def scale(self, s: float) -> Vec3:
        return Vec3(self.x * s, self.y * s, self.z * s)

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def normalize(self) -> Vec3:
        """Unit vector in the direction of this vector.

        Raises
        ------
        DegenerateGeometryError
            If the vector has zero length.
        """
        n2 = self.length_squared()
        if n2 == 0.0:
            raise DegenerateGeometryError("Cannot normalize a zero-length Vec3")
        return self.scale(1.0 / math.sqrt(n2))

    def distance_to(self, other: Vec3) -> float:
        return self.subtract(other).length()

    def lerp(self, other: Vec3, t: float) -> Vec3:
        return Vec3(
            self.x + (other.x - self.x) * t,
            self.y + (other.y - self.y) * t,
            self.z + (other.z - self.z) * t,
        )

    def is_close(self, other: Vec3, tol: float | None = None) -> bool:
        tol = resolve(None).equality if tol is None else tol
        return abs(self.x - other.x) <= tol and abs(self.y - other.y) <= tol and abs(self.z - other.z) <= tol

    __add__ = add
    __sub__ = subtract

    def __mul__(self, s: float) -> Vec3:
        return self.scale(s)

    __rmul__ = __mul__

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)


UNIT_Z = Vec3(0.0, 0.0, 1.0)


def as_vec3(value) -> Vec3:
    """Coerce a Vec3, Point, tuple/list or numpy array to ``Vec3``."""
    if isinstance(value, Vec3):
        return value
    position = getattr(value, "position", None)
    if isinstance(position, Vec3):
        return position
    return Vec3.from_array(value)
