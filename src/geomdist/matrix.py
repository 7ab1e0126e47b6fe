"""Immutable row-major 2x2 and 3x3 matrices.

Matrices are value types: every operation returns a new matrix, so passing
the same matrix as source and destination can never alias.
"""

from __future__ import annotations

from typing import Callable, ClassVar, Iterable, List, Tuple

import numpy as np

from .errors import SingularMatrixError
from .parameters import Tolerances, resolve
from .vector import Vec2, Vec3, fit_components


class _SquareMatrix:
    """Shared implementation for ``Mat2`` and ``Mat3``."""

    SIZE: ClassVar[int] = 0
    __slots__ = ("_values",)

    def __init__(self, *values: float):
        self._values: Tuple[float, ...] = fit_components(values, self.SIZE * self.SIZE, type(self).__name__)

    # -- construction / export --------------------------------------------

    @classmethod
    def from_array(cls, arr: Iterable):
        """Build from a flat row-major sequence or a nested list of rows."""
        return cls(*np.asarray(arr, dtype=float).ravel())

    @classmethod
    def _from_ndarray(cls, m: np.ndarray):
        return cls(*m.ravel())

    def to_array(self) -> List[List[float]]:
        n = self.SIZE
        return [list(self._values[r * n:(r + 1) * n]) for r in range(n)]

    def to_flat_array(self) -> List[float]:
        return list(self._values)

    def to_ndarray(self) -> np.ndarray:
        return np.array(self._values, dtype=float).reshape(self.SIZE, self.SIZE)

    def __array__(self, dtype=None, copy=None):
        return self.to_ndarray().astype(dtype or float)

    def copy(self):
        """Value copy. Matrices are immutable, so this is only for explicit intent."""
        return type(self)(*self._values)

    clone = copy

    # -- element access -----------------------------------------------------

    def __getitem__(self, index: Tuple[int, int]) -> float:
        row, col = index
        if not (0 <= row < self.SIZE and 0 <= col < self.SIZE):
            raise IndexError(f"{type(self).__name__} index {index} out of range")
        return self._values[row * self.SIZE + col]

    def map_elements(self, fn: Callable[[float, int], float], order: str = "row"):
        """Apply ``fn(value, index)`` to every element and return a new matrix.

        ``index`` counts elements in row-major (``order="row"``) or
        column-major (``order="column"``) traversal order.
        """
        n = self.SIZE
        if order == "row":
            coords = [(r, c) for r in range(n) for c in range(n)]
        elif order == "column":
            coords = [(r, c) for c in range(n) for r in range(n)]
        else:
            raise ValueError(f"Unknown traversal order: {order}")
        out = list(self._values)
        for index, (r, c) in enumerate(coords):
            out[r * n + c] = fn(self._values[r * n + c], index)
        return type(self)(*out)

    # -- algebra --------------------------------------------------------------

    def multiply(self, other):
        if not isinstance(other, type(self)):
            raise TypeError(f"Cannot multiply {type(self).__name__} by {type(other).__name__}")
        return self._from_ndarray(self.to_ndarray() @ other.to_ndarray())

    def __matmul__(self, other):
        return self.multiply(other)

    def multiply_scalar(self, s: float):
        return type(self)(*(v * s for v in self._values))

    def determinant(self) -> float:
        return float(np.linalg.det(self.to_ndarray()))

    def transpose(self):
        return self._from_ndarray(self.to_ndarray().T)

    def inverse(self, tolerances: Tolerances | None = None):
        """Matrix inverse.

        Raises
        ------
        SingularMatrixError
            If ``|det| <= tolerances.singular``.
        """
        det = self.determinant()
        if abs(det) <= resolve(tolerances).singular:
            raise SingularMatrixError(f"{type(self).__name__} with determinant {det:g} can not be inverted")
        return self._from_ndarray(np.linalg.inv(self.to_ndarray()))

    def equal_per_element(self, other, tol: float = 0.0) -> bool:
        if not isinstance(other, type(self)):
            return False
        return all(abs(a - b) <= tol for a, b in zip(self._values, other._values))

    def __eq__(self, other) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self._values == other._values

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._values))

    def __repr__(self) -> str:
        return f"{type(self).__name__}{self._values}"


class Mat2(_SquareMatrix):
    """2x2 matrix, row-major: ``Mat2(v11, v12, v21, v22)``."""

    SIZE = 2
    __slots__ = ()

    IDENTITY: ClassVar[Mat2]
    ZERO: ClassVar[Mat2]

    def determinant(self) -> float:
        v11, v12, v21, v22 = self._values
        return v11 * v22 - v12 * v21

    def multiply_vector(self, vec: Vec2) -> Vec2:
        v11, v12, v21, v22 = self._values
        return Vec2(v11 * vec.x + v12 * vec.y, v21 * vec.x + v22 * vec.y)

    @classmethod
    def from_mat3(cls, m: Mat3) -> Mat2:
        """Upper-left 2x2 block of a 3x3 matrix."""
        v = m.to_flat_array()
        return cls(v[0], v[1], v[3], v[4])


class Mat3(_SquareMatrix):
    """3x3 matrix, row-major: ``Mat3(v11, v12, v13, v21, ..., v33)``."""

    SIZE = 3
    __slots__ = ()

    IDENTITY: ClassVar[Mat3]
    ZERO: ClassVar[Mat3]

    def multiply_vector(self, vec: Vec3) -> Vec3:
        return Vec3.from_array(self.to_ndarray() @ np.asarray(vec, dtype=float))

    @classmethod
    def from_mat2(cls, m: Mat2) -> Mat3:
        """Embed a 2x2 matrix in the upper-left block, 1 on the remaining diagonal."""
        v11, v12, v21, v22 = m.to_flat_array()
        return cls(v11, v12, 0.0, v21, v22, 0.0, 0.0, 0.0, 1.0)


Mat2.IDENTITY = Mat2(1.0, 0.0, 0.0, 1.0)
Mat2.ZERO = Mat2(0.0, 0.0, 0.0, 0.0)
Mat3.IDENTITY = Mat3(1.0, 0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0)
Mat3.ZERO = Mat3(*([0.0] * 9))
