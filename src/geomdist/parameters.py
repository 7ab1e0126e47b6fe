"""Type-safe n    Orientation rejects a direction whose |d x n|^2 (unit d, n) falls at or below it.
umeric tolerances for distance and orientation queries.

Every engine entry point accepts an optional ``Tolerances``; ``None`` means
``DEFAULT_TOLERANCES``. Inline docs explain what each threshold controls.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Tolerances:
    """Thresholds guarding numerically singular configurations.

    Default values suit coordinates of order 1e-3 .. 1e3.
    Use loose() for noisy input, strict() for explicit intent.
    """

    parallel: float = 1e-10
    """Relative threshold on |u x v|^2 / (|u|^2 |v|^2). Below it two directions are parallel.

    Also applied to (n . v)^2 / (|n|^2 |v|^2) when a direction runs parallel to a plane,
    and to |d x n|^2 (unit d, n) when orientation checks a direction against its reference normal.
    """

    degenerate: float = 1e-12
    """Relative threshold on |(b - a) x (c - a)|^2 / (|b - a|^2 |c - a|^2). At or below it a triangle is collinear.

    Directions and normals are rejected only when exactly zero.
    """

    coplanar: float = 1e-10
    """Signed distance (length units) within which orientation reports COMMON."""

    barycentric: float = 1e-10
    """Slack on barycentric coordinates for the point-in-triangle test."""

    singular: float = 1e-12
    """Absolute determinant at or below which a matrix is not invertible."""

    equality: float = 1e-9
    """Per-component tolerance for is_close() comparisons."""

    @classmethod
    def loose(cls) -> "Tolerances":
        """Permissive tolerances for noisy or single-precision input."""
        return cls(
            parallel=1e-6,
            degenerate=1e-9,
            coplanar=1e-6,
            barycentric=1e-7,
            singular=1e-9,
            equality=1e-6,
        )

    @classmethod
    def strict(cls) -> "Tolerances":
        """Strict tolerances (same as default). For explicit intent."""
        return cls()


DEFAULT_TOLERANCES = Tolerances()


def resolve(tolerances: "Tolerances | None") -> Tolerances:
    """Return ``tolerances`` or the package default."""
    return DEFAULT_TOLERANCES if tolerances is None else tolerances
