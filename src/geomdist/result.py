"""Distance query result model."""

from __future__ import annotations

from dataclasses import dataclass

from .vector import Vec3


@dataclass(frozen=True)
class DistanceResult:
    """Minimum distance between two primitives and the points achieving it.

    ``closest_point_on_self`` lies on the first argument of the query,
    ``closest_point_on_other`` on the second. ``distance`` always equals
    ``|closest_point_on_self - closest_point_on_other|``.
    """

    distance: float
    closest_point_on_self: Vec3
    closest_point_on_other: Vec3

    def swapped(self) -> DistanceResult:
        """Same result seen from the other primitive."""
        return DistanceResult(self.distance, self.closest_point_on_other, self.closest_point_on_self)

    def intersects(self, tol: float = 0.0) -> bool:
        return self.distance <= tol

