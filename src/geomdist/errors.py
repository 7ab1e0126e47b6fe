"""Exception taxonomy for geomdist."""


class GeometryError(ValueError):
    """Base class for all geomdist errors."""


class DegenerateGeometryError(GeometryError):
    """A primitive's defining points collapse (zero-length direction or normal)."""


class SingularMatrixError(GeometryError):
    """Matrix inversion requested on a zero-determinant matrix."""


class PrimitiveParseError(GeometryError):
    """Text description of a primitive could not be parsed."""
