from importlib.metadata import version
__version__ = version("geomdist")

# Configuration and errors
from .parameters import DEFAULT_TOLERANCES, Tolerances
from .errors import DegenerateGeometryError, GeometryError, PrimitiveParseError, SingularMatrixError

# Algebra
from .vector import Vec2, Vec3
from .matrix import Mat2, Mat3

# Primitives (imported before the engine, which dispatches on them)
from .primitives import Line, Point, Polyline, Ray, Segment, Triangle, line, point, polyline, ray, segment, triangle
from .result import DistanceResult

# Main interfaces
from .distance import distance
from .orientation import Orientation, orientation_point
from .batch import distance_many, distance_matrix, nearest

__all__ = [
    # Main interfaces
    'distance',
    'orientation_point',
    'distance_many',
    'distance_matrix',
    'nearest',

    # Results
    'DistanceResult',
    'Orientation',

    # Primitives
    'Point', 'Line', 'Segment', 'Ray', 'Triangle', 'Polyline',
    'point', 'line', 'segment', 'ray', 'triangle', 'polyline',

    # Algebra
    'Vec2', 'Vec3', 'Mat2', 'Mat3',

    # Configuration
    'Tolerances',
    'DEFAULT_TOLERANCES',

    # Errors
    'GeometryError',
    'DegenerateGeometryError',
    'SingularMatrixError',
    'PrimitiveParseError',
]
