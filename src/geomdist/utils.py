import logging
from typing import Dict, List

from .errors import PrimitiveParseError
from .primitives import Line, Point, Polyline, Ray, Segment, Triangle
from .result import DistanceResult
from .vector import Vec3

# kind -> (constructor, min vertices, max vertices)
_KINDS = {
    "point": (lambda vs: Point(vs[0]), 1, 1),
    "line": (lambda vs: Line(vs[0], vs[1]), 2, 2),
    "segment": (lambda vs: Segment(vs[0], vs[1]), 2, 2),
    "ray": (lambda vs: Ray(vs[0], vs[1]), 2, 2),
    "triangle": (lambda vs: Triangle(vs[0], vs[1], vs[2]), 3, 3),
    "polyline": (lambda vs: Polyline(tuple(vs)), 2, None),
}


def parse_vector(text: str) -> Vec3:
    """
    Parse "x,y,z" into a Vec3.
    Fewer or more than three components are zero-filled / truncated with a warning.
    """
    try:
        values = [float(part) for part in text.split(",") if part.strip()]
    except ValueError as e:
        raise PrimitiveParseError(f"invalid coordinates '{text}'") from e
    if not values:
        raise PrimitiveParseError(f"no coordinates in '{text}'")
    return Vec3.from_values(*values)


def parse_primitive(text: str):
    """
    Parse a primitive from text such as "segment 0,0,0 10,0,0".
    The first word is the kind (point, line, segment, ray, triangle, polyline),
    followed by whitespace-separated "x,y,z" positions. A ray takes origin and direction.
    """
    parts = text.split()
    if not parts:
        raise PrimitiveParseError("empty primitive description")

    kind = parts[0].lower()
    if kind not in _KINDS:
        raise PrimitiveParseError(f"unknown primitive kind '{parts[0]}'")
    build, n_min, n_max = _KINDS[kind]

    vectors = [parse_vector(p) for p in parts[1:]]
    if len(vectors) < n_min or (n_max is not None and len(vectors) > n_max):
        expected = n_min if n_max == n_min else f"at least {n_min}"
        raise PrimitiveParseError(f"{kind} expects {expected} positions, got {len(vectors)}")
    return build(vectors)


def read_primitives_file(filepath: str) -> List:
    """
    Read one primitive per line. Blank lines and lines starting with '#' are skipped.
    """
    primitives = []
    with open(filepath, "r") as f:
        for i, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            try:
                primitives.append(parse_primitive(line))
            except PrimitiveParseError as e:
                raise PrimitiveParseError(f"Line {i}: {e}") from e
    return primitives


def result_to_dict(result: DistanceResult) -> Dict[str, object]:
    return {
        "distance": result.distance,
        "closest_point_on_self": list(result.closest_point_on_self),
        "closest_point_on_other": list(result.closest_point_on_other),
    }


def _fmt(v: Vec3, precision: int) -> str:
    return "(" + ", ".join(f"{c:.{precision}f}" for c in v) + ")"


# -----------------------------
# Debug (tabular) representation
# -----------------------------
def format_result(result: DistanceResult, precision: int = 6) -> str:
    """
    Fixed-width listing of a DistanceResult.
    """
    lines = [
        f"{'distance':<24}{result.distance:.{precision}f}",
        f"{'closest point on A':<24}{_fmt(result.closest_point_on_self, precision)}",
        f"{'closest point on B':<24}{_fmt(result.closest_point_on_other, precision)}",
    ]
    return "\n".join(lines)


def configure_debug_logging():
    """Route geomdist DEBUG messages to stderr."""
    logger = logging.getLogger("geomdist")
    if not any(getattr(h, "_geomdist_debug", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        handler._geomdist_debug = True
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
