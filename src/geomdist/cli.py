import argparse
import json
import sys

from . import __version__
from .batch import distance_matrix
from .distance import distance
from .errors import GeometryError
from .orientation import orientation_point, signed_offset
from .primitives import Point
from .utils import (
    configure_debug_logging,
    format_result,
    parse_primitive,
    parse_vector,
    read_primitives_file,
    result_to_dict,
)


def print_header(first, second):
    """
    Print formatted header with version and the parsed primitives.

    Args:
        first: Primitive A
        second: Primitive B
    """
    print("=" * 80)
    print(" " * 35 + "GEOMDIST")
    print(" " * 18 + "Closest Points Between Geometric Primitives")
    print("=" * 80)
    print()
    print(f"Version:        geomdist v{__version__}")
    print(f"A:              {first!r}")
    print(f"B:              {second!r}")
    print()
    print("=" * 80)
    print()


def _run_file(args):
    primitives = read_primitives_file(args.file)
    matrix = distance_matrix(primitives, primitives)
    if args.json:
        print(json.dumps({"distances": matrix.tolist()}, indent=2))
        return
    for i, row in enumerate(matrix):
        print(f"{i:>4d}  " + "  ".join(f"{d:{args.precision + 6}.{args.precision}f}" for d in row))


def main(argv=None):
    p = argparse.ArgumentParser(description="Minimum distance and closest points between two primitives.")
    p.add_argument("first", nargs="?", help='Primitive A, e.g. "segment 0,0,0 10,0,0"')
    p.add_argument("second", nargs="?", help='Primitive B, e.g. "point -5,0,0"')

    p.add_argument("--version", action="store_true",
                   help="Print version information and exit")
    p.add_argument("-f", "--file", type=str,
                   help="Read primitives (one per line) from a file and print their pairwise distance matrix")

    # Orientation
    p.add_argument("--orientation", action="store_true",
                   help="Classify point B against primitive A instead of computing a distance")
    p.add_argument("-n", "--normal", type=str,
                   help="Reference normal for --orientation, e.g. 0,0,1 (default: +Z for lines, triangle normal for triangles)")

    # Output control
    p.add_argument("-j", "--json", action="store_true",
                   help="Print the result as JSON")
    p.add_argument("-p", "--precision", type=int, default=6,
                   help="Decimal places in text output (default: 6)")
    p.add_argument("-d", "--debug", action="store_true",
                   help="Enable debug output (algorithm decisions)")

    args = p.parse_args(argv)

    if args.version:
        print(f"geomdist v{__version__}")
        return 0

    if args.debug:
        configure_debug_logging()

    try:
        if args.file:
            _run_file(args)
            return 0

        if not args.first or not args.second:
            p.error("the following arguments are required: first, second")

        first = parse_primitive(args.first)
        second = parse_primitive(args.second)

        if args.orientation:
            if not isinstance(second, Point):
                p.error("--orientation requires B to be a point")
            normal = parse_vector(args.normal) if args.normal else None
            side = orientation_point(first, second, normal)
            offset = signed_offset(first, second, normal)
            if args.json:
                print(json.dumps({"orientation": side.name, "offset": offset}, indent=2))
            else:
                print(f"{'orientation':<24}{side.name}")
                print(f"{'offset':<24}{offset:.{args.precision}f}")
            return 0

        result = distance(first, second)
        if args.json:
            print(json.dumps(result_to_dict(result), indent=2))
        else:
            print_header(first, second)
            print(format_result(result, precision=args.precision))
    except (GeometryError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
