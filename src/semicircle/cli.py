from __future__ import annotations

import argparse
import logging
import sys

from .export import FORMATS, export_shapes
from .shapes import SemiCircleMarker


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render a semicircle wedge or arc to SVG, DXF or PNG.")
    parser.add_argument("output", help="Path to the output file")
    parser.add_argument(
        "--center",
        nargs=2,
        type=float,
        metavar=("X", "Y"),
        default=(50.0, 50.0),
        help="Center in pixels (default: 50 50)",
    )
    parser.add_argument("--radius", type=float, default=40.0, help="Horizontal radius in pixels (default: 40)")
    parser.add_argument("--radius-y", type=float, default=None, help="Vertical radius in pixels (default: radius)")
    parser.add_argument("--start", type=float, default=0.0, help="Start angle, degrees clockwise from North")
    parser.add_argument("--stop", type=float, default=359.9999, help="Stop angle, degrees clockwise from North")
    parser.add_argument(
        "--direction",
        type=float,
        default=None,
        help="Center the range on this direction instead of --start/--stop",
    )
    parser.add_argument("--span", type=float, default=10.0, help="Width of the range used with --direction")
    parser.add_argument("--arc", action="store_true", help="Draw an open arc instead of a wedge")
    parser.add_argument("--format", choices=FORMATS, default=None, help="Output format (default: from suffix)")
    parser.add_argument("--width", type=float, default=None, help="Canvas width in pixels")
    parser.add_argument("--height", type=float, default=None, help="Canvas height in pixels")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        shape = SemiCircleMarker(
            tuple(args.center),
            args.radius,
            args.radius_y,
            start_angle=args.start,
            stop_angle=args.stop,
            arc=args.arc,
        )
        if args.direction is not None:
            shape.set_direction(args.direction, args.span)
        export_shapes(
            [shape],
            args.output,
            fmt=args.format,
            width=args.width,
            height=args.height,
        )
    except Exception as exc:
        print(f"Conversion failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
