from __future__ import annotations

import math

from .geometry import clamp_radius, edge_point
from .models import CanonicalArc, ClosePath, EllipticalArc, FullEllipse, LineTo, MoveTo, PathSpec, Point


def pixel_radii(radius_x: float, radius_y: float | None) -> tuple[float, float]:
    rx = clamp_radius(radius_x)
    if radius_y is None or radius_y <= 0:
        return (rx, rx)
    return (rx, clamp_radius(radius_y))


def build_wedge_path(
    origin: Point,
    center: Point,
    arc: CanonicalArc,
    radius_x: float,
    radius_y: float | None,
    draw_as_wedge: bool = True,
) -> PathSpec:
    """Assemble the backend-neutral outline of a wedge or open arc.

    ``origin`` and ``center`` are drawing-surface coordinates. A range that
    is not partial degrades to a single full ellipse.
    """
    rx, ry = pixel_radii(radius_x, radius_y)
    if not arc.is_partial:
        return PathSpec([FullEllipse(center=center, radius_x=rx, radius_y=ry)])

    start = edge_point(center, arc.low, rx, ry)
    end = edge_point(center, arc.high, rx, ry)
    large_arc = 1 if arc.sweep >= math.pi else 0
    segment = EllipticalArc(
        center=center,
        start=start,
        end=end,
        radius_x=rx,
        radius_y=ry,
        start_angle=arc.low,
        stop_angle=arc.high,
        large_arc=large_arc,
    )

    if draw_as_wedge:
        return PathSpec([MoveTo(origin), LineTo(start), segment, ClosePath()])
    return PathSpec([MoveTo(start), segment])


def build_empty_path() -> PathSpec:
    return PathSpec([])
