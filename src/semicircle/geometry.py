from __future__ import annotations

import math
from typing import Iterable

from .models import (
    ArcSpec, CanonicalArc, EllipticalArc, FullEllipse, LineTo, MoveTo, PathSpec, Point,
)

DEG_TO_RAD = math.pi / 180.0
FULL_TURN = 2.0 * math.pi
# Sweeps this close to a full turn (in degrees) are drawn as a full ellipse,
# which makes the default 0..359.9999 range a plain circle.
FULL_TURN_TOLERANCE = 1e-3


def fix_angle(angle: float) -> float:
    """Convert compass degrees (0 = North, clockwise) to screen radians."""
    return (angle - 90.0) * DEG_TO_RAD


def ordered_angles(start: float, stop: float) -> tuple[float, float]:
    if start < stop:
        return (start, stop)
    return (stop, start)


def is_partial(low: float, high: float) -> bool:
    if high >= low + FULL_TURN - FULL_TURN_TOLERANCE * DEG_TO_RAD:
        return False
    return low != high


def canonicalize(spec: ArcSpec) -> CanonicalArc:
    start, stop = ordered_angles(spec.start_angle, spec.stop_angle)
    low = fix_angle(start)
    high = fix_angle(stop)
    return CanonicalArc(low=low, high=high, is_partial=is_partial(low, high))


def sweep_direction(start: float, stop: float) -> float:
    """Midpoint of the ordered range, in the caller's degrees."""
    low, high = ordered_angles(start, stop)
    return high - (high - low) / 2.0


def edge_point(center: Point, angle: float, radius_x: float, radius_y: float) -> Point:
    """Point on the ellipse boundary in the visual direction ``angle``.

    The visual angle is mapped to the parametric angle of the ellipse so the
    edge lands on the ray from the center, not just near it.
    """
    radius_y = radius_y or radius_x
    cos_a = math.cos(angle)
    if cos_a == 0.0:
        param = angle
    else:
        param = math.atan(radius_x / radius_y * math.tan(angle))
        if cos_a < 0:
            param += math.pi
    cx, cy = center
    return (cx + math.cos(param) * radius_x, cy + math.sin(param) * radius_y)


def normalize_angle(angle: float) -> float:
    """Fold ``angle`` into (-pi, pi]."""
    angle = math.remainder(angle, FULL_TURN)
    if angle <= -math.pi:
        angle = math.pi
    return angle


def contains_point(
    arc: CanonicalArc, center: Point, radius: float, tolerance: float, point: Point
) -> bool:
    distance = math.hypot(point[0] - center[0], point[1] - center[1])
    if distance > radius + tolerance:
        return False
    if not arc.is_partial:
        return True

    angle = math.atan2(point[1] - center[1], point[0] - center[0])
    low = normalize_angle(arc.low)
    high = normalize_angle(arc.high)
    if high <= low:
        high += FULL_TURN
    if angle <= low:
        angle += FULL_TURN
    return low < angle <= high


def clamp_radius(value: float) -> float:
    return float(max(round(value), 1))


def map_point(point: Point, scale: float, y_flip_ref: float | None) -> Point:
    x, y = point
    if y_flip_ref is None:
        return (x * scale, y * scale)
    return (x * scale, (y_flip_ref - y) * scale)


def compute_y_flip_ref(paths: Iterable[PathSpec]) -> float:
    min_y: float | None = None
    max_y: float | None = None

    def update(y: float) -> None:
        nonlocal min_y, max_y
        if min_y is None or y < min_y:
            min_y = y
        if max_y is None or y > max_y:
            max_y = y

    for path in paths:
        for segment in path.segments:
            if isinstance(segment, (MoveTo, LineTo)):
                update(segment.point[1])
                continue
            if isinstance(segment, (EllipticalArc, FullEllipse)):
                cy = segment.center[1]
                update(cy - segment.radius_y)
                update(cy + segment.radius_y)

    if min_y is None or max_y is None:
        return 0.0
    return min_y + max_y


def almost_equal_points(a: Point, b: Point, eps: float = 1e-9) -> bool:
    return math.isclose(a[0], b[0], abs_tol=eps) and math.isclose(a[1], b[1], abs_tol=eps)


def output_unit_scale(unit: str, pixel_size_mm: float) -> float:
    unit_norm = unit.lower()
    if unit_norm == "mm":
        return pixel_size_mm
    if unit_norm == "inch":
        return pixel_size_mm / 25.4
    if unit_norm == "px":
        return 1.0
    raise ValueError(f"Unsupported output unit: {unit}")


def parametric_angle(point: Point, center: Point, radius_x: float, radius_y: float) -> float:
    """Inverse of the ellipse parametrization ``center + (cos t * rx, sin t * ry)``."""
    return math.atan2((point[1] - center[1]) / radius_y, (point[0] - center[0]) / radius_x)
