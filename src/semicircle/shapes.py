"""Semicircle shapes owned by a host drawing surface.

A shape holds an :class:`ArcSpec` plus its logical position. The host
supplies a ``to_pixel`` transform and an ``on_redraw`` callback; every
mutating setter triggers exactly one redraw request.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Callable

from .geometry import canonicalize, contains_point, ordered_angles, sweep_direction
from .models import ArcSpec, CanonicalArc, PathSpec, Point
from .renderer import build_empty_path, build_wedge_path, pixel_radii

logger = logging.getLogger(__name__)

Transform = Callable[[Point], Point]
RedrawCallback = Callable[["SemiCircleMarker"], None]
Bounds = tuple[float, float, float, float]  # min_x, min_y, max_x, max_y


def identity(point: Point) -> Point:
    return (float(point[0]), float(point[1]))


class SemiCircleMarker:
    """Semicircle whose radii are given in drawing-surface pixels."""

    def __init__(
        self,
        center: Point,
        radius: float = 10.0,
        radius_y: float | None = None,
        *,
        to_pixel: Transform = identity,
        on_redraw: RedrawCallback | None = None,
        click_tolerance: float = 0.0,
        anchor: Point | None = None,
        **options: Any,
    ) -> None:
        self.center = center
        self.anchor = anchor
        self.to_pixel = to_pixel
        self.on_redraw = on_redraw
        self.click_tolerance = click_tolerance
        self.spec = ArcSpec.from_options(options, radius_x=radius, radius_y=radius_y or 0.0)

    def start_angle(self) -> float:
        return ordered_angles(self.spec.start_angle, self.spec.stop_angle)[0]

    def stop_angle(self) -> float:
        return ordered_angles(self.spec.start_angle, self.spec.stop_angle)[1]

    def canonical(self) -> CanonicalArc:
        return canonicalize(self.spec)

    def set_start_angle(self, angle: float) -> SemiCircleMarker:
        self.spec.start_angle = angle
        return self.redraw()

    def set_stop_angle(self, angle: float) -> SemiCircleMarker:
        self.spec.stop_angle = angle
        return self.redraw()

    def set_direction(self, direction: float, degrees: float = 10.0) -> SemiCircleMarker:
        self.spec.start_angle = direction - degrees / 2.0
        self.spec.stop_angle = direction + degrees / 2.0
        return self.redraw()

    def get_direction(self) -> float:
        return sweep_direction(self.spec.start_angle, self.spec.stop_angle)

    def is_semicircle(self) -> bool:
        return self.canonical().is_partial

    def redraw(self) -> SemiCircleMarker:
        logger.debug(
            "Redraw %s start=%s stop=%s", type(self).__name__, self.spec.start_angle, self.spec.stop_angle
        )
        if self.on_redraw is not None:
            self.on_redraw(self)
        return self

    def center_px(self) -> Point:
        return self.to_pixel(self.center)

    def origin_px(self) -> Point:
        if self.anchor is None:
            return self.center_px()
        return self.to_pixel(self.anchor)

    def radii_px(self) -> tuple[float, float]:
        return (self.spec.radius_x, self.spec.radius_y)

    def pixel_bounds(self) -> Bounds:
        cx, cy = self.center_px()
        rx, ry = pixel_radii(*self.radii_px())
        return (cx - rx, cy - ry, cx + rx, cy + ry)

    def is_empty(self, viewport: Bounds | None) -> bool:
        if viewport is None:
            return False
        min_x, min_y, max_x, max_y = self.pixel_bounds()
        return max_x < viewport[0] or min_x > viewport[2] or max_y < viewport[1] or min_y > viewport[3]

    def contains_point(self, point: Point) -> bool:
        # Hit testing uses the horizontal radius only, even for ellipses.
        radius = self.radii_px()[0]
        return contains_point(self.canonical(), self.center_px(), radius, self.click_tolerance, point)

    def build_path(self, viewport: Bounds | None = None) -> PathSpec:
        if self.is_empty(viewport):
            return build_empty_path()
        rx, ry = self.radii_px()
        return build_wedge_path(
            self.origin_px(), self.center_px(), self.canonical(), rx, ry, self.spec.draw_as_wedge
        )


class SemiCircle(SemiCircleMarker):
    """Semicircle whose radii are given in world units.

    Pixel radii are measured through ``to_pixel`` from the center to a point
    one radius away along each axis.
    """

    def radii_px(self) -> tuple[float, float]:
        cx, cy = self.center
        center_px = self.center_px()
        east = self.to_pixel((cx + self.spec.radius_x, cy))
        south = self.to_pixel((cx, cy + self.spec.radius_y))
        rx = math.hypot(east[0] - center_px[0], east[1] - center_px[1])
        ry = math.hypot(south[0] - center_px[0], south[1] - center_px[1])
        return (rx, ry)


def semi_circle(center: Point, radius: float, **kwargs: Any) -> SemiCircle:
    return SemiCircle(center, radius, **kwargs)


def semi_circle_marker(center: Point, radius: float = 10.0, **kwargs: Any) -> SemiCircleMarker:
    return SemiCircleMarker(center, radius, **kwargs)
