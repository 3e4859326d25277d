from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Protocol

import cairo

from .models import ClosePath, EllipticalArc, FullEllipse, LineTo, MoveTo, PathSpec, Point

if TYPE_CHECKING:
    from .shapes import SemiCircleMarker

logger = logging.getLogger(__name__)

Bounds = tuple[float, float, float, float]


class DrawingContext(Protocol):
    def new_path(self) -> None: ...
    def move_to(self, x: float, y: float) -> None: ...
    def line_to(self, x: float, y: float) -> None: ...
    def arc(self, xc: float, yc: float, radius: float, angle1: float, angle2: float) -> None: ...
    def close_path(self) -> None: ...
    def save(self) -> None: ...
    def restore(self) -> None: ...
    def scale(self, sx: float, sy: float) -> None: ...
    def fill_preserve(self) -> None: ...
    def stroke(self) -> None: ...


def _scaled_arc(
    ctx: DrawingContext,
    center: Point,
    radius_x: float,
    radius_y: float,
    angle1: float,
    angle2: float,
) -> None:
    # Only a circular arc primitive is available: squash the y axis around it.
    radius_x = max(radius_x, 1.0)
    scale = max(radius_y, 1.0) / radius_x
    cx, cy = center
    if scale == 1.0:
        ctx.arc(cx, cy, radius_x, angle1, angle2)
        return
    ctx.save()
    ctx.scale(1.0, scale)
    ctx.arc(cx, cy / scale, radius_x, angle1, angle2)
    ctx.restore()


def _fill_stroke(ctx: DrawingContext, fill: bool, stroke: bool) -> None:
    if fill:
        ctx.fill_preserve()
    if stroke:
        ctx.stroke()
    else:
        ctx.new_path()


def draw_path(ctx: DrawingContext, path: PathSpec, *, fill: bool = True, stroke: bool = True) -> None:
    """Replay a path spec as immediate-mode draw calls on ``ctx``.

    Wedges move to the origin first; the arc call itself draws the line out
    to the first edge point. Open arcs start directly on the arc. Open arcs
    are never filled.
    """
    if path.is_empty:
        return

    origin: Point | None = None
    ctx.new_path()
    for segment in path.segments:
        if isinstance(segment, MoveTo):
            if path.closed:
                origin = segment.point
                ctx.move_to(*origin)
        elif isinstance(segment, LineTo):
            continue
        elif isinstance(segment, EllipticalArc):
            _scaled_arc(
                ctx, segment.center, segment.radius_x, segment.radius_y,
                segment.start_angle, segment.stop_angle,
            )
        elif isinstance(segment, ClosePath):
            if origin is not None:
                ctx.line_to(*origin)
            ctx.close_path()
        elif isinstance(segment, FullEllipse):
            _scaled_arc(ctx, segment.center, segment.radius_x, segment.radius_y, 0.0, 2.0 * math.pi)
            ctx.close_path()

    _fill_stroke(ctx, fill and (path.closed or path.is_full), stroke)


class CairoRenderer:
    """Immediate-mode renderer drawing shapes straight onto a Cairo context."""

    def __init__(
        self,
        ctx: DrawingContext,
        viewport: Bounds | None = None,
        *,
        fill: bool = True,
        stroke: bool = True,
    ) -> None:
        self.ctx = ctx
        self.viewport = viewport
        self.fill = fill
        self.stroke = stroke

    def update(self, shape: SemiCircleMarker) -> None:
        path = shape.build_path(self.viewport)
        if path.is_empty:
            logger.debug("Skip %s outside viewport", type(shape).__name__)
            return
        draw_path(self.ctx, path, fill=self.fill, stroke=self.stroke)


def render_png(
    shapes: Iterable[SemiCircleMarker],
    path: str | Path,
    width: int,
    height: int,
    *,
    rgba: tuple[float, float, float, float] = (0.2, 0.4, 0.8, 1.0),
    line_width: float = 1.0,
) -> None:
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, int(width), int(height))
    ctx = cairo.Context(surface)
    ctx.set_source_rgba(*rgba)
    ctx.set_line_width(line_width)
    renderer = CairoRenderer(ctx, (0.0, 0.0, float(width), float(height)))
    for shape in shapes:
        renderer.update(shape)
    surface.write_to_png(str(path))
    logger.debug("Wrote %dx%d PNG to %s", width, height, path)
