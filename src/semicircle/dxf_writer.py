from __future__ import annotations

import logging
import math
from pathlib import Path

import ezdxf
from ezdxf import units

from .geometry import almost_equal_points, compute_y_flip_ref, map_point, output_unit_scale, parametric_angle
from .models import ClosePath, EllipticalArc, FullEllipse, LineTo, MoveTo, PathSpec, Point

logger = logging.getLogger(__name__)

_DXF_UNIT_MAP = {
    "mm": units.MM,
    "inch": units.IN,
    "px": 0,
}


def write_dxf(
    path: str | Path,
    paths: list[PathSpec],
    *,
    unit: str = "px",
    pixel_size_mm: float = 25.4 / 96.0,
    flip_y: bool = True,
    layer: str = "0",
) -> None:
    """Export drawing-surface paths (y down) as DXF entities (y up)."""
    scale = output_unit_scale(unit, pixel_size_mm)
    y_ref = compute_y_flip_ref(paths) if flip_y else None

    doc = ezdxf.new("R2018")
    doc.units = _DXF_UNIT_MAP.get(unit.lower(), 0)
    msp = doc.modelspace()
    _ensure_layer(doc, layer)
    attribs = {"layer": layer}

    def mp(point: Point) -> Point:
        return map_point(point, scale=scale, y_flip_ref=y_ref)

    def add_line(start: Point, end: Point) -> None:
        if almost_equal_points(start, end):
            return
        a, b = mp(start), mp(end)
        msp.add_line((a[0], a[1], 0.0), (b[0], b[1], 0.0), dxfattribs=attribs)

    for spec in paths:
        first: Point | None = None
        current: Point | None = None
        for segment in spec.segments:
            if isinstance(segment, MoveTo):
                first = current = segment.point
                continue

            if isinstance(segment, LineTo):
                if current is not None:
                    add_line(current, segment.point)
                current = segment.point
                continue

            if isinstance(segment, EllipticalArc):
                _add_arc(msp, segment, mp, scale, flip_y, attribs)
                current = segment.end
                continue

            if isinstance(segment, ClosePath):
                if current is not None and first is not None:
                    add_line(current, first)
                current = first
                continue

            if isinstance(segment, FullEllipse):
                _add_full_ellipse(msp, segment, mp, scale, attribs)

    doc.saveas(str(path))
    logger.debug("Wrote %d path(s) to %s", len(paths), path)


def _add_arc(msp, arc: EllipticalArc, mp, scale: float, flip_y: bool, attribs: dict) -> None:
    center = mp(arc.center)
    t_start = parametric_angle(arc.start, arc.center, arc.radius_x, arc.radius_y)
    t_end = parametric_angle(arc.end, arc.center, arc.radius_x, arc.radius_y)
    # DXF arcs run counter-clockwise with y up.
    if flip_y:
        t_start, t_end = -t_end, -t_start

    if math.isclose(arc.radius_x, arc.radius_y):
        msp.add_arc(
            center=(center[0], center[1], 0.0),
            radius=arc.radius_x * scale,
            start_angle=math.degrees(t_start),
            end_angle=math.degrees(t_end),
            dxfattribs=attribs,
        )
        return

    major_axis, ratio, offset = _major_axis(arc.radius_x * scale, arc.radius_y * scale)
    msp.add_ellipse(
        center=(center[0], center[1], 0.0),
        major_axis=major_axis,
        ratio=ratio,
        start_param=t_start + offset,
        end_param=t_end + offset,
        dxfattribs=attribs,
    )


def _add_full_ellipse(msp, ellipse: FullEllipse, mp, scale: float, attribs: dict) -> None:
    center = mp(ellipse.center)
    if math.isclose(ellipse.radius_x, ellipse.radius_y):
        msp.add_circle((center[0], center[1], 0.0), ellipse.radius_x * scale, dxfattribs=attribs)
        return
    major_axis, ratio, _ = _major_axis(ellipse.radius_x * scale, ellipse.radius_y * scale)
    msp.add_ellipse(
        center=(center[0], center[1], 0.0),
        major_axis=major_axis,
        ratio=ratio,
        dxfattribs=attribs,
    )


def _major_axis(rx: float, ry: float) -> tuple[tuple[float, float, float], float, float]:
    """Major axis, axis ratio and parameter offset for an axis-aligned ellipse."""
    if rx >= ry:
        return ((rx, 0.0, 0.0), min(1.0, max(1e-6, ry / rx)), 0.0)
    # Major axis along y: the minor axis points to -x, so parameters shift by a quarter turn.
    return ((0.0, ry, 0.0), min(1.0, max(1e-6, rx / ry)), -math.pi / 2.0)


def _ensure_layer(doc: ezdxf.document.Drawing, layer_name: str) -> None:
    if layer_name in doc.layers:
        return
    doc.layers.new(name=layer_name)
