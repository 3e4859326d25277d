from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from .cairo_renderer import render_png
from .dxf_writer import write_dxf
from .shapes import SemiCircleMarker
from .svg_writer import SvgRenderer

logger = logging.getLogger(__name__)

FORMATS = ("svg", "dxf", "png")


def detect_format(output: str | Path, fmt: str | None = None) -> str:
    name = (fmt or Path(output).suffix.lstrip(".")).lower()
    if name not in FORMATS:
        raise ValueError(f"Unsupported output format: {name or output}")
    return name


def export_shapes(
    shapes: Sequence[SemiCircleMarker],
    output: str | Path,
    *,
    fmt: str | None = None,
    width: float | None = None,
    height: float | None = None,
) -> str:
    """Render ``shapes`` to ``output`` with the backend picked by format."""
    name = detect_format(output, fmt)
    logger.debug("Exporting %d shape(s) as %s to %s", len(shapes), name, output)

    if name == "svg":
        renderer = SvgRenderer(width=width, height=height)
        for shape in shapes:
            renderer.update(shape)
        renderer.write(output)
        return name

    if name == "dxf":
        write_dxf(output, [shape.build_path() for shape in shapes])
        return name

    if width is None or height is None:
        raise ValueError("PNG output needs width and height")
    render_png(shapes, output, int(width), int(height))
    return name
