from __future__ import annotations

import logging
import weakref
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import TYPE_CHECKING

from svgpathtools import parse_path

from .models import ClosePath, EllipticalArc, FullEllipse, LineTo, MoveTo, PathSpec, Point

if TYPE_CHECKING:
    from .shapes import SemiCircleMarker

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
EMPTY_PATH = "M0 0"


def format_number(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def _pt(point: Point) -> str:
    return f"{format_number(point[0])},{format_number(point[1])}"


def path_data(path: PathSpec) -> str:
    """Serialize a path spec into SVG path commands."""
    if path.is_empty:
        return EMPTY_PATH

    parts: list[str] = []
    for segment in path.segments:
        if isinstance(segment, MoveTo):
            parts.append("M" + _pt(segment.point))
        elif isinstance(segment, LineTo):
            parts.append("L" + _pt(segment.point))
        elif isinstance(segment, EllipticalArc):
            radii = f"{format_number(segment.radius_x)},{format_number(segment.radius_y)}"
            parts.append(f"A{radii} 0 {segment.large_arc},{segment.sweep} {_pt(segment.end)}")
        elif isinstance(segment, ClosePath):
            parts.append("z")
        elif isinstance(segment, FullEllipse):
            cx, cy = segment.center
            rx, ry = segment.radius_x, segment.radius_y
            arc = f"a{format_number(rx)},{format_number(ry)} 0 1,0 "
            parts.append(
                "M" + _pt((cx - rx, cy))
                + arc + format_number(rx * 2) + ",0 "
                + arc + format_number(-rx * 2) + ",0"
            )
    return " ".join(parts)


def path_bbox(d: str) -> tuple[float, float, float, float] | None:
    """Return (min_x, min_y, max_x, max_y) of a path string, None if empty."""
    parsed = parse_path(d)
    if len(parsed) == 0:
        return None
    xmin, xmax, ymin, ymax = parsed.bbox()
    return (xmin, ymin, xmax, ymax)


class SvgRenderer:
    """Retained SVG model: one ``<path>`` per shape, updated in place."""

    def __init__(self, width: float | None = None, height: float | None = None, padding: float = 1.0) -> None:
        self.width = width
        self.height = height
        self.padding = padding
        self._paths: dict[str, str] = {}
        self._fills: dict[str, bool] = {}
        self._keys: weakref.WeakKeyDictionary[SemiCircleMarker, str] = weakref.WeakKeyDictionary()
        self._counter = 0

    @property
    def viewport(self) -> tuple[float, float, float, float] | None:
        if self.width is None or self.height is None:
            return None
        return (0.0, 0.0, float(self.width), float(self.height))

    def set_path(self, key: str, d: str, *, filled: bool = True) -> None:
        self._paths[key] = d
        self._fills[key] = filled

    def get_path(self, key: str) -> str:
        return self._paths[key]

    def key_for(self, shape: SemiCircleMarker) -> str:
        key = self._keys.get(shape)
        if key is None:
            self._counter += 1
            key = f"semicircle-{self._counter}"
            self._keys[shape] = key
        return key

    def remove(self, shape: SemiCircleMarker) -> None:
        key = self._keys.pop(shape, None)
        if key is None:
            return
        self._paths.pop(key, None)
        self._fills.pop(key, None)
        logger.debug("Removed path %s", key)

    def update(self, shape: SemiCircleMarker) -> str:
        path = shape.build_path(self.viewport)
        d = path_data(path)
        key = self.key_for(shape)
        self.set_path(key, d, filled=path.closed or path.is_full)
        logger.debug("Set path %s: %s", key, d)
        return d

    def view_box(self) -> tuple[float, float, float, float]:
        viewport = self.viewport
        if viewport is not None:
            return (viewport[0], viewport[1], viewport[2] - viewport[0], viewport[3] - viewport[1])

        boxes = [b for b in (path_bbox(d) for d in self._paths.values()) if b is not None]
        if not boxes:
            return (0.0, 0.0, 0.0, 0.0)
        min_x = min(b[0] for b in boxes) - self.padding
        min_y = min(b[1] for b in boxes) - self.padding
        max_x = max(b[2] for b in boxes) + self.padding
        max_y = max(b[3] for b in boxes) + self.padding
        return (min_x, min_y, max_x - min_x, max_y - min_y)

    def to_element(self) -> ET.Element:
        x, y, w, h = self.view_box()
        root = ET.Element(
            "svg",
            {
                "xmlns": SVG_NS,
                "width": format_number(w),
                "height": format_number(h),
                "viewBox": " ".join(format_number(v) for v in (x, y, w, h)),
            },
        )
        for key, d in self._paths.items():
            attribs = {"id": key, "d": d}
            if not self._fills[key]:
                attribs["fill"] = "none"
            ET.SubElement(root, "path", attribs)
        return root

    def tostring(self) -> str:
        return ET.tostring(self.to_element(), encoding="unicode")

    def write(self, path: str | Path) -> None:
        Path(path).write_text(self.tostring(), encoding="utf-8")
        logger.debug("Wrote %d path(s) to %s", len(self._paths), path)
