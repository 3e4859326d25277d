import math
from pathlib import Path

import cairo
import pytest

from semicircle.cairo_renderer import CairoRenderer, draw_path, render_png
from semicircle.geometry import canonicalize
from semicircle.models import ArcSpec
from semicircle.renderer import build_wedge_path
from semicircle.shapes import SemiCircleMarker

CENTER = (100.0, 100.0)


class RecordingContext:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def __getattr__(self, name: str):
        def record(*args):
            self.calls.append((name, *args))

        return record

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]


def _path(start: float, stop: float, rx: float = 50.0, ry: float = 50.0, wedge: bool = True):
    arc = canonicalize(ArcSpec(start_angle=start, stop_angle=stop))
    return build_wedge_path(CENTER, CENTER, arc, rx, ry, draw_as_wedge=wedge)


def test_wedge_draw_calls() -> None:
    ctx = RecordingContext()
    draw_path(ctx, _path(0.0, 90.0))
    assert ctx.names() == ["new_path", "move_to", "arc", "line_to", "close_path", "fill_preserve", "stroke"]
    assert ctx.calls[1] == ("move_to", 100.0, 100.0)
    name, cx, cy, r, a1, a2 = ctx.calls[2]
    assert (cx, cy, r) == (100.0, 100.0, 50.0)
    assert a1 == pytest.approx(-math.pi / 2)
    assert a2 == pytest.approx(0.0)
    assert ctx.calls[3] == ("line_to", 100.0, 100.0)


def test_open_arc_is_stroked_only() -> None:
    ctx = RecordingContext()
    draw_path(ctx, _path(0.0, 90.0, wedge=False))
    assert ctx.names() == ["new_path", "arc", "stroke"]


def test_ellipse_scales_around_arc() -> None:
    ctx = RecordingContext()
    draw_path(ctx, _path(0.0, 90.0, rx=50.0, ry=25.0), fill=True, stroke=False)
    assert ctx.names() == [
        "new_path", "move_to", "save", "scale", "arc", "restore", "line_to", "close_path",
        "fill_preserve", "new_path",
    ]
    assert ctx.calls[3] == ("scale", 1.0, 0.5)
    assert ctx.calls[4][1:4] == (100.0, 200.0, 50.0)


def test_full_ellipse_draw_calls() -> None:
    ctx = RecordingContext()
    draw_path(ctx, _path(0.0, 359.9999, rx=40.0, ry=20.0))
    assert ctx.names() == ["new_path", "save", "scale", "arc", "restore", "close_path", "fill_preserve", "stroke"]
    assert ctx.calls[3][4:] == (0.0, 2.0 * math.pi)


def test_renderer_skips_shapes_outside_viewport() -> None:
    ctx = RecordingContext()
    renderer = CairoRenderer(ctx, (0.0, 0.0, 50.0, 50.0))
    renderer.update(SemiCircleMarker((500.0, 500.0), 20.0, start_angle=0.0, stop_angle=90.0))
    assert ctx.calls == []


def _painted(surface: cairo.ImageSurface, x: int, y: int) -> bool:
    surface.flush()
    offset = y * surface.get_stride() + x * 4
    return bytes(surface.get_data()[offset:offset + 4]) != b"\x00\x00\x00\x00"


def test_draws_quarter_wedge_on_surface() -> None:
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, 200, 200)
    ctx = cairo.Context(surface)
    ctx.set_source_rgba(0.0, 0.0, 0.0, 1.0)
    renderer = CairoRenderer(ctx, (0.0, 0.0, 200.0, 200.0))
    renderer.update(SemiCircleMarker(CENTER, 80.0, start_angle=0.0, stop_angle=90.0))
    assert _painted(surface, 130, 70)
    assert not _painted(surface, 70, 130)
    assert not _painted(surface, 130, 130)


def test_draws_elliptical_wedge_on_surface() -> None:
    surface = cairo.ImageSurface(cairo.FORMAT_ARGB32, 200, 200)
    ctx = cairo.Context(surface)
    ctx.set_source_rgba(0.0, 0.0, 0.0, 1.0)
    CairoRenderer(ctx, stroke=False).update(
        SemiCircleMarker(CENTER, 80.0, 40.0, start_angle=90.0, stop_angle=180.0)
    )
    assert _painted(surface, 130, 115)
    assert not _painted(surface, 110, 150)
    assert not _painted(surface, 130, 85)


def test_render_png(tmp_path: Path) -> None:
    out = tmp_path / "wedge.png"
    render_png([SemiCircleMarker(CENTER, 50.0, start_angle=45.0, stop_angle=135.0)], out, 200, 200)
    assert out.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"
