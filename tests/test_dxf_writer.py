from pathlib import Path

import ezdxf
import pytest

from semicircle.dxf_writer import write_dxf
from semicircle.geometry import canonicalize
from semicircle.models import ArcSpec
from semicircle.renderer import build_wedge_path


def _path(center, start: float, stop: float, rx: float, ry: float, wedge: bool = True):
    arc = canonicalize(ArcSpec(start_angle=start, stop_angle=stop))
    return build_wedge_path(center, center, arc, rx, ry, draw_as_wedge=wedge)


def _entities(path: Path) -> list:
    return list(ezdxf.readfile(str(path)).modelspace())


def test_circular_wedge_exports_lines_and_arc(tmp_path: Path) -> None:
    out = tmp_path / "wedge.dxf"
    write_dxf(out, [_path((100.0, 100.0), 0.0, 90.0, 50.0, 50.0)])
    entities = _entities(out)
    assert sorted(e.dxftype() for e in entities) == ["ARC", "LINE", "LINE"]
    arc = next(e for e in entities if e.dxftype() == "ARC")
    assert arc.dxf.radius == pytest.approx(50.0)
    assert arc.dxf.start_angle % 360.0 == pytest.approx(0.0, abs=1e-6)
    assert arc.dxf.end_angle == pytest.approx(90.0)


def test_open_arc_exports_arc_only(tmp_path: Path) -> None:
    out = tmp_path / "arc.dxf"
    write_dxf(out, [_path((100.0, 100.0), 0.0, 90.0, 50.0, 50.0, wedge=False)])
    assert [e.dxftype() for e in _entities(out)] == ["ARC"]


def test_elliptical_wedge_endpoints(tmp_path: Path) -> None:
    out = tmp_path / "ellipse.dxf"
    write_dxf(out, [_path((200.0, 200.0), 0.0, 90.0, 100.0, 50.0)])
    ellipse = next(e for e in _entities(out) if e.dxftype() == "ELLIPSE")
    assert ellipse.dxf.ratio == pytest.approx(0.5)
    tool = ellipse.construction_tool()
    assert tuple(tool.start_point)[:2] == pytest.approx((300.0, 200.0))
    assert tuple(tool.end_point)[:2] == pytest.approx((200.0, 250.0))


def test_tall_ellipse_uses_vertical_major_axis(tmp_path: Path) -> None:
    out = tmp_path / "tall.dxf"
    write_dxf(out, [_path((200.0, 200.0), 0.0, 90.0, 50.0, 100.0)])
    ellipse = next(e for e in _entities(out) if e.dxftype() == "ELLIPSE")
    assert tuple(ellipse.dxf.major_axis)[:2] == pytest.approx((0.0, 100.0))
    tool = ellipse.construction_tool()
    assert tuple(tool.start_point)[:2] == pytest.approx((250.0, 200.0))
    assert tuple(tool.end_point)[:2] == pytest.approx((200.0, 300.0))


def test_full_shapes(tmp_path: Path) -> None:
    out = tmp_path / "full.dxf"
    write_dxf(
        out,
        [
            _path((0.0, 0.0), 0.0, 359.9999, 30.0, 30.0),
            _path((100.0, 0.0), 0.0, 359.9999, 30.0, 60.0),
        ],
    )
    types = sorted(e.dxftype() for e in _entities(out))
    assert types == ["CIRCLE", "ELLIPSE"]


def test_mm_units_scale_geometry(tmp_path: Path) -> None:
    out = tmp_path / "mm.dxf"
    write_dxf(out, [_path((0.0, 0.0), 0.0, 359.9999, 96.0, 96.0)], unit="mm")
    circle = _entities(out)[0]
    assert circle.dxf.radius == pytest.approx(25.4)
