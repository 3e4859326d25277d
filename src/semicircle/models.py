from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, TypeAlias

Point: TypeAlias = tuple[float, float]

DEFAULT_START_ANGLE = 0.0
DEFAULT_STOP_ANGLE = 359.9999

_OPTION_KEYS = ("start_angle", "stop_angle", "arc")


@dataclass(slots=True)
class ArcSpec:
    start_angle: float = DEFAULT_START_ANGLE  # degrees, 0 = North, clockwise
    stop_angle: float = DEFAULT_STOP_ANGLE
    radius_x: float = 1.0
    radius_y: float = 0.0
    draw_as_wedge: bool = True

    def __post_init__(self) -> None:
        if not self.radius_x > 0:
            raise ValueError(f"radius_x must be positive, got {self.radius_x}")
        if not self.radius_y > 0:
            self.radius_y = self.radius_x

    @classmethod
    def from_options(
        cls, options: Mapping[str, Any], *, radius_x: float = 1.0, radius_y: float = 0.0
    ) -> ArcSpec:
        unknown = sorted(set(options) - set(_OPTION_KEYS))
        if unknown:
            raise ValueError(f"Unsupported option(s): {', '.join(unknown)}")
        return cls(
            start_angle=float(options.get("start_angle", DEFAULT_START_ANGLE)),
            stop_angle=float(options.get("stop_angle", DEFAULT_STOP_ANGLE)),
            radius_x=radius_x,
            radius_y=radius_y,
            draw_as_wedge=not bool(options.get("arc", False)),
        )


@dataclass(frozen=True, slots=True)
class CanonicalArc:
    low: float   # radians, screen space (y down), low <= high
    high: float
    is_partial: bool

    @property
    def sweep(self) -> float:
        return self.high - self.low


@dataclass(frozen=True, slots=True)
class MoveTo:
    point: Point


@dataclass(frozen=True, slots=True)
class LineTo:
    point: Point


@dataclass(frozen=True, slots=True)
class EllipticalArc:
    center: Point
    start: Point
    end: Point
    radius_x: float
    radius_y: float
    start_angle: float  # radians, visual angle of ``start``
    stop_angle: float
    large_arc: int
    sweep: int = 1  # clockwise on a y-down surface


@dataclass(frozen=True, slots=True)
class ClosePath:
    pass


@dataclass(frozen=True, slots=True)
class FullEllipse:
    center: Point
    radius_x: float
    radius_y: float


Segment: TypeAlias = MoveTo | LineTo | EllipticalArc | ClosePath | FullEllipse


@dataclass(slots=True)
class PathSpec:
    segments: list[Segment] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.segments

    @property
    def is_full(self) -> bool:
        return any(isinstance(s, FullEllipse) for s in self.segments)

    @property
    def closed(self) -> bool:
        return any(isinstance(s, ClosePath) for s in self.segments)

    def arcs(self) -> list[EllipticalArc]:
        return [s for s in self.segments if isinstance(s, EllipticalArc)]
