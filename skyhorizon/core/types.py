from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Tuple

# Used both as an RGB triple and as a 3D position/direction.
Vec3 = Tuple[float, float, float]
RGB8 = Tuple[int, int, int]


@dataclass(slots=True, frozen=True)
class SunPosition:
    altitude: float   # radians above the horizon
    azimuth: float    # radians, N=0, E=pi/2


@dataclass(slots=True, frozen=True)
class GradientStop:
    percent: float    # 0 = horizon-ward edge of the field of view, 100 = top edge
    color: RGB8


@dataclass(slots=True, frozen=True)
class GradientResult:
    stops: Tuple[GradientStop, ...]
    gradient: str
    top_color: RGB8
    bottom_color: RGB8


@dataclass(slots=True, frozen=True)
class SunTimes:
    sunrise: datetime
    sunset: datetime


@dataclass(slots=True)
class SkyResult:
    gradient: str
    top_color: str
    bottom_color: str
    altitude: float
    azimuth: float
    render_altitude: float
    corrected_altitude: Optional[float] = None
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    stops: List[GradientStop] = field(default_factory=list)


def rgb_css(color: RGB8) -> str:
    return f"rgb({color[0]}, {color[1]}, {color[2]})"
