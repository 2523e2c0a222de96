"""
Core package - shared types, vector geometry, render configuration,
solar ephemeris and sunrise/sunset lookup.
"""
from .types import Vec3, RGB8, SunPosition, GradientStop, GradientResult, SunTimes, SkyResult
from .config import RenderConfig, DEFAULT_CONFIG
from .celestial_math import get_sun_position
from .sun_times import (
    SunTimesError,
    SunTimesRequest,
    SunTimesCache,
    default_sun_times_provider,
    fetch_sun_times,
)

__all__ = [
    "Vec3",
    "RGB8",
    "SunPosition",
    "GradientStop",
    "GradientResult",
    "SunTimes",
    "SkyResult",
    "RenderConfig",
    "DEFAULT_CONFIG",
    "get_sun_position",
    "SunTimesError",
    "SunTimesRequest",
    "SunTimesCache",
    "default_sun_times_provider",
    "fetch_sun_times",
]
