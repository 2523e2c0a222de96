"""
skyhorizon - sky colour gradients from the sun's position

Main exports:
    compute_sky     - timestamp + location -> SkyResult (gradient CSS, colours)
    realtime_sky    - generator re-rendering on an interval
    render_gradient - corrected altitude -> GradientResult
    get_sun_position - solar ephemeris (radians)
"""

from .core import (
    SunPosition,
    GradientStop,
    GradientResult,
    SunTimes,
    SkyResult,
    RenderConfig,
    DEFAULT_CONFIG,
    get_sun_position,
    SunTimesError,
    SunTimesRequest,
    SunTimesCache,
    default_sun_times_provider,
)
from .atmosphere import (
    CorrectionStrategy,
    multiple_scattering_offset,
    light_pollution_altitude,
)
from .imaging import render_gradient
from .compute import compute_sky
from .realtime import realtime_sky

__all__ = [
    'compute_sky',
    'realtime_sky',
    'render_gradient',
    'get_sun_position',
    'multiple_scattering_offset',
    'light_pollution_altitude',
    'CorrectionStrategy',
    'SunPosition',
    'GradientStop',
    'GradientResult',
    'SunTimes',
    'SkyResult',
    'RenderConfig',
    'DEFAULT_CONFIG',
    'SunTimesError',
    'SunTimesRequest',
    'SunTimesCache',
    'default_sun_times_provider',
]

__version__ = '0.1.0'
