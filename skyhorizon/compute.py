"""
compute_sky - timestamp + location -> rendered sky gradient.

Pipeline:
  ephemeris altitude
    -> optional rise/set correction (reported sunrise/sunset)
    -> multiple-scattering offset
    -> optional light-pollution floor (Bortle)
    -> render_gradient
"""

from __future__ import annotations
import logging
from datetime import datetime
from typing import Optional, Union

from .atmosphere.correction import (
    CorrectionStrategy, correct_altitude, multiple_scattering_offset,
    apply_light_pollution,
)
from .core.celestial_math import get_sun_position
from .core.config import RenderConfig, DEFAULT_CONFIG
from .core.sun_times import (
    SunTimesCache, SunTimesProvider, default_sun_times_provider,
    fetch_sun_times,
)
from .core.types import SkyResult, rgb_css
from .imaging.sky_renderer import render_gradient

log = logging.getLogger(__name__)


def _validate_location(latitude: float, longitude: float) -> None:
    if not -90.0 <= latitude <= 90.0:
        raise ValueError(f"latitude must be in [-90, 90], got {latitude}")
    if not -180.0 <= longitude <= 180.0:
        raise ValueError(f"longitude must be in [-180, 180], got {longitude}")


def _resolve_provider(sun_times) -> Optional[SunTimesProvider]:
    if sun_times is None or sun_times is False:
        return None
    if sun_times is True:
        return default_sun_times_provider
    if not callable(sun_times):
        raise TypeError(f"sun_times must be a provider callable, True or None, "
                        f"got {type(sun_times).__name__}")
    return sun_times


def compute_sky(when: datetime, latitude: float, longitude: float,
                sun_times: Union[SunTimesProvider, bool, None] = None,
                bortle: Optional[int] = None,
                strategy: CorrectionStrategy = CorrectionStrategy.TWILIGHT_RAMP,
                config: RenderConfig = DEFAULT_CONFIG,
                cache: Optional[SunTimesCache] = None) -> SkyResult:
    """
    Render the sky for an observer at (latitude, longitude) at `when`.

    Args:
        when      : timestamp (naive = UTC)
        latitude  : degrees, [-90, 90]
        longitude : degrees, [-180, 180]
        sun_times : provider callable enabling the rise/set correction;
                    True uses the sunrise-sunset.org provider; None disables
        bortle    : Bortle class 1-9 for the light-pollution floor
        strategy  : rise/set correction strategy
        config    : render quality / tone-mapping presets
        cache     : sunrise/sunset cache (module default when None)

    Raises:
        ValueError   : coordinates out of range
        SunTimesError: the provider failed
    """
    _validate_location(latitude, longitude)
    provider = _resolve_provider(sun_times)

    position = get_sun_position(when, latitude, longitude)
    altitude = position.altitude
    corrected = None
    sunrise = sunset = None

    if provider is not None:
        times = fetch_sun_times(latitude, longitude, when, provider, cache)
        corrected = correct_altitude(when, altitude, times, latitude, longitude,
                                     strategy)
        altitude = corrected
        sunrise, sunset = times.sunrise, times.sunset

    altitude = altitude + multiple_scattering_offset(altitude)
    altitude = apply_light_pollution(altitude, bortle)

    log.debug("compute_sky lat=%.4f lon=%.4f raw=%.5f render=%.5f",
              latitude, longitude, position.altitude, altitude)
    result = render_gradient(altitude, config)

    return SkyResult(
        gradient=result.gradient,
        top_color=rgb_css(result.top_color),
        bottom_color=rgb_css(result.bottom_color),
        altitude=position.altitude,
        azimuth=position.azimuth,
        render_altitude=altitude,
        corrected_altitude=corrected,
        sunrise=sunrise,
        sunset=sunset,
        stops=list(result.stops),
    )
