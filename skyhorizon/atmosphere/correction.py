"""
Altitude corrections applied to the ephemeris altitude before rendering.

  1. Rise/set correction (optional): nudges the altitude using reported
     sunrise/sunset times. Two strategies exist, see CorrectionStrategy.
  2. Multiple-scattering offset: the renderer is single-scattering only,
     so twilight and early night are brightened by raising the altitude.
  3. Light-pollution floor: a Bortle 1-9 sky never gets darker than a
     fixed sun altitude.

All functions work on the scalar altitude in radians; azimuth is untouched.
"""

from __future__ import annotations
import logging
import math
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Dict

from ..core.astro_time import as_utc
from ..core.celestial_math import get_sun_position
from ..core.types import SunPosition, SunTimes

log = logging.getLogger(__name__)

DEG_TO_RAD = math.pi / 180.0


def _smoothstep(t: float) -> float:
    return t * t * (3.0 - 2.0 * t)


# ---------------------------------------------------------------------------
# Multiple scattering
# ---------------------------------------------------------------------------

def multiple_scattering_offset(altitude: float) -> float:
    """
    Altitude offset (radians) emulating multiple scattering.

      alt > 20 deg         : +2 deg
      -6 < alt <= 20 deg   : smoothstep +2 -> +8 deg
      -12 < alt <= -6 deg  : smoothstep +8 -> +11 deg
      alt <= -12 deg       : linear +11 -> 0 deg at -30 deg, 0 below
    """
    # Branches compare in radians so math.radians() inputs hit them exactly.
    alt_deg = altitude / DEG_TO_RAD

    if altitude > 20.0 * DEG_TO_RAD:
        return 2.0 * DEG_TO_RAD
    if altitude > -6.0 * DEG_TO_RAD:
        t = _smoothstep((20.0 - alt_deg) / 26.0)
        return (2.0 + t * 6.0) * DEG_TO_RAD
    if altitude > -12.0 * DEG_TO_RAD:
        t = _smoothstep((-6.0 - alt_deg) / 6.0)
        return (8.0 + t * 3.0) * DEG_TO_RAD
    if altitude <= -30.0 * DEG_TO_RAD:
        return 0.0
    # Slow decay keeps deep night from glowing
    t = min(1.0, max(0.0, (-12.0 - alt_deg) / 18.0))
    return 11.0 * (1.0 - t) * DEG_TO_RAD


# ---------------------------------------------------------------------------
# Light pollution
# ---------------------------------------------------------------------------

# Bortle class -> brightness offset in degrees of sun altitude
LIGHT_POLLUTION_OFFSETS: Dict[int, float] = {
    1: 0.0,   # pristine dark sky
    2: 0.1,   # typical dark sky
    3: 0.2,   # rural
    4: 1.0,   # rural/suburban transition
    5: 2.0,   # suburban
    6: 3.0,   # bright suburban
    7: 4.0,   # suburban/urban transition
    8: 5.0,   # city
    9: 6.0,   # inner city
}

# Single scattering alone keeps the sky lit down to about -3 deg.
SINGLE_SCATTERING_FLOOR_DEG = 3.0


def light_pollution_altitude(bortle: int) -> float:
    """Minimum rendered altitude (radians) for a Bortle class; unknown -> 0 offset."""
    offset_deg = LIGHT_POLLUTION_OFFSETS.get(bortle, 0.0)
    return (offset_deg - SINGLE_SCATTERING_FLOOR_DEG) * DEG_TO_RAD


def apply_light_pollution(altitude: float, bortle) -> float:
    if bortle is None:
        return altitude
    return max(altitude, light_pollution_altitude(bortle))


# ---------------------------------------------------------------------------
# Rise/set correction strategies
# ---------------------------------------------------------------------------

class CorrectionStrategy(Enum):
    """
    How reported sunrise/sunset times adjust the ephemeris altitude.

    TWILIGHT_RAMP : -0.5 deg smoothstep ramp within 60 min outside the day
    MIDDAY_BLEND  : rise/set offsets blended over 30 min around mid-day
    """
    TWILIGHT_RAMP = "ramp"
    MIDDAY_BLEND  = "blend"


TWILIGHT_WINDOW   = timedelta(minutes=60)
TWILIGHT_BIAS_DEG = 0.5
BLEND_WINDOW      = timedelta(minutes=30)

Ephemeris = Callable[[datetime, float, float], SunPosition]


def _twilight_ramp(now: datetime, altitude: float, sun_times: SunTimes,
                   latitude: float, longitude: float,
                   ephemeris: Ephemeris) -> float:
    now = as_utc(now)
    sunrise, sunset = as_utc(sun_times.sunrise), as_utc(sun_times.sunset)
    if sunset <= sunrise:
        return altitude

    if now < sunrise:
        remaining = sunrise - now
    elif now > sunset:
        remaining = now - sunset
    else:
        return altitude   # daytime: multiple scattering handles transitions

    if remaining > TWILIGHT_WINDOW:
        return altitude
    t = _smoothstep(1.0 - remaining / TWILIGHT_WINDOW)
    return altitude - t * TWILIGHT_BIAS_DEG * DEG_TO_RAD


def _midday_blend(now: datetime, altitude: float, sun_times: SunTimes,
                  latitude: float, longitude: float,
                  ephemeris: Ephemeris) -> float:
    now = as_utc(now)
    sunrise, sunset = as_utc(sun_times.sunrise), as_utc(sun_times.sunset)
    if sunset <= sunrise:
        return altitude

    # Shift that puts the reported event on the geometric horizon
    rise_offset = -ephemeris(sunrise, latitude, longitude).altitude
    set_offset  = -ephemeris(sunset, latitude, longitude).altitude

    midday = sunrise + (sunset - sunrise) / 2
    start = midday - BLEND_WINDOW / 2
    t = min(1.0, max(0.0, (now - start) / BLEND_WINDOW))
    s = _smoothstep(t)
    return altitude + rise_offset + s * (set_offset - rise_offset)


_STRATEGIES = {
    CorrectionStrategy.TWILIGHT_RAMP: _twilight_ramp,
    CorrectionStrategy.MIDDAY_BLEND:  _midday_blend,
}


def correct_altitude(now: datetime, altitude: float, sun_times: SunTimes,
                     latitude: float, longitude: float,
                     strategy: CorrectionStrategy = CorrectionStrategy.TWILIGHT_RAMP,
                     ephemeris: Ephemeris = get_sun_position) -> float:
    """
    Adjust a raw ephemeris altitude (radians) using reported rise/set times.

    Args:
        now      : observation time
        altitude : raw sun altitude (radians)
        sun_times: reported sunrise/sunset for the observer's day
        strategy : CorrectionStrategy (or its value string)
        ephemeris: sun position function, used by MIDDAY_BLEND
    """
    strategy = CorrectionStrategy(strategy)
    corrected = _STRATEGIES[strategy](now, altitude, sun_times,
                                      latitude, longitude, ephemeris)
    log.debug("rise/set correction (%s): %.5f -> %.5f rad",
              strategy.value, altitude, corrected)
    return corrected


def render_altitude(altitude: float, bortle=None) -> float:
    """Multiple-scattering offset followed by the light-pollution floor."""
    altitude = altitude + multiple_scattering_offset(altitude)
    return apply_light_pollution(altitude, bortle)
