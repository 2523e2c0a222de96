"""
Celestial Mathematics

Solar ephemeris used to drive the sky renderer:
- low-precision solar coordinates (~0.01 deg) for a Julian Date
- RA/Dec (of date) -> Altitude/Azimuth for a WGS84 observer

Altitudes are geometric (no refraction).
"""

import math
from datetime import datetime
from typing import Tuple

from .astro_time import datetime_to_julian_date, jd_to_centuries, lst_deg
from .types import SunPosition

_OBLIQUITY_J2000 = 23.43928


def _normalize_deg(x: float) -> float:
    return x % 360.0


def solar_radec(jd: float) -> Tuple[float, float]:
    """
    Apparent solar Right Ascension / Declination in degrees.

    Args:
        jd: Julian Date

    Returns:
        (ra_deg, dec_deg) - ra in [0, 360)
    """
    T = jd_to_centuries(jd)
    # Geometric mean longitude and mean anomaly
    L0 = _normalize_deg(280.46646 + 36000.76983 * T)
    M  = _normalize_deg(357.52911 + 35999.05029 * T - 0.0001537 * T*T)
    M_r = math.radians(M)
    # Equation of center
    C = ((1.914602 - 0.004817*T - 0.000014*T*T) * math.sin(M_r)
         + (0.019993 - 0.000101*T) * math.sin(2*M_r)
         + 0.000289 * math.sin(3*M_r))
    # Apparent longitude (aberration + nutation quick correction)
    omega = _normalize_deg(125.04 - 1934.136 * T)
    lam   = L0 + C - 0.00569 - 0.00478 * math.sin(math.radians(omega))
    eps   = _OBLIQUITY_J2000 - 0.013004 * T + 0.00000164 * T*T
    eps_r = math.radians(eps + 0.00256 * math.cos(math.radians(omega)))
    lam_r = math.radians(lam)

    ra_r  = math.atan2(math.cos(eps_r)*math.sin(lam_r), math.cos(lam_r))
    dec_r = math.asin(math.sin(eps_r)*math.sin(lam_r))
    return math.degrees(ra_r) % 360.0, math.degrees(dec_r)


def equatorial_to_altaz(ra_deg: float, dec_deg: float,
                        lat_deg: float, lon_deg: float,
                        jd: float) -> Tuple[float, float]:
    """
    Convert RA/Dec to Altitude/Azimuth for an observer at lat/lon/jd.

    Returns:
        (altitude_deg, azimuth_deg) - alt in [-90, 90], az N=0 E=90 in [0, 360)
    """
    lha_r = math.radians(_normalize_deg(lst_deg(jd, lon_deg) - ra_deg))
    dec_r = math.radians(dec_deg)
    lat_r = math.radians(lat_deg)

    sin_alt = (math.sin(dec_r)*math.sin(lat_r)
               + math.cos(dec_r)*math.cos(lat_r)*math.cos(lha_r))
    alt_r = math.asin(max(-1.0, min(1.0, sin_alt)))

    cos_az = ((math.sin(dec_r) - math.sin(lat_r)*sin_alt)
              / (math.cos(lat_r)*math.cos(alt_r) + 1e-12))
    az = math.degrees(math.acos(max(-1.0, min(1.0, cos_az))))
    if math.sin(lha_r) > 0:
        az = 360.0 - az

    return math.degrees(alt_r), az % 360.0


def get_sun_position(when: datetime, latitude: float,
                     longitude: float) -> SunPosition:
    """
    Sun altitude/azimuth (radians) for a timestamp and WGS84 coordinate.

    Naive datetimes are interpreted as UTC. Pure function of its inputs.
    """
    jd = datetime_to_julian_date(when)
    ra, dec = solar_radec(jd)
    alt, az = equatorial_to_altaz(ra, dec, latitude, longitude, jd)
    return SunPosition(altitude=math.radians(alt), azimuth=math.radians(az))
