from __future__ import annotations
from datetime import datetime, timezone

# Lightweight time utilities (no external deps).
# Everything is UTC internally; naive datetimes are taken as UTC.

J2000_JD = 2451545.0
_J2000_UTC = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def datetime_to_julian_date(dt: datetime) -> float:
    """Convert a datetime to Julian Date (J2000.0 = 2000 Jan 1 12:00 UTC)."""
    delta = as_utc(dt) - _J2000_UTC
    return J2000_JD + delta.total_seconds() / 86400.0


def jd_to_centuries(jd: float) -> float:
    """Julian centuries from J2000.0"""
    return (jd - J2000_JD) / 36525.0


def gmst_deg(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time in degrees (IAU 1982).
    """
    T = jd_to_centuries(jd)
    gmst = 280.46061837 + 360.98564736629*(jd - J2000_JD) + 0.000387933*T*T - (T*T*T)/38710000.0
    return gmst % 360.0


def lst_deg(jd: float, lon_deg: float) -> float:
    return (gmst_deg(jd) + lon_deg) % 360.0
