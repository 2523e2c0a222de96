"""
Transmittance to the top of the atmosphere.

For a point at height h above the ground and a ray tilted `angle` radians
from local up, integrate optical depth along the ray to the atmosphere top
with a midpoint rule and return exp(-extinction) per RGB channel.

This is the hot path of a render, so the inner integral is evaluated with
numpy over all steps at once, and `transmittance_many` evaluates a whole
batch of (height, angle) pairs in one call.
"""

from __future__ import annotations
import math
import numpy as np

from ..core.geometry import intersect_sphere
from ..core.types import Vec3
from .atmospheric_model import (
    GROUND_RADIUS, TOP_RADIUS,
    RAYLEIGH_SCATTER, MIE_ABSORB, OZONE_ABSORB,
    RAYLEIGH_SCALE_HEIGHT, MIE_SCALE_HEIGHT,
    OZONE_PEAK_HEIGHT, OZONE_HALF_WIDTH,
)

DEFAULT_STEPS = 32

_RAYLEIGH = np.array(RAYLEIGH_SCATTER)
_OZONE    = np.array(OZONE_ABSORB)


def _depths_along(r0, sin_a, cos_a, distance, steps):
    """Midpoint-rule density integrals; all arguments broadcast as (N, 1)."""
    seg = distance / steps
    t = (np.arange(steps) + 0.5) * seg
    x = sin_a * t
    y = r0 + cos_a * t
    h = np.sqrt(x*x + y*y) - GROUND_RADIUS

    # Rays through the planet overflow to inf density -> zero transmittance
    with np.errstate(over="ignore"):
        return _integrate(h, seg[..., 0])


def _integrate(h, seg):
    od_rayleigh = np.sum(np.exp(-h / RAYLEIGH_SCALE_HEIGHT), axis=-1) * seg
    od_mie      = np.sum(np.exp(-h / MIE_SCALE_HEIGHT), axis=-1) * seg
    ozone = 1.0 - np.minimum(np.abs(h - OZONE_PEAK_HEIGHT) / OZONE_HALF_WIDTH, 1.0)
    od_ozone    = np.sum(ozone, axis=-1) * seg
    return od_rayleigh, od_mie, od_ozone


def _extinction(od_r, od_m, od_o):
    # Mie contributes its absorption only here; its scattering enters as source.
    return (_RAYLEIGH * od_r[..., np.newaxis]
            + MIE_ABSORB * od_m[..., np.newaxis]
            + _OZONE * od_o[..., np.newaxis])


def optical_depths(height: float, angle: float,
                   steps: int = DEFAULT_STEPS):
    """
    (rayleigh, mie, ozone) density integrals along the ray, in metres.
    Returns None when the ray never reaches the atmosphere top.
    """
    origin = (0.0, GROUND_RADIUS + height, 0.0)
    direction = (math.sin(angle), math.cos(angle), 0.0)

    distance = intersect_sphere(origin, direction, TOP_RADIUS)
    if not distance:
        return None

    od_r, od_m, od_o = _depths_along(
        np.array([[origin[1]]]), np.array([[direction[0]]]),
        np.array([[direction[1]]]), np.array([[distance]]), steps)
    return float(od_r[0]), float(od_m[0]), float(od_o[0])


def transmittance(height: float, angle: float,
                  steps: int = DEFAULT_STEPS) -> Vec3:
    """
    Per-channel transmittance from (height, angle) to space.

    Args:
        height: metres above the ground
        angle : ray angle from local up (radians)
        steps : midpoint-rule steps of the integral

    Returns:
        (r, g, b) in (0, 1]; (1, 1, 1) if the ray crosses no medium
    """
    depths = optical_depths(height, angle, steps)
    if depths is None:
        return (1.0, 1.0, 1.0)
    tau = _extinction(*(np.array([d]) for d in depths))[0]
    t = np.exp(-tau)
    return (float(t[0]), float(t[1]), float(t[2]))


def transmittance_many(heights, angles, steps: int = DEFAULT_STEPS) -> np.ndarray:
    """
    Vectorised `transmittance` over matching arrays of heights and angles.

    Returns an (N, 3) array. Rays that miss the atmosphere top, or start
    exactly on it, get unit transmittance.
    """
    h = np.asarray(heights, dtype=np.float64).reshape(-1, 1)
    a = np.asarray(angles, dtype=np.float64).reshape(-1, 1)
    r0 = GROUND_RADIUS + h
    sin_a, cos_a = np.sin(a), np.cos(a)

    # Same roots as intersect_sphere, for a ray in the x-y plane
    b = r0 * cos_a
    c = r0 * r0 - TOP_RADIUS * TOP_RADIUS
    discr = b * b - c
    hit = discr >= 0.0
    root = np.sqrt(np.where(hit, discr, 0.0))
    near = -b - root
    distance = np.where(near < 0.0, -b + root, near)
    valid = hit & (distance != 0.0)
    distance = np.where(valid, distance, 0.0)

    od_r, od_m, od_o = _depths_along(r0, sin_a, cos_a, distance, steps)
    out = np.exp(-_extinction(od_r, od_m, od_o))
    out[~valid[:, 0]] = 1.0
    return out
