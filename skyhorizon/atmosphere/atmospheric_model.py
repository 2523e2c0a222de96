"""
Atmospheric model - fixed Earth-like preset for the sky renderer.

Physics implemented:
  - Rayleigh scattering (molecules, per-channel RGB coefficients)
  - Mie scattering/absorption (aerosols, grey across channels)
  - Ozone absorption (per channel, triangular layer around 25 km)
  - Exponential density profiles with Rayleigh/Mie scale heights
  - Spherical planet (ground) and atmosphere top

Units: metres, radians, coefficients in 1/m.
"""

from __future__ import annotations
import math

from ..core.types import Vec3


# ---------------------------------------------------------------------------
# Scattering / absorption coefficients (1/m)
# ---------------------------------------------------------------------------

RAYLEIGH_SCATTER: Vec3 = (5.802e-6, 13.558e-6, 33.1e-6)
MIE_SCATTER  = 3.996e-6
MIE_ABSORB   = 4.44e-6
OZONE_ABSORB: Vec3 = (0.65e-6, 1.881e-6, 0.085e-6)

# ---------------------------------------------------------------------------
# Density profiles (m)
# ---------------------------------------------------------------------------

RAYLEIGH_SCALE_HEIGHT = 8e3
MIE_SCALE_HEIGHT      = 1.2e3

OZONE_PEAK_HEIGHT = 25e3
OZONE_HALF_WIDTH  = 15e3

# ---------------------------------------------------------------------------
# Geometry (m) and light
# ---------------------------------------------------------------------------

GROUND_RADIUS = 6_360e3
TOP_RADIUS    = 6_460e3
SUN_INTENSITY = 1.0

MIE_G = 0.8   # Henyey-Greenstein asymmetry


def rayleigh_density(h: float) -> float:
    return math.exp(-h / RAYLEIGH_SCALE_HEIGHT)


def mie_density(h: float) -> float:
    return math.exp(-h / MIE_SCALE_HEIGHT)


def ozone_density(h: float) -> float:
    """Triangular ozone layer: 1 at the peak, 0 beyond the half-width."""
    return 1.0 - min(abs(h - OZONE_PEAK_HEIGHT) / OZONE_HALF_WIDTH, 1.0)


# ---------------------------------------------------------------------------
# Phase functions (angle between view ray and sun direction, radians)
# ---------------------------------------------------------------------------

def rayleigh_phase(angle: float) -> float:
    """3(1 + cos^2) / (16 pi)"""
    c = math.cos(angle)
    return 3.0 * (1.0 + c * c) / (16.0 * math.pi)


def mie_phase(angle: float, g: float = MIE_G) -> float:
    """
    Cornette-Shanks form of Henyey-Greenstein:
        (3/(8 pi)) (1-g^2)(1+cos^2) / ((2+g^2)(1+g^2-2g cos)^1.5)
    """
    c = math.cos(angle)
    s = 3.0 / (8.0 * math.pi)
    num = (1.0 - g * g) * (1.0 + c * c)
    denom = (2.0 + g * g) * (1.0 + g * g - 2.0 * g * c) ** 1.5
    return s * num / denom
