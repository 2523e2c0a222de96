"""
Display Pipeline - radiance -> 8-bit sRGB-ish colour
Exposure -> horizon glow -> sunset bias -> ACES -> gamma -> quantize

Every stage takes and returns an (N, 3) float array so a whole column of
view samples is mapped in one pass. The order of the stages is fixed.
"""
from __future__ import annotations
import math, numpy as np

from ..core.config import RenderConfig, DEFAULT_CONFIG


def _smoothstep(x):
    return x * x * (3.0 - 2.0 * x)


def exposure_for(sun_height: float, config: RenderConfig = DEFAULT_CONFIG) -> float:
    """
    Exposure multiplier from sun height (= sin(altitude)).

      sh <= -0.15        : night
      -0.15 < sh <= 0    : smoothstep night -> sunset
      0 < sh <= 0.4      : smoothstep sunset -> day
      sh > 0.4           : day
    """
    if sun_height <= -0.15:
        return config.exposure_night
    if sun_height <= 0.0:
        s = _smoothstep((sun_height + 0.15) / 0.15)
        return config.exposure_night + s * (config.exposure_sunset - config.exposure_night)
    if sun_height <= 0.4:
        s = _smoothstep(sun_height / 0.4)
        return config.exposure_sunset + s * (config.exposure_day - config.exposure_sunset)
    return config.exposure_day


def horizon_glow(sun_height: float) -> float:
    return max(0.0, 1.0 - abs(sun_height) * 3.0)


def apply_glow(rgb, glow: float):
    """Warm the colour while the sun is near the horizon."""
    if glow <= 0.0:
        return rgb
    warmth = glow * 0.6
    boost = np.array([1.0 + warmth, 1.0 + warmth * 0.3, 1.0 - warmth * 0.2])
    return rgb * boost


def sunset_bias(rgb, strength: float = 0.5):
    """Push dim colours towards magenta; bright colours barely move."""
    lum = rgb[:, 0]*0.2126 + rgb[:, 1]*0.7152 + rgb[:, 2]*0.0722
    w = (1.0 / (1.0 + 2.0 * lum))[:, np.newaxis]
    kw = strength * w
    bias = np.concatenate([1.0 + 0.5*kw, 1.0 - 0.5*kw, 1.0 + 1.0*kw], axis=1)
    return np.clip(rgb * bias, 0.0, None)


def aces(rgb):
    n = rgb * (2.51 * rgb + 0.03)
    d = rgb * (2.43 * rgb + 0.59) + 0.14
    return np.clip(n / d, 0.0, 1.0)


def gamma_encode(rgb, gamma: float = 2.2):
    return np.power(rgb, 1.0 / gamma)


def quantize(rgb):
    """[0,1] floats -> uint8, rounding halves up."""
    return np.floor(np.clip(rgb, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


def tone_map(radiance, altitude: float, config: RenderConfig = DEFAULT_CONFIG):
    """
    Map raw in-scattered radiance to displayable colours.

    Args:
        radiance: (N, 3) or (3,) radiance, non-negative
        altitude: sun altitude the radiance was rendered for (radians)
        config  : exposure/gamma presets

    Returns:
        uint8 array of the same shape as `radiance`
    """
    rgb = np.asarray(radiance, dtype=np.float64)
    single = rgb.ndim == 1
    rgb = np.atleast_2d(rgb)

    sun_height = math.sin(altitude)
    rgb = rgb * exposure_for(sun_height, config)
    rgb = apply_glow(rgb, horizon_glow(sun_height))
    rgb = sunset_bias(rgb, config.sunset_bias_strength)
    rgb = aces(rgb)
    rgb = gamma_encode(rgb, config.gamma)
    out = quantize(rgb)
    return out[0] if single else out
