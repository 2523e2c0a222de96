"""
Sky Gradient Renderer

Renders the vertical colour ramp seen from the ground for a given sun
altitude:
- single scattering (Rayleigh + Mie) ray-marched along each view ray
- transmittance to space from the atmosphere module (ozone included)
- exposure / filmic tone mapping from the display pipeline

The model lives in the vertical plane that contains the sun, so azimuth
plays no part. View samples run from the horizontal (percent 0) up to the
top edge of the field of view (percent 100).
"""

from __future__ import annotations
import logging
import math
import numpy as np
from typing import List

from ..core.config import RenderConfig, DEFAULT_CONFIG
from ..core.geometry import clamp, dot, intersect_sphere, normalize
from ..core.types import GradientResult, GradientStop, Vec3, rgb_css
from ..atmosphere.atmospheric_model import (
    GROUND_RADIUS, TOP_RADIUS, SUN_INTENSITY,
    RAYLEIGH_SCATTER, MIE_SCATTER,
    RAYLEIGH_SCALE_HEIGHT, MIE_SCALE_HEIGHT,
    rayleigh_phase, mie_phase,
)
from ..atmosphere.transmittance import transmittance, transmittance_many
from .display_pipeline import exposure_for, horizon_glow, tone_map

log = logging.getLogger(__name__)

CAMERA_POSITION: Vec3 = (0.0, GROUND_RADIUS, 0.0)

_RAYLEIGH = np.array(RAYLEIGH_SCATTER)


# ─────────────────────────────────────────────────────────────────────────────
# Single-scattering integral
# ─────────────────────────────────────────────────────────────────────────────

def sun_direction(altitude: float) -> Vec3:
    return normalize((math.cos(altitude), math.sin(altitude), 0.0))


def integrate_view(view_dir: Vec3, sun_dir: Vec3,
                   config: RenderConfig = DEFAULT_CONFIG) -> Vec3:
    """
    In-scattered radiance reaching the camera along one view ray.

    Camera-to-sample transmittance is the ratio of two transmittances to
    space (sample and camera) instead of a separate integral.

    Args:
        view_dir: unit view direction
        sun_dir : unit direction towards the sun
        config  : march_steps / transmittance_steps

    Returns:
        (r, g, b) radiance, >= 0; zero if the ray never reaches the top
    """
    t_exit = intersect_sphere(CAMERA_POSITION, view_dir, TOP_RADIUS)
    if t_exit is None or t_exit <= 0.0:
        return (0.0, 0.0, 0.0)

    steps = config.march_steps
    seg = t_exit / steps
    t = (np.arange(steps) + 0.5) * seg
    view = np.array(view_dir)
    sun = np.array(sun_dir)

    pos = np.array(CAMERA_POSITION) + t[:, np.newaxis] * view
    radius = np.linalg.norm(pos, axis=1)
    up = pos / radius[:, np.newaxis]
    heights = radius - GROUND_RADIUS

    view_cos = np.clip(up @ view, -1.0, 1.0)
    sun_cos = np.clip(up @ sun, -1.0, 1.0)
    view_angles = np.arccos(np.abs(view_cos))
    sun_angles = np.arccos(sun_cos)

    # Camera end of the ratio
    cam_radius = CAMERA_POSITION[1]
    start_cos = clamp(dot(CAMERA_POSITION, view_dir) / cam_radius, -1.0, 1.0)
    downward = start_cos < 0.0
    cam_height = cam_radius - GROUND_RADIUS
    t_cam = np.array(transmittance(cam_height, math.acos(abs(start_cos)),
                                   config.transmittance_steps))

    t_space = transmittance_many(heights, view_angles, config.transmittance_steps)
    num, den = (t_space, t_cam) if downward else (t_cam, t_space)
    num, den = np.broadcast_arrays(num, den)
    # Fully opaque paths contribute nothing.
    t_view = np.divide(num, den, out=np.zeros_like(num), where=den > 0.0)

    t_light = transmittance_many(heights, sun_angles, config.transmittance_steps)

    # Constant along the ray: view and sun directions are fixed.
    sun_view_angle = math.acos(clamp(dot(sun_dir, view_dir), -1.0, 1.0))
    phase_r = rayleigh_phase(sun_view_angle)
    phase_m = mie_phase(sun_view_angle)

    density_r = np.exp(-heights / RAYLEIGH_SCALE_HEIGHT)[:, np.newaxis]
    density_m = np.exp(-heights / MIE_SCALE_HEIGHT)[:, np.newaxis]
    scattered = t_light * (_RAYLEIGH * density_r * phase_r
                           + MIE_SCATTER * density_m * phase_m)

    total = np.sum(t_view * scattered * seg, axis=0) * SUN_INTENSITY
    return (float(total[0]), float(total[1]), float(total[2]))


# ─────────────────────────────────────────────────────────────────────────────
# Gradient assembly
# ─────────────────────────────────────────────────────────────────────────────

def view_directions(config: RenderConfig = DEFAULT_CONFIG) -> List[Vec3]:
    """Unit view rays from the horizontal up to the top of the field of view."""
    focal_z = 1.0 / math.tan(math.radians(config.fov_deg * 0.5))
    n = config.samples
    return [normalize((0.0, i / (n - 1), focal_z)) for i in range(n)]


def _format_percent(percent: float) -> str:
    # Two decimals, halves rounded up, no trailing zeros
    return f"{math.floor(percent * 100.0 + 0.5) / 100.0:g}"


def gradient_css(stops) -> str:
    parts = [f"{rgb_css(stop.color)} {_format_percent(stop.percent)}%"
             for stop in stops]
    return f"linear-gradient(to top, {', '.join(parts)})"


def render_gradient(altitude: float,
                    config: RenderConfig = DEFAULT_CONFIG) -> GradientResult:
    """
    Render the sky gradient for an already-corrected sun altitude (radians).

    Pure function of (altitude, config): equal inputs give equal results.
    """
    sun_dir = sun_direction(altitude)
    n = config.samples

    radiance = np.array([integrate_view(v, sun_dir, config)
                         for v in view_directions(config)])
    colors = tone_map(radiance, altitude, config)

    sun_height = math.sin(altitude)
    log.debug("render alt=%.4f rad exposure=%.2f glow=%.3f samples=%d",
              altitude, exposure_for(sun_height, config),
              horizon_glow(sun_height), n)

    stops = [GradientStop(percent=i / (n - 1) * 100.0,
                          color=(int(c[0]), int(c[1]), int(c[2])))
             for i, c in enumerate(colors)]
    stops.sort(key=lambda stop: stop.percent)

    return GradientResult(
        stops=tuple(stops),
        gradient=gradient_css(stops),
        top_color=stops[-1].color,
        bottom_color=stops[0].color,
    )
