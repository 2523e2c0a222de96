"""
Atmosphere package - fixed Earth-like atmosphere and altitude corrections.

Main exports:
    transmittance / transmittance_many - per-channel transmittance to space
    rayleigh_phase / mie_phase          - scattering phase functions
    multiple_scattering_offset          - twilight brightening offset
    light_pollution_altitude            - Bortle floor altitude
    CorrectionStrategy / correct_altitude - rise/set altitude correction
"""
from .atmospheric_model import (
    GROUND_RADIUS,
    TOP_RADIUS,
    SUN_INTENSITY,
    rayleigh_phase,
    mie_phase,
)
from .transmittance import optical_depths, transmittance, transmittance_many
from .correction import (
    CorrectionStrategy,
    correct_altitude,
    multiple_scattering_offset,
    light_pollution_altitude,
    apply_light_pollution,
    render_altitude,
)

__all__ = [
    "GROUND_RADIUS",
    "TOP_RADIUS",
    "SUN_INTENSITY",
    "rayleigh_phase",
    "mie_phase",
    "optical_depths",
    "transmittance",
    "transmittance_many",
    "CorrectionStrategy",
    "correct_altitude",
    "multiple_scattering_offset",
    "light_pollution_altitude",
    "apply_light_pollution",
    "render_altitude",
]
