"""
RenderConfig - quality/cost dial and tone-mapping presets for one render.

Cost grows as samples x march_steps x transmittance_steps: each of the
`samples` view rays is marched in `march_steps` steps and every step runs
two optical-depth integrals of `transmittance_steps` steps each.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class RenderConfig:
    # Sampling
    samples:             int   = 32     # vertical view samples (= gradient stops)
    march_steps:         int   = 32     # steps along each view ray
    transmittance_steps: int   = 32     # steps of each optical-depth integral
    fov_deg:             float = 75.0   # vertical field of view

    # Exposure / tone mapping
    exposure_day:         float = 18.0
    exposure_sunset:      float = 35.0
    exposure_night:       float = 6.0
    gamma:                float = 2.2
    sunset_bias_strength: float = 0.5

    def __post_init__(self):
        if self.samples < 2:
            raise ValueError(f"samples must be >= 2, got {self.samples}")
        if self.march_steps < 1:
            raise ValueError(f"march_steps must be >= 1, got {self.march_steps}")
        if self.transmittance_steps < 1:
            raise ValueError(
                f"transmittance_steps must be >= 1, got {self.transmittance_steps}")
        if not 0.0 < self.fov_deg < 180.0:
            raise ValueError(f"fov_deg must be in (0, 180), got {self.fov_deg}")
        if self.gamma <= 0.0:
            raise ValueError(f"gamma must be positive, got {self.gamma}")


DEFAULT_CONFIG = RenderConfig()
