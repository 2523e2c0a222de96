"""
Imaging - sky gradient rendering

- Single-scattering integral along vertical view rays
- Exposure and filmic tone mapping to 8-bit colour
- Gradient assembly (stops + CSS linear-gradient)
- Raster / pygame preview of a gradient
"""

from .sky_renderer import integrate_view, render_gradient, sun_direction, view_directions
from .display_pipeline import tone_map, exposure_for, horizon_glow
from .preview import gradient_to_array, gradient_surface, save_gradient

__all__ = [
    'integrate_view',
    'render_gradient',
    'sun_direction',
    'view_directions',
    'tone_map',
    'exposure_for',
    'horizon_glow',
    'gradient_to_array',
    'gradient_surface',
    'save_gradient',
]
