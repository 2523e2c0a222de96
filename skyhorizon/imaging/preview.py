"""
Gradient preview - stops -> raster -> pygame Surface / PNG.
Works headless: no display mode is needed to build or save a surface.
"""
from __future__ import annotations
import numpy as np
import pygame


def gradient_to_array(result, width: int, height: int) -> np.ndarray:
    """
    Rasterise a gradient into an (H, W, 3) uint8 image.

    `result` is anything with a `stops` sequence (GradientResult, SkyResult).
    The top row sits at 100 %, the bottom row at 0 %; rows between are
    interpolated linearly between neighbouring stops.
    """
    if width < 1 or height < 1:
        raise ValueError(f"preview size must be positive, got {width}x{height}")
    stops = sorted(result.stops, key=lambda s: s.percent)
    if not stops:
        raise ValueError("gradient has no stops")

    pct = np.array([s.percent for s in stops], dtype=np.float64)
    rgb = np.array([s.color for s in stops], dtype=np.float64)

    if height == 1:
        rows = np.array([100.0])
    else:
        rows = np.linspace(100.0, 0.0, height)
    column = np.stack([np.interp(rows, pct, rgb[:, c]) for c in range(3)], axis=-1)
    column = np.floor(np.clip(column, 0, 255) + 0.5).astype(np.uint8)
    return np.repeat(column[:, np.newaxis, :], width, axis=1)


def gradient_surface(result, width: int, height: int) -> pygame.Surface:
    """pygame Surface of the gradient (surfarray is column-major: W, H, 3)."""
    arr = gradient_to_array(result, width, height)
    return pygame.surfarray.make_surface(arr.swapaxes(0, 1))


def save_gradient(result, path, width: int = 256, height: int = 512):
    """Write a PNG (or any format pygame.image.save understands)."""
    surf = gradient_surface(result, width, height)
    pygame.image.save(surf, str(path))
    return path
