"""
Tests for the single-scattering integrator and gradient assembly.

Run with: pytest tests/test_sky_renderer.py -v
"""

import math
import re

import pytest

from skyhorizon.atmosphere.correction import render_altitude
from skyhorizon.core.config import RenderConfig
from skyhorizon.core.geometry import length, normalize
from skyhorizon.imaging.display_pipeline import exposure_for
from skyhorizon.imaging.sky_renderer import (
    gradient_css, integrate_view, render_gradient, sun_direction,
    view_directions,
)


@pytest.fixture(scope="module")
def day_sky():
    return render_gradient(1.0)


class TestIntegrateView:
    """Radiance along a single view ray."""

    def test_blue_dominates_under_high_sun(self):
        r, g, b = integrate_view((0.0, 1.0, 0.0), sun_direction(1.0))
        assert 0.0 < r < g < b

    def test_radiance_is_finite_and_non_negative_at_night(self):
        rgb = integrate_view(normalize((0.0, 0.2, 1.0)), sun_direction(-1.2))
        assert all(c >= 0.0 and math.isfinite(c) for c in rgb)

    def test_march_steps_refine_result(self):
        coarse = integrate_view((0.0, 1.0, 0.0), sun_direction(0.8),
                                RenderConfig(march_steps=32))
        fine = integrate_view((0.0, 1.0, 0.0), sun_direction(0.8),
                              RenderConfig(march_steps=128))
        for c, f in zip(coarse, fine):
            assert c == pytest.approx(f, rel=0.1)


class TestViewDirections:
    """Vertical fan of unit view rays."""

    def test_span_and_count(self):
        dirs = view_directions(RenderConfig(samples=5))
        assert len(dirs) == 5
        assert all(length(d) == pytest.approx(1.0) for d in dirs)
        assert dirs[0] == pytest.approx((0.0, 0.0, 1.0))
        top_elevation = math.degrees(math.atan2(dirs[-1][1], dirs[-1][2]))
        assert top_elevation == pytest.approx(37.5)


class TestRenderGradient:
    """Stops, colours and CSS output."""

    def test_stop_count_and_order(self, day_sky):
        percents = [s.percent for s in day_sky.stops]
        assert len(percents) == 32
        assert percents == sorted(percents)
        assert percents[0] == 0.0
        assert percents[-1] == 100.0

    def test_extreme_colours(self, day_sky):
        assert day_sky.top_color == day_sky.stops[-1].color
        assert day_sky.bottom_color == day_sky.stops[0].color

    def test_high_sun_top_is_blue(self, day_sky):
        r, g, b = day_sky.top_color
        assert r < g < b
        assert exposure_for(math.sin(1.0)) == 18.0

    def test_colours_are_bytes(self, day_sky):
        for stop in day_sky.stops:
            assert all(isinstance(c, int) and 0 <= c <= 255 for c in stop.color)

    def test_css_string(self, day_sky):
        css = day_sky.gradient
        assert css.startswith("linear-gradient(to top, rgb(")
        assert css.endswith(" 100%)")
        parts = re.findall(r"rgb\((\d+), (\d+), (\d+)\) ([\d.]+)%", css)
        assert len(parts) == 32
        assert parts[0][3] == "0"
        assert parts[1][3] == "3.23"

    def test_pure_function(self):
        cfg = RenderConfig(samples=6, march_steps=12, transmittance_steps=12)
        assert render_gradient(0.05, cfg) == render_gradient(0.05, cfg)

    def test_samples_follow_config(self):
        cfg = RenderConfig(samples=5, march_steps=8, transmittance_steps=8)
        result = render_gradient(0.3, cfg)
        assert [s.percent for s in result.stops] == [0.0, 25.0, 50.0, 75.0, 100.0]

    def test_sunset_horizon_is_warmer_than_noon(self):
        cfg = RenderConfig(samples=4)
        sunset = render_gradient(math.radians(2.0), cfg).bottom_color
        noon = render_gradient(1.2, cfg).bottom_color
        assert sunset[0] / max(sunset[2], 1) > noon[0] / max(noon[2], 1)

    def test_deep_twilight_renders(self):
        """Deep twilight (-0.3 rad raw) renders at night exposure without failing."""
        alt = render_altitude(-0.3)
        assert math.degrees(alt) == pytest.approx(-9.36, abs=0.01)
        assert exposure_for(math.sin(alt)) == 6.0
        result = render_gradient(alt, RenderConfig(samples=4))
        assert len(result.stops) == 4

    def test_light_polluted_night_is_not_black(self):
        alt = render_altitude(-0.3, bortle=9)
        result = render_gradient(alt, RenderConfig(samples=4))
        assert sum(result.bottom_color) > 0


class TestGradientCss:
    """Percent formatting."""

    def test_rounding_and_trailing_zeros(self):
        from skyhorizon.core.types import GradientStop
        stops = [GradientStop(0.0, (1, 2, 3)), GradientStop(12.345, (4, 5, 6)),
                 GradientStop(50.0, (7, 8, 9))]
        assert gradient_css(stops) == (
            "linear-gradient(to top, rgb(1, 2, 3) 0%, "
            "rgb(4, 5, 6) 12.35%, rgb(7, 8, 9) 50%)")
