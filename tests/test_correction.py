"""
Tests for the altitude corrections applied before rendering.

Run with: pytest tests/test_correction.py -v
"""

import math
from datetime import datetime, timedelta, timezone

import pytest

from skyhorizon.atmosphere.correction import (
    CorrectionStrategy, apply_light_pollution, correct_altitude,
    light_pollution_altitude, multiple_scattering_offset, render_altitude,
)
from skyhorizon.core.types import SunPosition, SunTimes


def deg(x):
    return math.radians(x)


class TestMultipleScatteringOffset:
    """Piecewise twilight brightening."""

    def test_high_sun_gets_two_degrees(self):
        for alt in (21.0, 45.0, 90.0):
            assert multiple_scattering_offset(deg(alt)) == pytest.approx(deg(2.0))

    def test_boundary_at_twenty_degrees(self):
        assert multiple_scattering_offset(deg(20.0)) == pytest.approx(deg(2.0), rel=1e-12)

    def test_branch_joins(self):
        """Each branch starts where the previous one ends."""
        assert multiple_scattering_offset(deg(-6.0)) == pytest.approx(deg(8.0), rel=1e-9)
        assert multiple_scattering_offset(deg(-5.999)) == pytest.approx(deg(8.0), rel=1e-4)
        assert multiple_scattering_offset(deg(-12.0)) == pytest.approx(deg(11.0), rel=1e-9)
        assert multiple_scattering_offset(deg(-12.001)) == pytest.approx(deg(11.0), rel=1e-3)

    def test_twilight_midpoint(self):
        """t = 0.5 on the (-6, 20] branch -> smoothstep 0.5 -> +5 deg."""
        assert multiple_scattering_offset(deg(7.0)) == pytest.approx(deg(5.0))

    def test_linear_decay_below_minus_twelve(self):
        assert multiple_scattering_offset(deg(-21.0)) == pytest.approx(deg(5.5))

    def test_zero_at_and_below_minus_thirty(self):
        for alt in (-30.0, -30.5, -45.0, -90.0):
            assert multiple_scattering_offset(deg(alt)) == 0.0

    def test_deep_twilight_scenario(self):
        """-0.3 rad (~ -17.2 deg) decays to ~7.8 deg of offset."""
        offset = multiple_scattering_offset(-0.3)
        assert math.degrees(offset) == pytest.approx(7.83, abs=0.01)
        assert 0.0 < offset < deg(11.0)


class TestLightPollution:
    """Bortle floor on the rendered altitude."""

    def test_bortle_nine_floor(self):
        assert light_pollution_altitude(9) == pytest.approx(deg(3.0))

    def test_bortle_one_floor(self):
        assert light_pollution_altitude(1) == pytest.approx(deg(-3.0))

    def test_unknown_class_means_no_offset(self):
        assert light_pollution_altitude(42) == pytest.approx(deg(-3.0))

    def test_floor_is_independent_of_depth(self):
        for raw in (-0.6, -1.0, -math.pi / 2):
            assert apply_light_pollution(raw, 9) == pytest.approx(deg(3.0))

    def test_bright_sky_untouched(self):
        assert apply_light_pollution(deg(30.0), 9) == deg(30.0)

    def test_none_disables(self):
        assert apply_light_pollution(-1.0, None) == -1.0

    def test_render_altitude_deep_night_city(self):
        """Offset is 0 below -30 deg, so only the floor applies."""
        assert render_altitude(deg(-80.0), bortle=9) == pytest.approx(deg(3.0))

    def test_render_altitude_adds_offset(self):
        assert render_altitude(deg(45.0)) == pytest.approx(deg(47.0))


UTC = timezone.utc
SUNRISE = datetime(2024, 3, 20, 6, 0, tzinfo=UTC)
SUNSET = datetime(2024, 3, 20, 18, 0, tzinfo=UTC)
TIMES = SunTimes(sunrise=SUNRISE, sunset=SUNSET)


def no_ephemeris(when, lat, lon):
    raise AssertionError("ephemeris should not be consulted")


class TestTwilightRamp:
    """Up to -0.5 deg within 60 minutes outside the day."""

    def correct(self, now, alt=0.1):
        return correct_altitude(now, alt, TIMES, 0.0, 0.0,
                                CorrectionStrategy.TWILIGHT_RAMP, no_ephemeris)

    def test_daytime_unchanged(self):
        assert self.correct(datetime(2024, 3, 20, 12, 0, tzinfo=UTC)) == 0.1

    def test_at_events_unchanged(self):
        assert self.correct(SUNRISE) == 0.1
        assert self.correct(SUNSET) == 0.1

    def test_half_way_before_sunrise(self):
        now = SUNRISE - timedelta(minutes=30)
        assert self.correct(now) == pytest.approx(0.1 - 0.5 * deg(0.5))

    def test_half_way_after_sunset(self):
        now = SUNSET + timedelta(minutes=30)
        assert self.correct(now) == pytest.approx(0.1 - 0.5 * deg(0.5))

    def test_close_to_event_reaches_full_bias(self):
        now = SUNSET + timedelta(seconds=1)
        assert self.correct(now) == pytest.approx(0.1 - deg(0.5), abs=1e-6)

    def test_outside_window_unchanged(self):
        assert self.correct(SUNRISE - timedelta(minutes=60)) == 0.1
        assert self.correct(SUNRISE - timedelta(hours=3)) == 0.1
        assert self.correct(SUNSET + timedelta(hours=2)) == 0.1

    def test_inverted_times_unchanged(self):
        inverted = SunTimes(sunrise=SUNSET, sunset=SUNRISE)
        now = SUNRISE - timedelta(minutes=10)
        assert correct_altitude(now, 0.1, inverted, 0.0, 0.0) == 0.1

    def test_naive_now_is_utc(self):
        naive = datetime(2024, 3, 20, 5, 30)
        assert self.correct(naive) == pytest.approx(0.1 - 0.5 * deg(0.5))


def fake_ephemeris(when, lat, lon):
    # Reported sunrise sits 0.01 rad below the horizon, sunset 0.02 rad.
    return SunPosition(altitude=-0.01 if when.hour < 12 else -0.02, azimuth=0.0)


class TestMiddayBlend:
    """Rise offset before noon, set offset after, smoothstep over 30 min."""

    def correct(self, now, alt=0.2):
        return correct_altitude(now, alt, TIMES, 0.0, 0.0,
                                CorrectionStrategy.MIDDAY_BLEND, fake_ephemeris)

    def test_morning_uses_sunrise_offset(self):
        assert self.correct(datetime(2024, 3, 20, 8, 0, tzinfo=UTC)) == pytest.approx(0.21)

    def test_afternoon_uses_sunset_offset(self):
        assert self.correct(datetime(2024, 3, 20, 16, 0, tzinfo=UTC)) == pytest.approx(0.22)

    def test_midpoint_is_half_blend(self):
        assert self.correct(datetime(2024, 3, 20, 12, 0, tzinfo=UTC)) == pytest.approx(0.215)

    def test_window_edges(self):
        start = datetime(2024, 3, 20, 11, 45, tzinfo=UTC)
        end = datetime(2024, 3, 20, 12, 15, tzinfo=UTC)
        assert self.correct(start) == pytest.approx(0.21)
        assert self.correct(end) == pytest.approx(0.22)

    def test_strategy_by_value(self):
        now = datetime(2024, 3, 20, 8, 0, tzinfo=UTC)
        assert correct_altitude(now, 0.2, TIMES, 0.0, 0.0, "blend",
                                fake_ephemeris) == pytest.approx(0.21)

    def test_unknown_strategy_rejected(self):
        with pytest.raises(ValueError):
            correct_altitude(SUNRISE, 0.2, TIMES, 0.0, 0.0, "nope")
