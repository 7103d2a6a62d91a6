"""Tests for the heuristic footfall model."""

import numpy as np
import pytest

from temple_crowd.model.footfall import (
    FootfallModel,
    VisitContext,
    round_half_up,
    temperature_factor,
    time_factor,
    weather_factor,
)
from temple_crowd.model.profiles import (
    DEFAULT_PROFILE,
    LOCATION_PROFILES,
    LocationProfile,
    get_profile,
)
from temple_crowd.model.random_variate import RandomVariate


class _FixedVariate:
    """Noise source that always returns the same offset."""

    def __init__(self, value: float) -> None:
        self.value = value

    def sample(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        return mean + self.value


class TestFactors:
    """Tests for the individual multipliers."""

    @pytest.mark.parametrize(
        "hour,expected",
        [(5, 0.6), (6, 0.9), (8, 0.9), (9, 1.0), (11, 1.0), (12, 0.8),
         (15, 1.1), (17, 1.1), (18, 1.4), (20, 1.4), (21, 0.6)],
    )
    def test_time_factor(self, hour: int, expected: float) -> None:
        """Time factor follows the stepwise daily pattern."""
        assert time_factor(hour) == expected

    @pytest.mark.parametrize(
        "temperature,expected",
        [(33.0, 0.8), (32.0, 1.0), (26.0, 1.0), (20.0, 1.0), (19.9, 0.85)],
    )
    def test_temperature_factor(self, temperature: float, expected: float) -> None:
        """Hot and cold days reduce footfall."""
        assert temperature_factor(temperature) == expected

    def test_weather_factor_known_and_unknown(self) -> None:
        """Known weather uses the table, unknown weather is neutral."""
        assert weather_factor("Rain") == 0.6
        assert weather_factor("Snow") == 1.0

    def test_round_half_up(self) -> None:
        """Halves round upwards."""
        assert round_half_up(2.5) == 3
        assert round_half_up(3.5) == 4
        assert round_half_up(2.49) == 2


class TestProfiles:
    """Tests for the static location tables."""

    def test_profiles_are_read_only(self) -> None:
        """Location table cannot be mutated at runtime."""
        with pytest.raises(TypeError):
            LOCATION_PROFILES["New_Place"] = DEFAULT_PROFILE

    def test_unknown_location_uses_default(self) -> None:
        """Unknown locations fall back to the default profile."""
        assert get_profile("Atlantis") == LocationProfile(popularity=1.0, base_scale=200)

    def test_profile_validation(self) -> None:
        """Non-positive constants are rejected."""
        with pytest.raises(ValueError):
            LocationProfile(popularity=0.0, base_scale=100)


class TestFootfallModel:
    """Tests for the FootfallModel class."""

    def test_mysore_palace_evening_example(self) -> None:
        """Noise-free evening estimate at the palace is 1680."""
        model = FootfallModel(noise_ratio=0.0)
        context = VisitContext(
            location="Mysore_Palace",
            hour=18,
            weather_condition="Clear",
            temperature=26.0,
        )
        assert model.estimate(context) == 1680

    def test_festival_and_holiday_factors(self) -> None:
        """Festival and holiday multiply the mean by 2.0 and 1.4."""
        model = FootfallModel(noise_ratio=0.0)
        context = VisitContext(
            location="Chamundi_Temple", hour=10, is_festival=True, is_holiday=True
        )
        assert model.estimate(context) == 1680

    def test_unknown_location_and_weather_default(self) -> None:
        """Unknown inputs are defaulted rather than rejected."""
        model = FootfallModel(noise_ratio=0.0)
        context = VisitContext(location="Atlantis", hour=10, weather_condition="Snow")
        assert model.estimate(context) == 200

    def test_output_never_negative(self) -> None:
        """Large negative noise is clamped to zero."""
        model = FootfallModel(variate=_FixedVariate(-1e6))
        assert model.estimate(VisitContext(location="KRS_Dam", hour=7)) == 0

    def test_noise_added_to_mean(self) -> None:
        """Noise shifts the rounded estimate."""
        model = FootfallModel(variate=_FixedVariate(10.4))
        context = VisitContext(location="Mysore_Palace", hour=18)
        assert model.estimate(context) == 1690

    def test_identical_context_deterministic_without_noise(self) -> None:
        """Two calls with the same context agree when noise is fixed."""
        model = FootfallModel(variate=_FixedVariate(0.0))
        context = VisitContext(location="Mysore_Zoo", hour=16, weather_condition="Humid")
        assert model.estimate(context) == model.estimate(context)

    def test_seeded_models_agree(self) -> None:
        """Seeded noise makes estimates reproducible."""
        context = VisitContext(location="Brindavan_Gardens", hour=19)
        a = FootfallModel(RandomVariate(np.random.default_rng(5)))
        b = FootfallModel(RandomVariate(np.random.default_rng(5)))
        assert [a.estimate(context) for _ in range(5)] == [
            b.estimate(context) for _ in range(5)
        ]

    def test_expected_footfall(self) -> None:
        """Expected footfall ignores noise."""
        model = FootfallModel(variate=_FixedVariate(500.0))
        context = VisitContext(location="Mysore_Palace", hour=18)
        assert model.expected_footfall(context) == 1680

    def test_hourly_profile(self) -> None:
        """Hourly profile covers opening hours with time-of-day shape."""
        profile = FootfallModel().hourly_profile("Mysore_Palace")
        assert list(profile) == list(range(6, 22))
        assert profile[18] == 1680
        assert profile[10] == 1200
        assert profile[21] == 720


class TestInputCoercion:
    """Tests for lenient handling of form-style inputs."""

    def test_string_hour_is_parsed(self) -> None:
        """A numeric string hour scores like the integer hour."""
        model = FootfallModel(noise_ratio=0.0)
        context = VisitContext("Mysore_Palace", hour="18")
        assert context.hour == 18
        assert model.estimate(context) == 1680

    @pytest.mark.parametrize("hour", [None, "", "evening"])
    def test_unreadable_hour_uses_off_hours_factor(self, hour) -> None:
        """Missing or unparseable hours fall back to the 0.6 factor."""
        model = FootfallModel(noise_ratio=0.0)
        context = VisitContext("Mysore_Palace", hour=hour)
        assert context.hour is None
        assert time_factor(hour) == 0.6
        assert model.estimate(context) == 720

    @pytest.mark.parametrize("temperature", [None, "", "warm", float("nan")])
    def test_missing_temperature_defaults(self, temperature) -> None:
        """Missing or invalid temperatures are treated as 26.0 C."""
        model = FootfallModel(noise_ratio=0.0)
        context = VisitContext("Mysore_Palace", 18, temperature=temperature)
        assert context.temperature == 26.0
        assert temperature_factor(temperature) == 1.0
        assert model.estimate(context) == 1680

    def test_string_temperature_is_parsed(self) -> None:
        """Numeric strings are read as Celsius."""
        context = VisitContext("Mysore_Palace", 18, temperature="34.5")
        assert context.temperature == 34.5
        assert temperature_factor("34.5") == 0.8

    def test_flags_become_bools(self) -> None:
        """Truthy flag values are normalized to bools."""
        context = VisitContext("Mysore_Palace", 18, is_festival=1, is_holiday=0)
        assert context.is_festival is True
        assert context.is_holiday is False
        model = FootfallModel(noise_ratio=0.0)
        assert model.estimate(context) == 3360
