"""Heuristic footfall model for temple and tourist locations.

Maps a visit context (location, hour, weather, temperature and calendar
flags) to an hourly visitor count. The mean comes from fixed location
profiles multiplied by time-of-day, weather, temperature, festival and
holiday factors; Gaussian noise proportional to the location scale is
added on top.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Optional

from .profiles import (
    CLOSING_HOUR,
    LOCATION_PROFILES,
    OPENING_HOUR,
    WEATHER_MULTIPLIERS,
    get_profile,
)
from .random_variate import RandomVariate

logger = logging.getLogger(__name__)

FESTIVAL_FACTOR = 2.0
HOLIDAY_FACTOR = 1.4
DEFAULT_NOISE_RATIO = 0.15
DEFAULT_TEMPERATURE = 26.0


@dataclass(frozen=True)
class VisitContext:
    """Input features for a single footfall estimate.

    Values arriving from forms or config files are coerced on construction:
    ``hour`` becomes an int (``None`` when it cannot be read), ``temperature``
    a float defaulting to 26.0, and the calendar flags plain bools.

    Attributes:
        location: Location name, ideally one of ``LOCATIONS``.
        hour: Hour of day (24h clock).
        weather_condition: Weather label such as ``"Clear"`` or ``"Rain"``.
        temperature: Air temperature in degrees Celsius.
        is_festival: Whether the day is a festival day.
        is_holiday: Whether the day is a weekend or holiday.
    """

    location: str
    hour: Optional[int]
    weather_condition: str = "Clear"
    temperature: float = DEFAULT_TEMPERATURE
    is_festival: bool = False
    is_holiday: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "hour", coerce_hour(self.hour))
        object.__setattr__(self, "temperature", coerce_temperature(self.temperature))
        object.__setattr__(self, "is_festival", bool(self.is_festival))
        object.__setattr__(self, "is_holiday", bool(self.is_holiday))


def coerce_hour(value: Any) -> Optional[int]:
    """Read an hour as an int, or ``None`` when it is missing or unparseable."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        logger.debug("Unreadable hour %r, using off-hours factor", value)
        return None


def coerce_temperature(value: Any) -> float:
    """Read a temperature as a float, falling back to ``DEFAULT_TEMPERATURE``."""
    try:
        temperature = float(value)
    except (TypeError, ValueError):
        temperature = math.nan
    if math.isnan(temperature):
        logger.debug("Unreadable temperature %r, using %.1f", value, DEFAULT_TEMPERATURE)
        return DEFAULT_TEMPERATURE
    return temperature


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded towards +inf."""
    return int(math.floor(value + 0.5))


def time_factor(hour: Any) -> float:
    """Return the time-of-day multiplier for an hour.

    Hours outside opening time, and hours that cannot be read, get the
    off-hours factor of 0.6.
    """
    hour = coerce_hour(hour)
    if hour is None:
        return 0.6
    if 6 <= hour < 9:
        return 0.9
    if 9 <= hour < 12:
        return 1.0
    if 12 <= hour < 15:
        return 0.8
    if 15 <= hour < 18:
        return 1.1
    if 18 <= hour < 21:
        return 1.4
    return 0.6


def temperature_factor(temperature: Any) -> float:
    """Return the comfort multiplier for a temperature in Celsius."""
    temperature = coerce_temperature(temperature)
    if temperature > 32:
        return 0.8
    if temperature < 20:
        return 0.85
    return 1.0


def weather_factor(weather_condition: str) -> float:
    """Return the weather multiplier, ``1.0`` for unknown conditions."""
    return WEATHER_MULTIPLIERS.get(weather_condition, 1.0)


class FootfallModel:
    """Estimates hourly footfall from a visit context.

    Args:
        variate: Noise source. A fresh unseeded sampler is used when omitted.
        noise_ratio: Noise standard deviation as a fraction of the location's
            base scale. ``0`` makes estimates deterministic.
    """

    def __init__(
        self,
        variate: Optional[RandomVariate] = None,
        noise_ratio: float = DEFAULT_NOISE_RATIO,
    ) -> None:
        self.variate = variate if variate is not None else RandomVariate()
        self.noise_ratio = noise_ratio

    def mean_footfall(self, context: VisitContext) -> float:
        """Compute the noise-free footfall mean for a context.

        Args:
            context: Visit features to score.

        Returns:
            Expected visitor count as a float.
        """
        if context.location not in LOCATION_PROFILES:
            logger.debug("Unknown location '%s', using defaults", context.location)
        if context.weather_condition not in WEATHER_MULTIPLIERS:
            logger.debug(
                "Unknown weather '%s', using neutral factor",
                context.weather_condition,
            )

        profile = get_profile(context.location)
        return (
            profile.base_scale
            * profile.popularity
            * time_factor(context.hour)
            * (FESTIVAL_FACTOR if context.is_festival else 1.0)
            * (HOLIDAY_FACTOR if context.is_holiday else 1.0)
            * weather_factor(context.weather_condition)
            * temperature_factor(context.temperature)
        )

    def estimate(self, context: VisitContext) -> int:
        """Estimate footfall for a context, including noise.

        Args:
            context: Visit features to score.

        Returns:
            Non-negative integer visitor count.
        """
        base_scale = get_profile(context.location).base_scale
        noise = self.variate.sample(0.0, base_scale * self.noise_ratio)
        return max(0, round_half_up(self.mean_footfall(context) + noise))

    def expected_footfall(self, context: VisitContext) -> int:
        """Return the rounded noise-free mean for a context."""
        return max(0, round_half_up(self.mean_footfall(context)))

    def hourly_profile(self, location: str) -> dict[int, int]:
        """Return the baseline footfall curve across opening hours.

        Only location scale, popularity and time of day contribute, so the
        curve shows the shape of a typical day.

        Args:
            location: Location name.

        Returns:
            Mapping of hour to baseline footfall for hours 6 through 21.
        """
        profile = get_profile(location)
        return {
            hour: round_half_up(
                profile.base_scale * profile.popularity * time_factor(hour)
            )
            for hour in range(OPENING_HOUR, CLOSING_HOUR + 1)
        }
