"""Static location, weather and calendar tables for the footfall model.

All tables are read-only mappings built once at import time. They describe
the fixed set of Mysuru-region temples and tourist spots the predictor
knows about.
"""

from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True)
class LocationProfile:
    """Popularity and scale constants for one location.

    Attributes:
        popularity: Relative attractiveness multiplier, always positive.
        base_scale: Typical hourly visitor count before any factors apply.
    """

    popularity: float
    base_scale: int

    def __post_init__(self) -> None:
        if self.popularity <= 0:
            raise ValueError("popularity must be positive")
        if self.base_scale <= 0:
            raise ValueError("base_scale must be positive")


DEFAULT_PROFILE = LocationProfile(popularity=1.0, base_scale=200)

LOCATION_PROFILES = MappingProxyType(
    {
        "Chamundi_Temple": LocationProfile(popularity=1.2, base_scale=500),
        "Nanjangud_Temple": LocationProfile(popularity=0.9, base_scale=300),
        "Srirangapatna_Temple": LocationProfile(popularity=0.6, base_scale=150),
        "Mysore_Palace": LocationProfile(popularity=1.5, base_scale=800),
        "Brindavan_Gardens": LocationProfile(popularity=1.1, base_scale=450),
        "Mysore_Zoo": LocationProfile(popularity=1.0, base_scale=350),
        "KRS_Dam": LocationProfile(popularity=0.7, base_scale=200),
    }
)

LOCATIONS: tuple[str, ...] = tuple(LOCATION_PROFILES)

WEATHER_MULTIPLIERS = MappingProxyType(
    {
        "Clear": 1.0,
        "Cloudy": 0.95,
        "Rain": 0.6,
        "Hot": 0.8,
        "Humid": 0.9,
    }
)

WEATHER_CONDITIONS: tuple[str, ...] = tuple(WEATHER_MULTIPLIERS)

# Indexed by month - 1.
MONTHLY_BASE_TEMPERATURE: tuple[int, ...] = (
    22, 23, 25, 27, 28, 28, 27, 27, 26, 25, 24, 23,
)

FESTIVAL_DATES = frozenset(
    {
        "2024-01-14", "2024-01-26", "2024-02-14", "2024-03-08", "2024-03-25",
        "2024-04-09", "2024-04-22", "2024-05-01", "2024-08-15", "2024-10-02",
        "2024-10-24", "2024-11-01", "2024-11-12", "2024-12-25",
        "2025-01-14", "2025-02-14", "2025-03-17", "2025-04-21", "2025-11-04",
    }
)

OPENING_HOUR = 6
CLOSING_HOUR = 21


def get_profile(location: str) -> LocationProfile:
    """Return the profile for a location, or the default for unknown names."""
    return LOCATION_PROFILES.get(location, DEFAULT_PROFILE)
