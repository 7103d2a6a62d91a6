"""Synthetic footfall observation record."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

EXPORT_COLUMNS: tuple[str, ...] = (
    "datetime",
    "date",
    "day_of_week",
    "month",
    "hour",
    "location",
    "weather",
    "temperature",
    "is_festival",
    "is_holiday",
    "footfall",
    "density_label",
    "density_int",
)


@dataclass
class Observation:
    """One generated sample of context and resulting footfall.

    Observations start unlabeled; ``density_label`` and ``density_rank`` are
    filled in once quartiles have been computed over the owning corpus.

    Attributes:
        timestamp: UTC timestamp of the sample.
        date: ISO date (``YYYY-MM-DD``) of the timestamp.
        day_of_week: 0 for Sunday through 6 for Saturday.
        month: Calendar month, 1-12.
        hour: Hour of day within opening hours (6-21).
        location: Location name.
        weather_condition: Weather label.
        temperature: Temperature in Celsius, one decimal place.
        is_festival: Whether the day is a festival day.
        is_holiday: Whether the day falls on a weekend.
        footfall: Estimated visitor count.
        density_label: Density tier label, or None before labeling.
        density_rank: Ordinal tier rank 0-3, or None before labeling.
    """

    timestamp: datetime
    date: str
    day_of_week: int
    month: int
    hour: int
    location: str
    weather_condition: str
    temperature: float
    is_festival: bool
    is_holiday: bool
    footfall: int
    density_label: Optional[str] = None
    density_rank: Optional[int] = None

    @property
    def is_labeled(self) -> bool:
        return self.density_label is not None

    def to_record(self) -> dict[str, Any]:
        """Return the flat export record in ``EXPORT_COLUMNS`` order.

        Flags are exported as 0/1 and missing labels as empty strings.
        """
        return {
            "datetime": self.timestamp.isoformat(timespec="milliseconds"),
            "date": self.date,
            "day_of_week": self.day_of_week,
            "month": self.month,
            "hour": self.hour,
            "location": self.location,
            "weather": self.weather_condition,
            "temperature": self.temperature,
            "is_festival": int(self.is_festival),
            "is_holiday": int(self.is_holiday),
            "footfall": self.footfall,
            "density_label": self.density_label or "",
            "density_int": "" if self.density_rank is None else self.density_rank,
        }
