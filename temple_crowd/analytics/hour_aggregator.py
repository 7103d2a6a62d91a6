"""Average footfall by hour of day with top-hour ranking.

Accumulates footfall sums and counts per ``(location, hour)`` and ranks
hours by their rounded mean for peak-hour analysis.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass

from ..generation.corpus import Corpus
from ..model.footfall import round_half_up

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HourlyAverage:
    """Average footfall for one hour at one location.

    Attributes:
        hour: Hour of day.
        average_footfall: Mean footfall rounded to the nearest integer.
    """

    hour: int
    average_footfall: int

    def to_dict(self) -> dict[str, int]:
        return {"hour": self.hour, "average_footfall": self.average_footfall}


class HourAggregator:
    """Aggregates footfall per location and hour."""

    def __init__(self) -> None:
        self.totals: dict[tuple[str, int], int] = defaultdict(int)
        self.counts: dict[tuple[str, int], int] = defaultdict(int)

    def record(self, location: str, hour: int, footfall: int) -> None:
        """Add one footfall value to its ``(location, hour)`` bucket."""
        key = (location, hour)
        self.totals[key] += footfall
        self.counts[key] += 1

    def average_by_hour(self, location: str) -> dict[int, int]:
        """Return rounded mean footfall per hour for a location.

        Args:
            location: Location name.

        Returns:
            Mapping of hour to average footfall, sorted by hour. Empty if the
            location has no observations.
        """
        return {
            hour: round_half_up(self.totals[(loc, hour)] / count)
            for (loc, hour), count in sorted(self.counts.items())
            if loc == location
        }

    def top_hours(self, location: str, k: int = 5) -> list[HourlyAverage]:
        """Return the ``k`` busiest hours for a location.

        Hours are ordered by average footfall descending, then by hour
        ascending.

        Args:
            location: Location name.
            k: Maximum number of hours to return.

        Returns:
            Ranked list of HourlyAverage, empty for unseen locations.
        """
        averages = [
            HourlyAverage(hour=hour, average_footfall=avg)
            for hour, avg in self.average_by_hour(location).items()
        ]
        averages.sort(key=lambda a: (-a.average_footfall, a.hour))
        return averages[: max(0, k)]

    @classmethod
    def from_corpus(cls, corpus: Corpus) -> "HourAggregator":
        """Build an aggregator over a snapshot of a corpus."""
        aggregator = cls()
        for observation in corpus.snapshot():
            aggregator.record(observation.location, observation.hour, observation.footfall)
        logger.debug("HourAggregator built from %d observations", len(corpus))
        return aggregator


def top_hours(corpus: Corpus, location: str, k: int = 5) -> list[HourlyAverage]:
    """Return the ``k`` busiest hours for a location in a corpus."""
    return HourAggregator.from_corpus(corpus).top_hours(location, k)
