"""Tests for hourly footfall aggregation and top-hour ranking."""

import pytest

from temple_crowd.analytics.hour_aggregator import (
    HourAggregator,
    HourlyAverage,
    top_hours,
)
from temple_crowd.generation.corpus import Corpus


@pytest.fixture
def palace_corpus(make_observation) -> Corpus:
    """Corpus with hand-picked hourly footfall at the palace."""
    rows = [
        (10, 100), (10, 200),
        (9, 150),
        (18, 300),
        (7, 50),
        (12, 1), (12, 2),
    ]
    observations = [make_observation("Mysore_Palace", hour, f) for hour, f in rows]
    observations.append(make_observation("KRS_Dam", 18, 9999))
    return Corpus(observations)


class TestHourAggregator:
    """Tests for the HourAggregator class."""

    def test_average_by_hour(self, palace_corpus: Corpus) -> None:
        """Averages are per hour, sorted by hour, rounded half up."""
        aggregator = HourAggregator.from_corpus(palace_corpus)
        assert aggregator.average_by_hour("Mysore_Palace") == {
            7: 50,
            9: 150,
            10: 150,
            12: 2,
            18: 300,
        }

    def test_top_hours_ties_by_hour(self, palace_corpus: Corpus) -> None:
        """Equal averages are ordered by ascending hour."""
        result = HourAggregator.from_corpus(palace_corpus).top_hours("Mysore_Palace", 3)
        assert result == [
            HourlyAverage(18, 300),
            HourlyAverage(9, 150),
            HourlyAverage(10, 150),
        ]

    def test_locations_kept_separate(self, palace_corpus: Corpus) -> None:
        """Other locations do not leak into the ranking."""
        result = top_hours(palace_corpus, "KRS_Dam")
        assert result == [HourlyAverage(18, 9999)]

    def test_k_larger_than_hours(self, palace_corpus: Corpus) -> None:
        """All hours are returned when k exceeds the hour count."""
        assert len(top_hours(palace_corpus, "Mysore_Palace", k=10)) == 5

    def test_k_zero(self, palace_corpus: Corpus) -> None:
        """k of zero returns nothing."""
        assert top_hours(palace_corpus, "Mysore_Palace", k=0) == []

    def test_empty_location(self, palace_corpus: Corpus) -> None:
        """A location without observations yields an empty list."""
        assert top_hours(palace_corpus, "Mysore_Zoo") == []
        assert top_hours(Corpus(), "Mysore_Zoo") == []

    def test_default_top_five(self, sample_corpus: Corpus) -> None:
        """Generated data yields five descending hours per location."""
        result = top_hours(sample_corpus, "Chamundi_Temple")
        assert len(result) == 5
        averages = [h.average_footfall for h in result]
        assert averages == sorted(averages, reverse=True)

    def test_to_dict(self) -> None:
        """HourlyAverage serializes hour and average."""
        assert HourlyAverage(18, 300).to_dict() == {"hour": 18, "average_footfall": 300}
