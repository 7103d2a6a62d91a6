"""Shared fixtures for the crowd density test suite."""

from datetime import datetime, timezone

import pytest

from temple_crowd.generation.corpus import Corpus
from temple_crowd.generation.generator import DatasetGenerator
from temple_crowd.generation.observation import Observation
from temple_crowd.utils.config import GeneratorConfig

FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed end of the generation window."""
    return FIXED_NOW


@pytest.fixture
def make_observation():
    """Factory for hand-built observations."""

    def _make(location: str = "Mysore_Palace", hour: int = 10, footfall: int = 100):
        return Observation(
            timestamp=FIXED_NOW,
            date=FIXED_NOW.date().isoformat(),
            day_of_week=0,
            month=FIXED_NOW.month,
            hour=hour,
            location=location,
            weather_condition="Clear",
            temperature=26.0,
            is_festival=False,
            is_holiday=True,
            footfall=footfall,
        )

    return _make


@pytest.fixture
def seeded_generator() -> DatasetGenerator:
    """Generator with a fixed seed and window."""
    return DatasetGenerator(GeneratorConfig(seed=42, batch_size=500), now=FIXED_NOW)


@pytest.fixture
def sample_corpus(seeded_generator: DatasetGenerator) -> Corpus:
    """A reproducible 2000-observation corpus."""
    return seeded_generator.generate(2000)
