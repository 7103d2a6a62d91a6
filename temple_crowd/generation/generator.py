"""Synthetic observation generator.

Draws random visit contexts across a historical window, scores them with
the footfall model and returns them as observations. Generation can run in
bounded batches so a driver (CLI progress bar, dashboard spinner) can
interleave other work, and can be split into independent shards.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Optional

import numpy as np

from ..model.footfall import FootfallModel, VisitContext
from ..model.profiles import (
    CLOSING_HOUR,
    FESTIVAL_DATES,
    LOCATIONS,
    MONTHLY_BASE_TEMPERATURE,
    OPENING_HOUR,
    WEATHER_CONDITIONS,
)
from ..model.random_variate import RandomVariate
from ..utils.config import GeneratorConfig
from .corpus import Corpus
from .observation import Observation

logger = logging.getLogger(__name__)

RANDOM_FESTIVAL_PROBABILITY = 0.05


def day_of_week(day: date) -> int:
    """Return the weekday index with 0 for Sunday and 6 for Saturday."""
    return (day.weekday() + 1) % 7


def is_weekend(day: date) -> bool:
    return day_of_week(day) in (0, 6)


def _years_before(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return moment.replace(year=moment.year - years, day=28)


class DatasetGenerator:
    """Produces synthetic footfall observations.

    Uniform draws and model noise share one seeded numpy Generator, so a
    fixed ``config.seed`` together with a fixed ``now`` reproduces the same
    corpus.

    Args:
        config: Generator settings. Defaults to ``GeneratorConfig()``.
        now: End of the historical window. Defaults to the current UTC time.
        seed_sequence: Explicit seed sequence, used by ``spawn`` for shards.
            Overrides ``config.seed`` when given.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        now: Optional[datetime] = None,
        seed_sequence: Optional[np.random.SeedSequence] = None,
    ) -> None:
        self.config = config or GeneratorConfig()
        self.now = now or datetime.now(timezone.utc)
        if self.now.tzinfo is None:
            self.now = self.now.replace(tzinfo=timezone.utc)
        self.start = _years_before(self.now, self.config.history_years)
        self._window_ms = int((self.now - self.start) / timedelta(milliseconds=1))

        self._seed_sequence = seed_sequence or np.random.SeedSequence(self.config.seed)
        self.rng = np.random.default_rng(self._seed_sequence)
        self.model = FootfallModel(
            variate=RandomVariate(self.rng),
            noise_ratio=self.config.noise_ratio,
        )
        self.generated = 0

    def _draw_timestamp(self) -> datetime:
        offset = int(self.rng.integers(0, self._window_ms))
        return self.start + timedelta(milliseconds=offset)

    def _draw_weather(self) -> str:
        if self.rng.random() < self.config.clear_bias:
            return "Clear"
        return WEATHER_CONDITIONS[int(self.rng.integers(len(WEATHER_CONDITIONS)))]

    def _draw_temperature(self, month: int) -> float:
        return MONTHLY_BASE_TEMPERATURE[month - 1] + float(self.rng.uniform(-2.0, 2.0))

    def _draw_observation(self) -> Observation:
        timestamp = self._draw_timestamp()
        day = timestamp.date()
        date_str = day.isoformat()
        hour = int(self.rng.integers(OPENING_HOUR, CLOSING_HOUR + 1))
        location = LOCATIONS[int(self.rng.integers(len(LOCATIONS)))]
        weather = self._draw_weather()
        temperature = self._draw_temperature(timestamp.month)
        is_festival = (
            date_str in FESTIVAL_DATES
            or self.rng.random() < self.config.festival_probability
        )
        holiday = is_weekend(day)

        footfall = self.model.estimate(
            VisitContext(
                location=location,
                hour=hour,
                weather_condition=weather,
                temperature=temperature,
                is_festival=is_festival,
                is_holiday=holiday,
            )
        )

        return Observation(
            timestamp=timestamp,
            date=date_str,
            day_of_week=day_of_week(day),
            month=timestamp.month,
            hour=hour,
            location=location,
            weather_condition=weather,
            temperature=round(temperature, 1),
            is_festival=bool(is_festival),
            is_holiday=holiday,
            footfall=footfall,
        )

    def generate_batch(self, count: int) -> list[Observation]:
        """Generate a bounded batch of observations.

        The batch is independent of any corpus and can be appended to one
        with ``Corpus.extend``.

        Args:
            count: Number of observations to draw.

        Returns:
            List of unlabeled observations.
        """
        batch = [self._draw_observation() for _ in range(max(0, count))]
        self.generated += len(batch)
        logger.debug("Generated batch of %d observations", len(batch))
        return batch

    def iter_batches(
        self, count: int, batch_size: Optional[int] = None
    ) -> Iterator[list[Observation]]:
        """Yield ``count`` observations split into batches.

        Args:
            count: Total number of observations.
            batch_size: Maximum batch length. Defaults to the configured size.

        Yields:
            Successive observation batches.
        """
        size = batch_size or self.config.batch_size
        remaining = max(0, count)
        while remaining > 0:
            step = min(size, remaining)
            yield self.generate_batch(step)
            remaining -= step

    def generate(self, count: int, batch_size: Optional[int] = None) -> Corpus:
        """Generate a new corpus of ``count`` observations.

        Args:
            count: Number of observations.
            batch_size: Optional batch length override.

        Returns:
            Unlabeled Corpus.
        """
        corpus = Corpus()
        for batch in self.iter_batches(count, batch_size):
            corpus.extend(batch)
        logger.info(
            "Generated %d observations between %s and %s",
            len(corpus),
            self.start.date(),
            self.now.date(),
        )
        return corpus

    def spawn(self, n: int) -> list["DatasetGenerator"]:
        """Create ``n`` independent generators for sharded generation.

        Children share this generator's config and window but draw from
        separate child seed sequences.

        Args:
            n: Number of shards.

        Returns:
            List of child generators.
        """
        return [
            DatasetGenerator(self.config, now=self.now, seed_sequence=child)
            for child in self._seed_sequence.spawn(n)
        ]

    def random_context(self, days_ahead: int = 90) -> tuple[date, VisitContext]:
        """Draw a random upcoming visit for what-if predictions.

        Args:
            days_ahead: The visit date is drawn from today up to this many
                days ahead (exclusive).

        Returns:
            Tuple of ``(visit_date, context)``.
        """
        visit_date = self.now.date() + timedelta(
            days=int(self.rng.integers(0, max(1, days_ahead)))
        )
        context = VisitContext(
            location=LOCATIONS[int(self.rng.integers(len(LOCATIONS)))],
            hour=int(self.rng.integers(OPENING_HOUR, CLOSING_HOUR + 1)),
            weather_condition=WEATHER_CONDITIONS[
                int(self.rng.integers(len(WEATHER_CONDITIONS)))
            ],
            temperature=round(self._draw_temperature(visit_date.month), 1),
            is_festival=bool(self.rng.random() < RANDOM_FESTIVAL_PROBABILITY),
            is_holiday=is_weekend(visit_date),
        )
        return visit_date, context
