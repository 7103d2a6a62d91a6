"""Crowd density pipeline orchestrator.

Coordinates the full flow: generates the synthetic corpus in batches,
derives global and per-location quartiles, labels every observation,
aggregates top hours per location and serves live predictions.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .analytics.classifier import DensityClassifier, DensityTier, label_corpus
from .analytics.hour_aggregator import HourAggregator, HourlyAverage
from .analytics.quantiles import QuartileSet, all_location_quartiles, global_quartiles
from .generation.corpus import Corpus
from .generation.generator import DatasetGenerator
from .generation.observation import Observation
from .model.footfall import VisitContext
from .model.profiles import LOCATIONS

logger = logging.getLogger(__name__)

BUSY_SUGGESTION = (
    "Suggestion: arrive 1 hour earlier or choose a weekday. Expect queues."
)
CALM_SUGGESTION = "Crowd should be manageable at this time."
UNAVAILABLE_SUGGESTION = "Density unavailable: build the dataset first."


def suggestion_for(tier: DensityTier) -> str:
    """Return visitor advice for a density tier."""
    if not tier.is_available:
        return UNAVAILABLE_SUGGESTION
    if tier in (DensityTier.HIGH, DensityTier.VERY_HIGH):
        return BUSY_SUGGESTION
    return CALM_SUGGESTION


@dataclass(frozen=True)
class Prediction:
    """Result of a live what-if query."""

    context: VisitContext
    footfall: int
    tier: DensityTier
    suggestion: str

    def to_dict(self) -> dict:
        return {
            "location": self.context.location,
            "hour": self.context.hour,
            "weather": self.context.weather_condition,
            "temperature": self.context.temperature,
            "is_festival": self.context.is_festival,
            "is_holiday": self.context.is_holiday,
            "footfall": self.footfall,
            "density": self.tier.value,
            "suggestion": self.suggestion,
        }


@dataclass
class LocationStats:
    """Per-location quartiles and busiest hours."""

    location: str
    quartiles: QuartileSet
    top_hours: list[HourlyAverage] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "quartiles": self.quartiles.to_dict(),
            "top_hours": [h.to_dict() for h in self.top_hours],
        }


class CrowdDensityPredictor:
    """Builds the corpus and derived statistics, then answers predictions.

    Args:
        generator: Source of synthetic observations.
        top_k: Number of busiest hours kept per location.
    """

    def __init__(self, generator: DatasetGenerator, top_k: int = 5) -> None:
        self.generator = generator
        self.top_k = top_k
        self.corpus = Corpus()
        self.classifier = DensityClassifier()
        self._location_stats: dict[str, LocationStats] = {}

    @property
    def quartiles(self) -> Optional[QuartileSet]:
        return self.classifier.global_quartiles

    def build(
        self,
        count: int,
        batch_size: Optional[int] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
        time_budget: Optional[float] = None,
    ) -> Corpus:
        """Generate ``count`` observations in batches and refresh statistics.

        Args:
            count: Number of observations requested.
            batch_size: Optional batch length override.
            progress_callback: Optional ``callback(generated, total)`` invoked
                after each batch.
            time_budget: Optional wall-clock limit in seconds. When exceeded,
                no further batches are scheduled and the partial corpus is
                used.

        Returns:
            The labeled corpus.
        """
        self.corpus = Corpus()
        started = time.monotonic()
        logger.info("Building corpus of %d observations", count)

        for batch in self.generator.iter_batches(count, batch_size):
            self.corpus.extend(batch)
            if progress_callback:
                progress_callback(len(self.corpus), count)
            if time_budget is not None and time.monotonic() - started >= time_budget:
                if len(self.corpus) < count:
                    logger.warning(
                        "Time budget of %.1fs reached after %d of %d observations",
                        time_budget,
                        len(self.corpus),
                        count,
                    )
                break

        self.refresh()
        return self.corpus

    def extend(self, count: int) -> list[Observation]:
        """Append one more batch to the corpus and refresh statistics."""
        batch = self.generator.generate_batch(count)
        self.corpus.extend(batch)
        self.refresh()
        return batch

    def refresh(self) -> None:
        """Recompute quartiles, labels and per-location stats."""
        per_location = all_location_quartiles(self.corpus)
        self.classifier = DensityClassifier(global_quartiles(self.corpus), per_location)
        label_corpus(self.corpus, self.classifier.global_quartiles)

        aggregator = HourAggregator.from_corpus(self.corpus)
        self._location_stats = {
            location: LocationStats(
                location=location,
                quartiles=quartiles,
                top_hours=aggregator.top_hours(location, self.top_k),
            )
            for location, quartiles in per_location.items()
        }
        logger.info(
            "Statistics refreshed over %d observations, quartiles %s",
            len(self.corpus),
            self.quartiles,
        )

    def location_stats(self) -> dict[str, LocationStats]:
        """Return stats for every known location.

        Locations missing from the corpus get zero quartiles and no top
        hours.
        """
        return {
            location: self._location_stats.get(
                location, LocationStats(location=location, quartiles=QuartileSet())
            )
            for location in LOCATIONS
        }

    def predict(self, context: VisitContext, per_location: bool = False) -> Prediction:
        """Estimate and classify a live what-if query.

        Args:
            context: Visit features to score.
            per_location: Classify against the location's own quartiles
                instead of the global ones.

        Returns:
            Prediction with footfall, tier and suggestion. The tier is
            ``UNAVAILABLE`` until ``build`` has run.
        """
        footfall = self.generator.model.estimate(context)
        tier = self.classifier.classify(
            footfall, context.location if per_location else None
        )
        return Prediction(
            context=context,
            footfall=footfall,
            tier=tier,
            suggestion=suggestion_for(tier),
        )
