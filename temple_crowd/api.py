"""Entry points used by presentation code.

Thin functions over the model, generator and analytics modules. Nothing
here holds state: every corpus, generator and quartile set is passed in
and returned explicitly.
"""

from dataclasses import replace
from datetime import datetime
from typing import Any, Mapping, Optional

from .analytics import quantiles as _quantiles
from .analytics.classifier import DensityTier
from .analytics.classifier import classify as _classify
from .analytics.hour_aggregator import HourlyAverage
from .analytics.hour_aggregator import top_hours as _top_hours
from .analytics.quantiles import QuartileSet
from .generation.corpus import Corpus
from .generation.generator import DatasetGenerator
from .generation.observation import Observation
from .model.footfall import FootfallModel, VisitContext
from .utils.config import GeneratorConfig


def estimate_footfall(
    context: VisitContext, model: Optional[FootfallModel] = None
) -> int:
    """Estimate footfall for a single context."""
    return (model or FootfallModel()).estimate(context)


def classify(footfall: float, quartiles: Optional[QuartileSet]) -> DensityTier:
    """Classify a footfall value against quartile boundaries."""
    return _classify(footfall, quartiles)


def build_corpus(
    count: int,
    seed: Optional[int] = None,
    bias_options: Optional[Mapping[str, Any]] = None,
    now: Optional[datetime] = None,
) -> Corpus:
    """Generate a fresh unlabeled corpus.

    Args:
        count: Number of observations.
        seed: Optional seed for reproducible output.
        bias_options: Optional ``GeneratorConfig`` overrides such as
            ``clear_bias`` or ``festival_probability``.
        now: Optional end of the historical window.

    Returns:
        The generated Corpus.

    Raises:
        TypeError: If ``bias_options`` names an unknown setting.
        ValueError: If an option is out of range.
    """
    config = replace(GeneratorConfig(seed=seed), count=count, **dict(bias_options or {}))
    return DatasetGenerator(config, now=now).generate(count)


def build_corpus_batch(
    generator: DatasetGenerator, partial_count: int
) -> list[Observation]:
    """Draw one batch from an existing generator for appending to a corpus."""
    return generator.generate_batch(partial_count)


def global_quartiles(corpus: Corpus) -> QuartileSet:
    return _quantiles.global_quartiles(corpus)


def location_quartiles(corpus: Corpus, location: str) -> QuartileSet:
    return _quantiles.location_quartiles(corpus, location)


def top_hours(corpus: Corpus, location: str, k: int = 5) -> list[HourlyAverage]:
    return _top_hours(corpus, location, k)
