"""Density tier classification from quartile boundaries.

A footfall value at or below q1 is Low, at or below q2 Medium, at or below
q3 High and anything above VeryHigh. Boundary values belong to the lower
tier. Without quartiles the result is ``DensityTier.UNAVAILABLE``.
"""

import logging
from enum import Enum
from typing import Mapping, Optional

from ..generation.corpus import Corpus
from .quantiles import Number, QuartileSet

logger = logging.getLogger(__name__)


class DensityTier(str, Enum):
    """Ordinal crowd density tiers."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    VERY_HIGH = "VeryHigh"
    UNAVAILABLE = "Unavailable"

    @property
    def rank(self) -> Optional[int]:
        """Ordinal rank 0-3, or None for ``UNAVAILABLE``."""
        return _RANKS.get(self)

    @property
    def is_available(self) -> bool:
        return self is not DensityTier.UNAVAILABLE

    @property
    def display_name(self) -> str:
        return "Very High" if self is DensityTier.VERY_HIGH else self.value


_RANKS = {
    DensityTier.LOW: 0,
    DensityTier.MEDIUM: 1,
    DensityTier.HIGH: 2,
    DensityTier.VERY_HIGH: 3,
}


def classify(footfall: Number, quartiles: Optional[QuartileSet]) -> DensityTier:
    """Map a footfall value to a density tier.

    Args:
        footfall: Visitor count to classify.
        quartiles: Tier boundaries, or None if not yet computed.

    Returns:
        The matching DensityTier, ``UNAVAILABLE`` when quartiles are missing.
    """
    if quartiles is None:
        return DensityTier.UNAVAILABLE
    if footfall <= quartiles.q1:
        return DensityTier.LOW
    if footfall <= quartiles.q2:
        return DensityTier.MEDIUM
    if footfall <= quartiles.q3:
        return DensityTier.HIGH
    return DensityTier.VERY_HIGH


def label_corpus(corpus: Corpus, quartiles: Optional[QuartileSet]) -> int:
    """Write density labels onto every observation in a corpus.

    Existing labels are overwritten, so this doubles as re-labeling after a
    quartile recomputation. Missing quartiles clear all labels.

    Args:
        corpus: Corpus whose observations are labeled in place.
        quartiles: Boundaries to classify against.

    Returns:
        Number of observations labeled.
    """
    labeled = 0
    for observation in corpus:
        tier = classify(observation.footfall, quartiles)
        if tier.is_available:
            observation.density_label = tier.value
            observation.density_rank = tier.rank
            labeled += 1
        else:
            observation.density_label = None
            observation.density_rank = None
    logger.debug("Labeled %d of %d observations", labeled, len(corpus))
    return labeled


class DensityClassifier:
    """Classifies footfall against global or per-location quartiles.

    Args:
        global_quartiles: Boundaries over the whole corpus.
        location_quartiles: Optional per-location boundaries.
    """

    def __init__(
        self,
        global_quartiles: Optional[QuartileSet] = None,
        location_quartiles: Optional[Mapping[str, QuartileSet]] = None,
    ) -> None:
        self.global_quartiles = global_quartiles
        self.location_quartiles = dict(location_quartiles or {})

    @property
    def is_ready(self) -> bool:
        return self.global_quartiles is not None

    def quartiles_for(self, location: Optional[str] = None) -> Optional[QuartileSet]:
        """Return per-location boundaries if known, else the global ones."""
        if location is not None and location in self.location_quartiles:
            return self.location_quartiles[location]
        return self.global_quartiles

    def classify(self, footfall: Number, location: Optional[str] = None) -> DensityTier:
        """Classify against the location's quartiles or the global set.

        Args:
            footfall: Visitor count.
            location: Optional location name for per-location boundaries.

        Returns:
            The matching DensityTier.
        """
        return classify(footfall, self.quartiles_for(location))
