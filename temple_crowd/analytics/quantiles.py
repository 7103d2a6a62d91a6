"""Nearest-rank quartile computation over footfall samples.

Quartiles are taken as ``sorted[floor(n * p)]`` for p = 0.25, 0.50, 0.75
on the zero-indexed ascending sample, without interpolation. The density
tier boundaries depend on this exact rule.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Union

import numpy as np

from ..generation.corpus import Corpus
from ..model.profiles import LOCATIONS

logger = logging.getLogger(__name__)

Number = Union[int, float]

QUARTILE_PROBABILITIES = (0.25, 0.50, 0.75)


@dataclass(frozen=True)
class QuartileSet:
    """Lower, median and upper quartile boundaries.

    Attributes:
        q1: 25th percentile.
        q2: 50th percentile.
        q3: 75th percentile.
    """

    q1: Number = 0
    q2: Number = 0
    q3: Number = 0

    def to_dict(self) -> dict[str, Number]:
        return {"q1": self.q1, "q2": self.q2, "q3": self.q3}

    def __str__(self) -> str:
        return f"{self.q1} / {self.q2} / {self.q3}"


def compute_quartiles(samples: Iterable[Number]) -> QuartileSet:
    """Compute nearest-rank quartiles for a numeric sample.

    Args:
        samples: Footfall values in any order.

    Returns:
        QuartileSet with ``q1 <= q2 <= q3``; all zeros for an empty sample.
    """
    values = np.sort(np.asarray(list(samples)))
    n = len(values)
    if n == 0:
        logger.debug("Empty sample, returning zero quartiles")
        return QuartileSet()

    q1, q2, q3 = (values[int(np.floor(n * p))].item() for p in QUARTILE_PROBABILITIES)
    return QuartileSet(q1=q1, q2=q2, q3=q3)


def global_quartiles(corpus: Corpus) -> QuartileSet:
    """Compute quartiles over every footfall value in a corpus."""
    return compute_quartiles(corpus.footfalls())


def location_quartiles(corpus: Corpus, location: str) -> QuartileSet:
    """Compute quartiles over the footfall values recorded at one location."""
    return compute_quartiles(o.footfall for o in corpus.for_location(location))


def all_location_quartiles(corpus: Corpus) -> Mapping[str, QuartileSet]:
    """Compute per-location quartiles for every known location.

    Args:
        corpus: Corpus snapshot to summarize.

    Returns:
        Mapping of location name to QuartileSet, in ``LOCATIONS`` order.
    """
    grouped: dict[str, list[int]] = {location: [] for location in LOCATIONS}
    for observation in corpus.snapshot():
        grouped.setdefault(observation.location, []).append(observation.footfall)
    return {location: compute_quartiles(values) for location, values in grouped.items()}
