"""Ordered collection of generated observations."""

import logging
from typing import Iterable, Iterator

import numpy as np
import pandas as pd

from .observation import EXPORT_COLUMNS, Observation

logger = logging.getLogger(__name__)


class Corpus:
    """Container for the observations produced by a generator.

    Readers such as the quantile engine and hour aggregator take a
    ``snapshot`` so later appends never change a computation in progress.

    Args:
        observations: Optional initial observations.
    """

    def __init__(self, observations: Iterable[Observation] = ()) -> None:
        self._observations: list[Observation] = list(observations)

    def __len__(self) -> int:
        return len(self._observations)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self._observations)

    def __getitem__(self, index: int) -> Observation:
        return self._observations[index]

    def extend(self, observations: Iterable[Observation]) -> None:
        """Append a batch of observations to the end of the corpus."""
        self._observations.extend(observations)

    def snapshot(self) -> tuple[Observation, ...]:
        """Return an immutable view of the current observations."""
        return tuple(self._observations)

    def footfalls(self) -> np.ndarray:
        """Return the footfall column as an integer array."""
        return np.fromiter(
            (o.footfall for o in self._observations),
            dtype=np.int64,
            count=len(self._observations),
        )

    def for_location(self, location: str) -> list[Observation]:
        """Return the observations recorded at one location."""
        return [o for o in self._observations if o.location == location]

    def to_records(self, limit: int | None = None) -> list[dict]:
        """Return export records, optionally truncated to ``limit`` rows."""
        rows = self._observations if limit is None else self._observations[:limit]
        return [o.to_record() for o in rows]

    def to_dataframe(self, limit: int | None = None) -> pd.DataFrame:
        """Return the corpus as a DataFrame with the export column order."""
        return pd.DataFrame(self.to_records(limit), columns=list(EXPORT_COLUMNS))
