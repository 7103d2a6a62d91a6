"""Normally distributed noise drawn from a uniform source."""

import math
from typing import Optional

import numpy as np


class RandomVariate:
    """Box-Muller sampler over an injectable uniform source.

    Args:
        rng: numpy Generator supplying uniform draws in ``[0, 1)``.
            A fresh unseeded generator is created when omitted.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    def _uniform_nonzero(self) -> float:
        value = 0.0
        while value == 0.0:
            value = float(self.rng.random())
        return value

    def sample(self, mean: float = 0.0, stddev: float = 1.0) -> float:
        """Draw one value from ``Normal(mean, stddev)``.

        Args:
            mean: Centre of the distribution.
            stddev: Standard deviation; ``0`` returns ``mean`` exactly.

        Returns:
            The sampled value.
        """
        u = self._uniform_nonzero()
        v = self._uniform_nonzero()
        z = math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
        return mean + z * stddev
