"""Tests for the Box-Muller noise sampler."""

import numpy as np
import pytest

from temple_crowd.model.random_variate import RandomVariate


class _ScriptedUniform:
    """Uniform source returning a fixed sequence of values."""

    def __init__(self, values: list[float]) -> None:
        self.values = list(values)

    def random(self) -> float:
        return self.values.pop(0)


class TestRandomVariate:
    """Tests for the RandomVariate class."""

    def test_zero_stddev_returns_mean(self) -> None:
        """A zero standard deviation yields the mean exactly."""
        variate = RandomVariate(np.random.default_rng(0))
        assert variate.sample(12.5, 0.0) == 12.5

    def test_seeded_samples_reproducible(self) -> None:
        """Two samplers with the same seed produce identical draws."""
        a = RandomVariate(np.random.default_rng(7))
        b = RandomVariate(np.random.default_rng(7))
        assert [a.sample(0, 1) for _ in range(10)] == [b.sample(0, 1) for _ in range(10)]

    def test_zero_uniform_is_redrawn(self) -> None:
        """A zero uniform draw is discarded before taking the logarithm."""
        source = _ScriptedUniform([0.0, 0.5, 0.25])
        variate = RandomVariate(source)
        value = variate.sample(10.0, 1.0)
        assert value == pytest.approx(10.0, abs=1e-9)
        assert source.values == []

    def test_distribution_moments(self) -> None:
        """Samples have approximately the requested mean and spread."""
        variate = RandomVariate(np.random.default_rng(123))
        samples = np.array([variate.sample(5.0, 2.0) for _ in range(20000)])
        assert samples.mean() == pytest.approx(5.0, abs=0.1)
        assert samples.std() == pytest.approx(2.0, abs=0.1)

    def test_default_source_created(self) -> None:
        """An unseeded generator is created when none is injected."""
        variate = RandomVariate()
        assert isinstance(variate.rng, np.random.Generator)
        assert np.isfinite(variate.sample())
