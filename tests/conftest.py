"""
Test fixtures for decisioncore.

Provides:
- Deterministic samplers (no randomness) for exact Monte Carlo assertions
- A baseline simulation config shared across engine tests
"""

import numpy as np
import pytest

from decisioncore.engine.monte_carlo import SimulationConfig
from decisioncore.engine.types import MarketCondition


class MidpointSampler:
    """Normal draws return the mean, uniform draws the interval midpoint."""

    def normal(self, mean, std, size):
        return np.full(size, float(mean))

    def uniform(self, low, high, size):
        return np.full(size, (low + high) / 2.0)


class SpreadSampler:
    """Evenly spaced uniform draws; normal draws spread ±1 std linearly."""

    def normal(self, mean, std, size):
        return np.linspace(mean - std, mean + std, size)

    def uniform(self, low, high, size):
        return np.linspace(low, high, size)


BASE_CONFIG = SimulationConfig(
    base_cost_per_sqm=5000,
    gfa=2000,
    trend_annual_pct=5,
    trend_volatility=3,
    market_condition=MarketCondition.BALANCED,
    horizon_months=12,
    iterations=1000,
)


@pytest.fixture
def base_config() -> SimulationConfig:
    return BASE_CONFIG


@pytest.fixture
def midpoint_sampler() -> MidpointSampler:
    return MidpointSampler()


@pytest.fixture
def spread_sampler() -> SpreadSampler:
    return SpreadSampler()
