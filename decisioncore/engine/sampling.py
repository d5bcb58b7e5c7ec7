"""
Sampling Primitives.

Small, swappable random sources for the Monte Carlo engine:
- Normal and uniform draws behind a ``Sampler`` protocol
- ``NumpySampler`` backed by an independent ``numpy.random.Generator``
- Linear-interpolation percentiles on pre-sorted samples
- Trend / market-condition conversions shared by the cost engines

There is NO module-level random state. Every sampler owns its generator,
so concurrent simulations never share (or correlate) PRNG streams.
"""

import math
from typing import Optional, Protocol, runtime_checkable

import numpy as np

from decisioncore.engine.types import MarketCondition

# ── Calibration constants ────────────────────────────────────────────────
# Empirically chosen, subject to tuning.

MARKET_FACTORS: dict[MarketCondition, float] = {
    MarketCondition.TIGHT: 1.05,     # supply constrained premium
    MarketCondition.BALANCED: 1.00,
    MarketCondition.SOFT: 0.95,      # buyer's market discount
}


@runtime_checkable
class Sampler(Protocol):
    """Source of randomness for the simulation loop."""

    def normal(self, mean: float, std: float, size: int) -> np.ndarray:
        ...

    def uniform(self, low: float, high: float, size: int) -> np.ndarray:
        ...


class NumpySampler:
    """
    Sampler backed by its own ``numpy.random.Generator``.

    Pass ``seed`` for reproducible runs; leave it as None for fresh OS
    entropy on every instance.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = np.random.default_rng(seed)

    def normal(self, mean: float, std: float, size: int) -> np.ndarray:
        return self._rng.normal(loc=mean, scale=std, size=size)

    def uniform(self, low: float, high: float, size: int) -> np.ndarray:
        return self._rng.uniform(low=low, high=high, size=size)


def percentile(sorted_values: np.ndarray, p: float):
    """
    Percentile of an ascending sample by linear interpolation.

        idx = (p / 100) × (n − 1)
        value = s[floor] + (s[ceil] − s[floor]) × (idx − floor)

    Operates along axis 0, so a sorted (trials × months) matrix returns
    one value per month. An empty sample yields 0.
    """
    n = sorted_values.shape[0]
    if n == 0:
        return 0.0

    idx = (p / 100.0) * (n - 1)
    lo = math.floor(idx)
    hi = math.ceil(idx)
    if lo == hi:
        return sorted_values[lo]
    return sorted_values[lo] + (sorted_values[hi] - sorted_values[lo]) * (idx - lo)


def annual_to_monthly_rate(annual_pct):
    """Annualized % → monthly compounding rate: (1 + a/100)^(1/12) − 1."""
    return np.power(1.0 + np.asarray(annual_pct, dtype=float) / 100.0, 1.0 / 12.0) - 1.0


def market_factor(condition: MarketCondition) -> float:
    """Multiplicative price factor for a market condition."""
    match MarketCondition(condition):
        case MarketCondition.TIGHT:
            return MARKET_FACTORS[MarketCondition.TIGHT]
        case MarketCondition.SOFT:
            return MARKET_FACTORS[MarketCondition.SOFT]
        case MarketCondition.BALANCED:
            return MARKET_FACTORS[MarketCondition.BALANCED]
