"""
Monte Carlo Cost Projection Engine.

Runs N randomized cost projections and reduces them to:
- Percentile distribution (P5, P10, P25, P50, P75, P90, P95)
- 20-bucket histogram for visualisation
- Monthly P10/P50/P90 confidence bands over the horizon
- Value-at-Risk at 95% (alias of P95)
- Probability of exceeding an optional budget cap

Each trial samples:
- cost per sqm  ~ Normal(base, base × cost_volatility%), floored at 50% of base
- floor area    ~ Uniform(gfa × (1 ± gfa_variance%))
- annual trend  ~ Uniform(trend ± trend_volatility), compounded monthly

Trials are independent, so the whole trial loop is evaluated as one
(trials × months) numpy matrix. Aggregation happens only after every
trial outcome exists.
"""

import time
from dataclasses import asdict, dataclass
from typing import Optional

import numpy as np
import structlog

from decisioncore.config import settings
from decisioncore.engine.sampling import (
    NumpySampler,
    Sampler,
    annual_to_monthly_rate,
    market_factor,
    percentile,
)
from decisioncore.engine.numeric import round_half_up, round_to
from decisioncore.engine.types import MarketCondition

logger = structlog.get_logger(__name__)

# ── Configuration ─────────────────────────────────────────────────────────

COST_FLOOR_RATIO: float = 0.5   # sampled cost never drops below 50% of base
PERCENTILE_POINTS: tuple[int, ...] = (5, 10, 25, 50, 75, 90, 95)
BAND_POINTS: tuple[int, ...] = (10, 50, 90)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Input to the Monte Carlo engine.

    Optional knobs left as None fall back to the configured defaults
    (``MC_DEFAULT_*`` settings); the config is echoed back as supplied.
    """
    base_cost_per_sqm: float          # P50 benchmark cost
    gfa: float                        # gross floor area (sqm)
    trend_annual_pct: float           # annualized trend, e.g. +5.2
    market_condition: MarketCondition
    horizon_months: int               # 1-60
    trend_volatility: Optional[float] = None    # ± points around trend
    budget_cap: Optional[float] = None
    iterations: Optional[int] = None
    cost_volatility_pct: Optional[float] = None
    gfa_variance_pct: Optional[float] = None
    seed: Optional[int] = None


@dataclass(frozen=True)
class PercentileSet:
    p5: int
    p10: int
    p25: int
    p50: int
    p75: int
    p90: int
    p95: int

    def as_tuple(self) -> tuple[int, ...]:
        return (self.p5, self.p10, self.p25, self.p50, self.p75, self.p90, self.p95)


@dataclass(frozen=True)
class HistogramBucket:
    range_min: int
    range_max: int
    count: int
    percentage: float


@dataclass(frozen=True)
class TimeSeriesPoint:
    month: int
    p10: int
    p50: int
    p90: int


@dataclass(frozen=True)
class SimulationResult:
    """
    Output of a Monte Carlo run.

    Monetary figures are whole currency units; percentages carry 2 dp.
    """
    iterations: int
    percentiles: PercentileSet
    histogram: tuple[HistogramBucket, ...]
    time_series: tuple[TimeSeriesPoint, ...]
    mean: int
    std_dev: int
    var95: int                                   # == percentiles.p95
    budget_exceed_probability: Optional[float]   # None without a cap
    min_outcome: int
    max_outcome: int
    config: SimulationConfig

    def to_dict(self) -> dict:
        return asdict(self)


def clamp_iterations(requested: Optional[int]) -> int:
    """Clamp an iteration count into [MC_MIN_ITERATIONS, MC_MAX_ITERATIONS]."""
    if requested is None:
        requested = settings.mc_default_iterations
    return max(settings.mc_min_iterations, min(int(requested), settings.mc_max_iterations))


class MonteCarloEngine:
    """
    Probabilistic cost forecast engine.

    Holds no state between runs. A sampler passed to the constructor is
    reused for every run (tests inject deterministic ones); otherwise
    each run builds a fresh ``NumpySampler`` seeded from the config.
    """

    def __init__(self, sampler: Optional[Sampler] = None, n_buckets: Optional[int] = None):
        self.sampler = sampler
        self.n_buckets = n_buckets or settings.mc_histogram_buckets

    def run(self, config: SimulationConfig) -> SimulationResult:
        start = time.perf_counter()

        n = clamp_iterations(config.iterations)
        if config.iterations is not None and n != config.iterations:
            logger.warning(
                "monte_carlo_iterations_clamped",
                requested=config.iterations,
                used=n,
            )

        horizon = max(1, int(config.horizon_months))
        sampler = self.sampler or NumpySampler(config.seed)

        paths = self._simulate_paths(config, n, horizon, sampler)

        # Final outcome = compounded total at the full horizon
        outcomes = np.sort(paths[:, -1])

        percentiles = PercentileSet(
            *(round_half_up(float(percentile(outcomes, p))) for p in PERCENTILE_POINTS)
        )

        mean = float(outcomes.mean())
        std_dev = float(outcomes.std())   # population (ddof=0)
        min_val = float(outcomes[0])
        max_val = float(outcomes[-1])

        histogram = self._histogram(outcomes, min_val, max_val, n)
        time_series = self._time_series(paths, horizon)
        exceed = self._budget_exceed_probability(outcomes, config.budget_cap, n)

        result = SimulationResult(
            iterations=n,
            percentiles=percentiles,
            histogram=histogram,
            time_series=time_series,
            mean=round_half_up(mean),
            std_dev=round_half_up(std_dev),
            var95=percentiles.p95,
            budget_exceed_probability=exceed,
            min_outcome=round_half_up(min_val),
            max_outcome=round_half_up(max_val),
            config=config,
        )

        logger.info(
            "monte_carlo_completed",
            iterations=n,
            horizon_months=horizon,
            market_condition=str(config.market_condition),
            p50=percentiles.p50,
            var95=result.var95,
            duration_ms=round((time.perf_counter() - start) * 1000, 1),
        )
        return result

    # ── Private helpers ──────────────────────────────────────────────────

    @staticmethod
    def _simulate_paths(
        config: SimulationConfig,
        n: int,
        horizon: int,
        sampler: Sampler,
    ) -> np.ndarray:
        """Return the (n × horizon) matrix of total cost per trial per month."""
        base = config.base_cost_per_sqm
        cost_vol = _or_default(config.cost_volatility_pct, settings.mc_default_cost_volatility_pct)
        gfa_var = _or_default(config.gfa_variance_pct, settings.mc_default_gfa_variance_pct)
        trend_vol = _or_default(config.trend_volatility, settings.mc_default_trend_volatility)

        costs = np.maximum(
            base * COST_FLOOR_RATIO,
            sampler.normal(base, base * (cost_vol / 100.0), n),
        )
        areas = sampler.uniform(
            config.gfa * (1 - gfa_var / 100.0),
            config.gfa * (1 + gfa_var / 100.0),
            n,
        )
        trends = sampler.uniform(
            config.trend_annual_pct - trend_vol,
            config.trend_annual_pct + trend_vol,
            n,
        )
        monthly_rates = annual_to_monthly_rate(trends)

        months = np.arange(1, horizon + 1)
        growth = np.power(1.0 + monthly_rates[:, np.newaxis], months[np.newaxis, :])
        m_factor = market_factor(config.market_condition)

        return costs[:, np.newaxis] * growth * m_factor * areas[:, np.newaxis]

    def _histogram(
        self,
        outcomes: np.ndarray,
        min_val: float,
        max_val: float,
        n: int,
    ) -> tuple[HistogramBucket, ...]:
        """Equal-width buckets over [min, max]; a zero range collapses into bucket 0."""
        value_range = max_val - min_val
        if value_range == 0:
            logger.warning("monte_carlo_zero_variance", outcome=round_half_up(min_val))
            value_range = 1.0
        width = value_range / self.n_buckets

        idx = np.minimum(
            np.floor((outcomes - min_val) / width).astype(int),
            self.n_buckets - 1,
        )
        counts = np.bincount(idx, minlength=self.n_buckets)

        return tuple(
            HistogramBucket(
                range_min=round_half_up(min_val + i * width),
                range_max=round_half_up(min_val + (i + 1) * width),
                count=int(counts[i]),
                percentage=round_to(float(counts[i]) * 100 / n),
            )
            for i in range(self.n_buckets)
        )

    @staticmethod
    def _time_series(paths: np.ndarray, horizon: int) -> tuple[TimeSeriesPoint, ...]:
        sorted_paths = np.sort(paths, axis=0)
        bands = {p: np.floor(percentile(sorted_paths, p) + 0.5).astype(int) for p in BAND_POINTS}
        return tuple(
            TimeSeriesPoint(
                month=m + 1,
                p10=int(bands[10][m]),
                p50=int(bands[50][m]),
                p90=int(bands[90][m]),
            )
            for m in range(horizon)
        )

    @staticmethod
    def _budget_exceed_probability(
        outcomes: np.ndarray,
        budget_cap: Optional[float],
        n: int,
    ) -> Optional[float]:
        if not budget_cap or budget_cap <= 0:
            return None
        exceed_count = int(np.count_nonzero(outcomes > budget_cap))
        return round_to(exceed_count * 100 / n)


def _or_default(value: Optional[float], default: float) -> float:
    return default if value is None else value


def run_monte_carlo_simulation(
    config: SimulationConfig,
    sampler: Optional[Sampler] = None,
) -> SimulationResult:
    """Run a Monte Carlo cost projection for ``config``."""
    return MonteCarloEngine(sampler=sampler).run(config)
