"""
Monte Carlo Engine Tests.
"""

from dataclasses import replace

import numpy as np
import pytest
from hypothesis import given, settings as hyp_settings
from hypothesis import strategies as st

from decisioncore.engine.monte_carlo import (
    MonteCarloEngine,
    SimulationConfig,
    clamp_iterations,
    run_monte_carlo_simulation,
)
from decisioncore.engine.types import MarketCondition
from tests.conftest import BASE_CONFIG, MidpointSampler


class TestResultStructure:
    """Shape invariants of a single seeded run."""

    def setup_method(self):
        self.config = replace(BASE_CONFIG, seed=42)
        self.result = run_monte_carlo_simulation(self.config)

    def test_iterations(self):
        assert self.result.iterations == 1000

    def test_percentiles_ascending(self):
        values = self.result.percentiles.as_tuple()
        assert len(values) == 7
        assert list(values) == sorted(values)

    def test_twenty_buckets(self):
        assert len(self.result.histogram) == 20

    def test_bucket_counts_sum_to_iterations(self):
        assert sum(b.count for b in self.result.histogram) == 1000

    def test_bucket_percentages_sum_to_100(self):
        total = sum(b.percentage for b in self.result.histogram)
        assert 99 <= total <= 101

    def test_buckets_are_contiguous(self):
        buckets = self.result.histogram
        assert buckets[0].range_min == self.result.min_outcome
        for prev, nxt in zip(buckets, buckets[1:]):
            assert prev.range_max == nxt.range_min

    def test_time_series_months(self):
        series = self.result.time_series
        assert len(series) == 12
        assert series[0].month == 1
        assert series[-1].month == 12

    def test_time_series_bands_ordered(self):
        for point in self.result.time_series:
            assert point.p10 <= point.p50 <= point.p90

    def test_var95_is_p95(self):
        assert self.result.var95 == self.result.percentiles.p95

    def test_mean_between_min_and_max(self):
        assert self.result.min_outcome <= self.result.mean <= self.result.max_outcome

    def test_std_dev_non_negative(self):
        assert self.result.std_dev >= 0

    def test_no_budget_cap_gives_none(self):
        assert self.result.budget_exceed_probability is None

    def test_config_echoed(self):
        assert self.result.config == self.config

    def test_collections_are_tuples(self):
        assert isinstance(self.result.histogram, tuple)
        assert isinstance(self.result.time_series, tuple)

    def test_to_dict_is_plain(self):
        data = self.result.to_dict()
        assert data["percentiles"]["p50"] == self.result.percentiles.p50
        assert len(data["histogram"]) == 20
        assert data["config"]["gfa"] == 2000


class TestIterationClamping:
    def test_below_minimum(self, base_config):
        result = run_monte_carlo_simulation(replace(base_config, iterations=10))
        assert result.iterations == 100

    def test_above_maximum(self, base_config):
        result = run_monte_carlo_simulation(
            replace(base_config, iterations=100_000, horizon_months=1)
        )
        assert result.iterations == 50_000

    def test_default_when_unset(self):
        assert clamp_iterations(None) == 10_000

    def test_in_range_untouched(self):
        assert clamp_iterations(2500) == 2500


class TestBudgetCap:
    def test_very_high_cap(self, base_config):
        result = run_monte_carlo_simulation(replace(base_config, budget_cap=999_999_999))
        assert result.budget_exceed_probability == 0

    def test_very_low_cap(self, base_config):
        result = run_monte_carlo_simulation(replace(base_config, budget_cap=1))
        assert result.budget_exceed_probability > 99

    def test_cap_at_prior_median(self, base_config):
        first = run_monte_carlo_simulation(replace(base_config, iterations=5000))
        result = run_monte_carlo_simulation(
            replace(base_config, iterations=5000, budget_cap=first.percentiles.p50)
        )
        assert 20 < result.budget_exceed_probability < 80

    def test_zero_cap_treated_as_absent(self, base_config):
        result = run_monte_carlo_simulation(replace(base_config, budget_cap=0))
        assert result.budget_exceed_probability is None

    def test_every_outcome_above_cap(self, base_config, midpoint_sampler):
        engine = MonteCarloEngine(sampler=midpoint_sampler)
        outcome = engine.run(base_config).percentiles.p50
        below = engine.run(replace(base_config, budget_cap=outcome - 1))
        assert below.budget_exceed_probability == 100.0


class TestDeterministicSampler:
    """With every draw pinned to its centre the engine is exact."""

    def setup_method(self):
        self.engine = MonteCarloEngine(sampler=MidpointSampler())

    def test_final_outcome(self, base_config):
        # 5000 × 1.05 (12 months at 5%/yr) × 2000
        result = self.engine.run(base_config)
        assert result.percentiles.p50 == pytest.approx(10_500_000, abs=1)
        assert result.percentiles.p5 == result.percentiles.p95

    def test_first_month(self, base_config):
        result = self.engine.run(base_config)
        expected = 5000 * 2000 * 1.05 ** (1 / 12)
        assert result.time_series[0].p50 == pytest.approx(expected, abs=1)

    def test_zero_variance_histogram(self, base_config):
        result = self.engine.run(base_config)
        assert result.histogram[0].count == 1000
        assert result.histogram[0].percentage == 100.0
        assert all(b.count == 0 for b in result.histogram[1:])
        assert result.std_dev == 0
        assert result.min_outcome == result.max_outcome

    def test_market_factors_exact(self, base_config):
        balanced = self.engine.run(base_config).percentiles.p50
        tight = self.engine.run(replace(base_config, market_condition=MarketCondition.TIGHT)).percentiles.p50
        soft = self.engine.run(replace(base_config, market_condition=MarketCondition.SOFT)).percentiles.p50
        assert tight == pytest.approx(balanced * 1.05, abs=2)
        assert soft == pytest.approx(balanced * 0.95, abs=2)

    def test_cost_floor(self, base_config):
        """A sampled cost below 50% of base is lifted to the floor."""

        class LowCostSampler:
            def normal(self, mean, std, size):
                return np.full(size, -1000.0)

            def uniform(self, low, high, size):
                return np.full(size, (low + high) / 2.0)

        result = MonteCarloEngine(sampler=LowCostSampler()).run(base_config)
        assert result.percentiles.p50 == pytest.approx(2500 * 1.05 * 2000, abs=1)

    def test_flat_trend_is_flat(self, base_config):
        result = self.engine.run(replace(base_config, trend_annual_pct=0))
        medians = {p.p50 for p in result.time_series}
        assert medians == {10_000_000}


class TestHalfUpRounding:
    """One outlier in 800 trials lands exactly on 0.125%."""

    class OneOutlierSampler:
        def normal(self, mean, std, size):
            draws = np.full(size, float(mean))
            draws[0] = mean * 2
            return draws

        def uniform(self, low, high, size):
            return np.full(size, (low + high) / 2.0)

    def setup_method(self):
        self.engine = MonteCarloEngine(sampler=self.OneOutlierSampler())
        self.config = replace(BASE_CONFIG, iterations=800, trend_volatility=0)

    def test_histogram_percentages_round_ties_up(self):
        result = self.engine.run(self.config)
        assert result.histogram[0].count == 799
        assert result.histogram[-1].count == 1
        assert result.histogram[0].percentage == 99.88
        assert result.histogram[-1].percentage == 0.13

    def test_budget_exceed_rounds_ties_up(self):
        # cap sits between the bulk (10.5M) and the outlier (21M)
        result = self.engine.run(replace(self.config, budget_cap=15_000_000))
        assert result.budget_exceed_probability == 0.13


class TestMarketConditions:
    def test_tight_not_below_balanced(self, base_config):
        balanced = run_monte_carlo_simulation(replace(base_config, iterations=5000))
        tight = run_monte_carlo_simulation(
            replace(base_config, iterations=5000, market_condition=MarketCondition.TIGHT)
        )
        assert tight.percentiles.p50 >= balanced.percentiles.p50

    def test_soft_not_above_balanced(self, base_config):
        balanced = run_monte_carlo_simulation(replace(base_config, iterations=5000))
        soft = run_monte_carlo_simulation(
            replace(base_config, iterations=5000, market_condition=MarketCondition.SOFT)
        )
        assert soft.percentiles.p50 <= balanced.percentiles.p50


class TestScalingAndTrend:
    def test_doubling_gfa_doubles_median(self, base_config):
        single = run_monte_carlo_simulation(replace(base_config, iterations=5000))
        double = run_monte_carlo_simulation(replace(base_config, iterations=5000, gfa=4000))
        ratio = double.percentiles.p50 / single.percentiles.p50
        assert 1.6 <= ratio <= 2.4

    def test_positive_trend_increasing(self, base_config):
        result = run_monte_carlo_simulation(
            replace(base_config, trend_annual_pct=5, trend_volatility=0.5, horizon_months=24)
        )
        medians = [p.p50 for p in result.time_series]
        assert all(b > a for a, b in zip(medians, medians[1:]))

    def test_negative_trend_decreasing(self, base_config):
        result = run_monte_carlo_simulation(
            replace(base_config, trend_annual_pct=-5, trend_volatility=0.5, horizon_months=24)
        )
        medians = [p.p50 for p in result.time_series]
        assert all(b < a for a, b in zip(medians, medians[1:]))


class TestSeeding:
    def test_same_seed_same_result(self, base_config):
        a = run_monte_carlo_simulation(replace(base_config, seed=123))
        b = run_monte_carlo_simulation(replace(base_config, seed=123))
        assert a == b

    def test_different_seeds_differ(self, base_config):
        a = run_monte_carlo_simulation(replace(base_config, seed=1))
        b = run_monte_carlo_simulation(replace(base_config, seed=2))
        assert a.percentiles != b.percentiles


class TestProperties:
    @given(
        base_cost=st.floats(min_value=100, max_value=20_000),
        gfa=st.floats(min_value=10, max_value=50_000),
        trend=st.floats(min_value=-20, max_value=20),
        horizon=st.integers(min_value=1, max_value=36),
        iterations=st.integers(min_value=50, max_value=400),
        condition=st.sampled_from(list(MarketCondition)),
        seed=st.integers(min_value=0, max_value=2**32 - 1),
    )
    @hyp_settings(max_examples=40, deadline=None)
    def test_invariants_hold(self, base_cost, gfa, trend, horizon, iterations, condition, seed):
        config = SimulationConfig(
            base_cost_per_sqm=base_cost,
            gfa=gfa,
            trend_annual_pct=trend,
            market_condition=condition,
            horizon_months=horizon,
            iterations=iterations,
            seed=seed,
        )
        result = run_monte_carlo_simulation(config)

        assert result.iterations == max(100, iterations)
        values = result.percentiles.as_tuple()
        assert list(values) == sorted(values)
        assert sum(b.count for b in result.histogram) == result.iterations
        assert 99 <= sum(b.percentage for b in result.histogram) <= 101
        assert len(result.time_series) == horizon
        assert all(p.p10 <= p.p50 <= p.p90 for p in result.time_series)
        assert result.var95 == result.percentiles.p95
        assert result.min_outcome <= result.mean <= result.max_outcome
        assert result.std_dev >= 0
