"""
Scenario Stress Testing.

Applies a named macro-economic shock to a project context and reports:
- impact magnitude (signed % shift of the stressed quantity)
- resilience score (1-100) from a condition × tier table
- failure points, reported only when resilience < threshold

Pure table lookups: no randomness, no iteration.
"""

from dataclasses import asdict, dataclass
from typing import Iterable, Optional

import structlog

from decisioncore.config import settings
from decisioncore.engine.numeric import round_half_up, round_to
from decisioncore.engine.types import StressCondition, Tier

logger = structlog.get_logger(__name__)

# ── Configuration ─────────────────────────────────────────────────────────

IMPACT_MAGNITUDE_PCT: dict[StressCondition, float] = {
    StressCondition.COST_SURGE: 20,          # material / operational inflation
    StressCondition.DEMAND_COLLAPSE: -50,    # sales velocity halves
    StressCondition.MARKET_SHIFT: -15,       # design trend moves on
    StressCondition.DATA_DISRUPTION: 0,      # benchmark sources lost
}

FAILURE_POINTS: dict[StressCondition, tuple[str, ...]] = {
    StressCondition.COST_SURGE: ("margin_protection", "finishing_budget_saturation"),
    StressCondition.DEMAND_COLLAPSE: ("sales_velocity", "carry_cost_overrun"),
    StressCondition.MARKET_SHIFT: ("design_obsolescence",),
    StressCondition.DATA_DISRUPTION: ("model_robustness", "confidence_interval"),
}


@dataclass(frozen=True)
class StressTestResult:
    stress_condition: StressCondition
    baseline_budget: float
    impact_magnitude_percent: float
    resilience_score: int
    failure_points: tuple[str, ...] = ()

    @property
    def stressed_budget(self) -> float:
        """Baseline budget shifted by the impact magnitude."""
        return round_to(self.baseline_budget * (1 + self.impact_magnitude_percent / 100))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["failure_points"] = list(self.failure_points)
        data["stressed_budget"] = self.stressed_budget
        return data


@dataclass(frozen=True)
class StressSuiteResult:
    """Several conditions run against the same project context."""
    results: tuple[StressTestResult, ...]
    avg_resilience: int
    weakest_condition: Optional[StressCondition]
    failure_points: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "results": [r.to_dict() for r in self.results],
            "avg_resilience": self.avg_resilience,
            "weakest_condition": self.weakest_condition,
            "failure_points": list(self.failure_points),
        }


def resilience_score(condition: StressCondition, tier: str) -> int:
    match condition:
        case StressCondition.COST_SURGE:
            # Higher tiers carry larger margin buffers
            if tier == Tier.ULTRA_LUXURY:
                return 85
            if tier == Tier.LUXURY:
                return 70
            return 45
        case StressCondition.DEMAND_COLLAPSE:
            # The high end suffers most when buyers disappear
            if tier == Tier.ULTRA_LUXURY:
                return 40
            if tier == Tier.LUXURY:
                return 50
            return 80
        case StressCondition.MARKET_SHIFT:
            return 65
        case StressCondition.DATA_DISRUPTION:
            return 50


def simulate_stress_test(
    condition: StressCondition,
    baseline_budget: float,
    tier: str,
) -> StressTestResult:
    """Apply ``condition`` to a project of ``tier`` with ``baseline_budget``."""
    condition = StressCondition(condition)
    resilience = resilience_score(condition, tier)

    failure_points: tuple[str, ...] = ()
    if resilience < settings.stress_resilience_threshold:
        failure_points = FAILURE_POINTS[condition]

    result = StressTestResult(
        stress_condition=condition,
        baseline_budget=baseline_budget,
        impact_magnitude_percent=IMPACT_MAGNITUDE_PCT[condition],
        resilience_score=resilience,
        failure_points=failure_points,
    )
    logger.debug(
        "stress_test_simulated",
        condition=condition.value,
        tier=tier,
        resilience_score=resilience,
        failure_points=failure_points,
    )
    return result


def run_stress_suite(
    baseline_budget: float,
    tier: str,
    conditions: Optional[Iterable[StressCondition]] = None,
) -> StressSuiteResult:
    """Run several conditions (all of them by default) and summarise resilience."""
    selected = list(conditions) if conditions is not None else list(StressCondition)
    results = tuple(simulate_stress_test(c, baseline_budget, tier) for c in selected)

    if not results:
        return StressSuiteResult(
            results=(), avg_resilience=0, weakest_condition=None, failure_points=(),
        )

    avg = round_half_up(sum(r.resilience_score for r in results) / len(results))
    weakest = min(results, key=lambda r: r.resilience_score)

    failure_points: list[str] = []
    for r in results:
        for point in r.failure_points:
            if point not in failure_points:
                failure_points.append(point)

    if failure_points:
        logger.warning(
            "stress_suite_failure_points",
            tier=tier,
            weakest_condition=weakest.stress_condition.value,
            failure_points=failure_points,
        )

    return StressSuiteResult(
        results=results,
        avg_resilience=avg,
        weakest_condition=weakest.stress_condition,
        failure_points=tuple(failure_points),
    )
