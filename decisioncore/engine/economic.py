"""
Economic Value Engine.

Three-stage pure computation:

1. Cost avoidance
     rework_avoided = P(late change) × cost_of_change × scope_impact_ratio
2. Programme acceleration
     acceleration_value = days_saved × daily_carry_cost
3. Aggregation
     total = rework_avoided + acceleration_value
     net_roi% = (total − fee) / fee × 100           (0 when fee ≤ 0)
     risk_adjusted = total × confidence_multiplier

Monetary figures round half up to 2 dp. Net ROI is unbounded above.
"""

from dataclasses import asdict, dataclass

import structlog

from decisioncore.engine.numeric import round_half_up, round_to
from decisioncore.engine.types import ProjectScale, Tier

logger = structlog.get_logger(__name__)

# ── Configuration (calibration constants) ────────────────────────────────

BASE_LATE_CHANGE_PROBABILITY: float = 0.15
COMPLEXITY_COEFFICIENT: float = 0.0035
MAX_LATE_CHANGE_PROBABILITY: float = 0.50

COST_OF_CHANGE_MULTIPLIER: dict[str, float] = {
    Tier.ULTRA_LUXURY: 0.25,
    Tier.LUXURY: 0.20,
}
DEFAULT_COST_OF_CHANGE_MULTIPLIER: float = 0.18

SCOPE_IMPACT_RATIO: dict[str, float] = {
    ProjectScale.LARGE: 0.40,
    ProjectScale.MEDIUM: 0.60,
}
DEFAULT_SCOPE_IMPACT_RATIO: float = 0.85   # small projects absorb the most rework

BASELINE_DAYS_SAVED: dict[str, int] = {
    Tier.ULTRA_LUXURY: 60,
    Tier.LUXURY: 45,
}
DEFAULT_DAYS_SAVED: int = 30

ANNUAL_FINANCING_RATE: float = 0.08
DAYS_PER_YEAR: int = 365


@dataclass(frozen=True)
class CostAvoidance:
    rework_cost_avoided: float
    probability_percent: float
    estimated_replacement_cost: float
    scope_impact_ratio: float


@dataclass(frozen=True)
class ProgrammeAcceleration:
    programme_acceleration_value: float
    days_saved: int
    daily_carry_cost: float


@dataclass(frozen=True)
class EconomicResult:
    rework_cost_avoided: float
    programme_acceleration_value: float
    total_value_created: float
    risk_adjusted_value: float
    net_roi_percent: float
    confidence_multiplier: float
    cost_avoidance: CostAvoidance
    acceleration: ProgrammeAcceleration

    def to_dict(self) -> dict:
        return asdict(self)


def late_change_probability(complexity_score: float) -> float:
    return min(
        MAX_LATE_CHANGE_PROBABILITY,
        BASE_LATE_CHANGE_PROBABILITY + complexity_score * COMPLEXITY_COEFFICIENT,
    )


def confidence_multiplier(complexity_score: float) -> float:
    """Shrinks expected value as complexity climbs."""
    if complexity_score > 80:
        return 0.85
    if complexity_score > 60:
        return 0.90
    return 0.95


def calculate_cost_avoidance(
    tier: str,
    scale: str,
    total_budget: float,
    complexity_score: float,
) -> CostAvoidance:
    """Expected rework cost averted by validating decisions up front."""
    probability = late_change_probability(complexity_score)
    cost_of_change = total_budget * COST_OF_CHANGE_MULTIPLIER.get(tier, DEFAULT_COST_OF_CHANGE_MULTIPLIER)
    scope_ratio = SCOPE_IMPACT_RATIO.get(scale, DEFAULT_SCOPE_IMPACT_RATIO)

    return CostAvoidance(
        rework_cost_avoided=round_to(probability * cost_of_change * scope_ratio),
        probability_percent=round_to(probability * 100, 1),
        estimated_replacement_cost=round_to(cost_of_change),
        scope_impact_ratio=round_to(scope_ratio),
    )


def calculate_programme_acceleration(
    total_development_value: float,
    tier: str,
    decision_speed_adjustment: float = 1.0,
) -> ProgrammeAcceleration:
    """Carry cost saved by starting procurement/construction earlier."""
    days_saved = BASELINE_DAYS_SAVED.get(tier, DEFAULT_DAYS_SAVED) * decision_speed_adjustment
    daily_carry_cost = total_development_value * ANNUAL_FINANCING_RATE / DAYS_PER_YEAR

    return ProgrammeAcceleration(
        programme_acceleration_value=round_to(days_saved * daily_carry_cost),
        days_saved=round_half_up(days_saved),
        daily_carry_cost=round_to(daily_carry_cost),
    )


def calculate_project_roi(
    tier: str,
    scale: str,
    total_budget: float,
    total_development_value: float,
    complexity_score: float,
    service_fee: float,
    decision_speed_adjustment: float = 1.0,
) -> EconomicResult:
    """Combine cost avoidance and programme acceleration into a net ROI."""
    cost_avoidance = calculate_cost_avoidance(tier, scale, total_budget, complexity_score)
    acceleration = calculate_programme_acceleration(
        total_development_value, tier, decision_speed_adjustment,
    )

    total_value = cost_avoidance.rework_cost_avoided + acceleration.programme_acceleration_value

    # fee <= 0 short-circuits to 0%
    if service_fee > 0:
        net_roi = (total_value - service_fee) / service_fee * 100
    else:
        net_roi = 0.0

    multiplier = confidence_multiplier(complexity_score)

    result = EconomicResult(
        rework_cost_avoided=cost_avoidance.rework_cost_avoided,
        programme_acceleration_value=acceleration.programme_acceleration_value,
        total_value_created=round_to(total_value),
        risk_adjusted_value=round_to(total_value * multiplier),
        net_roi_percent=round_to(net_roi),
        confidence_multiplier=multiplier,
        cost_avoidance=cost_avoidance,
        acceleration=acceleration,
    )
    logger.info(
        "roi_calculated",
        tier=tier,
        scale=scale,
        total_value_created=result.total_value_created,
        net_roi_percent=result.net_roi_percent,
    )
    return result
