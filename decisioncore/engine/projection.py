"""
Deterministic Scenario Cost Projection.

Projects cost at milestone months with the same compounding rule the
Monte Carlo engine samples around:

    projected = base × (1 + monthly_rate)^month × market_factor

and brackets the central path with low/mid/high spreads adjusted by
target yield and sales strategy.
"""

from dataclasses import asdict, dataclass
from typing import Optional

import structlog

from decisioncore.engine.numeric import round_to
from decisioncore.engine.sampling import annual_to_monthly_rate, market_factor
from decisioncore.engine.types import MarketCondition

logger = structlog.get_logger(__name__)

# ── Configuration ─────────────────────────────────────────────────────────

MILESTONE_MONTHS: tuple[int, ...] = (3, 6, 12)
DEFAULT_HORIZON_MONTHS: int = 18
MAX_HORIZON_MONTHS: int = 120          # 10 years

DEFAULT_LOW_MULTIPLIER: float = 0.90
DEFAULT_HIGH_MULTIPLIER: float = 1.15

INSUFFICIENT_DATA = "insufficient_data"


@dataclass(frozen=True)
class ProjectionInput:
    base_cost_per_sqm: float
    gfa: float
    trend_percent_change: float
    trend_direction: str               # rising | falling | stable | insufficient_data
    market_condition: MarketCondition
    horizon_months: Optional[int] = None
    currency: str = "AED"
    sales_strategy: Optional[str] = None
    target_yield: Optional[str] = None


@dataclass(frozen=True)
class ProjectionPoint:
    month: int
    cost_per_sqm: float
    total_cost: float
    cumulative_change: float           # % change from base


@dataclass(frozen=True)
class ScenarioProjection:
    base_cost_per_sqm: float
    base_total_cost: float
    projections: tuple[ProjectionPoint, ...]
    low_scenario: tuple[ProjectionPoint, ...]
    mid_scenario: tuple[ProjectionPoint, ...]
    high_scenario: tuple[ProjectionPoint, ...]
    currency: str
    horizon_months: int
    monthly_rate: float
    market_factor: float
    annualized_trend: float

    def to_dict(self) -> dict:
        return asdict(self)


def spread_multipliers(
    target_yield: Optional[str],
    sales_strategy: Optional[str],
) -> tuple[float, float]:
    """(low, high) cost multipliers for the bracketing scenarios."""
    low, high = DEFAULT_LOW_MULTIPLIER, DEFAULT_HIGH_MULTIPLIER

    match target_yield:
        case "aggressive_yield":
            low, high = 0.85, 1.25
        case "stable_long_term" | "capital_preservation":
            low, high = 0.95, 1.10

    match sales_strategy:
        case "build_to_rent":
            high = max(1.05, high - 0.05)
        case "build_to_sell":
            high += 0.05

    return low, high


def project_scenario_cost(projection: ProjectionInput) -> ScenarioProjection:
    """Project low/mid/high cost paths at the standard milestones."""
    base = projection.base_cost_per_sqm or 0.0
    gfa = projection.gfa or 0.0
    trend = 0.0 if projection.trend_direction == INSUFFICIENT_DATA else projection.trend_percent_change
    horizon = max(1, min(projection.horizon_months or DEFAULT_HORIZON_MONTHS, MAX_HORIZON_MONTHS))

    m_factor = market_factor(projection.market_condition)
    monthly_rate = float(annual_to_monthly_rate(trend))
    milestones = sorted(set(MILESTONE_MONTHS) | {horizon})

    def compute(base_cost: float) -> tuple[ProjectionPoint, ...]:
        points = []
        for month in milestones:
            compounded = base_cost * (1 + monthly_rate) ** month * m_factor
            change = (compounded - base_cost) / base_cost * 100 if base_cost > 0 else 0.0
            points.append(ProjectionPoint(
                month=month,
                cost_per_sqm=round_to(compounded),
                total_cost=round_to(compounded * gfa),
                cumulative_change=round_to(change),
            ))
        return tuple(points)

    low_mult, high_mult = spread_multipliers(projection.target_yield, projection.sales_strategy)
    mid = compute(base)

    logger.debug(
        "scenario_cost_projected",
        horizon_months=horizon,
        monthly_rate=round_to(monthly_rate, 6),
        low_multiplier=low_mult,
        high_multiplier=high_mult,
    )

    return ScenarioProjection(
        base_cost_per_sqm=base,
        base_total_cost=round_to(base * gfa),
        projections=mid,
        low_scenario=compute(base * low_mult),
        mid_scenario=mid,
        high_scenario=compute(base * high_mult),
        currency=projection.currency,
        horizon_months=horizon,
        monthly_rate=round_to(monthly_rate, 6),
        market_factor=m_factor,
        annualized_trend=trend,
    )
