"""
Pydantic request schemas.

These are the boundary shapes a transport layer hands to ``service``.
Non-finite numbers are rejected everywhere (``allow_inf_nan=False``);
physically meaningless negatives are rejected per field.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from decisioncore.config import settings
from decisioncore.engine.types import MarketCondition, RiskDomain, StressCondition

STRICT_NUMBERS = ConfigDict(allow_inf_nan=False, frozen=True, extra="forbid")


class SimulationRequest(BaseModel):
    model_config = STRICT_NUMBERS

    base_cost_per_sqm: float = Field(gt=0)
    gfa: float = Field(gt=0)
    trend_annual_pct: float = Field(gt=-100)
    trend_volatility: Optional[float] = Field(default=None, ge=0)
    market_condition: MarketCondition = MarketCondition.BALANCED
    horizon_months: int = Field(ge=1, le=settings.mc_max_horizon_months)
    budget_cap: Optional[float] = Field(default=None, ge=0)
    # Out-of-range iteration counts are clamped by the engine, not rejected
    iterations: Optional[int] = None
    cost_volatility_pct: Optional[float] = Field(default=None, ge=0)
    gfa_variance_pct: Optional[float] = Field(default=None, ge=0, le=100)
    seed: Optional[int] = None

    @model_validator(mode="after")
    def validate_trend_floor(self) -> "SimulationRequest":
        """Lowest sampled trend (trend - volatility) must stay above -100%."""
        volatility = (
            self.trend_volatility
            if self.trend_volatility is not None
            else settings.mc_default_trend_volatility
        )
        if self.trend_annual_pct - volatility <= -100:
            raise ValueError(
                f"trend_annual_pct - trend_volatility must be > -100, "
                f"got {self.trend_annual_pct} - {volatility}"
            )
        return self


class RiskEvaluationRequest(BaseModel):
    model_config = STRICT_NUMBERS

    domain: RiskDomain
    tier: str = Field(min_length=1, max_length=50)
    horizon: str = Field(default="12-24m", max_length=50)
    location: str = Field(default="Secondary", max_length=50)
    complexity_score: float = Field(ge=0, le=100)


class RiskSurfaceRequest(BaseModel):
    model_config = STRICT_NUMBERS

    tier: str = Field(min_length=1, max_length=50)
    horizon: str = Field(default="12-24m", max_length=50)
    location: str = Field(default="Secondary", max_length=50)
    complexity_score: float = Field(ge=0, le=100)


class StressTestRequest(BaseModel):
    model_config = STRICT_NUMBERS

    condition: StressCondition
    baseline_budget: float = Field(ge=0)
    tier: str = Field(min_length=1, max_length=50)


class StressSuiteRequest(BaseModel):
    model_config = STRICT_NUMBERS

    baseline_budget: float = Field(ge=0)
    tier: str = Field(min_length=1, max_length=50)
    conditions: Optional[list[StressCondition]] = None


class RoiRequest(BaseModel):
    model_config = STRICT_NUMBERS

    tier: str = Field(min_length=1, max_length=50)
    scale: str = Field(min_length=1, max_length=50)
    total_budget: float = Field(ge=0)
    total_development_value: float = Field(ge=0)
    complexity_score: float = Field(ge=0, le=100)
    decision_speed_adjustment: float = Field(default=1.0, ge=0)
    service_fee: float = Field(ge=0)


class ScenarioProfileRequest(BaseModel):
    model_config = STRICT_NUMBERS

    scenario_id: int
    name: str = Field(min_length=1, max_length=255)
    net_roi_percent: float
    avg_resilience_score: float = Field(ge=0, le=100)
    composite_risk_score: float = Field(ge=0, le=100)


class RankingRequest(BaseModel):
    model_config = STRICT_NUMBERS

    scenarios: list[ScenarioProfileRequest]


class ProjectionRequest(BaseModel):
    model_config = STRICT_NUMBERS

    base_cost_per_sqm: float = Field(ge=0)
    gfa: float = Field(ge=0)
    trend_percent_change: float = Field(gt=-100)
    trend_direction: str = "stable"
    market_condition: MarketCondition = MarketCondition.BALANCED
    horizon_months: Optional[int] = Field(default=None, ge=1)
    currency: str = Field(default="AED", max_length=3)
    sales_strategy: Optional[str] = None
    target_yield: Optional[str] = None
