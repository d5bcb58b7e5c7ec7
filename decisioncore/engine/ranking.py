"""
Scenario Selection & Ranking.

Orders competing scenarios by a strategic rank score:

    score = 0.50 × min(net_roi%, 100)
          + 0.30 × avg_resilience
          + 0.20 × (100 − composite_risk)

ROI is capped at 100 before weighting so outlier ROI (thousands of %)
cannot swamp resilience and risk. The sort is stable: equal scores keep
input order.
"""

from dataclasses import asdict, dataclass
from typing import Optional, Sequence

import structlog

from decisioncore.engine.economic import EconomicResult
from decisioncore.engine.numeric import round_half_up, round_to
from decisioncore.engine.risk_evaluator import RiskSurfaceMap
from decisioncore.engine.stress_tester import StressTestResult

logger = structlog.get_logger(__name__)

# ── Configuration ─────────────────────────────────────────────────────────

WEIGHT_ROI: float = 0.50
WEIGHT_RESILIENCE: float = 0.30
WEIGHT_INVERSE_RISK: float = 0.20
ROI_CAP: float = 100.0

# Used when a scenario has not been through an engine yet
DEFAULT_RESILIENCE: int = 70
DEFAULT_NET_ROI: float = 0.0
DEFAULT_COMPOSITE_RISK: int = 50


@dataclass(frozen=True)
class ScenarioProfile:
    scenario_id: int
    name: str
    net_roi_percent: float
    avg_resilience_score: float
    composite_risk_score: float    # lower is better


@dataclass(frozen=True)
class RankedScenario:
    scenario_id: int
    name: str
    net_roi_percent: float
    avg_resilience_score: float
    composite_risk_score: float
    strategic_rank_score: float

    def to_dict(self) -> dict:
        return asdict(self)


def strategic_rank_score(profile: ScenarioProfile) -> float:
    roi_score = min(profile.net_roi_percent, ROI_CAP)
    risk_inverted = 100 - profile.composite_risk_score
    score = (
        roi_score * WEIGHT_ROI
        + profile.avg_resilience_score * WEIGHT_RESILIENCE
        + risk_inverted * WEIGHT_INVERSE_RISK
    )
    return round_to(score)


def rank_scenarios(scenarios: Sequence[ScenarioProfile]) -> list[RankedScenario]:
    """Score and sort scenarios, best first."""
    ranked = [
        RankedScenario(
            scenario_id=s.scenario_id,
            name=s.name,
            net_roi_percent=s.net_roi_percent,
            avg_resilience_score=s.avg_resilience_score,
            composite_risk_score=s.composite_risk_score,
            strategic_rank_score=strategic_rank_score(s),
        )
        for s in scenarios
    ]
    ranked.sort(key=lambda r: r.strategic_rank_score, reverse=True)

    logger.info(
        "scenarios_ranked",
        n_scenarios=len(ranked),
        leader=ranked[0].name if ranked else None,
    )
    return ranked


def build_scenario_profile(
    scenario_id: int,
    name: str,
    stress_results: Sequence[StressTestResult] = (),
    roi_result: Optional[EconomicResult] = None,
    risk_surface: Optional[RiskSurfaceMap] = None,
) -> ScenarioProfile:
    """
    Assemble a ranking profile from engine outputs for one scenario.

    Missing inputs fall back to neutral defaults: resilience 70, ROI 0%,
    composite risk 50.
    """
    if stress_results:
        avg_resilience = round_half_up(
            sum(r.resilience_score for r in stress_results) / len(stress_results)
        )
    else:
        avg_resilience = DEFAULT_RESILIENCE

    net_roi = roi_result.net_roi_percent if roi_result is not None else DEFAULT_NET_ROI

    if risk_surface is not None and risk_surface.domains:
        composite_risk = round_half_up(
            sum(d.composite_risk_score for d in risk_surface.domains) / len(risk_surface.domains)
        )
    else:
        composite_risk = DEFAULT_COMPOSITE_RISK

    return ScenarioProfile(
        scenario_id=scenario_id,
        name=name,
        net_roi_percent=net_roi,
        avg_resilience_score=avg_resilience,
        composite_risk_score=composite_risk,
    )
