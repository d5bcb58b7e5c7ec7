"""
Decision-Support Service.

dict-in / dict-out wrappers around the engines for transport layers
(HTTP, RPC, task queues). Each call:

1. Validates the payload through a pydantic request model
2. Invokes the engine
3. Returns the result as plain, JSON-ready data

Invalid payloads raise ``decisioncore.exceptions.ValidationError``.
"""

from typing import Any, Mapping, TypeVar

import pydantic
import structlog

from decisioncore.engine.economic import calculate_project_roi
from decisioncore.engine.monte_carlo import SimulationConfig, run_monte_carlo_simulation
from decisioncore.engine.projection import ProjectionInput, project_scenario_cost
from decisioncore.engine.ranking import ScenarioProfile, rank_scenarios
from decisioncore.engine.risk_evaluator import evaluate_risk_surface, generate_risk_surface
from decisioncore.engine.stress_tester import run_stress_suite, simulate_stress_test
from decisioncore.schemas.requests import (
    ProjectionRequest,
    RankingRequest,
    RiskEvaluationRequest,
    RiskSurfaceRequest,
    RoiRequest,
    SimulationRequest,
    StressSuiteRequest,
    StressTestRequest,
)
from decisioncore.validation import from_pydantic_error

logger = structlog.get_logger(__name__)

RequestT = TypeVar("RequestT", bound=pydantic.BaseModel)


def _parse(model: type[RequestT], payload: Mapping[str, Any]) -> RequestT:
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as exc:
        raise from_pydantic_error(exc) from exc


def simulate(payload: Mapping[str, Any]) -> dict:
    """Monte Carlo cost projection."""
    req = _parse(SimulationRequest, payload)
    config = SimulationConfig(**req.model_dump())
    return run_monte_carlo_simulation(config).to_dict()


def evaluate_risk(payload: Mapping[str, Any]) -> dict:
    """Composite risk for a single domain."""
    req = _parse(RiskEvaluationRequest, payload)
    return evaluate_risk_surface(
        req.domain, req.tier, req.horizon, req.location, req.complexity_score,
    ).to_dict()


def risk_surface(payload: Mapping[str, Any]) -> dict:
    """Composite risk for all eight domains plus the overall mean."""
    req = _parse(RiskSurfaceRequest, payload)
    return generate_risk_surface(
        req.tier, req.horizon, req.location, req.complexity_score,
    ).to_dict()


def stress_test(payload: Mapping[str, Any]) -> dict:
    req = _parse(StressTestRequest, payload)
    return simulate_stress_test(req.condition, req.baseline_budget, req.tier).to_dict()


def stress_suite(payload: Mapping[str, Any]) -> dict:
    req = _parse(StressSuiteRequest, payload)
    return run_stress_suite(req.baseline_budget, req.tier, req.conditions).to_dict()


def calculate_roi(payload: Mapping[str, Any]) -> dict:
    req = _parse(RoiRequest, payload)
    return calculate_project_roi(**req.model_dump()).to_dict()


def rank(payload: Mapping[str, Any]) -> list[dict]:
    """Ranked scenarios, best first."""
    req = _parse(RankingRequest, payload)
    profiles = [ScenarioProfile(**s.model_dump()) for s in req.scenarios]
    return [r.to_dict() for r in rank_scenarios(profiles)]


def project_cost(payload: Mapping[str, Any]) -> dict:
    """Deterministic low/mid/high projection at milestone months."""
    req = _parse(ProjectionRequest, payload)
    return project_scenario_cost(ProjectionInput(**req.model_dump())).to_dict()
