"""
decisioncore: Quantitative Decision-Support Core.

Architecture:
    decisioncore/
    ├── engine/          # Stateless calculation engines
    │   ├── sampling       # Normal/uniform samplers, percentile interpolation
    │   ├── monte_carlo    # Probabilistic cost forecast
    │   ├── projection     # Deterministic low/mid/high cost projection
    │   ├── risk_evaluator # R = (P × I × V) / C per risk domain
    │   ├── stress_tester  # Shock conditions → resilience + failure points
    │   ├── economic       # Cost avoidance + programme acceleration → ROI
    │   └── ranking        # Multi-criteria scenario ranking
    ├── schemas/         # Pydantic request models (boundary validation)
    ├── service.py       # dict-in / dict-out façade for transport layers
    ├── validation.py    # Finite / non-negative numeric checks
    ├── exceptions.py    # Error hierarchy with error codes
    ├── config.py        # Env-driven calibration defaults
    └── logging_config.py # structlog setup

Module Boundaries:
    - Engines are pure functions: no I/O, no persistence, no shared RNG state
    - Callers validate inputs BEFORE invoking an engine (see service.py)
    - Every result is a frozen value object with a to_dict() view

Version: 1.0.0
"""

from decisioncore.engine.economic import calculate_project_roi
from decisioncore.engine.monte_carlo import run_monte_carlo_simulation
from decisioncore.engine.projection import project_scenario_cost
from decisioncore.engine.ranking import build_scenario_profile, rank_scenarios
from decisioncore.engine.risk_evaluator import evaluate_risk_surface, generate_risk_surface
from decisioncore.engine.stress_tester import run_stress_suite, simulate_stress_test

__version__ = "1.0.0"

__all__ = [
    "run_monte_carlo_simulation",
    "evaluate_risk_surface",
    "generate_risk_surface",
    "simulate_stress_test",
    "run_stress_suite",
    "calculate_project_roi",
    "rank_scenarios",
    "build_scenario_profile",
    "project_scenario_cost",
]
