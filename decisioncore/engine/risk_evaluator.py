"""
Integrated Risk Scoring Model.

    R = (P × I × V) / C

    P = probability of occurrence (0-100)
    I = impact magnitude (0-100)
    V = system vulnerability (0-100)
    C = control strength (1-100)

Each domain derives P/I/V/C from a hand-tuned heuristic table keyed on
tier, horizon, location and complexity. The unbounded R is divided by
RISK_SCORE_DIVISOR, floored, and clamped to [1, 100]; the composite then
maps onto five bands with fixed inclusive upper bounds.

Deterministic: identical inputs always give identical scores.
"""

import math
from dataclasses import asdict, dataclass

import structlog

from decisioncore.config import settings
from decisioncore.engine.numeric import round_half_up
from decisioncore.engine.types import RiskBand, RiskDomain, Tier

logger = structlog.get_logger(__name__)

# ── Configuration ─────────────────────────────────────────────────────────

DEFAULT_PROBABILITY: int = 50
DEFAULT_IMPACT: int = 50
DEFAULT_VULNERABILITY: int = 50
DEFAULT_CONTROL_STRENGTH: int = 60
MIN_CONTROL_STRENGTH: int = 1

MIN_COMPOSITE_SCORE: int = 1
MAX_COMPOSITE_SCORE: int = 100

# Inclusive upper bound of each band; anything above the last is Systemic
BAND_THRESHOLDS: tuple[tuple[int, RiskBand], ...] = (
    (20, RiskBand.MINIMAL),
    (40, RiskBand.CONTROLLED),
    (60, RiskBand.ELEVATED),
    (80, RiskBand.CRITICAL),
)

LONG_HORIZON_MARKER = "36m"
EMERGING_LOCATION = "Emerging"


@dataclass(frozen=True)
class RiskFactors:
    probability: float
    impact: float
    vulnerability: float
    control_strength: float


@dataclass(frozen=True)
class RiskDomainResult:
    domain: RiskDomain
    probability: float
    impact: float
    vulnerability: float
    control_strength: float
    composite_risk_score: int     # 1-100
    risk_band: RiskBand

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RiskSurfaceMap:
    """All eight domains evaluated against one project context."""
    domains: tuple[RiskDomainResult, ...]
    overall_risk: int             # rounded mean of domain composites

    @property
    def highest(self) -> RiskDomainResult:
        return max(self.domains, key=lambda d: d.composite_risk_score)

    def to_dict(self) -> dict:
        return asdict(self)


def domain_factors(
    domain: RiskDomain,
    tier: str,
    horizon: str,
    location: str,
    complexity_score: float,
) -> RiskFactors:
    """Heuristic P/I/V/C for a domain."""
    long_horizon = LONG_HORIZON_MARKER in horizon

    match RiskDomain(domain):
        case RiskDomain.COMMERCIAL:
            # Scales with tier and complexity; pre-agreed budgets act as controls
            if tier == Tier.ULTRA_LUXURY:
                probability = 80
            elif tier == Tier.LUXURY:
                probability = 65
            else:
                probability = 40
            return RiskFactors(
                probability=probability,
                impact=90 if complexity_score > 75 else 60,
                vulnerability=85 if long_horizon else 50,
                control_strength=70,
            )

        case RiskDomain.OPERATIONAL:
            # Supply chain exposure; external suppliers are hard to control.
            # Case-sensitive: matches "Ultra-luxury", not "Luxury".
            return RiskFactors(
                probability=75 if location == EMERGING_LOCATION else 45,
                impact=85 if "luxury" in tier else 55,
                vulnerability=complexity_score,
                control_strength=55,
            )

        case RiskDomain.STRATEGIC:
            # Failure is always high impact; macro shifts are hard to control
            return RiskFactors(
                probability=70 if tier == Tier.MID else 40,
                impact=95,
                vulnerability=80 if long_horizon else 40,
                control_strength=40,
            )

        case (
            RiskDomain.MODEL
            | RiskDomain.TECHNOLOGY
            | RiskDomain.DATA
            | RiskDomain.BEHAVIOURAL
            | RiskDomain.REGULATORY
        ):
            return RiskFactors(
                probability=DEFAULT_PROBABILITY,
                impact=DEFAULT_IMPACT,
                vulnerability=DEFAULT_VULNERABILITY,
                control_strength=DEFAULT_CONTROL_STRENGTH,
            )


def composite_score(factors: RiskFactors) -> int:
    """floor((P × I × V) / C / divisor) clamped to [1, 100]."""
    control = max(MIN_CONTROL_STRENGTH, factors.control_strength)
    r_unbounded = (factors.probability * factors.impact * factors.vulnerability) / control
    score = math.floor(r_unbounded / settings.risk_score_divisor)
    return max(MIN_COMPOSITE_SCORE, min(MAX_COMPOSITE_SCORE, score))


def risk_band(score: float) -> RiskBand:
    for upper, band in BAND_THRESHOLDS:
        if score <= upper:
            return band
    return RiskBand.SYSTEMIC


def evaluate_risk_surface(
    domain: RiskDomain,
    tier: str,
    horizon: str,
    location: str,
    complexity_score: float,
) -> RiskDomainResult:
    """Composite risk score and band for a single domain."""
    domain = RiskDomain(domain)
    factors = domain_factors(domain, tier, horizon, location, complexity_score)
    score = composite_score(factors)

    result = RiskDomainResult(
        domain=domain,
        probability=factors.probability,
        impact=factors.impact,
        vulnerability=factors.vulnerability,
        control_strength=max(MIN_CONTROL_STRENGTH, factors.control_strength),
        composite_risk_score=score,
        risk_band=risk_band(score),
    )
    logger.debug(
        "risk_surface_evaluated",
        domain=domain.value,
        composite_risk_score=score,
        risk_band=result.risk_band.value,
    )
    return result


def generate_risk_surface(
    tier: str,
    horizon: str,
    location: str,
    complexity_score: float,
) -> RiskSurfaceMap:
    """Evaluate every domain, in declaration order, and average the composites."""
    results = tuple(
        evaluate_risk_surface(domain, tier, horizon, location, complexity_score)
        for domain in RiskDomain
    )
    overall = round_half_up(sum(r.composite_risk_score for r in results) / len(results))

    logger.info(
        "risk_surface_generated",
        overall_risk=overall,
        systemic_domains=[r.domain.value for r in results if r.risk_band == RiskBand.SYSTEMIC],
    )
    return RiskSurfaceMap(domains=results, overall_risk=overall)
