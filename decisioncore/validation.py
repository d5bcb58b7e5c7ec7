"""
Boundary Validation.

The engines perform no defensive checks beyond their documented clamps
and floors. Callers that build engine inputs directly (rather than via
the pydantic request models) run them through these guards first.

Every failure raises ``decisioncore.exceptions.ValidationError`` naming
the offending field.
"""

import math
from typing import Any, Iterable, Optional

import pydantic
import structlog

from decisioncore.config import settings
from decisioncore.engine.monte_carlo import SimulationConfig
from decisioncore.exceptions import ErrorCode, ValidationError

logger = structlog.get_logger(__name__)

# Annual trend at or below this makes the monthly compounding base non-positive
MIN_ANNUAL_TREND_PCT: float = -100.0


def ensure_finite(value: Any, field: str) -> None:
    if value is None:
        return
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise ValidationError(
            f"{field} must be a number, got {type(value).__name__}",
            field=field,
            code=ErrorCode.INVALID_DATA,
        )
    if not math.isfinite(value):
        raise ValidationError(
            f"{field} must be finite, got {value}",
            field=field,
            code=ErrorCode.NON_FINITE_VALUE,
        )


def ensure_non_negative(value: Any, field: str) -> None:
    ensure_finite(value, field)
    if value is not None and value < 0:
        raise ValidationError(
            f"{field} must be non-negative, got {value}",
            field=field,
            code=ErrorCode.NEGATIVE_VALUE,
        )


def ensure_all_non_negative(values: dict[str, Any], fields: Optional[Iterable[str]] = None) -> None:
    for name in fields or values.keys():
        ensure_non_negative(values[name], name)


def validate_simulation_config(config: SimulationConfig) -> SimulationConfig:
    """
    Reject NaN/Infinity anywhere, negative sizes, costs or spreads, and
    trend ranges whose lower bound reaches -100%/yr.
    """
    ensure_finite(config.trend_annual_pct, "trend_annual_pct")
    ensure_all_non_negative(
        {
            "base_cost_per_sqm": config.base_cost_per_sqm,
            "gfa": config.gfa,
            "trend_volatility": config.trend_volatility,
            "budget_cap": config.budget_cap,
            "cost_volatility_pct": config.cost_volatility_pct,
            "gfa_variance_pct": config.gfa_variance_pct,
        }
    )
    trend_volatility = (
        config.trend_volatility
        if config.trend_volatility is not None
        else settings.mc_default_trend_volatility
    )
    if config.trend_annual_pct - trend_volatility <= MIN_ANNUAL_TREND_PCT:
        raise ValidationError(
            f"trend_annual_pct - trend_volatility must be > {MIN_ANNUAL_TREND_PCT}, "
            f"got {config.trend_annual_pct} - {trend_volatility}",
            field="trend_annual_pct",
            details={"trend_volatility": trend_volatility},
        )
    if config.horizon_months < 1:
        raise ValidationError(
            f"horizon_months must be >= 1, got {config.horizon_months}",
            field="horizon_months",
        )
    return config


def from_pydantic_error(exc: pydantic.ValidationError) -> ValidationError:
    """Translate a pydantic error into the package's ValidationError."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    message = first.get("msg", "Invalid input")

    logger.warning("request_validation_failed", field=field, n_errors=len(errors))
    return ValidationError(
        f"{field}: {message}" if field else message,
        field=field,
        details={
            "errors": [
                {"loc": [str(p) for p in e.get("loc", ())], "msg": e.get("msg"), "type": e.get("type")}
                for e in errors
            ]
        },
    )
