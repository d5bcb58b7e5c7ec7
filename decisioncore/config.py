"""
decisioncore Configuration.

Pydantic Settings v2: loads from .env and environment variables.

Calibration constants that the engines treat as behavioural contracts
(market factors, risk divisor, ROI coefficients) live in the engine
modules. Only operational defaults and bounds are configurable here.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────────────────
    app_name: str = "decisioncore"
    app_version: str = "1.0.0"
    environment: str = Field(default="development", alias="ENVIRONMENT")

    # ── Monte Carlo ───────────────────────────────────────────────────────
    mc_default_iterations: int = Field(default=10_000, alias="MC_DEFAULT_ITERATIONS")
    mc_min_iterations: int = Field(default=100, alias="MC_MIN_ITERATIONS")
    mc_max_iterations: int = Field(default=50_000, alias="MC_MAX_ITERATIONS")
    mc_histogram_buckets: int = Field(default=20, alias="MC_HISTOGRAM_BUCKETS")
    mc_default_cost_volatility_pct: float = Field(
        default=12.0, alias="MC_DEFAULT_COST_VOLATILITY_PCT",
        description="± % randomness around the base cost per sqm",
    )
    mc_default_gfa_variance_pct: float = Field(
        default=5.0, alias="MC_DEFAULT_GFA_VARIANCE_PCT",
        description="± % variance around the nominal gross floor area",
    )
    mc_default_trend_volatility: float = Field(
        default=3.0, alias="MC_DEFAULT_TREND_VOLATILITY",
        description="± percentage points around the annual trend",
    )
    mc_max_horizon_months: int = Field(default=60, alias="MC_MAX_HORIZON_MONTHS")

    # ── Risk / Stress ─────────────────────────────────────────────────────
    risk_score_divisor: float = Field(default=200.0, alias="RISK_SCORE_DIVISOR")
    stress_resilience_threshold: int = Field(
        default=60, alias="STRESS_RESILIENCE_THRESHOLD",
        description="Failure points are reported below this resilience score",
    )

    # ── Operational ────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="console", alias="LOG_FORMAT")  # json or console


settings = Settings()
