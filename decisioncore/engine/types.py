"""
Closed vocabularies shared by the engines.

Tier is an open string on input (anything unrecognised takes the
"else" branch of a heuristic table); the members below are the values
the tables key on.
"""

from enum import StrEnum


class Tier(StrEnum):
    MID = "Mid"
    UPPER_MID = "Upper-mid"
    LUXURY = "Luxury"
    ULTRA_LUXURY = "Ultra-luxury"


class ProjectScale(StrEnum):
    SMALL = "Small"
    MEDIUM = "Medium"
    LARGE = "Large"


class MarketCondition(StrEnum):
    TIGHT = "tight"
    BALANCED = "balanced"
    SOFT = "soft"


class RiskDomain(StrEnum):
    MODEL = "Model"
    OPERATIONAL = "Operational"
    COMMERCIAL = "Commercial"
    TECHNOLOGY = "Technology"
    DATA = "Data"
    BEHAVIOURAL = "Behavioural"
    STRATEGIC = "Strategic"
    REGULATORY = "Regulatory"


class RiskBand(StrEnum):
    MINIMAL = "Minimal"
    CONTROLLED = "Controlled"
    ELEVATED = "Elevated"
    CRITICAL = "Critical"
    SYSTEMIC = "Systemic"


class StressCondition(StrEnum):
    DEMAND_COLLAPSE = "demand_collapse"
    COST_SURGE = "cost_surge"
    DATA_DISRUPTION = "data_disruption"
    MARKET_SHIFT = "market_shift"
