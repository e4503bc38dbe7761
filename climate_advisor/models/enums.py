"""Domain enums shared by the knowledge base, the pipeline and the API schemas.

These are separate from the StrEnums in climate_advisor/config.py;
config enums validate settings, domain enums type pipeline values.
"""

from enum import StrEnum

# ── Knowledge base enums ────────────────────────────────────────────────────


class WaterRequirementEnum(StrEnum):
    """Seasonal water demand class of a crop."""

    low = "low"
    medium = "medium"
    medium_high = "medium-high"
    high = "high"


class DroughtToleranceEnum(StrEnum):
    """Ordinal drought tolerance of a crop (declared low to very high)."""

    low = "low"
    moderate = "moderate"
    moderate_high = "moderate-high"
    high = "high"
    very_high = "very high"


# ── Assessment enums ────────────────────────────────────────────────────────


class RiskTypeEnum(StrEnum):
    drought = "drought"
    flood = "flood"
    heat = "heat"
    optimal = "optimal"


class SeverityEnum(StrEnum):
    low = "low"
    medium = "medium"
    high = "high"


# ── Conversation enums ──────────────────────────────────────────────────────


class ProfileFieldEnum(StrEnum):
    """Profile fields that must be known before an assessment runs."""

    location = "location"
    crop = "crop"


class WeatherSourceTagEnum(StrEnum):
    """Where a weather reading came from."""

    simulated = "simulated"
    open_meteo = "open_meteo"
    fallback = "fallback"
