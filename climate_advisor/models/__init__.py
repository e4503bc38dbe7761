"""Domain enum registry.

Application code can import every enum from one place::

    from climate_advisor.models import RiskTypeEnum, SeverityEnum, ...
"""

from climate_advisor.models.enums import (
    DroughtToleranceEnum,
    ProfileFieldEnum,
    RiskTypeEnum,
    SeverityEnum,
    WaterRequirementEnum,
    WeatherSourceTagEnum,
)

__all__ = [
    "DroughtToleranceEnum",
    "ProfileFieldEnum",
    "RiskTypeEnum",
    "SeverityEnum",
    "WaterRequirementEnum",
    "WeatherSourceTagEnum",
]
