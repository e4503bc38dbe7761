"""Rule-based climate risk assessment for one weather reading and crop.

Rules are evaluated in a fixed order and all applicable rules fire:

1. drought (high) when rainfall is low and the crop needs a lot of water
2. drought (medium) when rainfall is low otherwise
3. flood (high) when rainfall is excessive
4. heat (medium) when it is hot and above the crop's documented maximum
5. optimal (low) only if nothing above fired

Crop-dependent rules are skipped for an unknown crop.
"""

from __future__ import annotations

from climate_advisor.knowledge.crops import CropProfile, get_crop
from climate_advisor.models.enums import RiskTypeEnum, SeverityEnum, WaterRequirementEnum
from climate_advisor.schemas.advice import AssessmentResult, RiskFinding, WeatherReading

DROUGHT_RAINFALL_MM = 30
FLOOD_RAINFALL_MM = 100
HEAT_TEMPERATURE_C = 32

DROUGHT_HIGH_RECOMMENDATIONS = (
	"Consider switching to drought-resistant crops like sorghum or millet",
	"Implement drip irrigation to maximize water efficiency",
)
DROUGHT_MEDIUM_RECOMMENDATIONS = (
	"Install rainwater harvesting systems",
	"Apply mulch to reduce soil evaporation",
)
FLOOD_RECOMMENDATIONS = (
	"Ensure proper drainage systems are in place",
	"Consider raised bed farming",
	"Delay planting until after heavy rainfall period",
)
HEAT_RECOMMENDATIONS = (
	"Provide shade netting during peak heat hours",
	"Increase irrigation frequency",
)
OPTIMAL_RECOMMENDATIONS = ("Proceed with planned cultivation schedule",)

Rule = tuple[RiskFinding, tuple[str, ...]]


def _drought_rule(weather: WeatherReading, crop_label: str, crop: CropProfile | None) -> Rule | None:
	if weather.rainfall >= DROUGHT_RAINFALL_MM:
		return None
	if crop is not None and crop.water_requirement == WaterRequirementEnum.high:
		finding = RiskFinding(
			type=RiskTypeEnum.drought,
			severity=SeverityEnum.high,
			message=f"High drought risk detected. {crop_label} requires significant water.",
		)
		return finding, DROUGHT_HIGH_RECOMMENDATIONS
	finding = RiskFinding(
		type=RiskTypeEnum.drought,
		severity=SeverityEnum.medium,
		message="Moderate drought conditions predicted.",
	)
	return finding, DROUGHT_MEDIUM_RECOMMENDATIONS


def _flood_rule(weather: WeatherReading) -> Rule | None:
	if weather.rainfall <= FLOOD_RAINFALL_MM:
		return None
	finding = RiskFinding(
		type=RiskTypeEnum.flood,
		severity=SeverityEnum.high,
		message="Flood risk detected with excessive rainfall.",
	)
	return finding, FLOOD_RECOMMENDATIONS


def _heat_rule(weather: WeatherReading, crop_label: str, crop: CropProfile | None) -> Rule | None:
	if crop is None:
		return None
	if weather.temperature <= HEAT_TEMPERATURE_C or weather.temperature <= crop.temp_max_c:
		return None
	finding = RiskFinding(
		type=RiskTypeEnum.heat,
		severity=SeverityEnum.medium,
		message=f"Temperature exceeds optimal range for {crop_label}.",
	)
	return finding, HEAT_RECOMMENDATIONS


def assess(weather: WeatherReading, crop_id: str | None) -> AssessmentResult:
	crop = get_crop(crop_id)
	crop_label = crop_id or ""
	fired = [
		rule
		for rule in (
			_drought_rule(weather, crop_label, crop),
			_flood_rule(weather),
			_heat_rule(weather, crop_label, crop),
		)
		if rule is not None
	]
	if not fired:
		optimal = RiskFinding(
			type=RiskTypeEnum.optimal,
			severity=SeverityEnum.low,
			message="Conditions are favorable for farming.",
		)
		fired = [(optimal, OPTIMAL_RECOMMENDATIONS)]

	findings = tuple(finding for finding, _ in fired)
	recommendations = tuple(dict.fromkeys(item for _, items in fired for item in items))
	return AssessmentResult(findings=findings, recommendations=recommendations)
