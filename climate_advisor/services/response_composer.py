"""Markdown assembly for advisory replies.

The composer only builds text with lightweight markup (``##`` headings,
``**bold**``, ``-`` bullets, ``1.`` numbered items, ``---`` rule); rendering
is left to the caller. Every function here is deterministic.
"""

from __future__ import annotations

from collections.abc import Sequence

from climate_advisor.knowledge.practices import PRACTICES, PracticeCatalog
from climate_advisor.models.enums import ProfileFieldEnum, SeverityEnum
from climate_advisor.schemas.advice import AssessmentResult, UserProfile, WeatherReading
from climate_advisor.schemas.knowledge import CropInfo

SEVERITY_ICONS: dict[SeverityEnum, str] = {
	SeverityEnum.high: "🔴",
	SeverityEnum.medium: "🟡",
	SeverityEnum.low: "🟢",
}

PRACTICE_EXCERPT_SIZE = 2

DISCLAIMER = (
	"📊 **Data Source Transparency**: This analysis uses simulated satellite and weather data. "
	"Predictions have ~70% accuracy based on historical patterns."
)
CLOSING_PROMPT = "💬 Ask me about: planting schedules, pest management, irrigation tips, or alternative crops!"

MISSING_FIELD_PROMPTS: dict[ProfileFieldEnum, str] = {
	ProfileFieldEnum.location: "Your location (city/region)",
	ProfileFieldEnum.crop: "The crop you want to grow",
}

WELCOME_MESSAGE = "\n".join(
	[
		"🌾 Welcome to the Climate-Resilient Agriculture Advisor!",
		"",
		"I'm here to help you make informed farming decisions based on climate data and sustainable practices.",
		"",
		"To get started, please tell me:",
		"1. Your location (city/region)",
		"2. What crop you're planning to grow",
		"3. Your current farming challenge (optional)",
		"",
		'Example: "I\'m in Nairobi, Kenya, planning to grow maize"',
	]
)

QUICK_ACTIONS: tuple[str, ...] = (
	"Weather forecast",
	"Crop recommendations",
	"Water management",
	"Planting schedule",
)


def _capitalize(value: str) -> str:
	return value[:1].upper() + value[1:]


def _number(value: float) -> str:
	return f"{value:g}"


def _bullets(items: Sequence[str]) -> list[str]:
	return [f"- {item}" for item in items]


def _weather_section(weather: WeatherReading) -> list[str]:
	return [
		"### 🌤️ Current Climate Conditions",
		f"- Temperature: {_number(weather.temperature)}°C",
		f"- Humidity: {_number(weather.humidity)}%",
		f"- Rainfall (30-day): {_number(weather.rainfall)}mm",
		f"- Forecast: {weather.forecast}",
		"",
	]


def _risk_section(assessment: AssessmentResult) -> list[str]:
	lines = ["### ⚠️ Risk Assessment"]
	for finding in assessment.findings:
		icon = SEVERITY_ICONS[finding.severity]
		lines.append(
			f"{icon} **{finding.type.value.upper()}** ({finding.severity.value} severity): {finding.message}"
		)
	lines.append("")
	return lines


def _recommendation_section(assessment: AssessmentResult) -> list[str]:
	lines = ["### 💡 Personalized Recommendations"]
	lines.extend(f"{idx}. {item}" for idx, item in enumerate(assessment.recommendations, start=1))
	lines.append("")
	return lines


def _crop_section(crop_label: str, crop_info: CropInfo) -> list[str]:
	return [
		f"### 🌾 {crop_label}-Specific Guidance",
		f"- **Water Requirements**: {crop_info.water_requirement.value}",
		f"- **Optimal Temperature**: {crop_info.temperature_range}",
		f"- **Growing Season**: {crop_info.growing_season}",
		f"- **Drought Tolerance**: {crop_info.drought_tolerance.value}",
		"",
		"**Recommended Resilient Varieties:**",
		*_bullets(crop_info.resilient_varieties),
		"",
		f"💡 **Pro Tip**: {crop_info.tip}",
		"",
	]


def _practice_section(catalog: PracticeCatalog) -> list[str]:
	return [
		"### 🌱 Sustainable Farming Practices",
		"**Water Conservation:**",
		*_bullets(catalog.water_conservation[:PRACTICE_EXCERPT_SIZE]),
		"",
		"**Soil Health:**",
		*_bullets(catalog.soil_health[:PRACTICE_EXCERPT_SIZE]),
	]


def compose(
	profile: UserProfile,
	weather: WeatherReading,
	assessment: AssessmentResult,
	crop_info: CropInfo | None,
	catalog: PracticeCatalog = PRACTICES,
) -> str:
	crop_label = _capitalize(profile.crop or "")
	lines = [f"## 🌍 Analysis for {crop_label} in {profile.location or ''}", ""]
	lines.extend(_weather_section(weather))
	lines.extend(_risk_section(assessment))
	lines.extend(_recommendation_section(assessment))
	if crop_info is not None:
		lines.extend(_crop_section(crop_label, crop_info))
	lines.extend(_practice_section(catalog))
	lines.extend(["", "---", DISCLAIMER, "", CLOSING_PROMPT])
	return "\n".join(lines)


def compose_clarification(missing: Sequence[ProfileFieldEnum]) -> str:
	lines = ["I need a bit more information:"]
	lines.extend(_bullets([MISSING_FIELD_PROMPTS[field] for field in missing]))
	lines.extend(["", "Please provide these details so I can give you personalized advice."])
	return "\n".join(lines)


def compose_welcome() -> str:
	return WELCOME_MESSAGE
