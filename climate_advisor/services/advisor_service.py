"""Advisory pipeline: extraction, profile merge, weather, assessment, composition."""

from __future__ import annotations

import structlog

from climate_advisor.knowledge.crops import get_crop
from climate_advisor.schemas.advice import (
	AssessmentOutcome,
	ClarificationResult,
	UserProfile,
)
from climate_advisor.schemas.knowledge import CropInfo
from climate_advisor.services import entity_extractor, profile_manager, response_composer
from climate_advisor.services.risk_assessor import assess
from climate_advisor.services.weather_source import WeatherSource

_logger = structlog.get_logger("climate_advisor.advisor")


class AdvisorService:
	def __init__(self, weather_source: WeatherSource):
		self.weather_source = weather_source

	async def handle_query(
		self,
		text: str,
		prior_profile: UserProfile | None = None,
	) -> ClarificationResult | AssessmentOutcome:
		entities = entity_extractor.extract(text)
		profile = profile_manager.merge(prior_profile, entities)

		missing = profile_manager.missing_fields(profile)
		if missing:
			_logger.info(
				"advice_clarification",
				missing_fields=[field.value for field in missing],
				challenge=entities.challenge,
			)
			return ClarificationResult(
				profile=profile,
				entities=entities,
				missing_fields=missing,
				message=response_composer.compose_clarification(missing),
			)

		weather = await self.weather_source.fetch(profile.location)
		assessment = assess(weather, profile.crop)
		crop = get_crop(profile.crop)
		crop_info = CropInfo.from_profile(crop) if crop is not None else None
		rendered_text = response_composer.compose(profile, weather, assessment, crop_info)

		_logger.info(
			"advice_assessment",
			location=profile.location,
			crop=profile.crop,
			challenge=entities.challenge,
			weather_source=weather.source.value,
			findings=[f"{finding.type.value}:{finding.severity.value}" for finding in assessment.findings],
		)
		return AssessmentOutcome(
			profile=profile,
			entities=entities,
			weather=weather,
			assessment=assessment,
			crop_info=crop_info,
			rendered_text=rendered_text,
		)
