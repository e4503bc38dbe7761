"""Pydantic schemas for knowledge-base endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from climate_advisor.knowledge.crops import CropProfile
from climate_advisor.knowledge.practices import PracticeCatalog
from climate_advisor.models.enums import DroughtToleranceEnum, WaterRequirementEnum


class CropInfo(BaseModel):
	crop_id: str
	water_requirement: WaterRequirementEnum
	temperature_range: str
	temp_min_c: int
	temp_max_c: int
	soil_type: str
	growing_season: str
	drought_tolerance: DroughtToleranceEnum
	resilient_varieties: list[str] = Field(min_length=1)
	tip: str

	@classmethod
	def from_profile(cls, profile: CropProfile) -> "CropInfo":
		return cls(
			crop_id=profile.crop_id,
			water_requirement=profile.water_requirement,
			temperature_range=profile.temp_range,
			temp_min_c=profile.temp_min_c,
			temp_max_c=profile.temp_max_c,
			soil_type=profile.soil_type,
			growing_season=profile.growing_season,
			drought_tolerance=profile.drought_tolerance,
			resilient_varieties=list(profile.resilient_varieties),
			tip=profile.tip,
		)


class CropListResponse(BaseModel):
	items: list[CropInfo] = Field(default_factory=list)


class PracticesResponse(BaseModel):
	water_conservation: list[str] = Field(default_factory=list)
	soil_health: list[str] = Field(default_factory=list)
	climate_adaptation: list[str] = Field(default_factory=list)

	@classmethod
	def from_catalog(cls, catalog: PracticeCatalog) -> "PracticesResponse":
		return cls(
			water_conservation=list(catalog.water_conservation),
			soil_health=list(catalog.soil_health),
			climate_adaptation=list(catalog.climate_adaptation),
		)
