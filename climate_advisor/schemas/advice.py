"""Pydantic schemas for the advisory pipeline and its endpoints."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from climate_advisor.models.enums import (
	ProfileFieldEnum,
	RiskTypeEnum,
	SeverityEnum,
	WeatherSourceTagEnum,
)
from climate_advisor.schemas.knowledge import CropInfo


class UserProfile(BaseModel):
	model_config = ConfigDict(frozen=True)

	location: str | None = None
	crop: str | None = None


class ExtractedEntities(BaseModel):
	model_config = ConfigDict(frozen=True)

	location: str | None = None
	crop: str | None = None
	challenge: str | None = None


class WeatherReading(BaseModel):
	model_config = ConfigDict(frozen=True)

	temperature: float
	humidity: float = Field(ge=0.0, le=100.0)
	rainfall: float = Field(ge=0.0, description="Rainfall over the last 30 days, mm")
	forecast: str
	source: WeatherSourceTagEnum = WeatherSourceTagEnum.simulated


class RiskFinding(BaseModel):
	model_config = ConfigDict(frozen=True)

	type: RiskTypeEnum
	severity: SeverityEnum
	message: str


class AssessmentResult(BaseModel):
	model_config = ConfigDict(frozen=True)

	findings: tuple[RiskFinding, ...] = Field(min_length=1)
	recommendations: tuple[str, ...] = ()


class ClarificationResult(BaseModel):
	kind: Literal["clarification"] = "clarification"
	profile: UserProfile
	entities: ExtractedEntities
	missing_fields: list[ProfileFieldEnum] = Field(min_length=1)
	message: str


class AssessmentOutcome(BaseModel):
	kind: Literal["assessment"] = "assessment"
	profile: UserProfile
	entities: ExtractedEntities
	weather: WeatherReading
	assessment: AssessmentResult
	crop_info: CropInfo | None = None
	rendered_text: str


AdviceResult = Annotated[ClarificationResult | AssessmentOutcome, Field(discriminator="kind")]


class AdviceQueryRequest(BaseModel):
	text: str = Field(default="", max_length=2000)
	profile: UserProfile = Field(default_factory=UserProfile)


class SessionMessageRequest(BaseModel):
	text: str = Field(default="", max_length=2000)


class SessionProfileResponse(BaseModel):
	session_id: str
	profile: UserProfile
	complete: bool
	missing_fields: list[ProfileFieldEnum] = Field(default_factory=list)


class WelcomeResponse(BaseModel):
	message: str
	quick_actions: list[str] = Field(default_factory=list)
