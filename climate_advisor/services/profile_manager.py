"""Session profile accumulation."""

from __future__ import annotations

from climate_advisor.models.enums import ProfileFieldEnum
from climate_advisor.schemas.advice import ExtractedEntities, UserProfile


def merge(existing: UserProfile | None, entities: ExtractedEntities | None) -> UserProfile:
	"""Return a new profile where extracted values overwrite and gaps keep prior values."""
	base = existing or UserProfile()
	if entities is None:
		return base
	return UserProfile(
		location=entities.location or base.location,
		crop=entities.crop or base.crop,
	)


def missing_fields(profile: UserProfile) -> list[ProfileFieldEnum]:
	missing: list[ProfileFieldEnum] = []
	if not profile.location:
		missing.append(ProfileFieldEnum.location)
	if not profile.crop:
		missing.append(ProfileFieldEnum.crop)
	return missing


def is_complete(profile: UserProfile) -> bool:
	return not missing_fields(profile)
