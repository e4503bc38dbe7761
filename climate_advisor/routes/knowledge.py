"""Read-only knowledge base routes."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from climate_advisor.knowledge.crops import CROP_PROFILES, get_crop
from climate_advisor.knowledge.practices import PRACTICES
from climate_advisor.schemas.knowledge import CropInfo, CropListResponse, PracticesResponse

router = APIRouter(prefix="/knowledge", tags=["knowledge"])


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="knowledge failure")


@router.get("/crops", response_model=CropListResponse)
async def list_crops() -> CropListResponse:
	return CropListResponse(items=[CropInfo.from_profile(profile) for profile in CROP_PROFILES.values()])


@router.get("/crops/{crop_id}", response_model=CropInfo)
async def get_crop_info(crop_id: str) -> CropInfo:
	try:
		profile = get_crop(crop_id)
		if profile is None:
			raise LookupError(f"Crop {crop_id} not found")
		return CropInfo.from_profile(profile)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/practices", response_model=PracticesResponse)
async def get_practices() -> PracticesResponse:
	return PracticesResponse.from_catalog(PRACTICES)
