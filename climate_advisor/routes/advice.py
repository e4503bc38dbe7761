"""Advisory query routes: stateless queries and session conversations."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Response, status

from climate_advisor.dependencies import get_advisor_service, get_session_store
from climate_advisor.schemas.advice import (
	AdviceQueryRequest,
	AdviceResult,
	AssessmentOutcome,
	ClarificationResult,
	SessionMessageRequest,
	SessionProfileResponse,
	WelcomeResponse,
)
from climate_advisor.services import profile_manager, response_composer
from climate_advisor.services.advisor_service import AdvisorService
from climate_advisor.services.session_store import SessionStore

router = APIRouter(tags=["advice"])

SessionId = Annotated[str, Path(min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_.:-]+$")]


def _map_error(exc: Exception) -> HTTPException:
	if isinstance(exc, LookupError):
		return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
	if isinstance(exc, ValueError):
		return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
	return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="advice failure")


@router.get("/advice/welcome", response_model=WelcomeResponse)
async def get_welcome() -> WelcomeResponse:
	return WelcomeResponse(
		message=response_composer.compose_welcome(),
		quick_actions=list(response_composer.QUICK_ACTIONS),
	)


@router.post("/advice/query", response_model=AdviceResult)
async def query_advice(
	payload: AdviceQueryRequest,
	service: AdvisorService = Depends(get_advisor_service),
) -> ClarificationResult | AssessmentOutcome:
	try:
		return await service.handle_query(payload.text, payload.profile)
	except Exception as exc:
		raise _map_error(exc) from exc


@router.post("/sessions/{session_id}/messages", response_model=AdviceResult)
async def post_session_message(
	payload: SessionMessageRequest,
	session_id: SessionId,
	service: AdvisorService = Depends(get_advisor_service),
	store: SessionStore = Depends(get_session_store),
) -> ClarificationResult | AssessmentOutcome:
	try:
		async with store.lock(session_id):
			prior = await store.get(session_id)
			result = await service.handle_query(payload.text, prior)
			await store.save(session_id, result.profile)
		return result
	except Exception as exc:
		raise _map_error(exc) from exc


@router.get("/sessions/{session_id}", response_model=SessionProfileResponse)
async def get_session_profile(
	session_id: SessionId,
	store: SessionStore = Depends(get_session_store),
) -> SessionProfileResponse:
	try:
		profile = await store.get(session_id)
		if profile is None:
			raise LookupError(f"Session {session_id} not found")
	except Exception as exc:
		raise _map_error(exc) from exc
	missing = profile_manager.missing_fields(profile)
	return SessionProfileResponse(
		session_id=session_id,
		profile=profile,
		complete=not missing,
		missing_fields=missing,
	)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def reset_session(
	session_id: SessionId,
	store: SessionStore = Depends(get_session_store),
) -> Response:
	try:
		await store.delete(session_id)
	except Exception as exc:
		raise _map_error(exc) from exc
	return Response(status_code=status.HTTP_204_NO_CONTENT)
