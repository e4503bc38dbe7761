"""FastAPI dependencies resolving pipeline collaborators from app state."""

from __future__ import annotations

from fastapi import Depends, Request

from climate_advisor.config import get_settings
from climate_advisor.services.advisor_service import AdvisorService
from climate_advisor.services.session_store import InMemorySessionStore, SessionStore
from climate_advisor.services.weather_source import WeatherSource, build_weather_source


def get_weather_source(request: Request) -> WeatherSource:
	source = getattr(request.app.state, "weather_source", None)
	if source is None:
		source = build_weather_source(get_settings())
		request.app.state.weather_source = source
	return source


def get_session_store(request: Request) -> SessionStore:
	store = getattr(request.app.state, "session_store", None)
	if store is None:
		store = InMemorySessionStore()
		request.app.state.session_store = store
	return store


def get_advisor_service(weather_source: WeatherSource = Depends(get_weather_source)) -> AdvisorService:
	return AdvisorService(weather_source)
