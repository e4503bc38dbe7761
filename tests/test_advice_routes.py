from __future__ import annotations

import asyncio

import pytest
from httpx import AsyncClient

from climate_advisor.dependencies import get_weather_source
from climate_advisor.main import app
from climate_advisor.schemas.advice import UserProfile, WeatherReading
from climate_advisor.services.advisor_service import AdvisorService
from climate_advisor.services.session_store import InMemorySessionStore
from tests.conftest import RecordingWeatherSource


@pytest.mark.asyncio
async def test_query_endpoint_returns_assessment(client: AsyncClient) -> None:
	response = await client.post(
		"/api/v1/advice/query",
		json={"text": "I'm in Nairobi, Kenya, planning to grow maize"},
	)
	assert response.status_code == 200
	body = response.json()
	assert body["kind"] == "assessment"
	assert body["profile"] == {"location": "nairobi", "crop": "maize"}
	assert body["weather"]["rainfall"] == 45
	assert body["assessment"]["findings"] == [
		{"type": "optimal", "severity": "low", "message": "Conditions are favorable for farming."}
	]
	assert body["crop_info"]["resilient_varieties"][0] == "Drought-Tolerant Maize (DTM)"
	assert body["rendered_text"].startswith("## 🌍 Analysis for Maize in nairobi")


@pytest.mark.asyncio
async def test_query_endpoint_uses_caller_profile(client: AsyncClient, weather_source: RecordingWeatherSource) -> None:
	response = await client.post(
		"/api/v1/advice/query",
		json={"text": "what about sorghum instead?", "profile": {"location": "kenya", "crop": "maize"}},
	)
	assert response.status_code == 200
	body = response.json()
	assert body["profile"] == {"location": "kenya", "crop": "sorghum"}
	assert weather_source.calls == ["kenya"]


@pytest.mark.asyncio
async def test_query_endpoint_clarification(client: AsyncClient, weather_source: RecordingWeatherSource) -> None:
	response = await client.post("/api/v1/advice/query", json={"text": "growing rice"})
	assert response.status_code == 200
	body = response.json()
	assert body["kind"] == "clarification"
	assert body["missing_fields"] == ["location"]
	assert body["profile"] == {"location": None, "crop": "rice"}
	assert weather_source.calls == []


@pytest.mark.asyncio
async def test_query_endpoint_accepts_empty_text(client: AsyncClient) -> None:
	response = await client.post("/api/v1/advice/query", json={})
	assert response.status_code == 200
	assert response.json()["missing_fields"] == ["location", "crop"]


@pytest.mark.asyncio
async def test_query_endpoint_rejects_oversized_text(client: AsyncClient) -> None:
	response = await client.post("/api/v1/advice/query", json={"text": "a" * 2001})
	assert response.status_code == 422


@pytest.mark.asyncio
async def test_query_endpoint_maps_unexpected_failures(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
	async def broken(self: AdvisorService, text: str, prior_profile: UserProfile | None = None) -> None:
		raise RuntimeError("boom")

	monkeypatch.setattr(AdvisorService, "handle_query", broken)
	response = await client.post("/api/v1/advice/query", json={"text": "maize in kenya"})
	assert response.status_code == 500
	assert response.json()["detail"] == "advice failure"


@pytest.mark.asyncio
async def test_session_conversation_accumulates_profile(
	client: AsyncClient,
	session_store: InMemorySessionStore,
	weather_source: RecordingWeatherSource,
) -> None:
	first = await client.post("/api/v1/sessions/farmer-1/messages", json={"text": "growing rice"})
	assert first.status_code == 200
	assert first.json()["kind"] == "clarification"
	assert await session_store.get("farmer-1") == UserProfile(crop="rice")

	second = await client.post("/api/v1/sessions/farmer-1/messages", json={"text": "I'm based in Lagos"})
	assert second.status_code == 200
	body = second.json()
	assert body["kind"] == "assessment"
	assert body["profile"] == {"location": "lagos", "crop": "rice"}
	assert weather_source.calls == ["lagos"]

	profile = await client.get("/api/v1/sessions/farmer-1")
	assert profile.status_code == 200
	assert profile.json() == {
		"session_id": "farmer-1",
		"profile": {"location": "lagos", "crop": "rice"},
		"complete": True,
		"missing_fields": [],
	}


@pytest.mark.asyncio
async def test_session_reset(client: AsyncClient, session_store: InMemorySessionStore) -> None:
	await session_store.save("farmer-2", UserProfile(location="india"))

	deleted = await client.delete("/api/v1/sessions/farmer-2")
	assert deleted.status_code == 204
	assert await session_store.get("farmer-2") is None

	missing = await client.get("/api/v1/sessions/farmer-2")
	assert missing.status_code == 404


@pytest.mark.asyncio
async def test_session_id_is_validated(client: AsyncClient) -> None:
	response = await client.post("/api/v1/sessions/bad%20id/messages", json={"text": "maize"})
	assert response.status_code == 422


@pytest.mark.asyncio
async def test_welcome_endpoint(client: AsyncClient) -> None:
	response = await client.get("/api/v1/advice/welcome")
	assert response.status_code == 200
	body = response.json()
	assert "Climate-Resilient Agriculture Advisor" in body["message"]
	assert body["quick_actions"] == [
		"Weather forecast",
		"Crop recommendations",
		"Water management",
		"Planting schedule",
	]


@pytest.mark.asyncio
async def test_advice_openapi_contract(client: AsyncClient) -> None:
	response = await client.get("/openapi.json")
	assert response.status_code == 200
	paths = response.json()["paths"]
	assert "/api/v1/advice/query" in paths
	assert "/api/v1/sessions/{session_id}/messages" in paths
	assert "/api/v1/sessions/{session_id}" in paths

	schemas = response.json()["components"]["schemas"]
	assert "AssessmentOutcome" in schemas
	assert "ClarificationResult" in schemas
	assert "rendered_text" in schemas["AssessmentOutcome"]["required"]


class _SlowWeatherSource:
	def __init__(self, reading: WeatherReading) -> None:
		self.reading = reading

	async def fetch(self, location: str | None) -> WeatherReading:
		await asyncio.sleep(0.05)
		return self.reading


@pytest.mark.asyncio
async def test_concurrent_session_messages_keep_both_updates(
	client: AsyncClient,
	session_store: InMemorySessionStore,
	moderate_weather: WeatherReading,
) -> None:
	app.dependency_overrides[get_weather_source] = lambda: _SlowWeatherSource(moderate_weather)
	await session_store.save("busy", UserProfile(location="lagos", crop="maize"))

	first, second = await asyncio.gather(
		client.post("/api/v1/sessions/busy/messages", json={"text": "moving to kenya"}),
		client.post("/api/v1/sessions/busy/messages", json={"text": "switching to rice"}),
	)
	assert first.status_code == 200
	assert second.status_code == 200
	assert await session_store.get("busy") == UserProfile(location="kenya", crop="rice")
