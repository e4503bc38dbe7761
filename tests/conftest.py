"""Shared pytest fixtures: async test client, weather source and session store stubs."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from climate_advisor.dependencies import get_session_store, get_weather_source
from climate_advisor.main import app
from climate_advisor.schemas.advice import WeatherReading
from climate_advisor.services.session_store import InMemorySessionStore


class FakeRedis:
	def __init__(self) -> None:
		self._values: dict[str, str] = {}
		self.get = AsyncMock(side_effect=self._get)
		self.setex = AsyncMock(side_effect=self._setex)
		self.delete = AsyncMock(side_effect=self._delete)
		self.ping = AsyncMock(return_value=True)
		self._locks: dict[str, asyncio.Lock] = {}
		self.lock_requests: list[tuple[str, float | None]] = []

	async def _get(self, key: str) -> str | None:
		return self._values.get(key)

	async def _setex(self, key: str, _ttl: int, value: str) -> bool:
		self._values[key] = value
		return True

	async def _delete(self, key: str) -> int:
		return 1 if self._values.pop(key, None) is not None else 0

	def lock(self, name: str, timeout: float | None = None) -> asyncio.Lock:
		self.lock_requests.append((name, timeout))
		return self._locks.setdefault(name, asyncio.Lock())


class RecordingWeatherSource:
	"""Static weather source that remembers which locations were requested."""

	def __init__(self, reading: WeatherReading) -> None:
		self.reading = reading
		self.calls: list[str | None] = []

	async def fetch(self, location: str | None) -> WeatherReading:
		self.calls.append(location)
		return self.reading


@pytest.fixture
def moderate_weather() -> WeatherReading:
	return WeatherReading(
		temperature=28,
		humidity=65,
		rainfall=45,
		forecast="Moderate rainfall expected in next 2 weeks",
	)


@pytest.fixture
def drought_weather() -> WeatherReading:
	return WeatherReading(
		temperature=35,
		humidity=30,
		rainfall=5,
		forecast="Low rainfall predicted; drought risk high",
	)


@pytest.fixture
def flood_weather() -> WeatherReading:
	return WeatherReading(
		temperature=26,
		humidity=85,
		rainfall=150,
		forecast="Heavy rainfall expected; flood risk elevated",
	)


@pytest.fixture
def weather_source(moderate_weather: WeatherReading) -> RecordingWeatherSource:
	return RecordingWeatherSource(moderate_weather)


@pytest.fixture
def session_store() -> InMemorySessionStore:
	return InMemorySessionStore()


@pytest.fixture
def fake_redis() -> FakeRedis:
	"""Reusable fake Redis client with dict-backed get/setex/delete and per-key locks."""
	return FakeRedis()


@pytest.fixture
async def client(
	weather_source: RecordingWeatherSource,
	session_store: InMemorySessionStore,
) -> AsyncGenerator[AsyncClient, None]:
	"""HTTPX async client with lifespan disabled and collaborators overridden."""

	app.dependency_overrides[get_weather_source] = lambda: weather_source
	app.dependency_overrides[get_session_store] = lambda: session_store
	original_lifespan = app.router.lifespan_context

	@asynccontextmanager
	async def noop_lifespan(_: Any) -> AsyncGenerator[None, None]:
		yield

	app.router.lifespan_context = noop_lifespan

	transport = ASGITransport(app=app)
	async with AsyncClient(transport=transport, base_url="http://test") as test_client:
		yield test_client

	app.router.lifespan_context = original_lifespan
	app.dependency_overrides.clear()
