"""Weather readings for the advisory pipeline.

``WeatherSource`` is the injectable capability the pipeline depends on. The
default ``SimulatedWeatherSource`` draws one of three canned scenarios at
random (30% drought, 20% flood, 50% default), independent of location.
``OpenMeteoWeatherSource`` is the opt-in live implementation; it never raises
and degrades to the default scenario tagged ``fallback``.
"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

import httpx
import structlog
from tenacity import (
	AsyncRetrying,
	RetryCallState,
	RetryError,
	retry_if_exception,
	stop_after_attempt,
	wait_exponential,
)
from tenacity.wait import wait_base

from climate_advisor.config import Settings, WeatherScenarioName, WeatherSourceKind
from climate_advisor.knowledge.gazetteer import resolve_place
from climate_advisor.models.enums import WeatherSourceTagEnum
from climate_advisor.schemas.advice import WeatherReading

_logger = structlog.get_logger("climate_advisor.weather")

DROUGHT_SCENARIO_PROBABILITY = 0.3
FLOOD_SCENARIO_PROBABILITY = 0.2
RAINFALL_LOOKBACK_DAYS = 30
RETRY_WAIT_MIN_SECONDS = 0.5
RETRY_WAIT_MAX_SECONDS = 4.0

SCENARIOS: dict[WeatherScenarioName, WeatherReading] = {
	WeatherScenarioName.default: WeatherReading(
		temperature=28,
		humidity=65,
		rainfall=45,
		forecast="Moderate rainfall expected in next 2 weeks",
	),
	WeatherScenarioName.drought: WeatherReading(
		temperature=35,
		humidity=30,
		rainfall=5,
		forecast="Low rainfall predicted; drought risk high",
	),
	WeatherScenarioName.flood: WeatherReading(
		temperature=26,
		humidity=85,
		rainfall=150,
		forecast="Heavy rainfall expected; flood risk elevated",
	),
}


class WeatherSource(Protocol):
	async def fetch(self, location: str | None) -> WeatherReading: ...


class SimulatedWeatherSource:
	def __init__(self, rng: random.Random | None = None):
		self.rng = rng or random.Random()

	def pick_scenario(self) -> WeatherScenarioName:
		draw = self.rng.random()
		if draw < DROUGHT_SCENARIO_PROBABILITY:
			return WeatherScenarioName.drought
		if draw < DROUGHT_SCENARIO_PROBABILITY + FLOOD_SCENARIO_PROBABILITY:
			return WeatherScenarioName.flood
		return WeatherScenarioName.default

	async def fetch(self, location: str | None) -> WeatherReading:
		return SCENARIOS[self.pick_scenario()]


class StaticWeatherSource:
	"""Always returns the same reading."""

	def __init__(self, reading: WeatherReading):
		self.reading = reading

	async def fetch(self, location: str | None) -> WeatherReading:
		return self.reading


def is_transient_error(exc: BaseException) -> bool:
	"""Transport failures and 5xx responses are retried; 4xx responses are not."""
	if isinstance(exc, httpx.TransportError):
		return True
	if isinstance(exc, httpx.HTTPStatusError):
		return exc.response.status_code >= 500
	return False


class OpenMeteoWeatherSource:
	def __init__(
		self,
		base_url: str,
		timeout_seconds: float = 5.0,
		max_retries: int = 2,
		transport: httpx.AsyncBaseTransport | None = None,
		wait: wait_base | None = None,
		sleep: Callable[[float], Awaitable[None]] | None = None,
	):
		self.base_url = base_url
		self.timeout_seconds = timeout_seconds
		self.max_retries = max(0, max_retries)
		self.transport = transport
		if wait is None:
			wait = wait_exponential(
				multiplier=RETRY_WAIT_MIN_SECONDS,
				min=RETRY_WAIT_MIN_SECONDS,
				max=RETRY_WAIT_MAX_SECONDS,
			)
		self.wait = wait
		self.sleep = sleep or asyncio.sleep

	async def fetch(self, location: str | None) -> WeatherReading:
		place = resolve_place(location)
		if place is None:
			_logger.warning("weather_fallback", location=location, reason="unknown_location")
			return self._fallback()

		params = {
			"latitude": place.latitude,
			"longitude": place.longitude,
			"current": "temperature_2m,relative_humidity_2m",
			"daily": "precipitation_sum",
			"past_days": RAINFALL_LOOKBACK_DAYS,
			"forecast_days": 1,
			"timezone": "auto",
		}
		payload = await self._get_with_retries(params, location=place.keyword)
		if payload is None:
			return self._fallback()
		try:
			return self.parse_payload(payload)
		except (KeyError, TypeError, ValueError) as exc:
			_logger.warning("weather_fallback", location=place.keyword, reason="malformed_payload", error=str(exc))
			return self._fallback()

	async def _get_with_retries(self, params: dict[str, Any], *, location: str) -> dict[str, Any] | None:
		def log_retry(retry_state: RetryCallState) -> None:
			exc = retry_state.outcome.exception() if retry_state.outcome is not None else None
			_logger.warning(
				"weather_fetch_failed",
				location=location,
				attempt=retry_state.attempt_number,
				error=str(exc),
			)

		retrying = AsyncRetrying(
			stop=stop_after_attempt(self.max_retries + 1),
			wait=self.wait,
			retry=retry_if_exception(is_transient_error),
			before_sleep=log_retry,
			sleep=self.sleep,
		)
		async with httpx.AsyncClient(timeout=self.timeout_seconds, transport=self.transport) as client:
			try:
				async for attempt in retrying:
					with attempt:
						response = await client.get(self.base_url, params=params)
						response.raise_for_status()
						return response.json()
			except RetryError as exc:
				_logger.warning(
					"weather_fallback",
					location=location,
					reason="retries_exhausted",
					error=str(exc.last_attempt.exception()),
				)
			except httpx.HTTPStatusError as exc:
				_logger.warning(
					"weather_fallback",
					location=location,
					reason="client_error",
					status_code=exc.response.status_code,
				)
			except ValueError as exc:
				_logger.warning("weather_fallback", location=location, reason="malformed_payload", error=str(exc))
		return None

	@staticmethod
	def parse_payload(payload: dict[str, Any]) -> WeatherReading:
		current = payload["current"]
		precipitation = [float(value or 0.0) for value in payload["daily"]["precipitation_sum"]]
		past = precipitation[:RAINFALL_LOOKBACK_DAYS]
		upcoming = precipitation[RAINFALL_LOOKBACK_DAYS:]
		next_day = upcoming[0] if upcoming else 0.0
		return WeatherReading(
			temperature=round(float(current["temperature_2m"]), 1),
			humidity=round(float(current["relative_humidity_2m"]), 1),
			rainfall=round(sum(past), 1),
			forecast=f"{next_day:g}mm precipitation expected in the next 24 hours",
			source=WeatherSourceTagEnum.open_meteo,
		)

	@staticmethod
	def _fallback() -> WeatherReading:
		return SCENARIOS[WeatherScenarioName.default].model_copy(update={"source": WeatherSourceTagEnum.fallback})


def build_weather_source(settings: Settings) -> WeatherSource:
	"""Pick the weather source implementation configured in settings."""
	if settings.weather_source == WeatherSourceKind.open_meteo:
		return OpenMeteoWeatherSource(
			base_url=settings.open_meteo_base_url,
			timeout_seconds=settings.weather_timeout_seconds,
			max_retries=settings.weather_max_retries,
			wait=wait_exponential(
				multiplier=settings.weather_retry_wait_min_seconds,
				min=settings.weather_retry_wait_min_seconds,
				max=settings.weather_retry_wait_max_seconds,
			),
		)
	if settings.weather_scenario is not None:
		return StaticWeatherSource(SCENARIOS[settings.weather_scenario])
	return SimulatedWeatherSource(random.Random(settings.weather_seed))
