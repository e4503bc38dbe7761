"""Structured logging setup and per-request context for the advisor API."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from climate_advisor.config import LogFormat, Settings, get_settings

_configured = False

SESSION_PATH_PREFIX = "/api/v1/sessions/"
QUIET_PATHS = ("/health", "/docs", "/redoc", "/openapi.json")


def configure_structured_logging(settings: Settings | None = None) -> None:
	"""Configure stdlib + structlog once for the API process."""
	global _configured
	if _configured:
		return

	settings = settings or get_settings()
	log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

	shared_processors: list[Any] = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso", utc=True),
	]

	if settings.log_format == LogFormat.json:
		renderer: Any = structlog.processors.JSONRenderer()
		logging.basicConfig(level=log_level, format="%(message)s")
	else:
		renderer = structlog.dev.ConsoleRenderer()
		logging.basicConfig(level=log_level)

	structlog.configure(
		processors=[
			*shared_processors,
			structlog.processors.format_exc_info,
			renderer,
		],
		wrapper_class=structlog.make_filtering_bound_logger(log_level),
		logger_factory=structlog.PrintLoggerFactory(),
		cache_logger_on_first_use=True,
	)
	_configured = True


def session_id_from_path(path: str) -> str | None:
	if not path.startswith(SESSION_PATH_PREFIX):
		return None
	token = path[len(SESSION_PATH_PREFIX):].split("/", 1)[0]
	return token or None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
	"""Bind request and session ids, echo the request id and log timings."""

	async def dispatch(self, request: Request, call_next):  # type: ignore[override]
		request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
		request.state.request_id = request_id

		structlog.contextvars.clear_contextvars()
		structlog.contextvars.bind_contextvars(request_id=request_id)
		session_id = session_id_from_path(request.url.path)
		if session_id is not None:
			structlog.contextvars.bind_contextvars(session_id=session_id)

		logger = structlog.get_logger("climate_advisor.request")
		start = time.perf_counter()

		try:
			response = await call_next(request)
		except Exception as exc:
			logger.exception(
				"http_request_failed",
				method=request.method,
				path=request.url.path,
				duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
				error=str(exc),
			)
			raise

		response.headers["x-request-id"] = request_id
		log = logger.debug if request.url.path.startswith(QUIET_PATHS) else logger.info
		log(
			"http_request",
			method=request.method,
			path=request.url.path,
			status_code=response.status_code,
			duration_ms=round((time.perf_counter() - start) * 1000.0, 2),
		)
		return response
