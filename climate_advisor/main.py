"""FastAPI application entrypoint: lifespan, routers, middleware."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from redis.asyncio import Redis

from climate_advisor.config import get_settings
from climate_advisor.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from climate_advisor.routes import advice, knowledge
from climate_advisor.services.session_store import InMemorySessionStore, RedisSessionStore
from climate_advisor.services.weather_source import build_weather_source

logger = structlog.get_logger("climate_advisor")

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Build the configured weather source
      3. Connect to Redis for session profiles when configured,
         otherwise keep them in process memory

    Shutdown:
      1. Close the Redis connection pool
    """
    settings = get_settings()
    configure_structured_logging(settings)
    logger.info(
        "climate_advisor_starting",
        log_level=settings.log_level,
        weather_source=settings.weather_source.value,
    )

    app.state.weather_source = build_weather_source(settings)

    redis: Redis | None = None
    try:
        if settings.redis_url:
            redis = Redis.from_url(settings.redis_url, decode_responses=True)
            await redis.ping()
            app.state.redis = redis
            app.state.session_store = RedisSessionStore(
                redis, settings.session_ttl_seconds, settings.session_lock_timeout_seconds
            )
        else:
            app.state.session_store = InMemorySessionStore()
    except Exception as exc:
        logger.exception("startup_failure", error=str(exc))
        raise

    yield

    logger.info("climate_advisor_shutting_down")
    if redis is not None:
        await redis.aclose()


async def _run_readiness_checks(app: FastAPI) -> dict[str, dict[str, Any]]:
    checks: dict[str, dict[str, Any]] = {
        "weather_source": {"ok": True, "message": get_settings().weather_source.value},
    }
    redis = getattr(app.state, "redis", None)
    if redis is None:
        checks["sessions"] = {"ok": True, "message": "in-memory"}
        return checks
    try:
        await redis.ping()
        checks["sessions"] = {"ok": True, "message": "redis"}
    except Exception as exc:
        checks["sessions"] = {"ok": False, "message": str(exc)}
    return checks


app = FastAPI(
    title="Climate-Resilient Agriculture Advisor API",
    description=(
        "Conversational advisory pipeline that turns a free-text farming query "
        "into a climate-risk assessment, prioritized recommendations and "
        "crop guidance."
    ),
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check, verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "climate-advisor",
        "version": VERSION,
    }


@app.get("/health/ready", tags=["system"])
async def readiness_check() -> JSONResponse:
    checks = await _run_readiness_checks(app)
    healthy = all(check["ok"] for check in checks.values())
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={"status": "ok" if healthy else "degraded", "checks": checks},
    )


# ── Router registration ────────────────────────────────────────────────────
app.include_router(advice.router, prefix="/api/v1")
app.include_router(knowledge.router, prefix="/api/v1")
