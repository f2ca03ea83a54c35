"""FastAPI application entrypoint — lifespan, routers, middleware."""

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from redis.asyncio import Redis

from app.config import get_settings
from app.middleware.logging import RequestLoggingMiddleware, configure_structured_logging
from app.middleware.rate_limit import RateLimitMiddleware
from app.routes import crops, dataset, model, recommendations, sensors, webhooks
from app.services.container import ServiceContainer

logger = logging.getLogger("cropmind")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application startup / shutdown lifecycle.

    Startup:
      1. Initialize structured logging
      2. Build the service container (dataset loads lazily on first use)
      3. Start the sensor-cache sweeper
      4. Connect to Redis when configured

    Shutdown:
      1. Cancel the sweeper
      2. Close the Redis connection pool
    """
    settings = get_settings()
    configure_structured_logging(settings)
    logger.info(
        "CropMind starting",
        extra={
            "log_level": settings.log_level,
            "dataset_path": settings.dataset_path,
        },
    )

    container = ServiceContainer.build(settings)
    app.state.container = container
    sweeper = asyncio.create_task(
        container.sensor_cache.run_sweeper(settings.sensor_cache_sweep_interval_seconds)
    )

    redis: Redis | None = None
    app.state.redis = None
    if settings.redis_url:
        try:
            redis = Redis.from_url(settings.redis_url, decode_responses=True)
            await redis.ping()
            app.state.redis = redis
        except Exception as exc:
            logger.exception("startup failure", extra={"error": str(exc)})
            sweeper.cancel()
            raise

    yield

    logger.info("CropMind shutting down")
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    if redis is not None:
        await redis.aclose()


app = FastAPI(
    title="CropMind API",
    description=(
        "Crop advisory API — historical-dataset matching, crop suitability "
        "scoring, rule-based field advice and live device sensor readings."
    ),
    version="0.1.0",
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
app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)


# ── Health check ────────────────────────────────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check() -> dict[str, str]:
    """Basic health check — verifies the API process is alive."""
    return {
        "status": "ok",
        "service": "cropmind",
        "version": "0.1.0",
    }


# ── Router registration ────────────────────────────────────────────────────
app.include_router(recommendations.router, prefix="/api/v1")
app.include_router(dataset.router, prefix="/api/v1")
app.include_router(crops.router, prefix="/api/v1")
app.include_router(model.router, prefix="/api/v1")
app.include_router(webhooks.router, prefix="/api/v1")
app.include_router(sensors.router, prefix="/api/v1")
