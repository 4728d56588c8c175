"""
VARK Learning API - Main Application Entry Point

This module initializes and configures the FastAPI application including:
- Logging
- Database and Redis connections
- CORS and request logging middleware
- Error envelope handlers
- API routing
- Health check endpoints
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import app.models  # noqa: F401  registers every ORM model
from app.api import api_router
from app.core.config import settings
from app.core.database import check_db_connection, close_db, init_db
from app.core.errors import register_exception_handlers
from app.core.logging import RequestLoggingMiddleware, configure_logging
from app.core.redis import close_redis, init_redis, is_redis_available
from app.modules.shared import utcnow

logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """
    Application lifespan manager.

    Redis is optional outside production: rate limiting falls back to an
    in-process store when it is unreachable.
    """
    configure_logging()
    logger.info(f"Starting VARK Learning API in {settings.python_env} mode...")

    try:
        await init_redis()
        logger.info("[OK] Redis connected")
    except Exception as e:
        logger.error(f"[FAIL] Redis connection failed: {e}")
        if settings.is_production:
            raise

    try:
        await init_db()
        logger.info("[OK] Database connected")
    except Exception as e:
        logger.error(f"[FAIL] Database connection failed: {e}")
        if settings.is_production:
            raise

    yield

    logger.info("Shutting down VARK Learning API...")
    await close_redis()
    await close_db()
    logger.info("[OK] Cleanup complete")


app = FastAPI(
    title="VARK Learning API",
    description="Learning management API for VARK-personalized modules",
    version="0.1.0",
    docs_url=None if settings.is_production else "/docs",
    redoc_url=None if settings.is_production else "/redoc",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.include_router(api_router, prefix="/api")

app.add_middleware(RequestLoggingMiddleware)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Root"])
async def root() -> dict[str, str]:
    """Root endpoint - API welcome message."""
    return {
        "message": "Welcome to VARK Learning API",
        "status": "running",
        "environment": settings.python_env,
        "version": app.version,
    }


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str | float]:
    """Liveness check for container orchestration."""
    return {
        "status": "ok",
        "timestamp": utcnow().isoformat(),
        "uptime_seconds": round(time.monotonic() - STARTED_AT, 1),
        "environment": settings.python_env,
    }


@app.get("/ready", tags=["Health"])
async def readiness_check():
    """Readiness check: the database must answer, Redis is reported only."""
    try:
        database_ready = await check_db_connection()
    except Exception as e:
        logger.warning(f"Readiness database probe failed: {e}")
        database_ready = False

    body = {
        "status": "ready" if database_ready else "not_ready",
        "database": database_ready,
        "redis": is_redis_available(),
    }
    return JSONResponse(status_code=200 if database_ready else 503, content=body)
