"""
ISO Fit Calculator - service entry point.

ISO 286 tolerance and fit calculation service.
"""

import logging
import sys
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from prometheus_client import make_asgi_app

from isofit import __version__
from isofit.api import api_router
from isofit.core.config import get_settings
from isofit.core.knowledge.tolerance import ISO_STANDARD, SUPPORTED_LANGUAGES
from isofit.utils.logging import setup_logging

settings = get_settings()

setup_logging(settings.LOG_LEVEL, settings.LOG_JSON)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan."""
    logger.info("Starting %s %s...", settings.APP_NAME, __version__)
    yield
    logger.info("Shutting down %s...", settings.APP_NAME)


app = FastAPI(
    title=settings.APP_NAME,
    description="ISO 286 tolerance and fit calculator",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

app.include_router(api_router, prefix="/api")

app.mount("/metrics", make_asgi_app())


@app.get("/")
async def root():
    """Service info."""
    return {
        "name": settings.APP_NAME,
        "version": __version__,
        "standard": ISO_STANDARD,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
async def health_check():
    """Health check with runtime and configuration summary."""
    current_settings = get_settings()
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "services": {"api": "up", "calculator": "up"},
        "runtime": {
            "python_version": sys.version.split(" ")[0],
            "metrics_enabled": True,
        },
        "config": {
            "default_language": current_settings.DEFAULT_LANGUAGE,
            "languages": list(SUPPORTED_LANGUAGES),
            "api_key_required": bool(current_settings.API_KEY),
            "network": {
                "cors_origins": current_settings.CORS_ORIGINS,
                "allowed_hosts": current_settings.ALLOWED_HOSTS,
            },
            "debug": {
                "debug_mode": current_settings.DEBUG,
                "log_level": current_settings.LOG_LEVEL,
            },
        },
    }


if __name__ == "__main__":
    uvicorn.run(
        "isofit.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=settings.WORKERS if not settings.DEBUG else 1,
        log_level=settings.LOG_LEVEL.lower(),
    )
