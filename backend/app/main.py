"""
FastAPI application entry point.
Sets up the API with lifespan events for logging and storage initialization.
"""
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from app.config import settings
from app.api.router import api_router
from app.errors import PhotoRelayError
from app.middleware.metrics_middleware import MetricsMiddleware
from app.storage.factory import build_storage_provider
from app.utils.logging import configure_logging

SERVICE_NAME = "photo-relay"
VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    - Startup: Configure logging, build storage provider, create upload dir
    - Shutdown: Nothing to release
    """
    configure_logging(SERVICE_NAME, settings.log_level)

    os.makedirs(settings.upload_dir, exist_ok=True)

    # Provider is built once from the environment and injected per request
    provider = build_storage_provider(settings)
    if not provider.is_configured() and settings.environment == "production":
        raise RuntimeError("Storage provider credentials missing in production")
    app.state.storage_provider = provider

    yield


# Create FastAPI app
app = FastAPI(
    title="Photo Relay API",
    description="Receives photos and relays them to cloud storage",
    version=VERSION,
    lifespan=lifespan
)

# CORS middleware (browser clients post the form directly)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Metrics middleware (must be after CORS to track all requests)
app.add_middleware(MetricsMiddleware)


@app.exception_handler(PhotoRelayError)
async def photo_relay_error_handler(request: Request, exc: PhotoRelayError):
    """Render relay errors as {"error": message}."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


# Include API routes
app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Photo Relay API",
        "version": VERSION,
        "environment": settings.environment
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST
    )


def run():
    """Serve the API on HOST:PORT (PORT defaults to 5000)."""
    configure_logging(SERVICE_NAME, settings.log_level)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
