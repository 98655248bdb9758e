"""FastAPI server exposing the installer health check."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .. import __version__
from ..config import settings
from ..health.check import InstallerHealthCheck
from ..installer.provider import YamlInfoProvider
from .health_routes import health_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Wire the health check on startup; an invalid policy aborts startup."""
    provider = YamlInfoProvider(settings.snapshot_path)
    app.state.health_check = InstallerHealthCheck(provider, settings)
    logger.info("Installer health check reading %s", provider.path)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="OSGi Installer Health Check",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(health_router, prefix="/api")
    return app


app = create_app()
