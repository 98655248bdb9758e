"""API routes for the installer health check.

Endpoints:
  GET  /api/health/installer         — run the check (200 when ok, 503 otherwise)
  GET  /api/health/installer/config  — active policy
  POST /api/health/installer/reload  — re-read settings and reconfigure
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from ..config import Settings
from ..health.check import InstallerHealthCheck
from ..health.skiplist import ConfigurationError
from ..installer.provider import SnapshotError

logger = logging.getLogger(__name__)

health_router = APIRouter()


def _health_check(request: Request) -> InstallerHealthCheck:
    return request.app.state.health_check


def _describe(check: InstallerHealthCheck) -> dict[str, Any]:
    return {"name": check.name, "tags": list(check.tags)}


@health_router.get("/health/installer")
def run_installer_check(request: Request) -> JSONResponse:
    """Run the check once against the current installer state."""
    check = _health_check(request)
    try:
        result = check.execute()
    except ConfigurationError as e:
        return JSONResponse(
            status_code=503,
            content={**_describe(check), "ok": False, "status": "CONFIGURATION_ERROR", "error": str(e)},
        )
    except SnapshotError as e:
        logger.error("Installation state unavailable: %s", e)
        return JSONResponse(
            status_code=503,
            content={**_describe(check), "ok": False, "status": "HEALTH_CHECK_ERROR", "error": str(e)},
        )

    return JSONResponse(
        status_code=200 if result.ok else 503,
        content={**_describe(check), **result.to_dict()},
    )


@health_router.get("/health/installer/config")
def get_installer_config(request: Request) -> dict[str, Any]:
    """Return the active policy."""
    check = _health_check(request)
    if check.config is None:
        raise HTTPException(status_code=503, detail=f"{check.name} is not configured")
    return {**_describe(check), **check.config.to_dict()}


@health_router.post("/health/installer/reload")
def reload_installer_config(request: Request) -> dict[str, Any]:
    """Re-read settings from the environment and swap in the new policy."""
    check = _health_check(request)
    try:
        config = check.reload(Settings)
    except ConfigurationError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return {**_describe(check), **config.to_dict()}
