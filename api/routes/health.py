"""Liveness and readiness probes."""
from __future__ import annotations

from typing import Any, Mapping

from fastapi import APIRouter, Depends

from api.dependencies import get_site_constants
from core.response import success_response

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
async def health_check():
    """Process is up; says nothing about configuration."""
    return success_response(data={"status": "healthy"}, message="ok")


@router.get("/ready")
async def readiness_check(constants: Mapping[str, Any] = Depends(get_site_constants)):
    """Ready once every required key resolved; 500 text/plain otherwise."""
    return success_response(
        data={
            "status": "ready",
            "constants": len(constants),
            "multisite": bool(constants.get("MULTISITE")),
            "subdomain_install": bool(constants.get("SUBDOMAIN_INSTALL")),
            "home": constants.get("WP_HOME"),
        },
        message="ok",
    )
