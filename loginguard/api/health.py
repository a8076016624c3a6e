"""
Health check endpoint.

Reports liveness together with the cached connectivity status and the
reachability of the credential store the controller is using.
"""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request

from loginguard import __version__

router = APIRouter(tags=["health"])


@router.get("/health")
async def healthcheck(request: Request) -> dict[str, Any]:
    connectivity = getattr(request.app.state, "connectivity", None)
    store = getattr(request.app.state, "credential_store", None)

    checks: dict[str, bool] = {
        "controller": getattr(request.app.state, "login_controller", None) is not None,
        "online": bool(connectivity and connectivity.is_online),
        "store": bool(store and store.healthcheck()),
    }

    return {
        "status": "ok",
        "version": __version__,
        "timestamp": datetime.now(UTC).isoformat(),
        "checks": checks,
    }
