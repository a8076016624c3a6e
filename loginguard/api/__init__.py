"""API routers."""

from loginguard.api.health import router as health_router
from loginguard.api.login import router as login_router

__all__ = ["health_router", "login_router"]
