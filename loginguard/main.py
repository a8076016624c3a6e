"""
loginguard application.

FastAPI adapter that hosts one LoginController, exposes its state snapshot
and maps presentation actions onto it.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from loginguard import __version__
from loginguard.api import health_router, login_router
from loginguard.auth import Authenticator, build_authenticator
from loginguard.config import Settings, get_settings
from loginguard.core import Clock, get_logger, setup_logging
from loginguard.core.middleware import RequestContextMiddleware, setup_exception_handlers
from loginguard.login import LockoutPolicy, LoginController
from loginguard.network import ConnectivityProbe, ConnectivityPublisher
from loginguard.store import CredentialStore, build_credential_store

logger = get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    authenticator: Authenticator | None = None,
    store: CredentialStore | None = None,
    connectivity: ConnectivityPublisher | None = None,
    clock: Clock | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Collaborators not passed in are built from settings when the app starts.
    ``transport`` is handed to the HTTP authenticator and probe (tests use
    ``httpx.MockTransport``).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        cfg = settings or get_settings()
        setup_logging(
            level=cfg.log_level,
            json_output=not cfg.debug,
            log_file=cfg.log_file or None,
        )
        logger.info(
            "Starting loginguard",
            data={
                "authenticator": cfg.authenticator_backend,
                "store": cfg.store_backend,
                "probe": cfg.connectivity_probe_enabled,
            },
        )

        auth = authenticator or build_authenticator(cfg, transport=transport)
        credential_store = store or build_credential_store(cfg)
        publisher = connectivity or ConnectivityPublisher()

        probe: ConnectivityProbe | None = None
        if cfg.connectivity_probe_enabled:
            probe = ConnectivityProbe(
                publisher,
                cfg.connectivity_probe_url,
                interval=cfg.connectivity_probe_interval_seconds,
                timeout=cfg.connectivity_probe_timeout_seconds,
                transport=transport,
            )
            probe.start()
        elif publisher.last_value is None:
            publisher.set_online(cfg.connectivity_default_online)

        controller = LoginController(
            auth,
            credential_store,
            publisher,
            policy=LockoutPolicy.from_settings(cfg),
            clock=clock,
        )
        controller.start()

        app.state.settings = cfg
        app.state.connectivity = publisher
        app.state.credential_store = credential_store
        app.state.login_controller = controller

        yield

        logger.info("Shutting down loginguard")
        await controller.close()
        app.state.login_controller = None
        if probe is not None:
            await probe.aclose()
        if authenticator is None:
            await auth.aclose()
        if store is None:
            credential_store.close()

    app = FastAPI(
        title="loginguard",
        description="Client-side login controller with attempt tracking and timed lockout",
        version=__version__,
        lifespan=lifespan,
    )

    setup_exception_handlers(app)
    app.add_middleware(RequestContextMiddleware)

    app.include_router(health_router)
    app.include_router(login_router)

    return app


# Application instance for ASGI servers
app = create_app()
