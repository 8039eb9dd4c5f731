"""
cep_weather.api.app

FastAPI app factory for the gateway, orchestrator and standalone roles.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers for `settings.role`.
- Create and dispose shared infrastructure (tracing handle, outbound HTTP client).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from cep_weather import __version__
from cep_weather.api.errors import register_error_handlers
from cep_weather.api.routers.gateway import router as gateway_router
from cep_weather.api.routers.health import router as health_router
from cep_weather.api.routers.lookup import router as lookup_router
from cep_weather.api.routers.weather import router as weather_router
from cep_weather.observability.logging import configure_logging, get_logger
from cep_weather.observability.middleware import RequestContextMiddleware
from cep_weather.observability.tracing import Telemetry
from cep_weather.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    telemetry: Telemetry | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    `telemetry` and `transport` are injection points for tests: an in-memory span
    exporter, and an in-process transport for outbound calls. An injected telemetry
    handle is owned by the caller and is not shut down with the app.
    """

    configure_logging(service_name=settings.resolved_service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env, role=settings.role, port=settings.port)
        app.state.telemetry = telemetry or Telemetry.from_settings(settings)
        # One client per process; the gateway's client is rooted at the orchestrator.
        client_kwargs: dict = {"timeout": settings.http_timeout_seconds, "transport": transport}
        if settings.role == "gateway":
            client_kwargs["base_url"] = settings.orchestrator_url
        app.state.http = httpx.AsyncClient(**client_kwargs)
        try:
            yield
        finally:
            await app.state.http.aclose()
            if telemetry is None:
                app.state.telemetry.shutdown(grace_seconds=settings.shutdown_grace_seconds)
            log.info("shutdown")

    app = FastAPI(
        title=f"CEP Weather ({settings.role})",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    if settings.role == "gateway":
        app.include_router(gateway_router)
    elif settings.role == "orchestrator":
        app.include_router(weather_router)
    else:
        app.include_router(lookup_router)

    return app


# --- Module Notes -----------------------------------------------------------
# This file is intentionally small: app composition stays here; resolution logic stays
# in the clients/services layers.
