"""
cep_weather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, telemetry and the shared HTTP client.
- Assemble the per-request service objects from app.state.
"""

from __future__ import annotations

import httpx
from fastapi import Depends, Request

from cep_weather.clients.location import LocationResolver
from cep_weather.clients.orchestrator import OrchestratorClient
from cep_weather.clients.weather import TemperatureResolver
from cep_weather.observability.tracing import Telemetry
from cep_weather.services.resolution_service import WeatherResolutionService
from cep_weather.settings import Settings


def settings_dep(request: Request) -> Settings:
    # Per-app settings (set by `create_app`) so several apps can share one process in tests.
    return request.app.state.settings  # type: ignore[attr-defined]


def telemetry_dep(request: Request) -> Telemetry:
    return request.app.state.telemetry  # type: ignore[attr-defined]


def http_dep(request: Request) -> httpx.AsyncClient:
    # Created on startup in `cep_weather.api.app.create_app`; closed on shutdown.
    return request.app.state.http  # type: ignore[attr-defined]


def resolution_service(
    settings: Settings = Depends(settings_dep),
    telemetry: Telemetry = Depends(telemetry_dep),
    http: httpx.AsyncClient = Depends(http_dep),
) -> WeatherResolutionService:
    return WeatherResolutionService(
        telemetry=telemetry,
        locations=LocationResolver(settings=settings, http=http, telemetry=telemetry),
        temperatures=TemperatureResolver(settings=settings, http=http, telemetry=telemetry),
    )


def orchestrator_client(
    telemetry: Telemetry = Depends(telemetry_dep),
    http: httpx.AsyncClient = Depends(http_dep),
) -> OrchestratorClient:
    return OrchestratorClient(http=http, telemetry=telemetry)
