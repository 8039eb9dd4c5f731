"""
cep_weather.api.routers.weather

Orchestrator endpoint: `POST /weather` with `{"cep": "..."}`.

Responsibilities:
- Continue the caller's trace (traceparent header) and delegate to WeatherResolutionService.
- Return the assembled temperatures; errors are rendered by `api.errors`.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from cep_weather.api.deps import resolution_service, telemetry_dep
from cep_weather.api.schemas import WeatherResponse
from cep_weather.observability.tracing import Telemetry
from cep_weather.services.resolution_service import WeatherResolutionService

router = APIRouter(tags=["weather"])


@router.post("/weather", response_model=WeatherResponse)
async def resolve_weather(
    request: Request,
    service: WeatherResolutionService = Depends(resolution_service),
    telemetry: Telemetry = Depends(telemetry_dep),
) -> WeatherResponse:
    raw = await request.body()
    result = await service.resolve_body(raw, context=telemetry.extract(request.headers))
    return WeatherResponse.from_result(result)
