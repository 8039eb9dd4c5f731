"""
cep_weather.api.routers.lookup

Single-process variant: `GET /?cep=...` resolves in-process, without the gateway hop.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request

from cep_weather.api.deps import resolution_service, telemetry_dep
from cep_weather.api.schemas import WeatherResponse
from cep_weather.observability.tracing import Telemetry
from cep_weather.services.resolution_service import WeatherResolutionService

router = APIRouter(tags=["lookup"])


@router.get("/", response_model=WeatherResponse)
async def lookup_weather(
    request: Request,
    cep: str = Query(default=""),
    service: WeatherResolutionService = Depends(resolution_service),
    telemetry: Telemetry = Depends(telemetry_dep),
) -> WeatherResponse:
    result = await service.resolve(cep, context=telemetry.extract(request.headers))
    return WeatherResponse.from_result(result)
