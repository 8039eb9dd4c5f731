"""
cep_weather.api.routers.gateway

Ingress endpoint: `POST /weather` with `{"cep": "..."}`, relayed to the orchestrator.

Responsibilities:
- Reject malformed input locally (no hop to the orchestrator).
- Start/continue the trace and carry it over the hop.
- Relay the orchestrator's status code and body unchanged.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response
from opentelemetry.trace import SpanKind

from cep_weather.api.deps import orchestrator_client, telemetry_dep
from cep_weather.clients.orchestrator import OrchestratorClient
from cep_weather.domain.zipcode import is_valid_zipcode, parse_zipcode_request
from cep_weather.errors import InvalidFormatError
from cep_weather.observability.tracing import Telemetry

router = APIRouter(tags=["gateway"])


@router.post("/weather")
async def forward_weather(
    request: Request,
    client: OrchestratorClient = Depends(orchestrator_client),
    telemetry: Telemetry = Depends(telemetry_dep),
) -> Response:
    zipcode = parse_zipcode_request(await request.body())
    # Same rule the orchestrator applies; failing here saves the hop.
    if not is_valid_zipcode(zipcode):
        raise InvalidFormatError(f"invalid zipcode format: {zipcode!r}")

    with telemetry.span(
        "process-zipcode",
        context=telemetry.extract(request.headers),
        kind=SpanKind.SERVER,
        attributes={"cep": zipcode},
    ) as span:
        r = await client.forward(zipcode, context=telemetry.context_with(span))
        span.set_attribute("http.status_code", r.status_code)

    return Response(
        content=r.content,
        status_code=r.status_code,
        media_type=r.headers.get("content-type", "application/json"),
    )
