"""
cep_weather.clients.orchestrator

HTTP client boundary used by the gateway to reach the orchestrator.

Responsibilities:
- Open a CLIENT span for the hop and inject its trace context into the request headers.
- Forward the caller's request id.
- Hand the raw response back; the gateway relays it without interpretation.
"""

from __future__ import annotations

import httpx
from opentelemetry.context import Context
from opentelemetry.trace import SpanKind

from cep_weather.errors import DecodeError, TransportError
from cep_weather.observability.logging import get_logger
from cep_weather.observability.middleware import REQUEST_ID_HEADER, current_request_id
from cep_weather.observability.tracing import Telemetry

log = get_logger(__name__)

WEATHER_PATH = "/weather"


class OrchestratorClient:
    """
    `http` must be configured with `base_url` pointing at the orchestrator.
    """

    def __init__(self, *, http: httpx.AsyncClient, telemetry: Telemetry) -> None:
        self._http = http
        self._telemetry = telemetry

    async def forward(self, zipcode: str, *, context: Context | None = None) -> httpx.Response:
        with self._telemetry.span(
            "orchestrator-call",
            context=context,
            kind=SpanKind.CLIENT,
            attributes={
                "http.url": f"{str(self._http.base_url).rstrip('/')}{WEATHER_PATH}",
                "cep": zipcode,
            },
        ) as span:
            headers = {"Content-Type": "application/json"}
            self._telemetry.inject(headers, context=self._telemetry.context_with(span))
            request_id = current_request_id()
            if request_id:
                headers[REQUEST_ID_HEADER] = request_id

            try:
                r = await self._http.post(WEATHER_PATH, json={"cep": zipcode}, headers=headers)
            except httpx.DecodingError as e:
                log.error("orchestrator_body_undecodable", error=repr(e))
                raise DecodeError(f"orchestrator body could not be decoded: {e!r}") from e
            except httpx.RequestError as e:
                log.error("orchestrator_unreachable", error=repr(e))
                raise TransportError(f"orchestrator request failed: {e!r}") from e

            span.set_attribute("http.status_code", r.status_code)
            return r


# --- Module Notes -----------------------------------------------------------
# A non-2xx answer from the orchestrator is not an error at this boundary: the status
# is part of the response being relayed.
