"""
cep_weather.clients.location

ViaCEP client boundary: CEP -> city.

Responsibilities:
- Issue exactly one GET per lookup (no retry) inside its own CLIENT span.
- Translate transport failures, undecodable bodies and empty results into typed errors.
"""

from __future__ import annotations

from typing import Any

import httpx
from opentelemetry.context import Context
from opentelemetry.trace import SpanKind, Status, StatusCode

from cep_weather.domain.models import Location
from cep_weather.errors import DecodeError, NotFoundError, TransportError
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Telemetry
from cep_weather.settings import Settings

log = get_logger(__name__)


class LocationResolver:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, telemetry: Telemetry) -> None:
        self._settings = settings
        self._http = http
        self._telemetry = telemetry

    def url_for(self, zipcode: str) -> str:
        return self._settings.location_url_template.format(cep=zipcode)

    async def resolve(self, zipcode: str, *, context: Context | None = None) -> Location:
        url = self.url_for(zipcode)
        with self._telemetry.span(
            "viacep-api-call",
            context=context,
            kind=SpanKind.CLIENT,
            attributes={"viacep.cep": zipcode, "http.url": url},
        ) as span:
            log.info("location_lookup", cep=zipcode, url=url)
            try:
                r = await self._http.get(url)
            except httpx.DecodingError as e:
                raise DecodeError(f"viacep body could not be decoded: {e!r}") from e
            except httpx.RequestError as e:
                raise TransportError(f"viacep request failed: {e!r}") from e

            span.set_attribute("http.status_code", r.status_code)
            payload = _decode_object(r)

            # ViaCEP answers unknown-but-well-formed codes with {"erro": true}.
            city = payload.get("localidade")
            if not isinstance(city, str) or not city:
                raise NotFoundError(f"zipcode not found: {zipcode}")

            span.set_attribute("viacep.city", city)
            span.set_status(Status(StatusCode.OK))
            return Location(city=city)


def _decode_object(r: httpx.Response) -> dict[str, Any]:
    try:
        payload = r.json()
    except ValueError as e:
        raise DecodeError(f"viacep returned a non-JSON body (status {r.status_code})") from e
    if not isinstance(payload, dict):
        raise DecodeError(f"viacep returned {type(payload).__name__}, expected an object")
    return payload


# --- Module Notes -----------------------------------------------------------
# The upstream status is recorded on the span but not interpreted: ViaCEP reports
# "not found" in the body, so the body decides between NotFoundError and DecodeError.
