"""
cep_weather.clients.weather

WeatherAPI client boundary: city -> current temperature in Celsius.

Responsibilities:
- Require the API key before doing anything else.
- Escape the city into the request URL and keep the key out of spans and logs.
- Translate transport failures, non-2xx answers and malformed bodies into typed errors.
"""

from __future__ import annotations

import math
from urllib.parse import quote_plus

import httpx
from opentelemetry.context import Context
from opentelemetry.trace import SpanKind, Status, StatusCode

from cep_weather.errors import ConfigurationError, DecodeError, TransportError, UpstreamError
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Telemetry
from cep_weather.settings import Settings

log = get_logger(__name__)

_REDACTED = "REDACTED"


class TemperatureResolver:
    def __init__(self, *, settings: Settings, http: httpx.AsyncClient, telemetry: Telemetry) -> None:
        self._settings = settings
        self._http = http
        self._telemetry = telemetry

    def url_for(self, city: str, *, key: str) -> str:
        return self._settings.weather_url_template.format(key=key, city=quote_plus(city))

    async def resolve(self, city: str, *, context: Context | None = None) -> float:
        api_key = self._settings.weather_api_key
        if not api_key:
            # Raised before any span is opened; the caller's span records it.
            raise ConfigurationError("weather api key not set")

        url = self.url_for(city, key=api_key)
        safe_url = self.url_for(city, key=_REDACTED)

        with self._telemetry.span(
            "weatherapi-call",
            context=context,
            kind=SpanKind.CLIENT,
            attributes={"weatherapi.city": city, "http.url": safe_url},
        ) as span:
            log.info("temperature_lookup", city=city, url=safe_url)
            try:
                r = await self._http.get(url)
            except httpx.DecodingError as e:
                raise DecodeError(
                    f"weatherapi body could not be decoded: {type(e).__name__}"
                ) from e
            except httpx.RequestError as e:
                # httpx includes the request URL in some messages; keep only the type.
                raise TransportError(f"weatherapi request failed: {type(e).__name__}") from e

            span.set_attribute("http.status_code", r.status_code)
            if not r.is_success:
                log.warning(
                    "temperature_lookup_rejected",
                    city=city,
                    status_code=r.status_code,
                    body=r.text,
                )
                raise UpstreamError(
                    f"weather lookup failed with status {r.status_code}",
                    upstream_status=r.status_code,
                )

            temp_c = _extract_celsius(r)
            span.set_attribute("weather.temperature_celsius", temp_c)
            span.set_status(Status(StatusCode.OK))
            return temp_c


def _extract_celsius(r: httpx.Response) -> float:
    try:
        payload = r.json()
    except ValueError as e:
        raise DecodeError("weatherapi returned a non-JSON body") from e

    current = payload.get("current") if isinstance(payload, dict) else None
    value = current.get("temp_c") if isinstance(current, dict) else None
    # bool is an int subclass; a JSON true/false is not a temperature.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError("weatherapi body has no numeric current.temp_c")
    if not math.isfinite(value):
        raise DecodeError("weatherapi current.temp_c is not finite")
    return float(value)


# --- Module Notes -----------------------------------------------------------
# Non-2xx (UpstreamError) and no-response (TransportError) stay distinct here even
# though both surface as 500 to the client.
