"""
cep_weather.services.resolution_service

CEP -> temperature orchestration (the authority behind the gateway).

Responsibilities:
- Run the per-request stages in order: validate, resolve location, resolve temperature, assemble.
- Own the parent span; hand its context to the resolvers so their spans nest under it.
- Let typed errors through unchanged; record the failing stage on the span and in logs.
"""

from __future__ import annotations

import enum
from collections.abc import Callable

from opentelemetry.context import Context
from opentelemetry.trace import SpanKind, Status, StatusCode

from cep_weather.clients.location import LocationResolver
from cep_weather.clients.weather import TemperatureResolver
from cep_weather.domain.models import ResolutionResult
from cep_weather.domain.zipcode import is_valid_zipcode, parse_zipcode_request
from cep_weather.errors import InvalidFormatError, ResolutionError
from cep_weather.observability.logging import get_logger
from cep_weather.observability.tracing import Telemetry

log = get_logger(__name__)


class ResolutionStage(enum.StrEnum):
    validating = "VALIDATING"
    resolving_location = "RESOLVING_LOCATION"
    resolving_temperature = "RESOLVING_TEMPERATURE"
    assembling = "ASSEMBLING"
    done = "DONE"
    error = "ERROR"


class WeatherResolutionService:
    def __init__(
        self,
        *,
        telemetry: Telemetry,
        locations: LocationResolver,
        temperatures: TemperatureResolver,
    ) -> None:
        self._telemetry = telemetry
        self._locations = locations
        self._temperatures = temperatures

    async def resolve(self, zipcode: str, *, context: Context | None = None) -> ResolutionResult:
        """
        `context` is the caller's trace context (extracted from the inbound request);
        without it the parent span starts a new trace.
        """

        return await self._resolve(lambda: zipcode, context=context)

    async def resolve_body(self, raw: bytes, *, context: Context | None = None) -> ResolutionResult:
        """
        Same as `resolve`, for a raw `{"cep": "..."}` body. Decoding is part of the
        validating stage, so an undecodable body is recorded on the parent span.
        """

        return await self._resolve(lambda: parse_zipcode_request(raw), context=context)

    async def _resolve(
        self, read_zipcode: Callable[[], str], *, context: Context | None
    ) -> ResolutionResult:
        with self._telemetry.span(
            "process-weather-request",
            context=context,
            kind=SpanKind.SERVER,
        ) as span:
            stage = ResolutionStage.validating
            zipcode: str | None = None
            child_context = self._telemetry.context_with(span)
            try:
                span.set_attribute("resolution.stage", stage.value)
                zipcode = read_zipcode()
                span.set_attribute("cep", zipcode)
                if not is_valid_zipcode(zipcode):
                    raise InvalidFormatError(f"invalid zipcode format: {zipcode!r}")

                stage = ResolutionStage.resolving_location
                span.set_attribute("resolution.stage", stage.value)
                location = await self._locations.resolve(zipcode, context=child_context)

                stage = ResolutionStage.resolving_temperature
                span.set_attribute("resolution.stage", stage.value)
                temp_c = await self._temperatures.resolve(location.city, context=child_context)

                stage = ResolutionStage.assembling
                result = ResolutionResult.from_celsius(location.city, temp_c)
            except ResolutionError as e:
                log.warning(
                    "resolution_failed",
                    cep=zipcode,
                    stage=stage.value,
                    error_type=e.error_type,
                    error=str(e),
                    status_code=e.status_code,
                )
                span.set_attribute("resolution.failed_stage", stage.value)
                span.set_attribute("resolution.stage", ResolutionStage.error.value)
                raise

            span.set_attribute("resolution.stage", ResolutionStage.done.value)
            span.set_attribute("viacep.city", result.city)
            span.set_attribute("weather.temperature_celsius", result.temp_c)
            span.set_status(Status(StatusCode.OK))
            log.info("resolution_completed", cep=zipcode, city=result.city, temp_c=result.temp_c)
            return result


# --- Module Notes -----------------------------------------------------------
# Outward status mapping lives on the error types (`cep_weather.errors`); this service
# never converts one error into another.
