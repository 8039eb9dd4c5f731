from __future__ import annotations

import httpx
import pytest
from opentelemetry.trace import StatusCode

from cep_weather.clients.location import LocationResolver
from cep_weather.domain.models import Location
from cep_weather.errors import DecodeError, NotFoundError, ResolutionError, TransportError

URL = "https://viacep.test/ws/12345678/json/"


@pytest.mark.asyncio
async def test_resolve_returns_city(make_settings, telemetry, spans, upstreams) -> None:
    route = upstreams.get(URL).mock(
        return_value=httpx.Response(200, json={"cep": "12345-678", "localidade": "TestCity"})
    )

    async with httpx.AsyncClient() as http:
        resolver = LocationResolver(settings=make_settings(), http=http, telemetry=telemetry)
        location = await resolver.resolve("12345678")

    assert location == Location(city="TestCity")
    assert route.call_count == 1

    [span] = spans("viacep-api-call")
    assert span.status.status_code == StatusCode.OK
    assert span.attributes["viacep.cep"] == "12345678"
    assert span.attributes["http.url"] == URL
    assert span.attributes["http.status_code"] == 200
    assert span.attributes["viacep.city"] == "TestCity"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("response", "expected"),
    [
        (httpx.Response(200, json={"localidade": ""}), NotFoundError),
        (httpx.Response(200, json={"erro": True}), NotFoundError),
        (httpx.Response(200, json={"localidade": None}), NotFoundError),
        (httpx.Response(200, text="<html>not json</html>"), DecodeError),
        (httpx.Response(200, json=["TestCity"]), DecodeError),
        (httpx.Response(502, text="Bad Gateway"), DecodeError),
    ],
)
async def test_failures_close_span_once_with_error(
    response, expected, make_settings, telemetry, spans, upstreams
) -> None:
    upstreams.get(URL).mock(return_value=response)

    async with httpx.AsyncClient() as http:
        resolver = LocationResolver(settings=make_settings(), http=http, telemetry=telemetry)
        with pytest.raises(expected):
            await resolver.resolve("12345678")

    [span] = spans("viacep-api-call")
    assert span.end_time is not None
    assert span.status.status_code == StatusCode.ERROR
    assert span.attributes["error.type"] == expected.__name__
    assert span.attributes["http.status_code"] == response.status_code
    assert "viacep.city" not in span.attributes
    assert [e.name for e in span.events] == ["exception"]


@pytest.mark.asyncio
async def test_transport_failure(make_settings, telemetry, spans, upstreams) -> None:
    upstreams.get(URL).mock(side_effect=httpx.ConnectError)

    async with httpx.AsyncClient() as http:
        resolver = LocationResolver(settings=make_settings(), http=http, telemetry=telemetry)
        with pytest.raises(TransportError) as exc_info:
            await resolver.resolve("12345678")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert exc_info.value.status_code == 500

    [span] = spans("viacep-api-call")
    assert span.status.status_code == StatusCode.ERROR
    assert span.attributes["error.type"] == "TransportError"
    assert "http.status_code" not in span.attributes


@pytest.mark.asyncio
async def test_undecodable_content_encoding_is_decode_error(
    make_settings, telemetry, spans, upstreams
) -> None:
    upstreams.get(URL).mock(
        return_value=httpx.Response(
            200,
            headers={"content-encoding": "gzip"},
            stream=httpx.ByteStream(b"not-gzip"),
        )
    )

    async with httpx.AsyncClient() as http:
        resolver = LocationResolver(settings=make_settings(), http=http, telemetry=telemetry)
        with pytest.raises(DecodeError) as exc_info:
            await resolver.resolve("12345678")

    assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
    [span] = spans("viacep-api-call")
    assert span.status.status_code == StatusCode.ERROR
    assert span.attributes["error.type"] == "DecodeError"


@pytest.mark.asyncio
async def test_other_request_errors_are_transport_errors(
    make_settings, telemetry, spans, upstreams
) -> None:
    upstreams.get(URL).mock(side_effect=httpx.TooManyRedirects)

    async with httpx.AsyncClient() as http:
        resolver = LocationResolver(settings=make_settings(), http=http, telemetry=telemetry)
        with pytest.raises(TransportError):
            await resolver.resolve("12345678")

    [span] = spans("viacep-api-call")
    assert span.attributes["error.type"] == "TransportError"


@pytest.mark.asyncio
async def test_not_found_maps_to_404(make_settings, telemetry, upstreams) -> None:
    upstreams.get("https://viacep.test/ws/00000000/json/").mock(
        return_value=httpx.Response(200, json={"erro": True})
    )

    async with httpx.AsyncClient() as http:
        resolver = LocationResolver(settings=make_settings(), http=http, telemetry=telemetry)
        with pytest.raises(ResolutionError) as exc_info:
            await resolver.resolve("00000000")

    assert exc_info.value.status_code == 404
    assert exc_info.value.public_detail == "can not find zipcode"
