from __future__ import annotations

import httpx
import pytest

from cep_weather.api.app import create_app


@pytest.mark.asyncio
async def test_lookup_by_query_parameter(make_settings, telemetry, serve, upstreams) -> None:
    upstreams.get("https://viacep.test/ws/12345678/json/").mock(
        return_value=httpx.Response(200, json={"localidade": "TestCity"})
    )
    upstreams.get(host="weather.test").mock(
        return_value=httpx.Response(200, json={"current": {"temp_c": 25.0}})
    )
    app = create_app(settings=make_settings(role="standalone"), telemetry=telemetry)

    async with serve(app) as client:
        r = await client.get("/", params={"cep": "12345678"})

    assert r.status_code == 200
    assert r.json() == {"city": "TestCity", "temp_C": 25, "temp_F": 77, "temp_K": 298}


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"cep": "123"}, {}, {"cep": "abcdefgh"}])
async def test_invalid_or_missing_code_is_422(
    params, make_settings, telemetry, serve, upstreams
) -> None:
    location = upstreams.get(host="viacep.test")
    app = create_app(settings=make_settings(role="standalone"), telemetry=telemetry)

    async with serve(app) as client:
        r = await client.get("/", params=params)

    assert r.status_code == 422
    assert r.json() == {"detail": "invalid zipcode"}
    assert not location.called


@pytest.mark.asyncio
async def test_unknown_zipcode_is_404(make_settings, telemetry, serve, upstreams) -> None:
    upstreams.get(host="viacep.test").mock(return_value=httpx.Response(200, json={"erro": True}))
    app = create_app(settings=make_settings(role="standalone"), telemetry=telemetry)

    async with serve(app) as client:
        r = await client.get("/", params={"cep": "00000000"})

    assert r.status_code == 404


@pytest.mark.asyncio
async def test_post_is_405(make_settings, telemetry, serve) -> None:
    app = create_app(settings=make_settings(role="standalone"), telemetry=telemetry)

    async with serve(app) as client:
        r = await client.post("/", json={"cep": "12345678"})

    assert r.status_code == 405
