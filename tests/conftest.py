"""
tests.conftest

Shared fixtures.

Responsibilities:
- In-memory span collection behind an explicitly constructed Telemetry handle.
- Settings pointing the upstreams at fake hosts mocked with respx.
- A helper that runs an app's lifespan around an in-process httpx client.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
import pytest
import respx
from fastapi import FastAPI
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

from cep_weather.observability.tracing import Telemetry
from cep_weather.settings import Settings

LOCATION_TEMPLATE = "https://viacep.test/ws/{cep}/json/"
WEATHER_TEMPLATE = "https://weather.test/v1/current.json?key={key}&q={city}"
ORCHESTRATOR_URL = "http://orchestrator.test"


@pytest.fixture
def span_exporter() -> InMemorySpanExporter:
    return InMemorySpanExporter()


@pytest.fixture
def telemetry(span_exporter: InMemorySpanExporter) -> Telemetry:
    # Simple (synchronous) processor so spans are visible as soon as they end.
    provider = TracerProvider()
    provider.add_span_processor(SimpleSpanProcessor(span_exporter))
    return Telemetry(provider)


@pytest.fixture
def spans(span_exporter: InMemorySpanExporter) -> Callable[[str], list[ReadableSpan]]:
    def _named(name: str) -> list[ReadableSpan]:
        return [s for s in span_exporter.get_finished_spans() if s.name == name]

    return _named


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "env": "test",
            "role": "orchestrator",
            "location_url_template": LOCATION_TEMPLATE,
            "weather_url_template": WEATHER_TEMPLATE,
            "weather_api_key": "test-key",
            "orchestrator_url": ORCHESTRATOR_URL,
            "trace_exporter": "none",
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def upstreams() -> Iterator[respx.MockRouter]:
    # Routes are declared per test; some tests assert a route was never hit.
    with respx.mock(assert_all_called=False) as router:
        yield router


@asynccontextmanager
async def _serve(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    # httpx ASGITransport does not manage lifespan automatically; do it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client


@pytest.fixture
def serve() -> Callable[[FastAPI], Any]:
    return _serve


# --- Module Notes -----------------------------------------------------------
# No test touches the global OpenTelemetry provider; each test gets its own handle.
