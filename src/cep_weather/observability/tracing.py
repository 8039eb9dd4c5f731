"""
cep_weather.observability.tracing

OpenTelemetry tracing handle passed explicitly to every component.

Responsibilities:
- Build a TracerProvider + batch exporter per process (no global provider is installed).
- Scope spans to `with` blocks so every span ends exactly once, with error/cancel status.
- Carry trace context across the gateway -> orchestrator hop (W3C traceparent headers).
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterator, Mapping, MutableMapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.sdk.trace.sampling import ALWAYS_ON
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, format_span_id, format_trace_id
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

if TYPE_CHECKING:
    from cep_weather.settings import Settings

DEFAULT_ZIPKIN_ENDPOINT = "http://zipkin:9411/api/v2/spans"


class Telemetry:
    """
    One per process: owns the provider (and therefore the export pipeline), a tracer
    and the propagator. Constructed at app startup, or directly in tests with an
    in-memory exporter.
    """

    def __init__(self, provider: TracerProvider, *, instrumentation_name: str = "cep_weather") -> None:
        self._provider = provider
        self._tracer = provider.get_tracer(instrumentation_name)
        self._propagator = TraceContextTextMapPropagator()

    @classmethod
    def from_settings(cls, settings: Settings) -> Telemetry:
        provider = TracerProvider(
            resource=Resource.create({SERVICE_NAME: settings.resolved_service_name}),
            sampler=ALWAYS_ON,
        )
        exporter = _build_exporter(settings)
        if exporter is not None:
            # Batched export keeps span submission off the request path.
            provider.add_span_processor(BatchSpanProcessor(exporter))
        return cls(provider)

    @property
    def provider(self) -> TracerProvider:
        return self._provider

    @contextmanager
    def span(
        self,
        name: str,
        *,
        context: Context | None = None,
        kind: SpanKind = SpanKind.INTERNAL,
        attributes: Mapping[str, Any] | None = None,
    ) -> Iterator[Span]:
        """
        Start a span (child of `context`, or of the current span when omitted) and end
        it when the block exits, whatever the exit path.

        Exceptions leaving the block are recorded and mark the span ERROR; task
        cancellation marks it ERROR with a `cancelled` description. Both re-raise.
        """

        with self._tracer.start_as_current_span(
            name,
            context=context,
            kind=kind,
            attributes=dict(attributes or {}),
            record_exception=False,
            set_status_on_exception=False,
        ) as span:
            try:
                yield span
            except asyncio.CancelledError:
                span.set_attribute("error.type", "cancelled")
                span.set_status(Status(StatusCode.ERROR, "cancelled"))
                raise
            except Exception as exc:
                mark_error(span, exc)
                raise

    def context_with(self, span: Span) -> Context:
        return trace.set_span_in_context(span)

    def inject(
        self, headers: MutableMapping[str, str], *, context: Context | None = None
    ) -> MutableMapping[str, str]:
        self._propagator.inject(headers, context=context)
        return headers

    def extract(self, headers: Mapping[str, str]) -> Context:
        # No traceparent -> empty Context -> spans started under it become new roots.
        return self._propagator.extract(carrier=dict(headers))

    def shutdown(self, *, grace_seconds: float) -> None:
        # Drain pending batches within the grace period, then stop the export worker.
        self._provider.force_flush(timeout_millis=int(grace_seconds * 1000))
        self._provider.shutdown()


def mark_error(span: Span, exc: BaseException) -> None:
    span.record_exception(exc)
    span.set_attribute("error.type", type(exc).__name__)
    span.set_status(Status(StatusCode.ERROR, str(exc) or type(exc).__name__))


def current_trace_ids() -> dict[str, str]:
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return {}
    return {
        "trace_id": format_trace_id(span_context.trace_id),
        "span_id": format_span_id(span_context.span_id),
    }


def _build_exporter(settings: Settings) -> SpanExporter | None:
    # Exporter packages are imported on demand so only the selected backend is loaded.
    if settings.trace_exporter == "zipkin":
        from opentelemetry.exporter.zipkin.json import ZipkinExporter

        return ZipkinExporter(endpoint=settings.trace_endpoint or DEFAULT_ZIPKIN_ENDPOINT)
    if settings.trace_exporter == "otlp":
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter

        if settings.trace_endpoint:
            return OTLPSpanExporter(endpoint=settings.trace_endpoint)
        return OTLPSpanExporter()
    if settings.trace_exporter == "console":
        return ConsoleSpanExporter()
    return None


# --- Module Notes -----------------------------------------------------------
# Components receive a `Telemetry` in their constructor and pass `Context` values down
# explicitly; `opentelemetry.trace.set_tracer_provider` is never called.
