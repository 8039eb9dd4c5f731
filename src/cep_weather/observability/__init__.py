"""
cep_weather.observability

Observability package.

Responsibilities:
- Structured logging configuration.
- Request context propagation for consistent log enrichment.
- The tracing handle shared by the resolvers, the orchestration service and the gateway.
"""

# Package marker.
