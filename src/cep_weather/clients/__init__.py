"""
cep_weather.clients

Outbound HTTP client boundaries.

Responsibilities:
- ViaCEP (CEP -> city) and WeatherAPI (city -> temperature) resolvers.
- The gateway's client for the orchestrator hop.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# The orchestration service depends on these classes, never on httpx directly.
