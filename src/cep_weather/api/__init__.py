"""
cep_weather.api

API package.

Responsibilities:
- FastAPI app factory, routers, and dependency wiring for the three service roles.
"""

# Package marker.
