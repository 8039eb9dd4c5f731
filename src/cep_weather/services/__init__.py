"""
cep_weather.services

Service layer.

Responsibilities:
- Sequence validation, location lookup, temperature lookup and response assembly.
"""

# Package marker.
