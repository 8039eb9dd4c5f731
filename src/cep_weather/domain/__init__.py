"""
cep_weather.domain

Domain package.

Responsibilities:
- Pure value types and the CEP format rule (no I/O).
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Anything that talks to the network lives in `cep_weather.clients`, not here.
