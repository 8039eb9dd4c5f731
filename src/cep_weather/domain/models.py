"""
cep_weather.domain.models

Value types produced while resolving a CEP.

Responsibilities:
- `Location`: the city resolved from a CEP.
- `ResolutionResult`: the terminal response value, with Fahrenheit/Kelvin derived once.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Location:
    city: str


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """
    Terminal value returned to the client. Build it with `from_celsius` so the
    derived units are computed exactly once.
    """

    city: str
    temp_c: float
    temp_f: float
    temp_k: float

    @classmethod
    def from_celsius(cls, city: str, temp_c: float) -> ResolutionResult:
        return cls(
            city=city,
            temp_c=temp_c,
            temp_f=temp_c * 1.8 + 32,
            temp_k=temp_c + 273,
        )


# --- Module Notes -----------------------------------------------------------
# Kelvin uses the integer offset 273 (not 273.15) to match the published API contract.
