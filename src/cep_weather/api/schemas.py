"""
cep_weather.api.schemas

Response body shared by the orchestrator and standalone routers.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cep_weather.domain.models import ResolutionResult


class WeatherResponse(BaseModel):
    # Wire names are temp_C/temp_F/temp_K; FastAPI dumps and revalidates by alias.
    model_config = ConfigDict(populate_by_name=True)

    city: str
    temp_c: float = Field(alias="temp_C")
    temp_f: float = Field(alias="temp_F")
    temp_k: float = Field(alias="temp_K")

    @classmethod
    def from_result(cls, result: ResolutionResult) -> WeatherResponse:
        return cls(
            city=result.city,
            temp_c=result.temp_c,
            temp_f=result.temp_f,
            temp_k=result.temp_k,
        )
