"""
cep_weather.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for every service role.
- Hide secrets from repr/logging (the WeatherAPI key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

Role = Literal["gateway", "orchestrator", "standalone"]

_DEFAULT_PORTS: dict[str, int] = {"gateway": 8080, "orchestrator": 8081, "standalone": 8080}


class Settings(BaseSettings):
    """
    - Strict env-driven configuration, read once per process
    - Defaults safe for local dev
    - The same settings object serves all three roles; `role` picks the routers
    """

    model_config = SettingsConfigDict(
        env_prefix="CEP_",
        case_sensitive=False,
        populate_by_name=True,
    )

    role: Role = "gateway"
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str | None = None
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    # Unset means "pick the role's conventional port" (see `port`).
    api_port: int | None = Field(
        default=None, validation_alias=AliasChoices("CEP_API_PORT", "PORT")
    )

    # Gateway -> orchestrator hop
    orchestrator_url: str = Field(
        default="http://localhost:8081",
        validation_alias=AliasChoices("CEP_ORCHESTRATOR_URL", "SERVICE_B_URL"),
    )

    # Upstreams
    location_url_template: str = "https://viacep.com.br/ws/{cep}/json/"
    weather_url_template: str = "https://api.weatherapi.com/v1/current.json?key={key}&q={city}"
    # Missing key is reported on first use, not at boot.
    weather_api_key: str = Field(
        default="",
        repr=False,
        validation_alias=AliasChoices("CEP_WEATHER_API_KEY", "WEATHER_API_KEY"),
    )
    http_timeout_seconds: float = 10.0

    # Tracing
    trace_exporter: Literal["zipkin", "otlp", "console", "none"] = "zipkin"
    trace_endpoint: str | None = Field(
        default=None, validation_alias=AliasChoices("CEP_TRACE_ENDPOINT", "ZIPKIN_URL")
    )
    shutdown_grace_seconds: float = 5.0

    @property
    def port(self) -> int:
        return self.api_port if self.api_port is not None else _DEFAULT_PORTS[self.role]

    @property
    def resolved_service_name(self) -> str:
        return self.service_name or f"cep-weather-{self.role}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# The legacy env names (PORT, SERVICE_B_URL, WEATHER_API_KEY, ZIPKIN_URL) are accepted
# as aliases so existing compose files keep working.
