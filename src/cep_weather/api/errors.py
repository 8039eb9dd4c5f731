"""
cep_weather.api.errors

Maps typed resolution errors to HTTP responses.

Responsibilities:
- One handler for the whole `ResolutionError` family: class -> status + fixed public detail.
- Log the internal cause; never echo it to the client.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cep_weather.errors import ResolutionError
from cep_weather.observability.logging import get_logger

log = get_logger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ResolutionError)
    async def _resolution_error(_: Request, exc: ResolutionError) -> JSONResponse:
        log.info(
            "request_failed",
            error_type=exc.error_type,
            error=str(exc),
            status_code=exc.status_code,
        )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.public_detail})
