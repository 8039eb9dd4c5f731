"""
cep_weather.errors

Error taxonomy shared by the resolvers, the orchestration service and the API layer.

Responsibilities:
- Give every failure cause its own type (kept distinct in logs and span attributes).
- Map each type to exactly one outward HTTP status and a fixed public message.
"""

from __future__ import annotations


class ResolutionError(Exception):
    """
    Base class for failures while resolving a CEP to a temperature.

    `str(exc)` is the internal message (logs/spans); clients only ever see
    `public_detail`.
    """

    status_code: int = 500
    public_detail: str = "internal server error"

    @property
    def error_type(self) -> str:
        return type(self).__name__


class InvalidFormatError(ResolutionError):
    status_code = 422
    public_detail = "invalid zipcode"


class NotFoundError(ResolutionError):
    status_code = 404
    public_detail = "can not find zipcode"


class TransportError(ResolutionError):
    """The request never produced a response (connect, DNS, timeout...)."""


class UpstreamError(ResolutionError):
    """The upstream answered, but with a non-2xx status."""

    def __init__(self, message: str, *, upstream_status: int) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


class DecodeError(ResolutionError):
    """The upstream answered 2xx with a body we cannot interpret."""


class ConfigurationError(ResolutionError):
    pass


# --- Module Notes -----------------------------------------------------------
# TransportError/UpstreamError/DecodeError/ConfigurationError intentionally share the
# outward 500; only traces and logs tell them apart.
