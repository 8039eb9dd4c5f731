"""
cep_weather.domain.zipcode

The single CEP format rule used by the gateway, the orchestrator and the standalone lookup,
plus the decoding of the `{"cep": "..."}` request body both POST endpoints accept.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ValidationError

from cep_weather.errors import InvalidFormatError

# ASCII digits only: `\d` would also accept other Unicode decimal digits.
_ZIPCODE_RE = re.compile(r"[0-9]{8}")


class ZipcodeRequest(BaseModel):
    # `str` without coercion: a JSON number is rejected, as is a missing key.
    cep: str


def is_valid_zipcode(code: object) -> bool:
    return isinstance(code, str) and _ZIPCODE_RE.fullmatch(code) is not None


def parse_zipcode_request(raw: bytes) -> str:
    """
    Decode `{"cep": "..."}`. Any decoding problem is reported as an invalid zipcode,
    the same outward signal as a badly formatted code.
    """

    try:
        return ZipcodeRequest.model_validate_json(raw).cep
    except ValidationError as e:
        raise InvalidFormatError(f"undecodable request body: {e.error_count()} error(s)") from e
