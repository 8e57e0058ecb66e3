"""Thin ingress boundary helpers for the Azure Functions HTTP routes.

Centralises the transport concerns so that ``function_app.py`` contains
only route bindings and handoff to the service layer:

- **deserialize_request_body**: decode a JSON request body to a dict.
- **extract_address**: pull the ``address`` field out of a verify request.
- **http_status_for**: map an error category to an HTTP status code.
"""

from __future__ import annotations

import json
from typing import Any

from geoprotec.core.exceptions import ContractError, GeoProtecError

# Upper bound for a street address; anything longer is not an address.
MAX_ADDRESS_LENGTH = 512

_STATUS_BY_CATEGORY = {
    "validation": 400,
    "contract": 400,
    "transient": 503,
    "permanent": 500,
}


def deserialize_request_body(raw: bytes | str | None) -> dict[str, Any]:
    """Decode a JSON object request body.

    Raises:
        ContractError: If the body is empty, not JSON, or not an object.
    """
    if raw is None or not raw:
        msg = "Request body is empty"
        raise ContractError(msg, stage="ingress", code="EMPTY_BODY")
    try:
        parsed = json.loads(raw)
    except (json.JSONDecodeError, ValueError) as exc:
        msg = f"Request body is not valid JSON: {exc}"
        raise ContractError(msg, stage="ingress", code="INVALID_JSON") from exc
    if not isinstance(parsed, dict):
        msg = f"Request body JSON must be an object, got {type(parsed).__name__}"
        raise ContractError(msg, stage="ingress", code="INVALID_INPUT_TYPE")
    return parsed


def extract_address(payload: dict[str, Any]) -> str:
    """Return the ``address`` string from a verify request payload.

    Blank addresses are passed through; the service reports them.

    Raises:
        ContractError: If ``address`` is missing, not a string, or too long.
    """
    address = payload.get("address")
    if not isinstance(address, str):
        msg = "Request body must contain an 'address' string"
        raise ContractError(msg, stage="ingress", code="MISSING_ADDRESS")
    if len(address) > MAX_ADDRESS_LENGTH:
        msg = f"Address is longer than {MAX_ADDRESS_LENGTH} characters"
        raise ContractError(msg, stage="ingress", code="ADDRESS_TOO_LONG")
    return address


def http_status_for(error: GeoProtecError) -> int:
    """HTTP status code for a domain error, by category."""
    return _STATUS_BY_CATEGORY.get(error.category, 500)
