"""Azure Functions entry point: GeoProtec reference-area API.

This module registers the HTTP functions using the Python v2
programming model:

- ``PUT  /api/reference-area``: operator uploads a GeoJSON area
- ``GET  /api/reference-area``: current area and its map center
- ``POST /api/verify``: end user checks an address

All business logic lives in the geoprotec package. This file is purely
the wiring layer between Azure Functions bindings and application code.
Each route delegates to a ``handle_*`` function that returns
``(payload, status_code)`` so the HTTP behaviour can be tested without
the Functions host.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any

import azure.functions as func

from geoprotec.core.config import AppConfig
from geoprotec.core.exceptions import GeoProtecError
from geoprotec.core.ingress import deserialize_request_body, extract_address, http_status_for
from geoprotec.service.reference_area import ReferenceAreaService, build_service

app = func.FunctionApp()

logger = logging.getLogger("geoprotec.function_app")

_service: ReferenceAreaService | None = None
_service_lock = threading.Lock()


def _get_service() -> ReferenceAreaService:
    """Build the service on first use; it holds the in-memory active area.

    Concurrent first requests share one instance.
    """
    global _service  # noqa: PLW0603
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = build_service(AppConfig.from_env())
    return _service


def _json_response(payload: Any, status_code: int) -> func.HttpResponse:
    return func.HttpResponse(
        json.dumps(payload),
        status_code=status_code,
        mimetype="application/json",
    )


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def handle_load_area(service: ReferenceAreaService, body: bytes) -> tuple[dict[str, Any], int]:
    """Validate *body* as GeoJSON and make it the active reference area.

    A rejected upload leaves the previous area active. The response is
    built before the swap, so an upload that cannot be answered is never
    left active.
    """
    try:
        feature = service.validate(body)
    except GeoProtecError as exc:
        logger.warning("Reference area rejected | code=%s | message=%s", exc.code, exc.message)
        return exc.to_error_dict(), http_status_for(exc)

    summary = service.summarize(feature)
    service.replace(feature)
    return summary, 200


def handle_get_area(service: ReferenceAreaService) -> tuple[dict[str, Any], int]:
    """Active area and display-order center, or 404."""
    described = service.describe()
    if described is None:
        return {"message": "No reference area is loaded"}, 404
    return described, 200


def handle_verify(service: ReferenceAreaService, body: bytes) -> tuple[dict[str, Any], int]:
    """Check whether ``{"address": "..."}`` falls inside the active area.

    Always 200 once the request is well-formed; the outcome is in
    ``status`` (inside, outside, address_not_found, no_polygon, error).
    """
    try:
        address = extract_address(deserialize_request_body(body))
    except GeoProtecError as exc:
        return exc.to_error_dict(), http_status_for(exc)
    return service.verify_address(address).to_dict(), 200


# ---------------------------------------------------------------------------
# HTTP: Reference area (operator)
# ---------------------------------------------------------------------------


@app.function_name("load_reference_area")
@app.route(route="reference-area", methods=["PUT"], auth_level=func.AuthLevel.FUNCTION)
def load_reference_area(req: func.HttpRequest) -> func.HttpResponse:
    """Replace the active reference area with the uploaded GeoJSON."""
    return _json_response(*handle_load_area(_get_service(), req.get_body()))


@app.function_name("get_reference_area")
@app.route(route="reference-area", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def get_reference_area(req: func.HttpRequest) -> func.HttpResponse:  # noqa: ARG001
    """Return the active reference area."""
    return _json_response(*handle_get_area(_get_service()))


# ---------------------------------------------------------------------------
# HTTP: Address verification (end user)
# ---------------------------------------------------------------------------


@app.function_name("verify_address")
@app.route(route="verify", methods=["POST"], auth_level=func.AuthLevel.ANONYMOUS)
def verify_address(req: func.HttpRequest) -> func.HttpResponse:
    """Geocode an address and test it against the active area."""
    try:
        payload, status = handle_verify(_get_service(), req.get_body())
    except Exception:
        logger.exception("Unexpected failure verifying address")
        raise
    return _json_response(payload, status)
