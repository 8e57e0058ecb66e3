"""Google Gemini geocoding adapter.

Concrete ``GeocodingGateway`` that asks a Gemini model (REST
``generateContent`` endpoint, called with ``httpx``) to place a street
address and answer with a GeoJSON Point Feature. The reply is stripped
of Markdown fences and validated against ``PointFeatureResponse``.

Failure mapping (never inferred from message text):

- reply carries ``properties.error``            → ``NOT_FOUND``
- reply is not JSON, wrong shape, out of range  → ``AMBIGUOUS_OR_INVALID_RESPONSE``
- non-2xx HTTP status (auth, quota, 5xx)         → ``SERVICE_UNAVAILABLE``
- transport failure (DNS, connect, timeout)      → ``NETWORK``

Configuration:
    The API key is mandatory and checked in ``__init__``. The endpoint
    defaults to ``https://generativelanguage.googleapis.com/v1beta``;
    override via ``GeocoderConfig.api_base_url``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from geoprotec.geocoding.base import (
    GeocodeFailureReason,
    GeocodingConfigError,
    GeocodingGateway,
)
from geoprotec.geocoding.schemas import PointFeatureResponse
from geoprotec.models.feature import GeocodedPoint
from geoprotec.models.geometry import LonLat, ModelValidationError
from geoprotec.utils.helpers import strip_code_fences

if TYPE_CHECKING:
    from geoprotec.geocoding.base import GeocoderConfig

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

_DEFAULT_API_URL = "https://generativelanguage.googleapis.com/v1beta"
_DEFAULT_MODEL = "gemini-2.5-flash"
_DEFAULT_REGION = "Argentina"
_TEMPERATURE = 0.1

# Areas preferred when an address is ambiguous, keyed by region hint.
_PREFERRED_AREAS = {
    "Argentina": "the Autonomous City of Buenos Aires (CABA) or Buenos Aires Province",
}

_PROMPT_TEMPLATE = """\
Given the following street address: "{address}", assume it is located in {region}.{preference}
Return the geographic coordinates for this address.
Your answer MUST be a valid GeoJSON Feature of type Point, with coordinates in
[longitude, latitude] order. Do not include any explanation, only the JSON object.

Example:
{{
  "type": "Feature",
  "geometry": {{"type": "Point", "coordinates": [-58.3816, -34.6037]}},
  "properties": {{"fullAddress": "{address}, {region}", "query": "{address}"}}
}}

If the address cannot be geocoded or is too ambiguous, return a Point Feature with
coordinates [0, 0] and an "error" property describing the problem:
{{
  "type": "Feature",
  "geometry": {{"type": "Point", "coordinates": [0, 0]}},
  "properties": {{"fullAddress": "{address}, {region}", "query": "{address}",
                 "error": "Address not found or too ambiguous."}}
}}"""


def build_prompt(address: str, region: str) -> str:
    """Render the geocoding prompt for *address* biased towards *region*."""
    preferred = _PREFERRED_AREAS.get(region)
    preference = (
        f"\nIf the address is ambiguous but looks like it belongs there, prefer {preferred}."
        if preferred
        else ""
    )
    return _PROMPT_TEMPLATE.format(
        address=address.replace('"', "'"), region=region, preference=preference
    )


class GeminiGeocoder(GeocodingGateway):
    """Gemini-backed geocoder.

    One ``generateContent`` call per lookup; no caching, no retry.
    An ``httpx.Client`` may be injected (tests, connection reuse);
    otherwise a short-lived client is created per lookup.
    """

    def __init__(self, config: GeocoderConfig, *, client: httpx.Client | None = None) -> None:
        super().__init__(config)
        if not config.api_key.strip():
            raise GeocodingConfigError(
                self.name,
                "Geocoding API key is not configured. Set GEOCODING_API_KEY.",
            )
        self._api_url = (config.api_base_url or _DEFAULT_API_URL).rstrip("/")
        self._model = config.model or _DEFAULT_MODEL
        self._region = config.region_hint or _DEFAULT_REGION
        self._client = client

    # ------------------------------------------------------------------
    # geocode
    # ------------------------------------------------------------------

    def geocode(self, address: str) -> GeocodedPoint:
        """Resolve *address* with one Gemini request.

        Raises:
            GeocodingError: See the module docstring for the reason mapping.
        """
        query = address.strip()
        if not query:
            raise self._fail(GeocodeFailureReason.NOT_FOUND, "Address is empty")

        logger.info("Geocoding address | provider=%s | address=%s", self.name, query)
        body = self._post(build_prompt(query, self._region))
        reply = self._parse_reply(self._extract_text(body))

        if reply.error:
            logger.warning("Address not found | address=%s | error=%s", query, reply.error)
            raise self._fail(GeocodeFailureReason.NOT_FOUND, reply.error)

        lon, lat = reply.geometry.coordinates[0], reply.geometry.coordinates[1]
        try:
            position = LonLat(lon=lon, lat=lat)
        except ModelValidationError as exc:
            raise self._fail(
                GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE,
                f"Geocoder returned unusable coordinates: {exc}",
            ) from exc
        if not position.in_wgs84_bounds():
            raise self._fail(
                GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE,
                f"Geocoder returned coordinates outside WGS 84 bounds: [{lon}, {lat}]",
            )

        full_address = ""
        if reply.properties is not None:
            full_address = reply.properties.full_address
        point = GeocodedPoint(
            position=position,
            query=query,
            full_address=full_address or f"{query}, {self._region}",
        )
        logger.info(
            "Address geocoded | address=%s | lon=%.6f | lat=%.6f",
            query,
            position.lon,
            position.lat,
        )
        return point

    # ------------------------------------------------------------------
    # HTTP
    # ------------------------------------------------------------------

    def _post(self, prompt: str) -> dict[str, Any]:
        url = f"{self._api_url}/models/{self._model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "temperature": _TEMPERATURE,
            },
        }
        headers = {"x-goog-api-key": self.config.api_key}

        try:
            if self._client is not None:
                response = self._client.post(url, json=payload, headers=headers)
            else:
                with httpx.Client(timeout=self.config.timeout_s) as client:
                    response = client.post(url, json=payload, headers=headers)
        except httpx.TransportError as exc:
            raise self._fail(
                GeocodeFailureReason.NETWORK,
                f"Could not reach the geocoding service: {exc}",
            ) from exc

        if response.status_code >= 400:
            raise self._fail(
                GeocodeFailureReason.SERVICE_UNAVAILABLE,
                f"Geocoding service returned HTTP {response.status_code}: "
                f"{_api_error_message(response)}",
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise self._fail(
                GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE,
                "Geocoding service returned a non-JSON body",
            ) from exc
        if not isinstance(body, dict):
            raise self._fail(
                GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE,
                "Geocoding service returned an unexpected body",
            )
        return body

    # ------------------------------------------------------------------
    # Reply parsing
    # ------------------------------------------------------------------

    def _extract_text(self, body: dict[str, Any]) -> str:
        candidates = body.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            feedback = body.get("promptFeedback")
            block_reason = feedback.get("blockReason", "") if isinstance(feedback, dict) else ""
            detail = f" (blocked: {block_reason})" if block_reason else ""
            raise self._fail(
                GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE,
                f"Geocoding service returned no candidates{detail}",
            )

        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            raise self._fail(
                GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE,
                "Geocoding service returned a candidate without content",
            )
        text = "".join(str(p.get("text", "")) for p in parts if isinstance(p, dict))
        if not text.strip():
            raise self._fail(
                GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE,
                "Geocoding service returned an empty answer",
            )
        return text

    def _parse_reply(self, text: str) -> PointFeatureResponse:
        try:
            return PointFeatureResponse.model_validate_json(strip_code_fences(text))
        except PydanticValidationError as exc:
            logger.warning("Malformed geocoder reply | errors=%d", exc.error_count())
            raise self._fail(
                GeocodeFailureReason.AMBIGUOUS_OR_INVALID_RESPONSE,
                "Geocoding service returned a malformed GeoJSON Point Feature",
            ) from exc


def _api_error_message(response: httpx.Response) -> str:
    """Best-effort ``error.message`` from a Google API error body."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or "no details"
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message", "")) or "no details"
    return response.reason_phrase or "no details"
